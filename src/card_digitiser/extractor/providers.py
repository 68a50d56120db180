"""LLM provider backends: request building and completion parsing."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx


class ProviderName(str, Enum):
    """Supported LLM providers."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"


@dataclass(frozen=True)
class KeyCheck:
    """Outcome of the local API key format heuristic."""

    valid: bool
    message: str


class Provider(ABC):
    """One LLM HTTP API: how to ask it, how to read its answer."""

    default_model: str = ""

    def __init__(self, model: str | None = None):
        """
        Initialize provider.

        Args:
            model: Model name; the provider default when omitted.
        """
        self.model = model or self.default_model

    @property
    @abstractmethod
    def name(self) -> ProviderName:
        """Return the provider identifier."""
        ...

    @abstractmethod
    def build_request(self, prompt: str, api_key: str) -> httpx.Request:
        """Build the HTTP request sending the prompt to the provider."""
        ...

    @abstractmethod
    def parse_completion(self, body: dict[str, Any]) -> str:
        """
        Extract the completion text from a decoded response body.

        Raises:
            KeyError, IndexError, TypeError: If the envelope is malformed.
        """
        ...

    @abstractmethod
    def validate_key(self, api_key: str) -> KeyCheck:
        """Check the key format locally. Advisory only: the API has the last word."""
        ...


class OpenAIProvider(Provider):
    """OpenAI chat completions API."""

    URL = "https://api.openai.com/v1/chat/completions"
    KEY_PREFIX = "sk-"
    default_model = "gpt-4o-mini"

    @property
    def name(self) -> ProviderName:
        return ProviderName.OPENAI

    def build_request(self, prompt: str, api_key: str) -> httpx.Request:
        return httpx.Request(
            "POST",
            self.URL,
            headers={"Authorization": f"Bearer {api_key}"},
            json={
                "model": self.model,
                "messages": [{"role": "user", "content": prompt}],
                "temperature": 0,
            },
        )

    def parse_completion(self, body: dict[str, Any]) -> str:
        return body["choices"][0]["message"]["content"]

    def validate_key(self, api_key: str) -> KeyCheck:
        if api_key.startswith(self.KEY_PREFIX):
            return KeyCheck(True, "Valid OpenAI key format")
        return KeyCheck(False, f"Invalid OpenAI key (must start with {self.KEY_PREFIX})")


class AnthropicProvider(Provider):
    """Anthropic messages API."""

    URL = "https://api.anthropic.com/v1/messages"
    API_VERSION = "2023-06-01"
    KEY_PREFIX = "sk-ant-"
    MAX_TOKENS = 1024
    default_model = "claude-3-haiku-20240307"

    @property
    def name(self) -> ProviderName:
        return ProviderName.ANTHROPIC

    def build_request(self, prompt: str, api_key: str) -> httpx.Request:
        return httpx.Request(
            "POST",
            self.URL,
            headers={"x-api-key": api_key, "anthropic-version": self.API_VERSION},
            json={
                "model": self.model,
                "max_tokens": self.MAX_TOKENS,
                "messages": [{"role": "user", "content": prompt}],
            },
        )

    def parse_completion(self, body: dict[str, Any]) -> str:
        return body["content"][0]["text"]

    def validate_key(self, api_key: str) -> KeyCheck:
        if api_key.startswith(self.KEY_PREFIX):
            return KeyCheck(True, "Valid Anthropic key format")
        return KeyCheck(
            False, f"Invalid Anthropic key (must start with {self.KEY_PREFIX})"
        )


class GeminiProvider(Provider):
    """Google Gemini generateContent API."""

    URL_TEMPLATE = (
        "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
    )
    MIN_KEY_LENGTH = 20
    default_model = "gemini-1.5-flash"

    @property
    def name(self) -> ProviderName:
        return ProviderName.GEMINI

    def build_request(self, prompt: str, api_key: str) -> httpx.Request:
        return httpx.Request(
            "POST",
            self.URL_TEMPLATE.format(model=self.model),
            params={"key": api_key},
            json={"contents": [{"parts": [{"text": prompt}]}]},
        )

    def parse_completion(self, body: dict[str, Any]) -> str:
        return body["candidates"][0]["content"]["parts"][0]["text"]

    def validate_key(self, api_key: str) -> KeyCheck:
        # Gemini keys have no fixed prefix; reject obvious OpenAI-style keys
        if len(api_key) > self.MIN_KEY_LENGTH and not api_key.startswith(
            OpenAIProvider.KEY_PREFIX
        ):
            return KeyCheck(True, "Valid Gemini key format")
        return KeyCheck(False, "Invalid Gemini key format")


PROVIDERS: dict[ProviderName, type[Provider]] = {
    ProviderName.OPENAI: OpenAIProvider,
    ProviderName.ANTHROPIC: AnthropicProvider,
    ProviderName.GEMINI: GeminiProvider,
}


def get_provider(name: ProviderName | str, model: str | None = None) -> Provider:
    """
    Create the provider for a name.

    Raises:
        ValueError: If the provider is not supported.
    """
    try:
        provider_cls = PROVIDERS[ProviderName(name)]
    except ValueError:
        supported = ", ".join(p.value for p in ProviderName)
        raise ValueError(f"Unknown provider: {name}. Use one of: {supported}") from None
    return provider_cls(model=model)
