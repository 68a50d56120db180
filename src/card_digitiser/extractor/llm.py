"""LLM extractor calling one of the supported provider APIs."""

import json
import logging
import re

import httpx
from pydantic import ValidationError

from card_digitiser.extractor.providers import Provider, ProviderName, get_provider
from card_digitiser.models.card import Card

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """Extract structured contact information from this business card text.
Return ONLY a JSON object with these keys:
{{
  "name": "Full Name",
  "phones": ["Phone 1", "Phone 2"],
  "email": "Email Address",
  "other": ["Company Name", "Job Title", "Address", "Website"]
}}
If a field is missing, use empty string or empty array.
Text:
\"\"\"{ocr_text}\"\"\"
"""


class LLMExtractor:
    """Extractor sending OCR text to an LLM provider.

    Fails soft: any network error, non-success status, malformed envelope
    or unparseable completion is logged and reported as ``None`` so the
    caller can fall back to rule-based extraction.
    """

    def __init__(
        self,
        timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize LLM extractor.

        Args:
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self._timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "llm"

    def extract(
        self, ocr_text: str, provider: Provider | ProviderName | str, api_key: str
    ) -> Card | None:
        """
        Extract business card data with an LLM.

        Args:
            ocr_text: Raw text extracted from OCR.
            provider: Provider instance or name.
            api_key: Secret for the provider.

        Returns:
            Card parsed from the model answer, or None on any failure.
        """
        if not isinstance(provider, Provider):
            provider = get_provider(provider)

        try:
            request = provider.build_request(self.build_prompt(ocr_text), api_key)
        except UnicodeEncodeError as e:
            # Header values must be ASCII; pasted keys can carry dashes or nbsp
            logger.warning("%s request could not be built: %s", provider.name.value, e)
            return None

        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                # Requests built outside the client carry no timeout of their own
                request.extensions["timeout"] = client.timeout.as_dict()
                resp = client.send(request)
                resp.raise_for_status()
            completion = provider.parse_completion(resp.json())
            return self._parse_completion(completion)
        except httpx.HTTPStatusError as e:
            logger.warning(
                "%s API error (HTTP %d), falling back",
                provider.name.value,
                e.response.status_code,
            )
        except httpx.HTTPError as e:
            logger.warning("%s request failed: %s", provider.name.value, e)
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.warning("%s returned an unusable answer: %s", provider.name.value, e)
        return None

    @staticmethod
    def build_prompt(ocr_text: str) -> str:
        return PROMPT_TEMPLATE.format(ocr_text=ocr_text)

    def _parse_completion(self, completion: str) -> Card:
        """
        Parse the model completion into a Card.

        Raises:
            ValueError: If the completion is not a JSON object with card fields.
        """
        data = json.loads(self._extract_json(completion))
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
        try:
            return Card.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Completion does not match the card schema: {e}") from e

    def _extract_json(self, text: str) -> str:
        """Extract JSON from text, handling potential markdown code blocks."""
        # Try to find JSON in code blocks first
        code_block_match = re.search(r"```(?:json)?\s*([\s\S]*?)```", text)
        if code_block_match:
            return code_block_match.group(1).strip()

        # Try to find raw JSON object
        json_match = re.search(r"\{[\s\S]*\}", text)
        if json_match:
            return json_match.group(0)

        return text.strip()
