"""Session credentials and extraction policy settings."""

import logging
from enum import Enum

from card_digitiser.extractor.providers import KeyCheck, ProviderName, get_provider
from card_digitiser.store.storage import KeyValueStore, MemoryStore

logger = logging.getLogger(__name__)

PROVIDER_KEY = "ai_provider"
API_KEY_KEY = "ai_api_key"


class KeyPolicy(str, Enum):
    """What to do when the local key heuristic rejects the API key."""

    ATTEMPT = "attempt"
    """Call the provider anyway and let it reject the key."""

    SKIP_INVALID = "skip-invalid"
    """Go straight to regex extraction."""


class SessionCredentials:
    """Provider choice and API key for the current session only.

    Backed by a session-scoped store (in memory by default); nothing here
    is ever written to the durable card storage.
    """

    def __init__(self, session: KeyValueStore | None = None):
        self._session = session if session is not None else MemoryStore()

    @property
    def provider(self) -> ProviderName:
        return ProviderName(self._session.get(PROVIDER_KEY) or ProviderName.OPENAI.value)

    @provider.setter
    def provider(self, value: ProviderName | str) -> None:
        self._session.set(PROVIDER_KEY, ProviderName(value).value)

    @property
    def api_key(self) -> str:
        return self._session.get(API_KEY_KEY) or ""

    @api_key.setter
    def api_key(self, value: str | None) -> None:
        value = (value or "").strip()
        if value:
            self._session.set(API_KEY_KEY, value)
        else:
            self._session.remove(API_KEY_KEY)

    @property
    def is_configured(self) -> bool:
        """True when an API key is present."""
        return bool(self.api_key)

    def check(self) -> KeyCheck:
        """Run the provider's local key format heuristic."""
        if not self.is_configured:
            return KeyCheck(False, "No key provided (using basic OCR)")
        return get_provider(self.provider).validate_key(self.api_key)

    def clear(self) -> None:
        """Forget provider and key."""
        self._session.remove(API_KEY_KEY)
        self._session.remove(PROVIDER_KEY)
        logger.debug("Session credentials cleared")
