"""LLM-first extraction with regex fallback."""

import logging

from card_digitiser.config import KeyPolicy, SessionCredentials
from card_digitiser.extractor.llm import LLMExtractor
from card_digitiser.extractor.providers import get_provider
from card_digitiser.extractor.regex import RegexExtractor
from card_digitiser.models.card import Card

logger = logging.getLogger(__name__)


class ExtractionCoordinator:
    """Choose exactly one extraction path per OCR text.

    With an API key configured the LLM answer is used verbatim; when it is
    missing or the call fails, the regex extractor supplies the card. The
    two results are never merged.
    """

    def __init__(
        self,
        credentials: SessionCredentials,
        llm: LLMExtractor | None = None,
        regex: RegexExtractor | None = None,
        key_policy: KeyPolicy = KeyPolicy.ATTEMPT,
    ):
        """
        Initialize the coordinator.

        Args:
            credentials: Session credentials, read on every run.
            llm: LLM extractor.
            regex: Fallback extractor.
            key_policy: Whether a locally invalid key is still sent.
        """
        self._credentials = credentials
        self._llm = llm or LLMExtractor()
        self._regex = regex or RegexExtractor()
        self._key_policy = key_policy
        self.last_source: str | None = None

    def run(self, ocr_text: str) -> Card:
        """Extract a card from OCR text."""
        card = self._try_llm(ocr_text)
        if card is not None:
            self.last_source = self._llm.name
            return card

        logger.info("Falling back to regex parsing")
        self.last_source = self._regex.name
        return self._regex.extract(ocr_text)

    def _try_llm(self, ocr_text: str) -> Card | None:
        if not self._credentials.is_configured:
            return None

        provider = get_provider(self._credentials.provider)
        api_key = self._credentials.api_key

        if self._key_policy is KeyPolicy.SKIP_INVALID:
            check = provider.validate_key(api_key)
            if not check.valid:
                logger.info("Skipping %s: %s", provider.name.value, check.message)
                return None

        return self._llm.extract(ocr_text, provider, api_key)
