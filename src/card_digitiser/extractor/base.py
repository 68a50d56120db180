"""Abstract base class for deterministic extractors."""

from abc import ABC, abstractmethod

from card_digitiser.models.card import Card


class Extractor(ABC):
    """Abstract base class for extractors that always produce a Card."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this extractor."""
        ...

    @abstractmethod
    def extract(self, ocr_text: str) -> Card:
        """
        Extract structured business card data from OCR text.

        Args:
            ocr_text: Raw text extracted from OCR.

        Returns:
            Card with extracted information. Never raises for any text.
        """
        ...
