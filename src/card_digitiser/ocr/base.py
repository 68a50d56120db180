"""Abstract base class for OCR backends."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np


@dataclass
class OCRResult:
    """Result from OCR processing."""

    text: str
    """Recognized text, one detected line per row."""

    confidence: float = 0.0
    """Average confidence score (0.0-1.0)."""


class OCRBackend(ABC):
    """Abstract base class for OCR backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this OCR backend."""
        ...

    @abstractmethod
    def recognize(self, image: np.ndarray, language: str = "eng") -> OCRResult:
        """
        Recognize text in an image.

        Args:
            image: Image buffer (already preprocessed).
            language: Three-letter OCR language code.

        Returns:
            OCRResult containing the recognized text.

        Raises:
            OCRError: If the engine cannot process the image.
        """
        ...
