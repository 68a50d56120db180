"""PaddleOCR backend implementation."""

import logging
import os

import numpy as np

from card_digitiser.errors import OCRError
from card_digitiser.ocr.base import OCRBackend, OCRResult

logger = logging.getLogger(__name__)


# Disable OneDNN/MKLDNN to avoid PIR compatibility issues with PaddlePaddle 3.x
# See: https://github.com/PaddlePaddle/PaddleOCR/discussions/17350
os.environ.setdefault("FLAGS_use_mkldnn", "0")

# Three-letter codes mapped to PaddleOCR language names
LANGUAGE_CODES = {
    "eng": "en",
    "fra": "fr",
    "deu": "german",
    "spa": "es",
    "jpn": "japan",
    "kor": "korean",
    "chi_sim": "ch",
}


class PaddleOCRBackend(OCRBackend):
    """OCR backend using PaddleOCR."""

    def __init__(self, default_language: str = "eng"):
        """
        Initialize PaddleOCR backend.

        Engines are created lazily, one per language, on first use.

        Args:
            default_language: Language used in the backend name.
        """
        self._default_language = default_language
        self._engines = {}

    @property
    def name(self) -> str:
        return f"paddleocr:{self._default_language}"

    def recognize(self, image: np.ndarray, language: str = "eng") -> OCRResult:
        """Recognize text in an image using PaddleOCR."""
        engine = self._engine(language)

        # PaddleOCR expects three channels
        if image.ndim == 2:
            image = np.repeat(image[:, :, np.newaxis], 3, axis=2)
        elif image.shape[2] == 4:
            image = np.ascontiguousarray(image[:, :, :3])

        try:
            result = engine.predict(image)
        except Exception as e:
            raise OCRError(f"PaddleOCR failed: {e}") from e

        if not result or not result[0]:
            return OCRResult(text="", confidence=0.0)

        # PaddleOCR 3.x returns OCRResult objects with rec_texts and rec_scores
        ocr_result = result[0]
        texts = ocr_result.get("rec_texts", [])
        scores = ocr_result.get("rec_scores", [])

        if not texts:
            return OCRResult(text="", confidence=0.0)

        avg_confidence = sum(scores) / len(scores) if scores else 0.0

        return OCRResult(text="\n".join(texts), confidence=float(avg_confidence))

    def _engine(self, language: str):
        """Return the cached engine for a language, creating it if needed."""
        lang = LANGUAGE_CODES.get(language, language)
        if lang not in self._engines:
            from paddleocr import PaddleOCR

            logger.debug("Loading PaddleOCR engine for language: %s", lang)
            try:
                self._engines[lang] = PaddleOCR(lang=lang, enable_mkldnn=False)
            except Exception as e:
                raise OCRError(f"Cannot load PaddleOCR for '{lang}': {e}") from e
        return self._engines[lang]
