"""OCR backends for text recognition from images."""

from card_digitiser.ocr.base import OCRBackend, OCRResult
from card_digitiser.ocr.paddle_ocr import PaddleOCRBackend

__all__ = ["OCRBackend", "OCRResult", "PaddleOCRBackend"]
