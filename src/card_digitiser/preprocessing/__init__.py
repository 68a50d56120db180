"""Image preprocessing before OCR."""

from card_digitiser.preprocessing.contrast import ImagePreprocessor

__all__ = ["ImagePreprocessor"]
