"""Exceptions raised by the card digitiser."""


class CardDigitiserError(Exception):
    """Base class for errors surfaced to the user."""


class CaptureError(CardDigitiserError):
    """Camera is unavailable, a frame could not be grabbed, or a capture is in flight."""


class OCRError(CardDigitiserError):
    """The OCR engine failed or recognized no text."""


class EmptyExportError(CardDigitiserError):
    """Export was requested while the card store is empty."""
