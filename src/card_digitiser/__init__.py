"""Business card digitiser: OCR, field extraction and an editable card store."""

from card_digitiser.models.card import Card
from card_digitiser.parser import CardDigitiser

__version__ = "0.1.0"
__all__ = ["Card", "CardDigitiser"]
