"""Data models for digitised cards."""

from card_digitiser.models.card import NOT_AVAILABLE, Card

__all__ = ["Card", "NOT_AVAILABLE"]
