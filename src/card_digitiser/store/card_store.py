"""Ordered, persisted collection of cards."""

import json
import logging
from collections.abc import Iterator
from typing import Any

from pydantic import ValidationError

from card_digitiser.models.card import Card
from card_digitiser.store.storage import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "cards"
EDIT_DELIMITER = ";"


class CardStore:
    """Newest-first list of cards, persisted wholesale after every change.

    A card is addressed only by its current index. Deleting a card shifts
    every later card down by one, so indices must not be kept across
    mutations.
    """

    def __init__(self, storage: KeyValueStore, key: str = STORAGE_KEY):
        """
        Initialize CardStore.

        Args:
            storage: Durable key-value store.
            key: Key holding the JSON-encoded card list.
        """
        self._storage = storage
        self._key = key
        self._cards: list[Card] = []

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(list(self._cards))

    def __getitem__(self, index: int) -> Card:
        return self._cards[self._check_index(index)]

    @property
    def cards(self) -> list[Card]:
        """Snapshot of the stored cards, newest first."""
        return list(self._cards)

    def add(self, card: Card) -> None:
        """Prepend a card and persist."""
        self._cards.insert(0, card)
        logger.debug("Added card %r (%d stored)", card.name, len(self._cards))
        self.persist()

    def update(self, index: int, field: str, value: Any) -> Card:
        """
        Change one field of the card at an index and persist.

        Sequence fields given as text are split on the edit delimiter;
        parts are trimmed and empty parts dropped.

        Args:
            index: Position of the card (0 is newest).
            field: Card field name.
            value: New value, text or list for sequence fields.

        Returns:
            The updated card.

        Raises:
            IndexError: If no card is stored at the index.
            KeyError: If the field is not part of the card schema.
        """
        card = self._cards[self._check_index(index)]

        if Card.is_sequence_field(field):
            parts = value.split(EDIT_DELIMITER) if isinstance(value, str) else value
            parts = (str(part).strip() for part in parts if part is not None)
            value = [part for part in parts if part]
        setattr(card, field, value)

        self.persist()
        return card

    def delete(self, index: int) -> Card:
        """
        Remove the card at an index and persist.

        Confirmation is the caller's job.

        Raises:
            IndexError: If no card is stored at the index.
        """
        card = self._cards.pop(self._check_index(index))
        logger.debug("Deleted card %r at index %d", card.name, index)
        self.persist()
        return card

    def persist(self) -> None:
        """Write the whole card list as JSON, replacing previous content."""
        payload = json.dumps(
            [card.model_dump() for card in self._cards], ensure_ascii=False
        )
        self._storage.set(self._key, payload)

    def load(self) -> None:
        """
        Replace the in-memory cards with the persisted ones.

        Unreadable data is logged and ignored; the current cards are kept.
        """
        stored = self._storage.get(self._key)
        if stored is None:
            return

        try:
            data = json.loads(stored)
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
            cards = [Card.model_validate(item) for item in data]
        except (ValueError, ValidationError) as e:
            logger.warning("Failed to parse stored cards, starting empty: %s", e)
            return

        self._cards = cards
        logger.debug("Loaded %d stored cards", len(cards))

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self._cards):
            raise IndexError(
                f"No card at index {index} ({len(self._cards)} cards stored)"
            )
        return index
