"""Card persistence: key-value storage and the ordered card store."""

from card_digitiser.store.card_store import EDIT_DELIMITER, STORAGE_KEY, CardStore
from card_digitiser.store.storage import DirectoryStore, KeyValueStore, MemoryStore

__all__ = [
    "CardStore",
    "DirectoryStore",
    "EDIT_DELIMITER",
    "KeyValueStore",
    "MemoryStore",
    "STORAGE_KEY",
]
