"""Shared fixtures."""

import pytest

from card_digitiser.models.card import Card
from card_digitiser.store import CardStore, MemoryStore


@pytest.fixture
def storage():
    return MemoryStore()


@pytest.fixture
def store(storage):
    return CardStore(storage)


@pytest.fixture
def sample_cards():
    """Three cards, oldest first."""
    return [
        Card(name="Alice Adams", phones=["111 2222"], email="alice@a.com"),
        Card(name="Bob Brown", email="bob@b.com", other=["Bee Ltd"]),
        Card(name="Carol Clark", phones=["333 4444", "555 6666"], email="N/A"),
    ]
