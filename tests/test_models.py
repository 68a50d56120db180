"""Tests for the Card model."""

import json

import pytest

from card_digitiser.models.card import NOT_AVAILABLE, Card


class TestCardModel:
    """Test Card schema and coercion."""

    def test_card_defaults(self):
        """Test Card with no fields."""
        card = Card()
        assert card.name == ""
        assert card.phones == []
        assert card.email == ""
        assert card.other == []

    def test_card_full(self):
        """Test Card with all fields."""
        card = Card(
            name="John Doe",
            phones=["+1 415-555-0100", "555 1234"],
            email="john@techcorp.com",
            other=["Tech Corp", "Senior Engineer"],
        )
        assert card.name == "John Doe"
        assert card.phones == ["+1 415-555-0100", "555 1234"]
        assert card.email == "john@techcorp.com"
        assert card.other == ["Tech Corp", "Senior Engineer"]

    def test_scalar_sequence_is_wrapped(self):
        """Test a single string for a list field becomes a one-item list."""
        card = Card(phones="555 1234", other="Acme")
        assert card.phones == ["555 1234"]
        assert card.other == ["Acme"]

    def test_missing_values_normalized(self):
        """Test None and empty values keep the canonical shape."""
        card = Card.model_validate(
            {"name": None, "phones": None, "email": None, "other": ""}
        )
        assert card.name == ""
        assert card.phones == []
        assert card.email == ""
        assert card.other == []

    def test_list_for_scalar_takes_first(self):
        """Test a list given for email keeps its first element."""
        card = Card(email=["a@x.com", "b@x.com"])
        assert card.email == "a@x.com"

    def test_assignment_is_validated(self):
        """Test assignments go through the same coercion."""
        card = Card(name="Test")
        card.phones = "123 4567"
        assert card.phones == ["123 4567"]

    def test_json_serialization(self):
        """Test Card can be serialized to JSON."""
        card = Card(name="Test User", email=NOT_AVAILABLE)
        data = json.loads(card.model_dump_json())
        assert data == {
            "name": "Test User",
            "phones": [],
            "email": "N/A",
            "other": [],
        }


class TestCardSchema:
    """Test the schema query used by the editing surface."""

    def test_sequence_fields(self):
        assert Card.sequence_fields() == {"phones", "other"}

    def test_is_sequence_field(self):
        assert Card.is_sequence_field("phones") is True
        assert Card.is_sequence_field("other") is True
        assert Card.is_sequence_field("name") is False
        assert Card.is_sequence_field("email") is False

    def test_is_sequence_field_unknown(self):
        with pytest.raises(KeyError, match="Unknown card field"):
            Card.is_sequence_field("fax")
