"""Tests for session credentials."""

import pytest

from card_digitiser.config import API_KEY_KEY, PROVIDER_KEY, SessionCredentials
from card_digitiser.extractor.providers import ProviderName
from card_digitiser.store import MemoryStore


class TestSessionCredentials:
    """Test provider and key handling."""

    def test_defaults(self):
        credentials = SessionCredentials()
        assert credentials.provider is ProviderName.OPENAI
        assert credentials.api_key == ""
        assert credentials.is_configured is False

    def test_independent_settings(self):
        credentials = SessionCredentials()
        credentials.api_key = "  sk-ant-123  "
        assert credentials.provider is ProviderName.OPENAI

        credentials.provider = "anthropic"
        assert credentials.provider is ProviderName.ANTHROPIC
        assert credentials.api_key == "sk-ant-123"
        assert credentials.is_configured is True

    def test_empty_key_removes_it(self):
        session = MemoryStore()
        credentials = SessionCredentials(session)
        credentials.api_key = "sk-1"
        credentials.api_key = "   "
        assert session.get(API_KEY_KEY) is None
        assert credentials.is_configured is False

    def test_unknown_provider_rejected(self):
        with pytest.raises(ValueError):
            SessionCredentials().provider = "mistral"

    def test_clear(self):
        session = MemoryStore()
        credentials = SessionCredentials(session)
        credentials.provider = "gemini"
        credentials.api_key = "secret"

        credentials.clear()

        assert session.get(API_KEY_KEY) is None
        assert session.get(PROVIDER_KEY) is None
        assert credentials.provider is ProviderName.OPENAI
        assert credentials.is_configured is False

    def test_check_without_key(self):
        check = SessionCredentials().check()
        assert check.valid is False
        assert "No key provided" in check.message

    def test_check_uses_provider_heuristic(self):
        credentials = SessionCredentials()
        credentials.provider = "anthropic"
        credentials.api_key = "sk-123"
        assert credentials.check().valid is False

        credentials.api_key = "sk-ant-123"
        assert credentials.check().valid is True
