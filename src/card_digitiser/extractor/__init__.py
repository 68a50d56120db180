"""Structured field extraction from OCR text."""

from card_digitiser.extractor.base import Extractor
from card_digitiser.extractor.llm import LLMExtractor
from card_digitiser.extractor.providers import (
    KeyCheck,
    Provider,
    ProviderName,
    get_provider,
)
from card_digitiser.extractor.regex import RegexExtractor

__all__ = [
    "Extractor",
    "KeyCheck",
    "LLMExtractor",
    "Provider",
    "ProviderName",
    "RegexExtractor",
    "get_provider",
]
