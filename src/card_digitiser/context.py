"""Application context shared by the CLI commands."""

from dataclasses import dataclass, field
from pathlib import Path

import httpx

from card_digitiser.config import KeyPolicy, SessionCredentials
from card_digitiser.coordinator import ExtractionCoordinator
from card_digitiser.extractor.llm import LLMExtractor
from card_digitiser.ocr.base import OCRBackend
from card_digitiser.parser import CardDigitiser
from card_digitiser.store.card_store import CardStore
from card_digitiser.store.storage import DirectoryStore


@dataclass
class AppContext:
    """Everything one session needs: store, credentials and settings."""

    store: CardStore
    credentials: SessionCredentials = field(default_factory=SessionCredentials)
    key_policy: KeyPolicy = KeyPolicy.ATTEMPT
    timeout: float = 60.0
    language: str = "eng"

    @classmethod
    def open(cls, data_dir: str | Path, **settings) -> "AppContext":
        """Create a context over a data directory and load its cards."""
        store = CardStore(DirectoryStore(data_dir))
        store.load()
        return cls(store=store, **settings)

    def coordinator(
        self, transport: httpx.BaseTransport | None = None
    ) -> ExtractionCoordinator:
        return ExtractionCoordinator(
            credentials=self.credentials,
            llm=LLMExtractor(timeout=self.timeout, transport=transport),
            key_policy=self.key_policy,
        )

    def digitiser(self, ocr: OCRBackend) -> CardDigitiser:
        return CardDigitiser(
            ocr=ocr,
            coordinator=self.coordinator(),
            store=self.store,
            language=self.language,
        )

    def close(self) -> None:
        """End the session: credentials do not outlive it."""
        self.credentials.clear()
