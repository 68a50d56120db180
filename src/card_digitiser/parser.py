"""Capture-to-store pipeline controller."""

import logging
import threading
import time
from pathlib import Path

import numpy as np

from card_digitiser.capture.files import load_image
from card_digitiser.coordinator import ExtractionCoordinator
from card_digitiser.errors import CaptureError, OCRError
from card_digitiser.models.card import Card
from card_digitiser.ocr.base import OCRBackend
from card_digitiser.preprocessing import ImagePreprocessor
from card_digitiser.store.card_store import CardStore

logger = logging.getLogger(__name__)


class CardDigitiser:
    """Main controller turning a captured image into a stored card."""

    def __init__(
        self,
        ocr: OCRBackend,
        coordinator: ExtractionCoordinator,
        store: CardStore,
        preprocessor: ImagePreprocessor | None = None,
        language: str = "eng",
    ):
        """
        Initialize the digitiser.

        Args:
            ocr: OCR backend for text recognition.
            coordinator: Extraction coordinator (LLM, then regex).
            store: Card store receiving each new card.
            preprocessor: Image normalization applied before OCR.
            language: OCR language code.
        """
        self._ocr = ocr
        self._coordinator = coordinator
        self._store = store
        self._preprocessor = preprocessor or ImagePreprocessor()
        self._language = language
        self._busy = threading.Lock()

    def process(self, image: np.ndarray) -> Card:
        """
        Digitise a captured image and store the resulting card.

        The image buffer is preprocessed in place. Blank OCR output is
        rejected instead of being stored as an all-"N/A" card, unlike the
        browser version of this tool.

        Args:
            image: Captured frame.

        Returns:
            The stored Card.

        Raises:
            CaptureError: If another capture is still being processed.
            OCRError: If OCR fails or recognizes no text. Nothing is stored.
        """
        if not self._busy.acquire(blocking=False):
            raise CaptureError("A capture is already being processed")

        try:
            start_time = time.perf_counter()

            # Step 1: OCR
            text = self.recognize_only(image)
            if not text.strip():
                raise OCRError("OCR extracted no text from the image")

            # Step 2: extraction
            card = self._coordinator.run(text)

            # Step 3: store
            self._store.add(card)

            elapsed_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                "Digitised card %r in %.0fms (OCR: %s, extractor: %s)",
                card.name,
                elapsed_ms,
                self._ocr.name,
                self._coordinator.last_source,
            )
            return card
        finally:
            self._busy.release()

    def process_file(self, image_path: str | Path) -> Card:
        """Load an image file and digitise it."""
        return self.process(load_image(image_path))

    def recognize_only(self, image: np.ndarray) -> str:
        """
        Preprocess and OCR the image, without extraction or storage.

        Useful for debugging or checking OCR quality.

        Returns:
            Raw OCR text.
        """
        self._preprocessor.process(image)
        try:
            text = self._ocr.recognize(image, language=self._language).text
        except OCRError:
            raise
        except Exception as e:
            raise OCRError(f"OCR failed: {e}") from e

        logger.debug("Raw OCR text:\n%s", text)
        return text
