"""Tests for the PaddleOCR backend with a mocked engine."""

from unittest.mock import Mock

import numpy as np
import pytest

from card_digitiser.errors import OCRError
from card_digitiser.ocr.paddle_ocr import PaddleOCRBackend


def _backend_with_engine(lang="en", result=None):
    engine = Mock()
    engine.predict.return_value = result if result is not None else [
        {"rec_texts": ["John Smith", "Acme Corp"], "rec_scores": [0.9, 0.7]}
    ]
    backend = PaddleOCRBackend()
    backend._engines[lang] = engine
    return backend, engine


class TestPaddleOCRBackend:
    """Test PaddleOCRBackend result handling."""

    def test_backend_name(self):
        assert PaddleOCRBackend().name == "paddleocr:eng"
        assert PaddleOCRBackend(default_language="fra").name == "paddleocr:fra"

    def test_recognize_joins_lines(self):
        backend, engine = _backend_with_engine()
        img = np.zeros((10, 10, 3), dtype=np.uint8)

        result = backend.recognize(img, language="eng")

        assert result.text == "John Smith\nAcme Corp"
        assert result.confidence == pytest.approx(0.8)
        assert engine.predict.call_args.args[0] is img

    def test_unmapped_language_passes_through(self):
        backend, engine = _backend_with_engine(lang="latin")
        backend.recognize(np.zeros((4, 4, 3), dtype=np.uint8), language="latin")
        engine.predict.assert_called_once()

    def test_gray_image_expanded_to_three_channels(self):
        backend, engine = _backend_with_engine()
        backend.recognize(np.full((4, 5), 7, dtype=np.uint8))

        seen = engine.predict.call_args.args[0]
        assert seen.shape == (4, 5, 3)
        assert (seen == 7).all()

    def test_alpha_channel_dropped(self):
        backend, engine = _backend_with_engine()
        img = np.zeros((4, 5, 4), dtype=np.uint8)
        img[:, :, 3] = 255

        backend.recognize(img)

        seen = engine.predict.call_args.args[0]
        assert seen.shape == (4, 5, 3)
        assert (seen == 0).all()

    @pytest.mark.parametrize(
        "result", [[], [{}], [{"rec_texts": [], "rec_scores": []}]]
    )
    def test_empty_result(self, result):
        backend, _ = _backend_with_engine(result=result)
        ocr_result = backend.recognize(np.zeros((4, 4, 3), dtype=np.uint8))
        assert ocr_result.text == ""
        assert ocr_result.confidence == 0.0

    def test_predict_failure_raises_ocr_error(self):
        backend, engine = _backend_with_engine()
        engine.predict.side_effect = RuntimeError("model crashed")

        with pytest.raises(OCRError, match="model crashed"):
            backend.recognize(np.zeros((4, 4, 3), dtype=np.uint8))
