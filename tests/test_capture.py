"""Tests for image file and camera acquisition."""

from unittest.mock import Mock, patch

import cv2
import numpy as np
import pytest

from card_digitiser.capture import CameraSource, collect_images, load_image
from card_digitiser.errors import CaptureError


class TestCollectImages:
    """Test image path collection."""

    def test_collect_images_from_files(self, tmp_path):
        (tmp_path / "a.jpg").touch()
        (tmp_path / "b.png").touch()
        (tmp_path / "c.txt").touch()  # Non-image, should be ignored

        images = collect_images([
            tmp_path / "a.jpg",
            tmp_path / "b.png",
            tmp_path / "c.txt",
        ])

        assert images == [tmp_path / "a.jpg", tmp_path / "b.png"]

    def test_collect_images_from_directory(self, tmp_path):
        (tmp_path / "card1.jpg").touch()
        (tmp_path / "card2.PNG").touch()  # Uppercase extension
        (tmp_path / "notes.txt").touch()

        images = collect_images([tmp_path])

        assert [p.name for p in images] == ["card1.jpg", "card2.PNG"]

    def test_collect_images_deduplicates(self, tmp_path):
        (tmp_path / "a.jpg").touch()
        assert collect_images([tmp_path, tmp_path / "a.jpg"]) == [tmp_path / "a.jpg"]


class TestLoadImage:
    """Test image file loading."""

    def test_load_image(self, tmp_path):
        path = tmp_path / "card.png"
        cv2.imwrite(str(path), np.full((10, 20, 3), 200, dtype=np.uint8))

        img = load_image(path)

        assert img.shape == (10, 20, 3)
        assert img.dtype == np.uint8

    def test_load_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Image not found"):
            load_image(tmp_path / "missing.jpg")

    def test_load_unreadable(self, tmp_path):
        path = tmp_path / "broken.jpg"
        path.write_bytes(b"not an image")
        with pytest.raises(CaptureError, match="Failed to read image"):
            load_image(path)


class TestCameraSource:
    """Test camera wrapper with a mocked VideoCapture."""

    @patch("card_digitiser.capture.camera.cv2.VideoCapture")
    def test_grab_frame(self, video_capture):
        frame = np.zeros((4, 4, 3), dtype=np.uint8)
        cap = Mock()
        cap.isOpened.return_value = True
        cap.read.return_value = (True, frame)
        video_capture.return_value = cap

        with CameraSource(1) as camera:
            assert camera.grab() is frame

        video_capture.assert_called_once_with(1)
        cap.release.assert_called_once()

    @patch("card_digitiser.capture.camera.cv2.VideoCapture")
    def test_camera_unavailable(self, video_capture):
        video_capture.return_value.isOpened.return_value = False

        with pytest.raises(CaptureError, match="Cannot open camera 0"):
            with CameraSource(0):
                pass

    @patch("card_digitiser.capture.camera.cv2.VideoCapture")
    def test_frame_read_failure(self, video_capture):
        cap = Mock()
        cap.isOpened.return_value = True
        cap.read.return_value = (False, None)
        video_capture.return_value = cap

        with CameraSource() as camera:
            with pytest.raises(CaptureError, match="Failed to read a frame"):
                camera.grab()

    def test_grab_without_open(self):
        with pytest.raises(CaptureError, match="not open"):
            CameraSource().grab()
