"""Live camera frame source."""

import logging

import cv2
import numpy as np

from card_digitiser.errors import CaptureError

logger = logging.getLogger(__name__)


class CameraSource:
    """Grab still frames from a camera through OpenCV.

    Use as a context manager so the device is released::

        with CameraSource(0) as camera:
            frame = camera.grab()
    """

    def __init__(self, index: int = 0):
        self._index = index
        self._cap: cv2.VideoCapture | None = None

    def __enter__(self) -> "CameraSource":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        """
        Open the camera device.

        Raises:
            CaptureError: If the camera is unavailable or access is denied.
        """
        cap = cv2.VideoCapture(self._index)
        if not cap.isOpened():
            cap.release()
            raise CaptureError(f"Cannot open camera {self._index}")
        self._cap = cap
        logger.debug("Camera %d opened", self._index)

    def grab(self) -> np.ndarray:
        """
        Read the current frame.

        Raises:
            CaptureError: If the camera is not open or returns no frame.
        """
        if self._cap is None:
            raise CaptureError("Camera is not open")
        ok, frame = self._cap.read()
        if not ok or frame is None:
            raise CaptureError(f"Failed to read a frame from camera {self._index}")
        return frame

    def close(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None
            logger.debug("Camera %d released", self._index)
