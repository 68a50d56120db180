"""Grayscale and contrast normalization for captured card images."""

import logging

import numpy as np

logger = logging.getLogger(__name__)


class ImagePreprocessor:
    """Convert a captured frame to boosted-contrast grayscale, in place.

    Every pixel's color channels are replaced by their average, then scaled
    by a fixed contrast factor and clamped to 255. A fourth (alpha) channel
    is left untouched. The transform is deterministic and does no I/O.
    """

    MAX_VALUE = 255

    def __init__(self, contrast: float = 1.2):
        """
        Initialize ImagePreprocessor.

        Args:
            contrast: Multiplier applied to each gray value before clamping.
        """
        self._contrast = contrast

    def process(self, image: np.ndarray) -> np.ndarray:
        """
        Normalize an image buffer in place.

        Args:
            image: uint8 array shaped (H, W) or (H, W, C) with C >= 3.

        Returns:
            The same array object, mutated.

        Raises:
            ValueError: If the buffer is not a uint8 image.
        """
        if image.dtype != np.uint8:
            raise ValueError(f"Expected a uint8 image, got {image.dtype}")

        if image.ndim == 2:
            gray = image.astype(np.float32)
        elif image.ndim == 3 and image.shape[2] >= 3:
            # Round like an 8-bit clamped buffer would before scaling
            gray = np.rint(image[:, :, :3].sum(axis=2, dtype=np.float32) / 3)
        else:
            raise ValueError(f"Unsupported image shape: {image.shape}")

        boosted = np.minimum(self.MAX_VALUE, np.rint(gray * self._contrast))
        boosted = boosted.astype(np.uint8)

        if image.ndim == 2:
            image[:, :] = boosted
        else:
            image[:, :, :3] = boosted[:, :, np.newaxis]

        logger.debug(
            "Preprocessed %dx%d image (contrast %.2f)",
            image.shape[1],
            image.shape[0],
            self._contrast,
        )
        return image
