"""Image file loading."""

from pathlib import Path

import cv2
import numpy as np

from card_digitiser.errors import CaptureError

# Supported image extensions
IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".bmp", ".webp"}


def load_image(image_path: str | Path) -> np.ndarray:
    """
    Read an image file as a BGR array.

    Raises:
        FileNotFoundError: If the image file does not exist.
        CaptureError: If the file cannot be decoded as an image.
    """
    path = Path(image_path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")

    img = cv2.imread(str(path))
    if img is None:
        raise CaptureError(f"Failed to read image: {path}")
    return img


def collect_images(inputs: list[Path]) -> list[Path]:
    """
    Collect image paths from files and directories.

    Args:
        inputs: List of file paths or directories.

    Returns:
        Sorted list of image file paths.
    """
    images: list[Path] = []

    for path in inputs:
        if path.is_dir():
            images.extend(
                child
                for child in path.iterdir()
                if child.is_file() and child.suffix.lower() in IMAGE_EXTENSIONS
            )
        elif path.is_file() and path.suffix.lower() in IMAGE_EXTENSIONS:
            images.append(path)

    # Sort for deterministic order
    return sorted(set(images))
