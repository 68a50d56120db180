"""Image acquisition: live camera frames and image files."""

from card_digitiser.capture.camera import CameraSource
from card_digitiser.capture.files import IMAGE_EXTENSIONS, collect_images, load_image

__all__ = ["CameraSource", "IMAGE_EXTENSIONS", "collect_images", "load_image"]
