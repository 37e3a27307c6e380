from __future__ import annotations
from pathlib import Path

from ..models.image import Image
from ..repositories.image_repository import ImageRepository


class ImageService:
    """I/O helpers.  No byte-level transforms here."""
    def __init__(self, image_repository: ImageRepository | None = None):
        self.image_repository = image_repository or ImageRepository()

    def load(self, path: str | Path) -> Image:
        """Load a single raster from disk into an Image object."""
        return self.image_repository.load(path)

    def save(self, image: Image, path: str | Path | None = None) -> Path:
        """
        Business-level method to save the image to a specific path.
        """
        return self.image_repository.save(image, path)
