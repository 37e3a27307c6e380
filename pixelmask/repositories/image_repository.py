from pathlib import Path
from typing import Union
import logging
import numpy as np
import cv2
from PIL import Image as PILImage

from ..models.image import Image
from ..models.errors import MissingArtifactError, ArtifactWriteError

logger = logging.getLogger(__name__)


class ImageRepository:
    """
    Handles raster file I/O for Image entities.
    Every image is decoded to padding-free 8-bit RGB; alpha and other
    channel layouts are flattened to RGB on load.
    """

    @staticmethod
    def load(path: Union[str, Path]) -> Image:
        path = Path(path)
        if not path.is_file():
            raise MissingArtifactError(f"Image not found: {path}")

        arr_bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)
        if arr_bgr is None:
            raise MissingArtifactError(f"Image unreadable: {path}")

        # cv2 hands back BGR; flip to RGB and drop the strided view
        arr = np.ascontiguousarray(arr_bgr[:, :, ::-1])
        logger.debug(f"Loaded {path} ({arr.shape[1]}x{arr.shape[0]})")
        return Image(pixels=arr, path=path)

    @staticmethod
    def save(image: Image, path: Union[str, Path] = None) -> Path:
        """
        Encode *image* to *path* (or image.path). Format follows the suffix.
        """
        target = Path(path) if path is not None else image.path
        if target is None:
            raise ArtifactWriteError("No destination path for image")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            PILImage.fromarray(image.pixels).save(target)
        except (OSError, ValueError) as err:
            raise ArtifactWriteError(f"Could not save image {target}: {err}") from err
        image.path = target
        logger.debug(f"Saved {target} ({image.width}x{image.height})")
        return target
