from __future__ import annotations
from contextlib import closing
from itertools import zip_longest
from pathlib import Path
from typing import Union
import logging
import numpy as np

from ..models.image import Image
from ..models.errors import MissingArtifactError
from ..repositories.image_repository import ImageRepository
from ..repositories.mask_log_repository import MaskLogRepository

logger = logging.getLogger(__name__)


class VerificationService:
    """Byte-exact comparisons between images and between mask log files."""

    def __init__(self,
                 image_repository: ImageRepository | None = None,
                 log_repository: MaskLogRepository | None = None):
        self.image_repository = image_repository or ImageRepository()
        self.log_repository = log_repository or MaskLogRepository()

    @staticmethod
    def images_equal(a: Image, b: Image) -> bool:
        """True iff both images have the same size and identical RGB bytes."""
        if not a.same_size(b):
            return False
        return bool(np.array_equal(a.pixels, b.pixels))

    def image_files_equal(self, path_a: Union[str, Path], path_b: Union[str, Path]) -> bool:
        try:
            a = self.image_repository.load(path_a)
            b = self.image_repository.load(path_b)
        except MissingArtifactError as err:
            logger.warning(f"Image comparison failed: {err}")
            return False
        return self.images_equal(a, b)

    def logs_equal(self, path_a: Union[str, Path], path_b: Union[str, Path]) -> bool:
        """
        Byte-wise, line-by-line comparison through to the end of both files.
        A file that ends early (or has an extra line, even a blank one) is unequal.
        """
        try:
            with closing(self.log_repository.read_lines(path_a)) as lines_a, \
                    closing(self.log_repository.read_lines(path_b)) as lines_b:
                for line_a, line_b in zip_longest(lines_a, lines_b):
                    if line_a != line_b:
                        return False
        except MissingArtifactError as err:
            logger.warning(f"Log comparison failed: {err}")
            return False
        return True
