from __future__ import annotations
from pathlib import Path
from typing import Union
import logging
import numpy as np

from ..models.image import Image
from ..models.mask_log import MaskLog
from ..models.errors import BoundsViolationError
from ..repositories.mask_log_repository import MaskLogRepository

logger = logging.getLogger(__name__)


class MaskLogService:
    """
    Builds and reads mask logs.
    *   A log entry is a source pixel (starting at *offset*) plus the mask
        pixel at the same position, summed component-wise without wraparound.
    *   File I/O is delegated to MaskLogRepository.
    """

    def __init__(self, repository: MaskLogRepository | None = None):
        self.repository = repository or MaskLogRepository()

    @staticmethod
    def _flat(buf) -> np.ndarray:
        if isinstance(buf, Image):
            return buf.flat
        return np.asarray(buf, dtype=np.uint8).reshape(-1)

    @staticmethod
    def check_bounds(source_len: int, mask_len: int, offset: int, n_pixels: int) -> None:
        """
        Raises:
            BoundsViolationError: the requested window does not fit in source or mask.
        """
        if offset < 0 or n_pixels < 0:
            raise BoundsViolationError(f"offset and n_pixels must be >= 0 (offset={offset}, n_pixels={n_pixels})")
        end = offset * 3 + n_pixels * 3
        if end > source_len:
            raise BoundsViolationError(
                f"offset {offset} + {n_pixels} pixels needs {end} bytes, source has {source_len}"
            )
        if n_pixels * 3 > mask_len:
            raise BoundsViolationError(
                f"{n_pixels} pixels need {n_pixels * 3} mask bytes, mask has {mask_len}"
            )

    def generate(self, source, mask, offset: int, n_pixels: int) -> MaskLog:
        src = self._flat(source)
        msk = self._flat(mask)
        self.check_bounds(src.size, msk.size, offset, n_pixels)

        start = offset * 3
        window = src[start:start + n_pixels * 3].astype(np.int64)
        sums = window + msk[:n_pixels * 3].astype(np.int64)
        return MaskLog(offset=offset, triplets=sums.reshape(-1, 3))

    def write_log(self, source, mask, offset: int, n_pixels: int,
                  destination: Union[str, Path]) -> MaskLog:
        """
        Generate the log for *source* and persist it to *destination*.
        Nothing is written when the bounds check fails.
        """
        log = self.generate(source, mask, offset, n_pixels)
        self.repository.write(log, destination)
        logger.info(f"Mask log written to {destination} (offset={offset}, pixels={log.n_pixels})")
        return log

    def read_log(self, path: Union[str, Path]) -> MaskLog:
        log = self.repository.read(path)
        logger.info(f"Mask log read from {path} (offset={log.offset}, pixels={log.n_pixels})")
        return log
