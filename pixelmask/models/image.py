from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import numpy as np


@dataclass
class Image:
    """
    Simple data object: RGB pixels (+ optional source path for bookkeeping).
    No codec logic outside the repository layer.
    """
    pixels: np.ndarray # Shape (H, W, 3), dtype uint8, RGB order.
    path: Path | None = None # Source or destination of the image.

    def __post_init__(self):
        if self.pixels.dtype != np.uint8:
            raise TypeError(f"Image pixels must be uint8, got {self.pixels.dtype}")
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 3:
            raise ValueError(f"Image pixels must have shape (H, W, 3), got {self.pixels.shape}")
        if self.path is not None:
            self.path = Path(self.path)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def n_pixels(self) -> int:
        return self.width * self.height

    @property
    def flat(self) -> np.ndarray:
        """Row-major, padding-free R,G,B samples (length = width * height * 3)."""
        return self.pixels.reshape(-1)

    def same_size(self, other: Image) -> bool:
        return self.pixels.shape == other.pixels.shape
