from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, Tuple
import numpy as np


@dataclass
class MaskLog:
    """
    Offset plus one (r, g, b) triplet per masked pixel.
    Components are sums of a source byte and a mask byte, so they are kept
    as int64 and may exceed 255.
    """
    offset: int
    triplets: np.ndarray = field(default_factory=lambda: np.zeros((0, 3), dtype=np.int64))

    def __post_init__(self):
        if self.offset < 0:
            raise ValueError(f"Mask log offset must be >= 0, got {self.offset}")
        self.triplets = np.asarray(self.triplets, dtype=np.int64).reshape(-1, 3)

    @property
    def n_pixels(self) -> int:
        return int(self.triplets.shape[0])

    def __iter__(self) -> Iterator[Tuple[int, int, int]]:
        for r, g, b in self.triplets.tolist():
            yield r, g, b

    def to_lines(self) -> list[str]:
        """Text form: the bare offset, then "r g b" per pixel."""
        return [str(self.offset)] + [f"{r} {g} {b}" for r, g, b in self]
