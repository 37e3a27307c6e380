from pathlib import Path

import numpy as np
from PIL import Image as PILImage


def write_bmp(path: Path, pixels: np.ndarray) -> Path:
    PILImage.fromarray(np.asarray(pixels, dtype=np.uint8)).save(path)
    return path


def random_pixels(width: int, height: int, seed: int) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
