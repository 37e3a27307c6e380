import numpy as np

from ..models.image import Image


class PatternService:
    """
    Artificial pixel patterns used to demonstrate in-place manipulation.
    """

    @staticmethod
    def gradient_pixels(width: int, height: int) -> np.ndarray:
        """
        Every channel of the pixel that starts at byte index i is set to i mod 256.
        """
        starts = np.arange(width * height, dtype=np.int64) * 3
        values = (starts & 0xFF).astype(np.uint8)
        return np.repeat(values, 3).reshape(height, width, 3)

    def gradient_like(self, img: Image) -> Image:
        """A new Image the size of *img* filled with the gradient."""
        return Image(pixels=self.gradient_pixels(img.width, img.height))
