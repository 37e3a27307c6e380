import numpy as np

from ..models.image import Image


class RotationService:
    """
    Cyclic rotation of every byte in a buffer.
    rotate_left(rotate_right(buf, k), k) == buf for every k.
    """

    @staticmethod
    def _normalise(bits) -> int:
        if isinstance(bits, bool) or not isinstance(bits, (int, np.integer)):
            raise TypeError(f"Rotation count must be an integer, got {bits!r}")
        # 0 and 8 are the identity; the shift formula below is only valid for 1..7
        return int(bits) % 8

    @staticmethod
    def _rotr(data: np.ndarray, k: int) -> np.ndarray:
        if k == 0:
            return data.copy()
        wide = data.astype(np.uint16)
        return (((wide >> k) | (wide << (8 - k))) & 0xFF).astype(np.uint8)

    def _apply(self, buf, k: int):
        if isinstance(buf, Image):
            return Image(pixels=self._rotr(buf.pixels, k))
        return self._rotr(np.asarray(buf, dtype=np.uint8), k)

    def rotate_right(self, buf, bits: int):
        """Rotate each byte right by *bits*. Returns a new Image or array."""
        return self._apply(buf, self._normalise(bits))

    def rotate_left(self, buf, bits: int):
        """Rotate each byte left by *bits*. Returns a new Image or array."""
        # a left rotation by k is a right rotation by 8 - k
        return self._apply(buf, (8 - self._normalise(bits)) % 8)
