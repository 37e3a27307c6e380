import numpy as np

from ..models.image import Image
from ..models.errors import DimensionMismatchError


class CombinatorService:
    """
    Byte-wise XOR of two equal-length buffers.
    Self-inverse: combine(combine(a, b), b) == a.
    """

    def combine(self, a, b):
        """
        Args:
            a, b: Image objects of the same size, or byte buffers of the same shape.

        Returns:
            A new Image (when given Images) or a new uint8 array holding a XOR b.

        Raises:
            DimensionMismatchError: the operands differ in size.
        """
        if isinstance(a, Image) and isinstance(b, Image):
            if not a.same_size(b):
                raise DimensionMismatchError(
                    f"Cannot combine {a.width}x{a.height} with {b.width}x{b.height}"
                )
            return Image(pixels=np.bitwise_xor(a.pixels, b.pixels))

        left = np.asarray(a, dtype=np.uint8)
        right = np.asarray(b, dtype=np.uint8)
        if left.shape != right.shape:
            raise DimensionMismatchError(f"Cannot combine buffers of shape {left.shape} and {right.shape}")
        return np.bitwise_xor(left, right)
