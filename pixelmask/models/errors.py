class PixelMaskError(Exception):
    """Base class for every domain error raised by pixelmask."""


class MissingArtifactError(PixelMaskError, FileNotFoundError):
    """A raster or log artifact is missing or unreadable."""


class DimensionMismatchError(PixelMaskError, ValueError):
    """Two buffers that must align have different sizes."""


class MalformedLogError(PixelMaskError, ValueError):
    """A mask log whose offset line cannot be parsed."""


class BoundsViolationError(PixelMaskError, IndexError):
    """An offset/pixel-count pair that reaches past the end of a buffer."""


class ArtifactWriteError(PixelMaskError, OSError):
    """An artifact could not be written to storage."""
