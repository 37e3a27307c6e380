from pathlib import Path

import numpy as np
import pytest

from pixelmask.config import PipelineConfig
from pixelmask.models.artifact import ArtifactRole
from pixelmask.models.image import Image

from helpers import write_bmp, random_pixels


@pytest.fixture
def make_image():
    def _make(pixels, path=None) -> Image:
        return Image(pixels=np.asarray(pixels, dtype=np.uint8), path=path)
    return _make


@pytest.fixture
def original_pixels() -> np.ndarray:
    return random_pixels(20, 10, seed=1)


@pytest.fixture
def distortion_pixels() -> np.ndarray:
    return random_pixels(20, 10, seed=2)


@pytest.fixture
def mask_pixels() -> np.ndarray:
    return random_pixels(4, 4, seed=3)


@pytest.fixture
def config(tmp_path) -> PipelineConfig:
    return PipelineConfig.defaults(tmp_path)


@pytest.fixture
def data_dir(config, original_pixels, distortion_pixels, mask_pixels) -> Path:
    """A data directory holding the three input rasters."""
    write_bmp(config.path_for(ArtifactRole.ORIGINAL), original_pixels)
    write_bmp(config.path_for(ArtifactRole.DISTORTION), distortion_pixels)
    write_bmp(config.path_for(ArtifactRole.MASK), mask_pixels)
    return config.data_dir
