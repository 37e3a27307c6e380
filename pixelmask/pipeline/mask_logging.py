# pipeline/mask_logging.py
from typing import Optional, Tuple
import logging

from ..models.artifact import ArtifactRole, StageResult
from ..models.errors import PixelMaskError
from ..services.mask_log_service import MaskLogService
from .artifact_store import ArtifactStore

logger = logging.getLogger(__name__)


def inspect_existing_log(
    store: ArtifactStore,
    role: ArtifactRole,
    preview: int,
    *,
    mask_log_service: MaskLogService = MaskLogService(),
) -> StageResult:
    """
    Read a log left by a previous run and show its offset and first triplets.
    """
    name = f"inspect_{role.value}"
    if not store.exists(role):
        return StageResult(name, ok=True, skipped=True, message=f"no previous log at {store.path(role)}")

    try:
        log = mask_log_service.read_log(store.path(role))
    except PixelMaskError as err:
        logger.warning(f"{name}: {err}")
        return StageResult(name, ok=False, message=str(err))

    for i, (r, g, b) in enumerate(log.triplets[:preview].tolist()):
        logger.info(f"Pixel {i}: ({r}, {g}, {b})")
    return StageResult(name, ok=True, message=f"offset {log.offset}, {log.n_pixels} pixels")


def load_mask(store: ArtifactStore) -> Tuple[StageResult, Optional[int]]:
    """
    Load the mask raster. Its pixel count is the n_pixels every log uses.
    """
    name = "load_mask"
    try:
        mask = store.load(ArtifactRole.MASK)
    except PixelMaskError as err:
        logger.warning(f"{name}: {err}")
        return StageResult(name, ok=False, message=str(err)), None
    return StageResult(name, ok=True, message=f"{mask.width}x{mask.height} → {mask.n_pixels} pixels"), mask.n_pixels


def write_mask_log(
    store: ArtifactStore,
    source_role: ArtifactRole,
    log_role: ArtifactRole,
    offset: int,
    n_pixels: Optional[int],
    *,
    mask_log_service: MaskLogService = MaskLogService(),
) -> StageResult:
    """
    Mask log from *source_role* (in memory, or reloaded from storage) into *log_role*.
    """
    name = f"write_{log_role.value}"
    mask = store.held(ArtifactRole.MASK)
    if mask is None or n_pixels is None:
        return StageResult(name, ok=False, skipped=True, message="mask not loaded")

    try:
        source = store.obtain(source_role)
    except PixelMaskError as err:
        logger.warning(f"{name}: {err}")
        return StageResult(name, ok=False, skipped=True, message=str(err))

    try:
        log = mask_log_service.write_log(source, mask, offset, n_pixels, store.path(log_role))
    except PixelMaskError as err:
        logger.error(f"{name}: {err}")
        return StageResult(name, ok=False, message=str(err))

    store.mark_written(log_role)
    return StageResult(name, ok=True, message=f"{log.n_pixels} pixels from offset {offset} → {store.path(log_role)}")
