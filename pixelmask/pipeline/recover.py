"""
Recovery step: undo the rotation on the stored P2 and XOR the distortion
back out, which should reproduce the original byte-for-byte.
"""

import logging

from ..models.artifact import ArtifactRole, StageResult
from ..models.errors import PixelMaskError
from ..services.combinator_service import CombinatorService
from ..services.rotation_service import RotationService
from .artifact_store import ArtifactStore

logger = logging.getLogger(__name__)


def recover_original(
    store: ArtifactStore,
    bits: int,
    *,
    rotator: RotationService = RotationService(),
    combinator: CombinatorService = CombinatorService(),
) -> StageResult:
    """
    Recovered = rotl(P2, bits) XOR Distortion.

    P2 is always decoded again from storage so the check covers the
    written file, not the buffer that produced it.
    """
    name = "recover"
    try:
        rotated = store.load(ArtifactRole.ROTATED)
        distortion = store.obtain(ArtifactRole.DISTORTION)
    except PixelMaskError as err:
        logger.warning(f"{name}: {err}")
        store.release(ArtifactRole.ROTATED)
        return StageResult(name, ok=False, skipped=True, message=str(err))

    if not rotated.same_size(distortion):
        message = (f"rotated image is {rotated.width}x{rotated.height}, "
                   f"distortion is {distortion.width}x{distortion.height}")
        logger.warning(f"{name}: size mismatch, {message}")
        store.release(ArtifactRole.ROTATED)
        return StageResult(name, ok=False, skipped=True, message=f"size mismatch: {message}")

    try:
        unrotated = rotator.rotate_left(rotated, bits)
        store.put(ArtifactRole.RECOVERED, combinator.combine(unrotated, distortion))
        path = store.persist(ArtifactRole.RECOVERED)
    except PixelMaskError as err:
        logger.error(f"{name}: {err}")
        return StageResult(name, ok=False, message=str(err))
    finally:
        store.release(ArtifactRole.ROTATED, ArtifactRole.RECOVERED)
    return StageResult(name, ok=True, message=f"wrote {path}")
