# pipeline/obfuscate.py
import logging

from ..models.artifact import ArtifactRole, StageResult
from ..models.errors import PixelMaskError, DimensionMismatchError
from ..services.combinator_service import CombinatorService
from ..services.rotation_service import RotationService
from ..services.pattern_service import PatternService
from .artifact_store import ArtifactStore

logger = logging.getLogger(__name__)


def load_inputs(store: ArtifactStore) -> StageResult:
    """
    Load Original and Distortion and require them to be the same size.
    Whatever loads is kept in the store even if the other one is missing.
    """
    name = "load_inputs"
    problems = []
    for role in (ArtifactRole.ORIGINAL, ArtifactRole.DISTORTION):
        try:
            store.load(role)
        except PixelMaskError as err:
            problems.append(str(err))

    if problems:
        message = "; ".join(problems)
        logger.warning(f"{name}: {message}")
        return StageResult(name, ok=False, message=message)

    original = store.held(ArtifactRole.ORIGINAL)
    distortion = store.held(ArtifactRole.DISTORTION)
    if not original.same_size(distortion):
        message = (f"original is {original.width}x{original.height}, "
                   f"distortion is {distortion.width}x{distortion.height}")
        logger.warning(f"{name}: size mismatch, {message}")
        return StageResult(name, ok=False, message=f"size mismatch: {message}")

    return StageResult(name, ok=True, message=f"{original.width}x{original.height} RGB")


def combine_stage(
    store: ArtifactStore,
    *,
    combinator: CombinatorService = CombinatorService(),
) -> StageResult:
    """P1 = Original XOR Distortion, held in memory and persisted."""
    name = "combine"
    original = store.held(ArtifactRole.ORIGINAL)
    distortion = store.held(ArtifactRole.DISTORTION)
    if original is None or distortion is None:
        return StageResult(name, ok=False, skipped=True, message="original or distortion not loaded")
    if not original.same_size(distortion):
        return StageResult(name, ok=False, skipped=True, message="original and distortion differ in size")

    try:
        store.put(ArtifactRole.COMBINED, combinator.combine(original, distortion))
        path = store.persist(ArtifactRole.COMBINED)
    except DimensionMismatchError as err:
        return StageResult(name, ok=False, skipped=True, message=str(err))
    except PixelMaskError as err:
        logger.error(f"{name}: {err}")
        return StageResult(name, ok=False, message=str(err))
    return StageResult(name, ok=True, message=f"wrote {path}")


def rotate_stage(
    store: ArtifactStore,
    bits: int,
    *,
    rotator: RotationService = RotationService(),
) -> StageResult:
    """P2 = P1 rotated right by *bits*, held in memory and persisted."""
    name = "rotate"
    combined = store.held(ArtifactRole.COMBINED)
    if combined is None:
        return StageResult(name, ok=False, skipped=True, message="combined image not available")

    try:
        store.put(ArtifactRole.ROTATED, rotator.rotate_right(combined, bits))
        path = store.persist(ArtifactRole.ROTATED)
    except PixelMaskError as err:
        logger.error(f"{name}: {err}")
        return StageResult(name, ok=False, message=str(err))
    return StageResult(name, ok=True, message=f"rotated right by {bits} bits, wrote {path}")


def pattern_stage(
    store: ArtifactStore,
    *,
    pattern_service: PatternService = PatternService(),
) -> StageResult:
    """Write a gradient image the size of Original."""
    name = "pattern"
    original = store.held(ArtifactRole.ORIGINAL)
    if original is None:
        return StageResult(name, ok=False, skipped=True, message="original not loaded")

    try:
        store.put(ArtifactRole.PATTERN, pattern_service.gradient_like(original))
        path = store.persist(ArtifactRole.PATTERN)
    except PixelMaskError as err:
        logger.error(f"{name}: {err}")
        return StageResult(name, ok=False, message=str(err))
    finally:
        store.release(ArtifactRole.PATTERN)
    return StageResult(name, ok=True, message=f"wrote {path}")
