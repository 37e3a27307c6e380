"""
Pipeline Orchestrator
Runs the full encode path (original → P1 → P2 → mask logs), the decode path
(P2 → recovered original) and the verification pass, in that order.
A stage that cannot run is reported and skipped; the rest still run.
"""

from __future__ import annotations
import logging

from ..config import PipelineConfig
from ..models.artifact import ArtifactRole, PipelineReport, StageResult
from ..services.combinator_service import CombinatorService
from ..services.image_service import ImageService
from ..services.mask_log_service import MaskLogService
from ..services.pattern_service import PatternService
from ..services.rotation_service import RotationService
from ..services.verification_service import VerificationService
from .artifact_store import ArtifactStore
from .mask_logging import inspect_existing_log, load_mask, write_mask_log
from .obfuscate import load_inputs, combine_stage, rotate_stage, pattern_stage
from .recover import recover_original
from .verify import verify_recovered, verify_log

logger = logging.getLogger(__name__)


class PipelineOrchestrator:
    """Owns the artifact store and the services for one pipeline run."""

    def __init__(self,
                 config: PipelineConfig,
                 *,
                 image_service: ImageService | None = None,
                 combinator: CombinatorService | None = None,
                 rotator: RotationService | None = None,
                 mask_log_service: MaskLogService | None = None,
                 verifier: VerificationService | None = None,
                 pattern_service: PatternService | None = None):
        self.config = config
        self.image_service = image_service or ImageService()
        self.combinator = combinator or CombinatorService()
        self.rotator = rotator or RotationService()
        self.mask_log_service = mask_log_service or MaskLogService()
        self.verifier = verifier or VerificationService()
        self.pattern_service = pattern_service or PatternService()
        self.store = ArtifactStore(config.paths, image_service=self.image_service)
        self.n_pixels: int | None = None

    def _record(self, report: PipelineReport, result: StageResult) -> StageResult:
        level = logging.INFO if result.ok else logging.WARNING
        status = "skipped" if result.skipped else ("ok" if result.ok else "failed")
        logger.log(level, f"[{result.name}] {status}: {result.message}")
        report.stages.append(result)
        return result

    # ─── Encode path ───────────────────────────────────────────────
    def _encode(self, report: PipelineReport) -> None:
        store, bits = self.store, self.config.rotation_bits

        self._record(report, load_inputs(store))
        self._record(report, combine_stage(store, combinator=self.combinator))
        self._record(report, rotate_stage(store, bits, rotator=self.rotator))
        if self.config.write_pattern_image:
            self._record(report, pattern_stage(store, pattern_service=self.pattern_service))
        store.release(ArtifactRole.ORIGINAL)

    # ─── Mask logs ─────────────────────────────────────────────────
    def _mask_logs(self, report: PipelineReport) -> None:
        store, offset = self.store, self.config.mask_offset

        result, self.n_pixels = load_mask(store)
        self._record(report, result)

        self._record(report, write_mask_log(
            store, ArtifactRole.ROTATED, ArtifactRole.LOG_FROM_ROTATED, offset, self.n_pixels,
            mask_log_service=self.mask_log_service,
        ))
        store.release(ArtifactRole.ROTATED)

        self._record(report, write_mask_log(
            store, ArtifactRole.COMBINED, ArtifactRole.LOG_FROM_COMBINED, offset, self.n_pixels,
            mask_log_service=self.mask_log_service,
        ))
        store.release(ArtifactRole.COMBINED, ArtifactRole.MASK)

    # ─── Decode path ───────────────────────────────────────────────
    def _recover(self, report: PipelineReport) -> None:
        self._record(report, recover_original(
            self.store, self.config.rotation_bits,
            rotator=self.rotator, combinator=self.combinator,
        ))
        self.store.release(ArtifactRole.DISTORTION)

    def _verify(self, report: PipelineReport) -> None:
        checks = [
            verify_recovered(self.store, verifier=self.verifier),
            verify_log(self.store, ArtifactRole.LOG_FROM_ROTATED, ArtifactRole.REFERENCE_LOG_ROTATED,
                       verifier=self.verifier),
            verify_log(self.store, ArtifactRole.LOG_FROM_COMBINED, ArtifactRole.REFERENCE_LOG_COMBINED,
                       verifier=self.verifier),
        ]
        for check in checks:
            logger.info(f"[verify:{check.name}] {'PASS' if check.passed else 'FAIL'}: {check.detail}")
        report.verifications.extend(checks)

    def run(self) -> PipelineReport:
        report = PipelineReport()

        self._record(report, inspect_existing_log(
            self.store, ArtifactRole.LOG_FROM_ROTATED, self.config.log_preview_pixels,
            mask_log_service=self.mask_log_service,
        ))
        self._encode(report)
        self._mask_logs(report)
        self._recover(report)
        self._verify(report)

        report.artifact_states = self.store.states()
        return report
