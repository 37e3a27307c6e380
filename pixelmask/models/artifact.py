from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .image import Image


class ArtifactRole(str, Enum):
    ORIGINAL = "original"
    DISTORTION = "distortion"
    MASK = "mask"
    COMBINED = "combined"            # P1 = original XOR distortion
    ROTATED = "rotated"              # P2 = rotr(P1)
    RECOVERED = "recovered"
    PATTERN = "pattern"
    LOG_FROM_ROTATED = "log_from_rotated"
    LOG_FROM_COMBINED = "log_from_combined"
    REFERENCE_LOG_ROTATED = "reference_log_rotated"
    REFERENCE_LOG_COMBINED = "reference_log_combined"


class ArtifactState(str, Enum):
    PENDING = "not yet produced"
    IN_MEMORY = "in memory"
    PERSISTED = "written to storage"


@dataclass
class Artifact:
    """
    A named pipeline artifact and where it lives.
    Holds its pixels only between being produced and being released.
    """
    role: ArtifactRole
    path: Path
    state: ArtifactState = ArtifactState.PENDING
    image: Image | None = None
    written: bool = False            # produced by this run, not found on disk

    def hold(self, image: Image) -> None:
        self.image = image
        if self.state is ArtifactState.PENDING:
            self.state = ArtifactState.IN_MEMORY

    def mark_persisted(self) -> None:
        self.state = ArtifactState.PERSISTED

    def mark_written(self) -> None:
        self.mark_persisted()
        self.written = True

    def release(self) -> Image | None:
        """Hand the pixels to the caller and drop this artifact's reference."""
        image, self.image = self.image, None
        if self.state is ArtifactState.IN_MEMORY:
            self.state = ArtifactState.PENDING
        return image


@dataclass
class StageResult:
    name: str
    ok: bool
    message: str = ""
    skipped: bool = False


@dataclass
class VerificationResult:
    name: str
    passed: bool
    detail: str = ""


@dataclass
class PipelineReport:
    stages: list[StageResult] = field(default_factory=list)
    verifications: list[VerificationResult] = field(default_factory=list)
    artifact_states: dict[str, str] = field(default_factory=dict)

    @property
    def all_verified(self) -> bool:
        return bool(self.verifications) and all(v.passed for v in self.verifications)
