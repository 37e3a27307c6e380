from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

from .models.artifact import ArtifactRole

# role → (env var, default file name)
ARTIFACT_ENV = {
    ArtifactRole.ORIGINAL: ("ORIGINAL_IMAGE_PATH", "I_O.bmp"),
    ArtifactRole.DISTORTION: ("DISTORTION_IMAGE_PATH", "I_M.bmp"),
    ArtifactRole.MASK: ("MASK_IMAGE_PATH", "M.bmp"),
    ArtifactRole.COMBINED: ("COMBINED_IMAGE_PATH", "P1.bmp"),
    ArtifactRole.ROTATED: ("ROTATED_IMAGE_PATH", "P2.bmp"),
    ArtifactRole.RECOVERED: ("RECOVERED_IMAGE_PATH", "P3.bmp"),
    ArtifactRole.PATTERN: ("PATTERN_IMAGE_PATH", "I_D.bmp"),
    ArtifactRole.LOG_FROM_ROTATED: ("LOG_FROM_ROTATED_PATH", "M1.txt"),
    ArtifactRole.LOG_FROM_COMBINED: ("LOG_FROM_COMBINED_PATH", "M2.txt"),
    ArtifactRole.REFERENCE_LOG_ROTATED: ("REFERENCE_LOG_ROTATED_PATH", "M1_reference.txt"),
    ArtifactRole.REFERENCE_LOG_COMBINED: ("REFERENCE_LOG_COMBINED_PATH", "M2_reference.txt"),
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


@dataclass
class PipelineConfig:
    """
    Paths and knobs for one pipeline run.
    Relative artifact paths are resolved against data_dir.
    """
    data_dir: Path
    paths: dict[ArtifactRole, Path]
    mask_offset: int = 100
    rotation_bits: int = 3
    write_pattern_image: bool = True
    log_preview_pixels: int = 5
    log_level: str = "INFO"

    def __post_init__(self):
        if self.mask_offset < 0:
            raise ValueError(f"MASK_OFFSET must be >= 0, got {self.mask_offset}")
        if self.log_preview_pixels < 0:
            raise ValueError(f"LOG_PREVIEW_PIXELS must be >= 0, got {self.log_preview_pixels}")

    def path_for(self, role: ArtifactRole) -> Path:
        return self.paths[role]

    @classmethod
    def defaults(cls, data_dir: str | Path = ".") -> PipelineConfig:
        data_dir = Path(data_dir)
        return cls(
            data_dir=data_dir,
            paths={role: data_dir / name for role, (_, name) in ARTIFACT_ENV.items()},
        )

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> PipelineConfig:
        """
        Build a config from environment variables, honouring a .env file.
        Variables already set in the process environment win over the file.
        """
        load_dotenv(env_file)
        data_dir = Path(os.getenv("PIXELMASK_DATA_DIR", "."))

        paths = {}
        for role, (var, default) in ARTIFACT_ENV.items():
            path = Path(os.getenv(var, default))
            paths[role] = path if path.is_absolute() else data_dir / path

        return cls(
            data_dir=data_dir,
            paths=paths,
            mask_offset=_env_int("MASK_OFFSET", 100),
            rotation_bits=_env_int("ROTATION_BITS", 3),
            write_pattern_image=_env_bool("WRITE_PATTERN_IMAGE", True),
            log_preview_pixels=_env_int("LOG_PREVIEW_PIXELS", 5),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
