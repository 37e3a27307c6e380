from __future__ import annotations
from pathlib import Path
import logging

from ..models.artifact import Artifact, ArtifactRole, ArtifactState
from ..models.errors import ArtifactWriteError
from ..models.image import Image
from ..services.image_service import ImageService

logger = logging.getLogger(__name__)


class ArtifactStore:
    """
    Owns every artifact of one pipeline run.
    Buffers are held here between the stage that produces them and the
    stage that consumes them, then released.
    """

    def __init__(self, paths: dict[ArtifactRole, Path], image_service: ImageService | None = None):
        self.image_service = image_service or ImageService()
        self.artifacts: dict[ArtifactRole, Artifact] = {}
        for role, path in paths.items():
            artifact = Artifact(role=role, path=Path(path))
            if artifact.path.is_file():
                artifact.mark_persisted()
            self.artifacts[role] = artifact

    def path(self, role: ArtifactRole) -> Path:
        return self.artifacts[role].path

    def exists(self, role: ArtifactRole) -> bool:
        return self.path(role).is_file()

    def held(self, role: ArtifactRole) -> Image | None:
        return self.artifacts[role].image

    def put(self, role: ArtifactRole, image: Image) -> Image:
        self.artifacts[role].hold(image)
        return image

    def load(self, role: ArtifactRole) -> Image:
        """
        Decode the artifact from storage, ignoring any in-memory copy.

        Raises:
            MissingArtifactError: the file is absent or cannot be decoded.
        """
        image = self.image_service.load(self.path(role))
        artifact = self.artifacts[role]
        artifact.hold(image)
        artifact.mark_persisted()
        return image

    def obtain(self, role: ArtifactRole) -> Image:
        """The in-memory buffer if one is held, otherwise a fresh load."""
        image = self.held(role)
        if image is not None:
            return image
        return self.load(role)

    def persist(self, role: ArtifactRole) -> Path:
        artifact = self.artifacts[role]
        if artifact.image is None:
            raise ArtifactWriteError(f"Nothing in memory to write for {role.value}")
        path = self.image_service.save(artifact.image, artifact.path)
        artifact.mark_written()
        logger.info(f"{role.value} written to {path}")
        return path

    def mark_written(self, role: ArtifactRole) -> None:
        self.artifacts[role].mark_written()

    def written(self, role: ArtifactRole) -> bool:
        """True only once this run has stored the artifact."""
        return self.artifacts[role].written

    def release(self, *roles: ArtifactRole) -> None:
        for role in roles:
            self.artifacts[role].release()

    def states(self) -> dict[str, str]:
        return {role.value: artifact.state.value for role, artifact in self.artifacts.items()}
