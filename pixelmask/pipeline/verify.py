# pipeline/verify.py
from ..models.artifact import ArtifactRole, VerificationResult
from ..services.verification_service import VerificationService
from .artifact_store import ArtifactStore


def verify_recovered(
    store: ArtifactStore,
    *,
    verifier: VerificationService = VerificationService(),
) -> VerificationResult:
    """Recovered vs Original, both decoded from storage."""
    recovered = store.path(ArtifactRole.RECOVERED)
    original = store.path(ArtifactRole.ORIGINAL)
    if not store.written(ArtifactRole.RECOVERED):
        return VerificationResult("recovered_image", False, f"{recovered.name} was not produced this run")
    passed = verifier.image_files_equal(recovered, original)
    detail = (f"{recovered.name} is identical to {original.name}" if passed
              else f"{recovered.name} does not match {original.name}")
    return VerificationResult("recovered_image", passed, detail)


def verify_log(
    store: ArtifactStore,
    generated_role: ArtifactRole,
    reference_role: ArtifactRole,
    *,
    verifier: VerificationService = VerificationService(),
) -> VerificationResult:
    generated = store.path(generated_role)
    reference = store.path(reference_role)
    # files left by an earlier run never count
    if not store.written(generated_role):
        return VerificationResult(generated_role.value, False, f"{generated.name} was not produced this run")
    passed = verifier.logs_equal(generated, reference)
    detail = (f"{generated.name} and {reference.name} are identical" if passed
              else f"{generated.name} and {reference.name} differ")
    return VerificationResult(generated_role.value, passed, detail)
