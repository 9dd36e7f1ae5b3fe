from fastapi import APIRouter, Depends, Request

from app.certificates.dependencies import get_certificate_registry
from app.certificates.schemas.certificate import (
    CertificateSnapshotResponse,
    CertificateVerifyResponse,
    CourseReferenceResponse,
    TemplateStylingResponse,
)
from app.certificates.services.registry import CertificateRegistry, VerificationStatus
from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.core.rate_limit import limiter

router = APIRouter()

VERIFICATION_MESSAGES = {
    VerificationStatus.VALID: "This certificate is valid and authentic.",
    VerificationStatus.REVOKED: "This certificate has been revoked.",
}


@router.get(
    "/certificates/verify/{credential_id:path}",
    response_model=CertificateVerifyResponse,
)
@limiter.limit(settings.VERIFY_RATE_LIMIT)
async def verify_certificate(
    request: Request,
    credential_id: str,
    registry: CertificateRegistry = Depends(get_certificate_registry),
) -> CertificateVerifyResponse:
    """Verify a certificate by its credential ID (public endpoint)."""
    result = registry.verify(credential_id)

    # Malformed and unknown IDs get the same response
    if result.status is VerificationStatus.NOT_FOUND or result.snapshot is None:
        raise NotFoundError("Certificate not found")

    template = result.template
    course = result.course
    return CertificateVerifyResponse(
        valid=result.is_valid,
        status=result.status,
        message=VERIFICATION_MESSAGES[result.status],
        certificate=CertificateSnapshotResponse.model_validate(result.snapshot),
        is_revoked=result.status is VerificationStatus.REVOKED,
        revoked_at=result.revoked_at,
        revoked_reason=result.revoked_reason,
        template=TemplateStylingResponse.model_validate(template) if template else None,
        course=CourseReferenceResponse.model_validate(course) if course else None,
    )
