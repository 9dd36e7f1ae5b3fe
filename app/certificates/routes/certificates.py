import re
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.auth.dependencies import get_current_user
from app.auth.models.user import User
from app.certificates.dependencies import get_certificate_repository
from app.certificates.repository import CertificateRepository
from app.certificates.schemas.certificate import (
    IssueCertificateResponse,
    IssuedCertificateResponse,
)
from app.certificates.services.issuance_service import IssuanceService
from app.certificates.services.pdf_service import CertificatePdfService
from app.core.datetime_utils import utcnow
from app.core.exceptions import ConflictError, ForbiddenError, NotFoundError
from app.db.session import get_db

router = APIRouter()


@router.post(
    "/certificates/courses/{course_id}",
    response_model=IssueCertificateResponse,
    status_code=status.HTTP_200_OK,
)
async def generate_certificate(
    course_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> IssueCertificateResponse:
    """Issue a certificate to the caller for a completed course."""
    outcome = IssuanceService(db).issue_for_student(current_user.id, course_id)

    return IssueCertificateResponse(
        certificate=IssuedCertificateResponse.model_validate(outcome.certificate),
        already_issued=outcome.already_issued,
    )


@router.get("/certificates/me", response_model=list[IssuedCertificateResponse])
async def get_my_certificates(
    repository: CertificateRepository = Depends(get_certificate_repository),
    current_user: User = Depends(get_current_user),
) -> list[IssuedCertificateResponse]:
    """Get the caller's certificates that are still valid."""
    certificates = repository.list_for_student(current_user.id)
    return [IssuedCertificateResponse.model_validate(cert) for cert in certificates]


@router.get("/certificates/{credential_id}/download")
async def download_certificate(
    credential_id: str,
    repository: CertificateRepository = Depends(get_certificate_repository),
    current_user: User = Depends(get_current_user),
) -> Response:
    """Download a certificate PDF."""
    certificate = repository.get_by_credential_id(credential_id)

    if not certificate:
        raise NotFoundError("Certificate not found")

    if certificate.student_id != current_user.id:
        raise ForbiddenError("You don't have permission to download this certificate")

    if certificate.is_revoked:
        raise ConflictError("This certificate has been revoked", resource="certificate")

    pdf_bytes = CertificatePdfService.render(certificate, certificate.template)
    repository.record_download(certificate.id, utcnow())

    course_part = re.sub(r"[^a-z0-9]+", "-", certificate.course_name.lower()).strip("-")
    filename = f"certificate_{course_part or 'course'}_{credential_id[-8:]}.pdf"

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
