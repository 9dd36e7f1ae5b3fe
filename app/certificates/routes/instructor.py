from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.auth.dependencies import require_instructor
from app.auth.models.user import User
from app.certificates.dependencies import (
    can_manage_course,
    get_certificate_registry,
    get_managed_course,
)
from app.certificates.schemas.certificate import (
    InstructorIssueRequest,
    IssueCertificateResponse,
    IssuedCertificateResponse,
    RevokeCertificateRequest,
)
from app.certificates.schemas.template import (
    CertificateTemplateCreate,
    CertificateTemplateResponse,
    CertificateTemplateUpdate,
)
from app.certificates.services.issuance_service import IssuanceService
from app.certificates.services.registry import CertificateRegistry
from app.certificates.services.template_service import TemplateService
from app.core.exceptions import ForbiddenError, NotFoundError
from app.courses.models import Course
from app.db.session import get_db

router = APIRouter()


@router.get(
    "/instructor/courses/{course_id}/certificate-template",
    response_model=CertificateTemplateResponse | None,
)
async def get_certificate_template(
    course: Course = Depends(get_managed_course),
    db: Session = Depends(get_db),
) -> CertificateTemplateResponse | None:
    """Get the certificate template of a course (null when none exists yet)."""
    template = TemplateService(db).get_for_course(course)
    return CertificateTemplateResponse.model_validate(template) if template else None


@router.post(
    "/instructor/courses/{course_id}/certificate-template",
    response_model=CertificateTemplateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_certificate_template(
    data: CertificateTemplateCreate,
    course: Course = Depends(get_managed_course),
    current_user: User = Depends(require_instructor),
    db: Session = Depends(get_db),
) -> CertificateTemplateResponse:
    template = TemplateService(db).create(course, data, current_user)
    return CertificateTemplateResponse.model_validate(template)


@router.patch(
    "/instructor/courses/{course_id}/certificate-template",
    response_model=CertificateTemplateResponse,
)
async def update_certificate_template(
    data: CertificateTemplateUpdate,
    course: Course = Depends(get_managed_course),
    db: Session = Depends(get_db),
) -> CertificateTemplateResponse:
    template = TemplateService(db).update(course, data)
    return CertificateTemplateResponse.model_validate(template)


@router.get(
    "/instructor/courses/{course_id}/certificates",
    response_model=list[IssuedCertificateResponse],
)
async def list_course_certificates(
    course: Course = Depends(get_managed_course),
    registry: CertificateRegistry = Depends(get_certificate_registry),
) -> list[IssuedCertificateResponse]:
    """List every certificate issued for a course, revoked ones included."""
    certificates = registry.repository.list_for_course(course.id)
    return [IssuedCertificateResponse.model_validate(cert) for cert in certificates]


@router.post(
    "/instructor/courses/{course_id}/certificates",
    response_model=IssueCertificateResponse,
)
async def issue_course_certificate(
    data: InstructorIssueRequest,
    course: Course = Depends(get_managed_course),
    db: Session = Depends(get_db),
) -> IssueCertificateResponse:
    """Issue a certificate to a student who completed the course."""
    outcome = IssuanceService(db).issue_for_student(data.student_id, course.id)
    return IssueCertificateResponse(
        certificate=IssuedCertificateResponse.model_validate(outcome.certificate),
        already_issued=outcome.already_issued,
    )


@router.post(
    "/instructor/certificates/{credential_id}/revoke",
    response_model=IssuedCertificateResponse,
)
async def revoke_certificate(
    credential_id: str,
    data: RevokeCertificateRequest | None = None,
    current_user: User = Depends(require_instructor),
    registry: CertificateRegistry = Depends(get_certificate_registry),
) -> IssuedCertificateResponse:
    """Revoke a certificate. Revoking an already revoked certificate changes nothing."""
    certificate = registry.repository.get_by_credential_id(credential_id)
    if not certificate:
        raise NotFoundError("Certificate not found")

    if not can_manage_course(current_user, certificate.course):
        raise ForbiddenError("Only the course instructor or an admin can revoke this certificate")

    revoked = registry.revoke_certificate(certificate, reason=data.reason if data else None)
    return IssuedCertificateResponse.model_validate(revoked)
