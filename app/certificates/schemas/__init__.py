"""Certificate schemas."""

from app.certificates.schemas.certificate import (
    CertificateSnapshotResponse,
    CertificateVerifyResponse,
    CourseReferenceResponse,
    InstructorIssueRequest,
    IssueCertificateResponse,
    IssuedCertificateResponse,
    RevokeCertificateRequest,
    TemplateStylingResponse,
)
from app.certificates.schemas.template import (
    CertificateTemplateCreate,
    CertificateTemplateResponse,
    CertificateTemplateUpdate,
    TemplateSettings,
)

__all__ = [
    "CertificateSnapshotResponse",
    "CertificateTemplateCreate",
    "CertificateTemplateResponse",
    "CertificateTemplateUpdate",
    "CertificateVerifyResponse",
    "CourseReferenceResponse",
    "InstructorIssueRequest",
    "IssueCertificateResponse",
    "IssuedCertificateResponse",
    "RevokeCertificateRequest",
    "TemplateSettings",
    "TemplateStylingResponse",
]
