from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.certificates.services.registry import VerificationStatus
from app.core.datetime_utils import UTCDatetime


class IssuedCertificateResponse(BaseModel):
    id: UUID
    credential_id: str
    course_id: UUID | None = None
    student_id: UUID | None = None
    student_name: str
    course_name: str
    instructor_name: str | None = None
    course_hours: int | None = None
    issued_at: UTCDatetime
    is_revoked: bool
    revoked_at: UTCDatetime | None = None
    revoked_reason: str | None = None
    download_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class IssueCertificateResponse(BaseModel):
    certificate: IssuedCertificateResponse
    already_issued: bool


class InstructorIssueRequest(BaseModel):
    student_id: UUID


class RevokeCertificateRequest(BaseModel):
    reason: str | None = Field(default=None, max_length=1000)


class CertificateSnapshotResponse(BaseModel):
    credential_id: str
    student_name: str
    course_name: str
    instructor_name: str | None = None
    course_hours: int | None = None
    issued_at: UTCDatetime

    model_config = ConfigDict(from_attributes=True)


class TemplateStylingResponse(BaseModel):
    title: str
    primary_color: str
    secondary_color: str
    logo_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CourseReferenceResponse(BaseModel):
    slug: str
    thumbnail_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CertificateVerifyResponse(BaseModel):
    valid: bool
    status: VerificationStatus
    message: str
    certificate: CertificateSnapshotResponse
    is_revoked: bool
    revoked_at: UTCDatetime | None = None
    revoked_reason: str | None = None
    template: TemplateStylingResponse | None = None
    course: CourseReferenceResponse | None = None
