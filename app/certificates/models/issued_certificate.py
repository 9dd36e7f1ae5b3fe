import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text, inspect, text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from app.certificates.exceptions import CertificateImmutableError
from app.core.constants import CREDENTIAL_ID_MAX_LENGTH
from app.db.session import Base

# Facts captured at issuance; they never change afterwards
WRITE_ONCE_FIELDS = (
    "credential_id",
    "student_name",
    "course_name",
    "instructor_name",
    "course_hours",
    "issued_at",
)


class IssuedCertificate(Base):
    """A certificate handed to a student, with a snapshot of what it certifies.

    The student/course/instructor columns are copied at issuance time rather
    than joined from the live tables, so editing or deleting the course or the
    user never changes what an issued certificate says. Rows are never
    deleted; revocation is a flag.
    """

    __tablename__ = "issued_certificates"
    __table_args__ = (
        CheckConstraint(
            "(is_revoked AND revoked_at IS NOT NULL) OR (NOT is_revoked AND revoked_at IS NULL)",
            name="ck_issued_certificates_revocation_state",
        ),
        Index("ix_issued_certificates_student_course", "student_id", "course_id"),
        # At most one active certificate per student and course
        Index(
            "uq_issued_certificates_active_student_course",
            "student_id",
            "course_id",
            unique=True,
            postgresql_where=text("NOT is_revoked"),
            sqlite_where=text("NOT is_revoked"),
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    credential_id: Mapped[str] = mapped_column(
        String(CREDENTIAL_ID_MAX_LENGTH), unique=True, index=True
    )

    template_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("certificate_templates.id", ondelete="SET NULL"), index=True, default=None
    )
    course_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("courses.id", ondelete="SET NULL"), index=True, default=None
    )
    student_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), index=True, default=None
    )

    student_name: Mapped[str] = mapped_column(String(255))
    course_name: Mapped[str] = mapped_column(String(255))
    instructor_name: Mapped[str | None] = mapped_column(String(255), default=None)
    course_hours: Mapped[int | None] = mapped_column(default=None)

    issued_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    is_revoked: Mapped[bool] = mapped_column(default=False)
    revoked_at: Mapped[datetime | None] = mapped_column(default=None)
    revoked_reason: Mapped[str | None] = mapped_column(Text, default=None)

    download_count: Mapped[int] = mapped_column(default=0)
    last_downloaded_at: Mapped[datetime | None] = mapped_column(default=None)

    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    template = relationship("CertificateTemplate", back_populates="issued_certificates")
    course = relationship("Course", back_populates="issued_certificates")
    student = relationship("User")

    @validates(*WRITE_ONCE_FIELDS)
    def _guard_write_once(self, key: str, value: Any) -> Any:
        # Free to set until the row is flushed, frozen afterwards (None included)
        state = inspect(self)
        if (state.persistent or state.detached) and getattr(self, key) != value:
            raise CertificateImmutableError(field=key)
        return value

    def __repr__(self) -> str:
        return f"<IssuedCertificate(id={self.id}, credential_id={self.credential_id}, revoked={self.is_revoked})>"  # noqa: E501
