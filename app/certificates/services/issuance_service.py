import logging
from dataclasses import dataclass
from typing import cast
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.auth.models.user import User
from app.certificates.models import CertificateTemplate, IssuedCertificate
from app.certificates.repository import CertificateRepository
from app.certificates.services.registry import CertificateRegistry, CompletionFacts
from app.core.datetime_utils import utcnow
from app.core.exceptions import NotFoundError, ValidationError
from app.courses.models import Course, Enrollment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuanceOutcome:
    certificate: IssuedCertificate
    already_issued: bool


class IssuanceService:
    """Turns a completed enrollment into an issued certificate.

    Whether a course counts as completed is decided elsewhere; this service
    only trusts ``Enrollment.completed_at``.
    """

    def __init__(self, db: Session, registry: CertificateRegistry | None = None):
        self.db = db
        self.repository = CertificateRepository(db)
        self.registry = registry or CertificateRegistry(self.repository)

    def issue_for_student(self, student_id: UUID, course_id: UUID) -> IssuanceOutcome:
        enrollment = (
            self.db.query(Enrollment)
            .filter(Enrollment.user_id == student_id, Enrollment.course_id == course_id)
            .first()
        )
        if not enrollment:
            raise NotFoundError("Enrollment not found", resource="enrollment")

        if not enrollment.completed_at:
            raise ValidationError("Course not completed yet", field="course_id")

        existing = self.repository.find_active_for_student(student_id, course_id)
        if existing:
            logger.info(
                "Student %s already holds certificate %s", student_id, existing.credential_id
            )
            return IssuanceOutcome(certificate=existing, already_issued=True)

        student = self.db.query(User).filter(User.id == student_id).first()
        course = self.db.query(Course).filter(Course.id == course_id).first()
        if not student or not course:
            raise NotFoundError("User or course not found")

        template = self._active_template(course_id)
        if not template:
            raise NotFoundError(
                "No certificate template found for this course", resource="certificate_template"
            )

        facts = self.build_facts(cast(User, student), cast(Course, course), template)
        try:
            certificate = self.registry.issue(facts)
        except IntegrityError:
            # A concurrent request issued first; the active-certificate index rejected ours
            existing = self.repository.find_active_for_student(student_id, course_id)
            if existing is None:
                raise
            logger.info(
                "Concurrent issuance for student %s resolved to %s",
                student_id,
                existing.credential_id,
            )
            return IssuanceOutcome(certificate=existing, already_issued=True)

        enrollment.certificate_issued_at = utcnow()
        self.db.commit()
        self.db.refresh(certificate)

        return IssuanceOutcome(certificate=certificate, already_issued=False)

    @staticmethod
    def build_facts(
        student: User, course: Course, template: CertificateTemplate | None
    ) -> CompletionFacts:
        """Copy the facts a certificate attests to from the live records."""
        instructor = course.instructor
        return CompletionFacts(
            student_name=student.name,
            course_name=course.title,
            instructor_name=instructor.name if instructor else None,
            course_hours=course.estimated_hours,
            course_id=course.id,
            template_id=template.id if template else None,
            student_id=student.id,
        )

    def _active_template(self, course_id: UUID) -> CertificateTemplate | None:
        result = (
            self.db.query(CertificateTemplate)
            .filter(
                CertificateTemplate.course_id == course_id,
                CertificateTemplate.is_active == True,  # noqa: E712
            )
            .first()
        )
        return cast(CertificateTemplate | None, result)
