from uuid import UUID

from fastapi import Depends
from sqlalchemy.orm import Session

from app.auth.dependencies import require_instructor
from app.auth.models.user import User
from app.certificates.repository import CertificateRepository
from app.certificates.services.registry import CertificateRegistry
from app.core.constants import ROLE_ADMIN
from app.core.exceptions import ForbiddenError, NotFoundError
from app.courses.models import Course
from app.db.session import get_db


def get_certificate_repository(db: Session = Depends(get_db)) -> CertificateRepository:
    return CertificateRepository(db)


def get_certificate_registry(
    repository: CertificateRepository = Depends(get_certificate_repository),
) -> CertificateRegistry:
    return CertificateRegistry(repository)


def can_manage_course(user: User, course: Course | None) -> bool:
    """Admins manage every course; instructors only the ones they teach."""
    if user.role == ROLE_ADMIN:
        return True
    return course is not None and course.instructor_id == user.id


def get_managed_course(
    course_id: UUID,
    current_user: User = Depends(require_instructor),
    db: Session = Depends(get_db),
) -> Course:
    """Resolve ``course_id`` and require the caller to be its instructor or an admin."""
    course = db.query(Course).filter(Course.id == course_id).first()
    if not course:
        raise NotFoundError("Course not found", resource="course")
    if not can_manage_course(current_user, course):
        raise ForbiddenError("You can only manage certificates of your own courses")
    return course
