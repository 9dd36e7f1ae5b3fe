import uuid
from datetime import UTC, datetime

from faker import Faker
from sqlalchemy.orm import Session

from app.auth.models.user import User
from app.certificates.models import CertificateTemplate
from app.courses.models import Course, Enrollment

fake = Faker()


def create_user_factory(
    db_session: Session,
    email: str | None = None,
    name: str | None = None,
    role: str = "student",
    is_active: bool = True,
) -> User:
    """
    Factory function to create test users.

    Args:
        db_session: Database session
        email: User email (generates random if None)
        name: User name (generates random if None)
        role: User role ("student", "instructor" or "admin")
        is_active: Whether user is active

    Returns:
        Created User instance
    """
    user = User(
        id=uuid.uuid4(),
        email=email or fake.unique.email(),
        name=name or fake.name(),
        role=role,
        is_active=is_active,
    )

    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)

    return user


def create_course_factory(
    db_session: Session,
    instructor: User | None = None,
    title: str | None = None,
    slug: str | None = None,
    estimated_hours: int | None = 10,
) -> Course:
    title = title or fake.catch_phrase()
    course = Course(
        slug=slug or f"{fake.slug()}-{uuid.uuid4().hex[:6]}",
        title=title,
        description=fake.sentence(),
        estimated_hours=estimated_hours,
        instructor_id=instructor.id if instructor else None,
        is_published=True,
    )
    db_session.add(course)
    db_session.commit()
    db_session.refresh(course)
    return course


def create_template_factory(
    db_session: Session, course: Course, **overrides: object
) -> CertificateTemplate:
    template = CertificateTemplate(course_id=course.id, **overrides)
    db_session.add(template)
    db_session.commit()
    db_session.refresh(template)
    return template


def create_enrollment_factory(
    db_session: Session, user: User, course: Course, completed: bool = True
) -> Enrollment:
    enrollment = Enrollment(
        user_id=user.id,
        course_id=course.id,
        completed_at=datetime.now(UTC) if completed else None,
    )
    db_session.add(enrollment)
    db_session.commit()
    db_session.refresh(enrollment)
    return enrollment
