"""
Seed script for a demo certificate.

Creates an instructor, a course with a certificate template, a student with a
completed enrollment, and issues a certificate through the registry so the
public verification page has something to show.
Can be run multiple times - skips records that already exist.

Usage:
    uv run python app/scripts/seed_demo_certificate.py
"""

import sys
from datetime import UTC, datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from sqlalchemy.orm import Session

from app.auth.models.user import User
from app.certificates.models import CertificateTemplate
from app.certificates.services.issuance_service import IssuanceService
from app.courses.models import Course, Enrollment
from app.db.session import get_db


def _get_or_create_user(db: Session, email: str, name: str, role: str) -> User:
    user = db.query(User).filter(User.email == email).first()
    if user:
        print(f"⏭️  User {email} already exists. Skipping.")
        return user

    user = User(email=email, name=name, role=role)
    db.add(user)
    db.flush()
    print(f"✅ Created {role}: {name} <{email}>")
    return user


def seed_demo_certificate(db: Session) -> None:
    """Seed demo certificate data into the database."""

    instructor = _get_or_create_user(db, "grace@example.com", "Grace Hopper", "instructor")
    student = _get_or_create_user(db, "ada@example.com", "Ada Lovelace", "student")

    course = db.query(Course).filter(Course.slug == "intro-to-algorithms").first()
    if not course:
        course = Course(
            slug="intro-to-algorithms",
            title="Intro to Algorithms",
            description="Sorting, searching and the analysis of algorithms.",
            estimated_hours=40,
            instructor_id=instructor.id,
            is_published=True,
        )
        db.add(course)
        db.flush()
        print(f"✅ Created course: {course.title} (slug: {course.slug})")

    if not db.query(CertificateTemplate).filter(CertificateTemplate.course_id == course.id).first():
        db.add(CertificateTemplate(course_id=course.id, signature_text=instructor.name))
        db.flush()
        print("✅ Created certificate template")

    enrollment = (
        db.query(Enrollment)
        .filter(Enrollment.user_id == student.id, Enrollment.course_id == course.id)
        .first()
    )
    if not enrollment:
        enrollment = Enrollment(user_id=student.id, course_id=course.id)
        db.add(enrollment)
    if not enrollment.completed_at:
        enrollment.completed_at = datetime.now(UTC)
    db.commit()

    outcome = IssuanceService(db).issue_for_student(student.id, course.id)
    if outcome.already_issued:
        print(f"⏭️  Certificate already issued: {outcome.certificate.credential_id}")
    else:
        print(f"🎓 Issued certificate: {outcome.certificate.credential_id}")


def main() -> None:
    db = next(get_db())
    try:
        seed_demo_certificate(db)
        print("\n🎉 Demo certificate seeding completed successfully!")
    except Exception as e:
        print(f"\n❌ Error seeding demo certificate: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
