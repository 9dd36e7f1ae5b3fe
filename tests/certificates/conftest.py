"""
Test fixtures for certificate tests.
"""

from dataclasses import replace

import pytest
from sqlalchemy.orm import Session

from app.certificates.repository import CertificateRepository
from app.certificates.services.registry import CertificateRegistry, CompletionFacts
from tests.utils.factories import (
    create_course_factory,
    create_enrollment_factory,
    create_template_factory,
)


@pytest.fixture
def test_course(db_session: Session, test_instructor):
    """Intro to Algorithms, taught by Grace Hopper."""
    return create_course_factory(
        db_session,
        instructor=test_instructor,
        title="Intro to Algorithms",
        slug="intro-to-algorithms",
        estimated_hours=40,
    )


@pytest.fixture
def test_template(db_session: Session, test_course):
    return create_template_factory(
        db_session,
        test_course,
        primary_color="#112233",
        secondary_color="#445566",
        logo_url="https://cdn.example.com/logo.png",
        signature_text="Grace Hopper, Lead Instructor",
    )


@pytest.fixture
def completed_enrollment(db_session: Session, test_student, test_course):
    return create_enrollment_factory(db_session, test_student, test_course, completed=True)


@pytest.fixture
def repository(db_session: Session):
    return CertificateRepository(db_session)


@pytest.fixture
def registry(repository):
    return CertificateRegistry(repository)


@pytest.fixture
def scenario_facts(test_student, test_course, test_template):
    return CompletionFacts(
        student_name="Ada Lovelace",
        course_name="Intro to Algorithms",
        instructor_name="Grace Hopper",
        course_hours=40,
        course_id=test_course.id,
        template_id=test_template.id,
        student_id=test_student.id,
    )


@pytest.fixture
def issued_certificate(registry, scenario_facts):
    return registry.issue(scenario_facts)


@pytest.fixture
def unlinked_facts(scenario_facts):
    """Scenario facts with no student reference, so any number may be active at once."""
    return replace(scenario_facts, student_id=None)
