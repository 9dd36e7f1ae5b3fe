"""
Unit tests for CertificateRegistry.
"""

import re

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.certificates.exceptions import CertificateImmutableError, DuplicateCredentialError
from app.certificates.models import IssuedCertificate
from app.certificates.services.registry import (
    CertificateRegistry,
    CompletionFacts,
    VerificationStatus,
    generate_credential_id,
)
from app.core.exceptions import NotFoundError
from tests.utils.helpers import sequence_generator


class TestGenerateCredentialId:
    def test_format_is_url_safe(self):
        credential_id = generate_credential_id()

        assert re.fullmatch(r"CERT-\d{4}-[2-9A-HJ-NP-Z]{16}", credential_id)

    def test_ids_do_not_repeat(self):
        ids = {generate_credential_id() for _ in range(2000)}

        assert len(ids) == 2000


class TestIssue:
    def test_issue_persists_snapshot(self, registry, scenario_facts):
        certificate = registry.issue(scenario_facts)

        assert certificate.id is not None
        assert certificate.credential_id.startswith("CERT-")
        assert certificate.student_name == "Ada Lovelace"
        assert certificate.course_name == "Intro to Algorithms"
        assert certificate.instructor_name == "Grace Hopper"
        assert certificate.course_hours == 40
        assert certificate.is_revoked is False
        assert certificate.revoked_at is None
        assert certificate.issued_at is not None

    def test_repeated_issuance_never_repeats_credential_id(
        self, registry, unlinked_facts, db_session: Session
    ):
        issued = [registry.issue(unlinked_facts).credential_id for _ in range(50)]

        assert len(set(issued)) == 50
        assert db_session.query(IssuedCertificate).count() == 50

    def test_collision_is_retried_with_new_id(self, repository, unlinked_facts):
        CertificateRegistry(repository, id_generator=lambda: "CERT-2026-TAKEN").issue(
            unlinked_facts
        )
        registry = CertificateRegistry(
            repository,
            id_generator=sequence_generator(["CERT-2026-TAKEN", "CERT-2026-TAKEN", "CERT-2026-FRESH"]),
        )

        certificate = registry.issue(unlinked_facts)

        assert certificate.credential_id == "CERT-2026-FRESH"

    def test_existing_record_untouched_by_collision(self, repository, unlinked_facts):
        original = CertificateRegistry(repository, id_generator=lambda: "CERT-2026-TAKEN").issue(
            unlinked_facts
        )
        original_id = original.id
        registry = CertificateRegistry(
            repository, id_generator=sequence_generator(["CERT-2026-TAKEN", "CERT-2026-OTHER"])
        )

        registry.issue(unlinked_facts)

        stored = repository.get_by_credential_id("CERT-2026-TAKEN")
        assert stored.id == original_id
        assert stored.student_name == "Ada Lovelace"

    def test_exhausted_attempts_raise(self, repository, unlinked_facts, db_session: Session):
        CertificateRegistry(repository, id_generator=lambda: "CERT-2026-STUCK").issue(
            unlinked_facts
        )
        registry = CertificateRegistry(
            repository, id_generator=lambda: "CERT-2026-STUCK", max_attempts=3
        )

        with pytest.raises(DuplicateCredentialError) as exc:
            registry.issue(unlinked_facts)

        assert exc.value.details["attempts"] == 3
        assert db_session.query(IssuedCertificate).count() == 1

    def test_second_active_certificate_for_student_is_rejected(
        self, registry, scenario_facts, db_session: Session
    ):
        registry.issue(scenario_facts)

        with pytest.raises(IntegrityError):
            registry.issue(scenario_facts)

        assert db_session.query(IssuedCertificate).count() == 1

    def test_revoked_certificate_frees_the_slot(self, registry, scenario_facts):
        first = registry.issue(scenario_facts)
        registry.revoke(first.credential_id)

        second = registry.issue(scenario_facts)

        assert second.credential_id != first.credential_id


class TestVerify:
    def test_scenario(self, repository, scenario_facts):
        registry = CertificateRegistry(repository, id_generator=lambda: "CRED-7f3a9c")
        registry.issue(scenario_facts)

        result = registry.verify("CRED-7f3a9c")
        assert result.status is VerificationStatus.VALID
        assert result.snapshot.student_name == "Ada Lovelace"
        assert result.snapshot.course_name == "Intro to Algorithms"
        assert result.snapshot.instructor_name == "Grace Hopper"
        assert result.snapshot.course_hours == 40

        registry.revoke("CRED-7f3a9c")
        result = registry.verify("CRED-7f3a9c")
        assert result.status is VerificationStatus.REVOKED
        assert result.revoked_at is not None

        assert registry.verify("CRED-does-not-exist").status is VerificationStatus.NOT_FOUND

    def test_valid_result_includes_styling(self, registry, issued_certificate, test_template):
        result = registry.verify(issued_certificate.credential_id)

        assert result.is_valid
        assert result.template.primary_color == "#112233"
        assert result.course.slug == "intro-to-algorithms"

    @pytest.mark.parametrize(
        "transform",
        [
            str.lower,
            lambda cid: cid[:-1],
            lambda cid: cid + "X",
            lambda cid: f" {cid}",
            lambda cid: cid.replace("CERT-", ""),
        ],
    )
    def test_similar_ids_do_not_match(self, registry, issued_certificate, transform):
        result = registry.verify(transform(issued_certificate.credential_id))

        assert result.status is VerificationStatus.NOT_FOUND
        assert result.snapshot is None

    @pytest.mark.parametrize("credential_id", ["", "%", "../../etc/passwd", "A" * 5000])
    def test_malformed_ids_are_not_found(self, registry, credential_id):
        result = registry.verify(credential_id)

        assert result.status is VerificationStatus.NOT_FOUND

    def test_snapshot_survives_course_and_user_changes(
        self, registry, issued_certificate, test_course, test_student, db_session: Session
    ):
        test_course.title = "Algorithms 101 (2nd edition)"
        test_course.estimated_hours = 12
        test_student.name = "Augusta Ada King"
        db_session.commit()

        result = registry.verify(issued_certificate.credential_id)

        assert result.snapshot.course_name == "Intro to Algorithms"
        assert result.snapshot.course_hours == 40
        assert result.snapshot.student_name == "Ada Lovelace"

    def test_snapshot_survives_course_deletion(
        self, registry, issued_certificate, test_course, db_session: Session
    ):
        credential_id = issued_certificate.credential_id
        db_session.delete(test_course)
        db_session.commit()

        result = registry.verify(credential_id)

        assert result.status is VerificationStatus.VALID
        assert result.snapshot.course_name == "Intro to Algorithms"
        assert result.course is None
        assert result.template is None


class TestRevoke:
    def test_revoke_sets_flag_and_timestamp(self, registry, issued_certificate):
        revoked = registry.revoke(issued_certificate.credential_id, reason="Issued by mistake")

        assert revoked.is_revoked is True
        assert revoked.revoked_at is not None
        assert revoked.revoked_reason == "Issued by mistake"

    def test_revoke_is_idempotent(self, registry, issued_certificate):
        first = registry.revoke(issued_certificate.credential_id, reason="Plagiarism")
        first_revoked_at = first.revoked_at

        second = registry.revoke(issued_certificate.credential_id, reason="Different reason")

        assert second.is_revoked is True
        assert second.revoked_at == first_revoked_at
        assert second.revoked_reason == "Plagiarism"

    def test_revoked_certificate_keeps_snapshot(self, registry, issued_certificate):
        registry.revoke(issued_certificate.credential_id)

        result = registry.verify(issued_certificate.credential_id)

        assert result.status is VerificationStatus.REVOKED
        assert result.snapshot.student_name == "Ada Lovelace"

    def test_revoke_unknown_raises_not_found(self, registry):
        with pytest.raises(NotFoundError):
            registry.revoke("CERT-2026-NOPE")

    def test_revoke_loaded_certificate_skips_lookup(
        self, registry, issued_certificate, monkeypatch
    ):
        def no_lookup(credential_id):
            raise AssertionError("certificate looked up again")

        monkeypatch.setattr(registry.repository, "get_by_credential_id", no_lookup)

        revoked = registry.revoke_certificate(issued_certificate, reason="Duplicate account")

        assert revoked is issued_certificate
        assert revoked.is_revoked is True
        assert revoked.revoked_reason == "Duplicate account"


class TestWriteOnceFields:
    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("student_name", "Someone Else"),
            ("course_name", "Another Course"),
            ("instructor_name", "Another Instructor"),
            ("course_hours", 1),
            ("credential_id", "CERT-2026-NEWID"),
        ],
    )
    def test_snapshot_fields_cannot_change(self, issued_certificate, field, value):
        with pytest.raises(CertificateImmutableError) as exc:
            setattr(issued_certificate, field, value)

        assert exc.value.details["field"] == field

    def test_assigning_same_value_is_allowed(self, issued_certificate):
        issued_certificate.student_name = "Ada Lovelace"

        assert issued_certificate.student_name == "Ada Lovelace"

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("instructor_name", "Forged Instructor"),
            ("course_hours", 999),
        ],
    )
    def test_fields_issued_empty_stay_empty(self, registry, db_session: Session, field, value):
        certificate = registry.issue(
            CompletionFacts(student_name="Ada Lovelace", course_name="Intro to Algorithms")
        )
        assert getattr(certificate, field) is None

        with pytest.raises(CertificateImmutableError) as exc:
            setattr(certificate, field, value)

        assert exc.value.details["field"] == field
        db_session.expire_all()
        assert getattr(registry.repository.get_by_id(certificate.id), field) is None

    def test_fields_are_free_before_the_row_is_stored(self):
        certificate = IssuedCertificate(student_name="Ada Lovelace", course_name="Draft")

        certificate.course_name = "Intro to Algorithms"
        certificate.instructor_name = "Grace Hopper"

        assert certificate.course_name == "Intro to Algorithms"
        assert certificate.instructor_name == "Grace Hopper"
