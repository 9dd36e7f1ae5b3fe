"""Certificate registry: issuance, verification and revocation.

The registry is the only writer of ``issued_certificates``. It receives its
record store explicitly, so every caller decides which session it runs in.
"""

import enum
import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from app.certificates.exceptions import DuplicateCredentialError
from app.certificates.models import CertificateTemplate, IssuedCertificate
from app.certificates.repository import CertificateRepository
from app.core.config import settings
from app.core.constants import (
    CREDENTIAL_ID_ALPHABET,
    CREDENTIAL_ID_LOG_PREFIX_LENGTH,
    CREDENTIAL_ID_MAX_LENGTH,
)
from app.core.datetime_utils import utcnow
from app.core.exceptions import NotFoundError
from app.courses.models import Course

logger = logging.getLogger(__name__)


def generate_credential_id() -> str:
    """Return a fresh credential ID such as ``CERT-2026-7K3QX9M2PA4HD8RB``.

    The random part is drawn with ``secrets`` from a 32-symbol alphabet, so
    the default 16 characters carry 80 bits of entropy.
    """
    random_part = "".join(
        secrets.choice(CREDENTIAL_ID_ALPHABET)
        for _ in range(settings.CERTIFICATE_CREDENTIAL_LENGTH)
    )
    return f"{settings.CERTIFICATE_CREDENTIAL_PREFIX}-{utcnow().year}-{random_part}"


def _log_safe(credential_id: str) -> str:
    return credential_id[:CREDENTIAL_ID_LOG_PREFIX_LENGTH]


@dataclass(frozen=True)
class CompletionFacts:
    """What a certificate attests to, as known at the moment of issuance."""

    student_name: str
    course_name: str
    instructor_name: str | None = None
    course_hours: int | None = None
    course_id: UUID | None = None
    template_id: UUID | None = None
    student_id: UUID | None = None


class VerificationStatus(str, enum.Enum):
    VALID = "valid"
    REVOKED = "revoked"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class CertificateSnapshot:
    credential_id: str
    student_name: str
    course_name: str
    instructor_name: str | None
    course_hours: int | None
    issued_at: datetime

    @classmethod
    def from_certificate(cls, certificate: IssuedCertificate) -> "CertificateSnapshot":
        return cls(
            credential_id=certificate.credential_id,
            student_name=certificate.student_name,
            course_name=certificate.course_name,
            instructor_name=certificate.instructor_name,
            course_hours=certificate.course_hours,
            issued_at=certificate.issued_at,
        )


@dataclass(frozen=True)
class VerificationResult:
    status: VerificationStatus
    snapshot: CertificateSnapshot | None = None
    revoked_at: datetime | None = None
    revoked_reason: str | None = None
    template: CertificateTemplate | None = None
    course: Course | None = None

    @property
    def is_valid(self) -> bool:
        return self.status is VerificationStatus.VALID

    @classmethod
    def not_found(cls) -> "VerificationResult":
        return cls(status=VerificationStatus.NOT_FOUND)


class CertificateRegistry:
    def __init__(
        self,
        repository: CertificateRepository,
        id_generator: Callable[[], str] = generate_credential_id,
        max_attempts: int | None = None,
    ):
        self.repository = repository
        self.id_generator = id_generator
        self.max_attempts = max_attempts or settings.CERTIFICATE_ISSUE_MAX_ATTEMPTS

    def issue(self, facts: CompletionFacts) -> IssuedCertificate:
        """Persist a new certificate for ``facts`` under a fresh credential ID.

        Collisions on the credential ID are retried with a new ID; only when
        every attempt collides does DuplicateCredentialError escape.
        """
        last_error: DuplicateCredentialError | None = None
        for attempt in range(1, self.max_attempts + 1):
            certificate = IssuedCertificate(
                credential_id=self.id_generator(),
                student_name=facts.student_name,
                course_name=facts.course_name,
                instructor_name=facts.instructor_name,
                course_hours=facts.course_hours,
                course_id=facts.course_id,
                template_id=facts.template_id,
                student_id=facts.student_id,
                issued_at=utcnow(),
                is_revoked=False,
            )
            try:
                issued = self.repository.add_unique(certificate)
            except DuplicateCredentialError as e:
                logger.warning("Credential ID collision on attempt %d, regenerating", attempt)
                last_error = e
                continue

            logger.info(
                "Issued certificate %s for course %s", issued.credential_id, facts.course_id
            )
            return issued

        logger.error(
            "Credential ID generator collided %d times in a row; check its entropy",
            self.max_attempts,
        )
        raise DuplicateCredentialError(
            credential_id=last_error.credential_id if last_error else None,
            attempts=self.max_attempts,
        )

    def verify(self, credential_id: str) -> VerificationResult:
        """Look up a credential ID supplied by an anonymous caller.

        Matching is exact. Malformed and unknown IDs both come back as
        NOT_FOUND so callers cannot learn anything about the ID format.
        """
        if not credential_id or len(credential_id) > CREDENTIAL_ID_MAX_LENGTH:
            logger.info("Certificate verification: status=not_found (rejected input)")
            return VerificationResult.not_found()

        certificate = self.repository.get_by_credential_id(credential_id)
        if certificate is None:
            logger.info(
                "Certificate verification: status=not_found id=%s", _log_safe(credential_id)
            )
            return VerificationResult.not_found()

        status = VerificationStatus.REVOKED if certificate.is_revoked else VerificationStatus.VALID
        logger.info(
            "Certificate verification: status=%s id=%s", status.value, _log_safe(credential_id)
        )
        return VerificationResult(
            status=status,
            snapshot=CertificateSnapshot.from_certificate(certificate),
            revoked_at=certificate.revoked_at,
            revoked_reason=certificate.revoked_reason,
            template=certificate.template,
            course=certificate.course,
        )

    def revoke(self, credential_id: str, reason: str | None = None) -> IssuedCertificate:
        """Mark a certificate revoked. Revoking twice is a no-op.

        Raises:
            NotFoundError: No certificate has this credential ID.
        """
        certificate = self.repository.get_by_credential_id(credential_id)
        if certificate is None:
            raise NotFoundError("Certificate not found")
        return self.revoke_certificate(certificate, reason)

    def revoke_certificate(
        self, certificate: IssuedCertificate, reason: str | None = None
    ) -> IssuedCertificate:
        """Revoke an already loaded certificate and refresh it in place."""
        credential_id = certificate.credential_id
        changed = self.repository.revoke_if_active(credential_id, utcnow(), reason)
        self.repository.db.refresh(certificate)

        if changed:
            logger.info("Revoked certificate %s", credential_id)
        else:
            logger.info("Certificate %s was already revoked, nothing to do", credential_id)
        return certificate
