"""Errors raised by the certificate registry."""

from fastapi import status

from app.core.exceptions import AppError, ConflictError


class DuplicateCredentialError(AppError):
    """A generated credential ID collided with an existing one.

    The registry regenerates on collision; this only reaches a caller once
    every attempt collided, which points at a broken ID generator.
    """

    def __init__(self, credential_id: str | None = None, attempts: int | None = None):
        details: dict[str, object] = {}
        if attempts is not None:
            details["attempts"] = attempts
        super().__init__(
            message="Could not allocate a unique credential ID",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="CREDENTIAL_COLLISION",
            details=details,
        )
        self.credential_id = credential_id


class CertificateImmutableError(ConflictError):
    """Attempt to change a fact that was fixed when the certificate was issued."""

    def __init__(self, field: str):
        super().__init__(
            message=f"Certificate field '{field}' cannot be changed after issuance",
            resource="certificate",
        )
        self.error_code = "CERTIFICATE_IMMUTABLE"
        self.details["field"] = field
