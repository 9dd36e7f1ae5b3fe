"""Record store for issued certificates."""

import logging
from datetime import datetime
from typing import cast
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.certificates.exceptions import DuplicateCredentialError
from app.certificates.models import IssuedCertificate
from app.core.repository import BaseRepository

logger = logging.getLogger(__name__)


class CertificateRepository(BaseRepository[IssuedCertificate]):
    def __init__(self, db: Session):
        super().__init__(db, IssuedCertificate)

    def add_unique(self, certificate: IssuedCertificate) -> IssuedCertificate:
        """Insert a new certificate, relying on the unique index for credential IDs.

        Raises:
            DuplicateCredentialError: The credential ID is already taken.
        """
        credential_id = certificate.credential_id
        try:
            return self.add(certificate)
        except IntegrityError:
            self.db.rollback()
            if self.get_by_credential_id(credential_id) is not None:
                raise DuplicateCredentialError(credential_id) from None
            raise

    def get_by_credential_id(self, credential_id: str) -> IssuedCertificate | None:
        result = (
            self.db.query(IssuedCertificate)
            .options(
                joinedload(IssuedCertificate.course),
                joinedload(IssuedCertificate.template),
            )
            .filter(IssuedCertificate.credential_id == credential_id)
            .first()
        )
        return cast(IssuedCertificate | None, result)

    def find_active_for_student(
        self, student_id: UUID, course_id: UUID
    ) -> IssuedCertificate | None:
        result = (
            self.db.query(IssuedCertificate)
            .filter(
                IssuedCertificate.student_id == student_id,
                IssuedCertificate.course_id == course_id,
                IssuedCertificate.is_revoked == False,  # noqa: E712
            )
            .order_by(IssuedCertificate.issued_at.desc())
            .first()
        )
        return cast(IssuedCertificate | None, result)

    def list_for_student(
        self, student_id: UUID, include_revoked: bool = False
    ) -> list[IssuedCertificate]:
        query = (
            self.db.query(IssuedCertificate)
            .options(joinedload(IssuedCertificate.course))
            .filter(IssuedCertificate.student_id == student_id)
        )
        if not include_revoked:
            query = query.filter(IssuedCertificate.is_revoked == False)  # noqa: E712
        return cast(
            list[IssuedCertificate], query.order_by(IssuedCertificate.issued_at.desc()).all()
        )

    def list_for_course(self, course_id: UUID) -> list[IssuedCertificate]:
        result = (
            self.db.query(IssuedCertificate)
            .filter(IssuedCertificate.course_id == course_id)
            .order_by(IssuedCertificate.issued_at.desc())
            .all()
        )
        return cast(list[IssuedCertificate], result)

    def revoke_if_active(
        self, credential_id: str, revoked_at: datetime, reason: str | None = None
    ) -> int:
        """Flip an active certificate to revoked in a single conditional UPDATE.

        Returns:
            Number of rows changed: 1 if this call revoked it, 0 otherwise.
        """
        stmt = (
            update(IssuedCertificate)
            .where(
                IssuedCertificate.credential_id == credential_id,
                IssuedCertificate.is_revoked == False,  # noqa: E712
            )
            .values(is_revoked=True, revoked_at=revoked_at, revoked_reason=reason)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        self.db.commit()
        return int(result.rowcount or 0)

    def record_download(self, certificate_id: UUID, downloaded_at: datetime) -> None:
        stmt = (
            update(IssuedCertificate)
            .where(IssuedCertificate.id == certificate_id)
            .values(
                download_count=IssuedCertificate.download_count + 1,
                last_downloaded_at=downloaded_at,
            )
            .execution_options(synchronize_session=False)
        )
        self.db.execute(stmt)
        self.db.commit()
