import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.constants import (
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SECONDARY_COLOR,
    DEFAULT_TEMPLATE_DESCRIPTION,
    DEFAULT_TEMPLATE_SETTINGS,
    DEFAULT_TEMPLATE_SUBTITLE,
    DEFAULT_TEMPLATE_TITLE,
)
from app.db.session import Base


class CertificateTemplate(Base):
    """Visual styling an instructor configures for a course's certificates."""

    __tablename__ = "certificate_templates"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    course_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), unique=True, index=True
    )

    title: Mapped[str] = mapped_column(String(255), default=DEFAULT_TEMPLATE_TITLE)
    subtitle: Mapped[str | None] = mapped_column(String(255), default=DEFAULT_TEMPLATE_SUBTITLE)
    description: Mapped[str | None] = mapped_column(Text, default=DEFAULT_TEMPLATE_DESCRIPTION)

    signature_text: Mapped[str | None] = mapped_column(String(255), default=None)
    signature_image: Mapped[str | None] = mapped_column(Text, default=None)

    logo_url: Mapped[str | None] = mapped_column(Text, default=None)
    background_url: Mapped[str | None] = mapped_column(Text, default=None)
    primary_color: Mapped[str] = mapped_column(String(20), default=DEFAULT_PRIMARY_COLOR)
    secondary_color: Mapped[str] = mapped_column(String(20), default=DEFAULT_SECONDARY_COLOR)

    settings: Mapped[dict[str, Any]] = mapped_column(
        JSON, default=lambda: dict(DEFAULT_TEMPLATE_SETTINGS)
    )

    is_active: Mapped[bool] = mapped_column(default=True)
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC)
    )

    course = relationship("Course", back_populates="certificate_template")
    issued_certificates = relationship(
        "IssuedCertificate", back_populates="template", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<CertificateTemplate(id={self.id}, course_id={self.course_id})>"
