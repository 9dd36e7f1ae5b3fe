import uuid
from datetime import datetime

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base


class Course(Base):
    __tablename__ = "courses"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    slug: Mapped[str] = mapped_column(unique=True, index=True)
    title: Mapped[str] = mapped_column()
    description: Mapped[str] = mapped_column(default="")
    thumbnail_url: Mapped[str | None] = mapped_column(default=None)
    estimated_hours: Mapped[int | None] = mapped_column(default=None)
    instructor_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), index=True, default=None
    )
    is_published: Mapped[bool] = mapped_column(default=False)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    instructor = relationship("User", foreign_keys=[instructor_id])
    enrollments = relationship("Enrollment", back_populates="course", cascade="all, delete-orphan")
    certificate_template = relationship(
        "CertificateTemplate",
        back_populates="course",
        uselist=False,
        cascade="all, delete-orphan",
    )
    # Issued certificates outlive the course; their course_id is nulled instead
    issued_certificates = relationship(
        "IssuedCertificate", back_populates="course", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, slug={self.slug}, title={self.title})>"
