import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, String, Uuid

from app.db.session import Base


class User(Base):
    """
    Platform account as seen by the certificate registry.

    Accounts are created and authenticated by the external auth service;
    this table only mirrors what issuance and authorization need.

    Attributes:
        id: Unique UUID primary key (the JWT "sub" claim)
        email: Unique email address
        name: Display name, copied onto certificates at issuance
        role: "admin", "instructor" or "student"
        is_active: Whether the user account is active
        created_at: Account creation timestamp
        updated_at: Last update timestamp
    """

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)

    role = Column(String(50), nullable=False, default="student")
    is_active = Column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
