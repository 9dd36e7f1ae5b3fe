"""
Database base module - imports all models for Alembic migration detection.

This module imports all SQLAlchemy models to ensure they are registered
with Alembic for automatic migration generation. While the imports appear
unused, they are essential for the migration system to work properly.
"""

from app.auth.models.user import User
from app.certificates.models.issued_certificate import IssuedCertificate
from app.certificates.models.template import CertificateTemplate
from app.courses.models.course import Course
from app.courses.models.enrollment import Enrollment
from app.db.session import Base

# Export all models for Alembic
__all__ = [
    "Base",
    "User",
    "Course",
    "Enrollment",
    "CertificateTemplate",
    "IssuedCertificate",
]
