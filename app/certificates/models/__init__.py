"""Certificate models."""

from app.certificates.models.issued_certificate import IssuedCertificate
from app.certificates.models.template import CertificateTemplate

__all__ = [
    "CertificateTemplate",
    "IssuedCertificate",
]
