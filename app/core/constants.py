"""Application-wide constants.

This module centralizes magic numbers and configuration constants
that are used across multiple modules. For environment-specific
configuration, see config.py.
"""

# =============================================================================
# Credential IDs
# =============================================================================

# Uppercase alphanumerics without the look-alikes 0/O and 1/I (32 symbols)
CREDENTIAL_ID_ALPHABET: str = "23456789ABCDEFGHJKLMNPQRSTUVWXYZ"

# Column width of issued_certificates.credential_id
CREDENTIAL_ID_MAX_LENGTH: int = 50

# Characters of a credential ID kept when it is written to logs
CREDENTIAL_ID_LOG_PREFIX_LENGTH: int = 12

# =============================================================================
# Certificate Templates
# =============================================================================

DEFAULT_TEMPLATE_TITLE: str = "Certificate of Completion"
DEFAULT_TEMPLATE_SUBTITLE: str = "This is to certify that"
DEFAULT_TEMPLATE_DESCRIPTION: str = "has successfully completed the course"
DEFAULT_PRIMARY_COLOR: str = "#4f0099"
DEFAULT_SECONDARY_COLOR: str = "#22ad5c"

HEX_COLOR_PATTERN: str = r"^#[0-9A-Fa-f]{6}$"

DEFAULT_TEMPLATE_SETTINGS: dict[str, object] = {
    "layout": "classic",
    "orientation": "landscape",
    "show_date": True,
    "show_course_hours": True,
    "show_instructor_name": True,
    "show_credential_id": True,
    "border_style": "elegant",
}

# =============================================================================
# Roles
# =============================================================================

ROLE_ADMIN: str = "admin"
ROLE_INSTRUCTOR: str = "instructor"
ROLE_STUDENT: str = "student"
