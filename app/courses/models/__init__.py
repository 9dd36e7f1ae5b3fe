"""Course models."""

from app.courses.models.course import Course
from app.courses.models.enrollment import Enrollment

__all__ = [
    "Course",
    "Enrollment",
]
