import logging
from typing import cast

from sqlalchemy.orm import Session

from app.auth.models.user import User
from app.certificates.models import CertificateTemplate
from app.certificates.schemas.template import (
    CertificateTemplateCreate,
    CertificateTemplateUpdate,
)
from app.core.exceptions import ConflictError, NotFoundError
from app.courses.models import Course

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = {"title", "primary_color", "secondary_color", "is_active"}


class TemplateService:
    def __init__(self, db: Session):
        self.db = db

    def get_for_course(self, course: Course) -> CertificateTemplate | None:
        result = (
            self.db.query(CertificateTemplate)
            .filter(CertificateTemplate.course_id == course.id)
            .first()
        )
        return cast(CertificateTemplate | None, result)

    def create(
        self, course: Course, data: CertificateTemplateCreate, author: User
    ) -> CertificateTemplate:
        if self.get_for_course(course):
            raise ConflictError(
                "Certificate template already exists. Use PATCH to update.",
                resource="certificate_template",
            )

        values = data.model_dump()
        values["settings"] = data.settings.model_dump(exclude_none=True)
        if not values.get("signature_text"):
            values["signature_text"] = author.name

        template = CertificateTemplate(course_id=course.id, **values)
        self.db.add(template)
        self.db.commit()
        self.db.refresh(template)

        logger.info("Created certificate template %s for course %s", template.id, course.id)
        return template

    def update(self, course: Course, data: CertificateTemplateUpdate) -> CertificateTemplate:
        template = self.get_for_course(course)
        if not template:
            raise NotFoundError("Certificate template not found", resource="certificate_template")

        updates = data.model_dump(exclude_unset=True)
        if "settings" in updates:
            updates["settings"] = (
                data.settings.model_dump(exclude_none=True) if data.settings else {}
            )
        for field, value in updates.items():
            if value is None and field in _REQUIRED_FIELDS:
                continue
            setattr(template, field, value)

        self.db.commit()
        self.db.refresh(template)
        return template
