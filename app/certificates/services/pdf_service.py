import io
from typing import Any

from reportlab.lib.colors import Color, HexColor
from reportlab.lib.pagesizes import A4, landscape, portrait
from reportlab.lib.units import cm
from reportlab.pdfgen import canvas

from app.certificates.models import CertificateTemplate, IssuedCertificate
from app.core.config import settings
from app.core.constants import (
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SECONDARY_COLOR,
    DEFAULT_TEMPLATE_DESCRIPTION,
    DEFAULT_TEMPLATE_SETTINGS,
    DEFAULT_TEMPLATE_SUBTITLE,
    DEFAULT_TEMPLATE_TITLE,
)


def _color(value: str | None, fallback: str) -> Color:
    try:
        return HexColor(value or fallback)
    except ValueError:
        return HexColor(fallback)


class CertificatePdfService:
    @staticmethod
    def verification_url(credential_id: str) -> str:
        return f"{settings.verification_base_url}/{credential_id}"

    @staticmethod
    def render(certificate: IssuedCertificate, template: CertificateTemplate | None) -> bytes:
        """Render a certificate PDF from its issuance snapshot.

        Only the snapshot columns are printed; styling comes from the course
        template when it still exists, otherwise the defaults are used.
        """
        options: dict[str, Any] = dict(DEFAULT_TEMPLATE_SETTINGS)
        if template and template.settings:
            options.update(template.settings)

        primary = _color(template.primary_color if template else None, DEFAULT_PRIMARY_COLOR)
        secondary = _color(
            template.secondary_color if template else None, DEFAULT_SECONDARY_COLOR
        )
        title = (template.title if template else None) or DEFAULT_TEMPLATE_TITLE
        subtitle = (template.subtitle if template else None) or DEFAULT_TEMPLATE_SUBTITLE
        description = (template.description if template else None) or DEFAULT_TEMPLATE_DESCRIPTION

        pagesize = landscape(A4) if options.get("orientation") != "portrait" else portrait(A4)
        page_width, page_height = pagesize

        buffer = io.BytesIO()
        c = canvas.Canvas(buffer, pagesize=pagesize)
        c.setTitle(f"{title} - {certificate.student_name}")

        def centered(text: str, font: str, size: int, y: float) -> float:
            c.setFont(font, size)
            width = c.stringWidth(text, font, size)
            c.drawString((page_width - width) / 2, y, text)
            return width

        border_style = options.get("border_style", "elegant")
        if border_style != "none":
            c.setStrokeColor(primary)
            c.setLineWidth(3)
            c.rect(1 * cm, 1 * cm, page_width - 2 * cm, page_height - 2 * cm, fill=0, stroke=1)
        if border_style in ("elegant", "ornate"):
            c.setStrokeColor(secondary)
            c.setLineWidth(1)
            c.rect(
                1.5 * cm, 1.5 * cm, page_width - 3 * cm, page_height - 3 * cm, fill=0, stroke=1
            )

        c.setFillColor(primary)
        centered(title.upper(), "Helvetica-Bold", 32, page_height - 4 * cm)

        c.setStrokeColor(primary)
        c.setLineWidth(2)
        c.line(6 * cm, page_height - 5 * cm, page_width - 6 * cm, page_height - 5 * cm)

        c.setFillColorRGB(0.3, 0.3, 0.3)
        centered(subtitle, "Helvetica", 18, page_height - 7 * cm)

        c.setFillColor(secondary)
        name_width = centered(certificate.student_name, "Helvetica-Bold", 30, page_height - 9 * cm)
        name_x_start = (page_width - name_width) / 2
        c.setStrokeColor(secondary)
        c.setLineWidth(1)
        c.line(
            name_x_start, page_height - 9.5 * cm, name_x_start + name_width, page_height - 9.5 * cm
        )

        c.setFillColorRGB(0.3, 0.3, 0.3)
        centered(description, "Helvetica", 18, page_height - 11 * cm)

        c.setFillColor(primary)
        centered(certificate.course_name, "Helvetica-Bold", 26, page_height - 13 * cm)

        details: list[str] = []
        if options.get("show_date", True):
            details.append(f"Issued on {certificate.issued_at.strftime('%B %d, %Y')}")
        if options.get("show_course_hours", True) and certificate.course_hours:
            details.append(f"{certificate.course_hours} hours")
        if options.get("show_instructor_name", True) and certificate.instructor_name:
            details.append(f"Instructor: {certificate.instructor_name}")
        if details:
            c.setFillColorRGB(0.45, 0.45, 0.45)
            centered("  |  ".join(details), "Helvetica", 13, page_height - 15 * cm)

        if template and template.signature_text:
            c.setFillColorRGB(0.2, 0.2, 0.2)
            centered(template.signature_text, "Helvetica-Oblique", 14, 4 * cm)

        if options.get("show_credential_id", True):
            c.setFillColorRGB(0.5, 0.5, 0.5)
            centered(f"Credential ID: {certificate.credential_id}", "Courier", 10, 2.5 * cm)
            centered(
                f"Verify at: {CertificatePdfService.verification_url(certificate.credential_id)}",
                "Helvetica",
                9,
                2 * cm,
            )

        c.showPage()
        c.save()

        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
