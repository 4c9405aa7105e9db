"""
Portfolio Export Service - PDF and HTML documents from a fetched aggregate

Both formats render the same flattened view:
- display name (name, else title, else "Portfolio") and bio
- contact block, "N/A" for empty email/phone/location
- about text, comma-joined skill names, numbered project list
"""

import html
import io
import re
from dataclasses import dataclass
from typing import Any, List, Optional
from xml.sax.saxutils import escape as xml_escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer

from devlink.core.exceptions import InvalidExportFormatError, ExportError
from devlink.core.logging_config import logger
from devlink.schemas.portfolio import PortfolioDetailResponse


EXPORT_FORMATS = ("pdf", "html")

MEDIA_TYPES = {
    "pdf": "application/pdf",
    "html": "text/html",
}

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9 _-]+")


@dataclass
class ExportedDocument:
    content: bytes
    media_type: str
    filename: str

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


@dataclass
class PortfolioView:
    """Flattened fields both renderers need"""
    display_name: str
    bio: Optional[str]
    email: str
    phone: str
    location: str
    about: Optional[str]
    skills: List[str]
    projects: List[tuple]


def export_filename(name: Optional[str], fmt: str) -> str:
    """'<name>.<ext>' with anything outside letters, digits, space, '-' and '_' dropped"""
    stem = _UNSAFE_FILENAME_CHARS.sub("", name or "").strip()
    return f"{stem or 'portfolio'}.{fmt}"


def build_view(portfolio: Any) -> PortfolioView:
    p = PortfolioDetailResponse.model_validate(portfolio)
    return PortfolioView(
        display_name=p.name or p.title or "Portfolio",
        bio=p.bio or None,
        email=p.email or "N/A",
        phone=p.phone or "N/A",
        location=p.location or "N/A",
        about=p.about.content if p.about and p.about.content else None,
        skills=[skill.name for skill in p.skills],
        projects=[(project.title, project.description or "") for project in p.projects],
    )


class PortfolioExporter:
    """Render a portfolio aggregate as a downloadable document"""

    def export(self, portfolio: Any, fmt: Optional[str]) -> ExportedDocument:
        """
        Args:
            portfolio: Aggregate with sections loaded (ORM object, model or dict)
            fmt: "pdf" or "html"

        Raises:
            InvalidExportFormatError: fmt is anything else
            ExportError: rendering failed
        """
        if fmt not in EXPORT_FORMATS:
            raise InvalidExportFormatError(fmt, EXPORT_FORMATS)

        view = build_view(portfolio)
        name = portfolio.get("name") if isinstance(portfolio, dict) else getattr(portfolio, "name", None)

        try:
            content = self.render_pdf(view) if fmt == "pdf" else self.render_html(view).encode("utf-8")
        except Exception as e:
            logger.log_error_with_context(e, "portfolio_export", export_format=fmt)
            raise ExportError(fmt) from e

        return ExportedDocument(
            content=content,
            media_type=MEDIA_TYPES[fmt],
            filename=export_filename(name, fmt),
        )

    def render_pdf(self, view: PortfolioView) -> bytes:
        buffer = io.BytesIO()

        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            title=view.display_name,
            rightMargin=2*cm,
            leftMargin=2*cm,
            topMargin=2*cm,
            bottomMargin=2*cm
        )

        styles = getSampleStyleSheet()

        title_style = ParagraphStyle(
            'PortfolioTitle',
            parent=styles['Heading1'],
            fontSize=24,
            textColor=colors.HexColor('#333333'),
            spaceAfter=12
        )
        bio_style = ParagraphStyle(
            'PortfolioBio',
            parent=styles['Normal'],
            fontSize=14,
            leading=18,
            textColor=colors.HexColor('#666666'),
            spaceAfter=12
        )
        heading_style = ParagraphStyle(
            'SectionHeading',
            parent=styles['Heading2'],
            fontSize=16,
            textColor=colors.HexColor('#555555'),
            spaceBefore=12,
            spaceAfter=6
        )
        project_style = ParagraphStyle(
            'ProjectTitle',
            parent=styles['Heading3'],
            fontSize=12,
            spaceAfter=2
        )
        body_style = ParagraphStyle(
            'Body',
            parent=styles['Normal'],
            fontSize=10,
            leading=14
        )
        indented_style = ParagraphStyle('Indented', parent=body_style, leftIndent=12, spaceAfter=6)

        # Paragraph text is reportlab markup; user input must be escaped
        content = [Paragraph(xml_escape(view.display_name), title_style)]
        if view.bio:
            content.append(Paragraph(xml_escape(view.bio), bio_style))

        content.append(Spacer(1, 10))
        content.append(Paragraph(f"Email: {xml_escape(view.email)}", body_style))
        content.append(Paragraph(f"Phone: {xml_escape(view.phone)}", body_style))
        content.append(Paragraph(f"Location: {xml_escape(view.location)}", body_style))

        if view.about:
            content.append(Paragraph("About Me", heading_style))
            content.append(Paragraph(xml_escape(view.about), body_style))

        if view.skills:
            content.append(Paragraph("Skills", heading_style))
            content.append(Paragraph(xml_escape(", ".join(view.skills)), body_style))

        if view.projects:
            content.append(Paragraph("Projects", heading_style))
            for index, (title, description) in enumerate(view.projects, start=1):
                content.append(Paragraph(f"{index}. {xml_escape(title)}", project_style))
                content.append(Paragraph(xml_escape(description), indented_style))

        doc.build(content)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes

    def render_html(self, view: PortfolioView) -> str:
        e = html.escape
        name = e(view.display_name)

        parts = [
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            '<meta charset="utf-8">',
            f"<title>{name}</title>",
            "<style>",
            "body { font-family: Arial, sans-serif; margin: 40px; line-height: 1.6; }",
            "h1 { color: #333; border-bottom: 2px solid #007bff; padding-bottom: 10px; }",
            "h2 { color: #555; margin-top: 30px; }",
            ".section { margin: 20px 0; }",
            ".contact-info { background: #f8f9fa; padding: 15px; border-radius: 5px; }",
            ".skills { display: flex; flex-wrap: wrap; gap: 10px; }",
            ".skill { background: #007bff; color: white; padding: 5px 10px; border-radius: 15px; font-size: 14px; }",
            ".project { border-left: 3px solid #007bff; padding-left: 15px; margin: 15px 0; }",
            "</style>",
            "</head>",
            "<body>",
            f"<h1>{name}</h1>",
        ]

        if view.bio:
            parts.append(f'<p class="bio">{e(view.bio)}</p>')

        parts += [
            '<div class="section contact-info">',
            "<h2>Contact Information</h2>",
            f"<p><strong>Email:</strong> {e(view.email)}</p>",
            f"<p><strong>Phone:</strong> {e(view.phone)}</p>",
            f"<p><strong>Location:</strong> {e(view.location)}</p>",
            "</div>",
        ]

        if view.about:
            parts += ['<div class="section">', "<h2>About Me</h2>", f"<p>{e(view.about)}</p>", "</div>"]

        if view.skills:
            chips = "".join(
                f'<span class="skill">{e(skill)}</span>' for skill in view.skills
            )
            parts += ['<div class="section">', "<h2>Skills</h2>", f'<div class="skills">{chips}</div>', "</div>"]

        if view.projects:
            parts += ['<div class="section">', "<h2>Projects</h2>"]
            for index, (title, description) in enumerate(view.projects, start=1):
                parts += [
                    '<div class="project">',
                    f"<h3>{index}. {e(title)}</h3>",
                    f"<p>{e(description)}</p>",
                    "</div>",
                ]
            parts.append("</div>")

        parts += ["</body>", "</html>"]
        return "\n".join(parts)


portfolio_exporter = PortfolioExporter()
