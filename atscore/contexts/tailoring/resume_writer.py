"""
Plain-text rendering of a ParsedResume.

The layout is a jinja2 template (templates/resume.txt.jinja) whose headers
and line shapes are ones parse_resume() reads back, so an optimized résumé
can be re-scored from its text.
"""

from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, Template

from atscore.contexts.intake.resume_data_structure import EducationEntry, ExperienceEntry, ParsedResume

TEMPLATES_PATH = Path(__file__).resolve().parent / "templates"
DEFAULT_TEMPLATE = "resume.txt.jinja"


def format_job_header(entry: ExperienceEntry) -> str:
    """
    Example:
        >>> format_job_header(ExperienceEntry("Engineer", "Acme", "2020", "Present"))
        'Engineer | Acme | 2020 - Present'
    """
    parts = [part for part in (entry.title, entry.company) if part]
    if entry.start_date:
        parts.append(f"{entry.start_date} - {entry.end_date}" if entry.end_date else entry.start_date)
    return " | ".join(parts)


def format_education_line(entry: EducationEntry) -> str:
    degree = entry.degree
    if degree and entry.field:
        degree = f"{degree} in {entry.field}"
    parts = [part for part in (degree, entry.institution, entry.graduation_date) if part]
    return ", ".join(parts)


class ResumeWriter:
    """
    Renders ParsedResume records to plain text through a jinja2 template.

    Args:
        templates_path: Directory holding the template. Defaults to the packaged templates/.
        template_name: Template file name
    """

    def __init__(self, templates_path: Optional[Path] = None, template_name: str = DEFAULT_TEMPLATE):
        self.templates_path = templates_path or TEMPLATES_PATH
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.template_name = template_name
        self._template: Optional[Template] = None

    @property
    def template(self) -> Template:
        if self._template is None:
            self._template = self.env.get_template(self.template_name)
        return self._template

    def render(self, resume: ParsedResume) -> str:
        """Render a résumé; the result ends with exactly one newline."""
        contact = resume.contact
        contact_parts = [contact.email, contact.phone, contact.location, contact.linkedin]

        text = self.template.render(
            contact=contact,
            contact_line=" | ".join(part for part in contact_parts if part),
            summary=resume.summary,
            experience=[
                {"header": format_job_header(entry), "bullets": entry.bullets}
                for entry in resume.experience
            ],
            education=[format_education_line(entry) for entry in resume.education],
            skills=resume.skills,
            certifications=resume.certifications,
        )
        return text.strip() + "\n"
