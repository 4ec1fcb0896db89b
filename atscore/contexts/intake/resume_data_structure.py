"""
Résumé data structures for the Intake context.

ParsedResume is created fresh for every analysis and treated as an
immutable input artifact; the optimizer mutates a deep copy.
"""

from dataclasses import asdict, dataclass, field
from typing import Optional


@dataclass
class ContactInfo:
    """Contact fields; each is None when not found."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None

    def has_reachable_contact(self) -> bool:
        """True if an email or a phone number is present."""
        return bool(self.email or self.phone)


@dataclass
class ExperienceEntry:
    title: str = ""
    company: str = ""
    start_date: str = ""
    end_date: str = ""
    bullets: list[str] = field(default_factory=list)

    def searchable_text(self) -> str:
        """Title and bullets, lower-cased, for keyword presence checks."""
        return " ".join([self.title, *self.bullets]).lower()


@dataclass
class EducationEntry:
    institution: str = ""
    degree: str = ""
    field: str = ""
    graduation_date: str = ""


@dataclass
class ParsedResume:
    """
    Structured résumé.

    Missing sections are empty collections, never errors. Skills and
    certifications are raw tokens (not deduplicated, not canonicalized).
    """

    contact: ContactInfo = field(default_factory=ContactInfo)
    summary: str = ""
    experience: list[ExperienceEntry] = field(default_factory=list)
    education: list[EducationEntry] = field(default_factory=list)
    skills: list[str] = field(default_factory=list)
    certifications: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """JSON-serializable form (parser warnings excluded)."""
        data = asdict(self)
        data.pop("warnings")
        return data
