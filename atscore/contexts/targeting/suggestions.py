"""
Improvement suggestions derived from an analysis.

Rules are evaluated in a fixed order, then stably sorted by priority
(high > medium > low) and truncated to max_suggestions.
"""

import re
from typing import Optional

from atscore.contexts.intake.job_data_structure import ParsedJobDescription
from atscore.contexts.intake.resume_data_structure import ParsedResume
from atscore.contexts.targeting.results import KeywordMatchResult, ScoreBreakdown, Suggestion
from atscore.utils.config import get_config

PRIORITY_RANK = {"high": 0, "medium": 1, "low": 2}

QUANTIFIED = re.compile(r"\d+%|\d+\+|\$\d+")


def generate_suggestions(
    resume: ParsedResume,
    resume_text: str,
    job: ParsedJobDescription,
    match: KeywordMatchResult,
    breakdown: ScoreBreakdown,
    config: Optional[dict] = None,
) -> list[Suggestion]:
    """
    Build the prioritized suggestion list for one résumé/job pair.

    Args:
        resume: Parsed résumé
        resume_text: Raw résumé text (scanned for weak phrases and numbers)
        job: Parsed job posting
        match: Keyword match result
        breakdown: Score breakdown
        config: Parsed scoring config. Defaults to the packaged scoring.yaml.

    Returns:
        At most max_suggestions Suggestions, high priority first
    """
    config = config if config is not None else get_config("scoring")
    limits = config["suggestions"]
    lowered = resume_text.lower()
    suggestions: list[Suggestion] = []

    if match.missing:
        top = ", ".join(match.missing[: limits["top_missing_keywords"]])
        suggestions.append(
            Suggestion(
                type="keywords",
                priority="high",
                message=f"Work these missing keywords from the posting into your résumé: {top}",
                impact="Raises the keyword match score, the most heavily weighted factor",
            )
        )

    if match.missing_skills:
        top = ", ".join(match.missing_skills[: limits["top_missing_skills"]])
        suggestions.append(
            Suggestion(
                type="skills",
                priority="high",
                message=f"List these skills if you have them: {top}",
                impact="Improves skills alignment with the posting",
            )
        )

    if breakdown.experience_relevance < limits["low_experience_relevance"]:
        suggestions.append(
            Suggestion(
                type="experience",
                priority="high",
                message="Describe your experience using the terminology of the job posting",
                impact="Makes your most relevant role count toward the posting's requirements",
            )
        )

    weak_found = [phrase for phrase in config["weak_phrases"] if phrase in lowered]
    if weak_found:
        suggestions.append(
            Suggestion(
                type="action_verbs",
                priority="medium",
                message=f"Replace weak phrases such as '{weak_found[0]}' with strong action verbs",
                impact="Makes accomplishments read as ownership rather than participation",
            )
        )

    if not QUANTIFIED.search(resume_text):
        suggestions.append(
            Suggestion(
                type="quantification",
                priority="medium",
                message="Add measurable results (percentages, counts, dollar amounts) to your bullets",
                impact="Quantified achievements stand out to recruiters and screeners",
            )
        )

    if breakdown.formatting < limits["low_formatting"]:
        suggestions.append(
            Suggestion(
                type="formatting",
                priority="medium",
                message="Use standard section headers (Experience, Education, Skills) and include contact details",
                impact="Helps ATS parsers locate each section of your résumé",
            )
        )

    if not resume.contact.linkedin:
        suggestions.append(
            Suggestion(
                type="contact",
                priority="low",
                message="Add your LinkedIn profile URL to the contact section",
                impact="Gives recruiters a fuller professional profile",
            )
        )

    if not resume.certifications and job.keywords.certifications:
        wanted = ", ".join(job.keywords.certifications[:2])
        suggestions.append(
            Suggestion(
                type="certifications",
                priority="medium",
                message=f"The posting mentions certifications ({wanted}); list any you hold",
                impact="Certifications are often used as hard screening filters",
            )
        )

    suggestions.sort(key=lambda s: PRIORITY_RANK[s.priority])
    return suggestions[: limits["max_suggestions"]]
