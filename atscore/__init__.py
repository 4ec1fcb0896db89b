"""
ATSCORE - Applicant Tracking System Compatibility Optimization and Résumé Editing

Scores how well a résumé matches a job posting and proposes minimal,
format-preserving edits that raise the score.

Architecture:
- Intake Context: Résumé and job posting parsing
- Targeting Context: Keyword matching, scoring and suggestions
- Tailoring Context: Résumé optimization (keyword integration, verbs, ordering)
- Rendering Context: In-place patching of PDF, DOCX and TXT files
"""

__version__ = "0.1.0"
