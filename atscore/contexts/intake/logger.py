"""
Intake context logger.

Provides logging interface for intake context with automatic [intake] prefix.
All intake modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[intake]"


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_resume_parsed(resume) -> None:
    """Log a one-line summary of a ParsedResume."""
    _log_debug(
        f"Parsed resume: {len(resume.experience)} jobs, {len(resume.education)} degrees, "
        f"{len(resume.skills)} skills, {len(resume.certifications)} certifications"
    )
    for warning in resume.warnings:
        _log_debug(f"  {warning}")


def log_job_parsed(job, cached: bool = False) -> None:
    """Log a one-line summary of a ParsedJobDescription."""
    if cached:
        _log_debug("Job description retrieved from cache")
        return
    total = sum(len(v) for v in job.keywords.as_dict().values())
    _log_debug(
        f"Parsed job description: {total} keywords, "
        f"{len(job.requirements.required)} required / "
        f"{len(job.requirements.preferred)} preferred items"
    )
