"""
Targeting context logger.

Provides logging interface for targeting context with automatic [target] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[target]"


def _log_info(message: str) -> None:
    """Log info message with [target] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [target] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [target] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [target] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_match_result(match) -> None:
    """Log keyword match totals and the per-tier breakdown."""
    tiers: dict[str, int] = {}
    for detail in match.details:
        tiers[detail.match_type] = tiers.get(detail.match_type, 0) + 1
    tier_summary = ", ".join(f"{name}={count}" for name, count in tiers.items()) or "none"
    _log_debug(
        f"Keyword match: {len(match.matched)} matched, {len(match.missing)} missing, "
        f"confidence {match.confidence}% ({tier_summary})"
    )


def log_analysis_result(result) -> None:
    """Log the final score and sub-scores of an analysis."""
    breakdown = result.breakdown
    _log_info(f"ATS score: {result.ats_score}/100")
    _log_debug(
        f"  keyword_match={breakdown.keyword_match:.2f} "
        f"experience_relevance={breakdown.experience_relevance:.2f} "
        f"skills_alignment={breakdown.skills_alignment:.2f} "
        f"formatting={breakdown.formatting:.2f} "
        f"completeness={breakdown.completeness:.2f}"
    )
    _log_debug(f"  {len(result.suggestions)} suggestions")
