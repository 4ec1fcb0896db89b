"""
Tailoring context logger.

Provides logging interface for tailoring context with automatic [tailor] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[tailor]"


def _log_info(message: str) -> None:
    """Log info message with [tailor] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [tailor] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [tailor] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [tailor] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_change(change) -> None:
    """Log one optimizer mutation."""
    _log_debug(f"  {change.type} @ {change.location}: {change.modified[:80]}")


def log_optimization_result(result) -> None:
    """Log the score movement and change count of an optimization run."""
    message = (
        f"Optimization: score {result.original_score} -> {result.optimized_score} "
        f"({result.score_improvement:+d}), {len(result.changes)} changes"
    )
    if result.score_improvement > 0:
        _log_success(message)
    else:
        _log_info(message)
