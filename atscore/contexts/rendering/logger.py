"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[render]"


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_patch_skipped(page: int, text: str, reason: str) -> None:
    """Log a line patch that was not applied."""
    _log_debug(f"  Skipped patch on page {page + 1} ('{text[:40]}'): {reason}")


def log_improve_result(result, filename: str = None) -> None:
    """Log the outcome of improve_in_place."""
    name = filename or f"{result.format} document"
    if result.changes:
        _log_success(f"{name}: {len(result.changes)} lines rewritten in place")
    else:
        _log_info(f"{name}: no lines qualified for in-place rewriting")
    for change in result.changes[:10]:
        where = f"page {change.page}, " if change.page is not None else ""
        _log_debug(f"  {where}line {change.index}: {change.improved[:80]}")
