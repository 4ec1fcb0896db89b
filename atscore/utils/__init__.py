"""
Shared utilities for ATSCORE.

Common functionality used across contexts:
- Text normalization and string similarity
- Configuration loading
- Result caching
- Logger setup
"""

from atscore.utils.cache import NullCache, ResultCache
from atscore.utils.text_processing import normalize_keyword, normalize_text

__all__ = ["NullCache", "ResultCache", "normalize_keyword", "normalize_text"]
