"""
Time-boxed in-memory result cache.

Holds parsed job descriptions keyed by content hash. Entries expire after a
TTL; expiry is checked lazily on read and by an optional background sweep.
Safe for concurrent readers and writers.
"""

import os
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

DEFAULT_TTL_SECONDS = float(os.getenv("ATSCORE_CACHE_TTL_SECONDS", "3600"))
DEFAULT_SWEEP_SECONDS = float(os.getenv("ATSCORE_CACHE_SWEEP_SECONDS", "600"))


@dataclass
class CacheEntry:
    value: Any
    expires_at: float


class ResultCache:
    """
    TTL cache guarded by a single lock.

    Args:
        ttl: Default lifetime of an entry in seconds
        clock: Monotonic time source; inject a fake for tests

    Example:
        >>> cache = ResultCache(ttl=60)
        >>> cache.set("job_abc", parsed)
        >>> cache.get("job_abc") is parsed
        True
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._sweeper: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store a value; it expires after ttl seconds (defaults to the cache TTL)."""
        lifetime = self.ttl if ttl is None else ttl
        with self._lock:
            self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + lifetime)
        logger.debug(f"Cache set: {key} (ttl={lifetime:.0f}s)")

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None if missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() > entry.expires_at:
                del self._entries[key]
                return None
            return entry.value

    def delete(self, key: str) -> bool:
        """Remove a key. Returns True if it was present."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def cleanup(self) -> int:
        """
        Evict all expired entries.

        Returns:
            Number of entries evicted
        """
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if now > entry.expires_at]
            for key in expired:
                del self._entries[key]
            remaining = len(self._entries)

        if expired:
            logger.debug(f"Cache cleanup: evicted {len(expired)}, {remaining} entries remaining")
        return len(expired)

    def size(self) -> int:
        """Number of stored entries (expired ones included until swept)."""
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    # =========================================================================
    # BACKGROUND SWEEP
    # =========================================================================

    def start_sweeper(self, interval: float = DEFAULT_SWEEP_SECONDS) -> None:
        """
        Start a daemon thread that calls cleanup() every interval seconds.

        Calling it while a sweeper is already running is a no-op.
        """
        if self._sweeper is not None and self._sweeper.is_alive():
            return

        self._stop_event.clear()
        self._sweeper = threading.Thread(
            target=self._sweep_loop, args=(interval,), name="atscore-cache-sweeper", daemon=True
        )
        self._sweeper.start()
        logger.debug(f"Cache sweeper started (every {interval:.0f}s)")

    def stop_sweeper(self, timeout: Optional[float] = None) -> None:
        """Signal the sweeper to stop and wait for it to exit."""
        if self._sweeper is None:
            return
        self._stop_event.set()
        self._sweeper.join(timeout)
        self._sweeper = None
        logger.debug("Cache sweeper stopped")

    def _sweep_loop(self, interval: float) -> None:
        while not self._stop_event.wait(interval):
            self.cleanup()


class NullCache:
    """Cache stand-in that never stores anything."""

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        pass

    def get(self, key: str) -> Optional[Any]:
        return None

    def delete(self, key: str) -> bool:
        return False

    def clear(self) -> None:
        pass

    def cleanup(self) -> int:
        return 0

    def size(self) -> int:
        return 0
