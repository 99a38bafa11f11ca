"""In-memory expiring cache with lazy eviction and an optional background sweep."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any

log = logging.getLogger(__name__)


@dataclass(slots=True)
class CacheEntry:
    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class ExpiringCache:
    """Process-local key/value store where each entry lives for a fixed TTL.

    Expired entries are dropped lazily by ``get`` and, when ``start_cleanup``
    has been called, periodically by a daemon sweep thread. All store access
    goes through one lock so the sweep can run alongside an event loop.
    """

    def __init__(self, default_ttl: float = 300.0, *, name: str = "cache") -> None:
        if default_ttl <= 0:
            raise ValueError(f"default_ttl must be positive, got {default_ttl!r}")
        self.name = name
        self.default_ttl = default_ttl
        self._store: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        # guards sweeper start/stop, separate from the store lock
        self._lifecycle_lock = threading.Lock()
        self._stop_event: threading.Event | None = None
        self._sweeper: threading.Thread | None = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __contains__(self, key: str) -> bool:
        return self._lookup(key)[0]

    def __enter__(self) -> ExpiringCache:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop_cleanup()

    def get(self, key: str, default: Any = None) -> Any:
        """Return the live value for ``key``, or ``default`` on a miss."""
        found, value = self._lookup(key)
        return value if found else default

    def _lookup(self, key: str) -> tuple[bool, Any]:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return False, None
            if entry.is_expired(time.monotonic()):
                del self._store[key]
                return False, None
            return True, entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store ``value`` under ``key`` for ``ttl`` seconds (default TTL if None).

        A zero or negative ``ttl`` means the value is already expired: any
        previous entry for the key is dropped and nothing is stored.
        """
        if ttl is None:
            ttl = self.default_ttl
        with self._lock:
            if ttl <= 0:
                self._store.pop(key, None)
                return
            self._store[key] = CacheEntry(value, time.monotonic() + ttl)

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def sweep(self) -> int:
        """Evict every expired entry. Returns the number removed."""
        with self._lock:
            now = time.monotonic()
            expired = [k for k, entry in self._store.items() if entry.is_expired(now)]
            for k in expired:
                del self._store[k]
        if expired:
            log.debug("%s: swept %d expired entries", self.name, len(expired))
        return len(expired)

    @property
    def cleanup_running(self) -> bool:
        sweeper = self._sweeper
        return sweeper is not None and sweeper.is_alive()

    def start_cleanup(self, interval: float = 60.0) -> None:
        """Sweep expired entries every ``interval`` seconds until stopped.

        Calling this while a sweep is already running is a no-op.
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval!r}")
        with self._lifecycle_lock:
            if self.cleanup_running:
                return
            stop_event = threading.Event()
            sweeper = threading.Thread(
                target=self._run_cleanup,
                args=(interval, stop_event),
                name=f"{self.name}-sweep",
                daemon=True,
            )
            self._stop_event = stop_event
            self._sweeper = sweeper
            sweeper.start()

    def _run_cleanup(self, interval: float, stop_event: threading.Event) -> None:
        while not stop_event.wait(interval):
            try:
                self.sweep()
            except Exception:
                log.exception("%s: cache sweep failed", self.name)

    def stop_cleanup(self) -> None:
        """Stop the background sweep, if any, and wait for it to exit."""
        with self._lifecycle_lock:
            stop_event, sweeper = self._stop_event, self._sweeper
            self._stop_event = None
            self._sweeper = None
        if stop_event is not None:
            stop_event.set()
        if sweeper is not None and sweeper is not threading.current_thread():
            sweeper.join()
