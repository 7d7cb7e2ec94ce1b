"""Time-stamped cache cell with double-checked refresh."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from mediahub.exceptions import MediaHubError

logger = logging.getLogger(__name__)

type Clock = Callable[[], float]


@dataclass(frozen=True)
class _Entry[T]:
    value: T | None = None
    stamped_at: float | None = None
    error: MediaHubError | None = None


class TTLSnapshot[T]:
    """Single cached value that expires a fixed time after its last refresh.

    Readers look at the current entry without locking; entries are immutable
    and replaced as a whole, so a reader sees either the old or the new
    snapshot, never a partial one. On a miss the refresh lock is taken and
    freshness re-checked before calling the loader, so concurrent callers
    trigger one refresh.

    A failed refresh still stamps the entry, which rate-limits retries to one
    per TTL window. The previous value is kept and served; when there is no
    previous value the failure is re-raised to every caller inside the window.

    Thread-Safety:
        ``get`` and ``invalidate`` may be called from any thread.
    """

    def __init__(
        self,
        loader: Callable[[], T],
        ttl: float,
        *,
        clock: Clock = time.monotonic,
        name: str = "snapshot",
    ) -> None:
        """Initialize an empty snapshot.

        Args:
            loader: Produces a fresh value. May raise MediaHubError.
            ttl: Seconds a refresh (successful or not) stays valid.
            clock: Monotonic time source (enables testing).
            name: Label used in log messages.
        """
        self._loader = loader
        self._ttl = ttl
        self._clock = clock
        self._name = name
        self._entry: _Entry[T] = _Entry()
        self._refresh_lock = threading.Lock()

    @property
    def stamped_at(self) -> float | None:
        """Clock value of the last refresh attempt, None if never refreshed."""
        return self._entry.stamped_at

    def get(self) -> T:
        """Return the cached value, refreshing it when expired.

        Raises:
            MediaHubError: If the refresh failed and no earlier value exists.
        """
        entry = self._entry
        if self._is_fresh(entry):
            return self._unwrap(entry)

        with self._refresh_lock:
            entry = self._entry
            if self._is_fresh(entry):
                return self._unwrap(entry)
            return self._refresh(entry)

    def invalidate(self) -> None:
        """Drop the cached value so the next ``get`` refreshes."""
        with self._refresh_lock:
            self._entry = _Entry()
        logger.debug("%s invalidated", self._name)

    def _refresh(self, previous: _Entry[T]) -> T:
        logger.debug("%s expired, refreshing", self._name)
        try:
            value = self._loader()
        except MediaHubError as e:
            self._entry = _Entry(
                value=previous.value, stamped_at=self._clock(), error=e
            )
            if previous.value is None:
                raise
            logger.warning(
                "%s refresh failed, serving previous snapshot: %s", self._name, e
            )
            return previous.value

        self._entry = _Entry(value=value, stamped_at=self._clock())
        return value

    def _is_fresh(self, entry: _Entry[T]) -> bool:
        if entry.stamped_at is None:
            return False
        return self._clock() - entry.stamped_at < self._ttl

    def _unwrap(self, entry: _Entry[T]) -> T:
        if entry.value is not None:
            return entry.value
        if entry.error is not None:
            raise entry.error
        raise MediaHubError(f"{self._name} has no value")
