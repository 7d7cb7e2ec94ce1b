"""Cached library statistics for one media server."""

from __future__ import annotations

import logging
import time
from typing import Any

from mediahub.adapters import MediaServer
from mediahub.config import DEFAULT_MAX_CONCURRENCY, STATS_TTL_SECONDS
from mediahub.lib.fanout import fan_out
from mediahub.lib.snapshot import Clock, TTLSnapshot
from mediahub.models.domain import (
    LibraryInfo,
    LibraryWithStats,
    SearchResult,
    UserInfo,
)

logger = logging.getLogger(__name__)


class LibraryStatsService:
    """Libraries with item counts, cached for a few minutes.

    One instance wraps one adapter. The cache is independent from the
    adapter's own library-name cache and has a shorter lifetime.

    Thread-Safety:
        All public methods may be called from any thread. Concurrent callers
        hitting an expired cache share a single refresh.
    """

    def __init__(
        self,
        adapter: MediaServer,
        *,
        ttl: float = STATS_TTL_SECONDS,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        clock: Clock = time.monotonic,
    ) -> None:
        """Initialize the service.

        Args:
            adapter: Adapter of the media server to summarize.
            ttl: Lifetime of the stats cache, in seconds.
            max_concurrency: Maximum simultaneous item-count requests.
            clock: Monotonic time source (enables testing).
        """
        self._adapter = adapter
        self._max_concurrency = max_concurrency
        self._stats: TTLSnapshot[tuple[LibraryWithStats, ...]] = TTLSnapshot(
            self._collect_stats,
            ttl,
            clock=clock,
            name=f"{adapter.server_type} library stats",
        )

    @property
    def adapter(self) -> MediaServer:
        """The wrapped adapter."""
        return self._adapter

    def get_libraries_with_stats(self) -> list[LibraryWithStats]:
        """Return every library with its item count.

        Served from cache while fresh. A library whose count could not be
        fetched reports 0 with ``count_resolved=False``.

        Raises:
            AdapterError: If the library list is unavailable and nothing
                is cached.
        """
        return list(self._stats.get())

    def invalidate(self) -> None:
        """Drop cached stats so the next call refetches."""
        self._stats.invalidate()

    def get_library_name(self, library_id: str) -> str:
        """Resolve a library id to its name.

        Raises:
            NotFoundError: If no library with this id exists.
        """
        return self._adapter.get_library_name(library_id)

    def get_users(self) -> list[UserInfo]:
        return self._adapter.get_users()

    def get_current_user(self) -> UserInfo:
        return self._adapter.get_current_user()

    def get_listening_stats(self) -> dict[str, Any]:
        return self._adapter.get_listening_stats()

    def search(self, query: str) -> list[SearchResult]:
        """Search this server.

        Raises:
            ValueError: If the query is blank.
        """
        if not query or not query.strip():
            raise ValueError("query cannot be empty")
        return self._adapter.search(query.strip())

    def _collect_stats(self) -> tuple[LibraryWithStats, ...]:
        libraries = self._adapter.list_libraries()
        outcome = fan_out(
            range(len(libraries)),
            lambda index: self._count(libraries[index]),
            max_concurrency=self._max_concurrency,
            name=f"{self._adapter.server_type}-counts",
        )
        stats = tuple(
            self._with_count(library, outcome.results.get(index))
            for index, library in enumerate(libraries)
        )
        logger.debug(
            "Collected stats for %d %s libraries (%d counts failed)",
            len(stats),
            self._adapter.server_type,
            len(outcome.errors),
        )
        return stats

    def _count(self, library: LibraryInfo) -> int:
        return self._adapter.get_library_items_count(library.id)

    @staticmethod
    def _with_count(library: LibraryInfo, count: int | None) -> LibraryWithStats:
        return LibraryWithStats(
            **library.model_dump(exclude={"item_count"}),
            item_count=count or 0,
            count_resolved=count is not None,
        )
