"""Adapter protocol and the library-name cache shared by adapters."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any, Protocol

from mediahub.exceptions import AdapterError, NotFoundError
from mediahub.lib.snapshot import Clock, TTLSnapshot
from mediahub.models.domain import (
    LibraryInfo,
    SearchResult,
    ServerInfo,
    UserInfo,
)
from mediahub.models.enums import ServerType

logger = logging.getLogger(__name__)

UNKNOWN_LIBRARY = "Unknown Library"


class MediaServer(Protocol):
    """Canonical operation set every backend adapter implements.

    This protocol enables dependency injection and testing.
    Implement this protocol to create mock adapters for testing.
    """

    server_type: ServerType

    def get_server_info(self) -> ServerInfo:
        """Fetch server identity and version."""
        ...

    def get_users(self) -> list[UserInfo]:
        """Fetch all user accounts."""
        ...

    def get_current_user(self) -> UserInfo:
        """Fetch the account owning the credential."""
        ...

    def get_libraries(self) -> list[LibraryInfo]:
        """Fetch all libraries with their item counts."""
        ...

    def list_libraries(self) -> list[LibraryInfo]:
        """Fetch all libraries without counting their items."""
        ...

    def get_library_items_count(self, library_id: str) -> int:
        """Count the items of one library."""
        ...

    def search(self, query: str) -> list[SearchResult]:
        """Search every library of the server."""
        ...

    def get_listening_stats(self) -> dict[str, Any]:
        """Fetch listening/watching statistics of the current user."""
        ...

    def get_library_name(self, library_id: str) -> str:
        """Resolve a library id to its display name."""
        ...

    def close(self) -> None:
        """Release the HTTP resources held by the adapter."""
        ...


class LibraryNameCache:
    """Read-through cache of a server's library list, keyed by library id.

    The whole list is refetched when the TTL expires; lookups of ids absent
    from a fresh list do not trigger a refetch. A failed refetch keeps the
    last good list (see TTLSnapshot).
    """

    def __init__(
        self,
        loader: Callable[[], list[LibraryInfo]],
        ttl: float,
        *,
        clock: Clock = time.monotonic,
        name: str = "library names",
    ) -> None:
        """Initialize the cache.

        Args:
            loader: Fetches the full library list (item counts not required).
            ttl: Seconds a fetched list stays valid.
            clock: Monotonic time source (enables testing).
            name: Label used in log messages.
        """
        self._loader = loader
        self._snapshot: TTLSnapshot[dict[str, LibraryInfo]] = TTLSnapshot(
            self._load, ttl, clock=clock, name=name
        )

    def _load(self) -> dict[str, LibraryInfo]:
        return {library.id: library for library in self._loader()}

    def libraries(self) -> list[LibraryInfo]:
        """Return the cached library list, refetching it when expired.

        Raises:
            AdapterError: If the list could not be fetched and none is cached.
        """
        return list(self._snapshot.get().values())

    def lookup(self, library_id: str) -> str:
        """Return the name of a library.

        Raises:
            NotFoundError: If the id is unknown or no list is available.
        """
        try:
            libraries = self._snapshot.get()
        except AdapterError as e:
            raise NotFoundError(f"Library not found: {library_id}") from e

        library = libraries.get(library_id)
        if library is None:
            raise NotFoundError(f"Library not found: {library_id}")
        return library.name

    def label(self, library_id: str) -> str:
        """Return a display label for a library id, never failing.

        Unknown ids are labelled with the raw id.
        """
        if not library_id:
            return UNKNOWN_LIBRARY
        try:
            return self.lookup(library_id) or library_id
        except NotFoundError:
            logger.debug("No library name for %s, using id", library_id)
            return library_id

    def invalidate(self) -> None:
        """Force a refetch on the next lookup."""
        self._snapshot.invalidate()
