"""Audiobookshelf adapter: native responses to canonical models."""

import logging
import posixpath
import time
from typing import Any

from mediahub.adapters.base import LibraryNameCache
from mediahub.clients.audiobookshelf import AudiobookshelfClient
from mediahub.config import DEFAULT_MAX_CONCURRENCY, LIBRARY_NAME_TTL_SECONDS
from mediahub.exceptions import AdapterError
from mediahub.lib.fanout import fan_out
from mediahub.lib.snapshot import Clock
from mediahub.models.audiobookshelf import AbsLibrary, AbsLibraryItem, AbsUser
from mediahub.models.domain import LibraryInfo, SearchResult, ServerInfo, UserInfo
from mediahub.models.enums import ServerType

logger = logging.getLogger(__name__)


def _to_library(library: AbsLibrary) -> LibraryInfo:
    return LibraryInfo(
        id=library.id,
        name=library.name,
        media_type=library.media_type,
        created_at=library.created_at,
        updated_at=library.updated_at,
        last_scan=library.last_scan,
    )


def _to_user(user: AbsUser) -> UserInfo:
    return UserInfo(
        id=user.id,
        username=user.username,
        type=user.type,
        is_active=user.is_active,
        last_seen=user.last_seen,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def _parse_year(value: str) -> int:
    """Parse a published year like "2019" or "2019-05-01", 0 if absent."""
    digits = value[:4]
    return int(digits) if digits.isdigit() else 0


class AudiobookshelfAdapter:
    """MediaServer implementation for Audiobookshelf.

    Audiobookshelf only searches one library per request, so ``search``
    fans out over every known library and merges the hits.
    """

    server_type = ServerType.AUDIOBOOKSHELF

    def __init__(
        self,
        client: AudiobookshelfClient,
        *,
        library_name_ttl: float = LIBRARY_NAME_TTL_SECONDS,
        search_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        clock: Clock = time.monotonic,
    ) -> None:
        """Initialize the adapter.

        Args:
            client: Audiobookshelf API client.
            library_name_ttl: Lifetime of the library-name cache, in seconds.
            search_concurrency: Maximum simultaneous per-library searches.
            clock: Monotonic time source (enables testing).
        """
        self._client = client
        self._search_concurrency = search_concurrency
        self._library_names = LibraryNameCache(
            self.list_libraries,
            library_name_ttl,
            clock=clock,
            name="audiobookshelf library names",
        )

    def get_server_info(self) -> ServerInfo:
        status = self._client.get_server_status()
        # /status carries no host details, only versions
        return ServerInfo(
            name=status.app,
            version=status.server_version,
            server_version=status.server_version,
            api_version=status.api_version,
            language=status.language,
        )

    def get_users(self) -> list[UserInfo]:
        return [_to_user(user) for user in self._client.get_users()]

    def get_current_user(self) -> UserInfo:
        return _to_user(self._client.get_current_user())

    def get_libraries(self) -> list[LibraryInfo]:
        """Fetch all libraries, counting the items of each one in turn.

        A library whose count fails keeps an item count of 0.
        """
        libraries = self.list_libraries()
        counted: list[LibraryInfo] = []
        for library in libraries:
            try:
                count = self.get_library_items_count(library.id)
            except AdapterError as e:
                logger.warning(
                    "Could not count items of library %s: %s", library.id, e
                )
                counted.append(library)
                continue
            counted.append(library.model_copy(update={"item_count": count}))
        return counted

    def get_library_items_count(self, library_id: str) -> int:
        return self._client.get_library_items_count(library_id)

    def search(self, query: str) -> list[SearchResult]:
        """Search every library concurrently and merge the hits.

        Hits are deduplicated by relative path; the first library (in
        library-list order) reporting a path wins. Libraries whose search
        fails are skipped.

        Raises:
            AdapterError: If the library list is unavailable.
        """
        libraries = self._library_names.libraries()
        outcome = fan_out(
            [library.id for library in libraries],
            lambda library_id: self._client.search_library(library_id, query),
            max_concurrency=self._search_concurrency,
            name="audiobookshelf-search",
        )

        results: list[SearchResult] = []
        seen: set[str] = set()
        for library in libraries:
            hits = outcome.results.get(library.id)
            if hits is None:
                continue
            for hit in hits:
                item = hit.library_item
                key = item.rel_path or item.id
                if key in seen:
                    continue
                seen.add(key)
                results.append(self._to_search_result(item, library))

        logger.debug(
            "Audiobookshelf search %r: %d results from %d/%d libraries",
            query,
            len(results),
            len(outcome.results),
            len(libraries),
        )
        return results

    def get_listening_stats(self) -> dict[str, Any]:
        return self._client.get_listening_stats()

    def get_library_name(self, library_id: str) -> str:
        """Resolve a library id through the library-name cache.

        Raises:
            NotFoundError: If no library with this id exists.
        """
        return self._library_names.lookup(library_id)

    def close(self) -> None:
        self._client.close()

    def list_libraries(self) -> list[LibraryInfo]:
        """Fetch the library list without item counts."""
        return [_to_library(library) for library in self._client.get_libraries()]

    def _to_search_result(
        self, item: AbsLibraryItem, library: LibraryInfo
    ) -> SearchResult:
        metadata = item.media.metadata
        rel_path = item.rel_path
        title = metadata.title or posixpath.basename(rel_path.rstrip("/")) or rel_path
        library_id = item.library_id or library.id
        return SearchResult(
            # Only the relative path is exposed; absolute server paths stay hidden
            id=f"{library_id}_{rel_path or item.id}",
            title=title,
            author=metadata.author_name,
            size=item.size,
            added_at=item.added_at,
            library_id=library_id,
            library=library.name or self._library_names.label(library_id),
            type="podcast" if item.media_type == "podcast" else "book",
            rel_path=rel_path,
            overview=metadata.description,
            genres=list(metadata.genres),
            year=_parse_year(metadata.published_year),
            run_time=int(item.media.duration or 0),
            media_type="audio",
        )
