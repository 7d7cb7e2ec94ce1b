"""Emby adapter: native responses to canonical models."""

import logging
import time
from typing import Any

from mediahub.adapters.base import UNKNOWN_LIBRARY, LibraryNameCache
from mediahub.clients.emby import EmbyClient
from mediahub.config import LIBRARY_NAME_TTL_SECONDS
from mediahub.exceptions import AdapterError
from mediahub.lib.snapshot import Clock
from mediahub.models.domain import LibraryInfo, SearchResult, ServerInfo, UserInfo
from mediahub.models.emby import EmbyItem, EmbyMediaFolder, EmbyUser
from mediahub.models.enums import ServerType
from mediahub.utils.dates import iso_to_millis

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 50

# Emby durations are .NET ticks (100 ns)
TICKS_PER_SECOND = 10_000_000


def _to_user(user: EmbyUser) -> UserInfo:
    return UserInfo(
        id=user.id,
        username=user.name,
        type="Admin" if user.policy.is_administrator else "EmbyUser",
        is_active=not user.policy.is_disabled,
        last_seen=iso_to_millis(user.last_activity_date),
        created_at=iso_to_millis(user.date_created),
    )


def _to_library(folder: EmbyMediaFolder, item_count: int = 0) -> LibraryInfo:
    return LibraryInfo(
        id=folder.id,
        name=folder.name,
        item_count=item_count,
        media_type=folder.collection_type,
        created_at=iso_to_millis(folder.date_created),
        updated_at=iso_to_millis(folder.date_modified),
    )


class EmbyAdapter:
    """MediaServer implementation for Emby.

    Emby searches all libraries in one request; search hits are labelled
    with their parent library through the library-name cache.
    """

    server_type = ServerType.EMBY

    def __init__(
        self,
        client: EmbyClient,
        *,
        library_name_ttl: float = LIBRARY_NAME_TTL_SECONDS,
        clock: Clock = time.monotonic,
    ) -> None:
        self._client = client
        self._library_names = LibraryNameCache(
            self.list_libraries,
            library_name_ttl,
            clock=clock,
            name="emby library names",
        )

    def get_server_info(self) -> ServerInfo:
        info = self._client.get_system_info()
        return ServerInfo(
            id=info.id,
            name=info.server_name,
            version=info.version,
            server_version=info.version,
            # Emby has no separate API version
            api_version="Emby",
            os=info.operating_system,
            arch=info.architecture,
            local_address=info.local_address,
            wan_address=info.wan_address,
        )

    def get_users(self) -> list[UserInfo]:
        return [_to_user(user) for user in self._client.get_users()]

    def get_current_user(self) -> UserInfo:
        return _to_user(self._client.get_current_user())

    def get_libraries(self) -> list[LibraryInfo]:
        """Fetch all media folders, counting the items of each one in turn.

        A folder whose count fails gets an item count of 0.
        """
        libraries: list[LibraryInfo] = []
        for folder in self._client.get_media_folders():
            try:
                count = self.get_library_items_count(folder.id)
            except AdapterError as e:
                logger.warning(
                    "Could not count items of folder %s: %s", folder.id, e
                )
                count = 0
            libraries.append(_to_library(folder, count))
        return libraries

    def get_library_items_count(self, library_id: str) -> int:
        return self._client.get_library_items_count(library_id)

    def search(self, query: str) -> list[SearchResult]:
        page = self._client.search_items(query, limit=SEARCH_LIMIT)
        results = [self._to_search_result(item) for item in page.items]
        logger.debug("Emby search %r: %d results", query, len(results))
        return results

    def get_listening_stats(self) -> dict[str, Any]:
        """Fetch the item view of the user owning the API key."""
        user = self._client.get_current_user()
        return self._client.get_user_items(user.id)

    def get_library_name(self, library_id: str) -> str:
        """Resolve a media folder id through the library-name cache.

        Raises:
            NotFoundError: If no media folder with this id exists.
        """
        return self._library_names.lookup(library_id)

    def close(self) -> None:
        self._client.close()

    def list_libraries(self) -> list[LibraryInfo]:
        """Fetch the library list without item counts."""
        return [_to_library(folder) for folder in self._client.get_media_folders()]

    def _to_search_result(self, item: EmbyItem) -> SearchResult:
        library = (
            self._library_names.label(item.parent_id)
            if item.parent_id
            else UNKNOWN_LIBRARY
        )
        return SearchResult(
            id=item.id,
            title=item.name,
            author=item.album_artist or ", ".join(item.artists),
            size=item.size,
            added_at=iso_to_millis(item.date_created),
            library_id=item.parent_id,
            library=library,
            type=item.type.lower(),
            path=item.path,
            rel_path=item.path,
            overview=item.overview,
            genres=list(item.genres),
            year=item.production_year,
            premiere_date=item.premiere_date,
            run_time=item.run_time_ticks // TICKS_PER_SECOND,
            media_type=item.media_type,
        )
