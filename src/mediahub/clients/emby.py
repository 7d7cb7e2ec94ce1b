"""Emby REST API client."""

from typing import Any
from urllib.parse import quote

from pydantic import TypeAdapter

from mediahub.clients.http import JSON_OBJECT, MediaServerHTTPClient
from mediahub.models.emby import (
    EmbyItemsPage,
    EmbyMediaFolder,
    EmbyMediaFolders,
    EmbySystemInfo,
    EmbyUser,
)

_SYSTEM_INFO = TypeAdapter(EmbySystemInfo)
_USER = TypeAdapter(EmbyUser)
_USERS = TypeAdapter(list[EmbyUser])
_MEDIA_FOLDERS = TypeAdapter(EmbyMediaFolders)
_ITEMS_PAGE = TypeAdapter(EmbyItemsPage)

# Item types returned by search; episodes are excluded separately
SEARCH_ITEM_TYPES = (
    "Movie",
    "Series",
    "MusicAlbum",
    "MusicArtist",
    "Playlist",
    "Audio",
    "Book",
    "Folder",
    "Photo",
    "PhotoAlbum",
)

SEARCH_FIELDS = (
    "Path",
    "DateCreated",
    "Size",
    "Overview",
    "ProviderIds",
    "Genres",
    "Studios",
    "CumulativeRunTimeTicks",
    "ItemCounts",
    "ChildCount",
    "RecursiveChildCount",
    "PremiereDate",
    "ProductionYear",
    "MediaSourceCount",
)


class EmbyClient(MediaServerHTTPClient):
    """Emby API client authenticated with an API key header."""

    server_name = "emby"

    def _auth_headers(self, token: str) -> dict[str, str]:
        return {"X-Emby-Token": token}

    def get_system_info(self) -> EmbySystemInfo:
        """Fetch server identity and version."""
        return self.get_json("/System/Info", _SYSTEM_INFO)

    def get_users(self) -> list[EmbyUser]:
        """Fetch all users."""
        return self.get_json("/Users", _USERS)

    def get_current_user(self) -> EmbyUser:
        """Fetch the user owning the token."""
        return self.get_json("/Users/Me", _USER)

    def get_media_folders(self) -> list[EmbyMediaFolder]:
        """Fetch top-level media folders (libraries)."""
        return self.get_json("/Library/MediaFolders", _MEDIA_FOLDERS).items

    def search_items(
        self, term: str, user_id: str = "", limit: int = 0
    ) -> EmbyItemsPage:
        """Search items across all libraries.

        Args:
            term: Free-text query.
            user_id: Evaluate visibility for this user.
            limit: Maximum number of results, 0 for the server default.
        """
        params: dict[str, Any] = {
            "SearchTerm": term,
            "IncludeItemTypes": ",".join(SEARCH_ITEM_TYPES),
            "ExcludeItemTypes": "Episode",
            "Fields": ",".join(SEARCH_FIELDS),
            "Recursive": "true",
            "EnableTotalRecordCount": "false",
        }
        if user_id:
            params["UserId"] = user_id
        if limit > 0:
            params["Limit"] = limit
        return self.get_json("/Items", _ITEMS_PAGE, params=params)

    def get_library_items_count(self, library_id: str) -> int:
        """Count the items below one media folder.

        Requests an empty page and reads the reported total.
        """
        page = self.get_json(
            "/Items",
            _ITEMS_PAGE,
            params={
                "ParentId": library_id,
                "Recursive": "true",
                "EnableTotalRecordCount": "true",
                "Limit": 0,
            },
        )
        return page.total_record_count

    def get_user_items(self, user_id: str) -> dict[str, Any]:
        """Fetch the item view of one user as a raw mapping."""
        return self.get_json(f"/Users/{quote(user_id, safe='')}/Items", JSON_OBJECT)

