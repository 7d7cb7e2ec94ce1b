"""Audiobookshelf REST API client."""

from typing import Any
from urllib.parse import quote

from pydantic import TypeAdapter

from mediahub.clients.http import JSON_OBJECT, MediaServerHTTPClient
from mediahub.models.audiobookshelf import (
    AbsItemsPage,
    AbsLibrary,
    AbsLibraryList,
    AbsSearchHit,
    AbsSearchResponse,
    AbsServerStatus,
    AbsUser,
    AbsUserList,
)

_STATUS = TypeAdapter(AbsServerStatus)
_LIBRARIES = TypeAdapter(AbsLibraryList)
_ITEMS_PAGE = TypeAdapter(AbsItemsPage)
_SEARCH = TypeAdapter(AbsSearchResponse)
_USER = TypeAdapter(AbsUser)
_USERS = TypeAdapter(AbsUserList)


class AudiobookshelfClient(MediaServerHTTPClient):
    """Audiobookshelf API client authenticated with a bearer token."""

    server_name = "audiobookshelf"

    def _auth_headers(self, token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    def get_server_status(self) -> AbsServerStatus:
        """Fetch the unauthenticated status document."""
        return self.get_json("/status", _STATUS)

    def get_libraries(self) -> list[AbsLibrary]:
        """Fetch all libraries (without item counts)."""
        return self.get_json("/api/libraries", _LIBRARIES).libraries

    def get_library_items_count(self, library_id: str) -> int:
        """Count the items of one library.

        Requests a single-item page and reads the reported total.
        """
        page = self.get_json(
            f"/api/libraries/{quote(library_id, safe='')}/items",
            _ITEMS_PAGE,
            params={"limit": 1},
        )
        return page.total

    def search_library(self, library_id: str, term: str) -> list[AbsSearchHit]:
        """Search one library.

        Args:
            library_id: Library to search.
            term: Free-text query.

        Returns:
            Book and podcast hits, in response order.
        """
        response = self.get_json(
            f"/api/libraries/{quote(library_id, safe='')}/search",
            _SEARCH,
            params={"q": term},
        )
        return response.hits

    def get_users(self) -> list[AbsUser]:
        """Fetch all users (requires an admin token)."""
        return self.get_json("/api/users", _USERS).users

    def get_current_user(self) -> AbsUser:
        """Fetch the user owning the token."""
        return self.get_json("/api/me", _USER)

    def get_listening_stats(self) -> dict[str, Any]:
        """Fetch listening statistics of the current user."""
        return self.get_json("/api/me/listening-stats", JSON_OBJECT)
