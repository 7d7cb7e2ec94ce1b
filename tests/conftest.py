"""Test fixtures and configuration."""

import os
import threading
import time
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from mediahub.config import BackendConfig
from mediahub.exceptions import MediaHubError
from mediahub.models import LibraryInfo, SearchResult, ServerInfo, ServerType, UserInfo

type Route = Any | httpx.Response | Exception | Callable[[httpx.Request], Any]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class MockServer:
    """In-memory media server answering through httpx.MockTransport.

    Routes map a URL path to a JSON body, an httpx.Response, an exception
    to raise, or a callable receiving the request and returning any of
    those. Unknown paths answer 404.
    """

    def __init__(self, routes: dict[str, Route] | None = None) -> None:
        self.routes: dict[str, Route] = dict(routes or {})
        self.requests: list[httpx.Request] = []
        self._lock = threading.Lock()

    def handler(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        if callable(route):
            route = route(request)
        if isinstance(route, Exception):
            raise route
        if isinstance(route, httpx.Response):
            # Fresh copy per request, routes may be hit repeatedly
            return httpx.Response(
                route.status_code, headers=route.headers, content=route.content
            )
        return httpx.Response(200, json=route)

    def http_client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def paths(self) -> list[str]:
        with self._lock:
            return [r.url.path for r in self.requests]

    def count(self, path: str) -> int:
        return self.paths().count(path)


class MockMediaServer:
    """Mock adapter implementing the MediaServer protocol."""

    def __init__(
        self,
        server_type: ServerType,
        *,
        info: ServerInfo | None = None,
        libraries: list[LibraryInfo] | None = None,
        counts: dict[str, int | Exception] | None = None,
        search_results: list[SearchResult] | None = None,
        users: list[UserInfo] | None = None,
        error: MediaHubError | None = None,
        delay: float = 0.0,
    ) -> None:
        self.server_type = server_type
        self._info = info or ServerInfo(name=server_type.label, version="1.0")
        self._libraries = libraries or []
        self._counts = counts or {}
        self._search_results = search_results or []
        self._users = users or []
        self._error = error
        self._delay = delay
        self._lock = threading.Lock()
        self.calls: list[str] = []

    def _call(self, name: str) -> None:
        with self._lock:
            self.calls.append(name)
        if self._delay:
            time.sleep(self._delay)
        if self._error is not None:
            raise self._error

    def get_server_info(self) -> ServerInfo:
        self._call("get_server_info")
        return self._info

    def get_users(self) -> list[UserInfo]:
        self._call("get_users")
        return self._users

    def get_current_user(self) -> UserInfo:
        self._call("get_current_user")
        if not self._users:
            raise MediaHubError("no users")
        return self._users[0]

    def get_libraries(self) -> list[LibraryInfo]:
        self._call("get_libraries")
        return self._libraries

    def list_libraries(self) -> list[LibraryInfo]:
        self._call("list_libraries")
        return self._libraries

    def get_library_items_count(self, library_id: str) -> int:
        self._call(f"count:{library_id}")
        count = self._counts.get(library_id, 0)
        if isinstance(count, Exception):
            raise count
        return count

    def search(self, query: str) -> list[SearchResult]:
        self._call(f"search:{query}")
        return self._search_results

    def get_listening_stats(self) -> dict[str, Any]:
        self._call("get_listening_stats")
        return {"totalTime": 3600}

    def get_library_name(self, library_id: str) -> str:
        self._call(f"name:{library_id}")
        for library in self._libraries:
            if library.id == library_id:
                return library.name
        raise MediaHubError(f"unknown {library_id}")

    def close(self) -> None:
        with self._lock:
            self.calls.append("close")

    def count_calls(self, name: str) -> int:
        with self._lock:
            return self.calls.count(name)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove MEDIAHUB_ variables inherited from the outer environment."""
    for key in list(os.environ):
        if key.startswith("MEDIAHUB_"):
            monkeypatch.delenv(key)


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def abs_config() -> BackendConfig:
    """Create an Audiobookshelf connection config."""
    return BackendConfig(base_url="http://abs.local:13378/", token="abs-token")


@pytest.fixture
def emby_config() -> BackendConfig:
    """Create an Emby connection config."""
    return BackendConfig(base_url="http://emby.local:8096", token="emby-key")


def abs_library(library_id: str, name: str, media_type: str = "book") -> dict:
    return {
        "id": library_id,
        "name": name,
        "mediaType": media_type,
        "folders": [{"id": f"fol_{library_id}", "fullPath": f"/media/{name}"}],
        "displayOrder": 1,
        "icon": "audiobookshelf",
        "provider": "google",
        "createdAt": 1700000000000,
        "lastUpdate": 1700000500000,
        "lastScan": 1700000900000,
    }


def abs_search_hit(
    rel_path: str,
    *,
    library_id: str,
    title: str = "",
    item_id: str = "",
    media_type: str = "book",
) -> dict:
    return {
        "libraryItem": {
            "id": item_id or f"li_{rel_path}",
            "libraryId": library_id,
            "path": f"/audiobooks/{rel_path}",
            "relPath": rel_path,
            "size": 1048576,
            "addedAt": 1700001000000,
            "mediaType": media_type,
            "media": {
                "metadata": {
                    "title": title,
                    "authorName": "Andy Weir",
                    "description": "A lone astronaut.",
                    "genres": ["Science Fiction"],
                    "publishedYear": "2021",
                },
                "duration": 58320.5,
            },
        },
        "matchKey": "title",
        "matchText": title,
    }


@pytest.fixture
def abs_routes() -> dict[str, Route]:
    """Create routes of a healthy Audiobookshelf server with two libraries."""
    return {
        "/status": {
            "app": "audiobookshelf",
            "serverVersion": "2.8.1",
            "apiVersion": "v1",
            "language": "en-us",
            "isInit": True,
        },
        "/api/libraries": {
            "libraries": [
                abs_library("lib1", "Audiobooks"),
                abs_library("lib2", "Podcasts", "podcast"),
            ]
        },
        "/api/libraries/lib1/items": {"results": [{}], "total": 42, "limit": 1},
        "/api/libraries/lib2/items": {"results": [{}], "total": 7, "limit": 1},
        "/api/libraries/lib1/search": {
            "book": [abs_search_hit("Andy Weir/Hail Mary", library_id="lib1")],
            "podcast": [],
        },
        "/api/libraries/lib2/search": {"book": [], "podcast": []},
        "/api/users": {
            "users": [
                {
                    "id": "usr_root",
                    "username": "root",
                    "type": "root",
                    "isActive": True,
                    "lastSeen": 1700002000000,
                    "createdAt": 1690000000000,
                    "updatedAt": None,
                    "mediaProgress": None,
                }
            ]
        },
        "/api/me": {
            "id": "usr_root",
            "username": "root",
            "type": "root",
            "isActive": True,
        },
        "/api/me/listening-stats": {"totalTime": 7200.5, "items": {}, "days": {}},
    }


def emby_item(item_id: str, name: str, **fields: Any) -> dict:
    return {"Id": item_id, "Name": name, **fields}


@pytest.fixture
def emby_routes() -> dict[str, Route]:
    """Create routes of a healthy Emby server with two media folders."""

    def items(request: httpx.Request) -> dict:
        params = request.url.params
        if "SearchTerm" in params:
            return {
                "Items": [
                    emby_item(
                        "m1",
                        "Dune",
                        Type="Movie",
                        ParentId="f1",
                        Path="/movies/Dune (2021)/Dune.mkv",
                        Size=4294967296,
                        DateCreated="2024-01-15T10:30:00.0000000Z",
                        ProductionYear=2021,
                        PremiereDate="2021-10-22T00:00:00.0000000Z",
                        Overview="Paul Atreides.",
                        Genres=["Science Fiction"],
                        MediaType="Video",
                        RunTimeTicks=93_540_000_000,
                    ),
                    emby_item("a1", "Dune Suite", Type="Audio", ParentId="f9"),
                    emby_item("x1", "Dune Notes", Type="Book"),
                ],
                "TotalRecordCount": 3,
            }
        counts = {"f1": 120, "f2": 35}
        return {"Items": [], "TotalRecordCount": counts.get(params["ParentId"], 0)}

    return {
        "/System/Info": {
            "Id": "srv1",
            "ServerName": "living-room",
            "Version": "4.8.0.80",
            "OperatingSystem": "Linux",
            "SystemArchitecture": "X64",
            "LocalAddress": "http://192.168.1.10:8096",
            "WanAddress": "",
        },
        "/Users": [
            {
                "Id": "u1",
                "Name": "admin",
                "DateCreated": "2023-05-01T08:00:00.0000000Z",
                "LastActivityDate": "2024-02-01T20:15:30.1234567Z",
                "Policy": {"IsAdministrator": True, "IsDisabled": False},
            },
            {
                "Id": "u2",
                "Name": "guest",
                "Policy": {"IsAdministrator": False, "IsDisabled": True},
            },
        ],
        "/Users/Me": {"Id": "u1", "Name": "admin", "Policy": {}},
        "/Users/u1/Items": {"Items": [], "TotalRecordCount": 0},
        "/Library/MediaFolders": {
            "Items": [
                emby_item("f1", "Movies", CollectionType="movies"),
                emby_item("f2", "Music", CollectionType="music"),
            ]
        },
        "/Items": items,
    }
