"""Tests for the Emby adapter."""

import httpx
import pytest

from mediahub.adapters import UNKNOWN_LIBRARY, EmbyAdapter
from mediahub.clients import EmbyClient
from mediahub.config import BackendConfig
from mediahub.exceptions import AdapterError, NotFoundError
from mediahub.models import ServerType
from tests.conftest import FakeClock, MockServer, Route


def make_adapter(
    config: BackendConfig, routes: dict[str, Route], clock: FakeClock
) -> tuple[EmbyAdapter, MockServer]:
    server = MockServer(routes)
    client = EmbyClient(config, http_client=server.http_client())
    return EmbyAdapter(client, library_name_ttl=1800, clock=clock), server


def item_requests(server: MockServer, param: str) -> list[httpx.Request]:
    return [
        r for r in server.requests if r.url.path == "/Items" and param in r.url.params
    ]


class TestServerInfoAndUsers:
    """Tests for server info and user translation."""

    def test_server_info(
        self, emby_config: BackendConfig, emby_routes: dict, clock: FakeClock
    ) -> None:
        adapter, _ = make_adapter(emby_config, emby_routes, clock)

        info = adapter.get_server_info()

        assert adapter.server_type is ServerType.EMBY
        assert info.id == "srv1"
        assert info.name == "living-room"
        assert info.version == "4.8.0.80"
        assert info.server_version == "4.8.0.80"
        assert info.api_version == "Emby"
        assert info.os == "Linux"
        assert info.arch == "X64"
        assert info.local_address == "http://192.168.1.10:8096"
        assert info.wan_address == ""

    def test_users(
        self, emby_config: BackendConfig, emby_routes: dict, clock: FakeClock
    ) -> None:
        adapter, _ = make_adapter(emby_config, emby_routes, clock)

        admin, guest = adapter.get_users()

        assert admin.id == "u1"
        assert admin.username == "admin"
        assert admin.type == "Admin"
        assert admin.is_active is True
        assert admin.created_at == 1682928000000
        assert admin.last_seen == 1706818530123
        assert guest.type == "EmbyUser"
        assert guest.is_active is False
        assert guest.last_seen == 0

    def test_current_user(
        self, emby_config: BackendConfig, emby_routes: dict, clock: FakeClock
    ) -> None:
        adapter, _ = make_adapter(emby_config, emby_routes, clock)
        assert adapter.get_current_user().id == "u1"

    def test_listening_stats_use_current_user(
        self, emby_config: BackendConfig, emby_routes: dict, clock: FakeClock
    ) -> None:
        adapter, server = make_adapter(emby_config, emby_routes, clock)

        stats = adapter.get_listening_stats()

        assert stats == {"Items": [], "TotalRecordCount": 0}
        assert server.paths() == ["/Users/Me", "/Users/u1/Items"]


class TestLibraries:
    """Tests for media folder listing and counts."""

    def test_libraries_with_counts(
        self, emby_config: BackendConfig, emby_routes: dict, clock: FakeClock
    ) -> None:
        adapter, _ = make_adapter(emby_config, emby_routes, clock)

        libraries = adapter.get_libraries()

        assert [(lib.id, lib.name, lib.item_count) for lib in libraries] == [
            ("f1", "Movies", 120),
            ("f2", "Music", 35),
        ]
        assert libraries[0].media_type == "movies"

    def test_count_uses_parent_id(
        self, emby_config: BackendConfig, emby_routes: dict, clock: FakeClock
    ) -> None:
        adapter, server = make_adapter(emby_config, emby_routes, clock)

        assert adapter.get_library_items_count("f2") == 35
        assert item_requests(server, "ParentId")[0].url.params["ParentId"] == "f2"

    def test_failed_count_leaves_zero(
        self, emby_config: BackendConfig, emby_routes: dict, clock: FakeClock
    ) -> None:
        healthy = emby_routes["/Items"]

        def items(request: httpx.Request):
            if request.url.params.get("ParentId") == "f1":
                return httpx.Response(500)
            return healthy(request)

        emby_routes["/Items"] = items
        adapter, _ = make_adapter(emby_config, emby_routes, clock)

        assert [lib.item_count for lib in adapter.get_libraries()] == [0, 35]


class TestSearch:
    """Tests for search translation."""

    def test_single_search_call(
        self, emby_config: BackendConfig, emby_routes: dict, clock: FakeClock
    ) -> None:
        adapter, server = make_adapter(emby_config, emby_routes, clock)

        adapter.search("dune")

        searches = item_requests(server, "SearchTerm")
        assert len(searches) == 1
        assert searches[0].url.params["SearchTerm"] == "dune"
        assert searches[0].url.params["Limit"] == "50"

    def test_translates_items(
        self, emby_config: BackendConfig, emby_routes: dict, clock: FakeClock
    ) -> None:
        adapter, _ = make_adapter(emby_config, emby_routes, clock)

        movie = adapter.search("dune")[0]

        assert movie.id == "m1"
        assert movie.title == "Dune"
        assert movie.type == "movie"
        assert movie.library_id == "f1"
        assert movie.library == "Movies"
        assert movie.path == "/movies/Dune (2021)/Dune.mkv"
        assert movie.size == 4294967296
        assert movie.added_at == 1705314600000
        assert movie.year == 2021
        assert movie.premiere_date == "2021-10-22T00:00:00.0000000Z"
        assert movie.overview == "Paul Atreides."
        assert movie.genres == ["Science Fiction"]
        assert movie.media_type == "Video"

    def test_run_time_ticks_become_seconds(
        self, emby_config: BackendConfig, emby_routes: dict, clock: FakeClock
    ) -> None:
        adapter, _ = make_adapter(emby_config, emby_routes, clock)

        movie = adapter.search("dune")[0]

        assert movie.run_time == 9354

    def test_library_labels(
        self, emby_config: BackendConfig, emby_routes: dict, clock: FakeClock
    ) -> None:
        """Unknown parents keep their raw id, missing parents a placeholder."""
        adapter, _ = make_adapter(emby_config, emby_routes, clock)

        _, audio, book = adapter.search("dune")

        assert audio.library == "f9"
        assert book.library == UNKNOWN_LIBRARY
        assert book.library_id == ""

    def test_labels_survive_unavailable_library_list(
        self, emby_config: BackendConfig, emby_routes: dict, clock: FakeClock
    ) -> None:
        emby_routes["/Library/MediaFolders"] = httpx.Response(500)
        adapter, _ = make_adapter(emby_config, emby_routes, clock)

        movie = adapter.search("dune")[0]

        assert movie.library == "f1"

    def test_search_failure_propagates(
        self, emby_config: BackendConfig, emby_routes: dict, clock: FakeClock
    ) -> None:
        emby_routes["/Items"] = httpx.ConnectError("refused")
        adapter, _ = make_adapter(emby_config, emby_routes, clock)

        with pytest.raises(AdapterError):
            adapter.search("dune")


class TestLibraryNames:
    """Tests for media folder name resolution."""

    def test_name_lookup_is_cached(
        self, emby_config: BackendConfig, emby_routes: dict, clock: FakeClock
    ) -> None:
        adapter, server = make_adapter(emby_config, emby_routes, clock)

        adapter.search("dune")
        assert adapter.get_library_name("f2") == "Music"
        assert server.count("/Library/MediaFolders") == 1

    def test_unknown_folder_raises_not_found(
        self, emby_config: BackendConfig, emby_routes: dict, clock: FakeClock
    ) -> None:
        adapter, _ = make_adapter(emby_config, emby_routes, clock)

        with pytest.raises(NotFoundError):
            adapter.get_library_name("nope")
