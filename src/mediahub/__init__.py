"""mediahub - One view over several self-hosted media servers.

This library talks to Audiobookshelf and Emby through their REST APIs,
translates their answers into one canonical model, and aggregates them:
searches and server-info lookups fan out to every configured server
concurrently, and library statistics are cached per server.

Designed for use as a library in front ends (chat bots, web apps) with
a CLI for debugging and development.

Examples:
    Search every configured server:
    ```python
    from mediahub import create_manager

    manager = create_manager()
    for server_type, results in manager.search_across_servers("dune").items():
        print(server_type.label, len(results))
    ```

    Cached library stats:
    ```python
    from mediahub import ServerType, create_manager, create_stats_services

    services = create_stats_services(create_manager())
    for library in services[ServerType.EMBY].get_libraries_with_stats():
        print(library.name, library.item_count)
    ```
"""

import time

from mediahub.adapters import MediaServer, create_adapter
from mediahub.config import AggregationConfig, BackendConfig
from mediahub.exceptions import (
    AdapterError,
    ConfigurationError,
    DecodeError,
    MediaHubError,
    NotFoundError,
    TransportError,
    UpstreamError,
)
from mediahub.lib.snapshot import Clock
from mediahub.models import (
    LibraryInfo,
    LibraryWithStats,
    SearchResult,
    ServerInfo,
    ServerType,
    UserInfo,
)
from mediahub.services import LibraryStatsService, MediaServerManager
from mediahub.settings import Settings, get_settings


def create_manager(settings: Settings | None = None) -> MediaServerManager:
    """Create a manager for every server whose credential is configured.

    This is the recommended way to build the aggregation layer for library
    usage. It handles client and adapter instantiation internally.

    Args:
        settings: Optional settings. Read from the environment if not provided.

    Returns:
        A configured MediaServerManager instance.

    Raises:
        ConfigurationError: If no server credential is configured.

    Examples:
        From environment variables (MEDIAHUB_EMBY_TOKEN, ...):
        ```python
        manager = create_manager()
        ```

        With explicit settings:
        ```python
        manager = create_manager(Settings(emby_url="http://emby:8096", emby_token="k"))
        ```
    """
    return MediaServerManager.from_settings(settings or get_settings())


def create_stats_services(
    manager: MediaServerManager,
    config: AggregationConfig | None = None,
    *,
    clock: Clock = time.monotonic,
) -> dict[ServerType, LibraryStatsService]:
    """Create one cached stats service per server of a manager.

    Args:
        manager: Manager owning the adapters.
        config: Optional cache and concurrency settings. Uses defaults if not
            provided.
        clock: Monotonic time source for the stats caches.

    Returns:
        Stats service per configured server type.
    """
    config = config or AggregationConfig()
    return {
        server_type: LibraryStatsService(
            adapter,
            ttl=config.stats_ttl,
            max_concurrency=config.max_concurrency,
            clock=clock,
        )
        for server_type, adapter in manager.get_all_servers().items()
    }


__all__ = [
    "AdapterError",
    "AggregationConfig",
    "BackendConfig",
    "ConfigurationError",
    "DecodeError",
    "LibraryInfo",
    "LibraryStatsService",
    "LibraryWithStats",
    "MediaHubError",
    "MediaServer",
    "MediaServerManager",
    "NotFoundError",
    "SearchResult",
    "ServerInfo",
    "ServerType",
    "Settings",
    "TransportError",
    "UpstreamError",
    "UserInfo",
    "create_adapter",
    "create_manager",
    "create_stats_services",
]
