"""Backend adapters translating native APIs into the canonical model.

Public API:
    MediaServer - Protocol every adapter implements
    AudiobookshelfAdapter, EmbyAdapter - Concrete adapters
    create_adapter - Build the adapter for a server type from its config
"""

import time

import httpx

from mediahub.adapters.audiobookshelf import AudiobookshelfAdapter
from mediahub.adapters.base import UNKNOWN_LIBRARY, LibraryNameCache, MediaServer
from mediahub.adapters.emby import EmbyAdapter
from mediahub.clients import AudiobookshelfClient, EmbyClient
from mediahub.config import BackendConfig
from mediahub.lib.snapshot import Clock
from mediahub.models.enums import ServerType


def create_adapter(
    server_type: ServerType,
    config: BackendConfig,
    *,
    http_client: httpx.Client | None = None,
    clock: Clock = time.monotonic,
) -> MediaServer:
    """Create the client and adapter for one media server.

    Args:
        server_type: Which backend to build.
        config: Connection and cache settings of the server.
        http_client: Optional httpx client shared with the API client.
        clock: Monotonic time source for the library-name cache.

    Returns:
        A configured adapter.
    """
    match server_type:
        case ServerType.AUDIOBOOKSHELF:
            return AudiobookshelfAdapter(
                AudiobookshelfClient(config, http_client=http_client),
                library_name_ttl=config.library_name_ttl,
                search_concurrency=config.library_search_concurrency,
                clock=clock,
            )
        case ServerType.EMBY:
            return EmbyAdapter(
                EmbyClient(config, http_client=http_client),
                library_name_ttl=config.library_name_ttl,
                clock=clock,
            )
    raise ValueError(f"Unsupported server type: {server_type}")


__all__ = [
    "UNKNOWN_LIBRARY",
    "AudiobookshelfAdapter",
    "EmbyAdapter",
    "LibraryNameCache",
    "MediaServer",
    "create_adapter",
]
