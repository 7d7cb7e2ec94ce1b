"""Aggregation across all configured media servers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from types import TracebackType
from typing import TYPE_CHECKING

from mediahub.adapters import MediaServer, create_adapter
from mediahub.config import DEFAULT_MAX_CONCURRENCY
from mediahub.exceptions import ConfigurationError, NotFoundError
from mediahub.lib.fanout import fan_out
from mediahub.models.domain import LibraryInfo, SearchResult, ServerInfo
from mediahub.models.enums import ServerType

if TYPE_CHECKING:
    from mediahub.settings import Settings

logger = logging.getLogger(__name__)


class MediaServerManager:
    """Owns one adapter per configured backend and fans requests out to them.

    Fan-out operations query every backend concurrently (at most
    ``max_concurrency`` at a time), wait for all of them, and return a
    mapping keyed by server type. A backend that fails is left out of the
    mapping, so a missing key means "failed or returned nothing". These
    operations never raise for backend failures.

    The adapter set is fixed at construction.
    """

    def __init__(
        self,
        servers: Mapping[ServerType, MediaServer],
        *,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ) -> None:
        """Initialize the manager.

        Args:
            servers: Adapter per configured server type.
            max_concurrency: Maximum simultaneous backend calls per fan-out.

        Raises:
            ConfigurationError: If no server is configured.
        """
        if not servers:
            raise ConfigurationError("No media server configured")
        self._servers = dict(servers)
        self._max_concurrency = max_concurrency

    @classmethod
    def from_settings(cls, settings: Settings) -> MediaServerManager:
        """Build adapters for every backend whose credential is set.

        Raises:
            ConfigurationError: If no backend credential is set.
        """
        configs = settings.backend_configs()
        servers = {
            server_type: create_adapter(server_type, config)
            for server_type, config in configs.items()
        }
        if not servers:
            raise ConfigurationError(
                "No media server configured: set an Audiobookshelf or Emby token"
            )
        logger.info(
            "Configured media servers: %s", ", ".join(t.value for t in servers)
        )
        return cls(servers, max_concurrency=settings.max_concurrency)

    def get_server(self, server_type: ServerType) -> MediaServer:
        """Return the adapter of one server type.

        Raises:
            NotFoundError: If that server type is not configured.
        """
        server = self._servers.get(server_type)
        if server is None:
            raise NotFoundError(f"Media server not configured: {server_type}")
        return server

    def get_all_servers(self) -> dict[ServerType, MediaServer]:
        """Return a copy of the configured adapters."""
        return dict(self._servers)

    def get_server_types(self) -> list[ServerType]:
        """Return the configured server types."""
        return list(self._servers)

    def search_across_servers(
        self, query: str
    ) -> dict[ServerType, list[SearchResult]]:
        """Search every server concurrently.

        Returns:
            Result list per server that answered.
        """
        return self._fan_out("search", lambda server: server.search(query))

    def get_server_info_across_servers(self) -> dict[ServerType, ServerInfo]:
        """Fetch server info from every server concurrently."""
        return self._fan_out("server-info", lambda server: server.get_server_info())

    def get_libraries_across_servers(self) -> dict[ServerType, list[LibraryInfo]]:
        """Fetch the library list of every server concurrently."""
        return self._fan_out("libraries", lambda server: server.get_libraries())

    def close(self) -> None:
        """Close the HTTP clients of every adapter."""
        for server in self._servers.values():
            server.close()

    def __enter__(self) -> MediaServerManager:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def _fan_out[T](
        self, operation: str, call: Callable[[MediaServer], T]
    ) -> dict[ServerType, T]:
        outcome = fan_out(
            self._servers,
            lambda server_type: call(self._servers[server_type]),
            max_concurrency=self._max_concurrency,
            name=f"servers-{operation}",
        )
        if outcome.errors:
            logger.info(
                "%s skipped failing servers: %s",
                operation,
                ", ".join(t.value for t in outcome.errors),
            )
        return outcome.results
