"""Configuration for mediahub."""

from dataclasses import dataclass

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_CONCURRENCY = 4
LIBRARY_NAME_TTL_SECONDS = 30 * 60  # 30 minutes
STATS_TTL_SECONDS = 5 * 60  # 5 minutes


@dataclass(frozen=True)
class BackendConfig:
    """Connection settings for one media server.

    Attributes:
        base_url: Server base URL without trailing slash.
        token: Static API credential (bearer token or API key).
        timeout: Per-request timeout in seconds.
        library_name_ttl: Lifetime of the adapter's library-name cache, in seconds.
        library_search_concurrency: Maximum simultaneous per-library searches.
    """

    base_url: str
    token: str
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    library_name_ttl: float = LIBRARY_NAME_TTL_SECONDS
    library_search_concurrency: int = DEFAULT_MAX_CONCURRENCY


@dataclass(frozen=True)
class AggregationConfig:
    """Fan-out and cache settings shared by the manager and stats services.

    Attributes:
        max_concurrency: Maximum simultaneous backend calls per fan-out.
        stats_ttl: Lifetime of the library stats cache, in seconds.
    """

    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    stats_ttl: float = STATS_TTL_SECONDS
