"""Application settings using pydantic-settings."""

from functools import cache
from typing import Annotated, Literal

from pydantic import BeforeValidator, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mediahub.config import (
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_TIMEOUT_SECONDS,
    LIBRARY_NAME_TTL_SECONDS,
    STATS_TTL_SECONDS,
    AggregationConfig,
    BackendConfig,
)
from mediahub.models.enums import ServerType

LogLevel = Annotated[
    Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    BeforeValidator(lambda v: v.upper() if isinstance(v, str) else v),
]


def _local_url(port: int) -> str:
    return f"http://localhost:{port}"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MEDIAHUB_",
        env_file=(".env", "conf/.env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Audiobookshelf
    audiobookshelf_url: str = Field(default="", description="Audiobookshelf URL")
    audiobookshelf_port: int = Field(
        default=13378, description="Audiobookshelf port, used when no URL is set"
    )
    audiobookshelf_token: str = Field(default="", description="Audiobookshelf token")

    # Emby
    emby_url: str = Field(default="", description="Emby URL")
    emby_port: int = Field(default=8096, description="Emby port, used when no URL")
    emby_token: str = Field(default="", description="Emby API key")

    # Requests and caches
    http_timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS, gt=0, description="Per-request timeout"
    )
    library_name_ttl_seconds: float = Field(
        default=LIBRARY_NAME_TTL_SECONDS, ge=0, description="Library-name cache TTL"
    )
    stats_ttl_seconds: float = Field(
        default=STATS_TTL_SECONDS, ge=0, description="Library stats cache TTL"
    )
    max_concurrency: int = Field(
        default=DEFAULT_MAX_CONCURRENCY,
        ge=1,
        description="Maximum simultaneous backend calls per fan-out",
    )
    library_search_concurrency: int = Field(
        default=DEFAULT_MAX_CONCURRENCY,
        ge=1,
        description="Maximum simultaneous per-library Audiobookshelf searches",
    )

    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: LogLevel = Field(default="INFO", description="Log level")

    @property
    def audiobookshelf_base_url(self) -> str:
        url = self.audiobookshelf_url or _local_url(self.audiobookshelf_port)
        return url.rstrip("/")

    @property
    def emby_base_url(self) -> str:
        return (self.emby_url or _local_url(self.emby_port)).rstrip("/")

    def backend_configs(self) -> dict[ServerType, BackendConfig]:
        """Build connection configs for every backend whose token is set."""
        credentials = {
            ServerType.AUDIOBOOKSHELF: (
                self.audiobookshelf_base_url,
                self.audiobookshelf_token,
            ),
            ServerType.EMBY: (self.emby_base_url, self.emby_token),
        }
        return {
            server_type: BackendConfig(
                base_url=base_url,
                token=token,
                timeout=self.http_timeout_seconds,
                library_name_ttl=self.library_name_ttl_seconds,
                library_search_concurrency=self.library_search_concurrency,
            )
            for server_type, (base_url, token) in credentials.items()
            if token
        }

    def aggregation_config(self) -> AggregationConfig:
        return AggregationConfig(
            max_concurrency=self.max_concurrency,
            stats_ttl=self.stats_ttl_seconds,
        )


@cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
