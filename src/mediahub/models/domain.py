"""Canonical, backend-agnostic models.

Adapters translate every backend response into these models. Fields a
backend cannot populate keep their zero value ("" / 0 / []), which
consumers must read as "unknown" rather than "false". All timestamps are
milliseconds since the Unix epoch and durations are seconds.
"""

from pydantic import BaseModel, ConfigDict, Field


class CanonicalModel(BaseModel):
    """Base model for canonical entities."""

    model_config = ConfigDict(frozen=True)


class ServerInfo(CanonicalModel):
    """Snapshot of a media server's identity and version."""

    id: str = ""
    name: str = ""
    version: str = ""
    server_version: str = ""
    api_version: str = ""
    language: str = ""
    os: str = ""
    arch: str = ""
    local_address: str = ""
    wan_address: str = ""


class UserInfo(CanonicalModel):
    """A media server account.

    Attributes:
        type: Free-form backend label such as "admin" or "EmbyUser".
        last_seen: Last login or activity, depending on the backend.
    """

    id: str
    username: str = ""
    type: str = ""
    is_active: bool = False
    last_seen: int = 0
    created_at: int = 0
    updated_at: int = 0


class LibraryInfo(CanonicalModel):
    """A media library (Audiobookshelf library or Emby media folder)."""

    id: str
    name: str = ""
    item_count: int = 0
    media_type: str = ""
    created_at: int = 0
    updated_at: int = 0
    last_scan: int = 0


class LibraryWithStats(LibraryInfo):
    """Library whose item count was resolved with a dedicated count query.

    Attributes:
        count_resolved: False when the count query failed and item_count
            fell back to 0.
    """

    count_resolved: bool = True


class SearchResult(CanonicalModel):
    """A single search hit.

    A deliberately wide union of what the backends report. ``id`` is unique
    within one backend's result set.
    """

    id: str
    title: str = ""
    author: str = ""
    size: int = 0
    added_at: int = 0
    library_id: str = ""
    library: str = ""
    type: str = ""
    path: str = ""
    rel_path: str = ""
    overview: str = ""
    genres: list[str] = Field(default_factory=list)
    year: int = 0
    premiere_date: str = ""
    run_time: int = 0
    media_type: str = ""
