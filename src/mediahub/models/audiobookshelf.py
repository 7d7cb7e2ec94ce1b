"""Models for parsing Audiobookshelf API responses.

These are internal models used to parse and validate responses from
the Audiobookshelf REST API. They may change if the API changes.
"""

from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field

__all__ = [
    "AbsBookMetadata",
    "AbsItemsPage",
    "AbsLibrary",
    "AbsLibraryItem",
    "AbsLibraryList",
    "AbsSearchHit",
    "AbsSearchResponse",
    "AbsServerStatus",
    "AbsUser",
    "AbsUserList",
]

# Audiobookshelf sends null for timestamps that were never set
NullableInt = Annotated[int, BeforeValidator(lambda v: 0 if v is None else v)]
NullableStr = Annotated[str, BeforeValidator(lambda v: "" if v is None else v)]
NullableList = Annotated[
    list[dict[str, Any]], BeforeValidator(lambda v: [] if v is None else v)
]
NullableStrList = Annotated[
    list[str], BeforeValidator(lambda v: [] if v is None else v)
]


class AbsModel(BaseModel):
    """Base model for Audiobookshelf responses."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class AbsServerStatus(AbsModel):
    """Response from GET /status."""

    app: NullableStr = ""
    server_version: NullableStr = Field(default="", alias="serverVersion")
    api_version: NullableStr = Field(default="", alias="apiVersion")
    language: NullableStr = ""
    is_init: bool = Field(default=False, alias="isInit")


class AbsFolder(AbsModel):
    """Folder mapped into a library."""

    id: str
    full_path: NullableStr = Field(
        default="", validation_alias=AliasChoices("fullPath", "path")
    )


class AbsLibrary(AbsModel):
    """Library entry from GET /api/libraries."""

    id: str
    name: NullableStr = ""
    folders: list[AbsFolder] = Field(default_factory=list)
    display_order: NullableInt = Field(default=0, alias="displayOrder")
    icon: NullableStr = ""
    media_type: NullableStr = Field(default="", alias="mediaType")
    provider: NullableStr = ""
    last_scan: NullableInt = Field(default=0, alias="lastScan")
    created_at: NullableInt = Field(default=0, alias="createdAt")
    updated_at: NullableInt = Field(
        default=0, validation_alias=AliasChoices("lastUpdate", "updatedAt")
    )


class AbsLibraryList(AbsModel):
    """Response from GET /api/libraries."""

    libraries: list[AbsLibrary] = Field(default_factory=list)


class AbsItemsPage(AbsModel):
    """Response from GET /api/libraries/{id}/items (only the total is used)."""

    total: NullableInt = 0


class AbsBookMetadata(AbsModel):
    """Subset of a library item's media metadata."""

    title: NullableStr = ""
    author_name: NullableStr = Field(default="", alias="authorName")
    description: NullableStr = ""
    genres: NullableStrList = Field(default_factory=list)
    published_year: NullableStr = Field(default="", alias="publishedYear")


class AbsMedia(AbsModel):
    """Media block of a library item."""

    metadata: AbsBookMetadata = Field(default_factory=AbsBookMetadata)
    duration: float | None = None


class AbsLibraryItem(AbsModel):
    """Library item as embedded in search results."""

    id: NullableStr = ""
    library_id: NullableStr = Field(default="", alias="libraryId")
    path: NullableStr = ""
    rel_path: NullableStr = Field(default="", alias="relPath")
    size: NullableInt = 0
    added_at: NullableInt = Field(default=0, alias="addedAt")
    media_type: NullableStr = Field(default="", alias="mediaType")
    media: AbsMedia = Field(default_factory=AbsMedia)


class AbsSearchHit(AbsModel):
    """One hit of a library search."""

    library_item: AbsLibraryItem = Field(alias="libraryItem")


class AbsSearchResponse(AbsModel):
    """Response from GET /api/libraries/{id}/search."""

    book: list[AbsSearchHit] = Field(default_factory=list)
    podcast: list[AbsSearchHit] = Field(default_factory=list)

    @property
    def hits(self) -> list[AbsSearchHit]:
        """Book and podcast hits in response order."""
        return [*self.book, *self.podcast]


class AbsUser(AbsModel):
    """User from GET /api/users or GET /api/me."""

    id: str
    username: NullableStr = ""
    type: NullableStr = ""
    is_active: bool = Field(default=False, alias="isActive")
    last_seen: NullableInt = Field(default=0, alias="lastSeen")
    created_at: NullableInt = Field(default=0, alias="createdAt")
    updated_at: NullableInt = Field(default=0, alias="updatedAt")
    media_progress: NullableList = Field(
        default_factory=list, alias="mediaProgress"
    )


class AbsUserList(AbsModel):
    """Response from GET /api/users."""

    users: list[AbsUser] = Field(default_factory=list)
