"""Models for parsing Emby API responses.

These are internal models used to parse and validate responses from
the Emby REST API. They may change if the API changes.
"""

from typing import Annotated

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field

__all__ = [
    "EmbyItem",
    "EmbyItemsPage",
    "EmbyMediaFolder",
    "EmbyMediaFolders",
    "EmbySystemInfo",
    "EmbyUser",
    "EmbyUserPolicy",
]

NullableInt = Annotated[int, BeforeValidator(lambda v: 0 if v is None else v)]
NullableStr = Annotated[str, BeforeValidator(lambda v: "" if v is None else v)]
NullableStrList = Annotated[
    list[str], BeforeValidator(lambda v: [] if v is None else v)
]


class EmbyModel(BaseModel):
    """Base model for Emby responses."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class EmbySystemInfo(EmbyModel):
    """Response from GET /System/Info."""

    id: NullableStr = Field(default="", alias="Id")
    server_name: NullableStr = Field(default="", alias="ServerName")
    version: NullableStr = Field(default="", alias="Version")
    operating_system: NullableStr = Field(default="", alias="OperatingSystem")
    architecture: NullableStr = Field(
        default="", validation_alias=AliasChoices("SystemArchitecture", "Architecture")
    )
    local_address: NullableStr = Field(default="", alias="LocalAddress")
    wan_address: NullableStr = Field(default="", alias="WanAddress")
    has_https: bool = Field(default=False, alias="HasHttps")
    is_shutting_down: bool = Field(default=False, alias="IsShuttingDown")


class EmbyUserPolicy(EmbyModel):
    """Subset of a user's access policy."""

    is_administrator: bool = Field(default=False, alias="IsAdministrator")
    is_hidden: bool = Field(default=False, alias="IsHidden")
    is_disabled: bool = Field(default=False, alias="IsDisabled")


class EmbyUser(EmbyModel):
    """User from GET /Users or GET /Users/Me."""

    id: str = Field(alias="Id")
    name: NullableStr = Field(default="", alias="Name")
    date_created: NullableStr = Field(default="", alias="DateCreated")
    last_login_date: NullableStr = Field(default="", alias="LastLoginDate")
    last_activity_date: NullableStr = Field(default="", alias="LastActivityDate")
    has_configured_password: bool = Field(
        default=False, alias="HasConfiguredPassword"
    )
    policy: EmbyUserPolicy = Field(default_factory=EmbyUserPolicy, alias="Policy")


class EmbyMediaFolder(EmbyModel):
    """Media folder (library) from GET /Library/MediaFolders."""

    id: str = Field(alias="Id")
    name: NullableStr = Field(default="", alias="Name")
    collection_type: NullableStr = Field(default="", alias="CollectionType")
    date_created: NullableStr = Field(default="", alias="DateCreated")
    date_modified: NullableStr = Field(default="", alias="DateModified")


class EmbyMediaFolders(EmbyModel):
    """Response from GET /Library/MediaFolders."""

    items: list[EmbyMediaFolder] = Field(default_factory=list, alias="Items")


class EmbyItem(EmbyModel):
    """Item from GET /Items."""

    id: str = Field(alias="Id")
    name: NullableStr = Field(default="", alias="Name")
    type: NullableStr = Field(default="", alias="Type")
    is_folder: bool = Field(default=False, alias="IsFolder")
    size: NullableInt = Field(default=0, alias="Size")
    date_created: NullableStr = Field(default="", alias="DateCreated")
    parent_id: NullableStr = Field(default="", alias="ParentId")
    path: NullableStr = Field(default="", alias="Path")
    production_year: NullableInt = Field(default=0, alias="ProductionYear")
    premiere_date: NullableStr = Field(default="", alias="PremiereDate")
    overview: NullableStr = Field(default="", alias="Overview")
    genres: NullableStrList = Field(default_factory=list, alias="Genres")
    media_type: NullableStr = Field(default="", alias="MediaType")
    run_time_ticks: NullableInt = Field(default=0, alias="RunTimeTicks")
    album_artist: NullableStr = Field(default="", alias="AlbumArtist")
    artists: NullableStrList = Field(default_factory=list, alias="Artists")


class EmbyItemsPage(EmbyModel):
    """Response from GET /Items."""

    items: list[EmbyItem] = Field(default_factory=list, alias="Items")
    total_record_count: NullableInt = Field(default=0, alias="TotalRecordCount")
