"""Data models for mediahub.

Public API:
    ServerInfo, UserInfo, LibraryInfo, LibraryWithStats, SearchResult -
        Canonical, backend-agnostic entities
    ServerType - Media server backend enum

Internal (not exported):
    audiobookshelf.py - Models for parsing Audiobookshelf responses
    emby.py - Models for parsing Emby responses
"""

from mediahub.models.domain import (
    LibraryInfo,
    LibraryWithStats,
    SearchResult,
    ServerInfo,
    UserInfo,
)
from mediahub.models.enums import ServerType

__all__ = [
    "LibraryInfo",
    "LibraryWithStats",
    "SearchResult",
    "ServerInfo",
    "ServerType",
    "UserInfo",
]
