"""Enumerations for mediahub domain models."""

from enum import StrEnum


class ServerType(StrEnum):
    """Supported media server backends."""

    AUDIOBOOKSHELF = "audiobookshelf"
    EMBY = "emby"

    @property
    def label(self) -> str:
        """Human-readable label for display."""
        match self:
            case ServerType.AUDIOBOOKSHELF:
                return "Audiobookshelf"
            case ServerType.EMBY:
                return "Emby"
