"""Business logic services for mediahub.

Public API:
    MediaServerManager - Fan-out across every configured media server
    LibraryStatsService - Cached libraries-with-item-counts for one server
"""

from mediahub.services.library_stats import LibraryStatsService
from mediahub.services.manager import MediaServerManager

__all__ = [
    "LibraryStatsService",
    "MediaServerManager",
]
