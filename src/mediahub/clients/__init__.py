"""HTTP clients speaking each media server's native API.

Clients return raw bytes or native response models; translation into the
canonical model happens in ``mediahub.adapters``.
"""

from mediahub.clients.audiobookshelf import AudiobookshelfClient
from mediahub.clients.emby import EmbyClient
from mediahub.clients.http import MediaServerHTTPClient

__all__ = [
    "AudiobookshelfClient",
    "EmbyClient",
    "MediaServerHTTPClient",
]
