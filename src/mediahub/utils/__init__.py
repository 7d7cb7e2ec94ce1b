"""Utility functions for mediahub.

Available via `from mediahub.utils import ...`.
Not re-exported at the top-level `mediahub` package.
"""

from mediahub.utils.dates import iso_to_millis
from mediahub.utils.format import format_bytes, format_duration, media_type_icon

__all__ = [
    "format_bytes",
    "format_duration",
    "iso_to_millis",
    "media_type_icon",
]
