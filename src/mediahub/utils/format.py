"""Display formatting helpers for sizes, durations and media types."""

_BYTE_UNITS = (
    ("TB", 1024**4),
    ("GB", 1024**3),
    ("MB", 1024**2),
    ("KB", 1024),
)

_MEDIA_TYPE_ICONS = {
    "movie": "🎬",
    "movies": "🎬",
    "series": "📺",
    "episode": "📺",
    "tvshows": "📺",
    "music": "🎧",
    "audio": "🎧",
    "audiobook": "🎧",
    "book": "🎧",
    "musicalbum": "💿",
    "folder": "📁",
    "photo": "🖼️",
    "image": "🖼️",
    "podcast": "🎙️",
    "boxsets": "📦",
}
_DEFAULT_ICON = "🎭"


def format_bytes(size: int) -> str:
    """Format a byte count with binary units.

    Args:
        size: Size in bytes.

    Returns:
        "512 B", "1.50 KB", "2.00 GB"...
    """
    for unit, factor in _BYTE_UNITS:
        if size >= factor:
            return f"{size / factor:.2f} {unit}"
    return f"{size} B"


def format_duration(seconds: float) -> str:
    """Format a duration as "1d 2h 3m 4s", omitting leading zero units.

    Args:
        seconds: Duration in seconds. Fractions are truncated.

    Returns:
        Human-readable duration, "0s" for zero or negative input.
    """
    minutes, secs = divmod(max(int(seconds), 0), 60)
    hours, minutes = divmod(minutes, 60)
    days, hours = divmod(hours, 24)
    if days:
        return f"{days}d {hours}h {minutes}m {secs}s"
    if hours:
        return f"{hours}h {minutes}m {secs}s"
    if minutes:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def media_type_icon(media_type: str) -> str:
    """Return an emoji for a library or item type (case-insensitive)."""
    return _MEDIA_TYPE_ICONS.get(media_type.lower(), _DEFAULT_ICON)
