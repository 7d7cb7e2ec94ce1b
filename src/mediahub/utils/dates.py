"""Timestamp conversion helpers."""

import logging
import re
from datetime import UTC, datetime

logger = logging.getLogger(__name__)

# Emby sends 7 fractional digits (.NET ticks); datetime accepts at most 6
_EXTRA_FRACTION_DIGITS = re.compile(r"(\.\d{6})\d+")


def iso_to_millis(value: str | None) -> int:
    """Convert an ISO 8601 timestamp to milliseconds since the Unix epoch.

    Naive timestamps are read as UTC.

    Args:
        value: Timestamp such as "2024-01-15T10:30:00.0000000Z".

    Returns:
        Milliseconds since the epoch, or 0 for empty or unparseable input.
    """
    if not value:
        return 0
    try:
        parsed = datetime.fromisoformat(_EXTRA_FRACTION_DIGITS.sub(r"\1", value))
    except ValueError:
        logger.debug("Could not parse timestamp: %s", value)
        return 0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return int(parsed.timestamp()) * 1000 + parsed.microsecond // 1000
