"""Display formatting for creation timestamps."""

import logging
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

# RFC 822 style with a four digit year and numeric zone, e.g. "02 Jan 2006 15:04 -0700"
DISPLAY_FORMAT = "%d %b %Y %H:%M %z"


def format_created_at(dt: datetime, tz_name: Optional[str] = None) -> str:
    """Render a UTC timestamp in the client's timezone.

    Args:
        dt: Timestamp from the store (naive values are taken as UTC)
        tz_name: IANA timezone name, e.g. "Europe/Madrid"; UTC when missing or unknown

    Returns:
        Formatted timestamp
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    tz = timezone.utc
    if tz_name:
        try:
            tz = ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            logger.debug(f"Unknown timezone {tz_name!r}, using UTC")

    return dt.astimezone(tz).strftime(DISPLAY_FORMAT)
