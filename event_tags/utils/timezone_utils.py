"""
Timezone utilities for turning feed timestamps into site-local wall-clock values.

The feed reports start/end times as ISO 8601 strings carrying a UTC offset
(e.g. "2025-06-01T18:00:00+0200"). Sessions are stored timezone-naive in the
site's timezone, so every conversion goes through the helpers below.
"""

from datetime import date, datetime, time
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from dateutil import parser as dateutil_parser

DEFAULT_SITE_TIMEZONE = "Europe/Paris"


def get_site_timezone(tz_name: Optional[str] = None) -> ZoneInfo:
    return ZoneInfo(tz_name or DEFAULT_SITE_TIMEZONE)


def parse_feed_datetime(text: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO 8601 feed timestamp.

    Accepts the basic offset form used by the feed ("+0200") as well as the
    extended form ("+02:00") and "Z".

    Args:
        text: Timestamp string, may be None or blank

    Returns:
        Parsed datetime (aware if the string carried an offset), or None
    """
    if not text or not text.strip():
        return None
    try:
        return dateutil_parser.isoparse(text.strip())
    except (ValueError, OverflowError):
        return None


def to_site_naive(dt: datetime, tz_name: Optional[str] = None) -> datetime:
    """
    Convert a datetime to the site timezone and drop tzinfo.

    Naive datetimes are assumed to already be site-local wall-clock times.
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(get_site_timezone(tz_name)).replace(tzinfo=None)


def split_feed_datetime(
    text: Optional[str], tz_name: Optional[str] = None
) -> Optional[Tuple[date, time]]:
    """Return the site-local (date, time) pair for a feed timestamp."""
    dt = parse_feed_datetime(text)
    if dt is None:
        return None
    local = to_site_naive(dt, tz_name)
    return local.date(), local.time().replace(second=0, microsecond=0)

