"""
Timezone utilities for the backend.
All timestamps should be stored as timezone-aware UTC; booking and
availability wall-clock times are local to the provider's timezone.
"""
import logging
from datetime import date, datetime, time, timezone
from typing import Optional

import pytz

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-aware datetime.

    This should be used instead of datetime.utcnow() which returns
    a naive datetime that can be misinterpreted by PostgreSQL.
    """
    return datetime.now(timezone.utc)


def get_timezone(timezone_name: Optional[str]) -> pytz.BaseTzInfo:
    """
    Resolve an IANA timezone name, falling back to UTC for unknown names.
    """
    if not timezone_name:
        return pytz.UTC
    try:
        return pytz.timezone(timezone_name)
    except pytz.UnknownTimeZoneError:
        logger.warning("Unknown timezone '%s', using UTC", timezone_name)
        return pytz.UTC


def localize(day: date, wall_time: time, tz: pytz.BaseTzInfo) -> datetime:
    """
    Combine a calendar date and a wall-clock time into an aware datetime in tz.
    """
    return tz.localize(datetime.combine(day, wall_time))
