"""
Timezone utilities for the hotel booking E2E suite.

Provides helpers to obtain the current time either in the process's local
timezone or in an explicitly configured Olson zone, so that "today" matches
the hotel's calendar when the suite runs on CI machines set to UTC.
"""

from datetime import datetime
from typing import Optional

import pytz


def resolve_timezone(name: Optional[str]):
    """
    Resolve an Olson timezone name (e.g. "Europe/London") to a tzinfo.

    Args:
        name: Timezone name, or None/empty for the process local timezone.

    Returns:
        pytz timezone instance, or None when no name is given.

    Raises:
        ValueError: If the name is not a known timezone.
    """
    if not name:
        return None
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError as e:
        raise ValueError(f"Unknown timezone: {name}") from e


def now_local(tz_name: Optional[str] = None, aware: bool = False) -> datetime:
    """
    Return the current time in the configured timezone.

    Args:
        tz_name: Olson timezone name. When None, the process local time is used.
        aware: When True, returns a timezone-aware datetime. When False (default),
            returns a naive datetime so calendar arithmetic stays on wall-clock fields.

    Returns:
        datetime: Current time.
    """
    tz = resolve_timezone(tz_name)
    if tz is None:
        current = datetime.now().astimezone()
    else:
        current = datetime.now(pytz.utc).astimezone(tz)
    return current if aware else current.replace(tzinfo=None)
