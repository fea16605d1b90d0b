"""
Date generation utilities for booking calendar automation.

The calendar widget under test exposes each day cell with an accessible label
such as "Friday, June 21, 2024". Tests locate the cell to click by that label,
so the aria-label renderer here must match the widget byte for byte (en-US).

Every function accepts an optional ``now`` so callers and tests can pin the
reference instant. When omitted, the real clock is read on each call.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Union

from src.utils.timezone import now_local

DateLike = Union[date, datetime]

# Booking policy: check-in is tomorrow, stay is one week.
CHECK_IN_LEAD_DAYS = 1
STAY_NIGHTS = 7
CHECK_OUT_OFFSET_DAYS = CHECK_IN_LEAD_DAYS + STAY_NIGHTS

# Fixed en-US names so output never depends on the process locale.
WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True)
class BookingDateRange:
    """
    Check-in/check-out bundle for a booking search.

    Attributes:
        check_in: Calendar date of arrival
        check_out: Calendar date of departure
        check_in_label: Aria label of the check-in day cell
        check_out_label: Aria label of the check-out day cell
    """

    check_in: date
    check_out: date
    check_in_label: str
    check_out_label: str

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days


def _today(now: Optional[DateLike] = None) -> date:
    if now is None:
        now = now_local()
    if isinstance(now, datetime):
        return now.date()
    return now


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def future_date(days_from_today: int, now: Optional[DateLike] = None) -> date:
    """
    Get the calendar date ``days_from_today`` days after today.

    Zero and negative offsets are allowed. Month/year rollover and leap years
    follow ordinary calendar arithmetic.

    Example:
        >>> future_date(1, now=date(2024, 12, 31))
        datetime.date(2025, 1, 1)
    """
    return _today(now) + timedelta(days=days_from_today)


def format_for_aria_label(value: DateLike) -> str:
    """
    Format a date the way the calendar widget labels its day cells.

    Example:
        >>> format_for_aria_label(date(2024, 6, 21))
        'Friday, June 21, 2024'
    """
    d = _as_date(value)
    return f"{WEEKDAY_NAMES[d.weekday()]}, {MONTH_NAMES[d.month - 1]} {d.day}, {d.year}"


def format_for_display(value: DateLike) -> str:
    """
    Format a date with abbreviated names for logs and reports.

    Example:
        >>> format_for_display(date(2024, 6, 21))
        'Fri, Jun 21, 2024'
    """
    d = _as_date(value)
    return f"{WEEKDAY_NAMES[d.weekday()][:3]}, {MONTH_NAMES[d.month - 1][:3]} {d.day}, {d.year}"


def tomorrow_aria_label(now: Optional[DateLike] = None) -> str:
    """Get tomorrow's date formatted for aria-label matching."""
    return format_for_aria_label(future_date(CHECK_IN_LEAD_DAYS, now))


def check_out_aria_label(now: Optional[DateLike] = None) -> str:
    """Get the check-out date (check-in + stay) formatted for aria-label matching."""
    return format_for_aria_label(future_date(CHECK_OUT_OFFSET_DAYS, now))


def booking_date_range(
    now: Optional[DateLike] = None,
    lead_days: int = CHECK_IN_LEAD_DAYS,
    stay_nights: int = STAY_NIGHTS,
) -> BookingDateRange:
    """
    Build the check-in/check-out bundle for a booking search.

    Today is read once so both dates share the same reference even when the
    call straddles midnight.

    Args:
        now: Reference instant (defaults to the real clock)
        lead_days: Days between today and check-in
        stay_nights: Length of stay in nights

    Returns:
        BookingDateRange with dates and their aria labels
    """
    today = _today(now)
    check_in = future_date(lead_days, today)
    check_out = future_date(lead_days + stay_nights, today)

    return BookingDateRange(
        check_in=check_in,
        check_out=check_out,
        check_in_label=format_for_aria_label(check_in),
        check_out_label=format_for_aria_label(check_out),
    )
