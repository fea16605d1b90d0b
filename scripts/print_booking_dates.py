#!/usr/bin/env python3
"""
Verification script to print the booking dates the E2E suite will select.

Usage:
    python scripts/print_booking_dates.py
    python scripts/print_booking_dates.py --today 2024-12-31 --timezone Europe/London

Output:
    Check-in and check-out dates with the calendar aria labels the page
    objects click and the abbreviated display labels used in logs.
"""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.utils.dates import (  # noqa: E402
    CHECK_IN_LEAD_DAYS,
    STAY_NIGHTS,
    booking_date_range,
    format_for_display,
)
from src.utils.timezone import now_local  # noqa: E402


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Print the check-in/check-out labels the booking E2E suite will use."
    )
    parser.add_argument(
        "--today",
        type=date.fromisoformat,
        help="Reference date as YYYY-MM-DD (default: the real clock)",
    )
    parser.add_argument(
        "--timezone",
        help="Olson timezone for 'today' when --today is not given (default: process local)",
    )
    parser.add_argument(
        "--nights",
        type=int,
        default=STAY_NIGHTS,
        help=f"Length of stay in nights (default: {STAY_NIGHTS})",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        today = args.today or now_local(args.timezone).date()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    date_range = booking_date_range(
        now=today, lead_days=CHECK_IN_LEAD_DAYS, stay_nights=args.nights
    )

    print("\n" + "=" * 60)
    print("BOOKING DATES")
    print("=" * 60)
    print(f"Today:      {format_for_display(today)}")
    print(f"Nights:     {date_range.nights}")
    print("-" * 60)
    print(f"Check-in:   {date_range.check_in.isoformat()}  ({format_for_display(date_range.check_in)})")
    print(f"  aria:     {date_range.check_in_label}")
    print(f"Check-out:  {date_range.check_out.isoformat()}  ({format_for_display(date_range.check_out)})")
    print(f"  aria:     {date_range.check_out_label}")
    print("=" * 60 + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
