"""Timezone and calendar-date utilities (US/Eastern business time)."""

from datetime import date, datetime

import pytz
from dateutil import parser as date_parser

EASTERN_TZ = pytz.timezone("US/Eastern")


def now_eastern() -> datetime:
    """Return current time in US/Eastern timezone."""
    return datetime.now(EASTERN_TZ)


def today_eastern() -> date:
    """Return the current calendar date in US/Eastern."""
    return now_eastern().date()


def to_eastern(dt: datetime) -> datetime:
    """Convert a datetime to US/Eastern timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already Eastern
        return EASTERN_TZ.localize(dt)
    return dt.astimezone(EASTERN_TZ)


def parse_transaction_date(value: str) -> date:
    """
    Parse a transaction date, dropping any time component.

    Accepts plain dates ("2024-06-01") as well as full timestamps
    ("2024-06-01T15:30:00Z"); timestamps are converted to Eastern first so
    the calendar date matches the business day the posting was made on.
    """
    dt = date_parser.parse(value)
    if dt.tzinfo is not None:
        dt = dt.astimezone(EASTERN_TZ)
    return dt.date()
