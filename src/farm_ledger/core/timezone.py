"""Timezone utilities for ledger dates.

Dates are stored as naive datetimes expressed in the configured local
timezone (``Settings.timezone``).
"""

from datetime import datetime
from typing import Optional

import pytz
from dateutil import parser as date_parser

from farm_ledger.config.settings import get_settings


def get_local_tz() -> pytz.BaseTzInfo:
    """Return the configured local timezone."""
    return pytz.timezone(get_settings().timezone)


def now_local() -> datetime:
    """Return the current local time as a naive datetime."""
    return datetime.now(get_local_tz()).replace(tzinfo=None)


def to_local(dt: datetime) -> datetime:
    """Convert a datetime to naive local time."""
    if dt.tzinfo is None:
        # Assume naive datetime is already local
        return dt
    return dt.astimezone(get_local_tz()).replace(tzinfo=None)


def parse_datetime_local(value: str, default_tz: Optional[pytz.BaseTzInfo] = None) -> datetime:
    """
    Parse a datetime string and return it as naive local time.

    If no timezone is provided in the string, assumes local time
    (or ``default_tz`` when given).
    """
    dt = date_parser.parse(value)
    if dt.tzinfo is None and default_tz is not None:
        dt = default_tz.localize(dt)
    return to_local(dt)
