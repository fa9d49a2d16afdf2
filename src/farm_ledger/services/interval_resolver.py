"""Translate named query intervals into concrete time windows."""

import calendar
from datetime import datetime, time, timedelta
from typing import Callable, Optional, Union

from dateutil.parser import ParserError

from farm_ledger.core.exceptions import ValidationError
from farm_ledger.core.timezone import now_local, parse_datetime_local, to_local
from farm_ledger.domain.models import IntervalType
from farm_ledger.domain.views import TimeWindow

DateInput = Optional[Union[str, datetime]]

EPOCH = datetime(1970, 1, 1)
END_OF_DAY = time(23, 59, 59, 999000)


def start_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.min)


def end_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), END_OF_DAY)


def _daily(now: datetime) -> TimeWindow:
    return TimeWindow(start=start_of_day(now), end=end_of_day(now))


def _weekly(now: datetime) -> TimeWindow:
    # Weeks run Sunday..Saturday; weekday() counts from Monday=0
    days_since_sunday = (now.weekday() + 1) % 7
    sunday = start_of_day(now) - timedelta(days=days_since_sunday)
    saturday = sunday + timedelta(days=6)
    return TimeWindow(start=sunday, end=end_of_day(saturday))


def _monthly(now: datetime) -> TimeWindow:
    last_day = calendar.monthrange(now.year, now.month)[1]
    return TimeWindow(
        start=datetime(now.year, now.month, 1),
        end=datetime.combine(now.date().replace(day=last_day), END_OF_DAY),
    )


def _yearly(now: datetime) -> TimeWindow:
    return TimeWindow(
        start=datetime(now.year, 1, 1),
        end=datetime.combine(now.date().replace(month=12, day=31), END_OF_DAY),
    )


def _all(now: datetime) -> TimeWindow:
    return TimeWindow(start=EPOCH, end=None)


_CURRENT_PERIOD: dict[IntervalType, Callable[[datetime], TimeWindow]] = {
    IntervalType.DAILY: _daily,
    IntervalType.WEEKLY: _weekly,
    IntervalType.MONTHLY: _monthly,
    IntervalType.YEARLY: _yearly,
    IntervalType.ALL: _all,
}


def _is_supplied(value: DateInput) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def parse_bound(value: DateInput, field: str) -> datetime:
    """Parse one window bound, raising ValidationError naming ``field``."""
    if isinstance(value, datetime):
        return to_local(value)
    try:
        return parse_datetime_local(value)
    except (ParserError, ValueError, OverflowError, TypeError) as exc:
        raise ValidationError(f"{field} is not a valid date: {value!r}", field=field) from exc


def _explicit_window(start_date: DateInput, end_date: DateInput) -> TimeWindow:
    start = parse_bound(start_date, "startDate")
    end = parse_bound(end_date, "endDate")
    if start > end:
        raise ValidationError("startDate must not be after endDate", field="startDate")
    return TimeWindow(start=start, end=end)


def resolve_window(
    interval: Union[str, IntervalType],
    start_date: DateInput = None,
    end_date: DateInput = None,
    now: Optional[datetime] = None,
) -> TimeWindow:
    """
    Resolve ``interval`` (plus optional explicit bounds) into a TimeWindow.

    - daily / weekly: the current day / Sunday-to-Saturday week; bounds ignored
    - monthly / yearly: explicit bounds when both are supplied, otherwise the
      current month / year
    - all: from the epoch, no upper bound
    - interval: explicit bounds, both required

    A supplied bound that does not parse is always a ValidationError, never
    a silent fallback to the default window.
    """
    try:
        kind = IntervalType(interval)
    except ValueError:
        raise ValidationError(f"invalid interval: {interval!r}", field="interval") from None

    current = to_local(now) if now is not None else now_local()

    if kind == IntervalType.INTERVAL:
        if not _is_supplied(start_date):
            raise ValidationError("startDate is required for a custom interval", field="startDate")
        if not _is_supplied(end_date):
            raise ValidationError("endDate is required for a custom interval", field="endDate")
        return _explicit_window(start_date, end_date)

    if kind in (IntervalType.MONTHLY, IntervalType.YEARLY):
        has_start = _is_supplied(start_date)
        has_end = _is_supplied(end_date)
        if has_start and has_end:
            return _explicit_window(start_date, end_date)
        # A lone bound is not honored, but it must still be a real date
        if has_start:
            parse_bound(start_date, "startDate")
        if has_end:
            parse_bound(end_date, "endDate")

    return _CURRENT_PERIOD[kind](current)
