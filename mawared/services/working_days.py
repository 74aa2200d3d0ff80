"""
Working-day arithmetic for leave requests.

A leave range is counted in working days: every calendar date between the
start and end (both inclusive) whose weekday is not part of the configured
weekend. The default weekend is Friday and Saturday.
"""
import enum
from datetime import date, datetime, timedelta
from typing import FrozenSet, Iterable, Optional, Union

from mawared.core.config import settings
from mawared.core.exceptions import InvalidRangeError


class Weekday(enum.IntEnum):
    """Weekdays numbered like ``date.weekday()``."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def parse(cls, value: Union[str, int, "Weekday"]) -> "Weekday":
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        name = value.strip().upper()
        for day in cls:
            if day.name == name or day.name[:3] == name:
                return day
        raise ValueError(f"Unknown weekday: {value!r}")


DEFAULT_WEEKEND: FrozenSet[Weekday] = frozenset({Weekday.FRIDAY, Weekday.SATURDAY})


def parse_weekend_days(value: Optional[str]) -> FrozenSet[Weekday]:
    """Parse a comma-separated list such as ``"fri,sat"``. Empty means no weekend."""
    if value is None:
        return DEFAULT_WEEKEND
    return frozenset(Weekday.parse(part) for part in value.split(",") if part.strip())


def configured_weekend() -> FrozenSet[Weekday]:
    return parse_weekend_days(settings.weekend_days)


def _as_date(value: date) -> date:
    # datetime is a subclass of date; only the calendar day matters
    if isinstance(value, datetime):
        return value.date()
    return value


def count_working_days(
    start_date: date,
    end_date: date,
    weekend_days: Optional[Iterable[Union[Weekday, int, str]]] = None,
) -> int:
    """
    Count the dates in [start_date, end_date] that are not weekend days.

    Raises:
        InvalidRangeError: if start_date is after end_date.
    """
    start = _as_date(start_date)
    end = _as_date(end_date)
    if start > end:
        raise InvalidRangeError(start, end)

    weekend = configured_weekend() if weekend_days is None else {Weekday.parse(d) for d in weekend_days}

    count = 0
    current = start
    while current <= end:
        if current.weekday() not in weekend:
            count += 1
        current += timedelta(days=1)
    return count
