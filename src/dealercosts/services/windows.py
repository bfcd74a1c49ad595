"""Projection windows: the forward-looking intervals costs are forecast over."""

from __future__ import annotations

import math
from calendar import monthrange
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date, datetime, time

QUARTER_MONTHS = 3
YEAR_MONTHS = 12

SECONDS_PER_DAY = 24 * 60 * 60


def start_of_day(value: date | datetime) -> datetime:
    """Return midnight of the calendar day of ``value`` (naive, local)."""

    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time.min)


def end_of_day(value: date | datetime) -> datetime:
    """Return the last representable instant of the calendar day of ``value``."""

    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time.max)


def add_months(value: date, months: int) -> date:
    """Shift ``value`` by whole months, clamping to the last day of short months.

    Results past the supported calendar saturate at ``date.max`` / ``date.min``.
    """

    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    if year > MAXYEAR:
        return date.max
    if year < MINYEAR:
        return date.min
    month = month_index % 12 + 1
    day = min(value.day, monthrange(year, month)[1])
    return date(year, month, day)


def days_between(start: datetime, end: datetime) -> float:
    """Elapsed time between two instants, in (fractional) days."""

    return (end - start).total_seconds() / SECONDS_PER_DAY


@dataclass(frozen=True, slots=True)
class ProjectionWindow:
    """Closed interval ``[start, end]`` a cost is projected over.

    Plain dates are widened to whole days: ``start`` to 00:00 and ``end`` to
    23:59:59.999999. Datetimes keep their wall-clock value with any tzinfo dropped.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if not isinstance(self.start, datetime):
            object.__setattr__(self, "start", start_of_day(self.start))
        if not isinstance(self.end, datetime):
            object.__setattr__(self, "end", end_of_day(self.end))
        # Record dates are naive wall-clock midnights; aware bounds keep their wall-clock time
        if self.start.tzinfo is not None:
            object.__setattr__(self, "start", self.start.replace(tzinfo=None))
        if self.end.tzinfo is not None:
            object.__setattr__(self, "end", self.end.replace(tzinfo=None))

    @property
    def days(self) -> int:
        """Whole days covered, rounded up, never less than one."""
        return max(1, math.ceil(days_between(self.start, self.end)))


def reference_day(now: date | datetime | None = None) -> datetime:
    """Normalize the projection reference instant to local start-of-day."""

    return start_of_day(now if now is not None else datetime.now())


def window_for_months(now: date | datetime | None, months: int) -> ProjectionWindow:
    """Window from start of ``now``'s day to the end of the day ``months`` later."""

    start = reference_day(now)
    end = end_of_day(add_months(start.date(), months))
    return ProjectionWindow(start=start, end=end)


def quarter_window(now: date | datetime | None = None) -> ProjectionWindow:
    """The next-quarter window: now to now + 3 months."""
    return window_for_months(now, QUARTER_MONTHS)


def year_window(now: date | datetime | None = None) -> ProjectionWindow:
    """The next-year window: now to now + 12 months."""
    return window_for_months(now, YEAR_MONTHS)


def standard_windows(now: date | datetime | None = None) -> dict[str, ProjectionWindow]:
    """Both standard projection windows, keyed ``quarterly`` and ``yearly``."""

    return {"quarterly": quarter_window(now), "yearly": year_window(now)}
