"""
Domain models for business window and holiday calculations.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Iterable, Iterator, Optional

import pendulum
from pendulum import DateTime

from .exceptions import ConfigurationError, InputOrderError

# 5=Saturday, 6=Sunday
WEEKEND_DAYS = frozenset({5, 6})


def to_datetime(value: datetime | date) -> DateTime:
    """Normalize a stdlib or pendulum value to a pendulum DateTime."""
    if isinstance(value, datetime):
        return pendulum.instance(value)
    if isinstance(value, date):
        return pendulum.datetime(value.year, value.month, value.day)
    raise TypeError(f"Expected a datetime, got {type(value).__name__}")


def _as_date(value: date) -> date:
    # datetime is a subclass of date; strip the time part before hashing
    return date(value.year, value.month, value.day)


@dataclass(frozen=True)
class BusinessWindow:
    """
    Daily working period ``[start_hour, end_hour)``.

    Invariant: 0 <= start_hour < end_hour <= 24.
    """
    start_hour: int = 9
    end_hour: int = 17

    def __post_init__(self):
        for name in ("start_hour", "end_hour"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer hour, got {value!r}")
            if not 0 <= value <= 24:
                raise ConfigurationError(f"{name} must be between 0 and 24, got {value}")
        if self.start_hour >= self.end_hour:
            raise ConfigurationError(
                f"Business window must open before it closes, "
                f"got {self.start_hour}:00 - {self.end_hour}:00"
            )

    @property
    def hours_per_day(self) -> int:
        """Number of business hours in one full business day."""
        return self.end_hour - self.start_hour

    def contains_hour(self, hour: int) -> bool:
        """Check if a clock hour falls inside the window."""
        return self.start_hour <= hour < self.end_hour

    def __str__(self) -> str:
        return f"{self.start_hour:02d}:00 - {self.end_hour:02d}:00"


class HolidaySet:
    """
    Immutable set of non-working calendar dates.

    Membership is a hash lookup; range counts use a sorted index of the
    holidays that fall on weekdays (weekend holidays never change a count).
    ``covered_from``/``covered_to`` optionally describe the period the
    calendar is authoritative for.
    """

    __slots__ = ("_dates", "_weekday_index", "_covered_from", "_covered_to")

    def __init__(
        self,
        dates: Iterable[date] = (),
        covered_from: Optional[date] = None,
        covered_to: Optional[date] = None,
    ) -> None:
        normalized = frozenset(_as_date(d) for d in dates)
        if covered_from is not None and covered_to is not None and covered_from > covered_to:
            raise ConfigurationError(
                f"Holiday coverage starts after it ends: {covered_from} > {covered_to}"
            )
        self._dates = normalized
        self._weekday_index = tuple(sorted(d for d in normalized if d.weekday() not in WEEKEND_DAYS))
        self._covered_from = _as_date(covered_from) if covered_from is not None else None
        self._covered_to = _as_date(covered_to) if covered_to is not None else None

    @classmethod
    def for_years(cls, dates: Iterable[date], years: Iterable[int]) -> "HolidaySet":
        """Build a set whose coverage spans the given calendar years."""
        year_list = sorted(set(years))
        if not year_list:
            return cls(dates)
        return cls(
            dates,
            covered_from=date(year_list[0], 1, 1),
            covered_to=date(year_list[-1], 12, 31),
        )

    @property
    def covered_from(self) -> Optional[date]:
        return self._covered_from

    @property
    def covered_to(self) -> Optional[date]:
        return self._covered_to

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, date):
            return False
        return _as_date(item) in self._dates

    def __len__(self) -> int:
        return len(self._dates)

    def __iter__(self) -> Iterator[date]:
        return iter(sorted(self._dates))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HolidaySet):
            return NotImplemented
        return (
            self._dates == other._dates
            and self._covered_from == other._covered_from
            and self._covered_to == other._covered_to
        )

    def __hash__(self) -> int:
        return hash((self._dates, self._covered_from, self._covered_to))

    def __repr__(self) -> str:
        return f"HolidaySet({len(self._dates)} dates, covered {self._covered_from} - {self._covered_to})"

    def is_business_day(self, day: date) -> bool:
        """A business day is neither a weekend day nor a holiday."""
        return day.weekday() not in WEEKEND_DAYS and day not in self

    def count_business_days(self, first: date, last: date) -> int:
        """
        Count business days in the inclusive range ``[first, last]``.

        Returns 0 for an empty range (``last < first``).
        """
        first = _as_date(first)
        last = _as_date(last)
        if last < first:
            return 0

        total_days = (last - first).days + 1
        full_weeks, remainder = divmod(total_days, 7)
        weekdays = full_weeks * 5
        start_weekday = first.weekday()
        for offset in range(remainder):
            if (start_weekday + offset) % 7 not in WEEKEND_DAYS:
                weekdays += 1

        lo = bisect_left(self._weekday_index, first)
        hi = bisect_right(self._weekday_index, last)
        return weekdays - (hi - lo)

    def covers(self, day: date) -> bool:
        """Check if the calendar is authoritative for the given date."""
        day = _as_date(day)
        if self._covered_from is not None and day < self._covered_from:
            return False
        if self._covered_to is not None and day > self._covered_to:
            return False
        return True


@dataclass(frozen=True)
class Interval:
    """
    The (start, end) pair being measured.

    Invariant: start must not be after end.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if self.start > self.end:
            raise InputOrderError(f"Start time {self.start} must not be after end time {self.end}")

    @classmethod
    def of(cls, start: datetime | date, end: datetime | date) -> "Interval":
        """Build an interval from any datetime-like values."""
        return cls(start=to_datetime(start), end=to_datetime(end))

    @property
    def same_day(self) -> bool:
        return self.start.date() == self.end.date()


@dataclass(frozen=True)
class CalculationOptions:
    """
    Edge-case policies for the calculator.

    clamp_to_window: never count clock hours after the window closes on the
        end day (or on the start day of a same-day interval).
    count_non_business_end_day: count the end day's elapsed hours even when
        the end date is a weekend or holiday (legacy behaviour).
    """
    clamp_to_window: bool = True
    count_non_business_end_day: bool = False


class StartDayCase(str, Enum):
    """How the start day of an interval was classified."""
    NON_BUSINESS_DAY = "non_business_day"
    AFTER_CLOSING = "after_closing"
    SAME_DAY = "same_day"
    MULTI_DAY = "multi_day"


@dataclass(frozen=True)
class HoursBreakdown:
    """
    Additive contributions making up a business hours result.
    """
    case: StartDayCase
    first_day_hours: int
    inbetween_hours: int
    last_day_hours: int
    business_days_between: int

    @property
    def total_hours(self) -> int:
        return self.first_day_hours + self.inbetween_hours + self.last_day_hours
