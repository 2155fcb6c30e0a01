"""
Core business logic for calculating elapsed business hours.

This is the heart of the application - pure domain logic without any
external dependencies (no file access, no configuration loading, no I/O).
"""

from __future__ import annotations

import warnings
from datetime import date, datetime
from typing import Optional

from pendulum import DateTime

from .exceptions import CalendarGapWarning
from .models import (
    BusinessWindow,
    CalculationOptions,
    HolidaySet,
    HoursBreakdown,
    Interval,
    StartDayCase,
)


class BusinessHoursCalculator:
    """
    Calculates the whole business hours elapsed between two timestamps.

    Algorithm:
    1. Clamp the start clock hour up to the window opening (effective start)
    2. Count business days strictly between the start and end dates
    3. Classify the start day and pick first-day/last-day contributions
    4. Sum first-day, in-between and last-day hours

    Only the clock hour of each timestamp is used; minutes are truncated.
    """

    def __init__(
        self,
        window: BusinessWindow,
        holidays: Optional[HolidaySet] = None,
        options: Optional[CalculationOptions] = None,
    ):
        self.window = window
        self.holidays = holidays if holidays is not None else HolidaySet()
        self.options = options or CalculationOptions()

    def hours(self, start: datetime | date, end: datetime | date) -> int:
        """Return the total business hours between start and end."""
        return self._decompose(start, end, stacklevel=4).total_hours

    def breakdown(self, start: datetime | date, end: datetime | date) -> HoursBreakdown:
        """
        Decompose the interval into first-day, in-between and last-day hours.

        Raises:
            InputOrderError: If start is after end
        """
        return self._decompose(start, end, stacklevel=4)

    def _decompose(self, start: datetime | date, end: datetime | date, stacklevel: int) -> HoursBreakdown:
        # stacklevel is counted from the warning call in _check_coverage
        interval = Interval.of(start, end)
        self._check_coverage(interval, stacklevel)

        start_dt = interval.start
        end_dt = interval.end
        start_day = start_dt.date()
        end_day = end_dt.date()

        effective_start_hour = max(start_dt.hour, self.window.start_hour)

        # Step 2: full business days strictly between the two dates
        # Ordinal check first: date arithmetic overflows on 0001-01-01 and 9999-12-31
        if end_day.toordinal() - start_day.toordinal() >= 2:
            business_days = self.holidays.count_business_days(
                start_day.add(days=1),
                end_day.subtract(days=1),
            )
        else:
            business_days = 0
        inbetween_hours = business_days * self.window.hours_per_day

        # Step 3: start day classification, in precedence order
        if not self.holidays.is_business_day(start_day):
            case = StartDayCase.NON_BUSINESS_DAY
            first_day_hours = 0
        elif start_dt.hour >= self.window.end_hour:
            case = StartDayCase.AFTER_CLOSING
            first_day_hours = 0
        elif interval.same_day:
            return HoursBreakdown(
                case=StartDayCase.SAME_DAY,
                first_day_hours=self._elapsed_until(effective_start_hour, end_dt),
                inbetween_hours=0,
                last_day_hours=0,
                business_days_between=0,
            )
        else:
            case = StartDayCase.MULTI_DAY
            first_day_hours = self.window.end_hour - effective_start_hour

        if interval.same_day:
            # Start day is unusable and the interval never leaves it
            last_day_hours = 0
        else:
            last_day_hours = self._last_day_hours(end_dt)

        return HoursBreakdown(
            case=case,
            first_day_hours=first_day_hours,
            inbetween_hours=inbetween_hours,
            last_day_hours=last_day_hours,
            business_days_between=business_days,
        )

    def is_business_day(self, day: date) -> bool:
        """Check if a date is neither a weekend day nor a holiday."""
        return self.holidays.is_business_day(day)

    def _last_day_hours(self, end: DateTime) -> int:
        if not self.options.count_non_business_end_day and not self.holidays.is_business_day(end.date()):
            return 0
        return self._elapsed_until(self.window.start_hour, end)

    def _elapsed_until(self, from_hour: int, end: DateTime) -> int:
        """Whole hours from ``from_hour`` on the end date until ``end``, never negative."""
        end_hour = end.hour
        if self.options.clamp_to_window:
            end_hour = min(end_hour, self.window.end_hour)
        return max(end_hour - from_hour, 0)

    def _check_coverage(self, interval: Interval, stacklevel: int) -> None:
        start_day = interval.start.date()
        end_day = interval.end.date()
        if self.holidays.covers(start_day) and self.holidays.covers(end_day):
            return
        warnings.warn(
            f"Interval {start_day} - {end_day} extends beyond the holiday calendar "
            f"coverage ({self.holidays.covered_from} - {self.holidays.covered_to}); "
            f"holidays outside it are treated as business days",
            CalendarGapWarning,
            stacklevel=stacklevel,
        )


def compute_business_hours(
    start: datetime | date,
    end: datetime | date,
    window: BusinessWindow,
    holidays: Optional[HolidaySet] = None,
    options: Optional[CalculationOptions] = None,
) -> int:
    """
    Compute the business hours between two timestamps.

    Args:
        start: Start of the interval
        end: End of the interval (must not be before start)
        window: Daily business window
        holidays: Non-working dates in addition to weekends
        options: Edge-case policies, defaults to CalculationOptions()

    Returns:
        Whole business hours, always >= 0

    Raises:
        InputOrderError: If start is after end
    """
    calculator = BusinessHoursCalculator(window=window, holidays=holidays, options=options)
    return calculator._decompose(start, end, stacklevel=4).total_hours
