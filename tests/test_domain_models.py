"""
Tests for domain models.
"""

from datetime import date, datetime

import pendulum
import pytest

from businesshours.domain.exceptions import ConfigurationError, InputOrderError
from businesshours.domain.models import BusinessWindow, HolidaySet, Interval, to_datetime


class TestBusinessWindow:
    """Tests for BusinessWindow model."""

    def test_create_valid_window(self):
        """Test creating a valid business window."""
        window = BusinessWindow(start_hour=9, end_hour=17)

        assert window.hours_per_day == 8
        assert str(window) == "09:00 - 17:00"

    def test_full_day_window(self):
        """Test that a 0-24 window is allowed."""
        window = BusinessWindow(start_hour=0, end_hour=24)

        assert window.hours_per_day == 24

    @pytest.mark.parametrize("start_hour,end_hour", [(17, 9), (9, 9), (-1, 17), (9, 25)])
    def test_invalid_window_raises_error(self, start_hour, end_hour):
        """Test that malformed bounds are rejected at construction."""
        with pytest.raises(ConfigurationError):
            BusinessWindow(start_hour=start_hour, end_hour=end_hour)

    def test_configuration_error_is_value_error(self):
        """Test that callers catching ValueError still see configuration errors."""
        with pytest.raises(ValueError, match="must open before it closes"):
            BusinessWindow(start_hour=17, end_hour=9)

    def test_non_integer_hour_raises_error(self):
        """Test that booleans and strings are not accepted as hours."""
        with pytest.raises(ConfigurationError, match="integer hour"):
            BusinessWindow(start_hour=True, end_hour=17)
        with pytest.raises(ConfigurationError, match="integer hour"):
            BusinessWindow(start_hour="9", end_hour=17)

    def test_contains_hour(self):
        """Test the window is half-open."""
        window = BusinessWindow(start_hour=9, end_hour=17)

        assert window.contains_hour(9)
        assert window.contains_hour(16)
        assert not window.contains_hour(17)
        assert not window.contains_hour(8)


class TestHolidaySet:
    """Tests for HolidaySet model."""

    def test_membership_ignores_time(self):
        """Test lookups by date, datetime and pendulum values."""
        holidays = HolidaySet([date(2024, 11, 27)])

        assert date(2024, 11, 27) in holidays
        assert datetime(2024, 11, 27, 15, 30) in holidays
        assert pendulum.datetime(2024, 11, 27, 8) in holidays
        assert date(2024, 11, 28) not in holidays
        assert "2024-11-27" not in holidays

    def test_is_business_day(self):
        """Test weekend and holiday classification."""
        holidays = HolidaySet([date(2024, 11, 27)])

        assert holidays.is_business_day(date(2024, 11, 25))      # Monday
        assert not holidays.is_business_day(date(2024, 11, 27))  # Wednesday, holiday
        assert not holidays.is_business_day(date(2024, 11, 23))  # Saturday
        assert not holidays.is_business_day(date(2024, 11, 24))  # Sunday

    def test_classification_depends_only_on_weekday_and_membership(self):
        """Test two sets with the same dates classify identically."""
        first = HolidaySet([date(2024, 12, 25)])
        second = HolidaySet([date(2024, 12, 25)], covered_from=date(2024, 1, 1))

        day = date(2024, 12, 20)
        while day <= date(2024, 12, 31):
            assert first.is_business_day(day) == second.is_business_day(day)
            day = date.fromordinal(day.toordinal() + 1)

    def test_count_business_days_full_week(self):
        """Test counting a Monday to Sunday range."""
        holidays = HolidaySet()

        assert holidays.count_business_days(date(2024, 11, 25), date(2024, 12, 1)) == 5

    def test_count_business_days_excludes_weekday_holidays(self):
        """Test that holidays on weekdays are subtracted."""
        holidays = HolidaySet([date(2024, 11, 27), date(2024, 12, 4)])

        assert holidays.count_business_days(date(2024, 11, 25), date(2024, 12, 1)) == 4
        assert holidays.count_business_days(date(2024, 11, 25), date(2024, 12, 8)) == 8

    def test_count_business_days_ignores_weekend_holidays(self):
        """Test that a holiday falling on a Saturday does not reduce the count."""
        holidays = HolidaySet([date(2024, 11, 30)])

        assert holidays.count_business_days(date(2024, 11, 25), date(2024, 12, 1)) == 5

    def test_count_business_days_partial_weeks(self):
        """Test ranges that do not start on a Monday."""
        holidays = HolidaySet()

        # Thursday to Tuesday
        assert holidays.count_business_days(date(2024, 11, 21), date(2024, 11, 26)) == 4
        # Saturday to Sunday
        assert holidays.count_business_days(date(2024, 11, 23), date(2024, 11, 24)) == 0
        # Single Wednesday
        assert holidays.count_business_days(date(2024, 11, 27), date(2024, 11, 27)) == 1

    def test_count_business_days_empty_range(self):
        """Test that last < first yields zero."""
        holidays = HolidaySet()

        assert holidays.count_business_days(date(2024, 11, 26), date(2024, 11, 25)) == 0

    def test_count_matches_day_by_day_iteration(self):
        """Test the arithmetic count against a plain loop over a quarter."""
        holidays = HolidaySet([date(2024, 10, 3), date(2024, 11, 1), date(2024, 12, 25), date(2024, 12, 28)])
        first = date(2024, 10, 1)

        for span in range(0, 92, 5):
            last = date.fromordinal(first.toordinal() + span)
            expected = sum(
                1
                for ordinal in range(first.toordinal(), last.toordinal() + 1)
                if holidays.is_business_day(date.fromordinal(ordinal))
            )
            assert holidays.count_business_days(first, last) == expected

    def test_coverage(self):
        """Test the covered range of a calendar built for given years."""
        holidays = HolidaySet.for_years([date(2024, 12, 25)], years=[2024, 2025])

        assert holidays.covered_from == date(2024, 1, 1)
        assert holidays.covered_to == date(2025, 12, 31)
        assert holidays.covers(date(2025, 6, 1))
        assert not holidays.covers(date(2023, 12, 31))
        assert not holidays.covers(date(2026, 1, 1))

    def test_unbounded_coverage(self):
        """Test that a set without coverage bounds covers everything."""
        assert HolidaySet().covers(date(1999, 1, 1))

    def test_inverted_coverage_raises_error(self):
        """Test that coverage must be ordered."""
        with pytest.raises(ConfigurationError, match="starts after it ends"):
            HolidaySet(covered_from=date(2025, 1, 1), covered_to=date(2024, 1, 1))

    def test_iteration_is_sorted(self):
        """Test iterating yields dates in calendar order."""
        holidays = HolidaySet([date(2024, 12, 25), date(2024, 1, 1), date(2024, 5, 1)])

        assert list(holidays) == [date(2024, 1, 1), date(2024, 5, 1), date(2024, 12, 25)]
        assert len(holidays) == 3


class TestInterval:
    """Tests for Interval model."""

    def test_start_after_end_raises_error(self):
        """Test that creating an inverted interval raises InputOrderError."""
        start = pendulum.parse("2024-11-25 17:00")
        end = pendulum.parse("2024-11-25 09:00")

        with pytest.raises(InputOrderError, match="must not be after end time"):
            Interval(start=start, end=end)

    def test_zero_width_interval_is_valid(self):
        """Test that start == end is allowed."""
        moment = pendulum.parse("2024-11-25 10:00")

        interval = Interval(start=moment, end=moment)

        assert interval.same_day

    def test_of_accepts_stdlib_values(self):
        """Test building an interval from stdlib datetimes."""
        interval = Interval.of(datetime(2024, 11, 25, 10), datetime(2024, 11, 26, 12))

        assert interval.start == pendulum.datetime(2024, 11, 25, 10)
        assert not interval.same_day


def test_to_datetime_from_date():
    """A plain date becomes midnight of that day."""
    assert to_datetime(date(2024, 11, 25)) == pendulum.datetime(2024, 11, 25)


def test_to_datetime_rejects_strings():
    with pytest.raises(TypeError):
        to_datetime("2024-11-25")
