"""
Adapters layer - Holiday calendar files and tabular record I/O.
"""

from .holiday_calendar import HolidayCalendar, load_holidays, read_holiday_calendar
from .table_io import read_records, write_records

__all__ = ["HolidayCalendar", "load_holidays", "read_holiday_calendar", "read_records", "write_records"]
