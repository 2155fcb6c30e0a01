"""
Business hours calculator - elapsed working time between two timestamps.
"""

from .domain.calculator import BusinessHoursCalculator, compute_business_hours
from .domain.exceptions import (
    BusinessHoursError,
    CalendarGapWarning,
    ConfigurationError,
    HolidayCalendarError,
    InputOrderError,
    RecordError,
    TableIOError,
)
from .domain.models import BusinessWindow, CalculationOptions, HolidaySet

__version__ = "0.1.0"

__all__ = [
    "BusinessHoursCalculator",
    "BusinessHoursError",
    "BusinessWindow",
    "CalculationOptions",
    "CalendarGapWarning",
    "ConfigurationError",
    "HolidayCalendarError",
    "HolidaySet",
    "InputOrderError",
    "RecordError",
    "TableIOError",
    "compute_business_hours",
]
