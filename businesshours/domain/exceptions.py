"""
Domain-specific exception hierarchy for the business hours calculator.
"""


class BusinessHoursError(Exception):
    """Base class for all application-level errors."""


class ConfigurationError(BusinessHoursError, ValueError):
    """Raised when the business window or the configuration file is invalid."""


class HolidayCalendarError(ConfigurationError):
    """Raised when a holiday calendar cannot be loaded or parsed."""


class InputOrderError(BusinessHoursError, ValueError):
    """Raised when an interval ends before it starts."""


class RecordError(BusinessHoursError):
    """Raised when a single input record cannot be turned into an interval."""


class CalendarGapWarning(UserWarning):
    """Emitted when an interval touches dates the holiday calendar does not cover."""


class TableIOError(BusinessHoursError):
    """Raised when a record table cannot be read or written."""
