"""
Domain layer - Pure business logic without external dependencies.
"""

from .calculator import BusinessHoursCalculator, compute_business_hours
from .models import BusinessWindow, CalculationOptions, HolidaySet, HoursBreakdown, Interval, StartDayCase

__all__ = [
    "BusinessHoursCalculator",
    "BusinessWindow",
    "CalculationOptions",
    "HolidaySet",
    "HoursBreakdown",
    "Interval",
    "StartDayCase",
    "compute_business_hours",
]
