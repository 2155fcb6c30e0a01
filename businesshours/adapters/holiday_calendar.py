"""
Holiday calendar loading from YAML or plain-text date lists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import pendulum
import yaml

from ..domain.exceptions import HolidayCalendarError
from ..domain.models import HolidaySet

logger = logging.getLogger(__name__)


def parse_holiday_date(value: Any) -> date:
    """
    Parse a single holiday entry into a date.

    Accepts ``date`` objects (YAML already converts unquoted ISO dates) and
    ISO ``YYYY-MM-DD`` strings.
    """
    if isinstance(value, date):
        return date(value.year, value.month, value.day)
    if isinstance(value, str):
        try:
            parsed = pendulum.from_format(value.strip(), "YYYY-MM-DD")
        except ValueError as exc:
            raise HolidayCalendarError(f"Invalid holiday date '{value}': expected YYYY-MM-DD") from exc
        return parsed.date()
    raise HolidayCalendarError(f"Invalid holiday entry: {value!r}")


@dataclass
class HolidayCalendar:
    """
    Holiday dates with optional display names.
    """
    names: Dict[date, str] = field(default_factory=dict)
    covered_years: List[int] = field(default_factory=list)

    def add(self, day: date, name: str = "") -> None:
        if day in self.names and not name:
            return
        self.names[day] = name

    def merge(self, entries: Iterable[Any]) -> None:
        """Add entries given as dates, ISO strings or ``{date, name}`` mappings."""
        for entry in entries:
            if isinstance(entry, dict):
                if "date" not in entry:
                    raise HolidayCalendarError(f"Holiday entry without 'date': {entry!r}")
                self.add(parse_holiday_date(entry["date"]), str(entry.get("name") or ""))
            else:
                self.add(parse_holiday_date(entry))

    def to_holiday_set(self) -> HolidaySet:
        """
        Freeze the calendar into a HolidaySet.

        Coverage comes from ``covered_years`` when given, otherwise from the
        full years spanned by the listed dates.
        """
        years = self.covered_years or sorted({day.year for day in self.names})
        return HolidaySet.for_years(self.names.keys(), years)


def read_holiday_calendar(path: Path, calendar: Optional[HolidayCalendar] = None) -> HolidayCalendar:
    """
    Read holidays from a file into a (possibly existing) calendar.

    ``.yaml``/``.yml`` files hold either a list of entries or a mapping with
    ``holidays`` and optional ``covered_years``. Any other file is read as
    one ISO date per line, with ``#`` comments and blank lines ignored.

    Raises:
        HolidayCalendarError: If the file is missing or malformed
    """
    calendar = calendar if calendar is not None else HolidayCalendar()

    if not path.exists():
        raise HolidayCalendarError(f"Holiday file not found: {path}")

    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or []
        except yaml.YAMLError as exc:
            raise HolidayCalendarError(f"Invalid YAML in {path}: {exc}") from exc

        if isinstance(data, dict):
            calendar.merge(data.get("holidays") or [])
            years = data.get("covered_years") or []
            if not all(isinstance(year, int) for year in years):
                raise HolidayCalendarError(f"covered_years must be a list of integers in {path}")
            calendar.covered_years = sorted(set(calendar.covered_years) | set(years))
        elif isinstance(data, list):
            calendar.merge(data)
        else:
            raise HolidayCalendarError(f"Holiday file {path} must contain a list or a mapping.")
    else:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                entry = line.split("#", 1)[0].strip()
                if entry:
                    calendar.add(parse_holiday_date(entry))

    logger.debug("Loaded %d holidays from %s", len(calendar.names), path)
    return calendar


def load_holidays(path: Path) -> HolidaySet:
    """Load a HolidaySet from a holiday file."""
    return read_holiday_calendar(path).to_holiday_set()
