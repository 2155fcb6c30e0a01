"""
Application service for computing business hours over tabular records.

The service reads one (start, end) pair per record, delegates the actual
calculation to the domain-level ``BusinessHoursCalculator`` and attaches the
result to an output record. Failures are isolated per record: a bad
timestamp or an end-before-start interval is reported and the batch moves on.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

import pendulum
from pendulum import DateTime

from ..adapters.table_io import read_records, write_records
from ..config import ColumnsConfig
from ..domain.calculator import BusinessHoursCalculator
from ..domain.exceptions import BusinessHoursError, CalendarGapWarning, RecordError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordFailure:
    """A record that could not be processed."""
    row_number: int
    message: str


@dataclass
class BatchResult:
    """Output rows plus the per-record failures collected along the way."""
    rows: List[Dict[str, object]] = field(default_factory=list)
    failures: List[RecordFailure] = field(default_factory=list)
    gap_warnings: int = 0

    @property
    def processed(self) -> int:
        return len(self.rows) - len(self.failures)


class BatchService:
    """
    Runs the calculator once per record.

    Row numbers in failures are 1-based data rows (the header is not counted).
    """

    def __init__(
        self,
        calculator: BusinessHoursCalculator,
        columns: Optional[ColumnsConfig] = None,
        timestamp_format: Optional[str] = None,
    ) -> None:
        self._calculator = calculator
        self._columns = columns or ColumnsConfig()
        self._timestamp_format = timestamp_format

    def process(self, records: Iterable[Mapping[str, str]]) -> BatchResult:
        """Compute business hours for every record."""
        result = BatchResult()

        for row_number, record in enumerate(records, start=1):
            row: Dict[str, object] = dict(record)
            try:
                with warnings.catch_warnings(record=True) as caught:
                    warnings.simplefilter("always", CalendarGapWarning)
                    hours = self._process_record(record)
            except BusinessHoursError as exc:
                logger.warning("Skipping row %d: %s", row_number, exc)
                row[self._columns.output] = ""
                result.failures.append(RecordFailure(row_number=row_number, message=str(exc)))
            else:
                gaps = [w for w in caught if issubclass(w.category, CalendarGapWarning)]
                if gaps:
                    result.gap_warnings += 1
                    logger.warning("Row %d: %s", row_number, gaps[0].message)
                logger.debug("Row %d: %d business hours", row_number, hours)
                row[self._columns.output] = hours
            result.rows.append(row)

        return result

    def run(self, input_path: Path, output_path: Path) -> BatchResult:
        """Read records from a CSV file, process them and write the output CSV."""
        records = read_records(input_path)
        logger.info("Read %d records from %s", len(records), input_path)

        result = self.process(records)

        fieldnames = list(records[0].keys()) if records else [self._columns.start, self._columns.end]
        if self._columns.output not in fieldnames:
            fieldnames.append(self._columns.output)
        write_records(output_path, result.rows, fieldnames)

        logger.info(
            "Wrote %d records to %s (%d failed)",
            len(result.rows),
            output_path,
            len(result.failures),
        )
        return result

    def _process_record(self, record: Mapping[str, str]) -> int:
        start = parse_timestamp(self._require(record, self._columns.start), self._timestamp_format)
        end = parse_timestamp(self._require(record, self._columns.end), self._timestamp_format)
        return self._calculator.hours(start, end)

    @staticmethod
    def _require(record: Mapping[str, str], column: str) -> str:
        value = record.get(column)
        if value is None or not str(value).strip():
            raise RecordError(f"Missing value for column '{column}'")
        return str(value).strip()


def parse_timestamp(value: str, timestamp_format: Optional[str] = None) -> DateTime:
    """
    Parse a timestamp cell.

    Uses pendulum format tokens when given, otherwise ``pendulum.parse``.
    No time zone conversion is applied.

    Raises:
        RecordError: If the value is not a date and time
    """
    try:
        if timestamp_format:
            return pendulum.from_format(value, timestamp_format)
        parsed = pendulum.parse(value)
    except ValueError as exc:
        raise RecordError(f"Invalid timestamp '{value}': {exc}") from exc

    # Durations and ISO intervals parse too
    if not isinstance(parsed, DateTime):
        raise RecordError(f"Invalid timestamp '{value}': not a date and time")
    return parsed
