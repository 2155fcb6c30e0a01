"""
Tests for CSV record I/O.
"""

import pytest

from businesshours.adapters.table_io import read_records, write_records
from businesshours.domain.exceptions import BusinessHoursError, TableIOError


def test_read_skips_byte_order_mark(tmp_path):
    path = tmp_path / "records.csv"
    path.write_bytes(b"\xef\xbb\xbfstart,end\n2024-11-25 10:00,2024-11-25 14:00\n")

    records = read_records(path)

    assert records == [{"start": "2024-11-25 10:00", "end": "2024-11-25 14:00"}]


def test_read_invalid_utf8_raises_error(tmp_path):
    path = tmp_path / "records.csv"
    path.write_bytes(b"\xff\xfestart,end\n")

    with pytest.raises(TableIOError, match="not valid UTF-8"):
        read_records(path)


def test_read_missing_file_raises_error(tmp_path):
    with pytest.raises(TableIOError, match="Could not read"):
        read_records(tmp_path / "missing.csv")


def test_write_to_directory_raises_error(tmp_path):
    with pytest.raises(TableIOError, match="Could not write"):
        write_records(tmp_path, [{"start": "x"}], ["start"])


def test_table_errors_are_business_hours_errors():
    assert issubclass(TableIOError, BusinessHoursError)
