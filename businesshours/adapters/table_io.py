"""
CSV record reading and writing for the batch driver.
"""

import csv
from pathlib import Path
from typing import Dict, List, Sequence

from ..domain.exceptions import TableIOError


def read_records(path: Path) -> List[Dict[str, str]]:
    """
    Read a CSV file with a header row into a list of dicts.

    A leading UTF-8 byte order mark (as written by Excel) is skipped.

    Raises:
        TableIOError: If the file cannot be opened, decoded or parsed
    """
    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            return list(csv.DictReader(f))
    except UnicodeDecodeError as exc:
        raise TableIOError(f"{path} is not valid UTF-8: {exc}") from exc
    except csv.Error as exc:
        raise TableIOError(f"Invalid CSV in {path}: {exc}") from exc
    except OSError as exc:
        raise TableIOError(f"Could not read {path}: {exc}") from exc


def write_records(path: Path, rows: Sequence[Dict[str, object]], fieldnames: Sequence[str]) -> None:
    """
    Write rows to a CSV file, keeping the given column order.

    Raises:
        TableIOError: If the file cannot be written
    """
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(fieldnames), extrasaction="ignore")
            writer.writeheader()
            writer.writerows(rows)
    except OSError as exc:
        raise TableIOError(f"Could not write {path}: {exc}") from exc
