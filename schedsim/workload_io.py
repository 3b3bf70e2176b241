from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List, Mapping, Sequence

from .errors import InvalidProcessError, WorkloadFormatError
from .models import Process, validate_processes

logger = logging.getLogger(__name__)

CSV_SUFFIXES = {".csv", ".txt", ""}
HEADER_COLUMNS = {"pid", "arrival_time", "burst_time"}


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a validated list of Process
    objects.

    CSV files may either carry a ``pid,arrival_time,burst_time,priority``
    header, or be bare rows of ``id,burst,arrival[,priority]``.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix in CSV_SUFFIXES:
        processes = _load_csv(path)
    else:
        raise WorkloadFormatError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    try:
        processes = validate_processes(processes)
    except InvalidProcessError as exc:
        raise WorkloadFormatError(f"{path}: {exc}") from exc

    logger.info("Loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise WorkloadFormatError(f"{path}: invalid JSON ({exc})") from exc

    if not isinstance(raw, list):
        raise WorkloadFormatError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8", newline="") as f:
        rows = [row for row in csv.reader(f) if row and any(cell.strip() for cell in row)]

    if not rows:
        return []

    header = [cell.strip() for cell in rows[0]]
    if HEADER_COLUMNS.issubset(header):
        return [_process_from_mapping(dict(zip(header, row))) for row in rows[1:]]

    return [_process_from_record(row, line_no) for line_no, row in enumerate(rows, start=1)]


def _process_from_record(record: Sequence[str], line_no: int) -> Process:
    """
    Positional record: id, burst, arrival and an optional priority.
    """
    if len(record) not in (3, 4):
        raise WorkloadFormatError(
            f"line {line_no}: expected 3 or 4 fields, got {len(record)}: {record!r}"
        )

    try:
        values = [int(field.strip()) for field in record]
    except ValueError as exc:
        raise WorkloadFormatError(f"line {line_no}: {exc}") from exc

    pid, burst_time, arrival_time = values[:3]
    priority = values[3] if len(values) == 4 else 0
    return _build(pid=pid, arrival_time=arrival_time, burst_time=burst_time, priority=priority)


def _as_int(value) -> int:
    # JSON numbers arrive as float or bool; int() would quietly truncate them.
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValueError(f"not an integer: {value!r}")
    return int(value)


def _process_from_mapping(mapping: Mapping) -> Process:
    try:
        pid = _as_int(mapping["pid"])
        arrival_time = _as_int(mapping["arrival_time"])
        burst_time = _as_int(mapping["burst_time"])
    except (KeyError, TypeError, ValueError) as exc:
        raise WorkloadFormatError(f"Invalid process entry: {mapping!r}") from exc

    priority_val = mapping.get("priority")
    try:
        priority = _as_int(priority_val) if priority_val not in (None, "") else 0
    except (TypeError, ValueError) as exc:
        raise WorkloadFormatError(f"Invalid priority in entry: {mapping!r}") from exc

    return _build(pid=pid, arrival_time=arrival_time, burst_time=burst_time, priority=priority)


def _build(**fields: int) -> Process:
    try:
        return Process(**fields)
    except InvalidProcessError as exc:
        raise WorkloadFormatError(str(exc)) from exc

