from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Iterable, List, Mapping, Sequence, Tuple

from .errors import EmptyWorkload, InvalidArrivalTime, InvalidBurstTime
from .models import ProcessRecord


def load_workload(path: str | Path) -> List[ProcessRecord]:
    """
    Load a workload from a JSON, CSV or plain-text file into a list of
    ProcessRecord objects. Process ids are assigned 1..n in file order.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)
    if suffix == ".txt":
        return _load_txt(path)

    raise ValueError(f"Unsupported workload format: {suffix} (use .json, .csv or .txt)")


def records_from_rows(rows: Iterable[Sequence[int]]) -> List[ProcessRecord]:
    """
    Build records from ``(burst_time, priority, arrival_time)`` tuples.
    """
    return [
        ProcessRecord(pid=pid, burst_time=burst, priority=priority, arrival_time=arrival)
        for pid, (burst, priority, arrival) in enumerate(rows, start=1)
    ]


def validate_workload(processes: Sequence[ProcessRecord]) -> None:
    """
    Reject workloads no policy can simulate: an empty list, a non-positive
    burst time or a negative arrival time.
    """
    if not processes:
        raise EmptyWorkload()
    for p in processes:
        if p.burst_time <= 0:
            raise InvalidBurstTime(p.pid, p.burst_time)
        if p.arrival_time < 0:
            raise InvalidArrivalTime(p.pid, p.arrival_time)


def _load_json(path: Path) -> List[ProcessRecord]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of process objects")

    return records_from_rows(_row_from_mapping(entry) for entry in raw)


def _load_csv(path: Path) -> List[ProcessRecord]:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        rows = [_row_from_mapping(row) for row in reader]
    return records_from_rows(rows)


def _load_txt(path: Path) -> List[ProcessRecord]:
    # One "burst priority arrival" triple per line, the order the prompt asks for.
    rows: List[Tuple[int, int, int]] = []
    with path.open("r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            line = line.split("#", 1)[0].strip()
            if not line:
                continue
            fields = line.split()
            if len(fields) != 3:
                raise ValueError(f"Line {line_number}: expected 'burst priority arrival', got {line!r}")
            try:
                burst, priority, arrival = (int(x) for x in fields)
            except ValueError as exc:
                raise ValueError(f"Line {line_number}: non-integer value in {line!r}") from exc
            rows.append((burst, priority, arrival))
    return records_from_rows(rows)


def _optional_int(mapping: Mapping, key: str) -> int:
    value = mapping.get(key)
    return int(value) if value not in (None, "") else 0


def _row_from_mapping(mapping) -> Tuple[int, int, int]:
    try:
        burst_time = int(mapping["burst_time"])
        priority = _optional_int(mapping, "priority")
        arrival_time = _optional_int(mapping, "arrival_time")
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ValueError(f"Invalid process entry: {mapping!r}") from exc

    return burst_time, priority, arrival_time
