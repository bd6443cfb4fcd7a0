from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

from .models import DEFAULT_PRIORITY, Process

logger = logging.getLogger(__name__)

EXPORT_FIELDS = ("id", "arrivalTime", "burstTime", "priority")

# Accepted spellings per field: the snake_case keys and the export format.
_FIELD_KEYS = {
    "pid": ("pid", "id"),
    "arrival_time": ("arrival_time", "arrivalTime"),
    "burst_time": ("burst_time", "burstTime"),
    "priority": ("priority",),
}


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    logger.debug("Loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _lookup(mapping: Mapping[str, Any], field: str) -> Any:
    for key in _FIELD_KEYS[field]:
        if key in mapping:
            return mapping[key]
    raise KeyError(field)


def _as_int(value: Any) -> int:
    # json gives bools and floats; int() would quietly turn them into whole numbers.
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"expected an integer, got {value!r}")
    return int(value)


def _process_from_mapping(mapping) -> Process:
    try:
        pid = str(_lookup(mapping, "pid"))
        arrival_time = _as_int(_lookup(mapping, "arrival_time"))
        burst_time = _as_int(_lookup(mapping, "burst_time"))
        priority_val = mapping.get("priority")
        priority = _as_int(priority_val) if priority_val not in (None, "") else DEFAULT_PRIORITY
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )


def processes_to_records(processes: Iterable[Process]) -> List[Dict[str, Any]]:
    return [
        {
            "id": p.pid,
            "arrivalTime": p.arrival_time,
            "burstTime": p.burst_time,
            "priority": p.priority,
        }
        for p in processes
    ]


def export_workload(processes: Iterable[Process], path: str | Path) -> Path:
    """
    Write the full process list in the export format (JSON or CSV by suffix).

    The file loads back through load_workload unchanged.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    records = processes_to_records(processes)

    if suffix == ".json":
        with path.open("w", encoding="utf-8") as f:
            json.dump(records, f, indent=2)
            f.write("\n")
    elif suffix == ".csv":
        with path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=EXPORT_FIELDS)
            writer.writeheader()
            writer.writerows(records)
    else:
        raise ValueError(f"Unsupported export format: {suffix} (use .json or .csv)")

    logger.info("Exported %d processes to %s", len(records), path)
    return path
