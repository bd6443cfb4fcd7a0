from __future__ import annotations

from typing import Iterable, Optional, Set

from . import errors
from .errors import InvalidInput
from .models import Process


def validate_processes(processes: Iterable[Process]) -> None:
    """
    Reject workloads the engine would mis-schedule or never finish.

    Raises InvalidInput on the first offending process.
    """
    seen: Set[str] = set()
    for p in processes:
        if p.pid in seen:
            raise InvalidInput(errors.DUPLICATE_ID, f"Duplicate process id '{p.pid}'", pid=p.pid)
        seen.add(p.pid)

        if p.burst_time <= 0:
            raise InvalidInput(
                errors.NON_POSITIVE_BURST,
                f"Process '{p.pid}' has non-positive burst time {p.burst_time}",
                pid=p.pid,
            )
        if p.arrival_time < 0:
            raise InvalidInput(
                errors.NEGATIVE_ARRIVAL,
                f"Process '{p.pid}' has negative arrival time {p.arrival_time}",
                pid=p.pid,
            )
        if p.priority < 0:
            raise InvalidInput(
                errors.NEGATIVE_PRIORITY,
                f"Process '{p.pid}' has negative priority {p.priority}",
                pid=p.pid,
            )


def validate_quantum(quantum: Optional[int]) -> None:
    if quantum is None or quantum <= 0:
        raise InvalidInput(errors.NON_POSITIVE_QUANTUM, f"Round Robin requires a positive quantum, got {quantum}")
