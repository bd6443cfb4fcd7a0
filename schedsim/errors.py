from __future__ import annotations

from typing import Optional

DUPLICATE_ID = "duplicate-id"
NON_POSITIVE_BURST = "non-positive-burst"
NEGATIVE_ARRIVAL = "negative-arrival"
NEGATIVE_PRIORITY = "negative-priority"
NON_POSITIVE_QUANTUM = "non-positive-quantum"


class SchedsimError(Exception):
    """Base class for errors raised by the simulator."""


class InvalidInput(SchedsimError, ValueError):
    """
    A workload (or quantum) the scheduling engine cannot run.

    ``kind`` is one of the module-level constants so callers can tell the
    failures apart without parsing the message.
    """

    def __init__(self, kind: str, message: str, pid: Optional[str] = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.pid = pid
