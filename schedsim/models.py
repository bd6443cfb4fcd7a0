from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_PRIORITY = 1
DEFAULT_QUANTUM = 4


@dataclass(frozen=True)
class Process:
    pid: str
    arrival_time: int
    burst_time: int
    priority: int = DEFAULT_PRIORITY


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: str
    start_time: int
    end_time: int


@dataclass
class ScheduledProcess:
    pid: str
    arrival_time: int
    burst_time: int
    priority: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int


@dataclass
class Summary:
    count: int = 0
    avg_wait_time: float = 0.0
    avg_turnaround_time: float = 0.0
    cpu_utilization: int = 0
    avg_response_time: float = 0.0
    makespan: int = 0
    throughput: float = 0.0


class Policy(enum.Enum):
    FCFS = "fcfs"
    SJF = "sjf"
    PRIORITY = "priority"
    ROUND_ROBIN = "rr"
    SRTF = "srtf"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, value: "Policy | str") -> "Policy":
        """
        Map a selector string (case-insensitive, aliases allowed) to a policy.

        Unknown selectors raise ``ValueError``; there is no default policy.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown scheduling policy '{value}' (choose from {choices})") from None


_LABELS = {
    Policy.FCFS: "FCFS",
    Policy.SJF: "SJF (non-preemptive)",
    Policy.PRIORITY: "Priority (non-preemptive)",
    Policy.ROUND_ROBIN: "Round Robin",
    Policy.SRTF: "SRTF (preemptive SJF)",
}

_ALIASES = {
    "ps": "srtf",
    "psjf": "srtf",
    "round-robin": "rr",
    "first-come-first-served": "fcfs",
}


@dataclass
class ScheduleResult:
    policy: Policy
    quantum: Optional[int]
    processes: List[ScheduledProcess] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    summary: Summary = field(default_factory=Summary)

    @property
    def algorithm(self) -> str:
        return self.policy.label
