"""
CPU scheduling simulator.

Runs a workload of processes through FCFS, SJF, Priority, Round Robin or
SRTF scheduling and reports per-process timings plus summary statistics.
The ``schedsim`` command wraps the same engine for workload files.
"""

from .dispatch import compare, simulate
from .errors import InvalidInput, SchedsimError
from .models import Policy, Process, ScheduledProcess, ScheduledSlice, ScheduleResult, Summary

__all__ = [
    "InvalidInput",
    "Policy",
    "Process",
    "ScheduleResult",
    "ScheduledProcess",
    "ScheduledSlice",
    "SchedsimError",
    "Summary",
    "compare",
    "simulate",
]
