from __future__ import annotations

import math
from typing import Sequence

from .models import ScheduledProcess, Summary


def _percent(numerator: int, denominator: int) -> int:
    # Half-up rounding; round() would send 62.5 to 62.
    return int(math.floor(numerator / denominator * 100 + 0.5))


def summarize(processes: Sequence[ScheduledProcess]) -> Summary:
    """
    Reduce a completed schedule to its summary statistics.

    CPU utilization is the total burst time over the span from the first
    arrival to the last completion, as a whole percentage. An empty schedule,
    or one whose span is zero, reports 0.
    """
    if not processes:
        return Summary()

    n = len(processes)
    total_burst = sum(p.burst_time for p in processes)
    makespan = max(p.completion_time for p in processes) - min(p.arrival_time for p in processes)

    cpu_utilization = _percent(total_burst, makespan) if makespan > 0 and total_burst > 0 else 0
    throughput = n / makespan if makespan > 0 else 0.0

    return Summary(
        count=n,
        avg_wait_time=sum(p.waiting_time for p in processes) / n,
        avg_turnaround_time=sum(p.turnaround_time for p in processes) / n,
        cpu_utilization=cpu_utilization,
        avg_response_time=sum(p.response_time for p in processes) / n,
        makespan=makespan,
        throughput=throughput,
    )
