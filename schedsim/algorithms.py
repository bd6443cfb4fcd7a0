from __future__ import annotations

import heapq
import logging
from collections import deque
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .metrics import summarize
from .models import DEFAULT_QUANTUM, Policy, Process, ScheduledProcess, ScheduledSlice, ScheduleResult
from .validation import validate_quantum

logger = logging.getLogger(__name__)


def _completed(p: Process, start_time: int, completion_time: int) -> ScheduledProcess:
    turnaround_time = completion_time - p.arrival_time
    return ScheduledProcess(
        pid=p.pid,
        arrival_time=p.arrival_time,
        burst_time=p.burst_time,
        priority=p.priority,
        start_time=start_time,
        completion_time=completion_time,
        # Total waiting = turnaround - burst
        waiting_time=turnaround_time - p.burst_time,
        turnaround_time=turnaround_time,
        response_time=start_time - p.arrival_time,
    )


def _append_slice(timeline: List[ScheduledSlice], pid: str, start_time: int, end_time: int) -> None:
    if end_time <= start_time:
        return
    last = timeline[-1] if timeline else None
    if last is not None and last.pid == pid and last.end_time == start_time:
        last.end_time = end_time
    else:
        timeline.append(ScheduledSlice(pid=pid, start_time=start_time, end_time=end_time))


def _finish(
    policy: Policy,
    quantum: Optional[int],
    metrics: List[ScheduledProcess],
    timeline: List[ScheduledSlice],
) -> ScheduleResult:
    result = ScheduleResult(
        policy=policy,
        quantum=quantum,
        processes=metrics,
        timeline=timeline,
        summary=summarize(metrics),
    )
    logger.debug(
        "%s scheduled %d processes in %d slices",
        policy.label,
        len(metrics),
        len(timeline),
    )
    return result


def _arrival_order(processes: Sequence[Process]) -> List[int]:
    # Stable: equal arrivals keep their input order.
    return sorted(range(len(processes)), key=lambda i: processes[i].arrival_time)


def schedule_fcfs(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.
    """
    processes_sorted = sorted(processes, key=lambda p: p.arrival_time)

    time = 0
    timeline: List[ScheduledSlice] = []
    metrics: List[ScheduledProcess] = []

    for p in processes_sorted:
        if time < p.arrival_time:
            time = p.arrival_time

        start_time = time
        end_time = start_time + p.burst_time

        _append_slice(timeline, p.pid, start_time, end_time)
        metrics.append(_completed(p, start_time, end_time))

        time = end_time

    return _finish(Policy.FCFS, None, metrics, timeline)


def _schedule_non_preemptive(
    processes: Sequence[Process],
    selection_key: Callable[[Process], int],
) -> Tuple[List[ScheduledProcess], List[ScheduledSlice]]:
    """
    Shared loop for SJF and Priority.

    At each decision point the clock either jumps to the next arrival (nothing
    has arrived yet) or the arrived process with the smallest selection key
    runs to completion. Ties go to the process found first in arrival order,
    so the heap is keyed on ``(selection key, arrival time, input position)``.
    """
    pending = deque(_arrival_order(processes))
    ready: List[Tuple[int, int, int]] = []

    time = 0
    timeline: List[ScheduledSlice] = []
    metrics: List[ScheduledProcess] = []

    while pending or ready:
        while pending and processes[pending[0]].arrival_time <= time:
            idx = pending.popleft()
            p = processes[idx]
            heapq.heappush(ready, (selection_key(p), p.arrival_time, idx))

        if not ready:
            # If nothing is ready, jump time to the next arrival.
            time = processes[pending[0]].arrival_time
            continue

        _, _, idx = heapq.heappop(ready)
        p = processes[idx]

        start_time = time
        end_time = start_time + p.burst_time

        _append_slice(timeline, p.pid, start_time, end_time)
        metrics.append(_completed(p, start_time, end_time))

        time = end_time

    return metrics, timeline


def schedule_sjf(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    Among processes that have arrived, choose the one with the smallest burst
    time and run it to completion. Long jobs can starve while short ones keep
    arriving.
    """
    metrics, timeline = _schedule_non_preemptive(processes, lambda p: p.burst_time)
    return _finish(Policy.SJF, None, metrics, timeline)


def schedule_priority(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority.
    """
    metrics, timeline = _schedule_non_preemptive(processes, lambda p: p.priority)
    return _finish(Policy.PRIORITY, None, metrics, timeline)


def schedule_rr(processes: Sequence[Process], quantum: Optional[int] = DEFAULT_QUANTUM) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    The ready queue is seeded once, in input order, with every process. When
    a dequeued process has not arrived yet the clock jumps forward to its
    arrival time; processes queued behind it are not reconsidered. Each
    dispatch runs ``min(remaining, quantum)`` and unfinished processes go back
    to the tail of the queue.
    """
    if quantum is None:
        quantum = DEFAULT_QUANTUM
    validate_quantum(quantum)

    # Remaining burst time per input position
    remaining = [p.burst_time for p in processes]
    first_start: Dict[int, int] = {}

    ready = deque(range(len(processes)))

    time = 0
    timeline: List[ScheduledSlice] = []
    metrics: List[ScheduledProcess] = []

    while ready:
        idx = ready.popleft()
        p = processes[idx]

        if p.arrival_time > time:
            time = p.arrival_time

        first_start.setdefault(idx, time)

        run_time = min(remaining[idx], quantum)
        _append_slice(timeline, p.pid, time, time + run_time)

        time += run_time
        remaining[idx] -= run_time

        if remaining[idx] > 0:
            # Put the process back at the end of the queue
            ready.append(idx)
        else:
            metrics.append(_completed(p, first_start[idx], time))

    return _finish(Policy.ROUND_ROBIN, quantum, metrics, timeline)


def schedule_srtf(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Remaining Time First (preemptive SJF).

    The arrived process with the least remaining time always holds the CPU.
    On equal remaining time the process listed earlier in the input wins, so
    an equally short newcomer never preempts an earlier-listed runner.

    The choice can only change when a process arrives or finishes, so the
    clock advances from event to event instead of one time unit at a time.
    """
    arrivals = deque(_arrival_order(processes))
    remaining = [p.burst_time for p in processes]
    first_start: Dict[int, int] = {}

    # (remaining time, input position)
    ready: List[Tuple[int, int]] = []

    time = 0
    timeline: List[ScheduledSlice] = []
    metrics: List[ScheduledProcess] = []

    while arrivals or ready:
        while arrivals and processes[arrivals[0]].arrival_time <= time:
            idx = arrivals.popleft()
            heapq.heappush(ready, (remaining[idx], idx))

        if not ready:
            time = processes[arrivals[0]].arrival_time
            continue

        _, idx = heapq.heappop(ready)
        current = processes[idx]
        first_start.setdefault(idx, time)

        # Run until completion or next arrival, whichever comes first.
        if arrivals:
            run_time = min(remaining[idx], processes[arrivals[0]].arrival_time - time)
        else:
            run_time = remaining[idx]

        _append_slice(timeline, current.pid, time, time + run_time)

        time += run_time
        remaining[idx] -= run_time

        if remaining[idx] == 0:
            metrics.append(_completed(current, first_start[idx], time))
        else:
            heapq.heappush(ready, (remaining[idx], idx))

    return _finish(Policy.SRTF, None, metrics, timeline)


ALGORITHMS: Dict[Policy, Callable[..., ScheduleResult]] = {
    Policy.FCFS: schedule_fcfs,
    Policy.SJF: schedule_sjf,
    Policy.PRIORITY: schedule_priority,
    Policy.ROUND_ROBIN: schedule_rr,
    Policy.SRTF: schedule_srtf,
}
