import pytest

from schedsim.algorithms import schedule_fcfs
from schedsim.metrics import summarize
from schedsim.models import Process, ScheduledProcess, Summary


def _record(pid, arrival, burst, completion, start=None):
    start = arrival if start is None else start
    turnaround = completion - arrival
    return ScheduledProcess(
        pid=pid,
        arrival_time=arrival,
        burst_time=burst,
        priority=1,
        start_time=start,
        completion_time=completion,
        waiting_time=turnaround - burst,
        turnaround_time=turnaround,
        response_time=start - arrival,
    )


def test_empty_schedule_is_zeroed():
    summary = summarize([])
    assert summary == Summary()
    assert summary.avg_wait_time == 0
    assert summary.avg_turnaround_time == 0
    assert summary.cpu_utilization == 0


def test_zero_span_reports_zero_utilization():
    summary = summarize([_record("A", arrival=3, burst=0, completion=3)])
    assert summary.count == 1
    assert summary.cpu_utilization == 0
    assert summary.throughput == 0.0
    assert summary.makespan == 0


def test_fcfs_summary():
    res = schedule_fcfs(
        [
            Process("P1", arrival_time=0, burst_time=5, priority=2),
            Process("P2", arrival_time=1, burst_time=3, priority=1),
            Process("P3", arrival_time=2, burst_time=8, priority=3),
        ]
    )
    summary = res.summary
    assert summary.count == 3
    assert summary.avg_wait_time == pytest.approx(10 / 3)
    assert summary.avg_turnaround_time == pytest.approx(26 / 3)
    assert summary.cpu_utilization == 100
    assert summary.makespan == 16
    assert summary.throughput == pytest.approx(3 / 16)


def test_utilization_measured_from_first_arrival():
    # Span runs from t=10 to t=20 with 5 units of work.
    summary = summarize(
        [
            _record("A", arrival=10, burst=2, completion=12),
            _record("B", arrival=15, burst=3, completion=20, start=17),
        ]
    )
    assert summary.cpu_utilization == 50
    assert summary.makespan == 10
    assert summary.avg_response_time == pytest.approx(1.0)


def test_utilization_rounds_half_up():
    summary = summarize(
        [
            _record("A", arrival=0, burst=2, completion=2),
            _record("B", arrival=5, burst=3, completion=8),
        ]
    )
    assert summary.cpu_utilization == 63
