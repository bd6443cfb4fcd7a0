from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Union

from .algorithms import ALGORITHMS
from .models import DEFAULT_QUANTUM, Policy, Process, ScheduleResult
from .validation import validate_processes, validate_quantum

logger = logging.getLogger(__name__)

PolicyLike = Union[Policy, str]


def simulate(
    processes: Iterable[Process],
    policy: PolicyLike,
    quantum: Optional[int] = DEFAULT_QUANTUM,
) -> ScheduleResult:
    """
    Validate a workload and run it through one scheduling policy.

    ``quantum`` only applies to round-robin and is dropped from the result
    for every other policy.
    """
    policy = Policy.parse(policy)
    snapshot: List[Process] = list(processes)

    validate_processes(snapshot)
    if policy is Policy.ROUND_ROBIN:
        if quantum is None:
            quantum = DEFAULT_QUANTUM
        validate_quantum(quantum)
    else:
        quantum = None

    logger.debug("Running %s on %d processes (quantum=%s)", policy.value, len(snapshot), quantum)

    func = ALGORITHMS[policy]
    if quantum is not None:
        return func(snapshot, quantum=quantum)
    return func(snapshot)


def compare(
    processes: Iterable[Process],
    policies: Sequence[PolicyLike] = tuple(Policy),
    quantum: Optional[int] = DEFAULT_QUANTUM,
) -> List[ScheduleResult]:
    """
    Run several policies over the same workload, in the order given.
    """
    snapshot = list(processes)
    return [simulate(snapshot, policy, quantum=quantum) for policy in policies]
