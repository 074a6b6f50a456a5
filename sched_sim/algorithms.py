from __future__ import annotations

import logging
from typing import List

from .metrics import compute_system_metrics, finalize
from .models import Process, ScheduleResult, Segment
from .ordering import arrival_order

logger = logging.getLogger(__name__)

FCFS_TITLE = "First Come First Served (FCFS)"
SJF_TITLE = "Shortest Job First (SJF)"


def _dispatch(p: Process, time: int, timeline: List[Segment]) -> int:
    """
    Run p to completion starting at `time`; return the clock after it finishes.
    """
    p.start_time = time
    p.completion_time = time + p.burst_time
    finalize(p)

    timeline.append(Segment(pid=p.pid, start_time=p.start_time, end_time=p.completion_time))
    logger.debug("t=%d: dispatch P%d (burst %d, waited %d)", time, p.pid, p.burst_time, p.waiting_time)
    return p.completion_time


def _idle(time: int, until: int, timeline: List[Segment]) -> int:
    timeline.append(Segment(pid=None, start_time=time, end_time=until))
    logger.debug("t=%d: CPU idle until %d", time, until)
    return until


def schedule_fcfs(processes: List[Process]) -> ScheduleResult:
    """
    First-Come First-Served (non-preemptive) scheduling.

    Processes are dispatched strictly in arrival order (ties by pid). The
    clock starts at 0, so a first arrival after 0 produces a leading IDLE
    segment.
    """
    working = [p.working_copy() for p in sorted(processes, key=arrival_order)]

    time = 0
    timeline: List[Segment] = []

    for p in working:
        if time < p.arrival_time:
            time = _idle(time, p.arrival_time, timeline)
        time = _dispatch(p, time, timeline)

    result = ScheduleResult(algorithm=FCFS_TITLE, processes=working, timeline=timeline)
    compute_system_metrics(result)
    return result


def schedule_sjf(processes: List[Process]) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time. Ties go to the
    earlier arrival, then to input order. The clock starts at the earliest
    arrival, so there is never a leading IDLE segment.
    """
    working = [p.working_copy() for p in processes]
    n = len(working)

    time = min((p.arrival_time for p in working), default=0)
    timeline: List[Segment] = []
    finished = 0

    while finished < n:
        # Ready queue: arrived and not completed, in input order.
        ready = [p for p in working if not p.done and p.arrival_time <= time]

        if not ready:
            pending = [p.arrival_time for p in working if not p.done]
            if not pending:
                break
            time = _idle(time, min(pending), timeline)
            continue

        # min() keeps the first of equal keys, i.e. the lowest pid.
        p = min(ready, key=lambda x: (x.burst_time, x.arrival_time))

        time = _dispatch(p, time, timeline)
        p.done = True
        finished += 1

    result = ScheduleResult(algorithm=SJF_TITLE, processes=working, timeline=timeline)
    compute_system_metrics(result)
    return result


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
}


def run_algorithm(name: str, processes: List[Process]) -> ScheduleResult:
    """
    Dispatch to the requested algorithm by its short name.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown or unimplemented algorithm '{name}'")

    func = ALGORITHMS[name]
    return func(processes)
