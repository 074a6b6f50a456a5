from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Process:
    pid: int
    arrival_time: int
    burst_time: int
    start_time: Optional[int] = None
    completion_time: Optional[int] = None
    turnaround_time: Optional[int] = None
    waiting_time: Optional[int] = None
    response_time: Optional[int] = None
    done: bool = False  # SJF bookkeeping only

    def working_copy(self) -> Process:
        """
        Fresh, undispatched copy for a single simulation run.
        """
        return Process(pid=self.pid, arrival_time=self.arrival_time, burst_time=self.burst_time)


@dataclass
class Segment:
    """
    One contiguous interval of the Gantt chart: a process run, or IDLE when pid is None.
    """

    pid: Optional[int]
    start_time: int
    end_time: int

    @property
    def is_idle(self) -> bool:
        return self.pid is None

    @property
    def label(self) -> str:
        return "IDLE" if self.pid is None else f"P{self.pid}"


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    processes: List[Process] = field(default_factory=list)
    timeline: List[Segment] = field(default_factory=list)
    system: Optional[SystemMetrics] = None
