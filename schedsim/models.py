from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

Pid = Union[int, str]


@dataclass(frozen=True)
class Process:
    pid: Pid
    arrival_time: int
    burst_time: int
    priority: int = 0


@dataclass(frozen=True)
class OrderedProcess:
    """
    A process tagged with the order in which it was admitted to a ready
    structure. The sequence breaks ties between equal scheduling keys.
    """

    process: Process
    admission_sequence: int

    @property
    def pid(self) -> Pid:
        return self.process.pid


@dataclass(frozen=True)
class TimelineRow:
    """
    One dispatch of a process: either it ran to completion at ``end_time``,
    or it was preempted at ``end_time`` and has no waiting/turnaround yet.
    """

    pid: Pid
    start_time: int
    end_time: int
    completed: bool
    waiting_time: Optional[int] = None
    turnaround_time: Optional[int] = None

    @property
    def preempted(self) -> bool:
        return not self.completed

    @property
    def completion_time(self) -> Optional[int]:
        return self.end_time if self.completed else None

    @property
    def preempted_at(self) -> Optional[int]:
        return None if self.completed else self.end_time

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class ProcessMetrics:
    pid: Pid
    arrival_time: int
    burst_time: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int
    priority: int = 0


@dataclass
class SystemMetrics:
    """
    Whole-run figures derived from the timeline. ``idle_time`` counts the
    gaps between t=0 and the last completion where no row was running.
    """

    cpu_busy_time: int
    idle_time: int
    makespan: int
    throughput: float
    cpu_utilization: float
    preemption_count: int = 0
    dispatch_count: int = 0


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    rows: List[TimelineRow] = field(default_factory=list)
    processes: List[ProcessMetrics] = field(default_factory=list)
    avg_waiting: float = 0.0
    avg_turnaround: float = 0.0
    system: Optional[SystemMetrics] = None

    @property
    def completed_rows(self) -> List[TimelineRow]:
        return [row for row in self.rows if row.completed]
