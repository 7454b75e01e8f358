"""
schedsim package.

Simulates classic CPU scheduling disciplines (FCFS, SJF, non-preemptive and
preemptive priority, Round Robin) over a fixed workload in simulated time.
"""

from .algorithms import (
    ALGORITHMS,
    run_algorithm,
    schedule_fcfs,
    schedule_priority,
    schedule_priority_preemptive,
    schedule_rr,
    schedule_sjf,
)
from .errors import DuplicateIdError, InvalidInputError, SchedulingError
from .models import Process, ScheduleResult, TimelineRow

__all__ = [
    "ALGORITHMS",
    "DuplicateIdError",
    "InvalidInputError",
    "Process",
    "ScheduleResult",
    "SchedulingError",
    "TimelineRow",
    "run_algorithm",
    "schedule_fcfs",
    "schedule_priority",
    "schedule_priority_preemptive",
    "schedule_rr",
    "schedule_sjf",
]
