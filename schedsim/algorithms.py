from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Dict, List, Optional

from .errors import InvalidInputError
from .metrics import compute_averages, compute_system_metrics
from .models import OrderedProcess, Pid, Process, ProcessMetrics, ScheduleResult, TimelineRow
from .ordering import (
    BY_ARRIVAL,
    BY_BURST,
    BY_PRIORITY,
    ArrivalStream,
    OrderingPolicy,
    ReadyQueue,
    validate_processes,
    validate_quantum,
)

logger = logging.getLogger(__name__)


class _Timeline:
    """
    Rows and per-process metrics collected during one run.
    """

    def __init__(self) -> None:
        self.rows: List[TimelineRow] = []
        self.metrics: List[ProcessMetrics] = []
        self._first_start: Dict[Pid, int] = {}

    def dispatch(self, process: Process, time: int) -> None:
        self._first_start.setdefault(process.pid, time)
        logger.debug("t=%d: dispatch %r", time, process.pid)

    def preempt(self, process: Process, start_time: int, time: int) -> None:
        self.rows.append(TimelineRow(pid=process.pid, start_time=start_time, end_time=time, completed=False))
        logger.debug("t=%d: preempt %r (ran since t=%d)", time, process.pid, start_time)

    def complete(self, process: Process, start_time: int, time: int) -> None:
        turnaround_time = time - process.arrival_time
        waiting_time = turnaround_time - process.burst_time
        self.rows.append(
            TimelineRow(
                pid=process.pid,
                start_time=start_time,
                end_time=time,
                completed=True,
                waiting_time=waiting_time,
                turnaround_time=turnaround_time,
            )
        )

        first_start = self._first_start[process.pid]
        self.metrics.append(
            ProcessMetrics(
                pid=process.pid,
                arrival_time=process.arrival_time,
                burst_time=process.burst_time,
                start_time=first_start,
                completion_time=time,
                waiting_time=waiting_time,
                turnaround_time=turnaround_time,
                response_time=first_start - process.arrival_time,
                priority=process.priority,
            )
        )
        logger.debug("t=%d: complete %r (waiting=%d, turnaround=%d)", time, process.pid, waiting_time, turnaround_time)

    def result(self, algorithm: str, process_count: int, quantum: Optional[int] = None) -> ScheduleResult:
        avg_waiting, avg_turnaround = compute_averages(self.rows, process_count)
        result = ScheduleResult(
            algorithm=algorithm,
            quantum=quantum,
            rows=self.rows,
            processes=self.metrics,
            avg_waiting=avg_waiting,
            avg_turnaround=avg_turnaround,
        )
        compute_system_metrics(result)
        logger.info(
            "%s: %d processes, avg waiting %.2f, avg turnaround %.2f",
            algorithm,
            process_count,
            avg_waiting,
            avg_turnaround,
        )
        return result


def _idle_until(arrivals: ArrivalStream, time: int) -> int:
    next_arrival = arrivals.next_arrival()
    logger.debug("t=%d: CPU idle until t=%d", time, next_arrival)
    return next_arrival


def _schedule_non_preemptive(processes: List[Process], policy: OrderingPolicy, algorithm: str) -> ScheduleResult:
    """
    Run each process to completion, always picking the ready process with the
    smallest key under ``policy``.
    """
    procs = validate_processes(processes)
    arrivals = ArrivalStream(procs)
    ready = ReadyQueue(policy)
    timeline = _Timeline()

    time = 0
    while arrivals or ready:
        ready.extend(arrivals.admit(time))

        if not ready:
            time = _idle_until(arrivals, time)
            continue

        process = ready.pop().process
        timeline.dispatch(process, time)

        start_time = time
        time += process.burst_time
        timeline.complete(process, start_time, time)

    return timeline.result(algorithm, len(procs))


def schedule_fcfs(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.
    """
    return _schedule_non_preemptive(processes, BY_ARRIVAL, "FCFS")


def schedule_sjf(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time. Equal bursts run
    in admission order.
    """
    return _schedule_non_preemptive(processes, BY_BURST, "SJF (non-preemptive)")


def schedule_priority(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. Equal priorities run
    in admission order.
    """
    return _schedule_non_preemptive(processes, BY_PRIORITY, "Priority (non-preemptive)")


def schedule_priority_preemptive(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Preemptive Priority scheduling.

    The running process is preempted as soon as a ready process has a strictly
    lower priority value. A preempted process goes back to the ready queue with
    its original admission sequence, so it keeps its place ahead of later
    admissions of equal priority.

    Decisions only change when a process arrives or completes, so the running
    process is advanced straight to the next of those events instead of one
    time unit at a time.
    """
    procs = validate_processes(processes)
    arrivals = ArrivalStream(procs)
    ready = ReadyQueue(BY_PRIORITY)
    timeline = _Timeline()
    remaining = {p.pid: p.burst_time for p in procs}

    time = 0
    running: Optional[OrderedProcess] = None
    start_time = 0

    while arrivals or ready or running is not None:
        ready.extend(arrivals.admit(time))

        if running is None and not ready:
            time = _idle_until(arrivals, time)
            continue

        if running is not None and ready and ready.peek().process.priority < running.process.priority:
            timeline.preempt(running.process, start_time, time)
            ready.push(running)
            running = None

        if running is None:
            running = ready.pop()
            start_time = time
            timeline.dispatch(running.process, time)

        run_time = remaining[running.pid]
        next_arrival = arrivals.next_arrival()
        if next_arrival is not None:
            run_time = min(run_time, next_arrival - time)

        time += run_time
        remaining[running.pid] -= run_time

        if remaining[running.pid] == 0:
            timeline.complete(running.process, start_time, time)
            running = None

    return timeline.result("Priority (preemptive)", len(procs))


def schedule_rr(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive during a slice are queued before the process that
    was just sliced out, including arrivals at the exact instant the slice
    ends.
    """
    quantum = validate_quantum(quantum)
    procs = validate_processes(processes)
    arrivals = ArrivalStream(procs)
    ready: Deque[OrderedProcess] = deque()
    timeline = _Timeline()
    remaining = {p.pid: p.burst_time for p in procs}

    time = 0
    while arrivals or ready:
        ready.extend(arrivals.admit(time))

        if not ready:
            time = _idle_until(arrivals, time)
            continue

        entry = ready.popleft()
        timeline.dispatch(entry.process, time)
        start_time = time

        if remaining[entry.pid] > quantum:
            time += quantum
            remaining[entry.pid] -= quantum

            ready.extend(arrivals.admit(time))
            ready.append(entry)
            timeline.preempt(entry.process, start_time, time)
        else:
            time += remaining[entry.pid]
            remaining[entry.pid] = 0
            timeline.complete(entry.process, start_time, time)

    return timeline.result("Round Robin", len(procs), quantum=quantum)


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "priority": schedule_priority,
    "priority-preemptive": schedule_priority_preemptive,
    "rr": schedule_rr,
}

QUANTUM_ALGORITHMS = {"rr"}


def run_algorithm(name: str, processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum is only used by round-robin.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise InvalidInputError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    return func(processes, quantum=quantum)
