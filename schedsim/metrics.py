from __future__ import annotations

from typing import Dict, Iterable, Sequence, Tuple

from .models import Pid, ScheduleResult, SystemMetrics, TimelineRow


def compute_averages(rows: Iterable[TimelineRow], process_count: int) -> Tuple[float, float]:
    """
    Average waiting and turnaround time over completed rows.

    Preempted rows carry no metrics and are skipped; the divisor is the
    number of input processes, which equals the number of completed rows.
    """
    total_waiting = 0
    total_turnaround = 0
    for row in rows:
        if row.completed:
            total_waiting += row.waiting_time
            total_turnaround += row.turnaround_time

    return total_waiting / process_count, total_turnaround / process_count


def response_times(rows: Sequence[TimelineRow]) -> Dict[Pid, int]:
    """
    First dispatch minus arrival, per process.

    Arrival is recovered from the completed row (completion - turnaround), so
    this works on a bare timeline.
    """
    first_start: Dict[Pid, int] = {}
    for row in rows:
        first_start.setdefault(row.pid, row.start_time)

    return {
        row.pid: first_start[row.pid] - (row.completion_time - row.turnaround_time)
        for row in rows
        if row.completed
    }


def summarize_timeline(rows: Sequence[TimelineRow]) -> dict:
    """
    Average waiting, turnaround and response time of a timeline, for
    comparison tables.
    """
    responses = response_times(rows)
    if not responses:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}

    avg_waiting, avg_turnaround = compute_averages(rows, len(responses))
    return {
        "avg_waiting": avg_waiting,
        "avg_turnaround": avg_turnaround,
        "avg_response": sum(responses.values()) / len(responses),
    }


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Fill ``result.system`` from the timeline rows.
    """
    completed = result.completed_rows
    makespan = max((row.end_time for row in completed), default=0)
    cpu_busy_time = sum(row.duration for row in result.rows)

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        idle_time=makespan - cpu_busy_time,
        makespan=makespan,
        throughput=len(completed) / makespan if makespan else 0.0,
        cpu_utilization=cpu_busy_time / makespan if makespan else 0.0,
        preemption_count=len(result.rows) - len(completed),
        dispatch_count=len(result.rows),
    )
    result.system = system
    return system
