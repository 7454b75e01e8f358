"""
Built-in reference workloads.

Each case is a list of ``(pid, arrival_time, burst_time, priority)`` tuples.
"""

from __future__ import annotations

from typing import List, Tuple

from .models import Process

REFERENCE_WORKLOADS: List[Tuple[str, List[Tuple[int, int, int, int]]]] = [
    # Same arrival time.
    ("same arrival, one long job first", [(1, 0, 24, 0), (2, 0, 3, 0), (3, 0, 3, 0)]),
    ("same set reordered (stability)", [(2, 0, 3, 0), (3, 0, 3, 0), (1, 0, 24, 0)]),
    ("same arrival, four jobs", [(1, 0, 6, 0), (2, 0, 8, 0), (3, 0, 7, 0), (4, 0, 3, 0)]),
    (
        "same arrival, distinct priorities",
        [(1, 0, 10, 3), (2, 0, 1, 1), (3, 0, 2, 4), (4, 0, 1, 5), (5, 0, 5, 2)],
    ),
    ("same arrival, long bursts", [(1, 0, 53, 0), (2, 0, 17, 0), (3, 0, 68, 0), (4, 0, 24, 0)]),
    # Staggered arrivals.
    ("staggered arrivals", [(1, 0, 8, 0), (2, 1, 4, 0), (3, 2, 9, 0), (4, 3, 5, 0)]),
    ("staggered arrivals, short jobs", [(1, 0, 7, 0), (2, 2, 4, 0), (3, 4, 1, 0), (4, 5, 4, 0)]),
    (
        "unsorted arrivals",
        [(1, 2, 1, 0), (2, 1, 5, 0), (3, 4, 1, 0), (4, 0, 6, 0), (5, 2, 3, 0)],
    ),
    (
        "staggered arrivals with priorities",
        [(1, 0, 8, 3), (2, 1, 2, 4), (3, 3, 4, 4), (4, 4, 1, 5), (5, 5, 6, 2), (6, 6, 5, 6), (7, 10, 1, 1)],
    ),
    (
        "unsorted arrivals, mixed bursts",
        [(1, 0, 8, 0), (2, 5, 2, 0), (3, 1, 7, 0), (4, 6, 3, 0), (5, 8, 5, 0)],
    ),
    (
        "priority preemption",
        [(1, 0, 3, 5), (2, 1, 7, 3), (3, 4, 2, 4), (4, 2, 3, 3), (5, 6, 4, 1)],
    ),
    # The CPU idles between t=1 and t=2.
    ("idle gap", [(1, 2, 2, 0), (2, 0, 1, 0), (3, 2, 3, 0), (4, 3, 5, 0), (5, 4, 4, 0)]),
]


def reference_workload(index: int) -> List[Process]:
    """
    Fresh Process objects for reference case ``index`` (0-based).
    """
    if not 0 <= index < len(REFERENCE_WORKLOADS):
        raise IndexError(f"No reference workload {index} (0-{len(REFERENCE_WORKLOADS) - 1})")

    _, entries = REFERENCE_WORKLOADS[index]
    return [
        Process(pid=pid, arrival_time=arrival, burst_time=burst, priority=priority)
        for pid, arrival, burst, priority in entries
    ]
