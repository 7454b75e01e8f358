from __future__ import annotations

import heapq
import itertools
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Iterable, List, Optional, Tuple

from .errors import DuplicateIdError, InvalidInputError
from .models import OrderedProcess, Process


@dataclass(frozen=True)
class OrderingPolicy:
    """
    Ready-queue ordering: primary key ascending, then admission sequence
    ascending.
    """

    name: str
    primary_key: Callable[[Process], int]

    def sort_key(self, entry: OrderedProcess) -> Tuple[int, int]:
        return (self.primary_key(entry.process), entry.admission_sequence)


BY_ARRIVAL = OrderingPolicy("arrival", lambda p: p.arrival_time)
BY_BURST = OrderingPolicy("burst", lambda p: p.burst_time)
BY_PRIORITY = OrderingPolicy("priority", lambda p: p.priority)


class ReadyQueue:
    """Binary heap of admitted processes ordered by an ``OrderingPolicy``."""

    def __init__(self, policy: OrderingPolicy) -> None:
        self.policy = policy
        self._heap: List[Tuple[Tuple[int, int], OrderedProcess]] = []

    def push(self, entry: OrderedProcess) -> None:
        # Sort keys are unique per run, so entries themselves are never compared.
        heapq.heappush(self._heap, (self.policy.sort_key(entry), entry))

    def extend(self, entries: Iterable[OrderedProcess]) -> None:
        for entry in entries:
            self.push(entry)

    def peek(self) -> OrderedProcess:
        return self._heap[0][1]

    def pop(self) -> OrderedProcess:
        return heapq.heappop(self._heap)[1]

    def __len__(self) -> int:
        return len(self._heap)


class ArrivalStream:
    """
    Processes not yet admitted, in ascending arrival order (input order on
    ties). Owns the admission sequence counter for a single run.
    """

    def __init__(self, processes: Iterable[Process]) -> None:
        self._pending: Deque[Process] = deque(sorted(processes, key=lambda p: p.arrival_time))
        self._sequence = itertools.count()

    def admit(self, now: int) -> List[OrderedProcess]:
        admitted: List[OrderedProcess] = []
        while self._pending and self._pending[0].arrival_time <= now:
            admitted.append(OrderedProcess(self._pending.popleft(), next(self._sequence)))
        return admitted

    def next_arrival(self) -> Optional[int]:
        return self._pending[0].arrival_time if self._pending else None

    def __len__(self) -> int:
        return len(self._pending)


def validate_processes(processes: Iterable[Process]) -> List[Process]:
    """
    Copy the workload into a list, rejecting anything the engine cannot
    simulate coherently.
    """
    procs = list(processes)
    if not procs:
        raise InvalidInputError("Workload must contain at least one process")

    seen = set()
    for p in procs:
        if p.pid in seen:
            raise DuplicateIdError(p.pid)
        seen.add(p.pid)
        for name in ("arrival_time", "burst_time", "priority"):
            value = getattr(p, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidInputError(f"Process {p.pid!r}: {name} must be an integer (got {value!r})")
        if p.arrival_time < 0:
            raise InvalidInputError(f"Process {p.pid!r}: arrival time must be >= 0 (got {p.arrival_time})")
        if p.burst_time <= 0:
            raise InvalidInputError(f"Process {p.pid!r}: burst time must be > 0 (got {p.burst_time})")

    return procs


def validate_quantum(quantum: Optional[int]) -> int:
    if quantum is None or quantum <= 0:
        raise InvalidInputError("Round Robin requires a positive quantum (use --quantum)")
    return quantum
