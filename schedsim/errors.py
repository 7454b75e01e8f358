"""
Errors raised by the scheduling engine.

All of them are caller input errors: the simulation is deterministic, so the
only fix is to correct the workload and run it again.
"""


class SchedulingError(ValueError):
    """Base class for rejected simulation input."""


class InvalidInputError(SchedulingError):
    """Empty workload, bad process fields, bad quantum or unknown algorithm."""


class DuplicateIdError(SchedulingError):
    def __init__(self, pid) -> None:
        super().__init__(f"Duplicate process id: {pid!r}")
        self.pid = pid
