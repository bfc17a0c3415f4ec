"""
Errors raised when a workload or its policy parameters cannot be simulated.

All of them are detected before any policy runs. They subclass ``ValueError``
so callers that already guard workload loading with ``except ValueError`` keep
working.
"""

from __future__ import annotations


class SchedulingError(ValueError):
    """Base class for rejected workloads and parameters."""


class EmptyWorkload(SchedulingError):
    def __init__(self) -> None:
        super().__init__("Workload contains no processes")


class InvalidBurstTime(SchedulingError):
    def __init__(self, pid: int, burst_time: int) -> None:
        super().__init__(f"Process {pid} has non-positive burst time: {burst_time}")
        self.pid = pid
        self.burst_time = burst_time


class InvalidArrivalTime(SchedulingError):
    def __init__(self, pid: int, arrival_time: int) -> None:
        super().__init__(f"Process {pid} has negative arrival time: {arrival_time}")
        self.pid = pid
        self.arrival_time = arrival_time


class InvalidParameter(SchedulingError):
    def __init__(self, name: str, value: object, reason: str) -> None:
        super().__init__(f"Invalid {name} {value!r}: {reason}")
        self.name = name
        self.value = value
