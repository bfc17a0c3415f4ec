from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class ProcessRecord:
    """
    One workload entry plus the per-policy working state computed for it.

    ``pid``, ``burst_time``, ``priority`` and ``arrival_time`` come from the
    workload and are never changed by a policy. ``waiting_time``,
    ``remaining_time`` and ``effective_priority`` belong to whichever policy
    owns this copy of the record.
    """

    pid: int
    burst_time: int
    priority: int = 0
    arrival_time: int = 0
    waiting_time: int = 0
    remaining_time: Optional[int] = None
    effective_priority: Optional[int] = None

    def __post_init__(self) -> None:
        if self.remaining_time is None:
            self.remaining_time = self.burst_time
        if self.effective_priority is None:
            self.effective_priority = self.priority

    @property
    def turnaround_time(self) -> int:
        return self.waiting_time + self.burst_time

    def clone(self) -> "ProcessRecord":
        """
        Copy of the workload fields with fresh working state, ready for a new run.
        """
        return ProcessRecord(
            pid=self.pid,
            burst_time=self.burst_time,
            priority=self.priority,
            arrival_time=self.arrival_time,
        )


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    title: str
    params: Dict[str, object] = field(default_factory=dict)
    processes: List[ProcessRecord] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    average_waiting: float = 0.0
    system: Optional[SystemMetrics] = None


@dataclass
class ComparisonResult:
    results: List[ScheduleResult] = field(default_factory=list)
    best_algorithm: str = ""
    best_average: float = 0.0

    def get(self, algorithm: str) -> ScheduleResult:
        for result in self.results:
            if result.algorithm.lower() == algorithm.lower():
                return result
        raise KeyError(algorithm)
