from __future__ import annotations

from typing import List, Sequence, Tuple

from .errors import EmptyWorkload
from .models import ProcessRecord, ScheduleResult, SystemMetrics


def average_waiting_time(processes: Sequence[ProcessRecord]) -> float:
    if not processes:
        raise EmptyWorkload()
    return sum(p.waiting_time for p in processes) / len(processes)


def average_turnaround_time(processes: Sequence[ProcessRecord]) -> float:
    if not processes:
        raise EmptyWorkload()
    return sum(p.turnaround_time for p in processes) / len(processes)


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization from the timeline slices of a
    finished schedule.
    """
    if not result.timeline:
        system = SystemMetrics(cpu_busy_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)
        result.system = system
        return system

    makespan = max(slice_.end_time for slice_ in result.timeline)
    cpu_busy_time = sum(slice_.end_time - slice_.start_time for slice_ in result.timeline)

    throughput = len(result.processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )
    result.system = system
    return system


def summarize_process_metrics(processes: List[ProcessRecord]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    return {
        "avg_waiting": average_waiting_time(processes),
        "avg_turnaround": average_turnaround_time(processes),
    }


def select_best(averages: Sequence[Tuple[str, float]]) -> Tuple[str, float]:
    """
    Return the (name, average) pair with the smallest average waiting time.

    Only a strictly smaller value replaces the current best, so on a tie the
    pair listed first wins.
    """
    if not averages:
        raise ValueError("No results to choose from")

    best = averages[0]
    for candidate in averages[1:]:
        if candidate[1] < best[1]:
            best = candidate
    return best
