from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, List, Optional

from .config import PolicyConfig
from .metrics import average_waiting_time, compute_system_metrics
from .models import ProcessRecord, ScheduleResult, ScheduledSlice
from .workload_io import validate_workload

logger = logging.getLogger(__name__)


def _record_slice(timeline: List[ScheduledSlice], pid: int, start_time: int, end_time: int) -> None:
    """
    Append a slice, extending the previous one when the same process keeps the CPU.
    """
    if end_time <= start_time:
        return
    if timeline:
        last = timeline[-1]
        if last.pid == pid and last.end_time == start_time:
            last.end_time = end_time
            return
    timeline.append(ScheduledSlice(pid=pid, start_time=start_time, end_time=end_time))


def _finish(
    algorithm: str,
    title: str,
    processes: List[ProcessRecord],
    timeline: List[ScheduledSlice],
    **params: object,
) -> ScheduleResult:
    result = ScheduleResult(
        algorithm=algorithm,
        title=title,
        params=dict(params),
        processes=processes,
        timeline=timeline,
        average_waiting=average_waiting_time(processes),
    )
    compute_system_metrics(result)
    return result


def schedule_fcfs(processes: List[ProcessRecord]) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive).

    The list is taken to be in arrival order already and is not re-sorted.
    A process that arrives after its predecessor finishes waits 0; the idle
    gap itself is not carried forward.
    """
    if any(b.arrival_time < a.arrival_time for a, b in zip(processes, processes[1:])):
        logger.warning("FCFS: workload is not ordered by arrival time; waiting times follow list order")

    timeline: List[ScheduledSlice] = []
    start_time = 0
    for i, p in enumerate(processes):
        if i == 0:
            p.waiting_time = 0
        else:
            prev = processes[i - 1]
            p.waiting_time = max(0, prev.waiting_time + prev.burst_time - p.arrival_time)
        start_time = max(start_time, p.arrival_time + p.waiting_time)
        _record_slice(timeline, p.pid, start_time, start_time + p.burst_time)
        start_time += p.burst_time
        logger.debug("FCFS: P%d waits %d", p.pid, p.waiting_time)

    return _finish("FCFS", "First Come First Serve (FCFS)", processes, timeline)


def _cyclic_queue(
    processes: List[ProcessRecord],
    timeline: List[ScheduledSlice],
    quantum_for: Callable[[int], int],
    name: str,
) -> None:
    """
    Shared loop of RR, FB and FBV.

    Every process is queued up front in list order; arrival time does not gate
    entry. ``quantum_for(level)`` gives the slice length for a process that has
    already been preempted ``level`` times.
    """
    time = 0
    level = [0] * len(processes)
    ready: Deque[int] = deque(range(len(processes)))

    while ready:
        i = ready.popleft()
        p = processes[i]
        quantum = quantum_for(level[i])

        if p.remaining_time > quantum:
            _record_slice(timeline, p.pid, time, time + quantum)
            time += quantum
            p.remaining_time -= quantum
            level[i] += 1
            ready.append(i)
            logger.debug("%s: P%d preempted at t=%d (%d left)", name, p.pid, time, p.remaining_time)
        else:
            _record_slice(timeline, p.pid, time, time + p.remaining_time)
            time += p.remaining_time
            p.waiting_time = time - p.burst_time
            p.remaining_time = 0
            logger.debug("%s: P%d completes at t=%d", name, p.pid, time)


def schedule_rr(processes: List[ProcessRecord], quantum: int) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.
    """
    timeline: List[ScheduledSlice] = []
    _cyclic_queue(processes, timeline, lambda level: quantum, "RR")
    return _finish("RR", "Round Robin (RR)", processes, timeline, quantum=quantum)


def schedule_spn(processes: List[ProcessRecord]) -> ScheduleResult:
    """
    Shortest Process Next (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time. Ties go to the
    earliest entry in the list. With nothing ready the clock ticks by one.
    """
    time = 0
    timeline: List[ScheduledSlice] = []
    completed = [False] * len(processes)
    done = 0

    while done < len(processes):
        chosen: Optional[int] = None
        for i, p in enumerate(processes):
            if completed[i] or p.arrival_time > time:
                continue
            if chosen is None or p.burst_time < processes[chosen].burst_time:
                chosen = i

        if chosen is None:
            time += 1
            continue

        p = processes[chosen]
        p.waiting_time = time - p.arrival_time
        _record_slice(timeline, p.pid, time, time + p.burst_time)
        time += p.burst_time
        completed[chosen] = True
        done += 1
        logger.debug("SPN: P%d runs until t=%d", p.pid, time)

    return _finish("SPN", "Shortest Process Next (SPN)", processes, timeline)


def schedule_srt(processes: List[ProcessRecord]) -> ScheduleResult:
    """
    Shortest Remaining Time (preemptive SPN), simulated one time unit at a time.
    """
    time = 0
    timeline: List[ScheduledSlice] = []
    done = 0

    while done < len(processes):
        chosen: Optional[int] = None
        for i, p in enumerate(processes):
            if p.arrival_time > time or p.remaining_time <= 0:
                continue
            if chosen is None or p.remaining_time < processes[chosen].remaining_time:
                chosen = i

        if chosen is not None:
            p = processes[chosen]
            _record_slice(timeline, p.pid, time, time + 1)
            p.remaining_time -= 1
            if p.remaining_time == 0:
                p.waiting_time = time + 1 - p.burst_time - p.arrival_time
                done += 1
                logger.debug("SRT: P%d completes at t=%d", p.pid, time + 1)
        time += 1

    return _finish("SRT", "Shortest Remaining Time (SRT)", processes, timeline)


def schedule_hrrn(processes: List[ProcessRecord]) -> ScheduleResult:
    """
    Highest Response Ratio Next (non-preemptive).

    ratio = (time waited + burst) / burst. The first process reaching the
    highest ratio wins; later ones must beat it strictly.
    """
    time = 0
    timeline: List[ScheduledSlice] = []
    completed = [False] * len(processes)
    done = 0

    while done < len(processes):
        chosen: Optional[int] = None
        best_ratio = -1.0
        for i, p in enumerate(processes):
            if completed[i] or p.arrival_time > time:
                continue
            ratio = (time - p.arrival_time + p.burst_time) / p.burst_time
            if ratio > best_ratio:
                best_ratio = ratio
                chosen = i

        if chosen is None:
            time += 1
            continue

        p = processes[chosen]
        p.waiting_time = time - p.arrival_time
        _record_slice(timeline, p.pid, time, time + p.burst_time)
        time += p.burst_time
        completed[chosen] = True
        done += 1
        logger.debug("HRRN: P%d picked with ratio %.3f", p.pid, best_ratio)

    return _finish("HRRN", "Highest Response Ratio Next (HRRN)", processes, timeline)


def schedule_fb(processes: List[ProcessRecord], quantum: int) -> ScheduleResult:
    """
    Feedback: each preemption doubles the process's next quantum.
    """
    timeline: List[ScheduledSlice] = []
    _cyclic_queue(processes, timeline, lambda level: quantum * 2**level, "FB")
    return _finish("FB", "Feedback (FB)", processes, timeline, quantum=quantum)


def schedule_fbv(processes: List[ProcessRecord], quanta: List[int]) -> ScheduleResult:
    """
    Feedback with a varying quantum: the n-th slice of a process lasts
    ``quanta[n % len(quanta)]``.
    """
    quanta = list(quanta)
    timeline: List[ScheduledSlice] = []
    _cyclic_queue(processes, timeline, lambda level: quanta[level % len(quanta)], "FBV")
    return _finish(
        "FBV",
        "Feedback with Varying Time Quantum (FBV)",
        processes,
        timeline,
        quanta=quanta,
    )


def schedule_aging(processes: List[ProcessRecord], aging_interval: int) -> ScheduleResult:
    """
    Non-preemptive priority scheduling with aging.

    Arrival time plays no part in selection, so a process can be picked
    before it arrives and end up with a negative waiting time. After every
    pick, each unfinished process has its effective priority lowered by
    ``aging_interval`` (never below 0); lower values run sooner.
    """
    time = 0
    timeline: List[ScheduledSlice] = []
    done = 0

    while done < len(processes):
        chosen: Optional[int] = None
        for i, p in enumerate(processes):
            if p.remaining_time <= 0:
                continue
            if chosen is None or p.effective_priority < processes[chosen].effective_priority:
                chosen = i

        p = processes[chosen]
        p.waiting_time = time - p.arrival_time
        _record_slice(timeline, p.pid, time, time + p.remaining_time)
        time += p.remaining_time
        p.remaining_time = 0
        done += 1
        logger.debug("Aging: P%d picked at priority %d", p.pid, p.effective_priority)

        for other in processes:
            if other.remaining_time > 0:
                other.effective_priority = max(0, other.effective_priority - aging_interval)

    return _finish("Aging", "Aging", processes, timeline, aging_interval=aging_interval)


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "rr": schedule_rr,
    "spn": schedule_spn,
    "srt": schedule_srt,
    "hrrn": schedule_hrrn,
    "fb": schedule_fb,
    "fbv": schedule_fbv,
    "aging": schedule_aging,
}

# Canonical report order; also the tie-break order when picking the best policy.
POLICY_ORDER = ["FCFS", "RR", "SPN", "SRT", "HRRN", "FB", "FBV", "Aging"]


def run_algorithm(
    name: str,
    processes: List[ProcessRecord],
    config: Optional[PolicyConfig] = None,
) -> ScheduleResult:
    """
    Validate, clone the workload and run a single policy on the copy.

    The caller's records are left untouched.
    """
    key = name.lower()
    if key not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    config = config or PolicyConfig()
    validate_workload(processes)
    config.validate([key])

    func = ALGORITHMS[key]
    return func([p.clone() for p in processes], **config.params_for(key))
