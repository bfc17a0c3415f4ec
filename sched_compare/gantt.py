from __future__ import annotations

from typing import Dict, List

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .models import ScheduleResult

PREEMPTED = "*"
COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def slice_labels(result: ScheduleResult) -> List[str]:
    """
    Label each timeline slice with its pid; a slice after which the process
    still has work left (it was preempted) carries a trailing ``*``.
    """
    last_slice: Dict[int, int] = {}
    for i, sl in enumerate(result.timeline):
        last_slice[sl.pid] = i
    return [
        f"P{sl.pid}" if last_slice[sl.pid] == i else f"P{sl.pid}{PREEMPTED}"
        for i, sl in enumerate(result.timeline)
    ]


def build_rich_gantt(result: ScheduleResult) -> Panel:
    """
    Colored Gantt chart of one policy run: a bar per slice, idle time as dots,
    slice end times underneath and each process's waiting time at the bottom.

    Cells are widened to fit their label, so short slices stay readable at the
    cost of exact scale.
    """
    title = f"Gantt Chart: {result.title}"
    if not result.timeline:
        return Panel("No execution", title=title)

    bar = Text()
    labels = Text()
    marks = Text("0")
    clock = 0

    for sl, label in zip(result.timeline, slice_labels(result)):
        if sl.start_time > clock:
            gap = sl.start_time - clock
            bar.append("." * gap, style="dim")
            labels.append(" " * gap)
            marks.append(str(sl.start_time).rjust(gap))

        cell = max(sl.end_time - sl.start_time, len(label))
        color = COLORS[(sl.pid - 1) % len(COLORS)]
        bar.append(" " * cell, style=f"on {color}")
        labels.append(label.ljust(cell), style="dim" if label.endswith(PREEMPTED) else "bold")
        marks.append(str(sl.end_time).rjust(cell))
        clock = sl.end_time

    waits = Text("  ".join(f"P{p.pid} waits {p.waiting_time}" for p in result.processes))

    body = [bar, labels, marks, Text(), waits]
    if any(label.endswith(PREEMPTED) for label in slice_labels(result)):
        body.append(Text(f"{PREEMPTED} preempted", style="dim"))

    return Panel.fit(Group(*body), title=title)
