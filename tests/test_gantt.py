from rich.console import Console

from sched_compare.algorithms import schedule_rr, schedule_spn
from sched_compare.gantt import build_rich_gantt, slice_labels
from sched_compare.models import ScheduleResult
from sched_compare.workload_io import records_from_rows


def _procs():
    return records_from_rows([(5, 3, 0), (3, 1, 0), (8, 2, 0)])


def _render(panel) -> str:
    console = Console(record=True, width=120)
    console.print(panel)
    return console.export_text()


def test_slice_labels_mark_preemptions():
    res = schedule_rr(_procs(), quantum=2)
    assert slice_labels(res) == ["P1*", "P2*", "P3*", "P1*", "P2", "P3*", "P1", "P3"]


def test_non_preemptive_labels_have_no_marks():
    assert slice_labels(schedule_spn(_procs())) == ["P2", "P1", "P3"]


def test_chart_lists_waiting_times():
    text = _render(build_rich_gantt(schedule_spn(_procs())))
    assert "Shortest Process Next (SPN)" in text
    assert "P1 waits 3  P2 waits 0  P3 waits 8" in text
    assert "preempted" not in text


def test_chart_shows_preemption_legend():
    text = _render(build_rich_gantt(schedule_rr(_procs(), quantum=2)))
    assert "P1*" in text
    assert "* preempted" in text


def test_chart_marks_idle_time():
    text = _render(build_rich_gantt(schedule_spn(records_from_rows([(2, 0, 3)]))))
    assert "..." in text
    assert "0  3 5" in text


def test_empty_timeline():
    panel = build_rich_gantt(ScheduleResult(algorithm="FCFS", title="First Come First Serve (FCFS)"))
    assert panel.renderable == "No execution"
