import pytest

from sched_compare.algorithms import ALGORITHMS, POLICY_ORDER
from sched_compare.config import PolicyConfig
from sched_compare.errors import EmptyWorkload, InvalidBurstTime, InvalidParameter
from sched_compare.metrics import average_waiting_time, select_best
from sched_compare.pipeline import compare_all
from sched_compare.workload_io import records_from_rows


def _procs():
    return records_from_rows([(5, 3, 0), (3, 1, 0), (8, 2, 0)])


def test_compare_runs_policies_in_canonical_order():
    comparison = compare_all(_procs())
    assert [r.algorithm for r in comparison.results] == POLICY_ORDER


def test_compare_picks_first_of_tied_minimum():
    comparison = compare_all(_procs())
    # SPN and SRT both average 11/3; SPN comes first.
    assert comparison.get("srt").average_waiting == pytest.approx(comparison.get("spn").average_waiting)
    assert comparison.best_algorithm == "SPN"
    assert comparison.best_average == pytest.approx(11 / 3)


def test_compare_averages():
    comparison = compare_all(_procs())
    averages = {r.algorithm: r.average_waiting for r in comparison.results}
    assert averages == pytest.approx(
        {
            "FCFS": 13 / 3,
            "RR": 7.0,
            "SPN": 11 / 3,
            "SRT": 11 / 3,
            "HRRN": 13 / 3,
            "FB": 19 / 3,
            "FBV": 19 / 3,
            "Aging": 14 / 3,
        }
    )


def test_compare_single_process_prefers_fcfs():
    comparison = compare_all(records_from_rows([(4, 0, 0)]))
    assert comparison.best_algorithm == "FCFS"
    assert comparison.best_average == 0.0


def test_compare_subset_keeps_canonical_order():
    comparison = compare_all(_procs(), algorithms=["aging", "RR", "fcfs"])
    assert [r.algorithm for r in comparison.results] == ["FCFS", "RR", "Aging"]


def test_compare_unknown_algorithm():
    with pytest.raises(ValueError, match="Unknown algorithm"):
        compare_all(_procs(), algorithms=["fcfs", "edf"])


def test_policies_get_private_copies():
    procs = _procs()
    comparison = compare_all(procs)
    assert all(p.waiting_time == 0 and p.remaining_time == p.burst_time for p in procs)
    seen = set()
    for result in comparison.results:
        for record in result.processes:
            assert id(record) not in seen
            seen.add(id(record))
        assert [(p.pid, p.burst_time, p.priority, p.arrival_time) for p in result.processes] == [
            (p.pid, p.burst_time, p.priority, p.arrival_time) for p in procs
        ]


def test_compare_is_repeatable():
    procs = records_from_rows([(6, 4, 0), (2, 1, 1), (8, 3, 2), (3, 0, 3), (4, 2, 9)])
    config = PolicyConfig(quantum=3, quanta=[1, 3], aging_interval=2)
    assert compare_all(procs, config) == compare_all(procs, config)


def test_invalid_burst_runs_no_policy(monkeypatch):
    calls = []
    for key in ALGORITHMS:
        monkeypatch.setitem(ALGORITHMS, key, lambda *a, **kw: calls.append(a))
    with pytest.raises(InvalidBurstTime):
        compare_all(records_from_rows([(3, 0, 0), (0, 0, 0)]))
    assert calls == []


def test_empty_workload():
    with pytest.raises(EmptyWorkload):
        compare_all([])


def test_invalid_parameters_rejected_before_running():
    with pytest.raises(InvalidParameter, match="quantum"):
        compare_all(_procs(), PolicyConfig(quantum=0))
    with pytest.raises(InvalidParameter, match="quanta"):
        compare_all(_procs(), PolicyConfig(quanta=[]))
    with pytest.raises(InvalidParameter, match="quanta"):
        compare_all(_procs(), PolicyConfig(quanta=[2, -1]))
    with pytest.raises(InvalidParameter, match="aging interval"):
        compare_all(_procs(), PolicyConfig(aging_interval=-1))


def test_parameters_only_checked_for_selected_policies():
    comparison = compare_all(_procs(), PolicyConfig(quantum=0), algorithms=["fcfs", "spn"])
    assert comparison.best_algorithm == "SPN"


def test_select_best_is_stable():
    assert select_best([("A", 2.5), ("B", 1.0), ("C", 1.0)]) == ("B", 1.0)
    assert select_best([("A", 1.0), ("B", 1.0)]) == ("A", 1.0)


def test_select_best_needs_results():
    with pytest.raises(ValueError):
        select_best([])


def test_average_waiting_time_empty():
    with pytest.raises(EmptyWorkload):
        average_waiting_time([])


def test_compare_on_records_from_an_earlier_run():
    fresh = compare_all(_procs())
    for result in fresh.results:
        again = compare_all(result.processes)
        assert again == fresh, result.algorithm
