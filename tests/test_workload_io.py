from pathlib import Path

import pytest

from sched_compare.errors import EmptyWorkload, InvalidArrivalTime, InvalidBurstTime
from sched_compare.models import ProcessRecord
from sched_compare.workload_io import load_workload, records_from_rows, validate_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"burst_time":3,"priority":1,"arrival_time":0},'
                 '{"burst_time":2,"arrival_time":1}]')
    procs = load_workload(p)
    assert isinstance(procs[0], ProcessRecord)
    assert [r.pid for r in procs] == [1, 2]
    assert procs[1].priority == 0
    assert procs[1].arrival_time == 1
    assert procs[1].remaining_time == 2


def test_load_json_requires_list(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"burst_time": 3}')
    with pytest.raises(ValueError, match="must be a list"):
        load_workload(p)


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("burst_time,priority,arrival_time\n3,1,0\n2,,4\n")
    procs = load_workload(p)
    assert procs[0].burst_time == 3
    assert procs[1].priority == 0
    assert procs[1].arrival_time == 4


def test_load_csv_missing_burst(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("priority,arrival_time\n1,0\n")
    with pytest.raises(ValueError, match="Invalid process entry"):
        load_workload(p)


def test_load_txt_triples(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("# burst priority arrival\n5 3 0\n\n3 1 0  # short one\n8 2 0\n")
    procs = load_workload(p)
    assert [(r.pid, r.burst_time, r.priority, r.arrival_time) for r in procs] == [
        (1, 5, 3, 0),
        (2, 3, 1, 0),
        (3, 8, 2, 0),
    ]


def test_load_txt_bad_line(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("5 3\n")
    with pytest.raises(ValueError, match="Line 1"):
        load_workload(p)


def test_unsupported_suffix(tmp_path: Path):
    with pytest.raises(ValueError, match="Unsupported workload format"):
        load_workload(tmp_path / "w.yaml")


def test_records_from_rows_assigns_ids():
    procs = records_from_rows([(4, 2, 0), (1, 0, 3)])
    assert [p.pid for p in procs] == [1, 2]
    assert procs[0].effective_priority == 2
    assert procs[1].turnaround_time == 1


def test_validate_workload():
    validate_workload(records_from_rows([(1, 0, 0)]))
    with pytest.raises(EmptyWorkload):
        validate_workload([])
    with pytest.raises(InvalidBurstTime) as excinfo:
        validate_workload(records_from_rows([(2, 0, 0), (-1, 0, 0)]))
    assert excinfo.value.pid == 2
    with pytest.raises(InvalidArrivalTime):
        validate_workload(records_from_rows([(2, 0, -3)]))
