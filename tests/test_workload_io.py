import json
from pathlib import Path

import pytest

from schedsim.models import Process
from schedsim.workload_io import export_workload, load_workload, processes_to_records


def _procs():
    return [
        Process("A", arrival_time=0, burst_time=3, priority=2),
        Process("B", arrival_time=1, burst_time=2),
    ]


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":"B","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[1].priority == 1
    assert procs[1].arrival_time == 1


def test_load_json_export_keys(tmp_path: Path):
    p = tmp_path / "processes.json"
    p.write_text('[{"id":"P1","arrivalTime":2,"burstTime":5,"priority":3}]')
    assert load_workload(p) == [Process("P1", arrival_time=2, burst_time=5, priority=3)]


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,3,1\nB,1,2,\n")
    procs = load_workload(p)
    assert procs[0].pid == "A"
    assert procs[1].priority == 1


def test_load_rejects_bad_entries(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":"soon","burst_time":3}]')
    with pytest.raises(ValueError, match="Invalid process entry"):
        load_workload(p)


def test_load_rejects_non_list_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"pid":"A"}')
    with pytest.raises(ValueError):
        load_workload(p)


def test_load_rejects_unknown_suffix(tmp_path: Path):
    p = tmp_path / "w.yaml"
    p.write_text("- pid: A\n")
    with pytest.raises(ValueError, match="Unsupported workload format"):
        load_workload(p)


def test_records_field_order():
    records = processes_to_records(_procs())
    assert list(records[0]) == ["id", "arrivalTime", "burstTime", "priority"]
    assert records[1] == {"id": "B", "arrivalTime": 1, "burstTime": 2, "priority": 1}


def test_export_json(tmp_path: Path):
    out = export_workload(_procs(), tmp_path / "processes.json")
    raw = json.loads(out.read_text())
    assert [list(entry) for entry in raw] == [["id", "arrivalTime", "burstTime", "priority"]] * 2
    assert load_workload(out) == _procs()


def test_export_csv(tmp_path: Path):
    out = export_workload(_procs(), tmp_path / "processes.csv")
    lines = out.read_text().splitlines()
    assert lines[0] == "id,arrivalTime,burstTime,priority"
    assert lines[1] == "A,0,3,2"
    assert load_workload(out) == _procs()


def test_export_rejects_unknown_suffix(tmp_path: Path):
    with pytest.raises(ValueError, match="Unsupported export format"):
        export_workload(_procs(), tmp_path / "processes.txt")


@pytest.mark.parametrize(
    "entry",
    [
        '{"pid":"A","arrival_time":0,"burst_time":2.7}',
        '{"pid":"A","arrival_time":true,"burst_time":3}',
        '{"pid":"A","arrival_time":0,"burst_time":3,"priority":false}',
        '{"pid":"A","arrival_time":0.5,"burst_time":3}',
    ],
)
def test_load_rejects_non_integer_numbers(tmp_path: Path, entry):
    p = tmp_path / "w.json"
    p.write_text(f"[{entry}]")
    with pytest.raises(ValueError, match="Invalid process entry"):
        load_workload(p)


def test_load_accepts_whole_floats(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":1.0,"burst_time":3.0,"priority":2}]')
    assert load_workload(p) == [Process("A", arrival_time=1, burst_time=3, priority=2)]
