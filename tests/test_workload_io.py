import logging
from pathlib import Path

import pytest

from schedsim.errors import WorkloadFormatError
from schedsim.models import Process
from schedsim.workload_io import load_workload


def test_load_positional_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("1,5,0,2\n2,3,1\n")
    procs = load_workload(p)
    assert procs == [
        Process(1, arrival_time=0, burst_time=5, priority=2),
        Process(2, arrival_time=1, burst_time=3, priority=0),
    ]


def test_load_positional_without_suffix(tmp_path: Path):
    p = tmp_path / "workload"
    p.write_text(" 1, 4, 0\n\n 2, 2, 3\n")
    procs = load_workload(p)
    assert [(x.pid, x.burst_time, x.arrival_time) for x in procs] == [(1, 4, 0), (2, 2, 3)]


def test_load_headed_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\n1,0,3,1\n2,1,2,\n")
    procs = load_workload(p)
    assert procs[0].pid == 1
    assert procs[0].burst_time == 3
    assert procs[1].priority == 0


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":2,"arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[1].priority == 0
    assert procs[1].arrival_time == 1


def test_load_empty_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("")
    assert load_workload(p) == []


@pytest.mark.parametrize(
    "content",
    [
        "1,x,0\n",
        "1,5\n",
        "1,5,0,2,9\n",
        "1,0,0\n",
        "1,5,0\n1,2,3\n",
        "1,5,-3\n",
        "x,5,0\n",
        "1.5,3,0\n",
        "P1,4,0,2\n",
        "pid,5,0\n",
    ],
)
def test_malformed_csv_fails_whole_load(tmp_path: Path, content):
    p = tmp_path / "w.csv"
    p.write_text(content)
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_malformed_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"pid": 1}')
    with pytest.raises(WorkloadFormatError):
        load_workload(p)

    p.write_text("[{")
    with pytest.raises(ValueError):
        load_workload(p)


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.yaml"
    p.write_text("")
    with pytest.raises(WorkloadFormatError, match="Unsupported"):
        load_workload(p)


def test_load_logs_process_count(tmp_path: Path, caplog):
    p = tmp_path / "w.csv"
    p.write_text("1,5,0\n2,3,1\n")
    caplog.set_level(logging.INFO, logger="schedsim.workload_io")
    load_workload(p)
    assert "Loaded 2 processes" in caplog.text


def test_header_needs_known_columns(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("id,burst,arrival\n1,5,0\n")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_headed_csv_columns_in_any_order(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("burst_time,pid,arrival_time\n4,7,2\n")
    assert load_workload(p) == [Process(7, arrival_time=2, burst_time=4)]


@pytest.mark.parametrize(
    "entry",
    [
        '{"pid":1,"arrival_time":0,"burst_time":2.7}',
        '{"pid":1.5,"arrival_time":0,"burst_time":2}',
        '{"pid":1,"arrival_time":true,"burst_time":2}',
        '{"pid":1,"arrival_time":0,"burst_time":2,"priority":0.5}',
    ],
)
def test_json_rejects_non_integer_numbers(tmp_path: Path, entry):
    p = tmp_path / "w.json"
    p.write_text(f"[{entry}]")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_json_accepts_whole_floats(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":0.0,"burst_time":3.0}]')
    assert load_workload(p) == [Process(1, arrival_time=0, burst_time=3)]
