from pathlib import Path

import pytest

from schedsim.errors import InvalidInputError
from schedsim.workload_io import load_workload
from schedsim.models import Process


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":"B","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[0].priority == 1
    assert procs[1].priority == 0
    assert procs[1].arrival_time == 1


def test_load_json_processes_key(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"processes": [{"pid": 7, "arrival_time": 2, "burst_time": 4}]}')
    assert load_workload(p) == [Process("7", arrival_time=2, burst_time=4)]


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,3,1\nB,1,2,\n")
    procs = load_workload(p)
    assert procs[0].pid == "A"
    assert procs[1].priority == 0


def test_invalid_json_entry_names_entry(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3},'
                 '{"pid":"B","arrival_time":"soon","burst_time":3}]')
    with pytest.raises(InvalidInputError, match="entry 1"):
        load_workload(p)


def test_missing_field_names_csv_line(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,0,3\nB,,2\n")
    with pytest.raises(InvalidInputError, match=r"line 3: missing arrival_time"):
        load_workload(p)


def test_csv_header_must_have_required_fields(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,burst_time\nA,3\n")
    with pytest.raises(InvalidInputError, match="arrival_time"):
        load_workload(p)


def test_malformed_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text("[{")
    with pytest.raises(InvalidInputError, match="not valid JSON"):
        load_workload(p)


def test_json_must_be_list(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"pid":"A","arrival_time":0,"burst_time":3}')
    with pytest.raises(InvalidInputError, match="list"):
        load_workload(p)


def test_json_entry_must_be_object(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text("[[1, 0, 3]]")
    with pytest.raises(InvalidInputError, match="expected an object"):
        load_workload(p)


def test_unsupported_format(tmp_path: Path):
    with pytest.raises(InvalidInputError, match="Unsupported"):
        load_workload(tmp_path / "w.yaml")
