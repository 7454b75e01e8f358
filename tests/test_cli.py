from pathlib import Path

from schedsim.cli import main


def test_run_reference_case(capsys):
    assert main(["run", "-a", "fcfs", "-c", "0"]) == 0
    out = capsys.readouterr().out
    assert "FCFS" in out
    assert "17.00" in out


def test_run_rr_from_workload_file(tmp_path: Path, capsys):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,4,0\nB,2,2,0\n")
    assert main(["run", "-a", "rr", "-q", "2", "-w", str(p)]) == 0
    out = capsys.readouterr().out
    assert "Round Robin" in out
    assert "preempted" in out


def test_run_rr_without_quantum_fails(capsys):
    assert main(["run", "-a", "rr", "-c", "0"]) == 1
    assert "positive quantum" in capsys.readouterr().out


def test_run_unknown_case_fails(capsys):
    assert main(["run", "-a", "fcfs", "-c", "99"]) == 1
    assert "No reference workload" in capsys.readouterr().out


def test_compare(capsys):
    assert main(["compare", "-c", "10", "-q", "3"]) == 0
    out = capsys.readouterr().out
    assert "Algorithm comparison" in out
    assert "Robin" in out


def test_cases(capsys):
    assert main(["cases"]) == 0
    out = capsys.readouterr().out
    assert "Reference workloads" in out
    assert "11" in out


def test_run_prints_timeline_table_and_metrics(capsys):
    assert main(["run", "-a", "priority-preemptive", "-c", "10"]) == 0
    out = capsys.readouterr().out
    assert "Turnaround" in out
    assert "1 (preempted)" in out
    assert "Average waiting time 8.20" in out
    assert "Dispatches / preemptions" in out
    assert "7 / 2" in out


def test_run_bad_workload_file_fails(tmp_path: Path, capsys):
    p = tmp_path / "w.json"
    p.write_text('[{"pid": "A", "burst_time": 3}]')
    assert main(["run", "-a", "fcfs", "-w", str(p)]) == 1
    assert "missing arrival_time" in capsys.readouterr().out
