import pytest

from schedsim.algorithms import schedule_fcfs, schedule_rr
from schedsim.models import Process
from schedsim.render import (
    PREEMPTED,
    PREEMPTED_MARK,
    TIMELINE_HEADERS,
    build_rich_gantt,
    gantt_lines,
    gantt_segments,
    render_table,
    render_timeline,
    timeline_table_rows,
)
from schedsim.workloads import reference_workload


def test_render_table_contains_cells():
    text = render_table(["PID", "Start"], [["A", "0"], ["B", "7"]])
    assert "PID" in text
    assert "Start" in text
    assert "B" in text and "7" in text


def test_render_table_rejects_mismatched_row():
    with pytest.raises(ValueError, match="cells"):
        render_table(["PID", "Start"], [["A"]])


def test_timeline_rows_use_preempted_sentinel():
    res = schedule_rr(reference_workload(2), quantum=3)
    cells = timeline_table_rows(res)
    assert all(len(row) == len(TIMELINE_HEADERS) for row in cells)
    assert cells[0] == ["1", "0", f"3 {PREEMPTED}", PREEMPTED, PREEMPTED]
    assert cells[3] == ["4", "9", "12", "9", "12"]


def test_render_timeline_includes_averages():
    text = render_timeline(schedule_fcfs(reference_workload(0)))
    assert "FCFS" in text
    assert "Average waiting time 17.00" in text
    assert "Average turnaround time 27.00" in text


def test_gantt_time_marks_include_idle_gap():
    res = schedule_fcfs([Process("A", 0, 2), Process("B", 5, 3)])
    _, marks = build_rich_gantt(res.rows)
    assert marks == "0  2  5  8"


def test_gantt_segments_cover_idle_gaps():
    res = schedule_fcfs([Process("A", 0, 2), Process("B", 5, 3)])
    segments = [(row and row.pid, start, end) for row, start, end in gantt_segments(res.rows)]
    assert segments == [("A", 0, 2), (None, 2, 5), ("B", 5, 8)]


def test_gantt_marks_preempted_slices():
    res = schedule_rr([Process("A", 0, 4), Process("B", 2, 2)], quantum=2)
    panel, marks = build_rich_gantt(res.rows)
    assert marks == "0  2  4  6"
    assert panel.subtitle == f"{PREEMPTED_MARK} preempted"
    _, labels, _ = gantt_lines(res.rows)
    assert labels.plain == f"A{PREEMPTED_MARK}B A "


def test_gantt_without_preemption_has_no_legend():
    panel, _ = build_rich_gantt(schedule_fcfs(reference_workload(0)).rows)
    assert panel.subtitle is None


def test_gantt_without_rows():
    _, marks = build_rich_gantt([])
    assert marks == ""
