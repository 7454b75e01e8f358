from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import Pid, ScheduleResult, TimelineRow

TIMELINE_HEADERS = ["PID", "Start", "Complete", "Wait", "Turnaround"]

PREEMPTED = "(preempted)"

# Appended to Gantt labels of slices that ended in a preemption.
PREEMPTED_MARK = "*"

GANTT_COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def render_table(headers: Sequence[str], rows: Sequence[Sequence[str]], title: Optional[str] = None) -> str:
    """
    Render headers and string cells as a plain-text table.
    """
    table = Table(title=title, box=box.SIMPLE_HEAVY)
    for h in headers:
        table.add_column(h, justify="right")

    for row in rows:
        if len(row) != len(headers):
            raise ValueError(f"Row has {len(row)} cells, expected {len(headers)}: {list(row)!r}")
        table.add_row(*row)

    console = Console(color_system=None, width=200)
    with console.capture() as capture:
        console.print(table)
    return capture.get()


def timeline_table_rows(result: ScheduleResult) -> List[List[str]]:
    """
    Cells for ``TIMELINE_HEADERS``, one row per dispatch.
    """
    cells: List[List[str]] = []
    for row in result.rows:
        if row.completed:
            cells.append(
                [
                    str(row.pid),
                    str(row.start_time),
                    str(row.completion_time),
                    str(row.waiting_time),
                    str(row.turnaround_time),
                ]
            )
        else:
            cells.append(
                [
                    str(row.pid),
                    str(row.start_time),
                    f"{row.preempted_at} {PREEMPTED}",
                    PREEMPTED,
                    PREEMPTED,
                ]
            )
    return cells


def render_timeline(result: ScheduleResult) -> str:
    text = render_table(TIMELINE_HEADERS, timeline_table_rows(result), title=result.algorithm)
    return (
        f"{text}"
        f"Average waiting time {result.avg_waiting:.2f}\n"
        f"Average turnaround time {result.avg_turnaround:.2f}\n"
    )


def gantt_segments(rows: Sequence[TimelineRow]) -> List[Tuple[Optional[TimelineRow], int, int]]:
    """
    Split ``[0, last end)`` into ``(row, start, end)`` segments in time
    order; idle gaps have ``row`` set to None.
    """
    segments: List[Tuple[Optional[TimelineRow], int, int]] = []
    clock = 0
    for row in rows:
        if row.start_time > clock:
            segments.append((None, clock, row.start_time))
        segments.append((row, row.start_time, row.end_time))
        clock = row.end_time
    return segments


def gantt_lines(rows: Sequence[TimelineRow]) -> Tuple[Text, Text, str]:
    """
    Bar, label and time-mark lines of a Gantt chart. Idle gaps are dotted;
    preempted slices carry ``PREEMPTED_MARK`` after the pid.
    """
    colors: Dict[Pid, str] = {}
    bar = Text()
    labels = Text()
    marks = ["0"]

    for row, start, end in gantt_segments(rows):
        width = max(1, end - start)
        if row is None:
            bar.append("." * width, style="dim")
            labels.append(" " * width)
        else:
            color = colors.setdefault(row.pid, GANTT_COLORS[len(colors) % len(GANTT_COLORS)])
            label = str(row.pid) + (PREEMPTED_MARK if row.preempted else "")
            bar.append(" " * width, style=f"on {color}")
            labels.append(label[:width].ljust(width), style="bold" if row.completed else "italic")
        marks.append(f"{end:>3}")

    return bar, labels, "".join(marks)


def build_rich_gantt(rows: Sequence[TimelineRow]) -> tuple[Panel, str]:
    """
    Colored Gantt chart of a timeline, plus a line of time marks at every
    segment boundary.
    """
    if not rows:
        return Panel("No execution", title="Gantt Chart"), ""

    bar, labels, marks = gantt_lines(rows)
    grid = Table.grid(padding=(0, 0))
    grid.add_row(bar)
    grid.add_row(labels)

    subtitle = f"{PREEMPTED_MARK} preempted" if any(row.preempted for row in rows) else None
    return Panel.fit(grid, title="Gantt Chart", subtitle=subtitle), marks
