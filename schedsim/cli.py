from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .algorithms import ALGORITHMS, QUANTUM_ALGORITHMS, run_algorithm
from .errors import InvalidInputError
from .metrics import summarize_timeline
from .models import Process, ScheduleResult
from .render import build_rich_gantt, render_table, render_timeline
from .workload_io import load_workload
from .workloads import REFERENCE_WORKLOADS, reference_workload

logger = logging.getLogger(__name__)

COMPARISON_HEADERS = ["Algorithm", "Quantum", "Avg waiting", "Avg turnaround", "Avg response", "Preemptions"]


def _add_workload_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--workload",
        "-w",
        help="Path to JSON or CSV workload file.",
    )
    source.add_argument(
        "--case",
        "-c",
        type=int,
        help="Index of a built-in reference workload (see 'schedsim cases').",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, Priority, preemptive Priority, RR).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every dispatch, preemption and completion.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({', '.join(ALGORITHMS)}).",
    )
    _add_workload_arguments(run_parser)
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (ignored by the other algorithms).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    _add_workload_arguments(compare_parser)
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(ALGORITHMS),
        help=f"Algorithms to compare (default: {' '.join(ALGORITHMS)}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=2,
        help="Time quantum used for RR when included (default: 2).",
    )

    subparsers.add_parser("cases", help="List the built-in reference workloads.")

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
    )


def _load_processes(args: argparse.Namespace) -> List[Process]:
    if args.case is not None:
        try:
            return reference_workload(args.case)
        except IndexError as exc:
            raise InvalidInputError(str(exc)) from exc
    return load_workload(Path(args.workload))


def _print_result(result: ScheduleResult, console: Console) -> None:
    heading = result.algorithm if result.quantum is None else f"{result.algorithm} (quantum {result.quantum})"
    console.print(f"[bold]{heading}[/bold]")
    console.print()

    panel, time_marks = build_rich_gantt(result.rows)
    console.print(panel)
    if time_marks:
        console.print(time_marks, highlight=False)

    console.out(render_timeline(result), end="", highlight=False)

    summary = summarize_timeline(result.rows)
    system = result.system
    metric_rows = [
        ["Avg response", f"{summary['avg_response']:.2f}"],
        ["Makespan", str(system.makespan)],
        ["CPU idle time", str(system.idle_time)],
        ["CPU utilization", f"{system.cpu_utilization * 100:.1f}%"],
        ["Throughput (proc/time)", f"{system.throughput:.3f}"],
        ["Dispatches / preemptions", f"{system.dispatch_count} / {system.preemption_count}"],
    ]
    console.out(render_table(["Metric", "Value"], metric_rows, title="System metrics"), end="", highlight=False)


def _print_comparison(processes: List[Process], algorithms: List[str], quantum: int, console: Console) -> None:
    rows = []
    for alg in algorithms:
        q = quantum if alg.lower() in QUANTUM_ALGORITHMS else None
        result = run_algorithm(alg, processes, quantum=q)
        summary = summarize_timeline(result.rows)
        rows.append(
            [
                result.algorithm,
                "" if result.quantum is None else str(result.quantum),
                f"{result.avg_waiting:.2f}",
                f"{result.avg_turnaround:.2f}",
                f"{summary['avg_response']:.2f}",
                str(result.system.preemption_count),
            ]
        )

    text = render_table(COMPARISON_HEADERS, rows, title="Algorithm comparison")
    console.out(text, end="", highlight=False)


def _print_cases(console: Console) -> None:
    rows = [
        [str(idx), description, " ".join(str(e) for e in entries)]
        for idx, (description, entries) in enumerate(REFERENCE_WORKLOADS)
    ]
    headers = ["Case", "Description", "Processes (pid, arrival, burst, priority)"]
    text = render_table(headers, rows, title="Reference workloads")
    console.out(text, end="", highlight=False)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    console = Console()

    try:
        if args.command == "run":
            processes = _load_processes(args)
            result = run_algorithm(args.algorithm, processes, quantum=args.quantum)
            _print_result(result, console)
            return 0

        if args.command == "compare":
            processes = _load_processes(args)
            _print_comparison(processes, args.algorithms, args.quantum, console)
            return 0
    except (OSError, ValueError) as exc:
        logger.debug("Command %r failed", args.command, exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]", soft_wrap=True)
        return 1

    if args.command == "cases":
        _print_cases(console)
        return 0

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
