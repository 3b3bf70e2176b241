from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Sequence

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .errors import SchedulerError
from .gantt import build_rich_gantt, render_gantt
from .models import Process, ScheduleResult
from .workload_io import load_workload

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "schedsim"

TABLE_HEADERS = ["ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, Priority, Round-robin).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log progress to stderr (-v for info, -vv for every dispatch).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Schedule a workload and print each algorithm's result.")
    run_parser.add_argument("workload", help="Path to CSV or JSON workload file.")
    run_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(ALGORITHMS),
        help="Algorithms to run, in order (default: fcfs sjf priority rr).",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Print the Gantt chart as plain text instead of a colored panel.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several algorithms on the same workload and compare their averages.",
    )
    compare_parser.add_argument("workload", help="Path to CSV or JSON workload file.")
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(ALGORITHMS),
        help="Algorithms to compare (default: fcfs sjf priority rr).",
    )

    return parser


def configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def format_title(title: str) -> str:
    rule = "-" * (len(title) * 2)
    return "\n".join([rule, f"{' ' * (len(title) // 2)} {title}", rule])


def build_schedule_table(result: ScheduleResult) -> Table:
    summary = result.summary
    footers = [""] * len(TABLE_HEADERS)
    if summary is not None:
        footers[4] = f"Average\n{summary.avg_waiting:.2f}"
        footers[5] = f"Average\n{summary.avg_turnaround:.2f}"
        footers[6] = f"Throughput\n{summary.throughput:.2f}/t"

    table = Table(title="Schedule table", box=box.SIMPLE_HEAVY, show_footer=True)
    for header, footer in zip(TABLE_HEADERS, footers):
        justify = "center" if header in {"ID", "Priority"} else "right"
        table.add_column(header, footer=footer, justify=justify)

    for row in result.rows:
        table.add_row(
            str(row.pid),
            str(row.priority),
            str(row.burst_time),
            str(row.arrival_time),
            str(row.waiting_time),
            str(row.turnaround_time),
            str(row.completion_time),
        )

    return table


def _print_result(result: ScheduleResult, console: Console, plain: bool = False) -> None:
    console.print(format_title(result.algorithm), highlight=False, markup=False)

    if not result.has_data:
        console.print("No data: the workload has no processes.")
        console.print()
        return

    if plain:
        console.print(render_gantt(result.timeline), highlight=False, markup=False)
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks, highlight=False)

    console.print()
    console.print(build_schedule_table(result))
    console.print()


def _run(processes: Sequence[Process], algorithms: List[str], plain: bool, console: Console) -> None:
    for alg in algorithms:
        result = run_algorithm(alg, processes)
        _print_result(result, console, plain=plain)


def _compare(processes: Sequence[Process], algorithms: List[str], workload: Path, console: Console) -> None:
    summary_table = Table(title=f"Algorithm comparison: {workload}", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Throughput", justify="right")

    for alg in algorithms:
        result = run_algorithm(alg, processes)
        summary = result.summary
        if summary is None:
            summary_table.add_row(result.algorithm, "-", "-", "-")
            continue
        summary_table.add_row(
            result.algorithm,
            f"{summary.avg_waiting:.2f}",
            f"{summary.avg_turnaround:.2f}",
            f"{summary.throughput:.3f}",
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    workload_path = Path(args.workload)
    try:
        processes = load_workload(workload_path)
        if args.command == "run":
            _run(processes, args.algorithms, args.plain, console)
        elif args.command == "compare":
            _compare(processes, args.algorithms, workload_path, console)
        else:
            parser.error(f"Unknown command: {args.command}")
    except (SchedulerError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
