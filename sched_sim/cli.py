from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .gantt import build_rich_gantt, render_report
from .metrics import summarize_process_metrics
from .models import Process, ScheduleResult
from .ordering import identity_order
from .workload_io import InvalidWorkloadError, load_workload, read_processes

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHMS = ["fcfs", "sjf"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sched-sim",
        description="Non-preemptive CPU scheduling simulator (FCFS, SJF).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every dispatch and idle gap to stderr.",
    )

    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser(
        "run",
        help="Simulate a process set and print a Gantt chart and metrics table per algorithm (default).",
    )
    _add_workload_argument(run_parser)
    _add_algorithms_argument(run_parser)
    run_parser.add_argument(
        "--rich",
        action="store_true",
        help="Render colored Gantt charts and tables instead of plain text.",
    )
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Show a simple time-stepped simulation in the terminal.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=float,
        default=0.3,
        help="Seconds to wait between steps when --step is used (default: 0.3).",
    )

    # Bare `sched-sim` behaves like `sched-sim run`.
    parser.set_defaults(
        command="run",
        workload=None,
        algorithms=DEFAULT_ALGORITHMS,
        rich=False,
        step=False,
        step_delay=0.3,
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several algorithms on the same process set and compare average metrics.",
    )
    _add_workload_argument(compare_parser)
    _add_algorithms_argument(compare_parser)

    return parser


def _add_workload_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Path to JSON or CSV workload file (default: read from standard input).",
    )


def _add_algorithms_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=sorted(ALGORITHMS),
        default=DEFAULT_ALGORITHMS,
        help="Algorithms to run, in order (default: fcfs sjf).",
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _load_processes(workload: str | None) -> List[Process]:
    if workload is None:
        processes = read_processes()
        print()
        return processes
    return load_workload(Path(workload))


def _print_rich_result(result: ScheduleResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    console.print()

    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(" " + time_marks, highlight=False)

    console.print()

    headers = ["PID", "AT", "BT", "Start", "Complete", "WT", "TAT", "RT"]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h == "PID" else "right"
        proc_table.add_column(h, justify=justify)

    for p in sorted(result.processes, key=identity_order):
        proc_table.add_row(
            f"P{p.pid}",
            str(p.arrival_time),
            str(p.burst_time),
            str(p.start_time),
            str(p.completion_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.response_time),
        )

    console.print(proc_table)
    console.print()

    summary = summarize_process_metrics(result.processes)
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{summary['avg_waiting']:.2f}")
    sys_table.add_row("Avg turnaround", f"{summary['avg_turnaround']:.2f}")
    sys_table.add_row("Avg response", f"{summary['avg_response']:.2f}")
    if result.system:
        sys = result.system
        sys_table.add_row("Makespan", str(sys.makespan))
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

    console.print(sys_table)
    console.print()


def _animate_result(result: ScheduleResult, delay: float, console: Console) -> None:
    """
    Simple time-stepped textual simulation using the computed schedule.
    """
    timeline = result.timeline
    if not timeline:
        console.print("[red]No execution to animate.[/red]")
        return

    start = timeline[0].start_time
    makespan = timeline[-1].end_time
    console.print(f"[bold]Simulating {result.algorithm}[/bold] (t={start}..{makespan})")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    for t in range(start, makespan):
        seg = next(s for s in timeline if s.start_time <= t < s.end_time)
        if seg.is_idle:
            msg = f"t={t:2d}: [dim]idle[/dim]"
        else:
            msg = f"t={t:2d}: {seg.label} [green]{'█' * (t - seg.start_time + 1)}[/green]"
        console.print(msg, highlight=False)
        time.sleep(delay)
    console.print()


def _print_comparison(results: List[ScheduleResult], console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("Throughput", justify="right")
    summary_table.add_column("CPU utilization", justify="right")

    for result in results:
        summary = summarize_process_metrics(result.processes)
        sys = result.system
        summary_table.add_row(
            result.algorithm,
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            f"{summary['avg_response']:.2f}",
            f"{sys.throughput:.3f}",
            f"{sys.cpu_utilization*100:.1f}%",
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    console = Console()
    err_console = Console(stderr=True)

    try:
        processes = _load_processes(args.workload)
        # Every run gets its own working copies, so order does not matter.
        results = [run_algorithm(alg, processes) for alg in args.algorithms]
    except (InvalidWorkloadError, OSError) as exc:
        err_console.print(f"[red]{escape(str(exc))}[/red]", highlight=False)
        return 1
    except MemoryError:
        err_console.print("[red]Memory allocation failed.[/red]")
        return 1

    if args.command == "compare":
        _print_comparison(results, console)
        return 0

    for result in results:
        if args.step:
            try:
                _animate_result(result, delay=args.step_delay, console=console)
            except KeyboardInterrupt:
                console.print("[yellow]Animation skipped.[/yellow]")
        if args.rich:
            _print_rich_result(result, console)
        else:
            console.out(render_report(result), highlight=False)
    logger.debug("Reported %d schedules for %d processes", len(results), len(processes))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
