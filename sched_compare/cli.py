from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Callable, List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .config import DEFAULT_AGING_INTERVAL, DEFAULT_QUANTA, DEFAULT_QUANTUM, PolicyConfig
from .gantt import build_rich_gantt
from .metrics import summarize_process_metrics
from .models import ComparisonResult, ProcessRecord, ScheduleResult
from .pipeline import compare_all
from .workload_io import load_workload, records_from_rows

logger = logging.getLogger(__name__)


def _add_policy_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for RR and FB (default: {DEFAULT_QUANTUM}).",
    )
    parser.add_argument(
        "--quanta",
        type=int,
        nargs="+",
        default=list(DEFAULT_QUANTA),
        help=f"Cyclic quantum list for FBV (default: {' '.join(map(str, DEFAULT_QUANTA))}).",
    )
    parser.add_argument(
        "--aging-interval",
        type=int,
        default=DEFAULT_AGING_INTERVAL,
        help=f"Priority decrement applied to waiting processes by Aging (default: {DEFAULT_AGING_INTERVAL}).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sched-compare",
        description="Compare CPU scheduling policies (FCFS, RR, SPN, SRT, HRRN, FB, FBV, Aging) "
        "by average waiting time.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase logging verbosity (-v info, -vv debug).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one scheduling policy on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Policy to use ({', '.join(ALGORITHMS)}).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON, CSV or TXT workload file.",
    )
    _add_policy_arguments(run_parser)

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run every policy on the same workload and report the best one.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON, CSV or TXT workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=None,
        help="Policies to compare (default: all eight).",
    )
    compare_parser.add_argument(
        "--details",
        action="store_true",
        help="Also print the per-process table of every policy.",
    )
    _add_policy_arguments(compare_parser)

    subparsers.add_parser(
        "interactive",
        help="Enter processes and policy parameters at prompts, then compare all policies.",
    )

    return parser


def configure_logging(level: Optional[str], verbosity: int) -> None:
    if level is None:
        level = {0: "WARNING", 1: "INFO"}.get(verbosity, "DEBUG")
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _config_from_args(args: argparse.Namespace) -> PolicyConfig:
    return PolicyConfig(quantum=args.quantum, quanta=list(args.quanta), aging_interval=args.aging_interval)


def _process_table(result: ScheduleResult) -> Table:
    headers = ["ID", "Burst", "Priority", "Arrival", "Waiting", "Turnaround"]

    proc_table = Table(title=f"{result.title}: per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        proc_table.add_column(h, justify="center" if h == "ID" else "right")

    for p in result.processes:
        proc_table.add_row(
            str(p.pid),
            str(p.burst_time),
            str(p.priority),
            str(p.arrival_time),
            str(p.waiting_time),
            str(p.turnaround_time),
        )
    return proc_table


def _format_params(result: ScheduleResult) -> str:
    parts = []
    for key, value in result.params.items():
        if isinstance(value, list):
            value = " ".join(str(v) for v in value)
        parts.append(f"{key.replace('_', ' ')}={value}")
    return ", ".join(parts)


def _print_result(result: ScheduleResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.title}")
    if result.params:
        console.print(f"[bold]Parameters:[/bold] {_format_params(result)}")

    console.print()

    console.print(build_rich_gantt(result))

    console.print()
    console.print(_process_table(result))
    console.print()

    summary = summarize_process_metrics(result.processes)
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{summary['avg_waiting']:.2f}")
    sys_table.add_row("Avg turnaround", f"{summary['avg_turnaround']:.2f}")
    if result.system:
        sys = result.system
        sys_table.add_row("Makespan", str(sys.makespan))
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

    console.print(sys_table)


def _print_comparison(comparison: ComparisonResult, console: Console, details: bool = False) -> None:
    if details:
        for result in comparison.results:
            console.print(_process_table(result))
            console.print(f"Average waiting time: {result.average_waiting:.2f}")
            console.print()

    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Parameters")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")

    for result in comparison.results:
        summary = summarize_process_metrics(result.processes)
        name = result.title
        if result.algorithm == comparison.best_algorithm:
            name = f"[bold green]{name}[/bold green]"
        summary_table.add_row(
            name,
            _format_params(result),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
        )

    console.print(summary_table)
    console.print(
        f"[bold]Best algorithm:[/bold] {comparison.best_algorithm} "
        f"with average waiting time {comparison.best_average:.2f}"
    )


def _prompt_int(prompt: str, input_fn: Callable[[str], str], console: Console, minimum: Optional[int] = None) -> int:
    while True:
        raw = input_fn(prompt).strip()
        try:
            value = int(raw)
        except ValueError:
            console.print("[red]Please enter an integer.[/red]")
            continue
        if minimum is not None and value < minimum:
            console.print(f"[red]Value must be at least {minimum}.[/red]")
            continue
        return value


def _prompt_triple(prompt: str, input_fn: Callable[[str], str], console: Console) -> List[int]:
    while True:
        fields = input_fn(prompt).split()
        try:
            values = [int(x) for x in fields]
        except ValueError:
            values = []
        if len(values) == 3:
            return values
        console.print("[red]Enter three integers: burst priority arrival.[/red]")


def _interactive(console: Console, input_fn: Callable[[str], str] = input) -> ComparisonResult:
    """
    Collect the workload and policy parameters at prompts and compare all policies.
    """
    count = _prompt_int("Enter the number of processes: ", input_fn, console, minimum=1)
    console.print("Enter the burst time, priority, and arrival time for each process (space-separated):")
    rows = [_prompt_triple(f"Process {pid}: ", input_fn, console) for pid in range(1, count + 1)]
    processes: List[ProcessRecord] = records_from_rows(rows)

    quantum = _prompt_int("Enter quantum for Round Robin and Feedback: ", input_fn, console, minimum=1)
    num_quanta = _prompt_int("Enter the number of quanta for FBV: ", input_fn, console, minimum=1)
    quanta = [
        _prompt_int(f"Enter quantum {i}: ", input_fn, console, minimum=1) for i in range(1, num_quanta + 1)
    ]
    aging_interval = _prompt_int("Enter aging interval: ", input_fn, console, minimum=0)

    config = PolicyConfig(quantum=quantum, quanta=quanta, aging_interval=aging_interval)
    comparison = compare_all(processes, config)
    _print_comparison(comparison, console, details=True)
    return comparison


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.verbose)

    console = Console()

    try:
        if args.command == "run":
            processes = load_workload(Path(args.workload))
            result = run_algorithm(args.algorithm, processes, _config_from_args(args))
            _print_result(result, console)
            return 0

        if args.command == "compare":
            processes = load_workload(Path(args.workload))
            comparison = compare_all(processes, _config_from_args(args), args.algorithms)
            _print_comparison(comparison, console, details=args.details)
            return 0

        if args.command == "interactive":
            _interactive(console)
            return 0
    except (OSError, ValueError) as exc:
        logger.debug("Command failed", exc_info=True)
        console.print(f"[red]Error: {exc}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
