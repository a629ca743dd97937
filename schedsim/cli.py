from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .gantt import build_rich_gantt
from .models import SimulationResult
from .policies import Policy
from .simulator import DEFAULT_CORES, DEFAULT_QUANTUM, simulate
from .workload_io import load_workload

POLICY_NAMES = [p.value for p in Policy]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="Multi-core CPU scheduling simulator (FCFS, SJF, PSJF, PRI, PPRI, RR).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level; DEBUG traces every scheduling decision (default: WARNING).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Simulate one scheduling policy on a workload file.")
    run_parser.add_argument(
        "--policy",
        "-p",
        required=True,
        type=str.lower,
        choices=POLICY_NAMES,
        help="Policy to use (fcfs, sjf, psjf, pri, ppri, rr).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--cores",
        "-c",
        type=int,
        default=DEFAULT_CORES,
        help=f"Number of cores (default: {DEFAULT_CORES}).",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (ignored by the other policies).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several policies on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--policies",
        "-p",
        nargs="+",
        type=str.lower,
        choices=POLICY_NAMES,
        default=POLICY_NAMES,
        help="Policies to compare (default: all six).",
    )
    compare_parser.add_argument(
        "--cores",
        "-c",
        type=int,
        default=DEFAULT_CORES,
        help=f"Number of cores (default: {DEFAULT_CORES}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR when included (default: {DEFAULT_QUANTUM}).",
    )

    return parser


def configure_logging(level: str, console: Console) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _print_result(result: SimulationResult, console: Console) -> None:
    console.print(f"[bold]Policy:[/bold] {result.policy}")
    console.print(f"[bold]Cores:[/bold] {result.cores}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    panel, time_marks = build_rich_gantt(result.timeline, cores=result.cores)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    headers = [
        "Job",
        "Arrive",
        "Run",
        "Start",
        "Complete",
        "Wait",
        "Turnaround",
        "Response",
        "Priority",
    ]

    job_table = Table(title="Per-job metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"Job", "Priority"} else "right"
        job_table.add_column(h, justify=justify)

    for j in result.jobs:
        job_table.add_row(
            str(j.job_id),
            str(j.arrival_time),
            str(j.running_time),
            str(j.start_time),
            str(j.completion_time),
            str(j.waiting_time),
            str(j.turnaround_time),
            str(j.response_time),
            str(j.priority),
        )

    console.print(job_table)
    console.print()

    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{result.averages['avg_waiting']:.2f}")
    sys_table.add_row("Avg turnaround", f"{result.averages['avg_turnaround']:.2f}")
    sys_table.add_row("Avg response", f"{result.averages['avg_response']:.2f}")
    if result.system:
        sys = result.system
        sys_table.add_row("Makespan", str(sys.makespan))
        sys_table.add_row("Throughput (jobs/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")
        sys_table.add_row("Starvation count", str(sys.starvation_count))

    console.print(sys_table)


def _run_compare(workload_path: Path, policies: list[str], cores: int, quantum: int, console: Console) -> None:
    """
    Run each policy on a workload and print the summary table.
    """
    jobs = load_workload(workload_path)

    summary_table = Table(title=f"Policy comparison: {workload_path}", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Policy")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")

    for name in policies:
        policy = Policy.parse(name)
        q = quantum if policy is Policy.RR else None
        result = simulate(jobs, policy, cores=cores, quantum=q)
        summary_table.add_row(
            result.policy,
            "" if result.quantum is None else str(result.quantum),
            f"{result.averages['avg_waiting']:.2f}",
            f"{result.averages['avg_turnaround']:.2f}",
            f"{result.averages['avg_response']:.2f}",
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()
    configure_logging(args.log_level, console)

    if args.cores <= 0:
        parser.error("--cores must be a positive integer")

    try:
        if args.command == "run":
            jobs = load_workload(Path(args.workload))
            result = simulate(jobs, args.policy, cores=args.cores, quantum=args.quantum)
            _print_result(result, console)
            return 0

        if args.command == "compare":
            _run_compare(Path(args.workload), args.policies, args.cores, args.quantum, console)
            return 0
    except (OSError, ValueError) as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
