from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Sequence

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .dispatch import compare, simulate
from .errors import InvalidInput
from .gantt import build_rich_gantt
from .models import DEFAULT_QUANTUM, Policy, ScheduleResult
from .validation import validate_processes
from .workload_io import export_workload, load_workload

logger = logging.getLogger(__name__)

POLICY_CHOICES = [p.value for p in Policy]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, Priority, RR, SRTF).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling policy on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Policy to use ({', '.join(POLICY_CHOICES)}; 'ps' is an alias for srtf).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (ignored by other policies, default: {DEFAULT_QUANTUM}).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple policies on the same workload and compare summary metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=POLICY_CHOICES,
        help=f"Policies to compare (default: {' '.join(POLICY_CHOICES)}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR when included (default: {DEFAULT_QUANTUM}).",
    )

    export_parser = subparsers.add_parser(
        "export",
        help="Validate a workload and write it in the export format.",
    )
    export_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    export_parser.add_argument(
        "--output",
        "-o",
        required=True,
        help="Destination file (.json or .csv).",
    )

    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _print_result(result: ScheduleResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    console.print(build_rich_gantt(result.timeline))

    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Priority",
        "Start",
        "Complete",
        "Wait",
        "Turnaround",
        "Response",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            p.pid,
            str(p.arrival_time),
            str(p.burst_time),
            str(p.priority),
            str(p.start_time),
            str(p.completion_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.response_time),
        )

    console.print(proc_table)
    console.print()

    summary = result.summary
    sys_table = Table(title="Summary", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Processes", str(summary.count))
    sys_table.add_row("Avg waiting", f"{summary.avg_wait_time:.2f}")
    sys_table.add_row("Avg turnaround", f"{summary.avg_turnaround_time:.2f}")
    sys_table.add_row("Avg response", f"{summary.avg_response_time:.2f}")
    sys_table.add_row("Throughput (proc/time)", f"{summary.throughput:.3f}")
    sys_table.add_row("CPU utilization", f"{summary.cpu_utilization}%")

    console.print(sys_table)


def _print_comparison(results: List[ScheduleResult], title: str, console: Console) -> None:
    summary_table = Table(title=title, box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("CPU util", justify="right")

    for result in results:
        summary = result.summary
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary.avg_wait_time:.2f}",
            f"{summary.avg_turnaround_time:.2f}",
            f"{summary.cpu_utilization}%",
        )

    console.print(summary_table)


def _export(workload: Path, output: Path, console: Console) -> int:
    processes = load_workload(workload)
    if not processes:
        console.print("[red]No processes to export![/red]")
        return 2
    validate_processes(processes)
    export_workload(processes, output)
    console.print(f"Exported {len(processes)} processes to [green]{output}[/green]")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    console = Console()

    try:
        if args.command == "run":
            processes = load_workload(Path(args.workload))
            result = simulate(processes, args.algorithm, quantum=args.quantum)
            _print_result(result, console)
            return 0

        if args.command == "compare":
            processes = load_workload(Path(args.workload))
            results = compare(processes, args.algorithms, quantum=args.quantum)
            _print_comparison(results, "Algorithm comparison", console)
            return 0

        if args.command == "export":
            return _export(Path(args.workload), Path(args.output), console)
    except InvalidInput as exc:
        logger.debug("Rejected workload: kind=%s pid=%s", exc.kind, exc.pid)
        console.print(f"[red]Invalid input ({exc.kind}): {escape(str(exc))}[/red]")
        return 2
    except (OSError, ValueError) as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
