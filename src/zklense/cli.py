"""
CLI entry point for zklense.

Usage:
    zklense simulate PROGRAM_ID
    zklense simulate PROGRAM_ID --network mainnet --compute-units 400000
    zklense show
    zklense networks
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn

from zklense.analysis.models import MAX_COMPUTE_UNITS
from zklense.config import NETWORKS, DEFAULT_NETWORK, load_env, resolve_environment

console = Console()


def run_simulate(args: argparse.Namespace) -> int:
    """Simulate a proof verification transaction and report its cost."""
    load_env()

    project_dir = Path(args.dir) if args.dir else Path.cwd()

    try:
        environment = resolve_environment(args.network, args.rpc_url)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    console.print()
    console.print(Panel(
        f"[bold cyan]{args.program_id}[/bold cyan]\n\n"
        f"[dim]Network: {environment.network}[/dim]\n"
        f"[dim]RPC: {environment.rpc_url}[/dim]",
        title="[bold]📊 Transaction Simulation[/bold]",
        subtitle="Simulate ZK proof verification on Solana",
    ))
    console.print()

    # Import here to avoid slow startup
    from zklense.core.simulator import ProofSimulator, fetch_recent_prioritization_fees
    from zklense.core.report_store import save_report
    from zklense.analysis.render import render_report

    try:
        sim = ProofSimulator(
            program_id=args.program_id,
            environment=environment,
            project_dir=project_dir,
            compute_unit_limit=args.compute_units,
            fee_fetcher=None if args.no_fees else fetch_recent_prioritization_fees,
        )
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    async def _run():
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Simulating transaction...", total=None)
            result = await sim.run()
            progress.update(task, description="Simulation complete!")
        return result

    try:
        result = asyncio.run(_run())
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        console.print("[dim]Generate a proof (.proof) and public witness (.pw) first.[/dim]")
        return 1
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    for warning in result.warnings:
        console.print(f"[yellow]⚠ {warning}[/yellow]")

    document = result.report.to_dict()
    render_report(document, console)

    try:
        path = save_report(document, project_dir)
    except OSError as e:
        console.print(f"[red]Failed to write report: {e}[/red]")
        return 1

    if args.output:
        try:
            with open(args.output, "w") as f:
                json.dump(document, f, indent=2)
        except OSError as e:
            console.print(f"[red]Failed to export report: {e}[/red]")
            return 1
        console.print(f"[dim]Report exported to: {args.output}[/dim]")

    console.print(f"[dim]Execution: {result.execution_time_ms}ms | Network: {environment.network}[/dim]")

    if result.success:
        console.print(Panel(
            f"Transaction simulation was successful!\n\nView full report: {path}",
            title="[bold green]SIMULATION COMPLETE[/bold green]",
        ))
        return 0

    console.print(Panel(
        f"Transaction simulation completed with errors.\n\nView full report: {path}",
        title="[bold yellow]SIMULATION COMPLETE (WITH ERRORS)[/bold yellow]",
    ))
    return 1


def show_report(args: argparse.Namespace) -> int:
    """Render the last persisted report."""
    from zklense.core.report_store import load_report
    from zklense.analysis.render import render_report

    project_dir = Path(args.dir) if args.dir else Path.cwd()

    try:
        document = load_report(project_dir)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]✗ {e}[/red]")
        return 1

    try:
        render_report(document, console)
    except KeyError as e:
        console.print(f"[red]✗ Report is missing field: {e}[/red]")
        return 1
    return 0


def list_networks(args: argparse.Namespace) -> int:
    """List known networks."""
    console.print()
    table = Table(title="Networks")
    table.add_column("Name", style="cyan")
    table.add_column("RPC URL")
    table.add_column("Default", justify="center")

    for name, url in NETWORKS.items():
        table.add_row(name, url, "●" if name == DEFAULT_NETWORK else "")

    console.print(table)
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="zklense",
        description="Cost and compliance profiler for ZK proof verification on Solana",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Simulate a proof verification transaction")
    simulate_parser.add_argument("program_id", type=str, help="Verifier program id (base58)")
    simulate_parser.add_argument(
        "--dir", "-d",
        type=str,
        help="Project directory with .proof and .pw files (default: current directory)"
    )
    simulate_parser.add_argument(
        "--network", "-n",
        type=str,
        choices=list(NETWORKS),
        help=f"Network to use (default: $ZKLENSE_NETWORK or {DEFAULT_NETWORK})"
    )
    simulate_parser.add_argument(
        "--rpc-url",
        type=str,
        help="Custom RPC URL (overrides the network's default)"
    )
    simulate_parser.add_argument(
        "--compute-units", "-c",
        type=int,
        default=MAX_COMPUTE_UNITS,
        help=f"Compute unit limit to request (default: {MAX_COMPUTE_UNITS:,})"
    )
    simulate_parser.add_argument(
        "--no-fees",
        action="store_true",
        help="Skip the recent prioritization fee lookup"
    )
    simulate_parser.add_argument(
        "--output", "-o",
        type=str,
        help="Extra output file for the JSON report"
    )

    # show command
    show_parser = subparsers.add_parser("show", help="Show the last report")
    show_parser.add_argument(
        "--dir", "-d",
        type=str,
        help="Project directory (default: current directory)"
    )

    # networks command
    subparsers.add_parser("networks", help="List known networks")

    return parser


def main(argv=None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "simulate":
        return run_simulate(args)
    elif args.command == "show":
        return show_report(args)
    elif args.command == "networks":
        return list_networks(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
