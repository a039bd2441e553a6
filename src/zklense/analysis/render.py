"""
Console rendering of a diagnostic report.

Works on the report document (``DiagnosticReport.to_dict()`` or a report
loaded from disk) and only formats values already in it.
"""

from typing import List, Dict, Optional, Any, Tuple

from rich.console import Console
from rich.table import Table

Row = Tuple[str, str, Optional[bool]]


def _mark(status: Optional[bool]) -> str:
    if status is None:
        return ""
    return "[green]✓[/green]" if status else "[red]✗[/red]"


def _section(console: Console, icon: str, title: str, rows: List[Row]) -> None:
    console.print()
    console.print(f"{icon} [bold]{title}[/bold]")

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_column("Status", justify="center")

    for label, value, status in rows:
        table.add_row(label, value, _mark(status))

    console.print(table)


def render_report(report: Dict[str, Any], console: Optional[Console] = None) -> None:
    """
    Print a report document as grouped sections.

    Args:
        report: Report document
        console: Console to print to (a new one if not given)
    """
    console = console or Console()

    compute = report["compute_units"]
    status = report["transaction_status"]
    size = report["transaction_size"]
    cost = report["cost"]
    proof = report["proof"]
    environment = report.get("environment") or {}

    _section(console, "⚡", "Compute Units", [
        ("Consumed", f"{compute['total_compute_units_consumed']:,} CU", True),
        ("Budget", f"{compute['compute_budget']:,} CU", not compute["exceeds_max_compute"]),
        ("Usage", compute["percentage_of_compute_budget_used"], compute["within_compute_budget"]),
    ])
    if compute.get("warning"):
        console.print(f"  [yellow]⚠ Warning: {compute['warning']}[/yellow]")
    console.print(f"  [dim]{compute['suggestion']}[/dim]")

    succeeded = status["status"] == "Success"
    _section(console, "✅" if succeeded else "❌", "Transaction Status", [
        ("Simulation", "Successful" if succeeded else "Failed", succeeded),
    ])
    if status.get("error"):
        console.print(f"  [red]Error: {status['error']}[/red]")

    _section(console, "📄", "Transaction Size", [
        ("Message Size", f"{size['message_size']} bytes", size["message_within_size"]),
        ("Transaction Size", f"{size['transaction_size']} bytes", None),
        ("Max Size", f"{size['max_message_size']} bytes", None),
    ])

    _section(console, "💰", "Cost Estimate", [
        ("Signatures", f"{cost['num_signatures']} × {cost['base_fee_per_signature']} lamports", None),
        ("Base Fee", f"{cost['base_fee_in_sol']} SOL", None),
        ("Priority Fee", f"{cost['priority_fee_in_sol']} SOL", None),
        ("Total", f"{cost['cost_in_sol']} SOL", None),
        ("Priority (heuristic)", cost["priority"], None),
    ])
    console.print(f"  [dim]{cost['suggestion']}[/dim]")

    _section(console, "🔐", "Proof", [
        ("Proof", f"{proof['proof_size']} bytes", None),
        ("Witness", f"{proof['witness_size']} bytes", None),
        ("Total", f"{proof['total_proof_witness_size']} bytes", None),
        ("CU per byte", proof["cu_per_proof_size"], None),
    ])

    if environment:
        _section(console, "🌐", "Environment", [
            ("Network", environment.get("network", "?"), None),
            ("RPC", environment.get("rpc_url", "?"), None),
        ])

    console.print()
