from __future__ import annotations

from decimal import Decimal
from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from rental_reports.orchestrator import RefreshResult


def print_refresh_result(result: RefreshResult, console: Optional[Console] = None) -> None:
    """
    Render a refresh outcome as a rich table: one row per time-of-day bucket.
    """
    console = console or Console()
    summary = result.get("summary") or []

    table = Table(
        title=f"Rentals by Time of Day\n[dim]{result.get('window_start')} .. {result.get('window_end')}[/dim]",
        box=box.ROUNDED,
        caption=(
            f"{result.get('rows', 0):,} rentals │ "
            f"refreshed in {result.get('duration_seconds', 0.0):.2f}s"
        ),
    )
    table.add_column("Time of Day", style="cyan", no_wrap=True)
    table.add_column("Rentals", justify="right", style="magenta")
    table.add_column("Revenue", justify="right", style="bold green")
    table.add_column("Share", justify="right", style="yellow")

    if not summary:
        console.print("[yellow]No rentals in the reporting window.[/yellow]")
        return

    total = sum(row["total_rentals"] for row in summary)
    for row in summary:
        share = row["total_rentals"] / total * 100 if total else 0.0
        table.add_row(
            row["time_of_day"],
            f"{row['total_rentals']:,}",
            f"{Decimal(str(row['total_revenue'])):,.2f}",
            f"{share:.1f}%",
        )

    console.print(table)
