"""Rich console formatter for fair price results."""

from __future__ import annotations

from datetime import datetime, timezone

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..constants import PRICE_DECIMALS
from ..domain import FairRate
from ..errors import FairPriceError


def _truncate_address(address: str) -> str:
    """Truncate address for display."""
    return f"{address[:10]}...{address[-4:]}"


def _format_timestamp(ts: int) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def format_fair_rate_table(fair_rate: FairRate, console: Console | None = None) -> None:
    """Print a fair rate as a rich panel to stdout."""
    console = console or Console()

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Key", style="dim")
    table.add_column("Value", style="cyan")
    table.add_row("LP Token", _truncate_address(fair_rate.lp_token))
    table.add_row("Fair Rate", f"[green]{fair_rate.rate:f}[/]")
    table.add_row(
        "Pool Value",
        f"{fair_rate.fair_pool_value / 10**PRICE_DECIMALS:,.6f}",
    )
    table.add_row("LP Supply", f"{fair_rate.total_lp_supply:,}")
    table.add_row("Last Updated", _format_timestamp(fair_rate.last_updated))

    console.print(Panel(table, title="[bold]Fair LP Price[/]", border_style="green"))


def format_error_panel(error: FairPriceError, console: Console | None = None) -> None:
    """Print a failed query with its error kind and category."""
    console = console or Console(stderr=True)
    console.print(
        Panel(
            f"{error.message}\n\n[dim]kind: {error.kind.value}  category: {error.category.value}[/]",
            title="[bold]Fair price query failed[/]",
            border_style="red",
        )
    )
