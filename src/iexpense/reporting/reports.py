"""Summary report."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from iexpense.config import DEFAULT_CURRENCY
from iexpense.models.expense import format_amount
from iexpense.store import ExpenseStore

console = Console()


def summarize(store: ExpenseStore) -> list[tuple[str, int, int]]:
    """(type, count, total) per expense type, largest total first."""
    counts: dict[str, int] = {}
    for e in store:
        counts[e.category] = counts.get(e.category, 0) + 1
    totals = store.totals_by_category()
    return sorted(
        ((cat, counts[cat], totals[cat]) for cat in totals),
        key=lambda row: (-row[2], row[0]),
    )


def summary_report(store: ExpenseStore, currency: str = DEFAULT_CURRENCY) -> None:
    """Print totals grouped by expense type."""
    rows = summarize(store)
    if not rows:
        console.print("[yellow]No expenses yet.[/yellow]")
        return

    grand_total = store.total()
    table = Table(title=f"Expense Summary — {currency}")
    table.add_column("Type", width=16)
    table.add_column("Count", justify="right", width=6)
    table.add_column("Total", justify="right", width=14)
    table.add_column("Share", justify="right", width=7)

    for category, count, total in rows:
        share = f"{total * 100 / grand_total:.1f}%" if grand_total else "—"
        table.add_row(category, str(count), format_amount(total, currency), share)

    table.add_section()
    table.add_row("[bold]Total[/bold]", str(len(store)), format_amount(grand_total, currency), "")
    console.print(table)
