"""Click CLI — all user-facing commands."""

from __future__ import annotations

import functools
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from iexpense.config import DEFAULT_CURRENCY, LOG_LEVEL, store_path
from iexpense.logging_utils import configure_logging
from iexpense.models.categories import DEFAULT_TYPE, get_type, list_types
from iexpense.models.expense import ExpenseItem, format_amount, parse_amount
from iexpense.storage.local_json import LocalJsonStorage
from iexpense.store import ExpenseStore

console = Console()


def _open_store(data_dir: Path | None) -> ExpenseStore:
    return ExpenseStore(LocalJsonStorage(store_path(data_dir)))


def pass_store(f):
    """Open the store from the group's --data-dir and pass it as the first argument."""

    @click.pass_context
    def wrapper(ctx: click.Context, *args, **kwargs):
        return ctx.invoke(f, _open_store(ctx.obj), *args, **kwargs)

    return functools.update_wrapper(wrapper, f)


@click.group()
@click.option("--data-dir", type=click.Path(file_okay=False, path_type=Path), envvar="IEXPENSE_DATA_DIR",
              help="Directory holding store.json")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, verbose: bool) -> None:
    """iExpense — keep a running list of what you spent."""
    configure_logging(logging.DEBUG if verbose else LOG_LEVEL)
    ctx.obj = data_dir


@cli.command()
@click.argument("name")
@click.argument("amount")
@click.option("-t", "--type", "category", default=DEFAULT_TYPE, show_default=True,
              help="Expense type, e.g. Business or Personal")
@pass_store
def add(store: ExpenseStore, name: str, amount: str, category: str) -> None:
    """Add an expense. AMOUNT is in major units, e.g. 3.50."""
    if not name.strip():
        raise click.BadParameter("name must not be empty", param_hint="NAME")
    try:
        minor = parse_amount(amount)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="AMOUNT") from exc

    # Normalise the spelling of known types
    known = get_type(category)
    item = ExpenseItem(name=name, category=known.name if known else category, amount=minor)
    store.add(item)
    console.print(f"Added {item.id[:8]}: {item.name} ({item.category}) {format_amount(item.amount, DEFAULT_CURRENCY)}")


@cli.command("list")
@click.option("-t", "--type", "category", help="Filter by expense type")
@pass_store
def list_expenses(store: ExpenseStore, category: str | None) -> None:
    """List expenses in the order they were added."""
    rows = list(enumerate(store))
    if category:
        rows = [(i, e) for i, e in rows if e.category.lower() == category.strip().lower()]

    if not rows:
        console.print("[yellow]No expenses found.[/yellow]")
        return

    table = Table(title="Expenses")
    table.add_column("#", justify="right", width=4)
    table.add_column("ID", style="dim", width=8)
    table.add_column("Name", width=24)
    table.add_column("Type", width=12)
    table.add_column("Amount", justify="right", width=14)

    for position, e in rows:
        table.add_row(str(position), e.id[:8], e.name, e.category, format_amount(e.amount, DEFAULT_CURRENCY))

    console.print(table)
    console.print()
    console.print(f"  Total: {format_amount(sum(e.amount for _, e in rows), DEFAULT_CURRENCY)}")
    console.print(f"  ({len(rows)} expenses)")


@cli.command()
@click.argument("positions", nargs=-1, type=int, required=True)
@pass_store
def remove(store: ExpenseStore, positions: tuple[int, ...]) -> None:
    """Remove expenses by their # in `list`."""
    removed = store.remove_at(positions)
    if not removed:
        console.print(f"[red]No expense at position(s) {', '.join(map(str, positions))}.[/red]")
        raise SystemExit(1)
    for e in removed:
        console.print(f"Removed {e.id[:8]}: {e.name} {format_amount(e.amount, DEFAULT_CURRENCY)}")


@cli.command()
def types() -> None:
    """Show the suggested expense types."""
    table = Table(title="Expense Types")
    table.add_column("Type", style="bold", width=12)
    table.add_column("Description", width=40)

    for t in list_types():
        table.add_row(t.name, t.description)

    console.print(table)


@cli.command()
@pass_store
def report(store: ExpenseStore) -> None:
    """Totals grouped by expense type."""
    from iexpense.reporting.reports import summary_report
    summary_report(store, currency=DEFAULT_CURRENCY)
