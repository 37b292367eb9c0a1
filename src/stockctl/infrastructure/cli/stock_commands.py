"""CLI commands for stock movements and history."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from stockctl.domain.exceptions import DomainException
from stockctl.domain.model.transaction import TransactionType
from stockctl.infrastructure.bootstrap import inventory_service

DATETIME_FORMATS = ["%Y-%m-%dT%H:%M:%S", "%Y-%m-%d"]


def _as_utc(value: datetime | None) -> datetime | None:
    """Command-line datetimes carry no zone; they are read as UTC."""
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc)


@click.command("add")
@click.argument("sku")
@click.argument("quantity", type=click.IntRange(min=1))
@click.option("--notes", default=None, help="Why the stock came in.")
@click.pass_obj
def stock_add(obj: dict, sku: str, quantity: int, notes: str | None) -> None:
    """Add stock to a product."""
    try:
        service = inventory_service(obj["data_dir"])
        service.add_stock(sku, quantity, notes=notes)
        p = service.get_product(sku)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Added {quantity} to '{sku}' — now {p.quantity} in stock.")


@click.command("remove")
@click.argument("sku")
@click.argument("quantity", type=click.IntRange(min=1))
@click.option("--notes", default=None, help="Why the stock went out.")
@click.pass_obj
def stock_remove(obj: dict, sku: str, quantity: int, notes: str | None) -> None:
    """Remove stock from a product."""
    try:
        service = inventory_service(obj["data_dir"])
        service.remove_stock(sku, quantity, notes=notes)
        p = service.get_product(sku)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Removed {quantity} from '{sku}' — now {p.quantity} in stock.")
    if p.is_low_stock:
        click.echo(f"Warning: '{sku}' is at or below its reorder point ({p.reorder_point}).")


@click.command("low")
@click.pass_obj
def stock_low(obj: dict) -> None:
    """List products at or below their reorder point."""
    try:
        products = inventory_service(obj["data_dir"]).list_low_stock()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products with low stock.")
        return

    click.echo(f"{'SKU':<12} {'Name':<24} {'Qty':>6} {'Reorder':>8}")
    click.echo("-" * 53)
    for p in sorted(products, key=lambda p: p.sku):
        click.echo(f"{p.sku:<12} {p.name:<24} {p.quantity:>6} {p.reorder_point:>8}")


@click.command("history")
@click.argument("sku")
@click.option("--start", type=click.DateTime(DATETIME_FORMATS), default=None, help="Earliest timestamp (UTC).")
@click.option("--end", type=click.DateTime(DATETIME_FORMATS), default=None, help="Latest timestamp (UTC).")
@click.pass_obj
def stock_history(
    obj: dict, sku: str, start: datetime | None, end: datetime | None
) -> None:
    """Show the transaction history of a product, oldest first."""
    try:
        service = inventory_service(obj["data_dir"])
        service.get_product(sku)
        if start is None and end is None:
            transactions = service.get_transactions(sku)
        else:
            transactions = service.get_transactions_in_range(
                sku, start=_as_utc(start), end=_as_utc(end)
            )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not transactions:
        click.echo(f"No transactions found for '{sku}'.")
        return

    click.echo(f"History for '{sku}' ({len(transactions)} transactions)")
    click.echo(f"  {'Timestamp (UTC)':<20} {'Type':<9} {'Qty':>6}  Notes")
    click.echo(f"  {'-'*50}")
    for t in transactions:
        sign = "+" if t.transaction_type is TransactionType.ADDITION else "-"
        click.echo(
            f"  {t.timestamp:%Y-%m-%d %H:%M:%S}  {t.transaction_type.value:<9} "
            f"{sign}{t.quantity:>5}  {t.notes or ''}".rstrip()
        )
