"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from stockctl.domain.exceptions import DomainException
from stockctl.infrastructure.bootstrap import inventory_service


@click.command("add")
@click.argument("sku")
@click.argument("name")
@click.option("--description", default="", help="Free-text description.")
@click.option("--quantity", default=0, type=click.IntRange(min=0), help="Initial stock level.")
@click.option(
    "--reorder-point", default=0, type=click.IntRange(min=0),
    help="Stock level at or below which the product counts as low.",
)
@click.pass_obj
def product_add(
    obj: dict, sku: str, name: str, description: str, quantity: int, reorder_point: int
) -> None:
    """Add a new product to the catalog."""
    try:
        service = inventory_service(obj["data_dir"])
        p = service.create_product(
            sku=sku,
            name=name,
            description=description,
            initial_quantity=quantity,
            reorder_point=reorder_point,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{p.sku}' added (id={p.id})")
    click.echo(f"  Name:          {p.name}")
    click.echo(f"  Quantity:      {p.quantity}")
    click.echo(f"  Reorder point: {p.reorder_point}")


@click.command("update")
@click.argument("sku")
@click.option("--name", default=None, help="New product name.")
@click.option("--description", default=None, help="New description.")
@click.option("--reorder-point", default=None, type=click.IntRange(min=0), help="New reorder point.")
@click.pass_obj
def product_update(
    obj: dict,
    sku: str,
    name: str | None,
    description: str | None,
    reorder_point: int | None,
) -> None:
    """Update a product's name, description or reorder point."""
    if name is None and description is None and reorder_point is None:
        raise click.UsageError(
            "Nothing to update: pass --name, --description or --reorder-point"
        )

    try:
        service = inventory_service(obj["data_dir"])
        p = service.update_product(
            sku, name=name, description=description, reorder_point=reorder_point
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{p.sku}' updated")
    _display_product(p)


@click.command("show")
@click.argument("sku")
@click.pass_obj
def product_show(obj: dict, sku: str) -> None:
    """Show details of a single product."""
    try:
        p = inventory_service(obj["data_dir"]).get_product(sku)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(p)


@click.command("list")
@click.pass_obj
def product_list(obj: dict) -> None:
    """List all products in the catalog."""
    try:
        products = inventory_service(obj["data_dir"]).list_products()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'SKU':<12} {'Name':<24} {'Qty':>6} {'Reorder':>8}")
    click.echo("-" * 53)
    for p in sorted(products, key=lambda p: p.sku):
        flag = "  [LOW]" if p.is_low_stock else ""
        click.echo(f"{p.sku:<12} {p.name:<24} {p.quantity:>6} {p.reorder_point:>8}{flag}")


@click.command("delete")
@click.argument("sku")
@click.pass_obj
def product_delete(obj: dict, sku: str) -> None:
    """Delete a product and its whole transaction history."""
    try:
        inventory_service(obj["data_dir"]).delete_product(sku)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{sku}' deleted.")


def _display_product(p) -> None:
    """Shared formatting for a single product."""
    low = "  [LOW STOCK]" if p.is_low_stock else ""
    click.echo(f"  ID:            {p.id}")
    click.echo(f"  SKU:           {p.sku}")
    click.echo(f"  Name:          {p.name}")
    click.echo(f"  Description:   {p.description}")
    click.echo(f"  Quantity:      {p.quantity}{low}")
    click.echo(f"  Reorder point: {p.reorder_point}")
