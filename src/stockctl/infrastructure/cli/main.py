from __future__ import annotations

from pathlib import Path

import click

from stockctl.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from stockctl.infrastructure.cli.stock_commands import (
    stock_add,
    stock_history,
    stock_low,
    stock_remove,
)
from stockctl.infrastructure.config import get_settings
from stockctl.infrastructure.logging_config import setup_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the inventory files (default: $STOCKCTL_DATA_DIR or ./data).",
)
@click.option("--log-level", default=None, help="Logging level, e.g. INFO or DEBUG.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, log_level: str | None) -> None:
    """stockctl — Inventory tracking"""
    settings = get_settings()
    setup_logging(log_level or settings.LOG_LEVEL)
    ctx.ensure_object(dict)
    ctx.obj["data_dir"] = data_dir or settings.DATA_DIR


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def stock() -> None:
    """Record and inspect stock movements."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
stock.add_command(stock_add)
stock.add_command(stock_history)
stock.add_command(stock_low)
stock.add_command(stock_remove)
