from __future__ import annotations

import logging

import click

from pricebook.domain.exceptions import StorageUnavailableError
from pricebook.infrastructure.bootstrap import prepare_storage
from pricebook.infrastructure.cli.health_commands import health
from pricebook.infrastructure.cli.product_commands import product_list
from pricebook.infrastructure.cli.special_price_commands import (
    price_check,
    price_delete,
    price_list,
    price_set,
)
from pricebook.infrastructure.config import get_settings
from pricebook.infrastructure.logging_config import configure_logging

logger = logging.getLogger(__name__)


@click.group()
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Overrides PRICEBOOK_LOG_LEVEL.",
)
def cli(log_level: str | None) -> None:
    """Pricebook: catalog prices with per-user special prices"""
    configure_logging((log_level or get_settings().log_level).upper())
    try:
        prepare_storage()
    except StorageUnavailableError as exc:
        # Commands that need storage report the failure themselves
        logger.warning("%s", exc)


@cli.group()
def product() -> None:
    """Browse the catalog."""


@cli.group()
def price() -> None:
    """Manage special prices."""


# Register subcommands
product.add_command(product_list)
price.add_command(price_check)
price.add_command(price_delete)
price.add_command(price_list)
price.add_command(price_set)
cli.add_command(health)
