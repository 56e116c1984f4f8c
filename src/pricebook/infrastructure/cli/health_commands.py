"""CLI command for the storage health check."""

from __future__ import annotations

import click

from pricebook.application.health_check import HealthCheckHandler
from pricebook.infrastructure.bootstrap import call_timeout, special_price_repository
from pricebook.infrastructure.cli.output import echo_json


@click.command("health")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON.")
def health(as_json: bool) -> None:
    """Report whether special price storage is ready (exit 1 if not)."""
    handler = HealthCheckHandler(
        special_price_repo=special_price_repository(),
        timeout=call_timeout(),
    )
    result = handler.handle()

    if as_json:
        echo_json({"storageReady": result.storage_ready})
    else:
        click.echo(f"Storage: {'ready' if result.storage_ready else 'NOT READY'}")

    if not result.storage_ready:
        click.get_current_context().exit(1)
