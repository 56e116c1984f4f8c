"""CLI commands for per-user special prices."""

from __future__ import annotations

import click

from pricebook.application.check_override import CheckOverrideHandler
from pricebook.application.delete_special_price import DeleteSpecialPriceHandler
from pricebook.application.dto import SpecialPriceDTO
from pricebook.application.list_special_prices import ListSpecialPricesHandler
from pricebook.application.submit_special_price import SubmitSpecialPriceHandler
from pricebook.domain.exceptions import DomainException
from pricebook.infrastructure.bootstrap import (
    call_timeout,
    product_catalog,
    special_price_repository,
)
from pricebook.infrastructure.cli.output import echo_json, fail, money


def _display_record(dto: SpecialPriceDTO) -> None:
    """Shared formatting for displaying one special price."""
    click.echo(f"Special price {dto.id}")
    click.echo(f"  User:     {dto.user_id}")
    click.echo(f"  Product:  {dto.product_id}")
    click.echo(f"  Price:    {money(dto.price, dto.currency)}")
    if dto.note:
        click.echo(f"  Note:     {dto.note}")
    click.echo(f"  Created:  {dto.created_at:%Y-%m-%d %H:%M UTC}")
    click.echo(f"  Updated:  {dto.updated_at:%Y-%m-%d %H:%M UTC}")


@click.command("set")
@click.option("--user", "user_id", required=True, help="User the price applies to.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="Special price (e.g. 79.90).")
@click.option("--note", default=None, help="Optional free-text note.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON.")
def price_set(
    user_id: str, product_id: str, price: str, note: str | None, as_json: bool
) -> None:
    """Create or replace a user's special price for a product."""
    handler = SubmitSpecialPriceHandler(
        catalog=product_catalog(),
        special_price_repo=special_price_repository(),
        timeout=call_timeout(),
    )

    try:
        dto = handler.handle(user_id=user_id, product_id=product_id, price=price, note=note)
    except DomainException as exc:
        raise fail(exc)

    if as_json:
        echo_json({"record": dto})
        return
    _display_record(dto)


@click.command("list")
@click.option("--user", "user_id", default=None, help="Only this user's special prices.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON.")
def price_list(user_id: str | None, as_json: bool) -> None:
    """List special prices, newest first."""
    handler = ListSpecialPricesHandler(
        special_price_repo=special_price_repository(),
        timeout=call_timeout(),
    )

    try:
        records = handler.handle(user_id=user_id)
    except DomainException as exc:
        raise fail(exc)

    if as_json:
        echo_json({"records": records})
        return

    if not records:
        click.echo("No special prices found.")
        return

    click.echo(f"{'ID':<34} {'User':<12} {'Product':<10} {'Price':>14}  {'Created':<17} Note")
    click.echo("-" * 100)
    for r in records:
        click.echo(
            f"{r.id:<34} {r.user_id:<12} {r.product_id:<10} "
            f"{money(r.price, r.currency):>14}  {r.created_at:%Y-%m-%d %H:%M}  {r.note}"
        )


@click.command("delete")
@click.option("--id", "record_id", required=True, help="Special price ID to delete.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON.")
def price_delete(record_id: str, as_json: bool) -> None:
    """Delete a special price by ID."""
    handler = DeleteSpecialPriceHandler(special_price_repo=special_price_repository())

    try:
        deleted = handler.handle(record_id)
    except DomainException as exc:
        raise fail(exc)

    if as_json:
        echo_json({"deleted": deleted})
    elif deleted:
        click.echo(f"Special price {record_id} deleted.")
    else:
        click.echo(f"No special price with ID {record_id}; nothing deleted.")


@click.command("check")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON.")
def price_check(user_id: str, product_id: str, as_json: bool) -> None:
    """Show whether a user has a special price for a product."""
    handler = CheckOverrideHandler(
        special_price_repo=special_price_repository(),
        timeout=call_timeout(),
    )

    try:
        result = handler.handle(user_id=user_id, product_id=product_id)
    except DomainException as exc:
        raise fail(exc)

    if as_json:
        payload = {"hasOverride": result.has_override}
        if result.record is not None:
            payload["record"] = result.record
        echo_json(payload)
    elif result.record is not None:
        _display_record(result.record)
    else:
        click.echo(f"No special price for user '{user_id}' on product '{product_id}'.")
