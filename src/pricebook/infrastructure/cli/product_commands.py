"""CLI commands for browsing the catalog with resolved prices."""

from __future__ import annotations

import click

from pricebook.application.dto import ResolvedProductDTO
from pricebook.application.get_products import GetProductsHandler
from pricebook.domain.exceptions import DomainException
from pricebook.infrastructure.bootstrap import (
    call_timeout,
    product_catalog,
    special_price_repository,
)
from pricebook.infrastructure.cli.output import echo_json, fail, money, to_contract


def _matches(product: ResolvedProductDTO, term: str) -> bool:
    term = term.lower()
    return term in product.name.lower() or term in product.category.lower()


def _product_contract(product: ResolvedProductDTO) -> dict:
    payload = to_contract(product)
    # originalPrice only exists for overridden products
    if product.original_price is None:
        del payload["originalPrice"]
    return payload


@click.command("list")
@click.option("--user", "user_id", default=None, help="Resolve prices for this user ID.")
@click.option("--search", default=None, help="Only show products whose name or category contains this text.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON instead of a table.")
def product_list(user_id: str | None, search: str | None, as_json: bool) -> None:
    """List catalog products, applying the user's special prices."""
    handler = GetProductsHandler(
        catalog=product_catalog(),
        special_price_repo=special_price_repository(),
        timeout=call_timeout(),
    )

    try:
        products = handler.handle(user_id=user_id)
    except DomainException as exc:
        raise fail(exc)

    if search:
        products = [p for p in products if _matches(p, search)]

    if as_json:
        echo_json({"products": [_product_contract(p) for p in products]})
        return

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<8} {'Name':<24} {'Category':<14} {'Stock':>6} {'Price':>14} {'Original':>14}")
    click.echo("-" * 85)
    for p in products:
        marker = "*" if p.has_override else " "
        click.echo(
            f"{p.id:<8} {p.name:<24} {p.category:<14} {p.stock:>6} "
            f"{money(p.resolved_price, p.currency):>14}{marker}"
            f"{money(p.original_price, p.currency):>14}"
        )
    if any(p.has_override for p in products):
        click.echo()
        click.echo("* special price")
