"""Domain service: Price Resolution.

Merges a catalog snapshot with one user's overrides.  Pure: no I/O, so
the application layer decides how the two snapshots are fetched.

Overrides whose product is missing from the catalog are skipped
without error; the override record itself is left untouched.
"""

from __future__ import annotations

from collections.abc import Iterable

from pricebook.domain.model.product import Product
from pricebook.domain.model.resolved_product import ResolvedProduct
from pricebook.domain.model.special_price import SpecialPrice


def resolve_prices(
    products: Iterable[Product],
    overrides: Iterable[SpecialPrice] = (),
) -> list[ResolvedProduct]:
    """Annotate each product with the price that applies to the user.

    Output order is the catalog order.  ``overrides`` must already be
    scoped to a single user.
    """
    lookup: dict[str, SpecialPrice] = {}
    for override in overrides:
        # Store guarantees one record per key; keep the first (newest) anyway
        lookup.setdefault(override.product_id, override)

    resolved: list[ResolvedProduct] = []
    for product in products:
        override = lookup.get(product.id)
        if override is None:
            resolved.append(ResolvedProduct.from_catalog(product))
        else:
            resolved.append(ResolvedProduct.with_override(product, override.price))
    return resolved


def orphaned_overrides(
    products: Iterable[Product],
    overrides: Iterable[SpecialPrice],
) -> list[SpecialPrice]:
    """Return overrides that reference products absent from the catalog."""
    known = {p.id for p in products}
    return [o for o in overrides if o.product_id not in known]
