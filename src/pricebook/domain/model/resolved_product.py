"""ResolvedProduct: a catalog product annotated with the price to show.

Computed on every read, never stored.
"""

from __future__ import annotations

from dataclasses import dataclass

from pricebook.domain.model.product import Product
from pricebook.domain.model.value_objects import Money


@dataclass(frozen=True)
class ResolvedProduct:
    """Invariant: ``original_price`` is set iff ``has_override``."""

    product: Product
    resolved_price: Money
    original_price: Money | None = None
    has_override: bool = False

    @staticmethod
    def from_catalog(product: Product) -> ResolvedProduct:
        return ResolvedProduct(product=product, resolved_price=product.price)

    @staticmethod
    def with_override(product: Product, override_price: Money) -> ResolvedProduct:
        return ResolvedProduct(
            product=product,
            resolved_price=override_price,
            original_price=product.price,
            has_override=True,
        )
