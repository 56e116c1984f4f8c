"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Amounts stay Decimal;
formatting for display is the presentation layer's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from pricebook.domain.model.resolved_product import ResolvedProduct
from pricebook.domain.model.special_price import SpecialPrice


@dataclass(frozen=True)
class ResolvedProductDTO:
    """Output: a catalog product with the price that applies to the user."""

    id: str
    name: str
    category: str
    brand: str
    sku: str
    stock: int
    currency: str
    base_price: Decimal
    resolved_price: Decimal
    original_price: Decimal | None
    has_override: bool

    @staticmethod
    def from_domain(item: ResolvedProduct) -> ResolvedProductDTO:
        product = item.product
        return ResolvedProductDTO(
            id=product.id,
            name=product.name,
            category=product.category,
            brand=product.brand,
            sku=product.sku,
            stock=product.stock,
            currency=item.resolved_price.currency,
            base_price=product.price.amount,
            resolved_price=item.resolved_price.amount,
            original_price=item.original_price.amount if item.original_price else None,
            has_override=item.has_override,
        )


@dataclass(frozen=True)
class SpecialPriceDTO:
    """Output: a stored override record."""

    id: str
    user_id: str
    product_id: str
    price: Decimal
    currency: str
    note: str
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def from_domain(record: SpecialPrice) -> SpecialPriceDTO:
        return SpecialPriceDTO(
            id=record.id,
            user_id=record.user_id,
            product_id=record.product_id,
            price=record.price.amount,
            currency=record.price.currency,
            note=record.note,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


@dataclass(frozen=True)
class OverrideCheckDTO:
    has_override: bool
    record: SpecialPriceDTO | None = None


@dataclass(frozen=True)
class HealthDTO:
    storage_ready: bool
