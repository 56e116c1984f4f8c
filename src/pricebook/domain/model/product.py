"""Product record, owned by the external catalog.

The core never mutates products.  Only ``id`` and ``price`` take part
in price resolution; the remaining attributes are carried through so
a resolved view can be displayed without a second catalog lookup.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from pricebook.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:
    """A product in the catalog (read-only snapshot)."""

    id: str
    name: str
    price: Money
    category: str = ""
    brand: str = ""
    sku: str = ""
    description: str = ""
    image: str = ""
    stock: int = 0
    rating: Decimal | None = None
