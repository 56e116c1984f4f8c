"""Abstract port for the product catalog.

The catalog is an external, read-only collaborator.  Defined in the
domain layer so the domain never depends on infrastructure; concrete
adapters (JSON file, remote service) live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pricebook.domain.model.product import Product


class ProductCatalog(ABC):

    @abstractmethod
    def fetch_all_products(self) -> list[Product]:
        """Return every product, in the catalog's own order."""

    @abstractmethod
    def fetch_product_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""
