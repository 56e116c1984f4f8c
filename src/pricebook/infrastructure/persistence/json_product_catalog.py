"""JSON-file-backed implementation of ProductCatalog.

Read-only: the catalog is owned elsewhere and this adapter never writes
the file.  A missing file is an empty catalog; an unreadable or
malformed file is reported as unavailable storage.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path

from pricebook.domain.exceptions import StorageUnavailableError, ValidationError
from pricebook.domain.model.product import Product
from pricebook.domain.model.value_objects import DEFAULT_CURRENCY, Money
from pricebook.domain.repository.product_catalog import ProductCatalog

logger = logging.getLogger(__name__)


class JsonProductCatalog(ProductCatalog):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    # --- ProductCatalog interface ---------------------------------------------

    def fetch_all_products(self) -> list[Product]:
        return list(self._load().values())

    def fetch_product_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        """Products keyed by id, in file order."""
        if not self._file_path.exists():
            logger.warning("Catalog file %s does not exist", self._file_path)
            return {}

        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            return {product.id: product for product in map(self._to_domain, raw)}
        except (
            OSError, ValueError, TypeError, KeyError, AttributeError, ValidationError
        ) as exc:
            logger.error("Catalog file %s is unreadable", self._file_path, exc_info=True)
            raise StorageUnavailableError(
                f"Catalog at {self._file_path} is unreadable: {exc}"
            ) from exc

    @staticmethod
    def _to_domain(item: dict) -> Product:
        rating = item.get("rating")
        try:
            rating = Decimal(str(rating)) if rating is not None else None
        except InvalidOperation:
            rating = None

        return Product(
            id=str(item["id"]),
            name=item.get("name", ""),
            price=Money.of(item["price"], item.get("currency", DEFAULT_CURRENCY)),
            category=item.get("category", ""),
            brand=item.get("brand", ""),
            sku=item.get("sku", ""),
            description=item.get("description", ""),
            image=item.get("image", ""),
            stock=int(item.get("stock", 0)),
            rating=rating,
        )
