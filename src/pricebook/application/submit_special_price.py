"""Application service: Submit Special Price use case.

Validates the raw submission, confirms the product exists in the
catalog, then upserts into the override store.  Nothing is written
unless every check passes.

The product existence check happens here only.  A product removed from
the catalog later leaves its overrides orphaned; reads skip them.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from pricebook.application.dto import SpecialPriceDTO
from pricebook.application.timeouts import DEFAULT_TIMEOUT, call_with_timeout
from pricebook.domain.exceptions import ProductNotFoundError, ValidationError
from pricebook.domain.model.special_price import (
    MAX_PRICE_LENGTH,
    normalize_key,
    normalize_note,
)
from pricebook.domain.model.value_objects import Money
from pricebook.domain.repository.product_catalog import ProductCatalog
from pricebook.domain.repository.special_price_repository import (
    SpecialPriceRepository,
)

logger = logging.getLogger(__name__)


class SubmitSpecialPriceHandler:

    def __init__(
        self,
        catalog: ProductCatalog,
        special_price_repo: SpecialPriceRepository,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._catalog = catalog
        self._special_price_repo = special_price_repo
        self._timeout = timeout

    def handle(
        self,
        user_id: str | None,
        product_id: str | None,
        price: str | float | int | Decimal | None,
        note: str | None = None,
    ) -> SpecialPriceDTO:
        """Create or replace the special price for (user_id, product_id).

        Steps:
        1. Validate presence of every field and that price >= 0.
        2. Look the product up in the catalog (fail if not found).
        3. Upsert, pricing the override in the product's currency.  The
           write runs on this thread; the store's lock timeout bounds it.
        """
        user, product_id, amount = self._validate(user_id, product_id, price)

        product = call_with_timeout(
            "catalog.fetch_product_by_id",
            self._catalog.fetch_product_by_id,
            product_id,
            timeout=self._timeout,
        )
        if product is None:
            raise ProductNotFoundError(product_id)

        record = self._special_price_repo.upsert(
            user,
            product_id,
            Money(amount, product.price.currency),
            normalize_note(note),
        )

        logger.info(
            "Special price %s for user=%s product=%s set to %s",
            "updated" if record.was_updated else "created",
            record.user_id,
            record.product_id,
            record.price,
        )
        return SpecialPriceDTO.from_domain(record)

    # --- Validation -----------------------------------------------------------

    @staticmethod
    def _validate(
        user_id: str | None,
        product_id: str | None,
        price: str | float | int | Decimal | None,
    ) -> tuple[str, str, Decimal]:
        missing = [
            name
            for name, value in (("user_id", user_id), ("product_id", product_id))
            if value is None or not str(value).strip()
        ]
        if price is None or (isinstance(price, str) and not price.strip()):
            missing.append("price")
        if missing:
            raise ValidationError(
                f"Missing required field(s): {', '.join(missing)}",
                fields=tuple(missing),
            )

        user, product = normalize_key(user_id, product_id)
        try:
            amount = Money.of(price).amount
        except ValidationError as exc:
            raise ValidationError(
                f"Invalid price {price!r}: must be a number >= 0", fields=("price",)
            ) from exc
        if len(str(amount)) > MAX_PRICE_LENGTH:
            raise ValidationError(
                f"Invalid price: longer than {MAX_PRICE_LENGTH} characters",
                fields=("price",),
            )
        return user, product, amount
