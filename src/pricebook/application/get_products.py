"""Application service: Get Products use case (query).

Fetches the catalog snapshot, then (when a user is given) that user's
overrides, and merges them.  The two snapshots are taken one after the
other and are not mutually consistent: an override written between the
two fetches may or may not show up.
"""

from __future__ import annotations

import logging

from pricebook.application.dto import ResolvedProductDTO
from pricebook.application.timeouts import DEFAULT_TIMEOUT, call_with_timeout
from pricebook.domain.repository.product_catalog import ProductCatalog
from pricebook.domain.repository.special_price_repository import (
    SpecialPriceRepository,
)
from pricebook.domain.service.price_resolution_service import (
    orphaned_overrides,
    resolve_prices,
)

logger = logging.getLogger(__name__)


class GetProductsHandler:

    def __init__(
        self,
        catalog: ProductCatalog,
        special_price_repo: SpecialPriceRepository,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._catalog = catalog
        self._special_price_repo = special_price_repo
        self._timeout = timeout

    def handle(self, user_id: str | None = None) -> list[ResolvedProductDTO]:
        """Return every catalog product with its resolved price.

        Without a user the store is not consulted and no product
        carries an override.
        """
        products = call_with_timeout(
            "catalog.fetch_all_products",
            self._catalog.fetch_all_products,
            timeout=self._timeout,
        )

        user = (user_id or "").strip()
        if not user:
            return [ResolvedProductDTO.from_domain(r) for r in resolve_prices(products)]

        overrides = call_with_timeout(
            "special_prices.list_by_user",
            self._special_price_repo.list_by_user,
            user,
            timeout=self._timeout,
        )

        orphans = orphaned_overrides(products, overrides)
        if orphans:
            logger.debug(
                "Skipping %d override(s) for user %s with no catalog product: %s",
                len(orphans),
                user,
                ", ".join(o.product_id for o in orphans),
            )

        resolved = resolve_prices(products, overrides)
        return [ResolvedProductDTO.from_domain(r) for r in resolved]
