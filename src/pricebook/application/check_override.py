"""Application service: Check Override use case (query)."""

from __future__ import annotations

from pricebook.application.dto import OverrideCheckDTO, SpecialPriceDTO
from pricebook.application.timeouts import DEFAULT_TIMEOUT, call_with_timeout
from pricebook.domain.model.special_price import normalize_key
from pricebook.domain.repository.special_price_repository import (
    SpecialPriceRepository,
)


class CheckOverrideHandler:

    def __init__(
        self,
        special_price_repo: SpecialPriceRepository,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._special_price_repo = special_price_repo
        self._timeout = timeout

    def handle(self, user_id: str | None, product_id: str | None) -> OverrideCheckDTO:
        """Report whether the user has a special price for the product.

        The catalog is not consulted, so an orphaned override is
        still reported.
        """
        user, product = normalize_key(user_id, product_id)
        record = call_with_timeout(
            "special_prices.find_one",
            self._special_price_repo.find_one,
            user,
            product,
            timeout=self._timeout,
        )
        if record is None:
            return OverrideCheckDTO(has_override=False)
        return OverrideCheckDTO(has_override=True, record=SpecialPriceDTO.from_domain(record))
