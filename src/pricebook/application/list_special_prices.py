"""Application service: List Special Prices use case (query)."""

from __future__ import annotations

from pricebook.application.dto import SpecialPriceDTO
from pricebook.application.timeouts import DEFAULT_TIMEOUT, call_with_timeout
from pricebook.domain.repository.special_price_repository import (
    SpecialPriceRepository,
)


class ListSpecialPricesHandler:

    def __init__(
        self,
        special_price_repo: SpecialPriceRepository,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._special_price_repo = special_price_repo
        self._timeout = timeout

    def handle(self, user_id: str | None = None) -> list[SpecialPriceDTO]:
        """Newest first; every user's records when no user is given."""
        user = (user_id or "").strip()
        if user:
            records = call_with_timeout(
                "special_prices.list_by_user",
                self._special_price_repo.list_by_user,
                user,
                timeout=self._timeout,
            )
        else:
            records = call_with_timeout(
                "special_prices.list_all",
                self._special_price_repo.list_all,
                timeout=self._timeout,
            )
        return [SpecialPriceDTO.from_domain(r) for r in records]
