"""Application service: Health Check use case (query)."""

from __future__ import annotations

import logging

from pricebook.application.dto import HealthDTO
from pricebook.application.timeouts import DEFAULT_TIMEOUT, call_with_timeout
from pricebook.domain.exceptions import OperationTimeoutError
from pricebook.domain.repository.special_price_repository import (
    SpecialPriceRepository,
)

logger = logging.getLogger(__name__)


class HealthCheckHandler:

    def __init__(
        self,
        special_price_repo: SpecialPriceRepository,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._special_price_repo = special_price_repo
        self._timeout = timeout

    def handle(self) -> HealthDTO:
        """Never raises: a probe that times out counts as not ready."""
        try:
            ready = call_with_timeout(
                "special_prices.is_ready",
                self._special_price_repo.is_ready,
                timeout=self._timeout,
            )
        except OperationTimeoutError:
            ready = False

        if not ready:
            logger.warning("Special price storage is not ready")
        return HealthDTO(storage_ready=ready)
