"""Application service: Delete Special Price use case.

Deleting an id that does not exist is not a fault; the caller gets
``False`` back.  The delete runs on the caller's thread so a timeout
never leaves it running in the background.
"""

from __future__ import annotations

import logging

from pricebook.domain.exceptions import ValidationError
from pricebook.domain.repository.special_price_repository import (
    SpecialPriceRepository,
)

logger = logging.getLogger(__name__)


class DeleteSpecialPriceHandler:

    def __init__(self, special_price_repo: SpecialPriceRepository) -> None:
        self._special_price_repo = special_price_repo

    def handle(self, record_id: str | None) -> bool:
        record_id = (record_id or "").strip()
        if not record_id:
            raise ValidationError("Missing required field(s): id", fields=("id",))

        deleted = self._special_price_repo.delete(record_id)
        if deleted:
            logger.info("Special price %s deleted", record_id)
        else:
            logger.debug("Special price %s not found; nothing deleted", record_id)
        return deleted
