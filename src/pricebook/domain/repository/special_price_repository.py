"""Abstract repository for SpecialPrice records (the override store).

Implementations must enforce uniqueness of (user_id, product_id) in the
storage layer itself and must raise StorageUnavailableError before
attempting an operation when the backing store is not ready.

Writes (``upsert``, ``delete``) must bound their own lock waits and
raise OperationTimeoutError with nothing changed when the wait runs
out.  Callers run them inline and never abandon them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pricebook.domain.model.special_price import SpecialPrice
from pricebook.domain.model.value_objects import Money


class SpecialPriceRepository(ABC):

    @abstractmethod
    def upsert(
        self, user_id: str, product_id: str, price: Money, note: str = ""
    ) -> SpecialPrice:
        """Atomically create or replace the record for (user_id, product_id).

        On replace, ``price``, ``note`` and ``updated_at`` change while
        ``id`` and ``created_at`` are preserved.
        """

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[SpecialPrice]:
        """Return the user's records, newest ``created_at`` first."""

    @abstractmethod
    def list_all(self) -> list[SpecialPrice]:
        """Return every record, newest ``created_at`` first."""

    @abstractmethod
    def find_one(self, user_id: str, product_id: str) -> SpecialPrice | None:
        """Return the record for the pair, or None."""

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        """Remove a record; False if there was nothing to remove."""

    @abstractmethod
    def is_ready(self) -> bool:
        """Cheap readiness probe; never raises."""
