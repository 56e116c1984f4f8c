"""SQL-backed implementation of SpecialPriceRepository.

Uniqueness of (user_id, product_id) is enforced by a unique constraint,
and ``upsert`` is a single ``INSERT ... ON CONFLICT DO UPDATE``
statement, so concurrent writers to the same key serialise inside the
database and the last one to commit wins.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import sessionmaker

from pricebook.domain.exceptions import OperationTimeoutError, StorageUnavailableError
from pricebook.domain.model.special_price import (
    SpecialPrice,
    normalize_key,
    normalize_note,
)
from pricebook.domain.model.value_objects import Money
from pricebook.domain.repository.special_price_repository import (
    SpecialPriceRepository,
)
from pricebook.infrastructure.persistence.database import SpecialPriceRow

logger = logging.getLogger(__name__)

_LOCK_MARKERS = (
    "database is locked",
    "database table is locked",
    "lock timeout",
    "statement timeout",
)

_ORDERING = (
    SpecialPriceRow.created_at.desc(),
    SpecialPriceRow.product_id.asc(),
    SpecialPriceRow.id.asc(),
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SqlSpecialPriceRepository(SpecialPriceRepository):

    def __init__(
        self,
        engine: Engine,
        lock_timeout: float = 5.0,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._engine = engine
        self._lock_timeout = lock_timeout
        self._clock = clock
        self._session_factory = sessionmaker(
            bind=engine, autoflush=False, expire_on_commit=False
        )

    # --- SpecialPriceRepository interface -------------------------------------

    def upsert(
        self, user_id: str, product_id: str, price: Money, note: str = ""
    ) -> SpecialPrice:
        user_id, product_id = normalize_key(user_id, product_id)
        note = normalize_note(note)
        self._require_ready()

        now = self._clock()
        insert = pg_insert if self._engine.dialect.name == "postgresql" else sqlite_insert
        stmt = insert(SpecialPriceRow).values(
            id=uuid.uuid4().hex,
            user_id=user_id,
            product_id=product_id,
            price=str(price.amount),
            currency=price.currency,
            note=note,
            created_at=now,
            updated_at=now,
        )
        # id and created_at belong to the first writer and are never replaced
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "product_id"],
            set_={
                "price": stmt.excluded.price,
                "currency": stmt.excluded.currency,
                "note": stmt.excluded.note,
                "updated_at": stmt.excluded.updated_at,
            },
        )

        with self._translate_errors("upsert"):
            with self._session_factory.begin() as session:
                session.execute(stmt)
                row = session.scalars(
                    select(SpecialPriceRow).where(
                        SpecialPriceRow.user_id == user_id,
                        SpecialPriceRow.product_id == product_id,
                    )
                ).one()
                return self._to_domain(row)

    def list_by_user(self, user_id: str) -> list[SpecialPrice]:
        self._require_ready()
        query = (
            select(SpecialPriceRow)
            .where(SpecialPriceRow.user_id == user_id)
            .order_by(*_ORDERING)
        )
        return self._fetch_all("list_by_user", query)

    def list_all(self) -> list[SpecialPrice]:
        self._require_ready()
        return self._fetch_all("list_all", select(SpecialPriceRow).order_by(*_ORDERING))

    def find_one(self, user_id: str, product_id: str) -> SpecialPrice | None:
        self._require_ready()
        query = select(SpecialPriceRow).where(
            SpecialPriceRow.user_id == user_id,
            SpecialPriceRow.product_id == product_id,
        )
        with self._translate_errors("find_one"):
            with self._session_factory() as session:
                row = session.scalars(query).one_or_none()
                return self._to_domain(row) if row is not None else None

    def delete(self, record_id: str) -> bool:
        self._require_ready()
        stmt = delete(SpecialPriceRow).where(SpecialPriceRow.id == record_id)
        with self._translate_errors("delete"):
            with self._session_factory.begin() as session:
                result = session.execute(stmt)
                return result.rowcount > 0

    def is_ready(self) -> bool:
        try:
            self._probe()
        except SQLAlchemyError as exc:
            logger.debug("Storage readiness probe failed: %s", exc)
            return False
        return True

    # --- Error handling -------------------------------------------------------

    def _probe(self) -> None:
        # Touches the table so a missing schema also counts as not ready
        with self._engine.connect() as conn:
            conn.execute(select(SpecialPriceRow.id).limit(1)).all()

    def _require_ready(self) -> None:
        """Fail fast before an operation if the store cannot serve it."""
        with self._translate_errors("ping"):
            self._probe()

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        """Re-raise driver errors as domain errors."""
        try:
            yield
        except PoolTimeoutError as exc:
            logger.warning("special_prices.%s: no connection available", operation)
            raise OperationTimeoutError(
                f"special_prices.{operation}", self._lock_timeout
            ) from exc
        except DBAPIError as exc:
            if _is_lock_timeout(exc):
                logger.warning("special_prices.%s: lock wait timed out", operation)
                raise OperationTimeoutError(
                    f"special_prices.{operation}", self._lock_timeout
                ) from exc
            logger.error("special_prices.%s failed", operation, exc_info=True)
            raise StorageUnavailableError(
                f"Special price storage failed during {operation}"
            ) from exc
        except SQLAlchemyError as exc:
            logger.error("special_prices.%s failed", operation, exc_info=True)
            raise StorageUnavailableError(
                f"Special price storage failed during {operation}"
            ) from exc

    # --- Queries --------------------------------------------------------------

    def _fetch_all(self, operation: str, query) -> list[SpecialPrice]:
        with self._translate_errors(operation):
            with self._session_factory() as session:
                return [self._to_domain(row) for row in session.scalars(query)]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(row: SpecialPriceRow) -> SpecialPrice:
        return SpecialPrice(
            id=row.id,
            user_id=row.user_id,
            product_id=row.product_id,
            price=Money(Decimal(row.price), row.currency),
            note=row.note,
            created_at=_as_utc(row.created_at),
            updated_at=_as_utc(row.updated_at),
        )


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _is_lock_timeout(exc: DBAPIError) -> bool:
    message = str(exc.orig).lower()
    return any(marker in message for marker in _LOCK_MARKERS)
