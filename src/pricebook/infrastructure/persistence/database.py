"""SQL schema and engine construction for the override store."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text, UniqueConstraint, create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import StaticPool

from pricebook.domain.exceptions import StorageUnavailableError
from pricebook.domain.model.special_price import MAX_PRICE_LENGTH

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class SpecialPriceRow(Base):
    __tablename__ = "special_prices"
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_special_prices_user_product"),
        Index("ix_special_prices_user_created", "user_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    product_id: Mapped[str] = mapped_column(String(255), nullable=False)
    # Exact decimal text; SQLite has no native decimal type
    price: Mapped[str] = mapped_column(String(MAX_PRICE_LENGTH), nullable=False)
    currency: Mapped[str] = mapped_column(String(8), nullable=False)
    note: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


def create_engine_for(url: str, busy_timeout: float = 5.0) -> Engine:
    """Build an engine whose lock waits are bounded by ``busy_timeout``.

    A wait that runs out raises from the driver and the transaction is
    rolled back, so a timed-out write never lands later.

    File-based SQLite connections are shared across worker threads.
    In-memory SQLite gets a single static connection so every thread
    sees the same database.
    """
    parsed = make_url(url)

    if parsed.get_backend_name() == "sqlite":
        connect_args = {"timeout": busy_timeout, "check_same_thread": False}
        if parsed.database in (None, "", ":memory:"):
            return create_engine(parsed, connect_args=connect_args, poolclass=StaticPool)
        return create_engine(
            parsed, connect_args=connect_args, pool_timeout=busy_timeout
        )

    if parsed.get_backend_name() == "postgresql":
        millis = int(busy_timeout * 1000)
        return create_engine(
            parsed,
            pool_pre_ping=True,
            pool_timeout=busy_timeout,
            connect_args={
                "connect_timeout": max(1, int(busy_timeout)),
                "options": f"-c lock_timeout={millis} -c statement_timeout={millis}",
            },
        )

    return create_engine(parsed, pool_pre_ping=True, pool_timeout=busy_timeout)


def init_schema(engine: Engine) -> None:
    """Create missing tables and indexes.  Idempotent."""
    try:
        Base.metadata.create_all(engine)
    except SQLAlchemyError as exc:
        logger.error("Could not initialise schema on %s", engine.url, exc_info=True)
        raise StorageUnavailableError(
            f"Special price storage unavailable: {exc.__class__.__name__}"
        ) from exc
