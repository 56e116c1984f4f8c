"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers
and the only reader of Settings.  Every other module depends only on
abstractions and plain values.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from sqlalchemy.engine import Engine, make_url

from pricebook.infrastructure.config import get_settings
from pricebook.infrastructure.persistence.database import create_engine_for, init_schema
from pricebook.infrastructure.persistence.json_product_catalog import (
    JsonProductCatalog,
)
from pricebook.infrastructure.persistence.sql_special_price_repository import (
    SqlSpecialPriceRepository,
)


@lru_cache
def _engine(database_url: str, busy_timeout: float) -> Engine:
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine_for(database_url, busy_timeout=busy_timeout)


def engine() -> Engine:
    settings = get_settings()
    return _engine(settings.database_url, settings.storage_busy_timeout)


def prepare_storage() -> None:
    init_schema(engine())


def call_timeout() -> float:
    return get_settings().call_timeout


def product_catalog() -> JsonProductCatalog:
    return JsonProductCatalog(get_settings().catalog_path)


def special_price_repository() -> SqlSpecialPriceRepository:
    return SqlSpecialPriceRepository(
        engine(), lock_timeout=get_settings().storage_busy_timeout
    )
