"""Integration tests for the SubmitSpecialPrice use case."""

from decimal import Decimal

import pytest

from pricebook.application.submit_special_price import SubmitSpecialPriceHandler
from pricebook.domain.exceptions import (
    ProductNotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from pricebook.domain.model.product import Product
from pricebook.domain.model.value_objects import Money
from tests.fakes import FakeProductCatalog, FakeSpecialPriceRepository


def _setup() -> tuple[SubmitSpecialPriceHandler, FakeSpecialPriceRepository]:
    catalog = FakeProductCatalog([
        Product(id="p1", name="Headphones", price=Money.of("100")),
        Product(id="p9", name="Euro Lamp", price=Money.of("40", "EUR")),
    ])
    repo = FakeSpecialPriceRepository()
    return SubmitSpecialPriceHandler(catalog, repo), repo


class TestSubmitHappyPath:

    def test_creates_record(self):
        handler, repo = _setup()
        dto = handler.handle("u1", "p1", 80, "loyal customer")

        assert dto.user_id == "u1"
        assert dto.product_id == "p1"
        assert dto.price == Decimal("80")
        assert dto.note == "loyal customer"
        assert dto.created_at == dto.updated_at
        assert repo.find_one("u1", "p1") is not None

    def test_note_defaults_to_empty(self):
        handler, _ = _setup()
        assert handler.handle("u1", "p1", 80).note == ""

    def test_price_as_string(self):
        handler, _ = _setup()
        assert handler.handle("u1", "p1", "79.90").price == Decimal("79.90")

    def test_zero_price_accepted(self):
        handler, _ = _setup()
        assert handler.handle("u1", "p1", 0).price == Decimal("0")

    def test_currency_follows_catalog(self):
        handler, _ = _setup()
        assert handler.handle("u1", "p9", 30).currency == "EUR"


class TestSubmitUpsert:

    def test_second_submission_replaces_first(self):
        handler, repo = _setup()
        first = handler.handle("u1", "p1", 80)
        second = handler.handle("u1", "p1", 60, "better deal")

        records = repo.list_by_user("u1")
        assert len(records) == 1
        assert records[0].price == Money.of("60")
        assert records[0].note == "better deal"
        assert second.id == first.id
        assert second.created_at == first.created_at
        assert second.updated_at > first.updated_at

    def test_different_users_get_separate_records(self):
        handler, repo = _setup()
        handler.handle("u1", "p1", 80)
        handler.handle("u2", "p1", 70)
        assert len(repo.list_all()) == 2


class TestSubmitValidation:

    def test_negative_price_rejected(self):
        handler, repo = _setup()
        with pytest.raises(ValidationError, match="price") as info:
            handler.handle("u1", "p1", -0.01)
        assert info.value.fields == ("price",)
        assert repo.upsert_calls == 0

    @pytest.mark.parametrize("price", ["abc", "NaN", "inf"])
    def test_non_numeric_price_rejected(self, price):
        handler, _ = _setup()
        with pytest.raises(ValidationError) as info:
            handler.handle("u1", "p1", price)
        assert info.value.fields == ("price",)

    def test_overlong_price_rejected_before_storage(self):
        handler, repo = _setup()
        with pytest.raises(ValidationError, match="64 characters") as info:
            handler.handle("u1", "p1", "1." + "0" * 70)
        assert info.value.fields == ("price",)
        assert repo.upsert_calls == 0

    def test_price_at_length_limit_accepted(self):
        handler, _ = _setup()
        price = "1." + "0" * 62
        assert handler.handle("u1", "p1", price).price == Decimal(price)

    def test_missing_fields_listed(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError) as info:
            handler.handle("", None, "")
        assert info.value.fields == ("user_id", "product_id", "price")
        assert "user_id" in str(info.value)

    def test_missing_price_only(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError) as info:
            handler.handle("u1", "p1", None)
        assert info.value.fields == ("price",)


class TestSubmitUnknownProduct:

    def test_unknown_product_rejected_and_nothing_written(self):
        handler, repo = _setup()
        with pytest.raises(ProductNotFoundError, match="nope") as info:
            handler.handle("u1", "nope", 10)
        assert info.value.product_id == "nope"
        assert repo.upsert_calls == 0
        assert repo.list_all() == []


class TestSubmitStorageFailure:

    def test_storage_unavailable_propagates(self):
        handler, repo = _setup()
        repo.available = False
        with pytest.raises(StorageUnavailableError):
            handler.handle("u1", "p1", 80)
