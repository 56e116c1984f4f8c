"""End-to-end tests for the click CLI against a temporary SQLite file."""

import json

import pytest
from click.testing import CliRunner

from pricebook.infrastructure.cli.main import cli
from pricebook.infrastructure.config import get_settings

CATALOG = [
    {"id": "p1", "name": "Wireless Headphones", "category": "Audio", "price": "100.00", "stock": 5},
    {"id": "p2", "name": "USB-C Charger", "category": "Accessories", "price": "50.00", "stock": 0},
]


@pytest.fixture
def runner(tmp_path, monkeypatch):
    catalog = tmp_path / "products.json"
    catalog.write_text(json.dumps(CATALOG), encoding="utf-8")
    monkeypatch.setenv("PRICEBOOK_DATABASE_URL", f"sqlite:///{tmp_path / 'db' / 'prices.db'}")
    monkeypatch.setenv("PRICEBOOK_CATALOG_PATH", str(catalog))
    get_settings.cache_clear()
    yield CliRunner()
    get_settings.cache_clear()


def _json(result):
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestProductList:

    def test_table_without_user(self, runner):
        result = runner.invoke(cli, ["product", "list"])
        assert result.exit_code == 0, result.output
        assert "Wireless Headphones" in result.output
        assert "100.00 USD" in result.output
        assert "special price" not in result.output

    def test_scenario_override_for_one_user(self, runner):
        runner.invoke(cli, ["price", "set", "--user", "u1", "--product", "p1", "--price", "80"])

        products = _json(runner.invoke(cli, ["product", "list", "--user", "u1", "--json"]))["products"]
        p1, p2 = products

        assert p1["id"] == "p1"
        assert p1["resolvedPrice"] == "80"
        assert p1["hasOverride"] is True
        assert p1["originalPrice"] == "100.00"
        assert p2["resolvedPrice"] == "50.00"
        assert p2["hasOverride"] is False
        assert "originalPrice" not in p2

    def test_no_user_ignores_overrides(self, runner):
        runner.invoke(cli, ["price", "set", "--user", "u1", "--product", "p1", "--price", "80"])

        products = _json(runner.invoke(cli, ["product", "list", "--json"]))["products"]

        assert all(p["hasOverride"] is False for p in products)

    def test_search_filters_name_and_category(self, runner):
        products = _json(runner.invoke(cli, ["product", "list", "--search", "accessor", "--json"]))["products"]
        assert [p["id"] for p in products] == ["p2"]


class TestPriceCommands:

    def test_set_twice_keeps_one_record(self, runner):
        first = _json(runner.invoke(cli, ["price", "set", "--user", "u1", "--product", "p1", "--price", "80", "--json"]))
        runner.invoke(cli, ["price", "set", "--user", "u1", "--product", "p1", "--price", "60"])

        records = _json(runner.invoke(cli, ["price", "list", "--user", "u1", "--json"]))["records"]

        assert len(records) == 1
        assert records[0]["price"] == "60"
        assert records[0]["createdAt"] == first["record"]["createdAt"]
        assert records[0]["id"] == first["record"]["id"]

    def test_set_negative_price_fails(self, runner):
        result = runner.invoke(cli, ["price", "set", "--user", "u1", "--product", "p1", "--price=-0.01"])
        assert result.exit_code != 0
        assert "price" in result.output

    def test_set_unknown_product_fails(self, runner):
        result = runner.invoke(cli, ["price", "set", "--user", "u1", "--product", "zzz", "--price", "1"])
        assert result.exit_code != 0
        assert "not found" in result.output
        assert _json(runner.invoke(cli, ["price", "list", "--json"]))["records"] == []

    def test_set_table_output(self, runner):
        result = runner.invoke(
            cli, ["price", "set", "--user", "u1", "--product", "p1", "--price", "0", "--note", "gift"]
        )
        assert result.exit_code == 0, result.output
        assert "0.00 USD" in result.output
        assert "gift" in result.output

    def test_delete_unknown_id(self, runner):
        assert _json(runner.invoke(cli, ["price", "delete", "--id", "nope", "--json"])) == {"deleted": False}

    def test_delete_existing(self, runner):
        record = _json(runner.invoke(cli, ["price", "set", "--user", "u1", "--product", "p1", "--price", "80", "--json"]))["record"]

        assert _json(runner.invoke(cli, ["price", "delete", "--id", record["id"], "--json"])) == {"deleted": True}
        assert _json(runner.invoke(cli, ["price", "check", "--user", "u1", "--product", "p1", "--json"])) == {"hasOverride": False}

    def test_check_existing(self, runner):
        runner.invoke(cli, ["price", "set", "--user", "u1", "--product", "p1", "--price", "80"])

        payload = _json(runner.invoke(cli, ["price", "check", "--user", "u1", "--product", "p1", "--json"]))

        assert payload["hasOverride"] is True
        assert payload["record"]["userId"] == "u1"
        assert payload["record"]["productId"] == "p1"

    def test_list_empty_table(self, runner):
        result = runner.invoke(cli, ["price", "list"])
        assert result.exit_code == 0
        assert "No special prices found." in result.output


class TestHealth:

    def test_ready(self, runner):
        assert _json(runner.invoke(cli, ["health", "--json"])) == {"storageReady": True}

    def test_not_ready(self, tmp_path, monkeypatch):
        # A directory where the database file should be makes SQLite fail to open it
        (tmp_path / "blocked.db").mkdir()
        monkeypatch.setenv("PRICEBOOK_DATABASE_URL", f"sqlite:///{tmp_path / 'blocked.db'}")
        monkeypatch.setenv("PRICEBOOK_CATALOG_PATH", str(tmp_path / "none.json"))
        get_settings.cache_clear()
        try:
            result = CliRunner().invoke(cli, ["health"])
        finally:
            get_settings.cache_clear()

        assert result.exit_code == 1
        assert "NOT READY" in result.output
