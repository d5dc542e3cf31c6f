"""End-to-end tests driving the click CLI over a temporary data directory."""

import json

import pytest
from click.testing import CliRunner

from decor_admin.infrastructure.cli.main import cli
from decor_admin.infrastructure.config import get_settings


@pytest.fixture
def run(tmp_path, monkeypatch):
    monkeypatch.setenv("DECOR_ADMIN_DATA_DIR", str(tmp_path))
    get_settings.cache_clear()
    runner = CliRunner()

    def invoke(*args):
        return runner.invoke(cli, list(args))

    yield invoke
    get_settings.cache_clear()


def _seed(run, stock="3"):
    result = run("product", "add", "--title", "Brass Vase", "--price", "1500", "--stock", stock)
    assert result.exit_code == 0, result.output
    result = run("order", "create", "--customer", "Sana", "--items", "Brass Vase:5")
    assert result.exit_code == 0, result.output


class TestOrderLifecycle:

    def test_create_and_show(self, run):
        _seed(run)
        result = run("order", "show", "--id", "1")
        assert result.exit_code == 0
        assert "status=pending" in result.output
        assert "PKR 7700.00" in result.output
        assert "Next statuses: pending, processing, cancelled" in result.output

    def test_processing_blocked_then_allowed_after_restock(self, run, tmp_path):
        _seed(run, stock="3")

        blocked = run("order", "status", "--id", "1", "--to", "processing")
        assert blocked.exit_code == 1
        assert "Insufficient stock" in blocked.output

        assert run("product", "restock", "--id", "1", "--quantity", "2").exit_code == 0

        moved = run("order", "status", "--id", "1", "--to", "processing")
        assert moved.exit_code == 0, moved.output
        assert "Order #1 moved to processing." in moved.output

        products = json.loads((tmp_path / "products.json").read_text())
        assert products[0]["stock"] == 0

    def test_stale_from_status_rejected(self, run):
        _seed(run, stock="10")
        result = run("order", "status", "--id", "1", "--to", "cancelled", "--from", "processing")
        assert result.exit_code == 1
        assert "is pending, not processing" in result.output

    def test_cannot_delete_processing_order(self, run):
        _seed(run, stock="10")
        run("order", "status", "--id", "1", "--to", "processing")

        result = run("order", "delete", "--id", "1", "--yes")

        assert result.exit_code == 1
        assert "Cannot delete order #1" in result.output

    def test_list_filters_by_status(self, run):
        _seed(run)
        assert "Sana" in run("order", "list", "--status", "pending").output
        assert "No orders found." in run("order", "list", "--status", "shipped").output

    def test_unknown_order(self, run):
        result = run("order", "show", "--id", "99")
        assert result.exit_code == 1
        assert "Order #99 not found" in result.output


class TestCatalogCommands:

    def test_transitions_table(self, run):
        result = run("order", "transitions", "--status", "shipped")
        assert result.output.strip() == "shipped, delivered"

    def test_low_stock_listing(self, run):
        run("product", "add", "--title", "Brass Vase", "--price", "1500", "--stock", "1")
        run("product", "add", "--title", "Jute Rug", "--price", "8000", "--stock", "40")

        result = run("product", "list", "--low-stock", "5")

        assert "Brass Vase" in result.output
        assert "Jute Rug" not in result.output

    def test_set_stock_rejects_negative(self, run):
        run("product", "add", "--title", "Brass Vase", "--price", "1500")
        result = run("product", "set-stock", "--id", "1", "--quantity=-2")
        assert result.exit_code == 1
        assert "cannot be negative" in result.output
