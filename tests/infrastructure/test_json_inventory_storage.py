"""Tests for the JSON-file storage, using pytest's tmp_path."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from stockctl.application.inventory_service import InventoryService
from stockctl.domain.exceptions import (
    StorageParseError,
    StorageReadError,
    StorageWriteError,
)
from stockctl.domain.model.product import Product
from stockctl.domain.model.transaction import Transaction, TransactionType
from stockctl.infrastructure.persistence.json_inventory_storage import (
    JsonInventoryStorage,
    parse_timestamp,
)

T0 = datetime(2025, 6, 1, 8, 30, 15, 123456, tzinfo=timezone.utc)


def _product(sku: str = "SKU001", **overrides) -> Product:
    fields = dict(
        id=f"id-{sku}", sku=sku, name="Test Product", description="A test product",
        quantity=100, reorder_point=20,
    )
    fields.update(overrides)
    return Product(**fields)


def _transaction(sku: str = "SKU001", notes: str | None = "Test transaction") -> Transaction:
    return Transaction(
        id="txn-1",
        product_sku=sku,
        transaction_type=TransactionType.ADDITION,
        quantity=50,
        timestamp=T0,
        notes=notes,
    )


class TestRoundTrip:

    def test_empty_state(self, tmp_path):
        storage = JsonInventoryStorage.in_directory(tmp_path)
        storage.save_products([])
        storage.save_transactions([])
        assert storage.load_products() == []
        assert storage.load_transactions() == []

    def test_products_field_equal(self, tmp_path):
        storage = JsonInventoryStorage.in_directory(tmp_path)
        products = [
            _product("A1"),
            _product("B2", description="", quantity=0, reorder_point=0),
            _product("C3", name="Ünïcode ✓"),
        ]
        storage.save_products(products)
        assert storage.load_products() == products

    def test_transactions_field_equal(self, tmp_path):
        storage = JsonInventoryStorage.in_directory(tmp_path)
        transactions = [
            _transaction(),
            Transaction(
                id="txn-2", product_sku="SKU001",
                transaction_type=TransactionType.REMOVAL, quantity=1,
                timestamp=T0 + timedelta(days=1), notes=None,
            ),
            _transaction(notes=""),
        ]
        storage.save_transactions(transactions)
        loaded = storage.load_transactions()
        assert loaded == transactions
        assert all(t.timestamp.tzinfo is not None for t in loaded)

    def test_full_service_state(self, tmp_path):
        service = InventoryService(JsonInventoryStorage.in_directory(tmp_path))
        service.create_product("A1", "Widget", "Blue", 10, 5)
        service.create_product("B2", "Gadget", "", 0, 3)
        service.add_stock("B2", 4, notes="delivery")
        service.remove_stock("A1", 7)

        reloaded = InventoryService(JsonInventoryStorage.in_directory(tmp_path))

        assert sorted(reloaded.list_products(), key=lambda p: p.sku) == sorted(
            service.list_products(), key=lambda p: p.sku
        )
        for sku in ("A1", "B2"):
            assert reloaded.get_transactions(sku) == service.get_transactions(sku)

    def test_overwrites_rather_than_appends(self, tmp_path):
        storage = JsonInventoryStorage.in_directory(tmp_path)
        storage.save_products([_product("A1"), _product("B2")])
        storage.save_products([_product("C3")])
        assert [p.sku for p in storage.load_products()] == ["C3"]


class TestFileFormat:

    def test_product_record_shape(self, tmp_path):
        storage = JsonInventoryStorage.in_directory(tmp_path)
        storage.save_products([_product()])
        raw = json.loads((tmp_path / "products.json").read_text(encoding="utf-8"))
        assert raw == [{
            "id": "id-SKU001", "sku": "SKU001", "name": "Test Product",
            "description": "A test product", "quantity": 100, "reorder_point": 20,
        }]

    def test_transaction_record_shape(self, tmp_path):
        storage = JsonInventoryStorage.in_directory(tmp_path)
        storage.save_transactions([_transaction(notes=None)])
        raw = json.loads((tmp_path / "transactions.json").read_text(encoding="utf-8"))
        assert raw == [{
            "id": "txn-1", "product_sku": "SKU001", "transaction_type": "Addition",
            "quantity": 50, "timestamp": "2025-06-01T08:30:15.123456+00:00",
            "notes": None,
        }]

    def test_explicit_paths(self, tmp_path):
        storage = JsonInventoryStorage(
            tmp_path / "catalog" / "p.json", tmp_path / "ledger" / "t.json"
        )
        storage.save_products([_product()])
        storage.save_transactions([_transaction()])
        assert (tmp_path / "catalog" / "p.json").exists()
        assert (tmp_path / "ledger" / "t.json").exists()

    def test_creates_missing_directory(self, tmp_path):
        storage = JsonInventoryStorage.in_directory(tmp_path / "nested" / "data")
        storage.save_products([_product()])
        assert storage.load_products() == [_product()]


class TestLoadingEdgeCases:

    def test_missing_files_load_empty(self, tmp_path):
        storage = JsonInventoryStorage.in_directory(tmp_path)
        assert storage.load_products() == []
        assert storage.load_transactions() == []

    def test_blank_file_loads_empty(self, tmp_path):
        (tmp_path / "products.json").write_text("  \n", encoding="utf-8")
        assert JsonInventoryStorage.in_directory(tmp_path).load_products() == []

    def test_corrupt_json(self, tmp_path):
        (tmp_path / "products.json").write_text("not valid json {{{", encoding="utf-8")
        with pytest.raises(StorageParseError, match="products.json"):
            JsonInventoryStorage.in_directory(tmp_path).load_products()

    def test_deeply_nested_json(self, tmp_path):
        (tmp_path / "products.json").write_text(
            "[" * 100_000 + "]" * 100_000, encoding="utf-8"
        )
        with pytest.raises(StorageParseError, match="products.json"):
            JsonInventoryStorage.in_directory(tmp_path).load_products()

    @pytest.mark.parametrize("content", ['{"sku": "A1"}', "[1, 2]", '"text"'])
    def test_wrong_top_level_shape(self, tmp_path, content):
        (tmp_path / "transactions.json").write_text(content, encoding="utf-8")
        with pytest.raises(StorageParseError, match="list of records"):
            JsonInventoryStorage.in_directory(tmp_path).load_transactions()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"quantity": -1},
            {"quantity": "5"},
            {"quantity": True},
            {"reorder_point": 1.5},
            {"sku": None},
            {"sku": ""},
            {"sku": "   "},
            {"name": 3},
            {"name": ""},
            {"name": "\t"},
        ],
    )
    def test_bad_product_fields(self, tmp_path, overrides):
        record = {
            "id": "x", "sku": "A1", "name": "Widget", "description": "",
            "quantity": 1, "reorder_point": 0,
        }
        record.update(overrides)
        (tmp_path / "products.json").write_text(json.dumps([record]), encoding="utf-8")
        with pytest.raises(StorageParseError):
            JsonInventoryStorage.in_directory(tmp_path).load_products()

    @pytest.mark.parametrize("field", ["sku", "name"])
    def test_blank_text_field_names_the_file(self, tmp_path, field):
        record = {
            "id": "x", "sku": "A1", "name": "Widget", "description": "",
            "quantity": 1, "reorder_point": 0, field: " ",
        }
        (tmp_path / "products.json").write_text(json.dumps([record]), encoding="utf-8")
        with pytest.raises(StorageParseError, match="products.json.*cannot be empty"):
            JsonInventoryStorage.in_directory(tmp_path).load_products()

    def test_missing_product_field(self, tmp_path):
        record = {"id": "x", "sku": "A1", "name": "Widget", "quantity": 1, "reorder_point": 0}
        (tmp_path / "products.json").write_text(json.dumps([record]), encoding="utf-8")
        with pytest.raises(StorageParseError, match="description"):
            JsonInventoryStorage.in_directory(tmp_path).load_products()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"transaction_type": "Adjustment"},
            {"quantity": 0},
            {"timestamp": "yesterday"},
            {"notes": 12},
        ],
    )
    def test_bad_transaction_fields(self, tmp_path, overrides):
        record = {
            "id": "t", "product_sku": "A1", "transaction_type": "Removal",
            "quantity": 2, "timestamp": "2025-01-01T00:00:00Z", "notes": None,
        }
        record.update(overrides)
        (tmp_path / "transactions.json").write_text(json.dumps([record]), encoding="utf-8")
        with pytest.raises(StorageParseError):
            JsonInventoryStorage.in_directory(tmp_path).load_transactions()

    def test_notes_key_may_be_absent(self, tmp_path):
        record = {
            "id": "t", "product_sku": "A1", "transaction_type": "Removal",
            "quantity": 2, "timestamp": "2025-01-01T00:00:00Z",
        }
        (tmp_path / "transactions.json").write_text(json.dumps([record]), encoding="utf-8")
        [t] = JsonInventoryStorage.in_directory(tmp_path).load_transactions()
        assert t.notes is None

    def test_duplicate_sku_rejected(self, tmp_path):
        storage = JsonInventoryStorage.in_directory(tmp_path)
        storage.save_products([_product("A1"), _product("A1", id="other")])
        with pytest.raises(StorageParseError, match="Duplicate SKU 'A1'"):
            storage.load_products()

    def test_unreadable_path(self, tmp_path):
        (tmp_path / "products.json").mkdir()
        with pytest.raises(StorageReadError):
            JsonInventoryStorage.in_directory(tmp_path).load_products()

    def test_unwritable_path(self, tmp_path):
        (tmp_path / "transactions.json").mkdir()
        with pytest.raises(StorageWriteError, match="transactions.json"):
            JsonInventoryStorage.in_directory(tmp_path).save_transactions([])


class TestParseTimestamp:

    @pytest.mark.parametrize(
        "text",
        [
            "2025-06-01T08:30:15.123456+00:00",
            "2025-06-01T08:30:15.123456Z",
            "2025-06-01T08:30:15.123456789Z",
            "2025-06-01T10:30:15.123456+02:00",
            "2025-06-01T08:30:15.123456",
        ],
    )
    def test_variants_normalise_to_utc(self, text):
        parsed = parse_timestamp(text)
        assert parsed == T0
        assert parsed.utcoffset() == timedelta(0)

    def test_garbage_rejected(self):
        with pytest.raises(ValueError):
            parse_timestamp("31/12/2025")
