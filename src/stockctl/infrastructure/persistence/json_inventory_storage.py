"""JSON-file-backed implementation of InventoryStorage."""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, TypeVar

from stockctl.domain.exceptions import (
    InvalidInputError,
    StorageParseError,
    StorageReadError,
    StorageWriteError,
)
from stockctl.domain.model.product import Product, require_text
from stockctl.domain.model.transaction import Transaction, TransactionType
from stockctl.domain.repository.inventory_storage import InventoryStorage

logger = logging.getLogger(__name__)

T = TypeVar("T")

PRODUCTS_FILE = "products.json"
TRANSACTIONS_FILE = "transactions.json"

# Fractional seconds beyond microsecond precision (e.g. nanoseconds)
_EXCESS_FRACTION = re.compile(r"(\.\d{6})\d+")


class JsonInventoryStorage(InventoryStorage):

    def __init__(self, products_path: Path, transactions_path: Path) -> None:
        self._products_path = Path(products_path)
        self._transactions_path = Path(transactions_path)

    @classmethod
    def in_directory(cls, data_dir: Path) -> JsonInventoryStorage:
        """Store both collections side by side in *data_dir*."""
        data_dir = Path(data_dir)
        return cls(data_dir / PRODUCTS_FILE, data_dir / TRANSACTIONS_FILE)

    # --- InventoryStorage interface -------------------------------------------

    def load_products(self) -> list[Product]:
        products = self._load(self._products_path, self._product_to_domain)
        seen: set[str] = set()
        for product in products:
            if product.sku in seen:
                raise StorageParseError(
                    f"Duplicate SKU '{product.sku}' in {self._products_path}"
                )
            seen.add(product.sku)
        return products

    def load_transactions(self) -> list[Transaction]:
        return self._load(self._transactions_path, self._transaction_to_domain)

    def save_products(self, products: list[Product]) -> None:
        self._persist_raw(
            self._products_path, [self._product_to_raw(p) for p in products]
        )

    def save_transactions(self, transactions: list[Transaction]) -> None:
        self._persist_raw(
            self._transactions_path,
            [self._transaction_to_raw(t) for t in transactions],
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _product_to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "sku": product.sku,
            "name": product.name,
            "description": product.description,
            "quantity": product.quantity,
            "reorder_point": product.reorder_point,
        }

    @staticmethod
    def _product_to_domain(raw: dict) -> Product:
        sku = _field(raw, "sku", str)
        name = _field(raw, "name", str)
        require_text(sku, "SKU")
        require_text(name, "Name")
        return Product(
            id=_field(raw, "id", str),
            sku=sku,
            name=name,
            description=_field(raw, "description", str),
            quantity=_count(raw, "quantity", minimum=0),
            reorder_point=_count(raw, "reorder_point", minimum=0),
        )

    @staticmethod
    def _transaction_to_raw(transaction: Transaction) -> dict:
        return {
            "id": transaction.id,
            "product_sku": transaction.product_sku,
            "transaction_type": transaction.transaction_type.value,
            "quantity": transaction.quantity,
            "timestamp": transaction.timestamp.isoformat(),
            "notes": transaction.notes,
        }

    @staticmethod
    def _transaction_to_domain(raw: dict) -> Transaction:
        notes = raw.get("notes")
        if notes is not None and not isinstance(notes, str):
            raise ValueError("'notes' must be a string or null")
        return Transaction(
            id=_field(raw, "id", str),
            product_sku=_field(raw, "product_sku", str),
            transaction_type=TransactionType(_field(raw, "transaction_type", str)),
            quantity=_count(raw, "quantity", minimum=1),
            timestamp=parse_timestamp(_field(raw, "timestamp", str)),
            notes=notes,
        )

    # --- File helpers ---------------------------------------------------------

    def _load(self, path: Path, to_domain: Callable[[dict], T]) -> list[T]:
        records = self._load_raw(path)
        try:
            result = [to_domain(raw) for raw in records]
        except (KeyError, TypeError, ValueError, InvalidInputError) as exc:
            raise StorageParseError(f"Failed to parse {path}: {exc}") from exc
        logger.debug("Loaded %d records from %s", len(result), path)
        return result

    def _load_raw(self, path: Path) -> list[dict]:
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageReadError(f"Failed to read {path}: {exc}") from exc

        if not text.strip():
            return []
        try:
            records = json.loads(text)
        except (json.JSONDecodeError, RecursionError) as exc:
            raise StorageParseError(f"Failed to parse {path}: {exc}") from exc
        if not isinstance(records, list) or not all(
            isinstance(r, dict) for r in records
        ):
            raise StorageParseError(f"Failed to parse {path}: expected a list of records")
        return records

    def _persist_raw(self, path: Path, records: list[dict]) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            raise StorageWriteError(f"Failed to write {path}: {exc}") from exc
        logger.debug("Wrote %d records to %s", len(records), path)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp into an aware UTC datetime.

    Accepts a trailing ``Z`` and sub-microsecond fractions; naive values
    are taken to be UTC.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _EXCESS_FRACTION.sub(r"\1", text)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _field(raw: dict, key: str, kind: type) -> Any:
    value = raw[key]
    if not isinstance(value, kind):
        raise TypeError(f"'{key}' must be {kind.__name__}, got {type(value).__name__}")
    return value


def _count(raw: dict, key: str, minimum: int) -> int:
    value = raw[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"'{key}' must be an integer, got {type(value).__name__}")
    if value < minimum:
        raise ValueError(f"'{key}' must be >= {minimum}, got {value}")
    return value
