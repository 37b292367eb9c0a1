"""Application service: the inventory.

``InventoryService`` owns the authoritative in-memory state (products
keyed by SKU plus the transaction ledger). Every read and write goes
through it. Each mutation follows the same shape:

    validate -> mutate in memory -> persist both collections -> return

Validation always completes before anything is mutated, so a rejected
call leaves the state exactly as it was.  A storage failure *after* the
mutation is reported to the caller but not rolled back: memory may then
be ahead of what is on disk.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable

from stockctl.domain.exceptions import (
    DuplicateSkuError,
    ProductNotFoundError,
    StorageError,
)
from stockctl.domain.model.product import Product, require_non_negative, require_text
from stockctl.domain.model.transaction import Transaction, TransactionType
from stockctl.domain.model.value_objects import Quantity
from stockctl.domain.repository.inventory_storage import InventoryStorage

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InventoryService:

    def __init__(self, storage: InventoryStorage, clock: Clock | None = None) -> None:
        self._storage = storage
        self._clock = clock or utc_now
        self._products: dict[str, Product] = {
            p.sku: p for p in storage.load_products()
        }
        self._transactions: list[Transaction] = storage.load_transactions()
        logger.debug(
            "Loaded %d products and %d transactions",
            len(self._products),
            len(self._transactions),
        )

    # --- Catalog --------------------------------------------------------------

    def create_product(
        self,
        sku: str,
        name: str,
        description: str = "",
        initial_quantity: int = 0,
        reorder_point: int = 0,
    ) -> Product:
        """Add a new product to the catalog and return the full record."""
        product = Product.create(
            sku=sku,
            name=name,
            description=description,
            initial_quantity=initial_quantity,
            reorder_point=reorder_point,
        )
        if product.sku in self._products:
            raise DuplicateSkuError(product.sku)

        self._products[product.sku] = product
        logger.info("Created product %s (%s)", product.sku, product.id)
        self._persist()
        return replace(product)

    def update_product(
        self,
        sku: str,
        name: str | None = None,
        description: str | None = None,
        reorder_point: int | None = None,
    ) -> Product:
        """Change the descriptive fields of a product.

        Only the fields that are supplied change. Stock level, id, SKU
        and the transaction history are never touched here.
        """
        product = self._get(sku)

        # Validate everything before changing anything
        if name is not None:
            require_text(name, "Name")
        if reorder_point is not None:
            require_non_negative(reorder_point, "Reorder point")

        if name is not None:
            product.name = name
        if description is not None:
            product.description = description
        if reorder_point is not None:
            product.reorder_point = reorder_point

        logger.info("Updated product %s", sku)
        self._persist()
        return replace(product)

    def delete_product(self, sku: str) -> None:
        """Remove a product together with its whole transaction history.

        Products are deletable regardless of how much stock they hold.
        """
        self._get(sku)

        del self._products[sku]
        before = len(self._transactions)
        self._transactions = [t for t in self._transactions if t.product_sku != sku]
        logger.info(
            "Deleted product %s and %d transactions",
            sku,
            before - len(self._transactions),
        )
        self._persist()

    # --- Stock movements ------------------------------------------------------

    def add_stock(self, sku: str, quantity: int, notes: str | None = None) -> None:
        """Receive *quantity* units and record an Addition."""
        product = self._get(sku)
        qty = Quantity(quantity)

        product.receive(qty)
        self._record(sku, TransactionType.ADDITION, qty, notes)
        logger.info("Added %d to %s (now %d)", qty.value, sku, product.quantity)
        self._persist()

    def remove_stock(self, sku: str, quantity: int, notes: str | None = None) -> None:
        """Take *quantity* units out and record a Removal.

        Raises InsufficientStockError if fewer units are on hand.
        """
        product = self._get(sku)
        qty = Quantity(quantity)

        product.issue(qty)
        self._record(sku, TransactionType.REMOVAL, qty, notes)
        logger.info("Removed %d from %s (now %d)", qty.value, sku, product.quantity)
        if product.is_low_stock:
            logger.info(
                "%s is at or below its reorder point (%d <= %d)",
                sku,
                product.quantity,
                product.reorder_point,
            )
        self._persist()

    # --- Queries --------------------------------------------------------------

    def get_product(self, sku: str) -> Product:
        return replace(self._get(sku))

    def list_products(self) -> list[Product]:
        return [replace(p) for p in self._products.values()]

    def list_low_stock(self) -> list[Product]:
        """Products whose quantity is at or below their reorder point."""
        return [replace(p) for p in self._products.values() if p.is_low_stock]

    def get_transactions(self, sku: str) -> list[Transaction]:
        """Every transaction for *sku*, oldest first.

        An unknown SKU simply has no history; it is not an error.
        """
        return sorted(
            (t for t in self._transactions if t.product_sku == sku),
            key=lambda t: t.timestamp,
        )

    def get_transactions_in_range(
        self,
        sku: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Transaction]:
        """Transactions for *sku* with ``start <= timestamp <= end``, oldest first.

        Both bounds are inclusive; a bound left as None is open. An
        inverted range matches nothing.
        """
        return [
            t
            for t in self.get_transactions(sku)
            if (start is None or t.timestamp >= start)
            and (end is None or t.timestamp <= end)
        ]

    # --- Internal helpers -----------------------------------------------------

    def _get(self, sku: str) -> Product:
        product = self._products.get(sku)
        if product is None:
            raise ProductNotFoundError(sku)
        return product

    def _record(
        self,
        sku: str,
        transaction_type: TransactionType,
        quantity: Quantity,
        notes: str | None,
    ) -> None:
        self._transactions.append(
            Transaction.record(
                product_sku=sku,
                transaction_type=transaction_type,
                quantity=quantity,
                timestamp=self._clock(),
                notes=notes,
            )
        )

    def _persist(self) -> None:
        """Write both collections back in full."""
        try:
            self._storage.save_products(list(self._products.values()))
            self._storage.save_transactions(list(self._transactions))
        except StorageError:
            logger.error("Persist failed; in-memory state is ahead of storage")
            raise
