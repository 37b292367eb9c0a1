"""Product aggregate.

A product is identified by its SKU. Its stock level only ever moves
through ``receive()`` and ``issue()``, which the inventory service pairs
with a ledger transaction.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from stockctl.domain.exceptions import InsufficientStockError, InvalidInputError
from stockctl.domain.model.value_objects import Quantity


def require_text(value: str, field_name: str) -> None:
    if not isinstance(value, str):
        raise InvalidInputError(
            f"{field_name} must be a string, got {type(value).__name__}"
        )
    if not value.strip():
        raise InvalidInputError(f"{field_name} cannot be empty")


def require_non_negative(value: int, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(
            f"{field_name} must be an integer, got {type(value).__name__}"
        )
    if value < 0:
        raise InvalidInputError(f"{field_name} cannot be negative, got {value}")


@dataclass
class Product:
    """Aggregate root for a stocked product.

    Invariants:
    - ``sku`` and ``name`` are never blank
    - ``quantity`` and ``reorder_point`` are never negative

    Use ``Product.create()`` for new products. The ``__init__`` is kept
    plain so storage can reconstitute persisted records as they are.
    """

    id: str
    sku: str
    name: str
    description: str
    quantity: int
    reorder_point: int

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        sku: str,
        name: str,
        description: str = "",
        initial_quantity: int = 0,
        reorder_point: int = 0,
    ) -> Product:
        """Create a new product with a fresh id, enforcing all invariants."""
        require_text(sku, "SKU")
        require_text(name, "Name")
        require_non_negative(initial_quantity, "Initial quantity")
        require_non_negative(reorder_point, "Reorder point")
        return Product(
            id=str(uuid.uuid4()),
            sku=sku,
            name=name,
            description=description or "",
            quantity=initial_quantity,
            reorder_point=reorder_point,
        )

    # --- Stock movements ------------------------------------------------------

    def receive(self, quantity: Quantity) -> None:
        """Add incoming stock."""
        self.quantity += quantity.value

    def issue(self, quantity: Quantity) -> None:
        """Take stock out.

        Raises InsufficientStockError, leaving the level unchanged, if
        more is requested than is on hand.
        """
        if quantity.value > self.quantity:
            raise InsufficientStockError(self.sku, quantity.value, self.quantity)
        self.quantity -= quantity.value

    # --- Computed properties --------------------------------------------------

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.reorder_point
