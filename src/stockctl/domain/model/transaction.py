"""Transaction record: one stock movement in the ledger.

Transactions are immutable once recorded. The ledger only ever grows,
except when a product is deleted and its history goes with it.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from stockctl.domain.model.value_objects import Quantity


class TransactionType(Enum):
    ADDITION = "Addition"
    REMOVAL = "Removal"


@dataclass(frozen=True)
class Transaction:
    """A single addition to or removal from a product's stock.

    ``product_sku`` is a lookup key, not a reference: it is captured at
    recording time.
    """

    id: str
    product_sku: str
    transaction_type: TransactionType
    quantity: int
    timestamp: datetime  # always timezone-aware UTC
    notes: str | None = None

    @staticmethod
    def record(
        product_sku: str,
        transaction_type: TransactionType,
        quantity: Quantity,
        timestamp: datetime,
        notes: str | None = None,
    ) -> Transaction:
        """Record a new movement with a fresh id."""
        return Transaction(
            id=str(uuid.uuid4()),
            product_sku=product_sku,
            transaction_type=transaction_type,
            quantity=quantity.value,
            timestamp=timestamp,
            notes=notes,
        )
