"""Abstract persistence collaborator for the inventory.

Defined in the domain layer so the domain never depends on
infrastructure. Products and transactions are stored as two
independent collections, each read and written as a whole.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockctl.domain.model.product import Product
from stockctl.domain.model.transaction import Transaction


class InventoryStorage(ABC):

    @abstractmethod
    def load_products(self) -> list[Product]:
        """Return every stored product; empty if nothing was stored yet.

        Raises StorageError on unreadable or malformed data.
        """

    @abstractmethod
    def load_transactions(self) -> list[Transaction]:
        """Return every stored transaction in recorded order."""

    @abstractmethod
    def save_products(self, products: list[Product]) -> None:
        """Overwrite the stored products with *products*."""

    @abstractmethod
    def save_transactions(self, transactions: list[Transaction]) -> None:
        """Overwrite the stored transactions with *transactions*."""
