"""Domain-level exceptions.

Every rule violation and storage failure is a subclass of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class InvalidInputError(DomainException):
    """A precondition on caller-supplied data was violated."""


class ProductNotFoundError(DomainException):
    """No live product has the requested SKU."""

    def __init__(self, sku: str) -> None:
        super().__init__(f"Product '{sku}' not found")
        self.sku = sku


class DuplicateSkuError(DomainException):
    """A product with the requested SKU already exists."""

    def __init__(self, sku: str) -> None:
        super().__init__(f"Product with SKU '{sku}' already exists")
        self.sku = sku


class InsufficientStockError(DomainException):
    """A removal asked for more units than are in stock."""

    def __init__(self, sku: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for '{sku}' "
            f"(requested {requested}, available {available})"
        )
        self.sku = sku
        self.requested = requested
        self.available = available


class StorageError(DomainException):
    """The persistence collaborator could not complete a read or write."""


class StorageReadError(StorageError):
    """Stored data could not be read."""


class StorageWriteError(StorageError):
    """Data could not be written to storage."""


class StorageParseError(StorageError):
    """Stored data was read but is malformed."""
