"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockctl.domain.exceptions import InvalidInputError


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that a stock movement can never be for zero
    or negative units.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidInputError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise InvalidInputError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)
