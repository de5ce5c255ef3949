"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import total_ordering

from storefront.domain.exceptions import InvalidQuantity, ValidationError

# One currency per deployment; see Settings.currency.
DEFAULT_CURRENCY = "INR"

_MINOR_UNIT = Decimal("0.01")


@total_ordering
@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Backed by Decimal; floats are rejected.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    @property
    def is_zero(self) -> bool:
        return self.amount == Decimal("0")

    @property
    def minor_units(self) -> int:
        """Amount in the smallest currency unit (paise, cents), as gateways expect."""
        return int((self.amount / _MINOR_UNIT).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.currency} {self.amount:.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal("0.00"), currency)

    @staticmethod
    def from_minor_units(units: int, currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal(units) * _MINOR_UNIT, currency)


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise InvalidQuantity(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise InvalidQuantity("Quantity must be positive")

    def __add__(self, other: int) -> Quantity:
        return Quantity(self.value + other)

    def __str__(self) -> str:
        return str(self.value)
