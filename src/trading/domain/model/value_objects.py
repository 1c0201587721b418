"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from trading.domain.exceptions import (
    InvalidAmountError,
    InvalidQuantityError,
    QuantityOverflowError,
)

_CENTS = Decimal("0.01")

# Quantities are stored as BIGINT.
MAX_QUANTITY = 2**63 - 1


@dataclass(frozen=True)
class Money:
    """Monetary amount with exactly two fractional digits.

    Finer amounts are rounded half-up on construction. The system is
    single-currency, so no currency travels with the amount. Negative
    values are representable (settlement differences); account balances
    guard their own sign.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise InvalidAmountError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise InvalidAmountError(f"Money amount must be finite, got {self.amount}")
        try:
            normalized = self.amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
        except InvalidOperation as exc:
            raise InvalidAmountError(f"Money amount out of range: {self.amount}") from exc
        object.__setattr__(self, "amount", normalized)

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __sub__(self, other: Money) -> Money:
        return Money(self.amount - other.amount)

    def __mul__(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        if factor < 0:
            raise InvalidAmountError(f"Money multiplier cannot be negative, got {factor}")
        return Money(self.amount * factor)

    def __lt__(self, other: Money) -> bool:
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        return self.amount >= other.amount

    # --- Sign tests -----------------------------------------------------------

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_negative(self) -> bool:
        return self.amount < 0

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(amount: str | int | Decimal | None) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        if amount is None:
            raise InvalidAmountError("Money amount is required")
        if isinstance(amount, float):
            # Floats are only accepted through their shortest repr.
            amount = repr(amount)
        try:
            return Money(Decimal(str(amount).strip()))
        except (InvalidOperation, ValueError) as exc:
            raise InvalidAmountError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0"))


@dataclass(frozen=True, order=True)
class Quantity:
    """A non-negative 64-bit integer count of units."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidQuantityError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 0:
            raise InvalidQuantityError(f"Quantity cannot be negative, got {self.value}")
        if self.value > MAX_QUANTITY:
            raise QuantityOverflowError(f"Quantity {self.value} exceeds {MAX_QUANTITY}")

    def __add__(self, other: Quantity) -> Quantity:
        result = self.value + other.value
        if result > MAX_QUANTITY:
            raise QuantityOverflowError(f"{self.value} + {other.value} overflows")
        return Quantity(result)

    def __sub__(self, other: Quantity) -> Quantity:
        """Subtract, leaving a strictly positive result.

        Reducing a count to zero is done explicitly by the caller
        (see ``Product.sell``).
        """
        if self.value <= other.value:
            raise InvalidQuantityError(
                f"Cannot subtract {other.value} from {self.value}: "
                f"result must stay positive"
            )
        return Quantity(self.value - other.value)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(value: int) -> Quantity:
        """Strictly positive quantity (what an order asks for)."""
        quantity = Quantity(value)
        if quantity.value == 0:
            raise InvalidQuantityError("Quantity must be positive")
        return quantity

    @staticmethod
    def of_non_negative(value: int) -> Quantity:
        return Quantity(value)

    @staticmethod
    def zero() -> Quantity:
        return Quantity(0)
