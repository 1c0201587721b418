"""MerchantAccount aggregate: the seller's books."""

from __future__ import annotations

from dataclasses import dataclass, field

from trading.domain.exceptions import (
    InsufficientBalanceError,
    InvalidAmountError,
    ValidationError,
)
from trading.domain.model.value_objects import Money


@dataclass
class MerchantAccount:
    """Aggregate root for a merchant's revenue balance.

    Only completed orders credit the balance, which is what the daily
    settlement checks against realized sales.
    """

    id: int | None
    name: str
    balance: Money = field(default_factory=Money.zero)
    version: int = 0

    @staticmethod
    def create(name: str) -> MerchantAccount:
        if not name or not name.strip():
            raise ValidationError("Merchant name is required")
        return MerchantAccount(id=None, name=name.strip())

    def credit(self, amount: Money) -> None:
        if not amount.is_positive():
            raise InvalidAmountError(f"Credit amount must be positive, got {amount}")
        self.balance = self.balance + amount

    def debit(self, amount: Money) -> None:
        if not amount.is_positive():
            raise InvalidAmountError(f"Debit amount must be positive, got {amount}")
        if self.balance < amount:
            raise InsufficientBalanceError(
                f"Insufficient balance for merchant {self.name} "
                f"(need {amount}, have {self.balance})"
            )
        self.balance = self.balance - amount
