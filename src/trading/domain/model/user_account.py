"""UserAccount aggregate: the buyer's spendable balance."""

from __future__ import annotations

from dataclasses import dataclass, field

from trading.domain.exceptions import (
    InsufficientBalanceError,
    InvalidAmountError,
    ValidationError,
)
from trading.domain.model.value_objects import Money


@dataclass
class UserAccount:
    """Aggregate root for a user's funds.

    Invariants:
    - ``username`` is non-empty and unique (enforced by the repository)
    - ``balance`` is never negative
    """

    id: int | None
    username: str
    balance: Money = field(default_factory=Money.zero)
    version: int = 0

    @staticmethod
    def create(username: str) -> UserAccount:
        """Open a new, empty account."""
        if not username or not username.strip():
            raise ValidationError("Username is required")
        return UserAccount(id=None, username=username.strip())

    def deposit(self, amount: Money) -> None:
        if not amount.is_positive():
            raise InvalidAmountError(f"Deposit amount must be positive, got {amount}")
        self.balance = self.balance + amount

    def withdraw(self, amount: Money) -> None:
        if not amount.is_positive():
            raise InvalidAmountError(f"Withdraw amount must be positive, got {amount}")
        if self.balance < amount:
            raise InsufficientBalanceError(
                f"Insufficient balance for {self.username} "
                f"(need {amount}, have {self.balance})"
            )
        self.balance = self.balance - amount
