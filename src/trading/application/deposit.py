"""Application service: Deposit use case.

The user account is created on first reference by username.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from trading.application.dto import UserAccountDTO
from trading.domain.exceptions import ConcurrencyConflictError
from trading.domain.model.user_account import UserAccount
from trading.domain.model.value_objects import Money
from trading.domain.repository.transaction_manager import TransactionManager
from trading.domain.repository.user_account_repository import UserAccountRepository

logger = logging.getLogger(__name__)


class DepositHandler:

    def __init__(
        self,
        user_repo: UserAccountRepository,
        transactions: TransactionManager,
    ) -> None:
        self._user_repo = user_repo
        self._transactions = transactions

    def handle(self, username: str, amount: str | int | Decimal) -> UserAccountDTO:
        """Add *amount* to the user's balance, opening the account if needed."""
        deposit = Money.of(amount)

        with self._transactions.begin():
            account = self._user_repo.find_by_username(username)
            if account is None:
                account = self._user_repo.insert_if_absent(UserAccount.create(username))

            account.deposit(deposit)
            if self._user_repo.update(account) == 0:
                raise ConcurrencyConflictError(f"User {username} was modified concurrently")

        logger.info("Deposited %s for %s (balance=%s)", deposit, username, account.balance)
        return self._to_dto(account)

    @staticmethod
    def _to_dto(account: UserAccount) -> UserAccountDTO:
        return UserAccountDTO(
            id=account.id,  # type: ignore[arg-type]
            username=account.username,
            balance=str(account.balance),
        )
