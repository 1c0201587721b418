"""SQLAlchemy implementation of UserAccountRepository."""

from __future__ import annotations

from decimal import Decimal

from trading.domain.model.user_account import UserAccount
from trading.domain.model.value_objects import Money
from trading.domain.repository.user_account_repository import UserAccountRepository
from trading.infrastructure.persistence.models import UserAccountRecord
from trading.infrastructure.persistence.sql_table_repository import SqlTableRepository


class SqlUserAccountRepository(SqlTableRepository, UserAccountRepository):

    record = UserAccountRecord
    natural_key = "username"
    mutable_columns = ("balance",)

    # --- UserAccountRepository interface --------------------------------------

    def find_by_username(self, username: str) -> UserAccount | None:
        return self._find_by("username", username)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(account: UserAccount) -> dict:
        return {
            "id": account.id,
            "username": account.username,
            "balance": str(account.balance.amount),
            "version": account.version,
        }

    @staticmethod
    def _to_domain(record: UserAccountRecord) -> UserAccount:
        return UserAccount(
            id=record.id,
            username=record.username,
            balance=Money(Decimal(record.balance)),
            version=record.version,
        )
