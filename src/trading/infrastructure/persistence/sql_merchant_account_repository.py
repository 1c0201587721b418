"""SQLAlchemy implementation of MerchantAccountRepository."""

from __future__ import annotations

from decimal import Decimal

from trading.domain.model.merchant_account import MerchantAccount
from trading.domain.model.value_objects import Money
from trading.domain.repository.merchant_account_repository import (
    MerchantAccountRepository,
)
from trading.infrastructure.persistence.models import MerchantAccountRecord
from trading.infrastructure.persistence.sql_table_repository import SqlTableRepository


class SqlMerchantAccountRepository(SqlTableRepository, MerchantAccountRepository):

    record = MerchantAccountRecord
    natural_key = "name"
    mutable_columns = ("balance",)

    # --- MerchantAccountRepository interface ----------------------------------

    def find_by_name(self, name: str) -> MerchantAccount | None:
        return self._find_by("name", name)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(merchant: MerchantAccount) -> dict:
        return {
            "id": merchant.id,
            "name": merchant.name,
            "balance": str(merchant.balance.amount),
            "version": merchant.version,
        }

    @staticmethod
    def _to_domain(record: MerchantAccountRecord) -> MerchantAccount:
        return MerchantAccount(
            id=record.id,
            name=record.name,
            balance=Money(Decimal(record.balance)),
            version=record.version,
        )
