"""Abstract repository for MerchantAccount aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from trading.domain.model.merchant_account import MerchantAccount


class MerchantAccountRepository(ABC):

    @abstractmethod
    def find_by_name(self, name: str) -> MerchantAccount | None:
        """Return the merchant with this name, or None."""

    @abstractmethod
    def find_by_id(self, merchant_id: int) -> MerchantAccount | None:
        """Return a merchant by its ID, or None if not found."""

    @abstractmethod
    def insert(self, merchant: MerchantAccount) -> None:
        """Persist a new merchant; assigns ``id`` and resets ``version`` to 0."""

    @abstractmethod
    def insert_if_absent(self, merchant: MerchantAccount) -> MerchantAccount:
        """Insert unless the name exists; return whichever row is stored."""

    @abstractmethod
    def update(self, merchant: MerchantAccount) -> int:
        """Version-checked update. Returns affected rows; 0 means stale."""

    @abstractmethod
    def list_all(self) -> list[MerchantAccount]:
        """Return every merchant in insertion order."""
