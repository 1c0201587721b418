"""Abstract repository for UserAccount aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure
layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from trading.domain.model.user_account import UserAccount


class UserAccountRepository(ABC):

    @abstractmethod
    def find_by_username(self, username: str) -> UserAccount | None:
        """Return the account with this username, or None."""

    @abstractmethod
    def find_by_id(self, account_id: int) -> UserAccount | None:
        """Return an account by its ID, or None if not found."""

    @abstractmethod
    def insert(self, account: UserAccount) -> None:
        """Persist a new account; assigns ``id`` and resets ``version`` to 0."""

    @abstractmethod
    def insert_if_absent(self, account: UserAccount) -> UserAccount:
        """Insert unless the username exists; return whichever row is stored."""

    @abstractmethod
    def update(self, account: UserAccount) -> int:
        """Version-checked update. Returns affected rows; 0 means stale."""

    @abstractmethod
    def list_all(self) -> list[UserAccount]:
        """Return every account in insertion order."""
