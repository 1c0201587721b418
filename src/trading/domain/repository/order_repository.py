"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from trading.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def find_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def insert(self, order: Order) -> None:
        """Persist a new order; assigns ``id`` and resets ``version`` to 0."""

    @abstractmethod
    def update(self, order: Order) -> int:
        """Version-checked update of the order status.

        Returns affected rows; 0 means stale.
        """

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order in insertion order."""
