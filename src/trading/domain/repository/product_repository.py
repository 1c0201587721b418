"""Abstract repository for Product aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from trading.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def find_by_sku(self, sku: str) -> Product | None:
        """Return the product with this SKU, or None."""

    @abstractmethod
    def find_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def insert(self, product: Product) -> None:
        """Persist a new product; assigns ``id`` and resets ``version`` to 0."""

    @abstractmethod
    def insert_if_absent(self, product: Product) -> Product:
        """Insert unless the SKU exists; return whichever row is stored."""

    @abstractmethod
    def update(self, product: Product) -> int:
        """Version-checked update of the stock counters.

        ``merchant_id`` is never written after insert.
        """

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in insertion order."""
