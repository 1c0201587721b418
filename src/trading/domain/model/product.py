"""Product aggregate.

A product is listed by exactly one merchant and tracks two counters:
units still in stock and units sold. Every unit that leaves stock
shows up in ``sold_quantity``, so their sum is the total ever stocked.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from trading.domain.exceptions import (
    InsufficientStockError,
    InvalidAmountError,
    InvalidQuantityError,
    ProductBelongsToAnotherMerchantError,
    ValidationError,
)
from trading.domain.model.value_objects import Money, Quantity


@dataclass
class Product:
    """A product in a merchant's catalog.

    ``merchant_id`` is bound at creation and never rewritten by the
    repository. The merchant itself is referenced by id only.
    """

    id: int | None
    sku: str
    name: str
    price: Money
    merchant_id: int
    stock_quantity: Quantity = field(default_factory=Quantity.zero)
    sold_quantity: Quantity = field(default_factory=Quantity.zero)
    version: int = 0

    @staticmethod
    def create(sku: str, name: str, price: Money, merchant_id: int | None) -> Product:
        """Create a new, empty listing for *merchant_id*."""
        if not sku or not sku.strip():
            raise ValidationError("SKU is required")
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not price.is_positive():
            raise InvalidAmountError(f"Product price must be greater than zero, got {price}")
        if merchant_id is None:
            raise ValidationError("Product must belong to a persisted merchant")
        return Product(
            id=None,
            sku=sku.strip(),
            name=name.strip(),
            price=price,
            merchant_id=merchant_id,
        )

    @property
    def total_stocked(self) -> Quantity:
        return self.stock_quantity + self.sold_quantity

    def is_listed_by(self, merchant_id: int | None) -> bool:
        return self.merchant_id == merchant_id

    def ensure_listed_by(self, merchant_id: int | None) -> None:
        if not self.is_listed_by(merchant_id):
            raise ProductBelongsToAnotherMerchantError(
                f"Product {self.sku} belongs to another merchant"
            )

    def add_stock(self, quantity: Quantity) -> None:
        """Add units to stock. Adding zero is a no-op."""
        if quantity.value == 0:
            return
        self.stock_quantity = self.stock_quantity + quantity

    def sell(self, quantity: Quantity) -> None:
        """Move *quantity* units from stock to sold."""
        if quantity.value == 0:
            raise InvalidQuantityError("Sell quantity must be positive")
        if self.stock_quantity < quantity:
            raise InsufficientStockError(
                f"Insufficient stock for {self.sku} "
                f"(need {quantity}, have {self.stock_quantity})"
            )
        if self.stock_quantity == quantity:
            self.stock_quantity = Quantity.zero()
        else:
            self.stock_quantity = self.stock_quantity - quantity
        self.sold_quantity = self.sold_quantity + quantity
