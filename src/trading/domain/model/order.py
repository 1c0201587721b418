"""Order aggregate: one purchase of one product by one user.

The Order references its user, merchant and product by id only and
captures the product price at creation time, so later price changes
never alter a placed order.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from trading.domain.exceptions import (
    IllegalOrderTransitionError,
    IntegrityViolationError,
    InvalidQuantityError,
)
from trading.domain.model.merchant_account import MerchantAccount
from trading.domain.model.product import Product
from trading.domain.model.user_account import UserAccount
from trading.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    CREATED = "CREATED"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self is not OrderStatus.CREATED


@dataclass
class Order:
    """Aggregate root for a placed order.

    Use the ``Order.create()`` factory for new orders; it takes the price
    snapshot and computes the total. The ``__init__`` is intentionally
    simple so the repository can reconstitute persisted orders without
    re-validating.
    """

    id: int | None
    user_id: int
    merchant_id: int
    product_id: int
    quantity: Quantity
    unit_price: Money  # locked at order-creation time
    total_price: Money
    status: OrderStatus
    created_at: datetime
    version: int = 0

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        user: UserAccount,
        merchant: MerchantAccount,
        product: Product,
        quantity: Quantity,
        created_at: datetime | None = None,
    ) -> Order:
        if user.id is None or merchant.id is None or product.id is None:
            raise IntegrityViolationError("Orders can only reference persisted aggregates")
        if product.merchant_id != merchant.id:
            raise IntegrityViolationError(
                f"Product {product.sku} is listed by merchant #{product.merchant_id}, "
                f"not #{merchant.id}"
            )
        if quantity.value == 0:
            raise InvalidQuantityError("Order quantity must be positive")

        unit_price = product.price
        return Order(
            id=None,
            user_id=user.id,
            merchant_id=merchant.id,
            product_id=product.id,
            quantity=quantity,
            unit_price=unit_price,
            total_price=unit_price * quantity.value,
            status=OrderStatus.CREATED,
            created_at=created_at or datetime.now(timezone.utc),
        )

    # --- State transitions ----------------------------------------------------

    def mark_completed(self) -> None:
        """Transition CREATED -> COMPLETED."""
        if self.status != OrderStatus.CREATED:
            raise IllegalOrderTransitionError(
                f"Cannot complete order #{self.id}: current status is "
                f"{self.status.value}, expected CREATED"
            )
        self.status = OrderStatus.COMPLETED

    def mark_failed(self) -> None:
        """Transition CREATED|FAILED -> FAILED (idempotent on FAILED)."""
        if self.status == OrderStatus.COMPLETED:
            raise IllegalOrderTransitionError(
                f"Cannot fail order #{self.id}: it is already COMPLETED"
            )
        self.status = OrderStatus.FAILED
