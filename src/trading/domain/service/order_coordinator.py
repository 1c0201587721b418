"""Domain service: Order Coordinator.

Coordinates the cross-aggregate mutation behind a purchase: the
product loses stock, the user pays, the merchant is credited and the
order completes. It lives in the domain layer because the ordering of
those steps is a core business rule, not just orchestration.

The two-phase approach (validate-then-mutate) ensures no aggregate is
touched when the purchase cannot go through. Mutation is in-memory
only; persisting the four aggregates atomically is the caller's job.
"""

from __future__ import annotations

from trading.domain.exceptions import (
    InsufficientBalanceError,
    InsufficientStockError,
    IntegrityViolationError,
)
from trading.domain.model.merchant_account import MerchantAccount
from trading.domain.model.order import Order
from trading.domain.model.product import Product
from trading.domain.model.user_account import UserAccount


class OrderCoordinator:

    def execute(
        self,
        order: Order,
        user: UserAccount,
        merchant: MerchantAccount,
        product: Product,
    ) -> None:
        self._check_links(order, user, merchant, product)

        # Phase 1: validate
        if product.stock_quantity < order.quantity:
            raise InsufficientStockError(
                f"Insufficient stock for {product.sku} "
                f"(need {order.quantity}, have {product.stock_quantity})"
            )
        if user.balance < order.total_price:
            raise InsufficientBalanceError(
                f"Insufficient balance for {user.username} "
                f"(need {order.total_price}, have {user.balance})"
            )

        # Phase 2: mutate
        product.sell(order.quantity)
        user.withdraw(order.total_price)
        merchant.credit(order.total_price)
        order.mark_completed()

    @staticmethod
    def _check_links(
        order: Order,
        user: UserAccount,
        merchant: MerchantAccount,
        product: Product,
    ) -> None:
        if (
            order.user_id != user.id
            or order.merchant_id != merchant.id
            or order.product_id != product.id
            or product.merchant_id != merchant.id
        ):
            raise IntegrityViolationError(
                f"Order #{order.id} does not reference the aggregates it was given"
            )
