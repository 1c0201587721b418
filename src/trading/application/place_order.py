"""Application service: Place Order use case.

Orchestrates the flow between repositories, the domain service and the
event bus. This is the only place that coordinates all four aggregates
(user, merchant, product, order) under one transaction.
"""

from __future__ import annotations

import logging
from contextlib import nullcontext

from trading.application.advisory_lock import AdvisoryLock
from trading.application.dto import OrderDTO
from trading.domain.clock import Clock, SystemClock
from trading.domain.events import EventBus, OrderCompleted, OrderPlaced
from trading.domain.exceptions import (
    ConcurrencyConflictError,
    MerchantNotFoundError,
    ProductNotFoundError,
    UserNotFoundError,
)
from trading.domain.model.merchant_account import MerchantAccount
from trading.domain.model.order import Order
from trading.domain.model.product import Product
from trading.domain.model.user_account import UserAccount
from trading.domain.model.value_objects import Quantity
from trading.domain.repository.merchant_account_repository import (
    MerchantAccountRepository,
)
from trading.domain.repository.order_repository import OrderRepository
from trading.domain.repository.product_repository import ProductRepository
from trading.domain.repository.transaction_manager import TransactionManager
from trading.domain.repository.user_account_repository import UserAccountRepository
from trading.domain.service.order_coordinator import OrderCoordinator

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        user_repo: UserAccountRepository,
        merchant_repo: MerchantAccountRepository,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        transactions: TransactionManager,
        event_bus: EventBus,
        coordinator: OrderCoordinator | None = None,
        clock: Clock | None = None,
        sku_lock: AdvisoryLock | None = None,
    ) -> None:
        self._user_repo = user_repo
        self._merchant_repo = merchant_repo
        self._product_repo = product_repo
        self._order_repo = order_repo
        self._transactions = transactions
        self._event_bus = event_bus
        self._coordinator = coordinator or OrderCoordinator()
        self._clock = clock or SystemClock()
        self._sku_lock = sku_lock

    def handle(self, username: str, sku: str, quantity: int) -> OrderDTO:
        """Place an order for *quantity* units of *sku*.

        Steps:
        1. Load user, product and the product's merchant.
        2. Create the order (price snapshot) and persist it to get an id.
        3. Announce ``OrderPlaced``.
        4. In one transaction: run the coordinator, then version-check
           update product, user, merchant and order.
        5. After commit, announce ``OrderCompleted``.

        If step 4 fails the order is marked FAILED in a separate
        transaction and the original error is re-raised. Conflicts are
        not retried here.
        """
        lock = self._sku_lock.hold(f"sku:{sku}") if self._sku_lock else nullcontext()
        with lock:
            return self._place(username, sku, quantity)

    def _place(self, username: str, sku: str, quantity: int) -> OrderDTO:
        user = self._user_repo.find_by_username(username)
        if user is None:
            raise UserNotFoundError(f"User not found: '{username}'")

        product = self._product_repo.find_by_sku(sku)
        if product is None:
            raise ProductNotFoundError(f"Product not found: '{sku}'")

        merchant = self._merchant_repo.find_by_id(product.merchant_id)
        if merchant is None:
            logger.error(
                "Product %s references missing merchant #%s", sku, product.merchant_id
            )
            raise MerchantNotFoundError(f"Merchant not found: #{product.merchant_id}")

        order = Order.create(
            user, merchant, product, Quantity.of(quantity), created_at=self._clock.now()
        )
        self._order_repo.insert(order)

        self._event_bus.publish(
            OrderPlaced(
                order_id=order.id,
                username=user.username,
                merchant_name=merchant.name,
                sku=product.sku,
                quantity=order.quantity.value,
                total_price=order.total_price.amount,
                occurred_on=self._clock.now(),
            )
        )

        try:
            with self._transactions.begin():
                self._coordinator.execute(order, user, merchant, product)
                self._save(self._product_repo, product, f"product {product.sku}")
                self._save(self._user_repo, user, f"user {user.username}")
                self._save(self._merchant_repo, merchant, f"merchant {merchant.name}")
                self._save(self._order_repo, order, f"order #{order.id}")
        except Exception as exc:
            logger.info("Order #%s failed: %s", order.id, exc)
            self._mark_failed(order.id)
            raise

        logger.info(
            "Order #%s completed: %s x %s for %s (total=%s)",
            order.id, order.quantity, product.sku, username, order.total_price,
        )
        self._event_bus.publish(
            OrderCompleted(
                order_id=order.id,
                username=user.username,
                merchant_name=merchant.name,
                sku=product.sku,
                total_price=order.total_price.amount,
                occurred_on=self._clock.now(),
            )
        )
        return self._to_dto(order, user, merchant, product)

    @staticmethod
    def _to_dto(
        order: Order, user: UserAccount, merchant: MerchantAccount, product: Product
    ) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            username=user.username,
            merchant_name=merchant.name,
            sku=product.sku,
            quantity=order.quantity.value,
            unit_price=str(order.unit_price),
            total_price=str(order.total_price),
            status=order.status.value,
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )

    @staticmethod
    def _save(repo, aggregate, label: str) -> None:
        if repo.update(aggregate) == 0:
            raise ConcurrencyConflictError(f"Stale {label}: modified concurrently")

    def _mark_failed(self, order_id: int) -> None:
        """Best effort: a failure here is logged, never raised."""
        try:
            with self._transactions.begin():
                # Reload: the in-memory order may already say COMPLETED.
                order = self._order_repo.find_by_id(order_id)
                if order is None:
                    logger.error("Cannot mark missing order #%s as FAILED", order_id)
                    return
                order.mark_failed()
                self._save(self._order_repo, order, f"order #{order_id}")
        except Exception:
            logger.exception("Could not mark order #%s as FAILED", order_id)
