"""Application service: Show Order use case (query)."""

from __future__ import annotations

from trading.application.dto import OrderDTO
from trading.domain.exceptions import OrderNotFoundError
from trading.domain.model.order import Order
from trading.domain.repository.merchant_account_repository import (
    MerchantAccountRepository,
)
from trading.domain.repository.order_repository import OrderRepository
from trading.domain.repository.product_repository import ProductRepository
from trading.domain.repository.transaction_manager import TransactionManager
from trading.domain.repository.user_account_repository import UserAccountRepository

_MISSING = "?"


class ShowOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        user_repo: UserAccountRepository,
        merchant_repo: MerchantAccountRepository,
        product_repo: ProductRepository,
        transactions: TransactionManager,
    ) -> None:
        self._order_repo = order_repo
        self._user_repo = user_repo
        self._merchant_repo = merchant_repo
        self._product_repo = product_repo
        self._transactions = transactions

    def handle(self, order_id: int) -> OrderDTO:
        with self._transactions.begin(read_only=True):
            order = self._order_repo.find_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(f"Order #{order_id} not found")
            user = self._user_repo.find_by_id(order.user_id)
            merchant = self._merchant_repo.find_by_id(order.merchant_id)
            product = self._product_repo.find_by_id(order.product_id)

        return self._to_dto(
            order,
            username=user.username if user else _MISSING,
            merchant_name=merchant.name if merchant else _MISSING,
            sku=product.sku if product else _MISSING,
        )

    @staticmethod
    def _to_dto(order: Order, username: str, merchant_name: str, sku: str) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            username=username,
            merchant_name=merchant_name,
            sku=sku,
            quantity=order.quantity.value,
            unit_price=str(order.unit_price),
            total_price=str(order.total_price),
            status=order.status.value,
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )
