"""SQLAlchemy implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from trading.domain.model.order import Order, OrderStatus
from trading.domain.model.value_objects import Money, Quantity
from trading.domain.repository.order_repository import OrderRepository
from trading.infrastructure.persistence.models import OrderRecord
from trading.infrastructure.persistence.sql_table_repository import SqlTableRepository


class SqlOrderRepository(SqlTableRepository, OrderRepository):

    record = OrderRecord
    # Price snapshot, references and created_at never change after insert.
    mutable_columns = ("status",)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "merchant_id": order.merchant_id,
            "product_id": order.product_id,
            "quantity": order.quantity.value,
            "unit_price": str(order.unit_price.amount),
            "total_price": str(order.total_price.amount),
            "status": order.status.value,
            "created_at": order.created_at.astimezone(timezone.utc).isoformat(),
            "version": order.version,
        }

    @staticmethod
    def _to_domain(record: OrderRecord) -> Order:
        return Order(
            id=record.id,
            user_id=record.user_id,
            merchant_id=record.merchant_id,
            product_id=record.product_id,
            quantity=Quantity.of(record.quantity),
            unit_price=Money(Decimal(record.unit_price)),
            total_price=Money(Decimal(record.total_price)),
            status=OrderStatus(record.status),
            created_at=datetime.fromisoformat(record.created_at),
            version=record.version,
        )
