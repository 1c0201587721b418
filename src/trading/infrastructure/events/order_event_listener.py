"""Logging subscriber for order events.

Logging is naturally idempotent, so redelivery is harmless.
"""

from __future__ import annotations

import logging

from trading.domain.events import OrderCompleted, OrderPlaced
from trading.infrastructure.events.in_process_event_bus import InProcessEventBus

logger = logging.getLogger(__name__)


class OrderEventListener:

    def register(self, bus: InProcessEventBus) -> None:
        bus.subscribe(OrderPlaced, self.on_order_placed)
        bus.subscribe(OrderCompleted, self.on_order_completed)

    def on_order_placed(self, event: OrderPlaced) -> None:
        logger.info(
            "Order placed: order_id=%s username=%s sku=%s quantity=%s total_price=%s",
            event.order_id, event.username, event.sku, event.quantity, event.total_price,
        )

    def on_order_completed(self, event: OrderCompleted) -> None:
        logger.info(
            "Order completed: order_id=%s username=%s merchant=%s sku=%s total_price=%s",
            event.order_id, event.username, event.merchant_name, event.sku,
            event.total_price,
        )
