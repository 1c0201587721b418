"""Tests for the in-process event bus and the logging listener."""

import logging
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

from trading.domain.events import DomainEvent, OrderCompleted, OrderPlaced
from trading.infrastructure.events.in_process_event_bus import InProcessEventBus
from trading.infrastructure.events.order_event_listener import OrderEventListener
from tests.fakes import exploding_handler


def _placed(order_id=1):
    return OrderPlaced(
        order_id=order_id,
        username="u1",
        merchant_name="m1",
        sku="sku1",
        quantity=2,
        total_price=Decimal("20.00"),
    )


def _completed(order_id=1):
    return OrderCompleted(
        order_id=order_id,
        username="u1",
        merchant_name="m1",
        sku="sku1",
        total_price=Decimal("20.00"),
    )


class TestInProcessEventBus:

    def test_delivers_to_subscribers_in_order(self):
        bus = InProcessEventBus()
        seen = []
        bus.subscribe(OrderPlaced, lambda e: seen.append(("first", e.order_id)))
        bus.subscribe(OrderPlaced, lambda e: seen.append(("second", e.order_id)))

        bus.publish(_placed(7))

        assert seen == [("first", 7), ("second", 7)]

    def test_only_matching_type(self):
        bus = InProcessEventBus()
        seen = []
        bus.subscribe(OrderCompleted, seen.append)
        bus.publish(_placed())
        assert seen == []

    def test_base_type_receives_everything(self):
        bus = InProcessEventBus()
        seen = []
        bus.subscribe(DomainEvent, seen.append)
        bus.publish(_placed())
        bus.publish(_completed())
        assert [type(e) for e in seen] == [OrderPlaced, OrderCompleted]

    def test_handler_error_is_logged_not_raised(self, caplog):
        bus = InProcessEventBus()
        seen = []
        bus.subscribe(OrderPlaced, exploding_handler)
        bus.subscribe(OrderPlaced, seen.append)

        with caplog.at_level(logging.ERROR):
            bus.publish(_placed())

        assert len(seen) == 1
        assert "Handler error for event=OrderPlaced" in caplog.text

    def test_history(self):
        bus = InProcessEventBus()
        bus.publish(_placed())
        bus.publish(_completed())
        assert len(bus.get_history()) == 2
        assert [e.order_id for e in bus.get_history(OrderCompleted)] == [1]

    def test_publish_without_subscribers(self):
        bus = InProcessEventBus()
        bus.publish(_placed())
        assert len(bus.get_history()) == 1

    def test_executor_delivery(self):
        bus = InProcessEventBus(executor=ThreadPoolExecutor(max_workers=2))
        seen = []
        bus.subscribe(OrderPlaced, seen.append)
        bus.subscribe(OrderPlaced, exploding_handler)

        for order_id in range(5):
            bus.publish(_placed(order_id))
        bus.shutdown()

        assert sorted(e.order_id for e in seen) == [0, 1, 2, 3, 4]

    def test_publish_after_shutdown_is_logged(self, caplog):
        bus = InProcessEventBus(executor=ThreadPoolExecutor(max_workers=1))
        bus.subscribe(OrderPlaced, lambda e: None)
        bus.shutdown()

        with caplog.at_level(logging.ERROR):
            bus.publish(_placed())

        assert "Could not schedule delivery of OrderPlaced" in caplog.text

    def test_occurred_on_defaults_to_now(self):
        event = _placed()
        assert event.occurred_on is not None
        assert event.occurred_on.tzinfo is not None


class TestOrderEventListener:

    def test_logs_both_events(self, caplog):
        bus = InProcessEventBus()
        OrderEventListener().register(bus)

        with caplog.at_level(logging.INFO, logger="trading.infrastructure.events"):
            bus.publish(_placed(3))
            bus.publish(_completed(3))

        assert "Order placed: order_id=3" in caplog.text
        assert "Order completed: order_id=3" in caplog.text
        assert "merchant=m1" in caplog.text
