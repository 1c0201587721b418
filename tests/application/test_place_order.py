"""Integration tests for the PlaceOrder use case.

Runs against a real SQLite file, so every transaction, rollback and
version check is the real one.
"""

from decimal import Decimal

import pytest

from trading.domain.events import OrderCompleted, OrderPlaced
from trading.domain.exceptions import (
    ConcurrencyConflictError,
    InsufficientBalanceError,
    InsufficientStockError,
    InvalidQuantityError,
    MerchantNotFoundError,
    ProductNotFoundError,
    UserNotFoundError,
)
from trading.domain.model.order import OrderStatus
from trading.domain.model.product import Product
from trading.domain.model.value_objects import Money, Quantity
from tests.fakes import (
    BrokenOrderRepository,
    StaleProductRepository,
    build_system,
    exploding_handler,
)


def _setup(**kwargs):
    """Scenario setup: u1 holds 100.00, m1 lists sku1 at 10.00 x 10."""
    system = build_system(**kwargs)
    system.deposit.handle("u1", "100.00")
    system.add_stock.handle("m1", "sku1", "X", "10.00", 10)
    return system


def _only_order(system):
    orders = system.orders.list_all()
    assert len(orders) == 1
    return orders[0]


class TestPlaceOrderHappyPath:

    def test_completes_and_moves_money_and_stock(self):
        system = _setup()
        order = system.place_order.handle("u1", "sku1", 2)

        assert order.status == "COMPLETED"
        assert order.total_price == "20.00"
        assert order.username == "u1"
        assert order.merchant_name == "m1"
        assert order.sku == "sku1"

        product = system.products.find_by_sku("sku1")
        assert product.stock_quantity == Quantity.of(8)
        assert product.sold_quantity == Quantity.of(2)
        assert system.users.find_by_username("u1").balance == Money.of("80.00")
        assert system.merchants.find_by_name("m1").balance == Money.of("20.00")

    def test_persists_completed_order(self):
        system = _setup()
        order = system.place_order.handle("u1", "sku1", 2)

        saved = system.orders.find_by_id(order.id)
        assert saved.status == OrderStatus.COMPLETED
        assert saved.unit_price == Money.of("10.00")
        assert saved.quantity == Quantity.of(2)
        assert saved.created_at == system.clock.now()
        assert saved.version == 1

    def test_sequential_ids(self):
        system = _setup()
        first = system.place_order.handle("u1", "sku1", 1)
        second = system.place_order.handle("u1", "sku1", 1)
        assert second.id == first.id + 1

    def test_buying_the_last_units(self):
        system = _setup()
        system.place_order.handle("u1", "sku1", 10)
        product = system.products.find_by_sku("sku1")
        assert product.stock_quantity == Quantity.zero()
        assert product.sold_quantity == Quantity.of(10)

    def test_events_published_in_order(self):
        system = _setup()
        order = system.place_order.handle("u1", "sku1", 2)

        placed, completed = system.bus.get_history()
        assert isinstance(placed, OrderPlaced)
        assert isinstance(completed, OrderCompleted)
        assert placed.order_id == completed.order_id == order.id
        assert placed.username == "u1"
        assert placed.merchant_name == "m1"
        assert placed.sku == "sku1"
        assert placed.quantity == 2
        assert completed.total_price == Decimal("20.00")
        assert placed.occurred_on == system.clock.now()
        assert completed.occurred_on == system.clock.now()

    def test_subscriber_failure_does_not_abort(self):
        system = _setup()
        system.bus.subscribe(OrderPlaced, exploding_handler)
        system.bus.subscribe(OrderCompleted, exploding_handler)

        order = system.place_order.handle("u1", "sku1", 1)

        assert order.status == "COMPLETED"
        assert system.merchants.find_by_name("m1").balance == Money.of("10.00")


class TestPlaceOrderBusinessFailures:

    def test_insufficient_stock(self):
        system = _setup()
        with pytest.raises(InsufficientStockError):
            system.place_order.handle("u1", "sku1", 11)

        product = system.products.find_by_sku("sku1")
        assert product.stock_quantity == Quantity.of(10)
        assert product.sold_quantity == Quantity.zero()
        assert system.users.find_by_username("u1").balance == Money.of("100.00")
        assert system.merchants.find_by_name("m1").balance == Money.of("0.00")
        assert _only_order(system).status == OrderStatus.FAILED

    def test_insufficient_balance(self):
        system = _setup()
        system.deposit.handle("u2", "5.00")
        with pytest.raises(InsufficientBalanceError):
            system.place_order.handle("u2", "sku1", 1)

        assert system.users.find_by_username("u2").balance == Money.of("5.00")
        assert system.merchants.find_by_name("m1").balance.is_zero()
        assert system.products.find_by_sku("sku1").stock_quantity == Quantity.of(10)
        assert _only_order(system).status == OrderStatus.FAILED

    def test_failure_publishes_only_order_placed(self):
        system = _setup()
        with pytest.raises(InsufficientStockError):
            system.place_order.handle("u1", "sku1", 11)
        assert system.bus.get_history(OrderCompleted) == []
        assert len(system.bus.get_history(OrderPlaced)) == 1


class TestPlaceOrderLookups:

    def test_unknown_user(self):
        system = _setup()
        with pytest.raises(UserNotFoundError, match="nobody"):
            system.place_order.handle("nobody", "sku1", 1)
        assert system.orders.list_all() == []

    def test_unknown_product(self):
        system = _setup()
        with pytest.raises(ProductNotFoundError, match="nope"):
            system.place_order.handle("u1", "nope", 1)
        assert system.orders.list_all() == []

    def test_orphan_product(self):
        system = build_system()
        system.deposit.handle("u1", "100.00")
        ghost = Product.create("ghost", "Ghost", Money.of("1.00"), merchant_id=404)
        ghost.add_stock(Quantity.of(5))
        system.products.insert(ghost)
        with pytest.raises(MerchantNotFoundError):
            system.place_order.handle("u1", "ghost", 1)

    def test_non_positive_quantity(self):
        system = _setup()
        with pytest.raises(InvalidQuantityError):
            system.place_order.handle("u1", "sku1", 0)
        assert system.orders.list_all() == []


class TestPlaceOrderConcurrencyFailures:

    def test_stale_update_rolls_back_everything(self):
        system = _setup(product_repo_cls=StaleProductRepository)
        with pytest.raises(ConcurrencyConflictError):
            system.place_order.handle("u1", "sku1", 2)

        assert system.users.find_by_username("u1").balance == Money.of("100.00")
        assert system.merchants.find_by_name("m1").balance.is_zero()
        assert system.products.find_by_sku("sku1").sold_quantity == Quantity.zero()
        assert _only_order(system).status == OrderStatus.FAILED
        assert system.bus.get_history(OrderCompleted) == []

    def test_original_error_survives_failed_marking(self):
        system = _setup(order_repo_cls=BrokenOrderRepository)
        with pytest.raises(InsufficientStockError):
            system.place_order.handle("u1", "sku1", 11)
        # Marking failed itself failed, so the row keeps its CREATED status.
        assert _only_order(system).status == OrderStatus.CREATED
