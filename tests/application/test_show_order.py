"""Tests for the read-side use cases: ShowOrder and ListAccounts."""

import pytest

from trading.application.dto import OrderDTO
from trading.application.list_accounts import ListAccountsHandler
from trading.domain.exceptions import InsufficientStockError, OrderNotFoundError
from trading.domain.model.order import Order, OrderStatus
from trading.domain.model.value_objects import Money, Quantity
from tests.fakes import build_system


def _setup():
    system = build_system()
    system.deposit.handle("u1", "100.00")
    system.add_stock.handle("m1", "sku1", "Widget", "10.00", 10)
    return system


class TestShowOrder:

    def test_returns_dto_with_names(self):
        system = _setup()
        placed = system.place_order.handle("u1", "sku1", 3)

        dto = system.show_order.handle(placed.id)

        assert isinstance(dto, OrderDTO)
        assert dto == placed
        assert dto.username == "u1"
        assert dto.merchant_name == "m1"
        assert dto.sku == "sku1"
        assert dto.quantity == 3
        assert dto.unit_price == "10.00"
        assert dto.total_price == "30.00"
        assert dto.status == "COMPLETED"
        assert dto.created_at == "2024-01-15 12:00 UTC"

    def test_failed_order_is_shown(self):
        system = _setup()
        with pytest.raises(InsufficientStockError):
            system.place_order.handle("u1", "sku1", 11)
        [order] = system.orders.list_all()

        assert system.show_order.handle(order.id).status == "FAILED"

    def test_unknown_order(self):
        system = _setup()
        with pytest.raises(OrderNotFoundError, match="#99"):
            system.show_order.handle(99)

    def test_dangling_references_shown_as_unknown(self):
        system = build_system()
        order = Order(
            id=None,
            user_id=7,
            merchant_id=8,
            product_id=9,
            quantity=Quantity.of(1),
            unit_price=Money.of("1.00"),
            total_price=Money.of("1.00"),
            status=OrderStatus.CREATED,
            created_at=system.clock.now(),
        )
        system.orders.insert(order)

        dto = system.show_order.handle(order.id)
        assert (dto.username, dto.merchant_name, dto.sku) == ("?", "?", "?")
        assert dto.status == "CREATED"


class TestListAccounts:

    def test_lists_every_account_and_product(self):
        system = _setup()
        system.place_order.handle("u1", "sku1", 2)
        handler = ListAccountsHandler(
            system.users, system.merchants, system.products, system.db
        )

        view = handler.handle()

        [user] = view.users
        assert (user.username, user.balance) == ("u1", "80.00")
        [merchant] = view.merchants
        assert (merchant.name, merchant.balance) == ("m1", "20.00")
        [product] = view.products
        assert product.sku == "sku1"
        assert product.merchant_id == merchant.id
        assert (product.stock_quantity, product.sold_quantity) == (8, 2)

    def test_empty(self):
        system = build_system()
        view = ListAccountsHandler(
            system.users, system.merchants, system.products, system.db
        ).handle()
        assert (view.users, view.merchants, view.products) == ([], [], [])
