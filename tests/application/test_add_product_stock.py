"""Integration tests for the AddProductStock use case."""

import pytest

from trading.domain.exceptions import (
    InvalidAmountError,
    InvalidQuantityError,
    ProductBelongsToAnotherMerchantError,
)
from trading.domain.model.value_objects import Quantity
from tests.fakes import build_system


class TestAddProductStockHappyPath:

    def test_creates_merchant_and_product(self):
        system = build_system()
        product = system.add_stock.handle("m1", "sku1", "X", "10.00", 10)

        merchant = system.merchants.find_by_name("m1")
        assert merchant is not None
        assert merchant.balance.is_zero()
        assert product.merchant_id == merchant.id
        assert product.price == "10.00"
        assert product.stock_quantity == 10
        assert product.sold_quantity == 0

    def test_restock_adds_up(self):
        system = build_system()
        system.add_stock.handle("m1", "sku1", "X", "10.00", 10)
        product = system.add_stock.handle("m1", "sku1", "X", "10.00", 5)
        assert product.stock_quantity == 15
        assert system.products.find_by_sku("sku1").stock_quantity == Quantity.of(15)
        assert len(system.merchants.list_all()) == 1

    def test_zero_quantity_lists_product_without_stock(self):
        system = build_system()
        product = system.add_stock.handle("m1", "sku1", "X", "10.00", 0)
        assert product.stock_quantity == 0

    def test_restock_keeps_original_price(self):
        system = build_system()
        system.add_stock.handle("m1", "sku1", "X", "10.00", 1)
        product = system.add_stock.handle("m1", "sku1", "Renamed", "12.00", 1)
        assert product.price == "10.00"
        assert product.name == "X"


class TestAddProductStockValidation:

    def test_sku_of_other_merchant_rejected(self):
        system = build_system()
        system.add_stock.handle("m1", "sku1", "X", "10.00", 10)

        with pytest.raises(ProductBelongsToAnotherMerchantError):
            system.add_stock.handle("m2", "sku1", "X", "10.00", 5)

        # Nothing changed, not even the merchant upsert.
        assert system.merchants.find_by_name("m2") is None
        assert system.products.find_by_sku("sku1").stock_quantity == Quantity.of(10)

    def test_negative_quantity_rejected(self):
        system = build_system()
        with pytest.raises(InvalidQuantityError):
            system.add_stock.handle("m1", "sku1", "X", "10.00", -1)

    def test_zero_price_rejected_for_new_product(self):
        system = build_system()
        with pytest.raises(InvalidAmountError):
            system.add_stock.handle("m1", "sku1", "X", "0", 1)
        assert system.merchants.find_by_name("m1") is None
