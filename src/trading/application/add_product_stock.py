"""Application service: Add or Update Product Stock use case.

Merchant and product are created on first reference (by name and SKU).
A SKU stays bound to the merchant that created it.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from trading.application.dto import ProductDTO
from trading.domain.exceptions import ConcurrencyConflictError
from trading.domain.model.merchant_account import MerchantAccount
from trading.domain.model.product import Product
from trading.domain.model.value_objects import Money, Quantity
from trading.domain.repository.merchant_account_repository import (
    MerchantAccountRepository,
)
from trading.domain.repository.product_repository import ProductRepository
from trading.domain.repository.transaction_manager import TransactionManager

logger = logging.getLogger(__name__)


class AddProductStockHandler:

    def __init__(
        self,
        merchant_repo: MerchantAccountRepository,
        product_repo: ProductRepository,
        transactions: TransactionManager,
    ) -> None:
        self._merchant_repo = merchant_repo
        self._product_repo = product_repo
        self._transactions = transactions

    def handle(
        self,
        merchant_name: str,
        sku: str,
        name: str,
        price: str | int | Decimal,
        quantity: int,
    ) -> ProductDTO:
        """Add *quantity* units of *sku* to the merchant's stock.

        Steps:
        1. Find or create the merchant.
        2. Find or create the product (price and name only apply here).
        3. Reject SKUs listed by another merchant.
        4. Add the stock and persist with a version check.

        All of it happens in one transaction, so a rejected SKU leaves no
        freshly created merchant behind.
        """
        unit_price = Money.of(price)
        added = Quantity.of_non_negative(quantity)

        with self._transactions.begin():
            merchant = self._merchant_repo.find_by_name(merchant_name)
            if merchant is None:
                merchant = self._merchant_repo.insert_if_absent(
                    MerchantAccount.create(merchant_name)
                )

            product = self._product_repo.find_by_sku(sku)
            if product is None:
                product = self._product_repo.insert_if_absent(
                    Product.create(sku, name, unit_price, merchant.id)
                )
            elif product.price != unit_price:
                logger.warning(
                    "Ignoring price %s for existing SKU %s (listed at %s)",
                    unit_price, sku, product.price,
                )

            product.ensure_listed_by(merchant.id)
            product.add_stock(added)
            if self._product_repo.update(product) == 0:
                raise ConcurrencyConflictError(f"Product {sku} was modified concurrently")

        logger.info(
            "Stocked %s x %s for %s (stock=%s)",
            added, sku, merchant_name, product.stock_quantity,
        )
        return self._to_dto(product)

    @staticmethod
    def _to_dto(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,  # type: ignore[arg-type]
            sku=product.sku,
            name=product.name,
            merchant_id=product.merchant_id,
            price=str(product.price),
            stock_quantity=product.stock_quantity.value,
            sold_quantity=product.sold_quantity.value,
        )
