"""Application service: Settlement use case (query).

Reconciles every merchant's recorded balance against the revenue its
products have realized. Runs in one read-only transaction so merchants
and products come from the same snapshot; it never writes, so
overlapping runs are harmless.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from trading.application.dto import SettlementResult
from trading.domain.model.value_objects import Money
from trading.domain.repository.merchant_account_repository import (
    MerchantAccountRepository,
)
from trading.domain.repository.product_repository import ProductRepository
from trading.domain.repository.transaction_manager import TransactionManager

logger = logging.getLogger(__name__)


class SettlementHandler:

    def __init__(
        self,
        merchant_repo: MerchantAccountRepository,
        product_repo: ProductRepository,
        transactions: TransactionManager,
    ) -> None:
        self._merchant_repo = merchant_repo
        self._product_repo = product_repo
        self._transactions = transactions

    def handle(self) -> list[SettlementResult]:
        with self._transactions.begin(read_only=True):
            merchants = self._merchant_repo.list_all()
            products = self._product_repo.list_all()

        # Prices are fixed once a SKU exists, so price x sold equals the
        # sum of the completed orders' totals.
        expected_by_merchant: dict[int, Money] = defaultdict(Money.zero)
        for product in products:
            expected_by_merchant[product.merchant_id] = (
                expected_by_merchant[product.merchant_id]
                + product.price * product.sold_quantity.value
            )

        results: list[SettlementResult] = []
        for merchant in merchants:
            expected = expected_by_merchant[merchant.id]
            actual = merchant.balance
            result = SettlementResult(
                merchant_name=merchant.name,
                expected=expected,
                actual=actual,
                diff=actual - expected,
            )
            results.append(result)
            logger.info(
                "Settlement result for merchant %s: expected=%s, actual=%s, diff=%s",
                result.merchant_name, result.expected, result.actual, result.diff,
            )
        return results
