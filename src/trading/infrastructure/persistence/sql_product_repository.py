"""SQLAlchemy implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal

from trading.domain.model.product import Product
from trading.domain.model.value_objects import Money, Quantity
from trading.domain.repository.product_repository import ProductRepository
from trading.infrastructure.persistence.models import ProductRecord
from trading.infrastructure.persistence.sql_table_repository import SqlTableRepository


class SqlProductRepository(SqlTableRepository, ProductRepository):

    record = ProductRecord
    natural_key = "sku"
    # sku, name, price and merchant_id are fixed once the row exists.
    mutable_columns = ("stock_quantity", "sold_quantity")

    # --- ProductRepository interface ------------------------------------------

    def find_by_sku(self, sku: str) -> Product | None:
        return self._find_by("sku", sku)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "sku": product.sku,
            "name": product.name,
            "price": str(product.price.amount),
            "merchant_id": product.merchant_id,
            "stock_quantity": product.stock_quantity.value,
            "sold_quantity": product.sold_quantity.value,
            "version": product.version,
        }

    @staticmethod
    def _to_domain(record: ProductRecord) -> Product:
        return Product(
            id=record.id,
            sku=record.sku,
            name=record.name,
            price=Money(Decimal(record.price)),
            merchant_id=record.merchant_id,
            stock_quantity=Quantity.of_non_negative(record.stock_quantity),
            sold_quantity=Quantity.of_non_negative(record.sold_quantity),
            version=record.version,
        )
