"""SQLAlchemy ORM models for the trading database.

One table per aggregate. Every row carries a ``version`` column used for
optimistic locking. Amounts are stored as decimal strings so SQLite never
rounds them through a float; timestamps are stored as ISO-8601 UTC text.

Natural keys (username, merchant name, SKU) are UNIQUE and are the
conflict targets of the ``insert_if_absent`` upserts.
"""

from __future__ import annotations

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""

    pass


class UserAccountRecord(Base):

    __tablename__ = "user_accounts"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    balance: Mapped[str] = mapped_column(String(40), nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class MerchantAccountRecord(Base):

    __tablename__ = "merchant_accounts"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    balance: Mapped[str] = mapped_column(String(40), nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class ProductRecord(Base):
    """Persisted product listing.

    ``merchant_id`` references ``merchant_accounts.id`` by value only; the
    placement flow reports a dangling reference as a missing merchant.
    """

    __tablename__ = "products"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    sku: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    price: Mapped[str] = mapped_column(String(40), nullable=False)
    merchant_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    stock_quantity: Mapped[int] = mapped_column(BigInteger, nullable=False)
    sold_quantity: Mapped[int] = mapped_column(BigInteger, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class OrderRecord(Base):
    """Persisted order.

    Quantity and prices are snapshots taken at creation; only ``status``
    (and ``version``) change afterwards.
    """

    __tablename__ = "orders"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    merchant_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    product_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(BigInteger, nullable=False)
    unit_price: Mapped[str] = mapped_column(String(40), nullable=False)
    total_price: Mapped[str] = mapped_column(String(40), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
