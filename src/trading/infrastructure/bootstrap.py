"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from datetime import time
from functools import lru_cache
from pathlib import Path

from trading.application.add_product_stock import AddProductStockHandler
from trading.application.deposit import DepositHandler
from trading.application.list_accounts import ListAccountsHandler
from trading.application.place_order import PlaceOrderHandler
from trading.application.settlement import SettlementHandler
from trading.application.show_order import ShowOrderHandler
from trading.domain.clock import SystemClock
from trading.infrastructure.events.in_process_event_bus import InProcessEventBus
from trading.infrastructure.events.order_event_listener import OrderEventListener
from trading.infrastructure.locking.local_keyed_lock import LocalKeyedLock
from trading.infrastructure.persistence.database import Database, sqlite_url
from trading.infrastructure.persistence.sql_merchant_account_repository import (
    SqlMerchantAccountRepository,
)
from trading.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from trading.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)
from trading.infrastructure.persistence.sql_user_account_repository import (
    SqlUserAccountRepository,
)
from trading.infrastructure.scheduling.settlement_job import (
    DEFAULT_RUN_AT,
    SettlementJob,
)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
_DEFAULT_EVENT_WORKERS = 2
_DATABASE_FILE = "trading.db"


def data_dir() -> Path:
    return Path(os.environ.get("TRADING_DATA_DIR", _DEFAULT_DATA_DIR))


def settlement_time() -> time:
    raw = os.environ.get("TRADING_SETTLEMENT_AT")
    return time.fromisoformat(raw) if raw else DEFAULT_RUN_AT


def event_workers() -> int:
    return int(os.environ.get("TRADING_EVENT_WORKERS", _DEFAULT_EVENT_WORKERS))


def database_url() -> str:
    """``TRADING_DATABASE_URL``, else a SQLite file in the data directory."""
    url = os.environ.get("TRADING_DATABASE_URL")
    if url:
        return url
    directory = data_dir()
    directory.mkdir(parents=True, exist_ok=True)
    return sqlite_url(directory / _DATABASE_FILE)


@lru_cache(maxsize=None)
def _open_database(url: str) -> Database:
    return Database(url)


def database() -> Database:
    return _open_database(database_url())


def user_account_repository() -> SqlUserAccountRepository:
    return SqlUserAccountRepository(database())


def merchant_account_repository() -> SqlMerchantAccountRepository:
    return SqlMerchantAccountRepository(database())


def product_repository() -> SqlProductRepository:
    return SqlProductRepository(database())


def order_repository() -> SqlOrderRepository:
    return SqlOrderRepository(database())


def event_bus() -> InProcessEventBus:
    workers = event_workers()
    executor = ThreadPoolExecutor(max_workers=workers) if workers > 0 else None
    bus = InProcessEventBus(executor=executor)
    OrderEventListener().register(bus)
    return bus


# --- Use-case handlers --------------------------------------------------------


def deposit_handler() -> DepositHandler:
    return DepositHandler(user_account_repository(), database())


def add_product_stock_handler() -> AddProductStockHandler:
    return AddProductStockHandler(
        merchant_account_repository(), product_repository(), database()
    )


def place_order_handler(bus: InProcessEventBus) -> PlaceOrderHandler:
    return PlaceOrderHandler(
        user_repo=user_account_repository(),
        merchant_repo=merchant_account_repository(),
        product_repo=product_repository(),
        order_repo=order_repository(),
        transactions=database(),
        event_bus=bus,
        clock=SystemClock(),
        sku_lock=LocalKeyedLock(),
    )


def show_order_handler() -> ShowOrderHandler:
    return ShowOrderHandler(
        order_repository(),
        user_account_repository(),
        merchant_account_repository(),
        product_repository(),
        database(),
    )


def list_accounts_handler() -> ListAccountsHandler:
    return ListAccountsHandler(
        user_account_repository(),
        merchant_account_repository(),
        product_repository(),
        database(),
    )


def settlement_handler() -> SettlementHandler:
    return SettlementHandler(
        merchant_account_repository(), product_repository(), database()
    )


def settlement_job() -> SettlementJob:
    return SettlementJob(settlement_handler(), SystemClock(), run_at=settlement_time())
