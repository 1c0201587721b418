"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world. Amounts are formatted
strings with two decimals, e.g. ``"20.00"``.
"""

from __future__ import annotations

from dataclasses import dataclass

from trading.domain.model.value_objects import Money


@dataclass(frozen=True)
class UserAccountDTO:
    """Output: a user account as displayed to the user."""

    id: int
    username: str
    balance: str


@dataclass(frozen=True)
class MerchantAccountDTO:
    """Output: a merchant account as displayed to the user."""

    id: int
    name: str
    balance: str


@dataclass(frozen=True)
class ProductDTO:
    """Output: a product listing with its stock counters."""

    id: int
    sku: str
    name: str
    merchant_id: int
    price: str
    stock_quantity: int
    sold_quantity: int


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    username: str
    merchant_name: str
    sku: str
    quantity: int
    unit_price: str
    total_price: str
    status: str
    created_at: str


@dataclass(frozen=True)
class SettlementResult:
    """One merchant's reconciliation line.

    ``diff`` is ``actual - expected``; zero means the books match the
    realized sales.
    """

    merchant_name: str
    expected: Money
    actual: Money
    diff: Money

    @property
    def balanced(self) -> bool:
        return self.diff.is_zero()


@dataclass(frozen=True)
class AccountsView:
    """Output: everything the ``accounts`` listing shows."""

    users: list[UserAccountDTO]
    merchants: list[MerchantAccountDTO]
    products: list[ProductDTO]
