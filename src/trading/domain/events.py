"""Domain events announced by the order placement flow.

Events carry primitive fields only so subscribers never hold on to
aggregates. Delivery is at-least-once and fire-and-forget: subscribers
must be idempotent and must not expect their exceptions to reach the
publisher.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal


@dataclass(frozen=True)
class DomainEvent:
    def __post_init__(self) -> None:
        if getattr(self, "occurred_on", None) is None:
            object.__setattr__(self, "occurred_on", datetime.now(timezone.utc))


@dataclass(frozen=True)
class OrderPlaced(DomainEvent):
    """An order row exists and the coordinator is about to run (intent)."""

    order_id: int
    username: str
    merchant_name: str
    sku: str
    quantity: int
    total_price: Decimal
    occurred_on: datetime | None = None


@dataclass(frozen=True)
class OrderCompleted(DomainEvent):
    """The order's transaction has committed (outcome)."""

    order_id: int
    username: str
    merchant_name: str
    sku: str
    total_price: Decimal
    occurred_on: datetime | None = None


class EventBus(ABC):

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        """Hand *event* to subscribers. Never raises on subscriber failure."""
