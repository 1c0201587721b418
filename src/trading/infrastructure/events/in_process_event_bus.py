"""In-process event bus.

Handlers are keyed by event type. Without an executor they run
synchronously in subscription order on the publishing thread; with one
they are submitted to the pool and ``publish`` returns immediately.
Either way a failing handler is logged and never affects the publisher.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from concurrent.futures import Executor
from typing import Callable

from trading.domain.events import DomainEvent, EventBus

logger = logging.getLogger(__name__)

Handler = Callable[[DomainEvent], None]


class InProcessEventBus(EventBus):

    def __init__(self, executor: Executor | None = None) -> None:
        self._executor = executor
        self._handlers: dict[type, list[Handler]] = defaultdict(list)
        self._history: list[DomainEvent] = []
        self._lock = threading.Lock()

    def subscribe(self, event_type: type, handler: Handler) -> None:
        with self._lock:
            self._handlers[event_type].append(handler)

    def publish(self, event: DomainEvent) -> None:
        with self._lock:
            self._history.append(event)
            handlers = [
                handler
                for event_type, registered in self._handlers.items()
                if isinstance(event, event_type)
                for handler in registered
            ]

        for handler in handlers:
            if self._executor is None:
                self._deliver(handler, event)
                continue
            try:
                self._executor.submit(self._deliver, handler, event)
            except RuntimeError:
                logger.exception(
                    "Could not schedule delivery of %s", type(event).__name__
                )

    def get_history(self, event_type: type | None = None) -> list[DomainEvent]:
        """Published events, optionally filtered by type."""
        with self._lock:
            if event_type is None:
                return list(self._history)
            return [e for e in self._history if isinstance(e, event_type)]

    def shutdown(self) -> None:
        """Wait for queued deliveries to finish."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)

    @staticmethod
    def _deliver(handler: Handler, event: DomainEvent) -> None:
        try:
            handler(event)
        except Exception:
            logger.exception("Handler error for event=%s", type(event).__name__)
