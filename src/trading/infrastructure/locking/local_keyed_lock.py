"""Process-local advisory lock: one mutex per key."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from trading.application.advisory_lock import AdvisoryLock
from trading.domain.exceptions import ConcurrencyConflictError

logger = logging.getLogger(__name__)


class LocalKeyedLock(AdvisoryLock):

    def __init__(self, timeout: float | None = None) -> None:
        self._timeout = timeout
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        lock = self._lock_for(key)
        acquired = lock.acquire(timeout=-1 if self._timeout is None else self._timeout)
        if not acquired:
            logger.warning("Timed out waiting for lock %s", key)
            raise ConcurrencyConflictError(f"Could not acquire lock for {key}")
        try:
            yield
        finally:
            lock.release()

    def _lock_for(self, key: str) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(key, threading.Lock())
