"""Abstract advisory lock used to serialize work on a hot key.

An advisory lock only reduces contention; the version checks in the
repositories stay the source of truth.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager


class AdvisoryLock(ABC):

    @abstractmethod
    def hold(self, key: str) -> AbstractContextManager:
        """Hold the lock for *key* for the duration of the block.

        Raises ``ConcurrencyConflictError`` when it cannot be acquired.
        """
