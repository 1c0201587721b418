"""Abstract transaction scope shared by all repositories."""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Callable, TypeVar

T = TypeVar("T")


class TransactionManager(ABC):

    @abstractmethod
    def begin(self, read_only: bool = False) -> AbstractContextManager:
        """Open an ACID transaction for the current thread.

        Leaving the block normally commits; any exception rolls back and
        propagates. A failed commit raises ``ConcurrencyConflictError``.
        Opening a scope while one is active joins it.
        """

    def run(self, fn: Callable[[], T], read_only: bool = False) -> T:
        """Run *fn* inside a single transaction and return its result."""
        with self.begin(read_only=read_only):
            return fn()
