"""Daily settlement trigger.

Runs the settlement once a day at a fixed wall-clock time (UTC). The
job only reads, so a manual run overlapping a scheduled one is fine.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, time, timedelta

from trading.application.dto import SettlementResult
from trading.application.settlement import SettlementHandler
from trading.domain.clock import Clock, SystemClock

logger = logging.getLogger(__name__)

DEFAULT_RUN_AT = time(2, 0)


class SettlementJob:

    def __init__(
        self,
        handler: SettlementHandler,
        clock: Clock | None = None,
        run_at: time = DEFAULT_RUN_AT,
    ) -> None:
        self._handler = handler
        self._clock = clock or SystemClock()
        self._run_at = run_at

    def next_run(self, now: datetime) -> datetime:
        """First scheduled instant strictly after *now*."""
        candidate = now.replace(
            hour=self._run_at.hour,
            minute=self._run_at.minute,
            second=0,
            microsecond=0,
        )
        if candidate <= now:
            candidate += timedelta(days=1)
        return candidate

    def run_once(self) -> list[SettlementResult]:
        results = self._handler.handle()
        unbalanced = [r for r in results if not r.balanced]
        for result in unbalanced:
            logger.warning(
                "Merchant %s is out of balance by %s (expected=%s, actual=%s)",
                result.merchant_name, result.diff, result.expected, result.actual,
            )
        logger.info(
            "Settlement finished: %d merchants, %d unbalanced",
            len(results), len(unbalanced),
        )
        return results

    def run_forever(self, stop: threading.Event) -> None:
        """Sleep until each scheduled instant and settle, until *stop* is set."""
        while not stop.is_set():
            now = self._clock.now()
            delay = (self.next_run(now) - now).total_seconds()
            logger.debug("Next settlement in %.0f seconds", delay)
            if stop.wait(delay):
                break
            try:
                self.run_once()
            except Exception:
                logger.exception("Scheduled settlement failed")
