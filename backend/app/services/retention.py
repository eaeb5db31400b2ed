"""Retention Scheduler — hourly sweep deleting bills older than the retention window.

Invariants:
    - cutoff = now - window; bills with createdAt < cutoff are removed, >= cutoff kept
    - Only the Store is touched; no state shared with request handlers
    - A failed sweep is logged and the next scheduled sweep still runs
"""

import logging

from app.core.clock import Clock, now_ms, retention_cutoff
from app.core.repository_protocols import BillRepository
from app.infrastructure.periodic_task import PeriodicTask

logger = logging.getLogger(__name__)


class RetentionScheduler:
    """Periodically purges stale bills from the Store."""

    def __init__(
        self,
        store: BillRepository,
        *,
        window_hours: float = 24.0,
        interval_seconds: float = 3600.0,
        clock: Clock = now_ms,
    ):
        self._store = store
        self.window_hours = window_hours
        self._clock = clock
        self._task = PeriodicTask("retention-sweep", interval_seconds, self.sweep)

    async def sweep(self) -> int:
        """Delete everything older than the window. Raises on storage failure."""
        cutoff = retention_cutoff(self._clock(), self.window_hours)
        removed = await self._store.delete_before(cutoff)
        if removed:
            logger.info(
                f"Deleted {removed} old bill(s)",
                extra={"removed": removed, "cutoff": cutoff},
            )
        return removed

    async def tick(self) -> bool:
        """One contained sweep, as the scheduler runs it."""
        return await self._task.run_once()

    def start(self) -> None:
        self._task.start()

    async def stop(self) -> None:
        await self._task.stop()

    @property
    def running(self) -> bool:
        return self._task.running
