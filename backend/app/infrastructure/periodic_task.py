"""Periodic Task — fixed-interval asyncio background loop with per-tick failure containment.

Invariants:
    - A failing tick is logged with traceback and the loop keeps its schedule
    - Ticks never overlap: the next interval starts after the previous tick returns
    - stop() cancels the loop and waits for it; calling it twice is harmless

Design Decisions:
    - asyncio task over a thread: ticks share the event loop with request handlers
      and only touch state that is already safe for concurrent use (the Store)
"""

import asyncio
import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Runs an async action every interval_seconds until stopped."""

    def __init__(
        self,
        name: str,
        interval_seconds: float,
        action: Callable[[], Awaitable[object]],
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.name = name
        self.interval_seconds = interval_seconds
        self._action = action
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name=self.name)
        logger.info(
            f"Started periodic task every {self.interval_seconds}s",
            extra={"task": self.name},
        )

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def run_once(self) -> bool:
        """Run one tick. Returns False when the action raised."""
        try:
            await self._action()
            return True
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(
                f"Periodic task tick failed: {e}",
                extra={"task": self.name},
                exc_info=True,
            )
            return False

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            await self.run_once()
