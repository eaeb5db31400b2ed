"""Retention Scheduler — cutoff arithmetic and failure containment of the sweep loop.

Invariants:
    - A 24h sweep removes now-25h and keeps now-23h
    - A failing sweep is logged and does not stop later sweeps
"""

import asyncio
import logging

import pytest

from app.core.errors import StorageError
from app.infrastructure.periodic_task import PeriodicTask
from app.services.retention import RetentionScheduler

from tests.services.fakes import HOUR_MS, NOW_MS, make_bill


class _FlakyStore:
    """delete_before fails on the first call, then records cutoffs."""

    def __init__(self):
        self.cutoffs = []
        self.calls = 0

    async def delete_before(self, cutoff: int) -> int:
        self.calls += 1
        if self.calls == 1:
            raise StorageError("disk I/O error", "delete_before")
        self.cutoffs.append(cutoff)
        return 0


async def test_sweep_removes_bills_outside_window(store, clock):
    await store.upsert(make_bill("old", created_at=NOW_MS - 25 * HOUR_MS))
    await store.upsert(make_bill("new", created_at=NOW_MS - 23 * HOUR_MS))
    scheduler = RetentionScheduler(store, window_hours=24, clock=clock)

    removed = await scheduler.sweep()

    assert removed == 1
    assert await store.get("old") is None
    assert await store.get("new") is not None


async def test_sweep_uses_current_clock_each_run(store, clock):
    await store.upsert(make_bill(created_at=NOW_MS - 23 * HOUR_MS))
    scheduler = RetentionScheduler(store, window_hours=24, clock=clock)

    assert await scheduler.sweep() == 0
    clock.now += 2 * HOUR_MS
    assert await scheduler.sweep() == 1


async def test_failed_tick_is_logged_and_next_tick_runs(clock, caplog):
    caplog.set_level(logging.ERROR)
    flaky = _FlakyStore()
    scheduler = RetentionScheduler(flaky, window_hours=24, clock=clock)

    assert await scheduler.tick() is False
    assert await scheduler.tick() is True

    assert flaky.cutoffs == [NOW_MS - 24 * HOUR_MS]
    assert any("tick failed" in r.getMessage() for r in caplog.records)


async def test_background_loop_survives_failures(clock):
    flaky = _FlakyStore()
    scheduler = RetentionScheduler(
        flaky, window_hours=24, interval_seconds=0.01, clock=clock,
    )

    scheduler.start()
    assert scheduler.running
    await asyncio.sleep(0.2)
    await scheduler.stop()

    assert flaky.calls >= 2
    assert flaky.cutoffs
    assert not scheduler.running


async def test_stop_without_start_is_harmless(store):
    scheduler = RetentionScheduler(store)
    await scheduler.stop()
    assert not scheduler.running


def test_periodic_task_rejects_non_positive_interval():
    async def noop():
        return None

    with pytest.raises(ValueError):
        PeriodicTask("noop", 0, noop)
