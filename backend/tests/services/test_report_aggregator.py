"""Report Aggregator — per-user rows over the trailing 24 hours, read live."""

from app.services.report import ReportAggregator

from tests.services.fakes import HOUR_MS, NOW_MS, make_bill


async def test_report_counts_only_bills_inside_window(store, clock):
    await store.upsert(make_bill("a1", user="userA", total=10, created_at=NOW_MS - HOUR_MS))
    await store.upsert(make_bill("a2", user="userA", total=5, created_at=NOW_MS - 30 * HOUR_MS))
    await store.upsert(make_bill("b1", user="userB", total=7, created_at=NOW_MS - 2 * HOUR_MS))

    rows = await ReportAggregator(store, clock=clock).build()

    assert [r.model_dump() for r in rows] == [
        {"user": "userA", "count": 1, "sum": 10.0},
        {"user": "userB", "count": 1, "sum": 7.0},
    ]


async def test_report_reflects_new_bills_without_caching(store, clock):
    aggregator = ReportAggregator(store, clock=clock)
    assert await aggregator.build() == []

    await store.upsert(make_bill(user="carol", total=3))
    rows = await aggregator.build()

    assert [(r.user, r.count, r.sum) for r in rows] == [("carol", 1, 3.0)]


async def test_report_accepts_explicit_since(store, clock):
    await store.upsert(make_bill("old", total=4, created_at=NOW_MS - 30 * HOUR_MS))

    rows = await ReportAggregator(store, clock=clock).build(since=0)

    assert rows[0].count == 1


async def test_bills_without_user_are_grouped_first(store, clock):
    await store.upsert(make_bill("x", user=None, total=2))
    await store.upsert(make_bill("y", user="alice", total=3))

    rows = await ReportAggregator(store, clock=clock).build()

    assert [r.user for r in rows] == [None, "alice"]
