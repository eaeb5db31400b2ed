"""Report Aggregator — per-user bill count and sales total over a trailing window."""

from app.core.clock import Clock, now_ms, retention_cutoff
from app.core.repository_protocols import BillRepository
from app.schemas.bill import ReportRow


class ReportAggregator:
    """Reads live Store state on every call; nothing is cached."""

    def __init__(
        self, store: BillRepository, *, window_hours: float = 24.0, clock: Clock = now_ms,
    ):
        self._store = store
        self.window_hours = window_hours
        self._clock = clock

    async def build(self, since: int | None = None) -> list[ReportRow]:
        if since is None:
            since = retention_cutoff(self._clock(), self.window_hours)
        totals = await self._store.aggregate(since)
        rows = [
            ReportRow(user=user, count=t.count, sum=t.sum)
            for user, t in totals.items()
        ]
        # None sorts first
        rows.sort(key=lambda r: (r.user is not None, r.user or ""))
        return rows
