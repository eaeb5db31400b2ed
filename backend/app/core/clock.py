"""Clock — epoch-millisecond time helpers shared by retention and reporting.

Invariants:
    - All bill timestamps are UTC epoch milliseconds
    - retention_cutoff is pure: same inputs, same cutoff
"""

import time
from typing import Callable

from app.core.domain_types import EpochMillis

Clock = Callable[[], int]

MS_PER_HOUR = 3_600_000


def now_ms() -> EpochMillis:
    """Current wall-clock time in epoch milliseconds."""
    return EpochMillis(time.time_ns() // 1_000_000)


def hours_to_ms(hours: float) -> int:
    return int(hours * MS_PER_HOUR)


def retention_cutoff(now: int, window_hours: float) -> EpochMillis:
    """Oldest createdAt still inside the window; anything older is stale."""
    return EpochMillis(now - hours_to_ms(window_hours))
