"""Boundary Protocols — contracts between the service layer and its IO collaborators.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - Store and printer are accessed only through these Protocol types
    - Implementations provided by main.py lifespan via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - BillRepository is async (database IO); PrinterDriver is sync (vendor library
      calls are blocking and run in a worker thread under a timeout)
"""

from typing import Protocol

from app.core.domain_types import BillId, UserTotals
from app.core.receipt_format import Receipt
from app.schemas.bill import Bill


class BillRepository(Protocol):
    """Contract for bill persistence — implemented by infrastructure/bill_store.py."""
    async def upsert(self, bill: Bill) -> None: ...
    async def get(self, bill_id: BillId) -> Bill | None: ...
    async def query_window(self, since: int) -> list[Bill]: ...
    async def aggregate(self, since: int) -> dict[str | None, UserTotals]: ...
    async def delete_before(self, cutoff: int) -> int: ...


class PrinterDriver(Protocol):
    """Contract for a physical printer connection — implemented by infrastructure/printer.py.

    Both methods block and may raise; the adapter bounds and contains them.
    """
    def probe(self) -> bool: ...
    def execute(self, receipt: Receipt) -> None: ...
