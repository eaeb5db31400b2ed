"""Print Agent Service — composes Store, Printer Adapter and Report Aggregator for the routes.

Invariants:
    - A bill without an id is rejected before the Store is touched
    - Store first, printer second: print is attempted only after upsert succeeded
    - After a successful upsert nothing fails the request; printer problems become
      the warning field of the response
    - The upsert is shielded from request cancellation: a client that disconnects
      mid-request does not roll back a write already issued
    - printer_status reads the adapter cache only, never the Store

Design Decisions:
    - Service object built once in the lifespan and injected via Depends, so tests
      substitute fakes without patching module globals
"""

import asyncio
import logging

from app.core.clock import Clock, now_ms
from app.core.domain_types import BillId, PrintResult
from app.core.errors import (
    BillValidationError,
    ErrorContext,
    ResourceNotFoundError,
    StorageError,
)
from app.core.repository_protocols import BillRepository
from app.schemas.bill import Bill, ReportRow
from app.services.printer_adapter import PrinterAdapter
from app.services.report import ReportAggregator

logger = logging.getLogger(__name__)


class PrintAgentService:

    def __init__(
        self,
        store: BillRepository,
        printer: PrinterAdapter,
        reports: ReportAggregator,
        clock: Clock = now_ms,
    ):
        self._store = store
        self._printer = printer
        self._reports = reports
        self._clock = clock

    def _accept(self, bill: Bill) -> Bill:
        if bill.id is None or not bill.id.strip():
            raise BillValidationError(
                "Bill id is required", "id",
                ErrorContext(operation="validate"),
            )
        return bill.stamped(self._clock())

    async def _persist(self, bill: Bill) -> None:
        try:
            await asyncio.shield(self._store.upsert(bill))
        except StorageError as e:
            e.context.bill_id = bill.id
            raise

    async def submit(self, bill: Bill) -> Bill:
        """Store only (history push)."""
        bill = self._accept(bill)
        await self._persist(bill)
        return bill

    async def submit_and_print(self, bill: Bill) -> PrintResult:
        """Store, then best-effort print."""
        bill = self._accept(bill)
        await self._persist(bill)
        result = await self._printer.print_bill(bill)
        if not result.printed:
            logger.warning(
                f"Bill stored but not printed: {result.warning}",
                extra={"bill_id": bill.id, "print_failure": result.failure.value},
            )
        return result

    async def get_bill(self, bill_id: BillId) -> Bill:
        bill = await self._store.get(bill_id)
        if bill is None:
            raise ResourceNotFoundError(
                "Bill", bill_id, ErrorContext(bill_id=bill_id, operation="get"),
            )
        return bill

    def printer_status(self) -> bool:
        return self._printer.is_available()

    async def report(self) -> list[ReportRow]:
        return await self._reports.build()
