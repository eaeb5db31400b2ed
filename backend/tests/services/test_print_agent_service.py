"""PrintAgentService — store-before-print ordering and cancellation-safe writes."""

import asyncio
from datetime import timezone

import pytest

from app.core.errors import BillValidationError, ResourceNotFoundError
from app.services.print_agent import PrintAgentService
from app.services.printer_adapter import PrinterAdapter
from app.services.report import ReportAggregator

from tests.services.fakes import FakePrinterDriver, make_bill


class _RecordingStore:
    def __init__(self, events: list, delay: float = 0.0):
        self.events = events
        self.delay = delay
        self.bills = {}
        self.done = asyncio.Event()

    async def upsert(self, bill):
        self.events.append("upsert-start")
        if self.delay:
            await asyncio.sleep(self.delay)
        self.bills[bill.id] = bill
        self.events.append("upsert-done")
        self.done.set()

    async def get(self, bill_id):
        return self.bills.get(bill_id)

    async def aggregate(self, since):
        return {}


class _OrderedDriver(FakePrinterDriver):
    def __init__(self, events: list):
        super().__init__()
        self.events = events

    def execute(self, receipt):
        self.events.append("print")
        super().execute(receipt)


async def _service(store, driver, clock):
    adapter = PrinterAdapter(driver, tz=timezone.utc)
    await adapter.probe()
    return PrintAgentService(
        store, adapter, ReportAggregator(store, clock=clock), clock=clock,
    )


async def test_bill_is_stored_before_printing(clock):
    events = []
    service = await _service(_RecordingStore(events), _OrderedDriver(events), clock)

    result = await service.submit_and_print(make_bill())

    assert result.printed
    assert events == ["upsert-start", "upsert-done", "print"]


async def test_missing_id_never_reaches_store(clock):
    events = []
    service = await _service(_RecordingStore(events), FakePrinterDriver(), clock)

    with pytest.raises(BillValidationError):
        await service.submit(make_bill(bill_id=None))

    assert events == []


async def test_cancelled_request_does_not_abort_write(clock):
    events = []
    store = _RecordingStore(events, delay=0.05)
    service = await _service(store, FakePrinterDriver(), clock)

    task = asyncio.create_task(service.submit(make_bill()))
    await asyncio.sleep(0.01)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    await asyncio.wait_for(store.done.wait(), 1.0)
    assert "bill-1" in store.bills


async def test_get_bill_raises_not_found(clock):
    service = await _service(_RecordingStore([]), FakePrinterDriver(), clock)

    with pytest.raises(ResourceNotFoundError):
        await service.get_bill("missing")


async def test_submit_stamps_missing_created_at(clock):
    store = _RecordingStore([])
    service = await _service(store, FakePrinterDriver(), clock)

    stored = await service.submit(make_bill(created_at=None))

    assert stored.created_at == clock.now
    assert store.bills["bill-1"].created_at == clock.now
