"""Printer Adapter — capability-gated, time-bounded wrapper around a PrinterDriver.

Invariants:
    - is_available() returns the cached result of the last probe (False while a
      timed-out job is still running); it never does IO
    - print_bill never raises for printer problems: every outcome is a PrintResult
    - When unavailable, print_bill returns immediately and the driver is not called
    - Probe and execute run in a worker thread under a timeout; the event loop,
      the Store and unrelated requests are never blocked by the printer
    - Jobs are serialized: one receipt on the physical printer at a time. The print
      timeout covers the driver call only, never the wait for the lock

Design Decisions:
    - Result value over exceptions at this seam: after the bill is stored, a print
      failure is a warning for the client, not an error path
    - A timed-out driver thread cannot be killed; the adapter reports unavailable
      until it returns instead of sending a second job to the same device
"""

import asyncio
import logging
from datetime import tzinfo

from app.core.domain_types import PrintFailure, PrintResult
from app.core.errors import PrinterUnavailableError
from app.core.receipt_format import Receipt, render_receipt
from app.core.repository_protocols import PrinterDriver
from app.schemas.bill import Bill

logger = logging.getLogger(__name__)


class PrinterAdapter:
    """Wraps a PrinterDriver with a cached availability flag and timeouts."""

    def __init__(
        self,
        driver: PrinterDriver,
        *,
        title: str = "General Billing",
        currency: str = "₹",
        probe_timeout_seconds: float = 5.0,
        print_timeout_seconds: float = 10.0,
        tz: tzinfo | None = None,
    ):
        self._driver = driver
        self._title = title
        self._currency = currency
        self._probe_timeout = probe_timeout_seconds
        self._print_timeout = print_timeout_seconds
        self._tz = tz
        self._available = False
        self._lock = asyncio.Lock()
        self._stalled_job: asyncio.Future | None = None

    def is_available(self) -> bool:
        return self._available and not self._stalled()

    def _stalled(self) -> bool:
        return self._stalled_job is not None and not self._stalled_job.done()

    async def probe(self) -> bool:
        """Ask the hardware whether it is reachable and cache the answer."""
        try:
            available = bool(await asyncio.wait_for(
                asyncio.to_thread(self._driver.probe), self._probe_timeout,
            ))
        except asyncio.TimeoutError:
            logger.warning(f"Printer probe timed out after {self._probe_timeout}s")
            available = False
        except Exception as e:
            logger.warning(f"Printer not configured or unavailable: {e}")
            available = False

        if available != self._available:
            logger.info(f"Printer availability changed: {self._available} -> {available}")
        self._available = available
        return available

    def render(self, bill: Bill) -> Receipt:
        return render_receipt(bill, self._title, self._currency, tz=self._tz)

    async def print_bill(self, bill: Bill) -> PrintResult:
        """Best-effort print. Never raises for printer failures."""
        if not self.is_available():
            return PrintResult.failed(PrintFailure.UNAVAILABLE)

        receipt = self.render(bill)
        async with self._lock:
            # a job ahead of us may have timed out while we queued
            if not self.is_available():
                return PrintResult.failed(PrintFailure.UNAVAILABLE, "printer busy")
            try:
                await self._execute(receipt)
            except asyncio.TimeoutError:
                logger.error(
                    f"Printing timed out after {self._print_timeout}s",
                    extra={"bill_id": bill.id, "print_failure": PrintFailure.TIMEOUT.value},
                )
                return PrintResult.failed(PrintFailure.TIMEOUT)
            except PrinterUnavailableError as e:
                logger.warning(
                    f"Printer unavailable: {e.message}",
                    extra={"bill_id": bill.id, "print_failure": PrintFailure.UNAVAILABLE.value},
                )
                return PrintResult.failed(PrintFailure.UNAVAILABLE, e.message)
            except Exception as e:
                logger.error(
                    f"Printing failed: {e}",
                    extra={
                        "bill_id": bill.id,
                        "print_failure": PrintFailure.EXECUTION_ERROR.value,
                    },
                    exc_info=True,
                )
                return PrintResult.failed(PrintFailure.EXECUTION_ERROR, str(e))
        return PrintResult.ok()

    async def _execute(self, receipt: Receipt) -> None:
        """Run one job under the print timeout. Caller holds the lock."""
        job = asyncio.ensure_future(asyncio.to_thread(self._driver.execute, receipt))
        try:
            await asyncio.wait_for(asyncio.shield(job), self._print_timeout)
        except (asyncio.TimeoutError, asyncio.CancelledError):
            # the thread cannot be interrupted; hold off new jobs until it returns
            self._stalled_job = job
            job.add_done_callback(self._release_stalled_job)
            raise

    def _release_stalled_job(self, job: asyncio.Future) -> None:
        if not job.cancelled() and job.exception() is not None:
            logger.warning(f"Timed-out print job ended with error: {job.exception()}")
        else:
            logger.info("Timed-out print job finished, printer released")
