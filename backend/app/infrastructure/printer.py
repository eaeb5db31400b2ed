"""Printer Drivers — python-escpos connections behind the PrinterDriver protocol.

Invariants:
    - Drivers block and may raise; they never see a Bill, only a rendered Receipt
    - A new connection is opened per probe/print and always closed afterwards
    - Misconfiguration degrades to NullPrinterDriver (always unavailable), never a crash

Design Decisions:
    - python-escpos owns the byte-level protocol; this module only maps Receipt lines
      onto set()/text()/cut()
    - Reconnect per job: USB/file handles go stale when the printer is power-cycled
"""

import logging
from typing import Callable

from escpos.escpos import Escpos
from escpos.printer import Dummy, File, Network, Usb

from app.config import Settings
from app.core.domain_types import PrinterType
from app.core.errors import PrinterExecutionError, PrinterUnavailableError
from app.core.receipt_format import Receipt

logger = logging.getLogger(__name__)


def _write_receipt(printer: Escpos, receipt: Receipt) -> None:
    for line in receipt.lines:
        printer.set(align=line.align, bold=line.bold)
        printer.text(line.text + "\n")
    printer.cut()


class EscposPrinterDriver:
    """Real printer reached through a python-escpos connection class."""

    def __init__(self, connect: Callable[[], Escpos], description: str):
        self._connect = connect
        self.description = description

    def probe(self) -> bool:
        printer = self._connect()
        try:
            printer.open()
        finally:
            printer.close()
        return True

    def execute(self, receipt: Receipt) -> None:
        printer = self._connect()
        try:
            _write_receipt(printer, receipt)
        except Exception as e:
            raise PrinterExecutionError(str(e))
        finally:
            printer.close()


class DummyPrinterDriver:
    """In-memory ESC/POS sink for development without hardware."""

    description = "dummy"

    def __init__(self):
        self.last_output: bytes = b""

    def probe(self) -> bool:
        return True

    def execute(self, receipt: Receipt) -> None:
        printer = Dummy()
        _write_receipt(printer, receipt)
        self.last_output = printer.output
        logger.info(
            f"Dummy printer rendered {len(self.last_output)} bytes",
            extra={"bill_id": receipt.bill_id},
        )


class NullPrinterDriver:
    """No printer configured."""

    def __init__(self, reason: str = "printer not configured"):
        self.description = reason

    def probe(self) -> bool:
        return False

    def execute(self, receipt: Receipt) -> None:
        raise PrinterUnavailableError(self.description)


def _profile_kwargs(settings: Settings) -> dict:
    return {"profile": settings.printer_profile} if settings.printer_profile else {}


def build_printer_driver(settings: Settings):
    """Pick the driver for PRINTER_TYPE; incomplete settings give a NullPrinterDriver."""
    printer_type = PrinterType(settings.printer_type)
    kwargs = _profile_kwargs(settings)

    if printer_type is PrinterType.FILE:
        device = settings.printer_device
        return EscposPrinterDriver(
            lambda: File(devfile=device, **kwargs), f"file:{device}",
        )

    if printer_type is PrinterType.USB:
        vendor = settings.printer_usb_vendor_id
        product = settings.printer_usb_product_id
        if vendor is None or product is None:
            logger.warning("USB printer selected without vendor/product id")
            return NullPrinterDriver("usb printer ids missing")
        return EscposPrinterDriver(
            lambda: Usb(vendor, product, **kwargs),
            f"usb:{vendor:04x}:{product:04x}",
        )

    if printer_type is PrinterType.NETWORK:
        host = settings.printer_host
        if not host:
            logger.warning("Network printer selected without host")
            return NullPrinterDriver("network printer host missing")
        port = settings.printer_port
        timeout = settings.printer_print_timeout_seconds
        return EscposPrinterDriver(
            lambda: Network(host, port=port, timeout=timeout, **kwargs),
            f"network:{host}:{port}",
        )

    if printer_type is PrinterType.DUMMY:
        return DummyPrinterDriver()

    return NullPrinterDriver()
