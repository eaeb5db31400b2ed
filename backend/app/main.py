"""Print Agent API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PrintAgentError → structured JSON responses
    - CORS configured from settings (the POS front end runs in a browser)
    - Store, printer adapter and scheduler are built in the lifespan and stored on
      app.state; nothing is constructed at import time
    - A printer that fails to initialize leaves the service running with
      connected=false

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Run with: uvicorn app.main:app --port 3000 (from backend/)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import bills, health, printer, report
from app.config import Settings, get_settings
from app.infrastructure.bill_store import BillStore
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.observability import setup_logging
from app.infrastructure.periodic_task import PeriodicTask
from app.infrastructure.printer import build_printer_driver
from app.services.print_agent import PrintAgentService
from app.services.printer_adapter import PrinterAdapter
from app.services.report import ReportAggregator
from app.services.retention import RetentionScheduler

logger = logging.getLogger(__name__)

REPORT_WINDOW_HOURS = 24.0


def build_printer_adapter(settings: Settings) -> PrinterAdapter:
    return PrinterAdapter(
        build_printer_driver(settings),
        title=settings.receipt_title,
        currency=settings.receipt_currency,
        probe_timeout_seconds=settings.printer_probe_timeout_seconds,
        print_timeout_seconds=settings.printer_print_timeout_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    db_manager = DatabaseSessionManager(
        settings.database_url,
        busy_timeout_seconds=settings.database_busy_timeout_seconds,
    )
    await db_manager.create_schema()
    store = BillStore(db_manager)

    printer_adapter = build_printer_adapter(settings)
    await printer_adapter.probe()

    app.state.db_manager = db_manager
    app.state.agent_service = PrintAgentService(
        store,
        printer_adapter,
        ReportAggregator(store, window_hours=REPORT_WINDOW_HOURS),
    )

    scheduler = RetentionScheduler(
        store,
        window_hours=settings.retention_window_hours,
        interval_seconds=settings.retention_sweep_interval_seconds,
    )
    scheduler.start()

    reprobe = None
    if settings.printer_probe_interval_seconds > 0:
        reprobe = PeriodicTask(
            "printer-probe",
            settings.printer_probe_interval_seconds,
            printer_adapter.probe,
        )
        reprobe.start()

    logger.info(
        f"Print agent started (printer connected: {printer_adapter.is_available()})",
    )
    yield
    logger.info("Print agent shutting down")
    if reprobe is not None:
        await reprobe.stop()
    await scheduler.stop()
    await db_manager.dispose()


app = FastAPI(title="Print Agent", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(bills.router)
app.include_router(printer.router)
app.include_router(report.router)

register_error_handlers(app)
