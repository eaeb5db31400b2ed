"""Service test fixtures — file-backed SQLite store, fake printer, FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file under tmp_path
    - The printer is a FakePrinterDriver behind a real PrinterAdapter
    - get_agent_service / get_db_manager overridden so no lifespan is needed

Design Decisions:
    - File database over :memory:: concurrent sessions and restart tests need a
      database shared across connections
    - Fixed FakeClock: window arithmetic in tests is exact
"""

from datetime import timezone

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_agent_service, get_db_manager
from app.infrastructure.bill_store import BillStore
from app.infrastructure.database import DatabaseSessionManager
from app.main import app
from app.services.print_agent import PrintAgentService
from app.services.printer_adapter import PrinterAdapter
from app.services.report import ReportAggregator

from tests.services.fakes import FakeClock, FakePrinterDriver


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'bills.db'}"


@pytest.fixture
async def db_manager(db_url):
    manager = DatabaseSessionManager(db_url, busy_timeout_seconds=5.0)
    await manager.create_schema()
    yield manager
    await manager.dispose()


@pytest.fixture
def store(db_manager):
    return BillStore(db_manager)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_driver():
    return FakePrinterDriver()


@pytest.fixture
async def printer_adapter(fake_driver):
    adapter = PrinterAdapter(
        fake_driver,
        probe_timeout_seconds=1.0,
        print_timeout_seconds=1.0,
        tz=timezone.utc,
    )
    await adapter.probe()
    return adapter


@pytest.fixture
def agent_service(store, printer_adapter, clock):
    return PrintAgentService(
        store, printer_adapter, ReportAggregator(store, clock=clock), clock=clock,
    )


@pytest.fixture
async def client(agent_service, db_manager):
    """FastAPI test client wired to the test service objects."""
    app.dependency_overrides[get_agent_service] = lambda: agent_service
    app.dependency_overrides[get_db_manager] = lambda: db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
