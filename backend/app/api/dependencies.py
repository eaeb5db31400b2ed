"""Route Dependencies — hand the lifespan-built service objects to route handlers.

Invariants:
    - Service objects live on app.state, built once in main.lifespan
    - Tests replace these via app.dependency_overrides, never by patching globals
"""

from fastapi import Request

from app.infrastructure.database import DatabaseSessionManager
from app.services.print_agent import PrintAgentService


def get_agent_service(request: Request) -> PrintAgentService:
    service = getattr(request.app.state, "agent_service", None)
    if service is None:
        raise RuntimeError("Print agent service not initialized")
    return service


def get_db_manager(request: Request) -> DatabaseSessionManager | None:
    return getattr(request.app.state, "db_manager", None)
