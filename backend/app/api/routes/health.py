"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /health always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable (readiness)
    - Printer state is reported but never affects readiness (printing is best-effort)
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.api.dependencies import get_agent_service, get_db_manager
from app.infrastructure.database import DatabaseSessionManager
from app.services.print_agent import PrintAgentService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "print-agent",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(
    db_manager: DatabaseSessionManager | None = Depends(get_db_manager),
    service: PrintAgentService = Depends(get_agent_service),
):
    """Readiness probe — includes database connectivity."""
    db_ok = await db_manager.health_check() if db_manager else False
    printer = "connected" if service.printer_status() else "unavailable"
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
                "checks": {"printer": printer},
            },
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy", "printer": printer},
    }
