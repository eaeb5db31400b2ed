"""Report Route — per-user bill count and sum over the last 24 hours."""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_agent_service
from app.schemas.bill import ReportResponse
from app.services.print_agent import PrintAgentService

router = APIRouter(tags=["report"])


@router.get("/report", response_model=ReportResponse)
async def sales_report(service: PrintAgentService = Depends(get_agent_service)):
    return ReportResponse(rows=await service.report())
