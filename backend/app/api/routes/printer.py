"""Printer Status Route — reports the adapter's cached availability."""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_agent_service
from app.schemas.bill import PrinterStatusResponse
from app.services.print_agent import PrintAgentService

router = APIRouter(tags=["printer"])


@router.get("/printer-status", response_model=PrinterStatusResponse)
async def printer_status(service: PrintAgentService = Depends(get_agent_service)):
    return PrinterStatusResponse(connected=service.printer_status())
