"""Bill Routes — store-only push, store-then-print, and lookup of a stored bill.

Invariants:
    - POST /bills and POST /print answer 400 when the id is missing, 500 on storage failure
    - POST /print answers 200 whenever the bill was stored, printed or not
    - warning is omitted from the /print body when the receipt printed

Design Decisions:
    - Thin handlers: validation, ordering and error mapping live in PrintAgentService
      and the global error handlers
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_agent_service
from app.core.domain_types import BillId
from app.schemas.bill import Bill, PrintResponse, SubmitResponse
from app.services.print_agent import PrintAgentService

router = APIRouter(tags=["bills"])


@router.post("/bills", response_model=SubmitResponse)
async def push_bill(
    bill: Bill, service: PrintAgentService = Depends(get_agent_service),
):
    """Store (or replace) a bill without printing."""
    await service.submit(bill)
    return SubmitResponse()


@router.post(
    "/print", response_model=PrintResponse, response_model_exclude_none=True,
)
async def print_bill(
    bill: Bill, service: PrintAgentService = Depends(get_agent_service),
):
    """Store a bill, then try to print its receipt."""
    result = await service.submit_and_print(bill)
    return PrintResponse(printed=result.printed, warning=result.warning)


@router.get("/bills/{bill_id}")
async def get_bill(
    bill_id: str, service: PrintAgentService = Depends(get_agent_service),
):
    """Return the stored payload for reprint or reconstruction."""
    bill = await service.get_bill(BillId(bill_id))
    return bill.to_payload()
