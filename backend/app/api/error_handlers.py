"""Error Handlers — map every failure to the {"error": {...}} envelope.

Invariants:
    - PrintAgentError → its own to_response() and http_status; 5xx logged as errors,
      the rest as warnings, with bill_id when the error carries one
    - RequestValidationError → 400 VALIDATION_ERROR with field-level details
    - Anything else → 500 INTERNAL_ERROR, traceback logged, never sent to the client
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import ErrorCategory, ErrorSeverity, PrintAgentError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PrintAgentError, _handle_print_agent_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)


def _log_extra(request: Request, exc: PrintAgentError | None = None) -> dict:
    extra = {"path": request.url.path}
    if exc is not None:
        extra["error_code"] = exc.code
        if exc.context.bill_id is not None:
            extra["bill_id"] = exc.context.bill_id
    return extra


async def _handle_print_agent_error(request: Request, exc: PrintAgentError):
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(f"{exc.code}: {exc.message}", extra=_log_extra(request, exc))
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Rejected request body: {len(details)} invalid field(s)",
        extra=_log_extra(request),
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.ERROR.value,
                "details": details,
            },
        },
    )


async def _handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__}: {exc}",
        extra=_log_extra(request),
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )
