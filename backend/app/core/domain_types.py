"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - BillId is the client-generated key, stable across retries
    - EpochMillis is always UTC epoch milliseconds (matches the front end's Date.now())
    - A PrintResult is either printed or carries exactly one PrintFailure

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - PrintResult as a value, not an exception: printer failures are expected outcomes
      after the bill is stored, and the caller only needs the warning text
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

BillId = NewType("BillId", str)


# ─── Value Types ─────────────────────────────────────────────────

EpochMillis = NewType("EpochMillis", int)


# ─── Enums ───────────────────────────────────────────────────────

class PrintFailure(str, Enum):
    """Why a best-effort print did not reach paper."""
    UNAVAILABLE = "unavailable"
    EXECUTION_ERROR = "execution_error"
    TIMEOUT = "timeout"


class PrinterType(str, Enum):
    """Supported printer connections — maps to PRINTER_TYPE setting."""
    FILE = "file"
    USB = "usb"
    NETWORK = "network"
    DUMMY = "dummy"
    NONE = "none"


# ─── Results ─────────────────────────────────────────────────────

_WARNINGS = {
    PrintFailure.UNAVAILABLE: "printer not available",
    PrintFailure.EXECUTION_ERROR: "printing failed",
    PrintFailure.TIMEOUT: "printing timed out",
}


@dataclass(frozen=True)
class PrintResult:
    """Outcome of one print attempt."""
    printed: bool
    failure: PrintFailure | None = None
    detail: str | None = None

    @classmethod
    def ok(cls) -> "PrintResult":
        return cls(printed=True)

    @classmethod
    def failed(cls, failure: PrintFailure, detail: str | None = None) -> "PrintResult":
        return cls(printed=False, failure=failure, detail=detail)

    @property
    def warning(self) -> str | None:
        """Client-facing warning; None when the receipt printed."""
        if self.failure is None:
            return None
        return _WARNINGS[self.failure]


@dataclass(frozen=True)
class UserTotals:
    """Per-user bill count and summed totals inside a report window."""
    count: int
    sum: float
