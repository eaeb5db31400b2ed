"""Bill Schemas — Pydantic models for the bill payload and endpoint responses.

Invariants:
    - Bill.id is optional at parse time and numeric ids are kept as text; the
      service rejects a missing id with a BillValidationError so the client gets
      one uniform 400 shape
    - Unknown fields are kept (extra="allow"): the stored payload is authoritative
      for reprint and must round-trip what the client sent
    - LineItem.total is derived (qty × price) when the client omits it
    - Wire names stay camelCase (createdAt) to match the front end

Design Decisions:
    - int | float for amounts: keeps integers as integers in the stored JSON
    - field_validator for range checks over Field(gt=...): constraints on unions are
      not portable across pydantic releases
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Number = int | float


class LineItem(BaseModel):
    """One priced entry within a bill."""
    model_config = ConfigDict(extra="allow")

    desc: str = ""
    qty: Number
    price: Number
    total: Number | None = None

    @field_validator("qty")
    @classmethod
    def qty_positive(cls, v: Number) -> Number:
        if v <= 0:
            raise ValueError("qty must be positive")
        return v

    @field_validator("price")
    @classmethod
    def price_non_negative(cls, v: Number) -> Number:
        if v < 0:
            raise ValueError("price cannot be negative")
        return v

    @model_validator(mode="after")
    def derive_total(self) -> "LineItem":
        if self.total is None:
            self.total = self.qty * self.price
        return self


class Bill(BaseModel):
    """Finalized sale record as sent by the cart UI."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | None = None
    user: str | None = None
    lines: list[LineItem] = Field(default_factory=list)
    total: Number = 0
    created_at: int | None = Field(None, alias="createdAt")

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, v):
        # numeric ids from other clients are stored as their string form
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    def stamped(self, now: int) -> "Bill":
        """Copy with createdAt filled in when the client left it out."""
        if self.created_at is not None:
            return self
        return self.model_copy(update={"created_at": now})

    def to_payload(self) -> dict:
        """Full JSON payload in wire (camelCase) form, extras included."""
        return self.model_dump(mode="json", by_alias=True)


# --- Responses ----------------------------------------------------------------

class SubmitResponse(BaseModel):
    ok: bool = True


class PrintResponse(BaseModel):
    ok: bool = True
    printed: bool
    warning: str | None = None


class PrinterStatusResponse(BaseModel):
    connected: bool


class ReportRow(BaseModel):
    user: str | None
    count: int
    sum: float


class ReportResponse(BaseModel):
    rows: list[ReportRow]
