"""Bill ORM — one row per client bill id, holding summary columns plus the full payload.

Invariants:
    - id is the client-generated primary key (no server default)
    - payload is the authoritative copy; user/total/created_at are derived from it
    - created_at is UTC epoch milliseconds, indexed for window queries and sweeps

Design Decisions:
    - BigInteger epoch ms over DateTime: matches the wire format exactly, no timezone
      conversion on either side of the boundary
    - JSON column for payload: stores the bill as the client sent it (extras included)
"""

from sqlalchemy import BigInteger, Float, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class BillRecord(Base):
    """Persisted bill — summary columns plus the full payload."""
    __tablename__ = "bills"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    user: Mapped[str | None] = mapped_column(
        String(255), nullable=True, index=True,
    )
    total: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[int] = mapped_column(
        BigInteger, nullable=False, index=True,
    )
