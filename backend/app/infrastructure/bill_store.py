"""Bill Store — durable, id-keyed, idempotent persistence of bills.

Invariants:
    - upsert is one INSERT ... ON CONFLICT DO UPDATE statement: all columns, including
      created_at, come from the newest payload; applying it twice equals applying it once
    - delete_before is one DELETE statement evaluated against committed rows, so a
      sweep never removes a record on a createdAt that an upsert already replaced
    - Reads rebuild Bills from the stored payload, never from summary columns
    - Every SQLAlchemy failure surfaces as StorageError (via DatabaseSessionManager)

Design Decisions:
    - Dialect-specific insert (sqlite / postgresql): both support ON CONFLICT natively,
      which avoids a select-then-write race between concurrent retries
"""

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.dialects import postgresql, sqlite

from app.core.domain_types import BillId, UserTotals
from app.infrastructure.database import DatabaseSessionManager
from app.models.bill import BillRecord
from app.schemas.bill import Bill

logger = logging.getLogger(__name__)

_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _record_values(bill: Bill) -> dict:
    return {
        "id": bill.id,
        "user": bill.user,
        "total": float(bill.total),
        "payload": bill.to_payload(),
        "created_at": bill.created_at,
    }


class BillStore:
    """SQL-backed BillRepository."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db
        insert = _INSERTS.get(db.dialect_name)
        if insert is None:
            raise ValueError(f"Unsupported database dialect: {db.dialect_name}")
        self._insert = insert

    def _upsert_statement(self, values: dict):
        stmt = self._insert(BillRecord).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=[BillRecord.id],
            set_={
                key: stmt.excluded[key] for key in values if key != "id"
            },
        )

    async def upsert(self, bill: Bill) -> None:
        """Insert or fully replace the bill with this id."""
        async with self._db.session("upsert") as db:
            await db.execute(self._upsert_statement(_record_values(bill)))
            await db.commit()
        logger.info("Bill stored", extra={"bill_id": bill.id})

    async def get(self, bill_id: BillId) -> Bill | None:
        async with self._db.session("get") as db:
            result = await db.execute(
                select(BillRecord.payload).where(BillRecord.id == bill_id),
            )
            payload = result.scalar_one_or_none()
        if payload is None:
            return None
        return Bill.model_validate(payload)

    async def query_window(self, since: int) -> list[Bill]:
        """All bills with createdAt >= since, oldest first."""
        async with self._db.session("query_window") as db:
            result = await db.execute(
                select(BillRecord.payload)
                .where(BillRecord.created_at >= since)
                .order_by(BillRecord.created_at),
            )
            payloads = result.scalars().all()
        return [Bill.model_validate(p) for p in payloads]

    async def aggregate(self, since: int) -> dict[str | None, UserTotals]:
        """Per-user count and summed total for bills with createdAt >= since."""
        async with self._db.session("aggregate") as db:
            result = await db.execute(
                select(
                    BillRecord.user,
                    func.count(BillRecord.id),
                    func.coalesce(func.sum(BillRecord.total), 0.0),
                )
                .where(BillRecord.created_at >= since)
                .group_by(BillRecord.user),
            )
            rows = result.all()
        return {
            user: UserTotals(count=int(count), sum=float(total))
            for user, count, total in rows
        }

    async def delete_before(self, cutoff: int) -> int:
        """Delete bills with createdAt < cutoff. Returns rows removed."""
        async with self._db.session("delete_before") as db:
            result = await db.execute(
                delete(BillRecord).where(BillRecord.created_at < cutoff),
            )
            await db.commit()
        return result.rowcount or 0
