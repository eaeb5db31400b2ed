"""Create bills table.

Revision ID: 001_create_bills
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_create_bills"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # databases bootstrapped by the service at startup already have the table
    if sa.inspect(op.get_bind()).has_table("bills"):
        return
    op.create_table(
        "bills",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("user", sa.String(255), nullable=True),
        sa.Column("total", sa.Float, nullable=False),
        sa.Column("payload", sa.JSON, nullable=False),
        sa.Column("created_at", sa.BigInteger, nullable=False),
    )
    op.create_index("ix_bills_user", "bills", ["user"])
    op.create_index("ix_bills_created_at", "bills", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_bills_created_at", table_name="bills")
    op.drop_index("ix_bills_user", table_name="bills")
    op.drop_table("bills")
