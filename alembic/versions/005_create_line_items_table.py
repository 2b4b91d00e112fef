"""create line items table

Revision ID: 005
Revises: 004
Create Date: 2025-03-05 19:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "line_items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("invoice_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("times", sa.Numeric(12, 4), nullable=False, server_default="1"),
        sa.Column("quantity", sa.String(20), nullable=False, server_default="x"),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("credit_account_id", sa.Integer(), nullable=False),
        sa.Column("debit_account_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["invoice_id"], ["invoices.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["credit_account_id"], ["accounts.id"]),
        sa.ForeignKeyConstraint(["debit_account_id"], ["accounts.id"]),
        # AUTOINCREMENT: ids of removed line items are never handed out again
        sqlite_autoincrement=True,
    )
    op.create_index("ix_line_items_id", "line_items", ["id"], unique=False)
    op.create_index("ix_line_items_invoice_id", "line_items", ["invoice_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_line_items_invoice_id", table_name="line_items")
    op.drop_index("ix_line_items_id", table_name="line_items")
    op.drop_table("line_items")
