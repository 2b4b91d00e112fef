"""create accounts table

Revision ID: 003
Revises: 002
Create Date: 2025-03-04 19:30:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("code", sa.String(20), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("tags", sa.String(), nullable=False, server_default=""),
        sa.Column("iban", sa.String(34), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_accounts_id", "accounts", ["id"], unique=False)
    # Line items reference accounts by code, so it must be unique
    op.create_index("ix_accounts_code", "accounts", ["code"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_accounts_code", table_name="accounts")
    op.drop_index("ix_accounts_id", table_name="accounts")
    op.drop_table("accounts")
