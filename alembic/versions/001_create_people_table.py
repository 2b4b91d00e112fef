"""create people table

Revision ID: 001
Revises:
Create Date: 2025-03-03 20:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Companies and customers share one table, told apart by "type"
    op.create_table(
        "people",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("street", sa.String(255), nullable=True),
        sa.Column("zip_code", sa.String(20), nullable=True),
        sa.Column("city", sa.String(255), nullable=True),
        sa.Column("email", sa.String(320), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "type IN ('person', 'company', 'customer')",
            name="ck_people_type",
        ),
    )
    op.create_index("ix_people_id", "people", ["id"], unique=False)
    op.create_index("ix_people_type", "people", ["type"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_people_type", table_name="people")
    op.drop_index("ix_people_id", table_name="people")
    op.drop_table("people")
