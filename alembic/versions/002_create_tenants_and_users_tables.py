"""create tenants and users tables

Revision ID: 002
Revises: 001
Create Date: 2025-03-03 21:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from passlib.context import CryptContext

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def upgrade() -> None:
    op.create_table(
        "tenants",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("company_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["company_id"], ["people.id"]),
    )
    op.create_index("ix_tenants_id", "tenants", ["id"], unique=False)

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"]),
    )
    op.create_index("ix_users_id", "users", ["id"], unique=False)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # Get settings from environment (will be loaded by Alembic env.py)
    from invoicing.core.config import settings

    connection = op.get_bind()

    # Seed the tenant's own company
    connection.execute(
        sa.text("INSERT INTO people (type, name) VALUES ('company', :name)").bindparams(
            name=settings.company_name
        )
    )
    company_id = connection.execute(
        sa.text("SELECT MAX(id) FROM people WHERE type = 'company'")
    ).scalar_one()

    connection.execute(
        sa.text("INSERT INTO tenants (company_id) VALUES (:company_id)").bindparams(
            company_id=company_id
        )
    )
    tenant_id = connection.execute(sa.text("SELECT MAX(id) FROM tenants")).scalar_one()

    # Hash the password from settings
    password_hash = pwd_context.hash(settings.first_admin_password)

    # Insert first admin user
    connection.execute(
        sa.text(
            """
            INSERT INTO users (email, password_hash, tenant_id)
            VALUES (:email, :password_hash, :tenant_id)
            """
        ).bindparams(
            email=settings.first_admin_email,
            password_hash=password_hash,
            tenant_id=tenant_id,
        )
    )


def downgrade() -> None:
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_id", table_name="users")
    op.drop_table("users")
    op.drop_index("ix_tenants_id", table_name="tenants")
    op.drop_table("tenants")
    op.execute(sa.text("DELETE FROM people WHERE type = 'company'"))
