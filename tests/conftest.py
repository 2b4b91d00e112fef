import os
import shutil
import tempfile
from decimal import Decimal

# Settings are read at import time, so the environment must be set first
_test_db_dir = tempfile.mkdtemp()
_test_db_path = os.path.join(_test_db_dir, "test_invoicing.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_path}"
os.environ["SECRET_KEY"] = "test-secret-key-min-32-characters-long-for-testing"
os.environ["ALGORITHM"] = "HS256"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["FIRST_ADMIN_EMAIL"] = "admin@test.example.com"
os.environ["FIRST_ADMIN_PASSWORD"] = "AdminTest123!"
os.environ["COMPANY_NAME"] = "Test Company AG"

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session

from invoicing.main import app
from invoicing.core.security import create_access_token
from invoicing.db.models.user import User as UserModel


@pytest.fixture(scope="function")
def db_session():
    """Migrate a throwaway SQLite database to head and hand out a session on it."""
    db_dir = tempfile.mkdtemp()
    db_path = os.path.join(db_dir, "invoicing.db")
    db_url = f"sqlite:///{db_path}"

    engine = create_engine(db_url, connect_args={"check_same_thread": False})

    # WAL keeps the TestClient thread and the test thread from locking each other out
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    # Migrations also seed the tenant company and the admin user
    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", db_url)
    command.upgrade(alembic_cfg, "head")

    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
        shutil.rmtree(db_dir, ignore_errors=True)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database dependency override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    from invoicing.api.deps import get_db

    app.dependency_overrides[get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session to match test naming conventions."""
    return db_session


@pytest.fixture(scope="function")
def admin_user(db: Session) -> dict:
    """The admin user seeded by migration 002."""
    from invoicing.repositories.user import get_user_by_email
    from invoicing.core.config import settings

    user = get_user_by_email(db, settings.first_admin_email)
    if not user:
        raise RuntimeError("Admin user not found. Check migration 002.")

    return {
        "id": user.id,
        "email": user.email,
        "password": settings.first_admin_password,  # Plaintext password from env
        "tenant_id": user.tenant_id,
    }


@pytest.fixture(scope="function")
def admin_token(admin_user: dict) -> str:
    """Get JWT token for admin user."""
    return create_access_token(data={"sub": admin_user["id"]})


@pytest.fixture(scope="function")
def auth_headers(admin_token: str) -> dict:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture(scope="function")
def tenant(db: Session, admin_user: dict):
    """The seeded tenant the admin user belongs to."""
    return db.query(UserModel).filter(UserModel.id == admin_user["id"]).one().tenant


@pytest.fixture(scope="function")
def company(tenant):
    """The tenant's own company."""
    return tenant.company


@pytest.fixture(scope="function")
def customer(db: Session):
    """Create a customer for testing."""
    from invoicing.repositories.person import create_customer

    return create_customer(
        db, name="Banana Republic GmbH", street="Hauptstrasse 1", zip_code="8000", city="Zürich"
    )


@pytest.fixture(scope="function")
def make_account(db: Session):
    """Factory creating accounts by code."""
    from invoicing.repositories.account import create_account

    def _make_account(code: str, title: str | None = None, tags: list[str] | None = None, iban: str | None = None):
        return create_account(db, code=code, title=title or f"Account {code}", tags=tags, iban=iban)

    return _make_account


@pytest.fixture(scope="function")
def make_invoice(db: Session, tenant):
    """Factory creating invoices through the service layer."""
    from invoicing.schemas.invoice import InvoiceCreate
    from invoicing.services.invoice import create_invoice

    def _make_invoice(address, type: str = "debit", line_items: list[dict] | None = None, **fields):
        data = {
            "title": "Invoice 2015-10",
            "address_id": address.id,
            "type": type,
            "state": "booked",
            "value_date": "2015-10-01",
            "due_date": "2015-10-31",
            "line_items": line_items or [],
        }
        data.update(fields)
        return create_invoice(db, tenant, InvoiceCreate(**data))

    return _make_invoice


@pytest.fixture(scope="function")
def make_line_item(db: Session):
    """Factory adding a committed line item to an invoice."""
    from invoicing.repositories.line_item import create_line_item

    def _make_line_item(invoice, credit_account, debit_account, title: str = "Banana", times="1", price="1.50"):
        line_item = create_line_item(
            db,
            invoice,
            title=title,
            times=Decimal(times),
            quantity="x",
            price=Decimal(price),
            credit_account=credit_account,
            debit_account=debit_account,
        )
        db.commit()
        db.refresh(line_item)
        return line_item

    return _make_line_item
