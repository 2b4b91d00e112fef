from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from invoicing.db.base import SessionLocal
from invoicing.db.models.tenant import Tenant
from invoicing.db.models.user import User
from invoicing.core.security import decode_token
import invoicing.repositories.user as user_repo

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _credentials_exception(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Get the current authenticated user from JWT token."""
    payload = decode_token(token)
    if payload is None:
        raise _credentials_exception()

    # Only access tokens authenticate requests
    if payload.get("type") != "access":
        raise _credentials_exception()

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        raise _credentials_exception()

    user = user_repo.get_user_by_id(db, user_id)
    if user is None:
        raise _credentials_exception("User not found")

    return user


def get_current_tenant(current_user: User = Depends(get_current_user)) -> Tenant:
    """The tenant whose company issues debit invoices and receives credit invoices."""
    return current_user.tenant
