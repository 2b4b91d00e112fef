import logging

from sqlalchemy.orm import Session

import invoicing.repositories.user as user_repo
from invoicing.core.security import create_access_token, verify_password
from invoicing.db.models.user import User as UserModel
from invoicing.errors import UnauthorizedError

logger = logging.getLogger(__name__)


def authenticate(db: Session, email: str, password: str) -> tuple[str, UserModel]:
    """
    Check credentials and issue an access token.

    Returns:
        Tuple of (access token, user)

    Raises:
        UnauthorizedError: If the email is unknown or the password is wrong
    """
    user = user_repo.get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Failed login attempt for %s", email)
        raise UnauthorizedError("Incorrect email or password")

    return create_access_token(data={"sub": user.id}), user
