from sqlalchemy.orm import Session

import invoicing.repositories.account as account_repo
from invoicing.db.models.account import Account as AccountModel
from invoicing.errors import DuplicateResourceError, NotFoundError


def get_account(db: Session, code: str) -> AccountModel:
    account = account_repo.get_account_by_code(db, code)
    if not account:
        raise NotFoundError(f"Account with code {code} not found")
    return account


def create_account(
    db: Session,
    code: str,
    title: str,
    tags: list[str] | None = None,
    iban: str | None = None,
) -> AccountModel:
    """
    Create an account.

    - Enforces uniqueness of code (domain rule)
    - Normalizes tags (trimmed, empty ones dropped, no commas)

    Raises:
        DuplicateResourceError: If code already exists
    """
    if account_repo.get_account_by_code(db, code):
        raise DuplicateResourceError(f"An account with code {code} already exists")

    cleaned_tags = []
    for tag in tags or []:
        for part in tag.split(","):
            part = part.strip()
            if part and part not in cleaned_tags:
                cleaned_tags.append(part)

    return account_repo.create_account(
        db, code=code, title=title, tags=cleaned_tags, iban=iban
    )
