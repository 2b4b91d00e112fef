from collections.abc import Iterable

from sqlalchemy.orm import Session

from invoicing.db.models.account import Account as AccountModel


def get_account_by_code(db: Session, code: str) -> AccountModel | None:
    """Get an account by its human-readable code."""
    return db.query(AccountModel).filter(AccountModel.code == code).first()


def get_accounts_by_codes(db: Session, codes: Iterable[str]) -> dict[str, AccountModel]:
    """Get the accounts for the given codes, keyed by code. Unknown codes are absent."""
    codes = set(codes)
    if not codes:
        return {}
    accounts = db.query(AccountModel).filter(AccountModel.code.in_(codes)).all()
    return {account.code: account for account in accounts}


def get_all_accounts(db: Session) -> list[AccountModel]:
    """Get all accounts, sorted by code."""
    return db.query(AccountModel).order_by(AccountModel.code).all()


def get_account_by_tag(db: Session, tag: str) -> AccountModel | None:
    """Get the first account (by code) carrying the given tag."""
    candidates = (
        db.query(AccountModel)
        .filter(AccountModel.tags.contains(tag))
        .order_by(AccountModel.code)
        .all()
    )
    for account in candidates:
        # contains() is a substring match, confirm the exact tag
        if tag in account.tag_list:
            return account
    return None


def create_account(
    db: Session,
    code: str,
    title: str,
    tags: list[str] | None = None,
    iban: str | None = None,
) -> AccountModel:
    """Create a new account in the database. Pure data access - no business logic."""
    db_account = AccountModel(
        code=code,
        title=title,
        tags=",".join(tags or []),
        iban=iban,
    )
    db.add(db_account)
    db.commit()
    db.refresh(db_account)
    return db_account
