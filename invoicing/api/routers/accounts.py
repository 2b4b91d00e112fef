from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from invoicing.api.deps import get_db, get_current_user
from invoicing.db.models.user import User
import invoicing.repositories.account as account_repo
from invoicing.services.account import create_account, get_account
from invoicing.schemas.account import Account, AccountCreate

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.post("", response_model=Account, status_code=status.HTTP_201_CREATED)
def create_new_account(
    account_data: AccountCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Create a new account. Codes are unique.
    """
    account = create_account(
        db,
        code=account_data.code,
        title=account_data.title,
        tags=account_data.tags,
        iban=account_data.iban,
    )
    return Account.model_validate(account)


@router.get("", response_model=list[Account])
def get_all_accounts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    accounts = account_repo.get_all_accounts(db)
    return [Account.model_validate(account) for account in accounts]


@router.get("/{code}", response_model=Account)
def get_account_by_code(
    code: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Get an account by its code (e.g. 1100), not by its internal ID.
    """
    return Account.model_validate(get_account(db, code))
