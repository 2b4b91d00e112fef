from fastapi import APIRouter, Depends, Form
from sqlalchemy.orm import Session

from invoicing.api.deps import get_db, get_current_user
from invoicing.services.auth import authenticate
from invoicing.schemas.user import Token, User

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=Token)
def login(
    username: str = Form(...),  # OAuth2 uses "username", but we treat it as email
    password: str = Form(...),
    db: Session = Depends(get_db),
):
    """
    Login endpoint - returns JWT token.
    Uses form data for OAuth2 compatibility (Swagger UI authorization).
    The 'username' field should contain the user's email address.
    """
    access_token, user = authenticate(db, email=username, password=password)
    return Token(
        access_token=access_token,
        token_type="bearer",
        user=User.model_validate(user),
    )


@router.get("/me", response_model=User)
def get_current_user_info(current_user=Depends(get_current_user)):
    """Get current authenticated user information."""
    return User.model_validate(current_user)
