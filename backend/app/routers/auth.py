"""
Authentication router: token issue and current-user lookup.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth.dependencies import get_current_user
from ..database import get_db
from ..dependencies import validated_body
from ..models import User
from ..schemas import LoginRequest, TokenResponse, UserResponse
from ..services import user_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("", response_model=UserResponse)
def get_authenticated_user(current_user: User = Depends(get_current_user)) -> UserResponse:
    """Return the user the token belongs to, without the password hash."""
    return UserResponse.model_validate(current_user)


@router.post("", response_model=TokenResponse)
def login(
    payload: LoginRequest = Depends(validated_body(LoginRequest, 422)),
    db: Session = Depends(get_db),
) -> TokenResponse:
    """Exchange email and password for a token."""
    token = user_service.authenticate_user(db, payload)
    return TokenResponse(token=token)
