"""
User registration endpoint.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import validated_body
from ..schemas import RegisterRequest, TokenResponse
from ..services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=TokenResponse)
def register(
    payload: RegisterRequest = Depends(validated_body(RegisterRequest, 422)),
    db: Session = Depends(get_db),
) -> TokenResponse:
    """Register a user and return a token for the new account."""
    token = user_service.register_user(db, payload)
    return TokenResponse(token=token)
