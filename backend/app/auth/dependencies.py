"""
Authentication dependencies for FastAPI routes.

Supports both:
- Bearer token in Authorization header
- ``x-auth-token`` header (used by older clients)

The token is verified without touching the database; the decoded identity
is handed to handlers as an explicit ``AuthContext``.
"""

from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from devconnector.constants import MSG_INVALID_TOKEN, MSG_NO_TOKEN, MSG_TOKEN_USER_MISSING
from devconnector.repositories import UserRepository

from ..database import get_db
from ..models import User
from .jwt import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth", auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Identity of the caller, built once per request from the verified token."""

    user_id: int
    token_id: str | None = None


def get_token_from_request(
    token_header: str | None = Depends(oauth2_scheme),
    x_auth_token: str | None = Header(None, alias="x-auth-token"),
) -> str:
    """
    Extract JWT token from request.

    Checks in order:
    1. Authorization header (Bearer token)
    2. x-auth-token header
    """
    if token_header:
        return token_header

    if x_auth_token:
        return x_auth_token

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=MSG_NO_TOKEN,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_auth_context(token: str = Depends(get_token_from_request)) -> AuthContext:
    """
    Verify signature and expiry, then expose the subject as an AuthContext.

    Raises 401 when the token is invalid, expired, or carries no usable subject.
    """
    invalid = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=MSG_INVALID_TOKEN,
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_access_token(token)
    except ValueError:
        raise invalid from None

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise invalid from None

    return AuthContext(user_id=user_id, token_id=payload.get("jti"))


def get_current_user(
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
) -> User:
    """
    Load the user the token refers to.

    A well-signed token may outlive its account; that case is a 400, not a 401.
    """
    user = UserRepository(db).get_by_id(auth.user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=MSG_TOKEN_USER_MISSING,
        )
    return user
