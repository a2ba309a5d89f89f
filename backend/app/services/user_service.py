"""
Registration and login.
"""

from sqlalchemy.orm import Session

from devconnector.config import get_settings
from devconnector.constants import MSG_USER_EXISTS
from devconnector.exceptions import ConflictError, InvalidCredentialsError
from devconnector.logging import get_logger
from devconnector.repositories import UserRepository
from devconnector.security import get_password_hash, gravatar_url, verify_password
from devconnector.security.passwords import pwd_context

from ..auth.jwt import create_user_token
from ..schemas import LoginRequest, RegisterRequest

logger = get_logger("user_service")


def register_user(db: Session, payload: RegisterRequest) -> str:
    """
    Create an account and return a signed token for it.

    Raises:
        ConflictError: If the email is already registered
    """
    repo = UserRepository(db)
    if repo.get_by_email(payload.email):
        logger.info("registration_rejected", reason="email_exists")
        raise ConflictError(MSG_USER_EXISTS)

    settings = get_settings()
    avatar = gravatar_url(
        payload.email,
        size=settings.gravatar_size,
        default=settings.gravatar_default,
        rating=settings.gravatar_rating,
    )
    user = repo.create_user(
        name=payload.name,
        email=payload.email,
        password_hash=get_password_hash(payload.password),
        avatar=avatar,
    )
    db.commit()

    logger.info("user_registered", user_id=user.id)
    return create_user_token(user.id)


def authenticate_user(db: Session, payload: LoginRequest) -> str:
    """
    Check credentials and return a signed token.

    Unknown email and wrong password raise the same error; a dummy hash
    check keeps the two paths comparable in timing.
    """
    user = UserRepository(db).get_by_email(payload.email)
    if user is None:
        pwd_context.dummy_verify()
        logger.info("login_failed")
        raise InvalidCredentialsError()

    if not verify_password(payload.password, user.password_hash):
        logger.info("login_failed", user_id=user.id)
        raise InvalidCredentialsError()

    logger.info("user_logged_in", user_id=user.id)
    return create_user_token(user.id)
