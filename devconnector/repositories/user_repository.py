"""User repository for registration and login."""

from devconnector.logging import get_logger
from devconnector.models import User

from .base import BaseRepository

logger = get_logger("repository.user")


def normalize_email(email: str) -> str:
    """Emails are stored and looked up trimmed and lower-cased."""
    return email.strip().lower()


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    model = User

    def get_by_email(self, email: str) -> User | None:
        """Get user by email address (case-insensitive)."""
        return self.session.query(User).filter(User.email == normalize_email(email)).first()

    def create_user(self, name: str, email: str, password_hash: str, avatar: str | None) -> User:
        """Persist a newly registered user."""
        user = self.create(
            name=name.strip(),
            email=normalize_email(email),
            password_hash=password_hash,
            avatar=avatar,
        )
        logger.info("user_created", user_id=user.id)
        return user

    def delete_user(self, user: User) -> None:
        """Delete a user together with its profile. Posts are left in place."""
        self.session.delete(user)
        self.session.flush()
        logger.info("user_deleted", user_id=user.id)
