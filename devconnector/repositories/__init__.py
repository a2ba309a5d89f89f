"""
Repository pattern implementations for data access.

Repositories provide a clean abstraction over database operations.

Usage:
    from devconnector.repositories import ProfileRepository
    from devconnector.db import db

    with db.session() as session:
        repo = ProfileRepository(session)
        profile, created = repo.upsert_by_owner(user_id, "Developer", ["python"])
"""

from .base import BaseRepository
from .post_repository import PostRepository
from .profile_repository import ProfileRepository
from .user_repository import UserRepository, normalize_email

__all__ = [
    "BaseRepository",
    "UserRepository",
    "ProfileRepository",
    "PostRepository",
    "normalize_email",
]
