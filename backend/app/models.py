"""
SQLAlchemy ORM models for the DevConnector backend.

Re-exports all models from the unified devconnector.models package.
"""

from devconnector.models import (
    Base,
    Education,
    Experience,
    Post,
    PostComment,
    PostLike,
    Profile,
    User,
)

__all__ = [
    "Base",
    "User",
    "Profile",
    "Experience",
    "Education",
    "Post",
    "PostLike",
    "PostComment",
]
