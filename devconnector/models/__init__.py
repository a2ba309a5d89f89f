"""
Unified SQLAlchemy models for DevConnector.

Single source of truth for all database models. Used by both the API and
the migrations.

Usage:
    from devconnector.models import User, Profile, Post
"""

from .base import Base
from .post import Post, PostComment, PostLike
from .profile import Education, Experience, Profile
from .user import User

__all__ = [
    # Base
    "Base",
    # User
    "User",
    # Profile
    "Profile",
    "Experience",
    "Education",
    # Post
    "Post",
    "PostLike",
    "PostComment",
]
