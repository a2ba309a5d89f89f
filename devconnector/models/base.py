"""
Base model class for SQLAlchemy ORM.

Re-exports the Base class from the database module for convenience.
"""

from datetime import datetime, timezone

from devconnector.db import Base


def utcnow() -> datetime:
    """Timezone-aware UTC now, used as column default."""
    return datetime.now(timezone.utc)


__all__ = ["Base", "utcnow"]
