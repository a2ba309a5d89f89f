"""
Database session and base configuration.

Re-exports from the unified devconnector.db module.

Note: Database initialization is handled explicitly in main.py startup,
NOT at import time. This prevents issues with configuration loading order
and allows proper health checking before database access.
"""

from devconnector.db import Base, db, get_db

__all__ = ["Base", "db", "get_db"]
