"""
Security module for DevConnector.

Provides:
- Password hashing (bcrypt)
- Default avatar derivation
"""

from .avatar import gravatar_url
from .passwords import get_password_hash, verify_password

__all__ = ["get_password_hash", "gravatar_url", "verify_password"]
