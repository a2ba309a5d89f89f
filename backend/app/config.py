"""
Application configuration using Pydantic settings.

Re-exports from the devconnector.config module so routers can use
relative imports:
    from ..config import get_settings
"""

from devconnector.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
