"""
DevConnector Core Library.

This package provides the core functionality for DevConnector,
including configuration, database management, models, repositories,
the GitHub adapter, logging, and the client action layer.

Usage:
    # Database
    from devconnector.db import db, get_db
    from devconnector.models import User, Profile, Post
    from devconnector.repositories import ProfileRepository, PostRepository

    # Config
    from devconnector.config import get_settings, Settings

    # Logging
    from devconnector.logging import get_logger, configure_logging
"""

__version__ = "1.0.0"

# Users should import directly from submodules:
#   from devconnector.db import db
#   from devconnector.config import get_settings
#   from devconnector.logging import get_logger
