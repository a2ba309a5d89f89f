"""
DevConnector client: API wrapper, state store and actions.
"""

from .actions import Actions, flatten_social
from .api import APIError, DevConnectorAPI
from .store import Alert, Store, TokenFile

__all__ = [
    "Actions",
    "APIError",
    "Alert",
    "DevConnectorAPI",
    "Store",
    "TokenFile",
    "flatten_social",
]
