"""
AIQ Link

Client-side helpers for the integration supervisor:
- Action URI construction
- Token endpoint discovery
- Password-grant authentication
"""

from .integration import (
    AIQAuthClient,
    add_authentication_header,
    build_action_uri,
    fetch_access_token,
)

__all__ = [
    "AIQAuthClient",
    "add_authentication_header",
    "build_action_uri",
    "fetch_access_token",
]

__version__ = '0.1.0'
