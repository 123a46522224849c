"""
Integration Supervisor Module

Provides action URI construction, token endpoint discovery and
password-grant authentication for the integration supervisor.
"""

from .auth_client import (
    AIQAuthClient,
    AuthState,
    Credentials,
    add_authentication_header,
    build_action_request,
    fetch_access_token,
)
from .classifier import classify_failure
from .errors import (
    AIQError,
    AuthenticationRejected,
    FailureKind,
    InvalidInput,
    MalformedResponse,
    TransportFailure,
)
from .executor import HttpExecutor, HttpResult
from .json_path import get_value, parse_document
from .uri_builder import build_action_uri, build_discovery_uri

__all__ = [
    "AIQAuthClient",
    "AuthState",
    "Credentials",
    "add_authentication_header",
    "build_action_request",
    "fetch_access_token",
    "AIQError",
    "AuthenticationRejected",
    "FailureKind",
    "InvalidInput",
    "MalformedResponse",
    "TransportFailure",
    "classify_failure",
    "HttpExecutor",
    "HttpResult",
    "get_value",
    "parse_document",
    "build_action_uri",
    "build_discovery_uri",
]
