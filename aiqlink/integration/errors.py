"""
Failure taxonomy for the integration supervisor client.

Every failure raised by this package is an ``AIQError`` carrying a
``FailureKind`` and a human-readable message. Input problems are detected
before any network call; the other kinds are classified after I/O.
"""

from enum import Enum
from http import HTTPStatus
from typing import Optional


class FailureKind(str, Enum):
    """Kinds of failure an authentication attempt can end with."""

    INVALID_INPUT = "invalid_input"
    TRANSPORT_FAILURE = "transport_failure"
    AUTHENTICATION_REJECTED = "authentication_rejected"
    MALFORMED_RESPONSE = "malformed_response"

class AIQError(Exception):
    """Base class for all classified failures."""

    kind: FailureKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class InvalidInput(AIQError, ValueError):
    """A required parameter is missing, blank or cannot be encoded."""

    kind = FailureKind.INVALID_INPUT

class TransportFailure(AIQError, RuntimeError):
    """The HTTP request could not be completed."""

    kind = FailureKind.TRANSPORT_FAILURE

class MalformedResponse(AIQError, RuntimeError):
    """The response body is not what the protocol expects."""

    kind = FailureKind.MALFORMED_RESPONSE

class AuthenticationRejected(AIQError, RuntimeError):
    """The service answered with a non-200 status."""

    kind = FailureKind.AUTHENTICATION_REJECTED

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code

    def __str__(self) -> str:
        return (
            f"Failed to authenticate, the status code is [{self.status_code}] "
            f"and error message is [{self.message}]"
        )

def validate(name: str, value: Optional[str]) -> str:
    """
    Validate that a required string parameter is present and not blank.

    Args:
        name: Parameter name used in the error message
        value: Value to check

    Returns:
        The value unchanged

    Raises:
        InvalidInput: If the value is None or blank
    """
    if value is None or not str(value).strip():
        raise InvalidInput(f"Invalid {name}")
    return value

def reason_phrase(status_code: int, reason: Optional[str]) -> str:
    """Reason phrase sent by the server, or the standard one for the code."""
    if reason:
        return reason
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return f"HTTP {status_code}"
