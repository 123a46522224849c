"""
URI construction for integration supervisor actions.
"""

import logging
from typing import Optional, Tuple
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

from .errors import InvalidInput, validate

logger = logging.getLogger(__name__)

URL_PREFIX = "integration/"


def validate_base_url(base_url: Optional[str], name: str = "URL") -> str:
    """
    Check that ``base_url`` is a non-blank absolute http(s) URL.

    Raises:
        InvalidInput: If the URL is missing, blank or not absolute
    """
    validate(name, base_url)
    try:
        parts = urlsplit(base_url.strip())
    except ValueError as e:
        raise InvalidInput(f"Invalid {name}: {e}") from e

    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise InvalidInput(f"Invalid {name}: {base_url}")
    return base_url.strip()


def _encode_segment(value: str) -> str:
    try:
        return quote(value, safe="")
    except UnicodeEncodeError as e:
        raise InvalidInput(f"Cannot encode [{value!r}]: {e}") from e


def _encode_query(params) -> str:
    try:
        return urlencode(list(params))
    except (TypeError, ValueError, UnicodeEncodeError) as e:
        raise InvalidInput(f"Invalid query parameters: {e}") from e


def build_action_uri(
    base_url: Optional[str],
    org_name: Optional[str],
    action: Optional[str],
    *params: Tuple[str, str],
) -> str:
    """
    Build the URI of an integration supervisor action.

    The result has the form ``<base>/integration/<org>/<action>`` with both
    segments percent-encoded. Any path on the base URL is kept; its query
    string and fragment are not.

    Args:
        base_url: URL of the integration supervisor
        org_name: Organization the action belongs to
        action: Name of the action to execute
        params: Optional ``(name, value)`` query parameters, order preserved

    Returns:
        Absolute action URI

    Raises:
        InvalidInput: If any part is missing, blank or cannot be encoded
    """
    base_url = validate_base_url(base_url)
    validate("organization", org_name)
    validate("action", action)

    parts = urlsplit(base_url)
    # Joined by hand so "." and ".." names are not resolved as dot segments
    path = (
        f"{parts.path.rstrip('/')}/{URL_PREFIX}"
        f"{_encode_segment(org_name)}/{_encode_segment(action)}"
    )
    query = _encode_query(params) if params else ""
    uri = urlunsplit((parts.scheme, parts.netloc, path, query, ""))

    logger.debug(f"Built action URI: {uri}")
    return uri


def build_discovery_uri(base_url: Optional[str], org_name: Optional[str]) -> str:
    """
    Build the token discovery URI ``<base>?orgName=<org>``.

    An existing query on the base URL is kept and extended; a fragment is
    dropped so the organization always reaches the server.

    Raises:
        InvalidInput: If the base URL or organization is invalid
    """
    base_url = validate_base_url(base_url)
    validate("organization", org_name)

    parts = urlsplit(base_url)
    org_query = _encode_query([("orgName", org_name)])
    query = f"{parts.query}&{org_query}" if parts.query else org_query
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, ""))
