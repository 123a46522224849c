"""
JSON path extraction for integration supervisor responses.
"""

import json
import logging
from typing import Any

from .errors import MalformedResponse

logger = logging.getLogger(__name__)


def parse_document(body: bytes) -> Any:
    """
    Parse a response body as JSON.

    Args:
        body: Raw response body

    Returns:
        Parsed JSON document

    Raises:
        MalformedResponse: If the body is not valid JSON
    """
    try:
        return json.loads(body)
    except (TypeError, ValueError) as e:
        raise MalformedResponse(f"Response is not a valid JSON document: {e}") from e


def get_value(document: Any, *path: str) -> str:
    """
    Walk ``document`` field by field and return the terminal value as text.

    Missing fields and values of the wrong type are both reported as
    ``MalformedResponse``; no default is ever substituted.

    Args:
        document: Parsed JSON document
        path: Field names to descend through, outermost first

    Returns:
        Text of the terminal field (numbers are converted with ``str``)

    Raises:
        MalformedResponse: If any field is absent or the terminal is not a scalar
    """
    node = document
    for field in path:
        if not isinstance(node, dict) or field not in node:
            raise MalformedResponse(f"Field not found in the response: {'.'.join(path)}")
        node = node[field]

    if isinstance(node, str):
        return node
    if isinstance(node, (int, float)) and not isinstance(node, bool):
        return str(node)

    raise MalformedResponse(
        f"Field {'.'.join(path)} is not a text value (got {type(node).__name__})"
    )
