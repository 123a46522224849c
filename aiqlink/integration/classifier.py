"""
Classification of non-200 integration supervisor responses.
"""

import logging
from http import HTTPStatus

from .errors import AuthenticationRejected, MalformedResponse, reason_phrase
from .executor import HttpResult
from .json_path import get_value, parse_document

logger = logging.getLogger(__name__)

ERROR_DESCRIPTION_FIELD = "error_description"


def classify_failure(result: HttpResult) -> AuthenticationRejected:
    """
    Turn a non-200 ``HttpResult`` into an ``AuthenticationRejected`` failure.

    For 400 responses the ``error_description`` field of the JSON body is
    used as the message when it can be read; every other status (and a 400
    without a readable description) uses the HTTP reason phrase.
    """
    message = None
    if result.status_code == HTTPStatus.BAD_REQUEST:
        try:
            message = get_value(parse_document(result.body), ERROR_DESCRIPTION_FIELD)
        except MalformedResponse as e:
            logger.debug(f"No error description in 400 response: {e}")

    if not message:
        message = reason_phrase(result.status_code, result.reason)

    return AuthenticationRejected(result.status_code, message)
