"""
Integration Supervisor Authentication Client

Implements token endpoint discovery and the password-grant token exchange
used to authenticate against the integration supervisor.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from http import HTTPStatus
from typing import Optional, Sequence, Tuple
from urllib.parse import urlencode

import requests

from .classifier import classify_failure
from .errors import InvalidInput, MalformedResponse, validate
from .executor import HttpExecutor, HttpResult
from .json_path import get_value, parse_document
from .uri_builder import build_action_uri, build_discovery_uri, validate_base_url

logger = logging.getLogger(__name__)

ACCESS_TOKEN_FIELD = "access_token"
TOKEN_LINK_PATH = ("links", "token")
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
GRANT_TYPE = "password"
SCOPE = "integration"


class AuthState(str, Enum):
    """Steps of one authentication attempt, in order."""

    DISCOVERY = "discovery"
    EXCHANGE = "exchange"
    DONE = "done"


@dataclass(frozen=True)
class Credentials:
    """Username and password for a single authentication attempt."""

    username: str
    password: str = field(repr=False)

    def __post_init__(self):
        # Unencodable values must fail before the discovery request
        self.form_body()

    def form_body(self) -> str:
        """
        URL-encoded password-grant form, fields always in the same order.

        Raises:
            InvalidInput: If the username or password cannot be encoded
        """
        try:
            return urlencode([
                ("grant_type", GRANT_TYPE),
                ("scope", SCOPE),
                ("username", self.username),
                ("password", self.password),
            ])
        except UnicodeEncodeError as e:
            raise InvalidInput(f"Cannot encode credentials: {e.reason}") from e


class AIQAuthClient:
    """
    Client for authenticating against the integration supervisor.

    Each call to ``fetch_access_token`` performs a fresh discovery and
    exchange; nothing is cached between calls.
    """

    def __init__(self, executor: Optional[HttpExecutor] = None):
        """
        Initialize the client.

        Args:
            executor: HTTP executor to send requests with (a default one if omitted)
        """
        self.executor = executor or HttpExecutor()

    def fetch_access_token(
        self,
        base_url: Optional[str],
        username: Optional[str],
        password: Optional[str],
        org_name: Optional[str],
    ) -> str:
        """
        Authenticate a user within an organization and return the access token.

        Args:
            base_url: Token discovery URL of the integration supervisor
            username: Name of the user to authenticate
            password: Password of the user
            org_name: Organization the user belongs to

        Returns:
            Non-empty access token string

        Raises:
            InvalidInput: If any argument is missing or blank (no request is sent)
            TransportFailure: If a request could not be completed
            AuthenticationRejected: If the service answers with a non-200 status
            MalformedResponse: If a response lacks the expected fields
        """
        validate("URL", base_url)
        validate("username", username)
        validate("password", password)
        validate("organization", org_name)
        discovery_uri = build_discovery_uri(base_url, org_name)
        credentials = Credentials(username, password)

        state = AuthState.DISCOVERY
        logger.debug(f"Authentication state: {state.value}")
        token_url = self._discover(discovery_uri)

        state = AuthState.EXCHANGE
        logger.debug(f"Authentication state: {state.value}")
        logger.debug(f"Authenticating user [{credentials.username}] in org [{org_name}]")
        token = self.exchange_credentials(token_url, credentials)

        state = AuthState.DONE
        logger.debug(f"Authentication state: {state.value}")
        return token

    def discover_token_url(self, base_url: Optional[str], org_name: Optional[str]) -> str:
        """
        Read the token endpoint from the root document of the service.

        Returns:
            Absolute URL found at ``links.token``

        Raises:
            InvalidInput: If the base URL or organization is invalid
            MalformedResponse: If the link is missing, empty or not absolute
        """
        return self._discover(build_discovery_uri(base_url, org_name))

    def _discover(self, discovery_uri: str) -> str:
        logger.info(f"Discovering token endpoint at: {discovery_uri}")
        result = self.executor.execute("GET", discovery_uri)
        token_url = self._extract(result, *TOKEN_LINK_PATH)

        try:
            token_url = validate_base_url(token_url, name="token link")
        except ValueError as e:
            raise MalformedResponse(f"Discovered token link is not an absolute URL: {token_url!r}") from e

        logger.info(f"Token endpoint: {token_url}")
        return token_url

    def exchange_credentials(self, token_url: str, credentials: Credentials) -> str:
        """
        Exchange credentials for an access token at ``token_url``.

        Returns:
            Non-empty access token

        Raises:
            MalformedResponse: If the token is missing or empty
        """
        result = self.executor.execute(
            "POST",
            token_url,
            headers={"Content-Type": FORM_CONTENT_TYPE},
            data=credentials.form_body(),
        )
        token = self._extract(result, ACCESS_TOKEN_FIELD)
        logger.info("Access token retrieved successfully")
        return token

    @staticmethod
    def _extract(result: HttpResult, *path: str) -> str:
        """Shared response handling: extract ``path`` on 200, classify otherwise."""
        if result.status_code != HTTPStatus.OK:
            failure = classify_failure(result)
            logger.error(str(failure))
            raise failure

        value = get_value(parse_document(result.body), *path)
        if not value.strip():
            raise MalformedResponse(f"Field {'.'.join(path)} is empty in the response")
        return value

    def add_authentication_header(
        self,
        request,
        base_url: Optional[str],
        username: Optional[str],
        password: Optional[str],
        org_name: Optional[str],
    ):
        """
        Authenticate and set ``Authorization: BEARER <token>`` on ``request``.

        ``request`` is any object with a mutable ``headers`` mapping, such as
        ``requests.Request`` or ``requests.PreparedRequest``.
        """
        token = self.fetch_access_token(base_url, username, password, org_name)
        request.headers["Authorization"] = f"BEARER {token}"
        return request


def build_action_request(
    base_url: Optional[str],
    org_name: Optional[str],
    action: Optional[str],
    method: str = "GET",
    params: Sequence[Tuple[str, str]] = (),
    data=None,
) -> requests.Request:
    """
    Build an unsent request for an integration supervisor action.

    Raises:
        InvalidInput: If the URI cannot be built
    """
    uri = build_action_uri(base_url, org_name, action, *params)
    return requests.Request(method=method, url=uri, data=data)


def fetch_access_token(base_url, username, password, org_name, executor: Optional[HttpExecutor] = None) -> str:
    """Module-level shortcut for ``AIQAuthClient.fetch_access_token``."""
    if executor is not None:
        return AIQAuthClient(executor).fetch_access_token(base_url, username, password, org_name)

    with HttpExecutor() as executor:
        return AIQAuthClient(executor).fetch_access_token(base_url, username, password, org_name)


def add_authentication_header(request, base_url, username, password, org_name, executor: Optional[HttpExecutor] = None):
    """Module-level shortcut for ``AIQAuthClient.add_authentication_header``."""
    if executor is not None:
        return AIQAuthClient(executor).add_authentication_header(request, base_url, username, password, org_name)

    with HttpExecutor() as executor:
        return AIQAuthClient(executor).add_authentication_header(request, base_url, username, password, org_name)
