"""
HTTP transport adapter for the Neo4j legacy REST API.

Design follows:
- One shared httpx.Client per HttpClient (connection reuse)
- A single parameterized request() instead of per-verb helpers
- Status Gate: every call declares the one status code it expects
- Custom exceptions: NetworkError / ResponseError (no builtin shadowing)
- Context manager for deterministic resource cleanup

The client is read-mostly after construction (base URL, headers and
credentials are fixed) and is shared by reference between nodes,
relationships, path builders and transactions.
"""

from __future__ import annotations

import base64
import logging
from http import HTTPStatus
from typing import Any

import httpx

from neo4j_rest.core.config import Settings, get_settings
from neo4j_rest.core.logging import get_logger
from neo4j_rest.graph.exceptions import NetworkError, ResponseError

ROOT_PATH = "/db/data"

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Accept-Charset": "utf-8",
    "Content-Type": "application/json",
}


def basic_auth_header(username: str, password: str) -> str:
    """Encode a username/password pair as a Basic Authorization value."""
    token = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
    return f"Basic {token}"


def expect_status(response: httpx.Response, expected: int) -> httpx.Response:
    """Return the response unchanged if its status matches, else raise.

    Args:
        response: Completed HTTP response
        expected: Status code the calling operation expects on success

    Returns:
        The same response object

    Raises:
        ResponseError: If the status code differs from expected
    """
    if response.status_code != expected:
        raise ResponseError(
            f"{response.request.method} {response.request.url.path} returned "
            f"{response.status_code}, expected {int(expected)}",
            status_code=response.status_code,
            expected=int(expected),
            body=response.text,
        )
    return response


class HttpClient:
    """Transport adapter bound to one Neo4j REST endpoint.

    Usage:
        with HttpClient(settings=settings) as client:
            node = Node({"name": "Alice"})
            node.create(client)

        # Tests plug an in-memory server through an httpx transport
        client = HttpClient(settings, transport=httpx.MockTransport(handler))
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Connection settings; defaults to get_settings()
            transport: Optional httpx transport (e.g. MockTransport)
            logger: Logger used by every resource built on this client
        """
        self._settings = settings or get_settings()
        self._base_url = self._settings.base_url
        self.logger = logger or get_logger()

        headers = dict(DEFAULT_HEADERS)
        if self._settings.neo4j_user and self._settings.neo4j_password is not None:
            headers["Authorization"] = basic_auth_header(
                self._settings.neo4j_user, self._settings.neo4j_password
            )
        self._headers = headers

        self._http = httpx.Client(
            base_url=self._base_url,
            headers=headers,
            timeout=self._settings.neo4j_rest_timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        """Get the base URL including port."""
        return self._base_url

    @property
    def headers(self) -> dict[str, str]:
        """Get a copy of the fixed request headers."""
        return dict(self._headers)

    def build_uri(self, path: str) -> str:
        """Compose an absolute URI for a server path."""
        return f"{self._base_url}{path}"

    def request(
        self,
        method: str,
        path: str,
        body: bytes | None = None,
        expected: int = HTTPStatus.OK,
    ) -> httpx.Response:
        """Perform one HTTP exchange and apply the Status Gate.

        Args:
            method: HTTP verb (GET, POST, PUT, DELETE)
            path: Server path, e.g. /db/data/node/1
            body: Encoded JSON body; None or b"" sends no body
            expected: Status code the operation expects on success

        Returns:
            The validated response

        Raises:
            NetworkError: If the exchange could not be completed
            ResponseError: If the status code differs from expected
        """
        try:
            response = self._http.request(method, path, content=body or None)
        except httpx.RequestError as e:
            self.logger.warning(f"{method} {path} failed: {e}")
            raise NetworkError(
                f"{method} {self.build_uri(path)} could not be completed: {e}",
                cause=e,
            ) from e

        try:
            return expect_status(response, expected)
        except ResponseError as e:
            self.logger.warning(str(e))
            raise

    def is_alive(self) -> bool:
        """Check that the REST root answers 200.

        Returns:
            True if the server is reachable and healthy, False otherwise
        """
        try:
            self.request("GET", ROOT_PATH)
        except (NetworkError, ResponseError):
            return False
        return True

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._http.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self.close()
