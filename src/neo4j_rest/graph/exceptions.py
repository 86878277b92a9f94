"""
Error taxonomy for the Neo4j REST client.

Four flat kinds, all deriving from GraphClientError:
- NetworkError: the HTTP exchange could not be completed
- ResponseError: the exchange completed with an unexpected status code
- DataError: a payload could not be encoded or decoded in the expected shape
- IntegrityError: a local precondition on object state was violated

Names avoid shadowing Python builtins (ConnectionError, TimeoutError).
"""

from __future__ import annotations

from typing import Any


class GraphClientError(Exception):
    """Base exception for all Neo4j REST client errors."""

    pass


class NetworkError(GraphClientError):
    """Raised when the transport cannot complete a request.

    Covers connection failures, timeouts and malformed responses.
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        """Initialize with message and optional cause.

        Args:
            message: Human-readable error description
            cause: Original transport exception
        """
        super().__init__(message)
        self.cause = cause


class ResponseError(GraphClientError):
    """Raised when the server answers with a status the operation does not expect."""

    def __init__(
        self,
        message: str,
        status_code: int,
        expected: int,
        body: str = "",
    ) -> None:
        """Initialize with message and status details.

        Args:
            message: Human-readable error description
            status_code: Status code returned by the server
            expected: Status code the operation expects on success
            body: Raw response text, kept for diagnosis
        """
        super().__init__(message)
        self.status_code = status_code
        self.expected = expected
        self.body = body


class DataError(GraphClientError):
    """Raised when a payload cannot be encoded to or decoded from JSON.

    Also raised when a decoded payload lacks data the operation needs. In
    that case `result` holds whatever was decoded, so nothing the server
    returned is lost.
    """

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        result: Any = None,
    ) -> None:
        super().__init__(message)
        self.cause = cause
        self.result = result


class IntegrityError(GraphClientError):
    """Raised when an operation's precondition on local state is violated.

    Examples: committing an inactive transaction, re-creating an
    already-identified node, deleting a node that has no id.
    """

    pass
