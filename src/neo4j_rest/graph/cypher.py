"""
Cypher execution over the transactional HTTP endpoint.

Every call sends exactly one statement wrapped in the batch envelope the
API expects: ``{"statements": [{"statement": ..., "parameters": ...}]}``.

- Cypher.query(): one-shot, auto-committed execution
- Transaction: a lazily-opened server transaction spanning several queries

Transaction states:
- inactive (id is None): the next query() opens a new server transaction
- active (id is set): queries run inside it until commit() or rollback()

A committed or rolled back Transaction can be reused; its next query()
opens a fresh server transaction. A Transaction must not be driven from
two threads at once. Use independent instances instead.

Endpoints:
- POST   /db/data/transaction/commit       -> 200
- POST   /db/data/transaction              -> 201
- POST   /db/data/transaction/{id}         -> 200
- POST   /db/data/transaction/{id}/commit  -> 200
- DELETE /db/data/transaction/{id}         -> 200
"""

from __future__ import annotations

import re
from http import HTTPStatus
from typing import TYPE_CHECKING, Any, Generic, TypedDict, TypeVar

from pydantic import BaseModel, Field, field_validator

from neo4j_rest.graph.codec import decode, encode
from neo4j_rest.graph.exceptions import DataError, GraphClientError, IntegrityError

if TYPE_CHECKING:
    from neo4j_rest.graph.client import HttpClient

D = TypeVar("D")

TRANSACTION_PATH = "/db/data/transaction"
COMMIT_PATH = f"{TRANSACTION_PATH}/commit"

# Raw result rows as returned by the server: [{"row": [...], "meta": [...]}, ...]
DEFAULT_RESULT_DATA = list[dict[str, Any]]

_TRANSACTION_ID_PATTERN = re.compile(r"transaction/([0-9]+)/commit")


# =============================================================================
# Wire models
# =============================================================================


class _StatementText(TypedDict):
    statement: str


class CypherStatement(_StatementText, total=False):
    parameters: Any


class CypherStatements(TypedDict):
    statements: list[CypherStatement]


class CypherResult(BaseModel, Generic[D]):
    """Columns and data of one statement."""

    columns: list[str] = Field(default_factory=list)
    data: D


class CypherResultsResponse(BaseModel, Generic[D]):
    """Response envelope of the transactional endpoint.

    Attributes:
        results: One entry per statement sent
        errors: Server errors as "code: message" strings
        commit: Commit URL, present when a new transaction was opened
    """

    results: list[CypherResult[D]] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    commit: str | None = None

    @field_validator("errors", mode="before")
    @classmethod
    def normalize_errors(cls, v: Any) -> Any:
        """Flatten {code, message} error objects into strings."""
        if not isinstance(v, list):
            return v
        normalized = []
        for item in v:
            if isinstance(item, dict):
                code = item.get("code", "")
                message = item.get("message", "")
                normalized.append(f"{code}: {message}" if code else str(message))
            else:
                normalized.append(item)
        return normalized


def transaction_id_from_commit_url(commit_url: str) -> int:
    """Extract the transaction id from ``.../transaction/{id}/commit``.

    Raises:
        DataError: If the URL does not contain a transaction id
    """
    match = _TRANSACTION_ID_PATTERN.search(commit_url)
    if match is None:
        raise DataError(f"Cannot extract a transaction id from {commit_url!r}")
    return int(match.group(1))


def _statement_payload(statement: str, parameters: Any) -> bytes:
    entry: CypherStatement = {"statement": statement}
    if parameters is not None:
        entry["parameters"] = parameters
    envelope: CypherStatements = {"statements": [entry]}
    return encode(envelope)


def _execute(
    client: HttpClient,
    path: str,
    statement: str,
    parameters: Any,
    result_type: Any,
    expected: int,
) -> CypherResultsResponse[Any]:
    response = client.request(
        "POST",
        path,
        body=_statement_payload(statement, parameters),
        expected=expected,
    )
    return decode(response.content, CypherResultsResponse[result_type])


# =============================================================================
# Executor
# =============================================================================


class Cypher:
    """Cypher executor bound to one client.

    Usage:
        cypher = Cypher(client)
        res = cypher.query("MATCH (n) WHERE id(n) = {id} RETURN n.name", {"id": 1})
        name = res.results[0].data[0]["row"][0]

        with cypher.transaction() as tx:
            tx.query("CREATE (n:Person {name: {name}})", {"name": "Alice"})
    """

    def __init__(self, client: HttpClient) -> None:
        self._client = client

    def query(
        self,
        statement: str,
        parameters: Any = None,
        result_type: Any = DEFAULT_RESULT_DATA,
    ) -> CypherResultsResponse[Any]:
        """Run one statement and commit immediately.

        Args:
            statement: Cypher text, sent as-is
            parameters: Optional parameter map (any encodable value)
            result_type: Shape of each result's ``data`` field

        Raises:
            NetworkError: If the request could not be completed
            ResponseError: If the server does not answer 200
            DataError: If parameters or the response cannot be (de)serialized
        """
        return _execute(
            self._client, COMMIT_PATH, statement, parameters, result_type, HTTPStatus.OK
        )

    def transaction(self) -> Transaction:
        """Create a new, inactive transaction."""
        return Transaction(self._client)


# =============================================================================
# Transaction
# =============================================================================


class Transaction:
    """A server-side transaction opened lazily by the first query().

    Can be used as a context manager: an active transaction is committed
    on normal exit and rolled back when the block raises. If that rollback
    fails, the failure is logged and the block's own exception propagates.
    """

    def __init__(self, client: HttpClient) -> None:
        self._client = client
        self.id: int | None = None

    def __repr__(self) -> str:
        return f"Transaction(id={self.id!r})"

    @property
    def is_active(self) -> bool:
        """True while a server transaction is open."""
        return self.id is not None

    def query(
        self,
        statement: str,
        parameters: Any = None,
        result_type: Any = DEFAULT_RESULT_DATA,
    ) -> CypherResultsResponse[Any]:
        """Run one statement inside the transaction, opening it if needed.

        If the server opens a transaction but its commit URL is missing or
        unparseable, the server-side transaction cannot be addressed and is
        left to expire on the server's timeout. The statement's decoded
        results are kept on the raised error's ``result`` attribute.

        Raises:
            DataError: If a newly opened transaction reports no usable commit URL
        """
        if self.id is not None:
            return _execute(
                self._client,
                f"{TRANSACTION_PATH}/{self.id}",
                statement,
                parameters,
                result_type,
                HTTPStatus.OK,
            )

        result = _execute(
            self._client,
            TRANSACTION_PATH,
            statement,
            parameters,
            result_type,
            HTTPStatus.CREATED,
        )
        if result.commit is None:
            raise DataError(
                "Server opened a transaction but returned no commit URL",
                result=result,
            )
        try:
            self.id = transaction_id_from_commit_url(result.commit)
        except DataError as e:
            raise DataError(str(e), result=result) from e
        self._client.logger.info(f"Transaction {self.id} opened")
        return result

    def commit(self) -> None:
        """Commit the open transaction.

        Raises:
            IntegrityError: If no transaction is open
        """
        transaction_id = self._require_active("commit")
        self._client.request(
            "POST",
            f"{TRANSACTION_PATH}/{transaction_id}/commit",
            body=encode(CypherStatements(statements=[])),
            expected=HTTPStatus.OK,
        )
        self.id = None
        self._client.logger.info(f"Transaction {transaction_id} committed")

    def rollback(self) -> None:
        """Roll back the open transaction.

        Raises:
            IntegrityError: If no transaction is open
        """
        transaction_id = self._require_active("roll back")
        self._client.request(
            "DELETE", f"{TRANSACTION_PATH}/{transaction_id}", expected=HTTPStatus.OK
        )
        self.id = None
        self._client.logger.info(f"Transaction {transaction_id} rolled back")

    def _require_active(self, action: str) -> int:
        if self.id is None:
            raise IntegrityError(f"Cannot {action}: transaction is not active")
        return self.id

    def __enter__(self) -> Transaction:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        if not self.is_active:
            return
        if exc_type is None:
            self.commit()
            return
        try:
            self.rollback()
        except GraphClientError as e:
            self._client.logger.warning(
                f"Rollback of transaction {self.id} failed, keeping original error: {e}"
            )
