"""
Node resource for the Neo4j REST API.

A Node starts unidentified, is materialized on the server by create(),
may receive labels, and is consumed by delete(). Property types are
chosen per instance (pydantic model, dataclass, dict, ...) and default
to a plain ``dict[str, Any]``.

Endpoints:
- POST   /db/data/node              -> 201
- GET    /db/data/node/{id}         -> 200
- POST   /db/data/node/{id}/labels  -> 204
- DELETE /db/data/node/{id}         -> 204
"""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel, Field, NonNegativeInt

from neo4j_rest.graph.codec import DEFAULT_PROPERTIES, decode, encode
from neo4j_rest.graph.exceptions import IntegrityError

if TYPE_CHECKING:
    from neo4j_rest.graph.client import HttpClient

T = TypeVar("T")

NODE_PATH = "/db/data/node"


def node_path(node_id: int) -> str:
    """Server path of a single node."""
    return f"{NODE_PATH}/{node_id}"


class NodeMetadata(BaseModel):
    id: NonNegativeInt
    labels: list[str] = Field(default_factory=list)


class NodeDataResponse(BaseModel, Generic[T]):
    """Wire shape of a node returned by create/get."""

    metadata: NodeMetadata
    data: T


class Node(Generic[T]):
    """A graph node with typed properties.

    Attributes:
        id: Server id, None until the node is created
        labels: Labels in server order (duplicates preserved)
        properties: Property value, None when the node has none

    Usage:
        node: Node[Person] = Node(Person(name="Alice"))
        node.create(client)
        node.add_labels(client, ["Person"])
        same = Node.get(client, node.id, properties_type=Person)
        node.delete(client)
    """

    def __init__(
        self,
        properties: T | None = None,
        properties_type: Any = None,
    ) -> None:
        """Initialize an unidentified node.

        Args:
            properties: Optional property value sent on create()
            properties_type: Type used to decode server data; inferred from
                properties when omitted, else DEFAULT_PROPERTIES
        """
        self.id: int | None = None
        self.labels: list[str] = []
        self.properties: T | None = properties
        if properties_type is None:
            properties_type = type(properties) if properties is not None else DEFAULT_PROPERTIES
        self._properties_type = properties_type
        self._deleted = False

    def __repr__(self) -> str:
        return f"Node(id={self.id!r}, labels={self.labels!r}, properties={self.properties!r})"

    @property
    def is_identified(self) -> bool:
        """True once the node exists on the server."""
        return self.id is not None

    @classmethod
    def get(
        cls,
        client: HttpClient,
        node_id: int,
        properties_type: Any = DEFAULT_PROPERTIES,
    ) -> Node[Any]:
        """Load a node by id.

        Raises:
            NetworkError: If the request could not be completed
            ResponseError: If the node does not exist (404) or the server fails
            DataError: If the body does not match properties_type
        """
        response = client.request("GET", node_path(node_id), expected=HTTPStatus.OK)
        node: Node[Any] = cls(properties_type=properties_type)
        node._update_from_response(response.content)
        return node

    def set_properties(self, properties: T) -> None:
        """Replace the local properties sent by create()."""
        self._ensure_not_deleted()
        self.properties = properties

    def create(self, client: HttpClient) -> None:
        """Create the node on the server and adopt its id, labels and data.

        Raises:
            IntegrityError: If the node already has an id
        """
        self._ensure_not_deleted()
        if self.id is not None:
            raise IntegrityError(f"Node {self.id} already exists on the server")

        response = client.request(
            "POST", NODE_PATH, body=encode(self.properties), expected=HTTPStatus.CREATED
        )
        self._update_from_response(response.content)
        client.logger.info(f"Node created, id: {self.id}")

    def add_labels(self, client: HttpClient, labels: str | list[str]) -> None:
        """Attach labels to the node; they are appended locally once confirmed.

        A single label may be passed as a plain string.

        Raises:
            IntegrityError: If the node has no id
        """
        node_id = self._require_id("add labels to")
        labels = [labels] if isinstance(labels, str) else list(labels)
        client.request(
            "POST",
            f"{node_path(node_id)}/labels",
            body=encode(labels),
            expected=HTTPStatus.NO_CONTENT,
        )
        self.labels.extend(labels)
        client.logger.info(f"Labels {labels} added to node {node_id}")

    def delete(self, client: HttpClient) -> None:
        """Delete the node. The instance cannot be used afterwards.

        Raises:
            IntegrityError: If the node has no id
        """
        node_id = self._require_id("delete")
        client.request("DELETE", node_path(node_id), expected=HTTPStatus.NO_CONTENT)
        self._deleted = True
        client.logger.info(f"Node deleted, id: {node_id}")

    def _update_from_response(self, body: bytes) -> None:
        parsed = decode(body, NodeDataResponse[self._properties_type])
        self.id = parsed.metadata.id
        self.labels = list(parsed.metadata.labels)
        self.properties = parsed.data

    def _require_id(self, action: str) -> int:
        self._ensure_not_deleted()
        if self.id is None:
            raise IntegrityError(f"Cannot {action} a node that has not been created")
        return self.id

    def _ensure_not_deleted(self) -> None:
        if self._deleted:
            raise IntegrityError(f"Node {self.id} has been deleted")
