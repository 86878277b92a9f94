"""
Relationship resource for the Neo4j REST API.

Relationships always carry a server id: connect() creates one between two
existing nodes and get() reloads it. set_property() updates a single
property on the server but NOT the local snapshot; call get() again to
observe the change.

RelationshipCollection lists every relationship of a node. Since one list
call cannot decode heterogeneous property types, elements of a collection
never carry properties.

Endpoints:
- POST   /db/data/node/{id}/relationships                -> 201
- GET    /db/data/relationship/{id}                      -> 200
- PUT    /db/data/relationship/{id}/properties/{name}    -> 204
- DELETE /db/data/relationship/{id}                      -> 204
- GET    /db/data/node/{id}/relationships/all            -> 200
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import TYPE_CHECKING, Any, Generic, TypeVar
from urllib.parse import quote

from pydantic import BaseModel, NonNegativeInt

from neo4j_rest.graph.codec import DEFAULT_PROPERTIES, decode, encode
from neo4j_rest.graph.exceptions import DataError, IntegrityError
from neo4j_rest.graph.node import node_path

if TYPE_CHECKING:
    from neo4j_rest.graph.client import HttpClient

T = TypeVar("T")

RELATIONSHIP_PATH = "/db/data/relationship"

_NODE_ID_PATTERN = re.compile(r"node/([0-9]+)$")


def relationship_path(relationship_id: int) -> str:
    """Server path of a single relationship."""
    return f"{RELATIONSHIP_PATH}/{relationship_id}"


def node_id_from_uri(uri: str) -> int:
    """Extract the node id from a node URI such as ``.../db/data/node/42``.

    Raises:
        DataError: If the URI has no ``node/<digits>`` tail
    """
    match = _NODE_ID_PATTERN.search(uri.rstrip("/"))
    if match is None:
        raise DataError(f"Cannot extract a node id from {uri!r}")
    return int(match.group(1))


# =============================================================================
# Wire models
# =============================================================================


class RelationshipMetadata(BaseModel):
    id: NonNegativeInt
    type: str | None = None


class RelationshipResponse(BaseModel, Generic[T]):
    """Wire shape of one relationship returned by the server."""

    start: str
    end: str
    type: str | None = None
    metadata: RelationshipMetadata
    data: T


# =============================================================================
# Relationship
# =============================================================================


class Relationship(Generic[T]):
    """A typed relationship between two nodes.

    Attributes:
        id: Server id
        type_name: Relationship type, e.g. "KNOWS"
        from_id: Id of the start node
        to_id: Id of the end node
        properties: Property value, None for untyped listings
    """

    def __init__(
        self,
        relationship_id: int,
        type_name: str,
        from_id: int,
        to_id: int,
        properties: T | None = None,
    ) -> None:
        self.id = relationship_id
        self.type_name = type_name
        self.from_id = from_id
        self.to_id = to_id
        self.properties = properties
        self._deleted = False

    def __repr__(self) -> str:
        return (
            f"Relationship(id={self.id!r}, type_name={self.type_name!r}, "
            f"from_id={self.from_id!r}, to_id={self.to_id!r}, properties={self.properties!r})"
        )

    @classmethod
    def connect(
        cls,
        client: HttpClient,
        from_id: int,
        to_id: int,
        type_name: str,
        properties: T | None = None,
        properties_type: Any = None,
    ) -> Relationship[T]:
        """Create a relationship from one node to another.

        Args:
            client: Transport adapter
            from_id: Start node id
            to_id: End node id
            type_name: Relationship type
            properties: Optional properties; the ``data`` key is only sent
                when they are supplied
            properties_type: Type used to decode returned data; inferred
                from properties when omitted

        Returns:
            The created relationship. from_id/to_id are the ids given here.
        """
        if properties_type is None:
            properties_type = type(properties) if properties is not None else DEFAULT_PROPERTIES

        payload: dict[str, Any] = {
            "to": client.build_uri(node_path(to_id)),
            "type": type_name,
        }
        if properties is not None:
            payload["data"] = properties

        response = client.request(
            "POST",
            f"{node_path(from_id)}/relationships",
            body=encode(payload),
            expected=HTTPStatus.CREATED,
        )
        parsed = decode(response.content, RelationshipResponse[properties_type])

        relationship = cls(
            relationship_id=parsed.metadata.id,
            type_name=type_name,
            from_id=from_id,
            to_id=to_id,
            properties=parsed.data,
        )
        client.logger.info(
            f"Relationship {relationship.id} created: ({from_id})-[:{type_name}]->({to_id})"
        )
        return relationship

    @classmethod
    def get(
        cls,
        client: HttpClient,
        relationship_id: int,
        properties_type: Any = DEFAULT_PROPERTIES,
    ) -> Relationship[Any]:
        """Load a relationship by id, deriving endpoints from its node URIs."""
        response = client.request(
            "GET", relationship_path(relationship_id), expected=HTTPStatus.OK
        )
        parsed = decode(response.content, RelationshipResponse[properties_type])
        return cls(
            relationship_id=parsed.metadata.id,
            type_name=parsed.type or parsed.metadata.type or "",
            from_id=node_id_from_uri(parsed.start),
            to_id=node_id_from_uri(parsed.end),
            properties=parsed.data,
        )

    def set_property(self, client: HttpClient, name: str, value: Any) -> None:
        """Set one property on the server.

        The local ``properties`` snapshot is left untouched; reload with
        get() to see the new value.
        """
        self._ensure_not_deleted()
        client.request(
            "PUT",
            f"{relationship_path(self.id)}/properties/{quote(name, safe='')}",
            body=encode(value),
            expected=HTTPStatus.NO_CONTENT,
        )
        client.logger.info(f"Relationship {self.id} property {name!r} updated")

    def delete(self, client: HttpClient) -> None:
        """Delete the relationship. The instance cannot be used afterwards."""
        self._ensure_not_deleted()
        client.request("DELETE", relationship_path(self.id), expected=HTTPStatus.NO_CONTENT)
        self._deleted = True
        client.logger.info(f"Relationship deleted, id: {self.id}")

    def _ensure_not_deleted(self) -> None:
        if self._deleted:
            raise IntegrityError(f"Relationship {self.id} has been deleted")


# =============================================================================
# RelationshipCollection
# =============================================================================


@dataclass
class RelationshipCollection:
    """All relationships attached to a node, in server order.

    Elements are untyped: properties is always None.
    """

    node_id: int
    relationships: list[Relationship[Any]] = field(default_factory=list)

    @classmethod
    def all_for_node(cls, client: HttpClient, node_id: int) -> RelationshipCollection:
        """List incoming and outgoing relationships of a node."""
        response = client.request(
            "GET", f"{node_path(node_id)}/relationships/all", expected=HTTPStatus.OK
        )
        parsed = decode(response.content, list[RelationshipResponse[Any]])
        relationships: list[Relationship[Any]] = [
            Relationship(
                relationship_id=item.metadata.id,
                type_name=item.type or item.metadata.type or "",
                from_id=node_id_from_uri(item.start),
                to_id=node_id_from_uri(item.end),
            )
            for item in parsed
        ]
        return cls(node_id=node_id, relationships=relationships)

    def __iter__(self) -> Iterator[Relationship[Any]]:
        return iter(self.relationships)

    def __len__(self) -> int:
        return len(self.relationships)

    def __getitem__(self, index: int) -> Relationship[Any]:
        return self.relationships[index]
