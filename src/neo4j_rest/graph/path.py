"""
Path finding through the Neo4j REST traversal endpoints.

PathBuilder assembles the traversal parameters and lets the server run
the algorithm:
- path_with_depth(): shortestPath / allSimplePaths / allPaths bounded by
  max_depth
- path_with_weight(): dijkstra over a numeric cost property, with a
  default cost for relationships lacking it

Result cardinality is chosen at call time: get_one() hits the singular
``path`` endpoint, get_all() the plural ``paths`` endpoint. An empty list
from get_all() means "no path" and is not an error.

Endpoints:
- POST /db/data/node/{id}/path   -> 200
- POST /db/data/node/{id}/paths  -> 200
"""

from __future__ import annotations

from enum import Enum
from http import HTTPStatus
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt

from neo4j_rest.graph.codec import decode, encode
from neo4j_rest.graph.exceptions import IntegrityError
from neo4j_rest.graph.node import node_path

if TYPE_CHECKING:
    from neo4j_rest.graph.client import HttpClient


# =============================================================================
# Enums
# =============================================================================


class Algorithm(Enum):
    """Server-side traversal algorithms."""

    SHORTEST_PATH = "shortestPath"
    ALL_SIMPLE_PATHS = "allSimplePaths"
    ALL_PATHS = "allPaths"
    DIJKSTRA = "dijkstra"


class RelationshipDirection(Enum):
    """Direction of relationships followed during traversal."""

    IN = "in"
    OUT = "out"
    ALL = "all"


class ResultCardinality(Enum):
    ONE = "path"
    MULTIPLE = "paths"


# =============================================================================
# Models
# =============================================================================


class Path(BaseModel):
    """A path returned by the server.

    Attributes:
        directions: Direction marker per hop ("->" or "<-")
        weight: Total cost, only present for dijkstra
        start: URI of the first node
        end: URI of the last node
        nodes: URIs of all nodes in order
        relationships: URIs of all relationships in order
        length: Number of hops
    """

    model_config = ConfigDict(frozen=True)

    directions: list[str] = Field(default_factory=list)
    weight: float | None = None
    start: str
    end: str
    nodes: list[str]
    relationships: list[str]
    length: NonNegativeInt


class PathQuery(BaseModel):
    """Request body of a path query; unset options are not sent."""

    to: str
    algorithm: str | None = None
    max_depth: int | None = None
    cost_property: str | None = None
    default_cost: float | None = None
    relationships: dict[str, str] | None = None


# =============================================================================
# PathBuilder
# =============================================================================


class PathBuilder:
    """Builds and runs path queries between two nodes.

    Usage:
        paths = (
            PathBuilder(client, from_id=1, to_id=3)
            .path_with_depth(Algorithm.SHORTEST_PATH, max_depth=3)
            .get_all()
        )

        cheapest = (
            PathBuilder(client, from_id=1, to_id=3)
            .path_with_weight("weight", default_cost=1.0)
            .get_one()
        )
    """

    def __init__(self, client: HttpClient, from_id: int, to_id: int) -> None:
        """Initialize builder; the destination URI is resolved immediately."""
        self._client = client
        self._from_id = from_id
        self._query = PathQuery(to=client.build_uri(node_path(to_id)))

    @property
    def query(self) -> PathQuery:
        """Current request body."""
        return self._query

    def path_with_depth(self, algorithm: Algorithm, max_depth: int) -> PathBuilder:
        """Select a depth-bounded algorithm.

        Raises:
            ValueError: If algorithm is DIJKSTRA; use path_with_weight()
        """
        if algorithm is Algorithm.DIJKSTRA:
            raise ValueError(
                f"Algorithm {algorithm.value} is not compatible with depth-only search; "
                "use path_with_weight()"
            )
        self._query = self._query.model_copy(
            update={
                "algorithm": algorithm.value,
                "max_depth": max_depth,
                "cost_property": None,
                "default_cost": None,
            }
        )
        return self

    def path_with_weight(self, cost_property: str, default_cost: float) -> PathBuilder:
        """Select dijkstra over cost_property; default_cost fills missing values."""
        self._query = self._query.model_copy(
            update={
                "algorithm": Algorithm.DIJKSTRA.value,
                "cost_property": cost_property,
                "default_cost": default_cost,
                "max_depth": None,
            }
        )
        return self

    def relationships(
        self,
        type_name: str | None = None,
        direction: RelationshipDirection = RelationshipDirection.ALL,
    ) -> PathBuilder:
        """Restrict traversal to a relationship type and direction."""
        relationship_filter = {"direction": direction.value}
        if type_name is not None:
            relationship_filter["type"] = type_name
        self._query = self._query.model_copy(update={"relationships": relationship_filter})
        return self

    def get_one(self) -> Path:
        """Return a single path.

        Raises:
            ResponseError: If the server finds no path (404)
        """
        return self._get(ResultCardinality.ONE, Path)

    def get_all(self) -> list[Path]:
        """Return every matching path, possibly none."""
        return self._get(ResultCardinality.MULTIPLE, list[Path])

    def _get(self, cardinality: ResultCardinality, shape: Any) -> Any:
        if self._query.algorithm is None:
            raise IntegrityError(
                "No algorithm selected; call path_with_depth() or path_with_weight()"
            )
        payload = encode(self._query.model_dump(exclude_none=True))
        response = self._client.request(
            "POST",
            f"{node_path(self._from_id)}/{cardinality.value}",
            body=payload,
            expected=HTTPStatus.OK,
        )
        return decode(response.content, shape)
