"""Typed client for the Neo4j legacy HTTP/JSON REST API."""

from neo4j_rest.core.config import Settings, get_settings
from neo4j_rest.graph import (
    Algorithm,
    Cypher,
    DataError,
    GraphClientError,
    HttpClient,
    Index,
    IntegrityError,
    NetworkError,
    Node,
    Path,
    PathBuilder,
    Relationship,
    RelationshipCollection,
    RelationshipDirection,
    ResponseError,
    Transaction,
)

__all__ = [
    "Settings",
    "get_settings",
    "HttpClient",
    "Node",
    "Relationship",
    "RelationshipCollection",
    "Algorithm",
    "Path",
    "PathBuilder",
    "RelationshipDirection",
    "Cypher",
    "Transaction",
    "Index",
    "GraphClientError",
    "NetworkError",
    "ResponseError",
    "DataError",
    "IntegrityError",
]
