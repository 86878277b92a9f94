# Graph module for the Neo4j REST API
"""
Resource layer for the Neo4j legacy REST API:
- HttpClient: transport adapter with per-call status checks
- Node / Relationship / RelationshipCollection: typed graph entities
- PathBuilder: server-side path finding
- Cypher / Transaction: statement execution and transactions
- Index: schema index create/delete
"""

from neo4j_rest.graph.client import HttpClient, expect_status
from neo4j_rest.graph.codec import DEFAULT_PROPERTIES, decode, encode
from neo4j_rest.graph.cypher import (
    Cypher,
    CypherResult,
    CypherResultsResponse,
    Transaction,
)
from neo4j_rest.graph.exceptions import (
    DataError,
    GraphClientError,
    IntegrityError,
    NetworkError,
    ResponseError,
)
from neo4j_rest.graph.index import Index
from neo4j_rest.graph.node import Node
from neo4j_rest.graph.path import (
    Algorithm,
    Path,
    PathBuilder,
    RelationshipDirection,
)
from neo4j_rest.graph.relationship import (
    Relationship,
    RelationshipCollection,
    node_id_from_uri,
)

__all__ = [
    # Exceptions
    "GraphClientError",
    "NetworkError",
    "ResponseError",
    "DataError",
    "IntegrityError",
    # Transport
    "HttpClient",
    "expect_status",
    # Codec
    "DEFAULT_PROPERTIES",
    "encode",
    "decode",
    # Entities
    "Node",
    "Relationship",
    "RelationshipCollection",
    "node_id_from_uri",
    # Paths
    "Algorithm",
    "Path",
    "PathBuilder",
    "RelationshipDirection",
    # Cypher
    "Cypher",
    "CypherResult",
    "CypherResultsResponse",
    "Transaction",
    # Schema
    "Index",
]
