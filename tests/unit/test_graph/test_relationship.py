"""
Unit tests for relationships and relationship listings.

Covers:
- connect() payload (``data`` only when properties are supplied)
- get() deriving endpoints from node URIs
- set_property() leaving the local snapshot stale
- RelationshipCollection.all_for_node() returning untyped elements
- node_id_from_uri() parsing
"""

from __future__ import annotations

import json

import pytest
from pydantic import BaseModel

from neo4j_rest.graph.client import HttpClient
from neo4j_rest.graph.exceptions import DataError, IntegrityError, ResponseError
from neo4j_rest.graph.node import Node
from neo4j_rest.graph.relationship import (
    Relationship,
    RelationshipCollection,
    node_id_from_uri,
)
from tests.fakes import FakeNeo4jRestServer


class Weighted(BaseModel):
    weight: float


@pytest.fixture
def two_nodes(client: HttpClient) -> tuple[int, int]:
    """Create a parent and a child node, returning their ids."""
    parent: Node[dict] = Node()
    parent.create(client)
    child: Node[dict] = Node()
    child.create(client)
    return parent.id, child.id


# =============================================================================
# Test: node_id_from_uri
# =============================================================================


class TestNodeIdFromUri:
    """Tests for the node URI parsing helper."""

    def test_extracts_trailing_id(self) -> None:
        assert node_id_from_uri("http://localhost:7474/db/data/node/42") == 42

    def test_accepts_trailing_slash(self) -> None:
        assert node_id_from_uri("http://localhost:7474/db/data/node/42/") == 42

    def test_zero_is_a_valid_id(self) -> None:
        assert node_id_from_uri("http://localhost:7474/db/data/node/0") == 0

    @pytest.mark.parametrize(
        "uri",
        [
            "http://localhost:7474/db/data/relationship/42",
            "http://localhost:7474/db/data/node/abc",
            "http://localhost:7474/db/data/node/",
            "http://localhost:7474/db/data/node/-3",
            "",
        ],
    )
    def test_invalid_uri_raises_data_error(self, uri: str) -> None:
        with pytest.raises(DataError):
            node_id_from_uri(uri)


# =============================================================================
# Test: connect
# =============================================================================


class TestRelationshipConnect:
    """Tests for Relationship.connect()."""

    def test_connect_with_properties(
        self,
        client: HttpClient,
        fake_server: FakeNeo4jRestServer,
        two_nodes: tuple[int, int],
    ) -> None:
        parent, child = two_nodes

        rel = Relationship.connect(client, parent, child, "Likes", Weighted(weight=1.5))

        assert rel.id >= 1
        assert rel.type_name == "Likes"
        assert (rel.from_id, rel.to_id) == (parent, child)
        assert rel.properties == Weighted(weight=1.5)
        payload = json.loads(fake_server.requests[-1].content)
        assert payload == {
            "to": f"http://localhost:7474/db/data/node/{child}",
            "type": "Likes",
            "data": {"weight": 1.5},
        }

    def test_connect_without_properties_omits_data(
        self,
        client: HttpClient,
        fake_server: FakeNeo4jRestServer,
        two_nodes: tuple[int, int],
    ) -> None:
        parent, child = two_nodes

        rel = Relationship.connect(client, parent, child, "Likes")

        assert "data" not in json.loads(fake_server.requests[-1].content)
        assert rel.properties == {}

    def test_connect_posts_to_source_node(
        self,
        client: HttpClient,
        fake_server: FakeNeo4jRestServer,
        two_nodes: tuple[int, int],
    ) -> None:
        parent, child = two_nodes

        Relationship.connect(client, parent, child, "Likes")

        request = fake_server.requests[-1]
        assert request.method == "POST"
        assert request.url.path == f"/db/data/node/{parent}/relationships"

    def test_connect_missing_source_raises_response_error(
        self, client: HttpClient, two_nodes: tuple[int, int]
    ) -> None:
        _, child = two_nodes

        with pytest.raises(ResponseError) as exc_info:
            Relationship.connect(client, 404, child, "Likes")

        assert exc_info.value.status_code == 404


# =============================================================================
# Test: get / set_property / delete
# =============================================================================


class TestRelationshipLifecycle:
    """Tests for get(), set_property() and delete()."""

    def test_get_derives_endpoints_from_uris(
        self, client: HttpClient, two_nodes: tuple[int, int]
    ) -> None:
        parent, child = two_nodes
        created = Relationship.connect(client, parent, child, "Knows", Weighted(weight=2.0))

        loaded = Relationship.get(client, created.id, properties_type=Weighted)

        assert loaded.id == created.id
        assert loaded.type_name == "Knows"
        assert (loaded.from_id, loaded.to_id) == (parent, child)
        assert loaded.properties == Weighted(weight=2.0)

    def test_set_property_does_not_refresh_snapshot(
        self,
        client: HttpClient,
        fake_server: FakeNeo4jRestServer,
        two_nodes: tuple[int, int],
    ) -> None:
        """The local snapshot stays stale until the caller reloads."""
        parent, child = two_nodes
        rel = Relationship.connect(client, parent, child, "Knows", Weighted(weight=2.0))

        rel.set_property(client, "weight", 9.5)

        assert rel.properties == Weighted(weight=2.0)
        assert fake_server.relationships[rel.id]["data"]["weight"] == 9.5
        reloaded = Relationship.get(client, rel.id, properties_type=Weighted)
        assert reloaded.properties == Weighted(weight=9.5)

    def test_set_property_uses_property_endpoint(
        self,
        client: HttpClient,
        fake_server: FakeNeo4jRestServer,
        two_nodes: tuple[int, int],
    ) -> None:
        parent, child = two_nodes
        rel = Relationship.connect(client, parent, child, "Knows")

        rel.set_property(client, "since", "2001")

        request = fake_server.requests[-1]
        assert request.method == "PUT"
        assert request.url.path == f"/db/data/relationship/{rel.id}/properties/since"
        assert json.loads(request.content) == "2001"

    def test_delete_removes_relationship(
        self,
        client: HttpClient,
        fake_server: FakeNeo4jRestServer,
        two_nodes: tuple[int, int],
    ) -> None:
        parent, child = two_nodes
        rel = Relationship.connect(client, parent, child, "Knows")

        rel.delete(client)

        assert rel.id not in fake_server.relationships

    def test_deleted_relationship_is_consumed(
        self, client: HttpClient, two_nodes: tuple[int, int]
    ) -> None:
        parent, child = two_nodes
        rel = Relationship.connect(client, parent, child, "Knows")
        rel.delete(client)

        with pytest.raises(IntegrityError):
            rel.delete(client)
        with pytest.raises(IntegrityError):
            rel.set_property(client, "weight", 1)

    def test_get_missing_relationship_raises_response_error(self, client: HttpClient) -> None:
        with pytest.raises(ResponseError):
            Relationship.get(client, 777)


# =============================================================================
# Test: RelationshipCollection
# =============================================================================


class TestRelationshipCollection:
    """Tests for RelationshipCollection.all_for_node()."""

    def test_lists_incoming_and_outgoing(self, client: HttpClient) -> None:
        ids = []
        for _ in range(3):
            node: Node[dict] = Node()
            node.create(client)
            ids.append(node.id)
        a, b, c = ids
        out_rel = Relationship.connect(client, a, b, "Out", Weighted(weight=1.0))
        in_rel = Relationship.connect(client, c, a, "In")

        collection = RelationshipCollection.all_for_node(client, a)

        assert len(collection) == 2
        by_id = {rel.id: rel for rel in collection}
        assert (by_id[out_rel.id].from_id, by_id[out_rel.id].to_id) == (a, b)
        assert (by_id[in_rel.id].from_id, by_id[in_rel.id].to_id) == (c, a)
        assert by_id[out_rel.id].type_name == "Out"

    def test_elements_are_untyped(
        self, client: HttpClient, two_nodes: tuple[int, int]
    ) -> None:
        """Bulk listing never carries properties."""
        parent, child = two_nodes
        Relationship.connect(client, parent, child, "Knows", Weighted(weight=3.0))

        collection = RelationshipCollection.all_for_node(client, parent)

        assert collection[0].properties is None

    def test_isolated_node_has_empty_collection(self, client: HttpClient) -> None:
        node: Node[dict] = Node()
        node.create(client)

        collection = RelationshipCollection.all_for_node(client, node.id)

        assert list(collection) == []
        assert collection.node_id == node.id
