"""
Unit tests for schema index management.
"""

from __future__ import annotations

import json

import pytest

from neo4j_rest.graph.client import HttpClient
from neo4j_rest.graph.exceptions import ResponseError
from neo4j_rest.graph.index import Index
from tests.fakes import FakeNeo4jRestServer


class TestIndex:
    """Tests for Index.create() and Index.delete()."""

    def test_create_posts_property_keys(
        self, client: HttpClient, fake_server: FakeNeo4jRestServer
    ) -> None:
        Index("Person", "name").create(client)

        request = fake_server.requests[-1]
        assert request.url.path == "/db/data/schema/index/Person"
        assert json.loads(request.content) == {"property_keys": ["name"]}
        assert ("Person", "name") in fake_server.indexes

    def test_create_then_delete(
        self, client: HttpClient, fake_server: FakeNeo4jRestServer
    ) -> None:
        index = Index("Person", "email")
        index.create(client)

        index.delete(client)

        assert fake_server.indexes == set()
        assert fake_server.requests[-1].url.path == "/db/data/schema/index/Person/email"

    def test_delete_unknown_index_raises_response_error(self, client: HttpClient) -> None:
        with pytest.raises(ResponseError) as exc_info:
            Index("Nothing", "here").delete(client)

        assert exc_info.value.expected == 204
