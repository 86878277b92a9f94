"""
Pytest configuration and fixtures for neo4j-rest-client tests.
"""

from collections.abc import Iterator

import httpx
import pytest

from neo4j_rest.core.config import Settings
from neo4j_rest.graph.client import HttpClient
from tests.fakes import FakeNeo4jRestServer


@pytest.fixture
def settings() -> Settings:
    """Provide test settings pointing at the fake server."""
    return Settings(
        neo4j_rest_url="http://localhost",
        neo4j_rest_port=7474,
        neo4j_user="neo4j",
        neo4j_password="testpassword",
        neo4j_rest_timeout=5.0,
    )


@pytest.fixture
def fake_server() -> FakeNeo4jRestServer:
    """In-memory Neo4j REST server."""
    return FakeNeo4jRestServer()


@pytest.fixture
def client(settings: Settings, fake_server: FakeNeo4jRestServer) -> Iterator[HttpClient]:
    """HttpClient wired to the fake server."""
    with HttpClient(settings, transport=fake_server.transport()) as http_client:
        yield http_client


@pytest.fixture
def unreachable_client(settings: Settings) -> Iterator[HttpClient]:
    """HttpClient whose transport always fails to connect."""

    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    with HttpClient(settings, transport=httpx.MockTransport(refuse)) as http_client:
        yield http_client
