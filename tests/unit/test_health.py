"""
Unit tests for Neo4j REST health checks.
"""

import httpx

from neo4j_rest.core.config import Settings
from neo4j_rest.graph.health import check_health, check_health_detailed
from tests.fakes import FakeNeo4jRestServer


def _refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Connection refused", request=request)


class TestHealthCheck:
    """Tests for connectivity verification."""

    def test_health_check_returns_true_when_reachable(self, settings: Settings):
        """
        GIVEN a reachable REST endpoint
        WHEN check_health is called
        THEN it returns True
        """
        assert check_health(settings, transport=FakeNeo4jRestServer().transport()) is True

    def test_health_check_returns_false_when_unreachable(self, settings: Settings):
        """
        GIVEN the endpoint refuses connections
        WHEN check_health is called
        THEN it returns False
        """
        assert check_health(settings, transport=httpx.MockTransport(_refuse)) is False

    def test_detailed_health_reports_latency(self, settings: Settings):
        result = check_health_detailed(settings, transport=FakeNeo4jRestServer().transport())

        assert result["status"] == "healthy"
        assert result["url"] == "http://localhost:7474"
        assert result["latency_ms"] >= 0

    def test_detailed_health_reports_unavailable(self, settings: Settings):
        result = check_health_detailed(settings, transport=httpx.MockTransport(_refuse))

        assert result["status"] == "unhealthy"
        assert result["error"].startswith("Service unavailable")

    def test_detailed_health_reports_authentication_failure(self, settings: Settings):
        transport = httpx.MockTransport(lambda request: httpx.Response(401))

        result = check_health_detailed(settings, transport=transport)

        assert result["status"] == "unhealthy"
        assert result["error"].startswith("Authentication failed")

    def test_detailed_health_reports_unexpected_status(self, settings: Settings):
        transport = httpx.MockTransport(lambda request: httpx.Response(503))

        result = check_health_detailed(settings, transport=transport)

        assert result["error"] == "Unexpected status 503"
