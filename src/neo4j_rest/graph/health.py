"""
Neo4j REST health checks.

Provides liveness verification of the REST root (GET /db/data).
"""

import time
from typing import Any

import httpx

from neo4j_rest.core.config import Settings
from neo4j_rest.graph.client import ROOT_PATH, HttpClient
from neo4j_rest.graph.exceptions import NetworkError, ResponseError


def check_health(settings: Settings, transport: httpx.BaseTransport | None = None) -> bool:
    """
    Check if the Neo4j REST API is healthy and reachable.

    Args:
        settings: Client settings with REST endpoint configuration
        transport: Optional httpx transport override

    Returns:
        True if Neo4j is healthy, False otherwise
    """
    with HttpClient(settings, transport=transport) as client:
        return client.is_alive()


def check_health_detailed(
    settings: Settings, transport: httpx.BaseTransport | None = None
) -> dict[str, Any]:
    """
    Check Neo4j REST health with detailed information.

    Returns:
        Dictionary with status, url, and latency or error
    """
    start_time = time.time()
    with HttpClient(settings, transport=transport) as client:
        try:
            client.request("GET", ROOT_PATH)
        except NetworkError as e:
            return {
                "status": "unhealthy",
                "url": settings.base_url,
                "error": f"Service unavailable: {e}",
            }
        except ResponseError as e:
            error = (
                f"Authentication failed: {e}"
                if e.status_code == 401
                else f"Unexpected status {e.status_code}"
            )
            return {
                "status": "unhealthy",
                "url": settings.base_url,
                "error": error,
            }

    latency_ms = (time.time() - start_time) * 1000
    return {
        "status": "healthy",
        "url": settings.base_url,
        "latency_ms": round(latency_ms, 2),
    }
