"""
Unit tests for client settings.
"""

import pytest
from pydantic import ValidationError

from neo4j_rest.core.config import Settings, get_settings


class TestSettings:
    """Tests for environment-based configuration."""

    def test_defaults_target_local_server(self, monkeypatch: pytest.MonkeyPatch):
        for var in ("NEO4J_REST_URL", "NEO4J_REST_PORT", "NEO4J_USER", "NEO4J_PASSWORD"):
            monkeypatch.delenv(var, raising=False)

        settings = Settings(_env_file=None)

        assert settings.base_url == "http://localhost:7474"
        assert settings.neo4j_user is None
        assert settings.neo4j_rest_timeout == 30.0

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("NEO4J_REST_URL", "https://graph.example")
        monkeypatch.setenv("NEO4J_REST_PORT", "7473")
        monkeypatch.setenv("NEO4J_USER", "reader")

        settings = Settings(_env_file=None)

        assert settings.base_url == "https://graph.example:7473"
        assert settings.neo4j_user == "reader"

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(neo4j_rest_timeout=0)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
