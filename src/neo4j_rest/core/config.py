"""
Configuration module for the Neo4j REST client.

Uses pydantic-settings for environment-based configuration of the
transport adapter (base URL, port, credentials, timeout).
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Client settings loaded from environment variables.

    Credentials are optional; the Authorization header is only sent
    when both neo4j_user and neo4j_password are set.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===========================================
    # REST ENDPOINT
    # ===========================================
    neo4j_rest_url: str = Field(
        default="http://localhost",
        description="Scheme and host of the Neo4j REST API",
    )
    neo4j_rest_port: int = Field(default=7474, description="REST API port")
    neo4j_rest_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Request timeout in seconds",
    )

    # ===========================================
    # CREDENTIALS
    # ===========================================
    neo4j_user: str | None = Field(default=None, description="Neo4j username")
    neo4j_password: str | None = Field(default=None, description="Neo4j password")

    @property
    def base_url(self) -> str:
        """Base URL with port, e.g. http://localhost:7474."""
        return f"{self.neo4j_rest_url.rstrip('/')}:{self.neo4j_rest_port}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
