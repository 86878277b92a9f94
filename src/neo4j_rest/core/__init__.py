"""Core configuration and logging for the Neo4j REST client."""
