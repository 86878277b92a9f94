"""Logging for the Neo4j REST client.

The package logger ("neo4j-rest") carries a NullHandler, so the library is
silent until an application configures logging. Applications that want
the client's own JSON lines on stdout call setup_structured_logging().
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

SERVICE_NAME = "neo4j-rest"
LOG_LEVEL_ENV_VAR = "NEO4J_REST_LOG_LEVEL"


class JSONFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, service, logger, module, message."""

    def __init__(self, service_name: str = SERVICE_NAME, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "module": record.module,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def get_log_level_from_env(env_var: str = LOG_LEVEL_ENV_VAR) -> int:
    """Read a level name from the environment (default INFO)."""
    level = logging.getLevelName(os.environ.get(env_var, "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def setup_structured_logging(
    service_name: str = SERVICE_NAME,
    log_level: int | None = None,
) -> logging.Logger:
    """Replace the client logger's handlers with a JSON stdout handler."""
    logger = logging.getLogger(service_name)
    logger.setLevel(get_log_level_from_env() if log_level is None else log_level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter(service_name=service_name))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a named one."""
    return logging.getLogger(name or SERVICE_NAME)


logging.getLogger(SERVICE_NAME).addHandler(logging.NullHandler())
