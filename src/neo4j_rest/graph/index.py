"""
Schema index management.

Endpoints:
- POST   /db/data/schema/index/{label}             -> 200
- DELETE /db/data/schema/index/{label}/{property}  -> 204
"""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import TYPE_CHECKING
from urllib.parse import quote

from neo4j_rest.graph.codec import encode

if TYPE_CHECKING:
    from neo4j_rest.graph.client import HttpClient

SCHEMA_INDEX_PATH = "/db/data/schema/index"


@dataclass(frozen=True)
class Index:
    """A single-property index on a label."""

    label: str
    property_key: str

    @property
    def path(self) -> str:
        return f"{SCHEMA_INDEX_PATH}/{quote(self.label, safe='')}"

    def create(self, client: HttpClient) -> None:
        """Create the index on the server."""
        client.request(
            "POST",
            self.path,
            body=encode({"property_keys": [self.property_key]}),
            expected=HTTPStatus.OK,
        )
        client.logger.info(f"Index created on :{self.label}({self.property_key})")

    def delete(self, client: HttpClient) -> None:
        """Drop the index from the server."""
        client.request(
            "DELETE",
            f"{self.path}/{quote(self.property_key, safe='')}",
            expected=HTTPStatus.NO_CONTENT,
        )
        client.logger.info(f"Index dropped on :{self.label}({self.property_key})")
