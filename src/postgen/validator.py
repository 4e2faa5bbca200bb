"""Validate generated collections against the Postman collection schema."""

import json
import logging
from pathlib import Path
from typing import Any

import httpx
from jsonschema import ValidationError
from jsonschema.validators import validator_for

from .errors import SchemaFetchError

logger = logging.getLogger(__name__)

BUNDLED_SCHEMA = Path(__file__).parent / "schemas" / "collection-v2.1.json"


def load_schema(path: Path = BUNDLED_SCHEMA) -> dict[str, Any]:
    """Load a JSON schema from disk."""
    with path.open(encoding="utf-8") as f:
        return json.load(f)


def format_error(error: ValidationError) -> str:
    location = ".".join(str(p) for p in error.absolute_path) or "<root>"
    return f"{error.message} (at {location})"


class CollectionValidator:
    """Validates collection documents against a JSON schema."""

    def __init__(self, schema: dict[str, Any] | None = None) -> None:
        """Initialize validator.

        Args:
            schema: JSON schema to validate against (bundled subset by default)
        """
        self.schema = schema if schema is not None else load_schema()
        cls = validator_for(self.schema)
        cls.check_schema(self.schema)
        self._validator = cls(self.schema)

    @classmethod
    def from_url(cls, url: str, timeout: float = 10.0) -> "CollectionValidator":
        """Build a validator from a schema published at ``url``.

        Raises:
            SchemaFetchError: If the schema cannot be downloaded or parsed
        """
        logger.info("Fetching collection schema from %s", url)
        try:
            response = httpx.get(url, timeout=timeout, follow_redirects=True)
            response.raise_for_status()
            schema = response.json()
        except httpx.HTTPError as e:
            raise SchemaFetchError(f"Failed to fetch schema: {e}", url) from e
        except json.JSONDecodeError as e:
            raise SchemaFetchError(f"Schema at {url} is not valid JSON", url) from e
        return cls(schema)

    def validate(self, collection: dict[str, Any] | Path) -> list[str]:
        """Validate a collection document.

        Args:
            collection: Parsed collection or path to a collection file

        Returns:
            Error messages, empty when the collection is valid
        """
        if isinstance(collection, Path):
            with collection.open(encoding="utf-8") as f:
                collection = json.load(f)

        errors = sorted(
            self._validator.iter_errors(collection),
            key=lambda e: [str(p) for p in e.absolute_path],
        )
        return [format_error(error) for error in errors]

    def is_valid(self, collection: dict[str, Any] | Path) -> bool:
        return not self.validate(collection)
