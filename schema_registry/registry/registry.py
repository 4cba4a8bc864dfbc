"""
Schema Registry

Holds named, compiled validators and validates data against them.

Schemas enter the registry either as in-memory definitions (add) or by URI
(add_from_url). Each is compiled once; validate then reuses the compiled
validator for every call.

Behaviour:
- Names are unique; adding an existing name replaces the entry
- A failed add/add_from_url leaves any prior entry untouched
- validate mutates the data in place (coercion, defaults) on success and
  restores it on rejection

Concurrency:
- add and validate never suspend
- add_from_url suspends only while fetching
- No locking: concurrent registration of one name is last-writer-wins
"""

import copy
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from schema_registry.errors import (
    SchemaCompileError,
    SchemaFetchError,
    SchemaNotFoundError,
    SchemaValidationError,
)
from schema_registry.fetch import HttpSchemaFetcher, SchemaFetcher
from schema_registry.validation import (
    CompiledValidator,
    JsonSchemaCompiler,
    ValidatorCompiler,
)
from schema_registry.validation.coercion import overwrite_in_place

logger = logging.getLogger(__name__)

# Source marker for schemas registered from memory
INLINE_SOURCE = "inline"


@dataclass
class SchemaEntry:
    """A registered schema and the validator compiled from it."""
    name: str
    validator: CompiledValidator
    source: str = INLINE_SOURCE  # "inline" or the URI it was fetched from
    registered_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def schema(self) -> dict[str, Any]:
        return self.validator.schema


class SchemaRegistry:
    """
    Registry of named schema validators.

    The compiler and fetcher are injected, so several independent registries
    can live in one process, each with its own $id namespace.
    """

    def __init__(
        self,
        compiler: ValidatorCompiler | None = None,
        fetcher: SchemaFetcher | None = None,
    ):
        """
        Initialize the registry.

        Args:
            compiler: Turns schema definitions into validators
                (default: JsonSchemaCompiler with coercion, defaults, all errors)
            fetcher: Retrieves remote schemas (default: HttpSchemaFetcher)
        """
        self._compiler = compiler or JsonSchemaCompiler()
        self._fetcher = fetcher or HttpSchemaFetcher()

        # Map: name -> SchemaEntry
        self._entries: dict[str, SchemaEntry] = {}

    def add(self, name: str, schema: dict[str, Any]) -> None:
        """
        Compile a schema and register it under a name.

        Args:
            name: Unique identifier; an existing entry is replaced
            schema: JSON Schema definition

        Raises:
            SchemaCompileError: If the schema is malformed
        """
        self._register(name, schema, INLINE_SOURCE)

    async def add_from_url(self, name: str, uri: str) -> bool:
        """
        Fetch a schema from a URI, compile it and register it under a name.

        Args:
            name: Unique identifier; an existing entry is replaced
            uri: Location of the JSON schema document

        Returns:
            True once the schema is registered

        Raises:
            SchemaFetchError: If the document cannot be retrieved
            SchemaCompileError: If the document is not a valid schema
        """
        logger.info(f"Loading schema {name} from {uri}")
        try:
            schema = await self._fetcher.fetch(uri)
        except SchemaFetchError as e:
            logger.warning(f"Schema {name} could not be fetched: {e.reason}")
            raise
        self._register(name, schema, uri)
        return True

    def validate(self, name: str, data: Any) -> Any:
        """
        Validate data against a registered schema.

        Coercion and default injection are applied to data in place.

        Args:
            name: Registered schema name
            data: Any JSON-compatible value

        Returns:
            The validated data (the same object, unless the root value
            itself was coerced)

        Raises:
            SchemaNotFoundError: If no schema is registered under name
            SchemaValidationError: If data violates the schema
        """
        entry = self._entries.get(name)
        if entry is None:
            raise SchemaNotFoundError(name)

        snapshot = copy.deepcopy(data)
        outcome = entry.validator.check(data)

        if not outcome.valid:
            # Nested containers the caller holds are rolled back too
            overwrite_in_place(data, snapshot)
            logger.warning(
                f"Data rejected by schema {name}: {len(outcome.issues)} issue(s)"
            )
            raise SchemaValidationError(name, outcome.issues)

        logger.debug(f"Data accepted by schema {name}")
        return outcome.data

    def _register(self, name: str, schema: dict[str, Any], source: str) -> None:
        try:
            validator = self._compiler.compile(schema)
        except SchemaCompileError as e:
            logger.warning(f"Schema {name} from {source} failed to compile: {e.reason}")
            raise SchemaCompileError(e.reason, name=name) from e

        replaced = name in self._entries
        self._entries[name] = SchemaEntry(name=name, validator=validator, source=source)

        logger.info(
            f"{'Replaced' if replaced else 'Registered'} schema {name} (source: {source})"
        )

    def get_schema(self, name: str) -> dict[str, Any] | None:
        """
        Get the schema definition registered under a name.

        Returns:
            Schema definition, or None if not found
        """
        entry = self._entries.get(name)
        return entry.schema if entry else None

    def get_entry(self, name: str) -> SchemaEntry | None:
        """Get the full registry entry for a name."""
        return self._entries.get(name)

    def list_schemas(self) -> list[dict[str, Any]]:
        """
        List all registered schemas.

        Returns:
            List of dicts with name, source and registration time
        """
        return [
            {
                "name": entry.name,
                "source": entry.source,
                "registered_at": entry.registered_at.isoformat(),
            }
            for entry in self._entries.values()
        ]

    def has(self, name: str) -> bool:
        return name in self._entries

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    @property
    def schema_count(self) -> int:
        """Number of registered schemas."""
        return len(self._entries)
