"""
Schema Registry Errors

One exception per failure kind so callers can map each to its own
response or exit path:

- SchemaCompileError: schema is not a valid JSON Schema (raised by add)
- SchemaFetchError: remote schema could not be retrieved (raised by add_from_url)
- SchemaNotFoundError: validate called with an unregistered name
- SchemaValidationError: data violates the schema; carries every violation
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from schema_registry.validation.ports import ValidationIssue


class SchemaRegistryError(Exception):
    """Base exception for schema registry errors."""
    pass


class SchemaCompileError(SchemaRegistryError):
    """Raised when a schema definition cannot be compiled into a validator."""
    def __init__(self, reason: str, name: str | None = None):
        self.reason = reason
        self.name = name
        if name:
            super().__init__(f"schema {name} failed to compile: {reason}")
        else:
            super().__init__(f"schema failed to compile: {reason}")


class SchemaFetchError(SchemaRegistryError):
    """Raised when a schema document cannot be fetched from a URI."""
    def __init__(self, uri: str, reason: str):
        self.uri = uri
        self.reason = reason
        super().__init__(f"failed to fetch schema from {uri}: {reason}")


class SchemaNotFoundError(SchemaRegistryError):
    """Raised when validating against a name that was never registered."""
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"schema {name} does not exist")


class SchemaValidationError(SchemaRegistryError):
    """Raised when data fails one or more schema constraints."""
    def __init__(self, name: str, issues: list["ValidationIssue"]):
        self.name = name
        self.issues = issues
        summary = "; ".join(
            f"{issue.instance_path or '/'}: {issue.message}" for issue in issues[:3]
        )
        if len(issues) > 3:
            summary += f"; ... ({len(issues) - 3} more)"
        super().__init__(
            f"data failed validation against schema {name} "
            f"({len(issues)} issue(s)): {summary}"
        )
