"""
Validation Port Interfaces

Abstract base classes defining the contract between the schema registry
and the engine that actually understands JSON Schema.

These ports follow the hexagonal architecture pattern:
- The registry depends only on these interfaces
- Adapters (jsonschema today) implement them
- The compiler is injected into the registry via dependency inversion
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field


class ValidatorOptions(BaseModel):
    """Behaviour switches applied to every validator a compiler produces."""

    coerce_types: bool = Field(
        default=True,
        description="Coerce scalar values toward the declared type before checking",
    )
    use_defaults: bool = Field(
        default=True,
        description="Write schema defaults into objects missing those properties",
    )
    all_errors: bool = Field(
        default=True,
        description="Collect every violation instead of stopping at the first",
    )
    check_formats: bool = Field(
        default=True,
        description="Enforce the 'format' keyword (date-time, email, ...)",
    )


class ValidationIssue(BaseModel):
    """
    A single constraint violation.

    Paths are JSON pointers: instance_path points into the validated data
    ("" is the root), schema_path points at the failing keyword.
    """

    keyword: str = Field(..., description="Schema keyword that failed, e.g. 'type'")
    instance_path: str = Field(default="", description="JSON pointer into the data")
    schema_path: str = Field(default="", description="JSON pointer into the schema")
    message: str = Field(..., description="Human-readable description")
    params: dict[str, Any] = Field(
        default_factory=dict,
        description="Keyword-specific details, e.g. the expected type or a violated limit",
    )


@dataclass
class ValidationOutcome:
    """
    Result of running a compiled validator.

    data is the validated value. It is the very object passed in unless the
    root value itself had to be coerced (e.g. "20" -> 20).
    """
    valid: bool
    data: Any
    issues: list[ValidationIssue] = field(default_factory=list)


class CompiledValidator(ABC):
    """A validator bound to one schema definition, reusable across calls."""

    @property
    @abstractmethod
    def schema(self) -> dict[str, Any]:
        """The schema definition this validator was compiled from."""
        ...

    @abstractmethod
    def check(self, data: Any) -> ValidationOutcome:
        """
        Validate data, applying coercion and defaults in place.

        Args:
            data: Any JSON-compatible value

        Returns:
            ValidationOutcome with every issue found
        """
        ...


class ValidatorCompiler(ABC):
    """Turns schema definitions into compiled validators."""

    @abstractmethod
    def compile(self, schema: dict[str, Any]) -> CompiledValidator:
        """
        Compile a schema definition.

        Args:
            schema: A JSON Schema document

        Returns:
            A ready-to-use validator

        Raises:
            SchemaCompileError: If the schema is malformed or references
                something that cannot be resolved
        """
        ...
