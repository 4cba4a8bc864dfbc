# Validation Engine
# Compiles JSON Schema documents into reusable validators with
# type coercion, default injection and cross-schema $ref support

from schema_registry.validation.ports import (
    CompiledValidator,
    ValidationIssue,
    ValidationOutcome,
    ValidatorCompiler,
    ValidatorOptions,
)
from schema_registry.validation.jsonschema_compiler import (
    JsonSchemaCompiler,
    JsonSchemaValidator,
)

__all__ = [
    "CompiledValidator",
    "ValidationIssue",
    "ValidationOutcome",
    "ValidatorCompiler",
    "ValidatorOptions",
    "JsonSchemaCompiler",
    "JsonSchemaValidator",
]
