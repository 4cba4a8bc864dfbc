# Schema Registry
# Loads JSON Schema documents (inline or by URL) and validates data against them

__version__ = "0.1.0"

# Re-export commonly used components for convenience
from schema_registry.errors import (
    SchemaRegistryError,
    SchemaCompileError,
    SchemaFetchError,
    SchemaNotFoundError,
    SchemaValidationError,
)
from schema_registry.registry import (
    SchemaEntry,
    SchemaRegistry,
    load_schema_directory,
)
from schema_registry.validation import (
    ValidationIssue,
    ValidatorOptions,
    JsonSchemaCompiler,
)
from schema_registry.fetch import HttpSchemaFetcher

__all__ = [
    "__version__",
    # Errors
    "SchemaRegistryError",
    "SchemaCompileError",
    "SchemaFetchError",
    "SchemaNotFoundError",
    "SchemaValidationError",
    # Registry
    "SchemaEntry",
    "SchemaRegistry",
    "load_schema_directory",
    # Validation
    "ValidationIssue",
    "ValidatorOptions",
    "JsonSchemaCompiler",
    # Fetching
    "HttpSchemaFetcher",
]
