# Schema Registry
# Named, compiled validators: add, add_from_url, validate

from schema_registry.registry.registry import SchemaEntry, SchemaRegistry
from schema_registry.registry.loader import load_schema_directory

__all__ = ["SchemaEntry", "SchemaRegistry", "load_schema_directory"]
