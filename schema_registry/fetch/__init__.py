# Schema Fetching
# Retrieves remote schema documents for SchemaRegistry.add_from_url

from schema_registry.fetch.ports import SchemaFetcher
from schema_registry.fetch.http import HttpSchemaFetcher

__all__ = ["SchemaFetcher", "HttpSchemaFetcher"]
