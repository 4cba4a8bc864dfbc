# Transport Layer
# HTTP server hosting schema documents and a catalog of them

from schema_registry.transport.app import SchemaCatalog, SchemaCatalogEntry, app, create_app

__all__ = ["SchemaCatalog", "SchemaCatalogEntry", "app", "create_app"]
