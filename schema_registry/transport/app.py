"""
Schema Server Application

FastAPI application hosting schema documents for remote registries.

Endpoints:
- GET /schemas/<path>: the schema files themselves (static hosting), e.g.
  /schemas/v1/user.json, ready for SchemaRegistry.add_from_url
- GET /health: liveness plus the number of preloaded schemas
- POST /validate/<name>: validate a JSON body against a hosted schema
- GET anything else: JSON catalog of the hosted schemas

Run with:
    uvicorn schema_registry.transport.app:app --port 8000

Configuration comes from environment variables, see schema_registry.config.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Body, FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field

from schema_registry import __version__
from schema_registry.config import RegistrySettings, settings_from_env
from schema_registry.errors import SchemaNotFoundError, SchemaValidationError
from schema_registry.fetch import HttpSchemaFetcher
from schema_registry.registry import SchemaRegistry, load_schema_directory
from schema_registry.registry.loader import iter_schema_files, schema_name_for
from schema_registry.validation import JsonSchemaCompiler

logger = logging.getLogger(__name__)


class SchemaCatalogEntry(BaseModel):
    """One hosted schema."""
    name: str = Field(..., description="Registry name, e.g. 'v1/user'")
    path: str = Field(..., description="Absolute URL of the schema document")


class SchemaCatalog(BaseModel):
    """Listing returned for any unmatched GET."""
    schemas: list[SchemaCatalogEntry] = Field(default_factory=list)


def build_catalog(settings: RegistrySettings) -> SchemaCatalog:
    """List every schema file under the schema directory with its public URL."""
    return SchemaCatalog(
        schemas=[
            SchemaCatalogEntry(
                name=schema_name_for(path, settings.schema_dir),
                path=f"{settings.base_url}/schemas/"
                     f"{path.relative_to(settings.schema_dir).as_posix()}",
            )
            for path in iter_schema_files(settings.schema_dir)
        ]
    )


def create_app(settings: RegistrySettings | None = None) -> FastAPI:
    """
    Build the schema server.

    Args:
        settings: Server configuration (default: read from environment)

    Returns:
        Configured FastAPI application
    """
    settings = settings or settings_from_env()
    registry = SchemaRegistry(
        compiler=JsonSchemaCompiler(settings.validator_options()),
        fetcher=HttpSchemaFetcher(timeout=settings.fetch_timeout),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting schema server (schemas: {settings.schema_dir})")
        load_schema_directory(registry, settings.schema_dir)
        yield
        logger.info("Schema server stopped")

    app = FastAPI(
        title="Schema Registry",
        description="Hosts JSON Schema documents and validates data against them",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.registry = registry

    @app.exception_handler(SchemaNotFoundError)
    async def schema_not_found(request: Request, exc: SchemaNotFoundError):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(SchemaValidationError)
    async def schema_validation_failed(request: Request, exc: SchemaValidationError):
        return JSONResponse(
            status_code=422,
            content={
                "error": f"data failed validation against schema {exc.name}",
                "issues": [issue.model_dump() for issue in exc.issues],
            },
        )

    # Static hosting must be matched before the catch-all below
    app.mount(
        "/schemas",
        StaticFiles(directory=settings.schema_dir),
        name="schemas",
    )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "schemas": registry.schema_count,
        }

    @app.post("/validate/{name:path}")
    async def validate(name: str, payload: Any = Body(...)):
        """Validate the request body; responds with the coerced data."""
        return {"name": name, "data": registry.validate(name, payload)}

    @app.get("/{full_path:path}", response_model=SchemaCatalog)
    async def catalog(full_path: str):
        """Answer every other GET with the schema catalog."""
        return build_catalog(settings)

    return app


_settings = settings_from_env()

# Configure logging
logging.basicConfig(
    level=_settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

app = create_app(_settings)
