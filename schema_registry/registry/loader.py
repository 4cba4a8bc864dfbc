"""Load every schema file in a directory into a SchemaRegistry."""

import json
import logging
from pathlib import Path
from typing import Any

from schema_registry.errors import SchemaCompileError
from schema_registry.registry.registry import SchemaRegistry

logger = logging.getLogger(__name__)


def schema_name_for(path: Path, directory: Path) -> str:
    """Registry name for a schema file: relative path without '.json' (v1/user)."""
    return path.relative_to(directory).with_suffix("").as_posix()


def iter_schema_files(directory: str | Path) -> list[Path]:
    """All *.json files below directory, in stable order."""
    return sorted(Path(directory).rglob("*.json"))


def _read_schema(path: Path) -> dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SchemaCompileError(f"cannot read {path}: {e}") from e


def load_schema_directory(registry: SchemaRegistry, directory: str | Path) -> list[str]:
    """
    Register every schema file found under directory.

    Files may $ref each other in any order: schemas that fail to compile
    are retried once the others are in, until a pass makes no progress.

    Args:
        registry: Registry to add the schemas to
        directory: Root of the schema tree

    Returns:
        Names of the registered schemas, in registration order

    Raises:
        SchemaCompileError: If a file is unreadable or stays uncompilable
    """
    directory = Path(directory)
    pending = {
        schema_name_for(path, directory): _read_schema(path)
        for path in iter_schema_files(directory)
    }
    loaded: list[str] = []

    while pending:
        failures: dict[str, SchemaCompileError] = {}
        for name, schema in pending.items():
            try:
                registry.add(name, schema)
            except SchemaCompileError as e:
                failures[name] = e
            else:
                loaded.append(name)

        if len(failures) == len(pending):
            raise next(iter(failures.values()))
        pending = {name: pending[name] for name in failures}

    logger.info(f"Loaded {len(loaded)} schema(s) from {directory}")
    return loaded
