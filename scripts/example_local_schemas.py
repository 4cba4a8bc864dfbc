#!/usr/bin/env python3
"""
Local Schema Example

Registers the bundled v1 schemas from memory and validates sample data,
including a compound schema built from $refs to the others.

Usage:
    python scripts/example_local_schemas.py

Once the user schema (with its $id) is registered, other schemas can point
at it with "$ref": "user.json" (see v1/users.json).
"""

import json
import logging
import sys

# Add project root to path
sys.path.insert(0, ".")

from schema_registry import SchemaRegistry, SchemaRegistryError
from schema_registry.config import BUNDLED_SCHEMA_DIR

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def load(relative: str) -> dict:
    with open(BUNDLED_SCHEMA_DIR / relative, "r", encoding="utf-8") as f:
        return json.load(f)


def main() -> int:
    registry = SchemaRegistry()

    registry.add("user", load("v1/user.json"))
    registry.add("users", load("v1/users.json"))
    registry.add("location", load("v1/location.json"))
    registry.add("userWithLocation", load("v1/user-with-location.json"))

    try:
        user_params = {"name": "John Doe", "age": 10}
        validated_user = registry.validate("user", user_params)
        logger.info(f"validatedUser: {validated_user}")

        users_params = {
            "data": [user_params, {"name": "Jane Doe", "age": 1}],
            "count": 1,
        }
        validated_users = registry.validate("users", users_params)
        logger.info(f"validatedUsers: {validated_users}")

        user_with_location_params = {
            "name": "John Doe",
            "age": 1,
            "latitude": 85,
            "longitude": 180,
            "flag": "false",  # 1, 0, False, True, "false", "true" are all accepted
        }
        validated = registry.validate("userWithLocation", user_with_location_params)
        logger.info(f"validatedUserWithLocation: {validated}")
    except SchemaRegistryError as e:
        logger.error(f"error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
