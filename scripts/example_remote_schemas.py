#!/usr/bin/env python3
"""
Remote Schema Example

Loads schemas from a running schema server and validates against them.

Usage:
    1. Start the server:
       uvicorn schema_registry.transport.app:app --port 8000
    2. Run this script:
       python scripts/example_remote_schemas.py [base_url]
"""

import asyncio
import logging
import sys
from datetime import datetime, timezone

# Add project root to path
sys.path.insert(0, ".")

from schema_registry import HttpSchemaFetcher, SchemaRegistry, SchemaRegistryError
from schema_registry.config import settings_from_env

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def main(base_url: str) -> int:
    settings = settings_from_env()
    registry = SchemaRegistry(fetcher=HttpSchemaFetcher(timeout=settings.fetch_timeout))

    try:
        await registry.add_from_url("user/v1", f"{base_url}/schemas/v1/user.json")
        params = {"name": "John Doe", "age": 20}
        validated_user = registry.validate("user/v1", params)
        logger.info(f"validatedUserV1: {validated_user}")

        await registry.add_from_url("user/v2", f"{base_url}/schemas/v2/user.json")
        params_v2 = {
            "name": "John Doe",
            "age": 20,
            "date_of_birth": datetime.now(timezone.utc).isoformat(),  # RFC 3339
        }
        validated_user_v2 = registry.validate("user/v2", params_v2)
        logger.info(f"validatedUserV2: {validated_user_v2}")
    except SchemaRegistryError as e:
        logger.error(f"error: {e}")
        print("\n   Is the schema server running?")
        print("   uvicorn schema_registry.transport.app:app --port 8000")
        return 1

    return 0


if __name__ == "__main__":
    url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"
    sys.exit(asyncio.run(main(url.rstrip("/"))))
