"""
HTTP Schema Fetcher

Fetches schema documents with a single GET via httpx.

No authentication, no caching, no conditional requests, no retry.
The request only times out when a timeout is configured; otherwise a hung
server blocks the awaiting coroutine until the caller cancels it.
"""

import logging
from typing import Any

import httpx

from schema_registry.errors import SchemaFetchError
from schema_registry.fetch.ports import SchemaFetcher

logger = logging.getLogger(__name__)


class HttpSchemaFetcher(SchemaFetcher):
    """SchemaFetcher over HTTP(S)."""

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the fetcher.

        Args:
            timeout: Seconds before the request is abandoned (None = never)
            transport: Optional httpx transport (e.g. httpx.MockTransport)
        """
        self._timeout = timeout
        self._transport = transport

    async def fetch(self, uri: str) -> dict[str, Any]:
        logger.debug(f"Fetching schema from {uri}")
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = await client.get(uri, headers={"Accept": "application/json"})
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SchemaFetchError(uri, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise SchemaFetchError(uri, str(e) or type(e).__name__) from e

        try:
            document = response.json()
        except ValueError as e:
            raise SchemaFetchError(uri, f"response is not valid JSON: {e}") from e

        if not isinstance(document, dict):
            raise SchemaFetchError(
                uri, f"expected a JSON object, got {type(document).__name__}"
            )
        return document
