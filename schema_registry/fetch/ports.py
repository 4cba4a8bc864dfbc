"""
Schema Fetcher Port

The registry never talks HTTP itself; it awaits a SchemaFetcher.
Swapping the fetcher (tests, other transports) leaves the registry untouched.
"""

from abc import ABC, abstractmethod
from typing import Any


class SchemaFetcher(ABC):
    """Retrieves a schema document from a URI."""

    @abstractmethod
    async def fetch(self, uri: str) -> dict[str, Any]:
        """
        Fetch and parse a schema document.

        Single attempt, no retry.

        Args:
            uri: Location of the JSON document

        Returns:
            The parsed JSON object

        Raises:
            SchemaFetchError: On transport failure, non-2xx status,
                or a body that is not a JSON object
        """
        ...
