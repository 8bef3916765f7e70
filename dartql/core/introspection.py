"""Downloads a schema from a live GraphQL endpoint.

Sends the standard introspection query and converts the result back into
SDL text, so remote schemas go through the same parser as local files.
"""

import asyncio
import logging
from typing import Any

import httpx
from graphql import build_client_schema, get_introspection_query, print_schema

from .auth import Auth, NoAuth
from .errors import SchemaFetchError

logger = logging.getLogger(__name__)


class SchemaFetcher:
    """Fetches a schema via introspection.

    Examples:
        fetcher = SchemaFetcher("http://localhost:4001/graphql")
        sdl = await fetcher.fetch_sdl()

        fetcher = SchemaFetcher(url, auth=BearerAuth(token))
    """

    def __init__(
        self,
        url: str,
        auth: Auth | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the fetcher.

        Args:
            url: GraphQL endpoint URL
            auth: Authentication handler (implements Auth protocol)
            timeout: Request timeout in seconds
            transport: Optional httpx transport, e.g. for testing
        """
        self.url = url
        self.auth = auth or NoAuth()
        self.timeout = timeout
        self.transport = transport

    async def fetch_introspection(self) -> dict[str, Any]:
        """Run the introspection query and return its 'data' portion.

        Raises:
            SchemaFetchError: On transport/HTTP failure or a GraphQL error response
        """
        headers = {"Content-Type": "application/json"}
        headers.update(self.auth.get_headers())
        payload = {"query": get_introspection_query(descriptions=True)}

        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=headers,
            transport=self.transport,
        ) as client:
            try:
                response = await client.post(self.url, json=payload)
                response.raise_for_status()
                result = response.json()
            except httpx.HTTPStatusError as e:
                raise SchemaFetchError(
                    f"Schema request failed with HTTP {e.response.status_code}", self.url
                ) from e
            except httpx.HTTPError as e:
                raise SchemaFetchError(f"Schema request failed: {e}", self.url) from e
            except ValueError as e:
                raise SchemaFetchError(f"Response is not JSON: {e}", self.url) from e

        if result.get("errors"):
            error_messages = "; ".join(e.get("message", str(e)) for e in result["errors"])
            raise SchemaFetchError(f"GraphQL errors: {error_messages}", self.url)
        data = result.get("data")
        if not data or "__schema" not in data:
            raise SchemaFetchError("Response has no introspection data", self.url)
        return data

    async def fetch_sdl(self) -> str:
        """Fetch the schema and print it as SDL."""
        data = await self.fetch_introspection()
        try:
            schema = build_client_schema(data)
        except (TypeError, ValueError) as e:
            raise SchemaFetchError(f"Invalid introspection result: {e}", self.url) from e
        logger.debug("Fetched schema with %d types from %s", len(schema.type_map), self.url)
        return print_schema(schema)


def fetch_schema_sdl(
    url: str,
    auth: Auth | None = None,
    timeout: float = 30.0,
) -> str:
    """Synchronous wrapper around ``SchemaFetcher.fetch_sdl``."""
    return asyncio.run(SchemaFetcher(url, auth, timeout=timeout).fetch_sdl())
