"""Tests for fetching a schema from an endpoint."""

import asyncio
import json

import httpx
import pytest
from graphql import build_schema, get_introspection_query, graphql_sync

from dartql.core.auth import BearerAuth
from dartql.core.errors import SchemaFetchError
from dartql.core.introspection import SchemaFetcher
from dartql.core.parser import SchemaParser

URL = "http://localhost:4001/graphql"

SDL = """
type User {
  id: ID!
  name: String
}

type Query {
  user(id: ID!): User
}
"""


@pytest.fixture
def introspection_data():
    schema = build_schema(SDL)
    return graphql_sync(schema, get_introspection_query(descriptions=True)).data


def fetch(handler, auth=None) -> str:
    fetcher = SchemaFetcher(URL, auth=auth, transport=httpx.MockTransport(handler))
    return asyncio.run(fetcher.fetch_sdl())


class TestSchemaFetcher:
    """Tests for SchemaFetcher."""

    def test_returns_sdl(self, introspection_data):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"data": introspection_data})

        sdl = fetch(handler)
        assert "type User" in sdl
        assert "user(id: ID!): User" in sdl
        assert json.loads(requests[0].content)["query"].lstrip().startswith("query IntrospectionQuery")

    def test_sdl_is_parseable(self, introspection_data):
        sdl = fetch(lambda request: httpx.Response(200, json={"data": introspection_data}))
        schema = SchemaParser.from_sdl(sdl)
        assert schema.get_type("User") is not None

    def test_sends_auth_headers(self, introspection_data):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.headers)
            return httpx.Response(200, json={"data": introspection_data})

        fetch(handler, auth=BearerAuth("secret"))
        assert seen["authorization"] == "Bearer secret"

    def test_http_error(self):
        with pytest.raises(SchemaFetchError, match="HTTP 500") as excinfo:
            fetch(lambda request: httpx.Response(500, text="boom"))
        assert excinfo.value.url == URL

    def test_graphql_errors(self):
        payload = {"errors": [{"message": "Introspection is disabled"}]}
        with pytest.raises(SchemaFetchError, match="Introspection is disabled"):
            fetch(lambda request: httpx.Response(200, json=payload))

    def test_missing_data(self):
        with pytest.raises(SchemaFetchError, match="no introspection data"):
            fetch(lambda request: httpx.Response(200, json={"data": None}))

    def test_not_json(self):
        with pytest.raises(SchemaFetchError, match="not JSON"):
            fetch(lambda request: httpx.Response(200, text="<html></html>"))

    def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(SchemaFetchError, match="connection refused"):
            fetch(handler)
