"""Authentication handlers for schema introspection requests.

Provides pluggable authentication via the Auth protocol.
Users can implement custom auth or use built-in handlers.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Auth(Protocol):
    """Protocol for authentication handlers.

    Example:
        class TenantAuth:
            def __init__(self, token: str, tenant: str):
                self.token = token
                self.tenant = tenant

            def get_headers(self) -> dict[str, str]:
                return {"Authorization": f"Bearer {self.token}", "X-Tenant": self.tenant}
    """

    def get_headers(self) -> dict[str, str]:
        """Return headers to include in requests."""
        ...


class BearerAuth:
    """Bearer token authentication.

    Example:
        auth = BearerAuth("eyJhbGciOiJIUzI1NiIs...")
    """

    def __init__(self, token: str):
        self.token = token

    def get_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class HeaderAuth:
    """Arbitrary request headers, e.g. from repeated ``--header`` options."""

    def __init__(self, headers: dict[str, str]):
        self._headers = headers

    @classmethod
    def from_strings(cls, values: list[str] | tuple[str, ...]) -> "HeaderAuth":
        """Build from ``"Name: value"`` strings.

        Raises:
            ValueError: If a value has no ':' separator or an empty name
        """
        headers = {}
        for value in values:
            name, sep, header_value = value.partition(":")
            if not sep or not name.strip():
                raise ValueError(f"Invalid header {value!r}, expected 'Name: value'")
            headers[name.strip()] = header_value.strip()
        return cls(headers)

    def get_headers(self) -> dict[str, str]:
        return self._headers.copy()


class CombinedAuth:
    """Merges the headers of several handlers; later ones win."""

    def __init__(self, *handlers: Auth):
        self.handlers = handlers

    def get_headers(self) -> dict[str, str]:
        headers = {}
        for handler in self.handlers:
            headers.update(handler.get_headers())
        return headers


class NoAuth:
    """No authentication (for public endpoints or local development servers)."""

    def get_headers(self) -> dict[str, str]:
        return {}
