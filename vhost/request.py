"""
Request class for vhost applications.
"""

from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .matching import VHostData


class Request:
    """
    Request object that wraps an ASGI scope.

    Provides convenient access to:
    - HTTP method, path, headers
    - The raw ``Host`` header
    - The vhost match data set by ``VHostMiddleware``
    """

    # Set by VHostMiddleware when the host matched, None otherwise
    vhost: Optional["VHostData"]

    def __init__(self, scope: Dict[str, Any]):
        """
        Initialize Request object from an ASGI scope.

        Args:
            scope: ASGI scope dictionary containing request metadata
        """
        self._scope = scope
        self._headers: Dict[str, str] | None = None
        self.vhost = None

    @property
    def headers(self) -> Dict[str, str]:
        """
        Request headers as a case-insensitive dictionary.

        Returns:
            Dictionary with lowercase header names as keys
        """

        if self._headers is None:
            self._headers = {}
            for name, value in self._scope.get("headers", []):
                self._headers[name.decode("latin-1").lower()] = value.decode("latin-1")
        return self._headers

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get a header value by name (case-insensitive).

        Args:
            name: Header name (case-insensitive)
            default: Default value if header not found

        Returns:
            Header value or default
        """
        return self.headers.get(name.lower(), default)

    @property
    def host(self) -> Optional[str]:
        """Raw Host header value, port included"""

        return self.headers.get("host")

    @property
    def method(self) -> str:
        """HTTP method (GET, POST, PUT, DELETE, etc.)"""

        return self._scope.get("method", "GET")

    @property
    def path(self) -> str:
        """Request path (e.g., '/api/users')"""

        return self._scope.get("path", "/")

    @property
    def scope(self) -> Dict[str, Any]:
        """The underlying ASGI scope"""

        return self._scope

    def __repr__(self) -> str:
        return f"<Request {self.method} {self.host}{self.path}>"
