"""
Response class for vhost applications.
"""

import json
from http import HTTPStatus
from typing import Any, Dict, Optional, Union


class Response:
    """
    Response object for building HTTP responses.

    Content type is derived from the content: dict/list become JSON,
    str becomes plain text and bytes are sent as an octet stream.
    """

    def __init__(
        self,
        content: Union[str, bytes, dict, list, None] = "",
        status_code: Union[int, HTTPStatus] = HTTPStatus.OK,
        headers: Optional[Dict[str, str]] = None,
        content_type: Optional[str] = None,
    ):
        """
        Initialize Response object.

        Args:
            content: Response content (auto-converts dict/list to JSON)
            status_code: HTTP status code (int or HTTPStatus enum)
            headers: Additional response headers
            content_type: Explicit content type (auto-detected if not provided)
        """
        self.status_code = int(status_code)
        self.headers = dict(headers or {})

        self.body, detected_content_type = self._process_content(content)

        # Explicit content type takes precedence over the detected one
        if content_type:
            self.headers["content-type"] = content_type
        elif "content-type" not in self.headers:
            self.headers["content-type"] = detected_content_type

    def _process_content(self, content: Any) -> tuple[bytes, str]:
        if isinstance(content, (dict, list)):
            body = json.dumps(content, ensure_ascii=False).encode("utf-8")
            return body, "application/json; charset=utf-8"
        if isinstance(content, bytes):
            return content, "application/octet-stream"
        if content is None:
            return b"", "text/plain; charset=utf-8"
        return str(content).encode("utf-8"), "text/plain; charset=utf-8"

    def set_header(self, name: str, value: str) -> "Response":
        """
        Set a response header (supports method chaining).

        Args:
            name: Header name
            value: Header value

        Returns:
            self for method chaining
        """
        self.headers[name] = value
        return self

    def to_asgi_response(self) -> Dict[str, Any]:
        """
        Convert to ASGI response format.

        Returns:
            Dictionary with 'status', 'headers', and 'body' keys
        """
        asgi_headers = []
        for name, value in self.headers.items():
            asgi_headers.append(
                [name.lower().encode("latin-1"), str(value).encode("latin-1")]
            )
        asgi_headers.append([b"content-length", str(len(self.body)).encode("latin-1")])

        return {"status": self.status_code, "headers": asgi_headers, "body": self.body}

    def __repr__(self) -> str:
        return f"<Response {self.status_code}>"


def text_response(
    content: str,
    status_code: Union[int, HTTPStatus] = HTTPStatus.OK,
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    """Create a plain text response."""
    return Response(
        content,
        status_code=status_code,
        headers=headers,
        content_type="text/plain; charset=utf-8",
    )


def json_response(
    content: Union[dict, list],
    status_code: Union[int, HTTPStatus] = HTTPStatus.OK,
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    """Create a JSON response."""
    return Response(
        content,
        status_code=status_code,
        headers=headers,
        content_type="application/json; charset=utf-8",
    )
