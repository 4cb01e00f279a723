"""
Virtual host middleware.

Dispatches a request to a handler when its ``Host`` header matches a
hostname pattern, and passes it down the chain otherwise.
"""

import logging
from re import Pattern
from typing import Awaitable, Callable, Union

from ..exceptions import InvalidArgumentError, MissingArgumentError
from ..hostname import Hostname, HostnamePattern, compile_hostname
from ..matching import vhost_of
from ..request import Request
from ..response import Response

logger = logging.getLogger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]
VHostHandler = Callable[[Request, CallNext], Awaitable[Response]]


class VHostMiddleware:
    """
    Virtual host middleware.

    Usage:
        app.add_middleware(VHostMiddleware("*.example.com", handler))

    ``handler`` receives the request with ``request.vhost`` populated and the
    ``call_next`` of this middleware, so it may still continue the chain.
    """

    def __init__(
        self,
        hostname: Union[str, Pattern, Hostname, HostnamePattern],
        handler: VHostHandler,
    ):
        """
        Initialize vhost middleware.

        Args:
            hostname: Literal hostname (``*`` captures one label) or a pattern
            handler: Async callable with signature (request, call_next) -> response

        Raises:
            MissingArgumentError: If hostname or handler is not given
            InvalidArgumentError: If handler is not callable
        """
        if not hostname:
            raise MissingArgumentError("hostname")

        if not handler:
            raise MissingArgumentError("handler")

        if not callable(handler):
            raise InvalidArgumentError("handler", "must be a function")

        self.hostname = hostname
        self.handler = handler
        self.regexp = compile_hostname(hostname)

    async def __call__(self, request: Request, call_next: CallNext) -> Response:
        """the middleware callable."""

        vhostdata = vhost_of(request, self.regexp)

        if vhostdata is None:
            logger.debug(
                "host %r does not match %s",
                request.headers.get("host"),
                self.regexp.pattern,
            )
            return await call_next(request)

        logger.debug(
            "host %r matched %s",
            vhostdata.host,
            self.regexp.pattern,
            extra={"host": vhostdata.host},
        )
        request.vhost = vhostdata

        return await self.handler(request, call_next)

    def __repr__(self) -> str:
        return f"<VHostMiddleware {self.regexp.pattern!r}>"


def vhost(
    hostname: Union[str, Pattern, Hostname, HostnamePattern],
    handler: VHostHandler,
) -> VHostMiddleware:
    """
    Create a vhost middleware.

    Args:
        hostname: Literal hostname or pattern to match the Host header against
        handler: Handler invoked for matching requests

    Returns:
        A middleware callable with signature (request, call_next) -> response
    """
    return VHostMiddleware(hostname, handler)
