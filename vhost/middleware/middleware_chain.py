"""
Middleware chain implementation for vhost applications.

The MiddlewareChain class keeps the registered middleware and builds the
execution pipeline around a final endpoint.
"""

from typing import Awaitable, Callable, List, Protocol

from ..request import Request
from ..response import Response

Endpoint = Callable[[Request], Awaitable[Response]]


class MiddlewareCallable(Protocol):
    """Protocol for middleware callables."""

    async def __call__(self, request: Request, call_next: Endpoint) -> Response:
        """
        Process a request through the middleware.

        Args:
            request: The incoming HTTP request
            call_next: Function to call the next middleware in the chain

        Returns:
            The HTTP response
        """
        ...


class MiddlewareChain:
    """
    Manages a chain of middleware.

    The chain follows the "onion" pattern: middleware run in registration
    order, each one wrapping the next. A vhost middleware that does not match
    simply hands the request to the next layer.
    """

    def __init__(self):
        self._middlewares: List[MiddlewareCallable] = []

    def add(self, middleware: MiddlewareCallable):
        """
        Add middleware to the chain.

        Args:
            middleware: A callable with signature (request, call_next) -> response
        """
        self._middlewares.append(middleware)

    def build(self, endpoint: Endpoint) -> Endpoint:
        """
        Build the middleware chain around the given endpoint.

        Args:
            endpoint: The final handler, reached when no middleware answered

        Returns:
            A callable that represents the complete middleware chain

        Example:
            If middleware are registered as [A, B, C], the execution flow will be:
            Request -> A -> B -> C -> endpoint -> C -> B -> A -> Response
        """
        if not self._middlewares:
            return endpoint

        current_handler = endpoint

        # last registered ends up closest to the endpoint
        for middleware in reversed(self._middlewares):
            next_handler = current_handler

            async def middleware_handler(
                request: Request, mw=middleware, next_app=next_handler
            ):
                async def call_next(req: Request):
                    return await next_app(req)

                return await mw(request, call_next)

            current_handler = middleware_handler

        return current_handler

    def count(self) -> int:
        """Return the number of middleware in the chain."""
        return len(self._middlewares)

    def clear(self):
        """Remove all middleware from the chain."""
        self._middlewares.clear()
