"""
VHostApp - an ASGI application that dispatches requests by Host header.
"""

import logging
from http import HTTPStatus
from re import Pattern
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from .hostname import Hostname, HostnamePattern
from .middleware import MiddlewareCallable, MiddlewareChain
from .middleware.virtual_host import VHostHandler, VHostMiddleware
from .request import Request
from .response import Response, text_response


async def not_found(request: Request) -> Response:
    """Default endpoint, reached when no vhost answered the request."""
    return text_response("Not Found", status_code=HTTPStatus.NOT_FOUND)


class VHostApp:
    """
    Main application class. Register vhosts and middleware, then serve it
    with any ASGI server.

    Example:
        app = VHostApp()

        @app.vhost("*.example.com")
        async def tenant(request, call_next):
            return text_response(f"hello {request.vhost[0]}")
    """

    def __init__(
        self,
        default_handler: Optional[Callable[[Request], Awaitable[Response]]] = None,
        logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
        debug: bool = False,
    ):
        """Initialize the application.

        Args:
            default_handler: Endpoint for requests no vhost matched (404 by default)
            logger: Logger for startup and error messages (module logger by default)
            debug: Include exception details in 500 responses
        """
        self.default_handler = default_handler or not_found
        self.logger = logger or logging.getLogger(__name__)
        self.debug = debug
        self.middleware_chain = MiddlewareChain()
        self._app_with_middleware: Callable[[Request], Awaitable[Response]] | None = (
            None
        )
        self._middleware_built = False

        self._startup_handlers: List[Callable[[], Awaitable[None]]] = []
        self._shutdown_handlers: List[Callable[[], Awaitable[None]]] = []

        # First startup handler builds middleware chain
        self._startup_handlers.append(self._build_middleware_chain)

    async def _build_middleware_chain(self):
        """Build the middleware chain during application startup."""
        if not self._middleware_built:
            self._app_with_middleware = self.middleware_chain.build(
                self.default_handler
            )
            self._middleware_built = True
            self.logger.info(
                "middleware chain built with %d middleware",
                self.middleware_chain.count(),
            )

    def add_middleware(self, middleware: MiddlewareCallable):
        """
        Add middleware to the application.

        Args:
            middleware: Middleware callable with signature (request, call_next)
        Raises:
            RuntimeError: If middleware is added after application startup
        """
        if self._middleware_built:
            raise RuntimeError(
                "Cannot add middleware after application startup. Add all middleware before starting the server."
            )
        self.middleware_chain.add(middleware)

    def add_vhost(
        self,
        hostname: Union[str, Pattern, Hostname, HostnamePattern],
        handler: VHostHandler,
    ) -> VHostMiddleware:
        """
        Dispatch requests for ``hostname`` to ``handler``.

        Vhosts are tried in registration order, the first match wins.
        """
        middleware = VHostMiddleware(hostname, handler)
        self.add_middleware(middleware)
        return middleware

    def vhost(self, hostname: Union[str, Pattern, Hostname, HostnamePattern]):
        """
        Decorator for registering a vhost handler.

        Usage:
            @app.vhost("api.example.com")
            async def api(request, call_next):
                return json_response({"host": request.vhost.hostname})
        """

        def decorator(func: VHostHandler) -> VHostHandler:
            self.add_vhost(hostname, func)
            return func

        return decorator

    def on_event(self, event_type: str):
        """
        Register a function to run on application startup or shutdown.

        Args:
            event_type: Either "startup" or "shutdown"

        Raises:
            ValueError: If event_type is not "startup" or "shutdown"
        """

        def decorator(
            func: Callable[[], Awaitable[None]],
        ) -> Callable[[], Awaitable[None]]:
            if event_type == "startup":
                self._startup_handlers.append(func)
            elif event_type == "shutdown":
                self._shutdown_handlers.append(func)
            else:
                raise ValueError(
                    f"Invalid event type: {event_type}. Must be 'startup' or 'shutdown'"
                )
            return func

        return decorator

    async def startup(self) -> None:
        """Run all registered startup handlers."""
        for handler in self._startup_handlers:
            await handler()

    async def shutdown(self) -> None:
        """Run all registered shutdown handlers."""
        for handler in self._shutdown_handlers:
            await handler()

    async def __call__(self, scope: Dict[str, Any], receive: Callable, send: Callable):
        """
        ASGI application entrypoint.

        Args:
            scope: Connection scope information
            receive: Callable to receive messages from the client
            send: Callable to send messages to the client
        """

        if scope["type"] == "http":
            await self._handle_http(scope, receive, send)
        elif scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
        else:
            # For non-HTTP protocols, just close the connection
            await send({"type": "websocket.close", "code": 1000})

    async def _handle_lifespan(
        self, scope: Dict[str, Any], receive: Callable, send: Callable
    ):
        """Handle ASGI lifespan protocol for startup and shutdown events."""
        while True:
            message = await receive()

            if message["type"] == "lifespan.startup":
                try:
                    await self.startup()
                    await send({"type": "lifespan.startup.complete"})
                except Exception as e:
                    self.logger.exception("startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(e)})
            elif message["type"] == "lifespan.shutdown":
                try:
                    await self.shutdown()
                    await send({"type": "lifespan.shutdown.complete"})
                except Exception as e:
                    self.logger.exception("shutdown failed")
                    await send({"type": "lifespan.shutdown.failed", "message": str(e)})
                return

    async def _handle_http(
        self, scope: Dict[str, Any], receive: Callable, send: Callable
    ):
        """Handle HTTP requests using the middleware stack."""
        # Servers without lifespan support never run startup
        await self._build_middleware_chain()

        request = Request(scope)
        try:
            response = await self._app_with_middleware(request)  # type: ignore[misc]
        except Exception as e:
            self.logger.exception(
                "unhandled error for %s %s",
                request.method,
                request.path,
                extra={"host": request.host, "path": request.path},
            )
            message = f"Internal Server Error: {e}" if self.debug else "Internal Server Error"
            response = text_response(
                message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR
            )

        await self._send_response(send, response.to_asgi_response())

    async def _send_response(self, send: Callable, asgi_response: Dict[str, Any]):
        """Send an ASGI HTTP response."""
        await send(
            {
                "type": "http.response.start",
                "status": asgi_response["status"],
                "headers": asgi_response["headers"],
            }
        )
        await send(
            {
                "type": "http.response.body",
                "body": asgi_response["body"],
                "more_body": False,
            }
        )
