"""
vhost middleware package.

Provides the middleware chain and the virtual host middleware itself.
"""

from .middleware_chain import MiddlewareChain, MiddlewareCallable
from .virtual_host import VHostMiddleware, vhost

__all__ = ["MiddlewareChain", "MiddlewareCallable", "VHostMiddleware", "vhost"]
