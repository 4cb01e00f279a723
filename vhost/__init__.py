from .app import VHostApp
from .exceptions import (
    InvalidArgumentError,
    MissingArgumentError,
    VHostArgumentError,
    VHostError,
)
from .hostname import Hostname, HostnamePattern, compile_hostname
from .logger import Logger
from .matching import VHostData, hostname_of, vhost_of
from .middleware import MiddlewareChain, VHostMiddleware, vhost
from .request import Request
from .response import Response, json_response, text_response

__version__ = "0.1.0"
__all__ = [
    "VHostApp",
    "VHostMiddleware",
    "vhost",
    "Hostname",
    "HostnamePattern",
    "compile_hostname",
    "VHostData",
    "hostname_of",
    "vhost_of",
    "MiddlewareChain",
    "Request",
    "Response",
    "text_response",
    "json_response",
    "Logger",
    "VHostError",
    "VHostArgumentError",
    "MissingArgumentError",
    "InvalidArgumentError",
]
