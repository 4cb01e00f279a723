"""
Exceptions raised by vhost.

All of them are raised while building a middleware, never while a request
is being handled: a host that does not match is routine, not an error.
"""


class VHostError(Exception):
    """Base class for vhost errors."""


class VHostArgumentError(VHostError, TypeError):
    """A constructor argument was missing or unusable."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingArgumentError(VHostArgumentError):
    def __init__(self, name: str):
        super().__init__(f"argument {name} is required")
        self.argument = name


class InvalidArgumentError(VHostArgumentError):
    def __init__(self, name: str, reason: str):
        super().__init__(f"argument {name} {reason}")
        self.argument = name
