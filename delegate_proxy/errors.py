"""Errors raised by the proxy itself.

Anything else that escapes a proxied call belongs to the target and is
re-raised untouched.
"""

from __future__ import annotations


class ProxyError(Exception):
    """Base class for proxy-originated failures."""


class InvalidTarget(ProxyError, ValueError):
    """Raised when a proxy is created without a target."""

    def __init__(self, message: str = "a proxy needs a target object") -> None:
        super().__init__(message)


class UnsupportedMethod(ProxyError, AttributeError):
    """Raised when a call names a method the target does not implement."""

    def __init__(self, method: str, target_type: str) -> None:
        self.method = method
        self.target_type = target_type
        super().__init__(f"{target_type} does not implement '{method}'")
