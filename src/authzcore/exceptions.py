"""Exception hierarchy for authzcore.

All errors raised by the library inherit from AuthzError. This module provides:
- Base exception hierarchy with stable error codes
- ErrorRegistry for mapping codes back to exception classes

Not-found is never an error: a missing user, role, or collaboration instance
yields an empty result.

Usage:
    from authzcore.exceptions import AuthzError, StoreError

Integrations may define thin subclasses for their own failures:
    @register_error("LDAP_ERROR")
    class LdapError(AuthzError):
        code = "LDAP_ERROR"
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar, cast

__all__ = [
    # Base hierarchy
    "AuthzError",
    "ConfigurationError",
    "StoreError",
    "StoreConnectionError",
    "ValidationError",
    # Registry
    "ErrorRegistry",
    "error_registry",
    "register_error",
]


# ---- Exception Hierarchy ----------------------------------------------------


class AuthzError(Exception):
    """Base exception for authzcore.

    Attributes:
        code: Stable error code string for protocol mapping (e.g. "STORE_ERROR").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(AuthzError):
    """Invalid or missing configuration."""

    code: str = "CONFIGURATION_ERROR"


class StoreError(AuthzError):
    """A read against a role, binding, or collaboration store failed."""

    code: str = "STORE_ERROR"
    message: str = "Store read failed"


class StoreConnectionError(StoreError):
    """The backing store could not be reached."""

    code: str = "STORE_CONNECTION_ERROR"


class ValidationError(AuthzError):
    """Domain validation failure with a user-facing message."""

    code: str = "VALIDATION_ERROR"


# ---- Error Registry for Protocol Mapping ------------------------------------

_E = TypeVar("_E", bound=type[AuthzError])


class ErrorRegistry:
    """Registry for mapping internal errors to external protocol codes."""

    def __init__(self) -> None:
        self._errors: dict[str, type[AuthzError]] = {}

    def register(self, code: str, error_cls: type[AuthzError]) -> None:
        self._errors[code] = error_cls

    def get(self, code: str) -> type[AuthzError] | None:
        return self._errors.get(code)

    def all(self) -> dict[str, type[AuthzError]]:
        return dict(self._errors)


error_registry = ErrorRegistry()


def register_error(code: str) -> Callable[[_E], _E]:
    """Decorator to register a custom error type.

    Usage:
        @register_error("MY_CUSTOM_ERROR")
        class MyCustomError(AuthzError):
            code = "MY_CUSTOM_ERROR"
    """

    def decorator(cls: _E) -> _E:
        error_registry.register(code, cls)
        return cls

    return cast(Callable[[_E], _E], decorator)


# Register base errors
error_registry.register("INTERNAL_ERROR", AuthzError)
error_registry.register("CONFIGURATION_ERROR", ConfigurationError)
error_registry.register("STORE_ERROR", StoreError)
error_registry.register("STORE_CONNECTION_ERROR", StoreConnectionError)
error_registry.register("VALIDATION_ERROR", ValidationError)
