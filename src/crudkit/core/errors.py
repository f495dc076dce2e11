"""
Structured error types for crudkit.

Every failure crudkit reports itself is a :class:`CrudKitError`.  Failures
raised by the wrapped libraries (SQLAlchemy, pymongo) are re-raised once as
the matching subclass with the original exception chained as ``cause`` so
callers keep the full traceback.

Manifesto:
    - **Typed hierarchy:** One subclass per concern (config, database,
      document store, dependency resolution)
    - **Error chaining:** The driver exception is never swallowed
    - **No retries:** Errors propagate to the caller exactly once
    - **Serializable:** ``to_dict()`` feeds structured logging

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                      CrudKitError                        │
        │            (category, context, cause)                    │
        ├──────────────────────────────────────────────────────────┤
        │  ConfigError          DatabaseError      DocumentStoreError
        │  └ MissingConfigError └ QueryError                       │
        │                                                          │
        │  ServiceResolutionError                                  │
        └──────────────────────────────────────────────────────────┘

Examples:
    >>> from crudkit.core.errors import MissingConfigError
    >>> err = MissingConfigError("connection_strings.default")
    >>> err.category
    <ErrorCategory.CONFIG: 'CONFIG'>
    >>> err.to_dict()["error_type"]
    'MissingConfigError'

Tags:
    errors, exceptions, error-hierarchy, chaining, crudkit
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories used for classification and log routing."""

    DATABASE = "DATABASE"              # Relational engine, raw queries
    DOCUMENT_STORE = "DOCUMENT_STORE"  # MongoDB driver
    CONFIG = "CONFIG"                  # Missing or invalid settings
    DEPENDENCY = "DEPENDENCY"          # Service container resolution
    INTERNAL = "INTERNAL"              # Bugs, unexpected state


class CrudKitError(Exception):
    """
    Base exception for all crudkit errors.

    Carries a :class:`ErrorCategory`, a free-form ``context`` dict and the
    optional underlying exception.  Subclasses set ``default_category``.

    Examples:
        >>> try:
        ...     raise ConnectionError("refused")
        ... except ConnectionError as e:
        ...     err = CrudKitError("store unreachable", cause=e)
        >>> err.cause
        ConnectionError('refused')
        >>> err.with_context(collection="User").context
        {'collection': 'User'}
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context: dict[str, Any] = dict(context or {})
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> CrudKitError:
        """Add context to this error (fluent API)."""
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.context:
            result["context"] = dict(self.context)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(CrudKitError):
    """Configuration error. Configuration must be fixed."""

    default_category = ErrorCategory.CONFIG


class MissingConfigError(ConfigError):
    """Required configuration is missing."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"Missing required configuration: {key}")


# =============================================================================
# STORAGE ERRORS
# =============================================================================


class DatabaseError(CrudKitError):
    """Relational database error raised while saving or querying."""

    default_category = ErrorCategory.DATABASE


class QueryError(DatabaseError):
    """Raw SQL query failed."""

    def __init__(self, message: str, *, query: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.query = query
        if query is not None:
            self.context.setdefault("query", query)


class DocumentStoreError(CrudKitError):
    """Document database (MongoDB) error."""

    default_category = ErrorCategory.DOCUMENT_STORE


# =============================================================================
# DEPENDENCY INJECTION ERRORS
# =============================================================================


class ServiceResolutionError(CrudKitError):
    """A service could not be resolved from the container."""

    default_category = ErrorCategory.DEPENDENCY

    def __init__(self, key: Any, message: str | None = None):
        self.key = key
        name = getattr(key, "__name__", repr(key))
        super().__init__(message or f"No service registered for {name}")


__all__ = [
    "ErrorCategory",
    "CrudKitError",
    "ConfigError",
    "MissingConfigError",
    "DatabaseError",
    "QueryError",
    "DocumentStoreError",
    "ServiceResolutionError",
]
