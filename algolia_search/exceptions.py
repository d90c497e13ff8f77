"""Exception hierarchy for the search client."""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class ErrorKind(str, Enum):
    """How a service failure was produced."""

    TERMINAL = "terminal"  # Request rejected, not retried
    AGGREGATED = "aggregated"  # Every host failed


class AlgoliaException(Exception):
    """Base client exception."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize client exception.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(AlgoliaException):
    """Invalid client configuration (credentials, timeouts, config files)."""

    pass


class ProgrammingError(AlgoliaException, ValueError):
    """Misuse of the client API, raised before any network attempt."""

    pass


class ServiceError(AlgoliaException):
    """Failure reported by, or while reaching, the search service."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.TERMINAL,
        status_code: Optional[int] = None,
        diagnostics: Optional[List[Tuple[str, str]]] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize service error.

        Args:
            message: Error message
            kind: Whether the error is terminal or aggregated over all hosts
            status_code: HTTP status code, when a response was received
            diagnostics: Ordered (host, detail) pairs recorded during failover
            details: Additional error details
        """
        super().__init__(message, details)
        self.kind = kind
        self.status_code = status_code
        self.diagnostics = list(diagnostics or [])

    @property
    def is_terminal(self) -> bool:
        """Whether the request itself was rejected."""
        return self.kind is ErrorKind.TERMINAL


__all__ = [
    "AlgoliaException",
    "ConfigError",
    "ErrorKind",
    "ProgrammingError",
    "ServiceError",
]
