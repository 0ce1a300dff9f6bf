"""
Exception hierarchy for citeparse.

Extraction over LLM output is best-effort and public entry points do not
raise for malformed input. These exceptions mark programmer errors
(wrong argument types) and internal failures that callers inside the
package catch and degrade on.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the package
"""

from typing import Any


class CiteParseException(Exception):
    """Base exception for all citeparse errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class CoercionError(CiteParseException):
    """Raised when a coercion helper receives a value of an unsupported type."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize coercion error.

        Args:
            message: Error message
            field: Canonical field being coerced
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class DeferredBlockError(CiteParseException):
    """Raised when a deferred citation block cannot be decoded, even after repair."""

    def __init__(
        self,
        message: str,
        repairs: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize deferred block error.

        Args:
            message: Error message
            repairs: Repairs attempted before giving up
            details: Additional context
        """
        details = details or {}
        if repairs:
            details["repairs"] = repairs
        super().__init__(message, details)
