"""Application-level exception types.

Domain errors raised by services/adapters. The exception handlers map each
subclass to an HTTP status and a ``{"error": message}`` body.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for logs (never sent to clients)."""

    symbols: list[str]
    max_symbols: int
    actual_value: int
    symbol: str
    status_code: int
    error_type: str
    context: dict[str, Any]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message, safe to return to clients.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when request input or configuration is invalid."""


class QuoteSourceAppError(AppError):
    """Raised when the upstream quote source fails or returns bad data."""
