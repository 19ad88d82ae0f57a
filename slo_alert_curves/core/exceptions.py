"""
Custom exception hierarchy for the burn-rate curve generator.

This module provides a structured exception hierarchy that enables:
- Specific error handling at the configuration and export boundaries
- Rich error context for debugging
- Consistent error messages across the codebase
"""

from __future__ import annotations

from typing import Any


class CurveError(Exception):
    """Base exception for all curve generation errors.

    All custom exceptions in the package inherit from this class,
    enabling catching all curve-related errors with a single except clause.
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        self.cause = cause
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message including context."""
        parts = [self.message]
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f"[{context_str}]")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " ".join(parts)


# =============================================================================
# Configuration-Related Exceptions
# =============================================================================


class ConfigurationError(CurveError):
    """Raised when configuration is invalid or missing."""

    def __init__(
        self,
        parameter: str,
        *,
        reason: str,
        value: Any = None,
    ) -> None:
        context = {"parameter": parameter}
        if value is not None:
            context["value"] = value
        super().__init__(f"Configuration error for {parameter}: {reason}", context=context)
        self.parameter = parameter
        self.reason = reason
        self.value = value


class InvalidWindowError(ConfigurationError):
    """Raised when an alerting window definition cannot produce a threshold.

    Examples:
        - Non-positive duration
        - Non-positive burn rate
        - Empty severity label
    """

    def __init__(
        self,
        index: int,
        field: str,
        *,
        reason: str,
        value: Any = None,
    ) -> None:
        super().__init__(f"windows[{index}].{field}", reason=reason, value=value)
        self.index = index
        self.field = field


# =============================================================================
# Evaluation-Related Exceptions
# =============================================================================


class InvalidErrorRateError(CurveError):
    """Raised when detection time is requested for an unusable error rate.

    Detection time is undefined when the observed error rate is zero,
    negative or not a finite number.
    """

    def __init__(self, error_rate: float) -> None:
        super().__init__(
            "Detection time is undefined for a non-positive error rate",
            context={"error_rate": error_rate},
        )
        self.error_rate = error_rate


# =============================================================================
# Export-Related Exceptions
# =============================================================================


class ExportError(CurveError):
    """Raised when curves cannot be written for a renderer."""

    def __init__(
        self,
        path: str,
        *,
        reason: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        message = f"Failed to export curves to {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, context={"path": path}, cause=cause)
        self.path = path
