"""
Centralized error handling for eulerfield.

Provides a hierarchy of custom exceptions with user-friendly messages
and suggestions for fixes. Every error is fatal for the run: the CLI
reports it on stderr and exits non-zero.
"""

from dataclasses import dataclass
from typing import Optional, List


@dataclass
class ErrorContext:
    """
    Rich context for error reporting.

    Provides user-friendly information beyond the raw exception.
    """

    title: str  # Short title, e.g. "Expression Error"
    message: str  # User-friendly message
    technical_details: Optional[str]  # Debug info (logged, not printed)
    suggestions: List[str]  # Actionable suggestions


class EulerFieldError(Exception):
    """
    Base exception for all eulerfield errors.

    Subclasses provide rich error context for user-friendly reporting.
    """

    default_title = "Error"
    default_suggestions: List[str] = []

    def __init__(
        self,
        message: str,
        *,
        suggestions: Optional[List[str]] = None,
        technical_details: Optional[str] = None,
    ):
        super().__init__(message)
        self.user_message = message
        self.suggestions = suggestions or self.default_suggestions.copy()
        self.technical_details = technical_details

    def to_context(self) -> ErrorContext:
        """Convert to ErrorContext for display."""
        return ErrorContext(
            title=self.default_title,
            message=self.user_message,
            technical_details=self.technical_details,
            suggestions=self.suggestions,
        )


# === Input Errors ===


class ArgumentError(EulerFieldError):
    """Raised for a wrong argument count, unknown flag or unparsable number."""

    default_title = "Argument Error"
    default_suggestions = [
        "Table mode: expr step x0 y0 end precision [-l|-c|-cr]",
        "Field mode: expr x0 y0 xEnd yEnd xStep yStep precision -df",
        "Curve mode: expr x0 y0 xEnd yEnd xStep yStep h [curveX0 curveY0] precision -dfc",
    ]


class ExpressionError(EulerFieldError):
    """Raised when the derivative expression cannot be parsed or evaluated."""

    default_title = "Expression Error"
    default_suggestions = [
        "Use only the variables x and y",
        "Use ^ or ** for powers, e.g. 'x^2 - y'",
        "Check for unbalanced parentheses",
    ]

    def __init__(
        self,
        message: str,
        *,
        expression: str = "",
        suggestion: Optional[str] = None,
        **kwargs,
    ):
        # Add specific suggestion to front of list if provided
        suggestions = kwargs.pop("suggestions", None) or self.default_suggestions.copy()
        if suggestion:
            suggestions.insert(0, suggestion)

        if expression and expression not in message:
            message = f"{message}: '{expression}'"

        super().__init__(message, suggestions=suggestions, **kwargs)
        self.expression = expression


# === Validation Errors ===


class ValidationError(EulerFieldError):
    """Raised when numeric inputs describe an unusable run."""

    default_title = "Invalid Input"
    default_suggestions = [
        "Step sizes must be positive at the chosen precision",
        "Ranges must be increasing: xEnd >= x0 and yEnd > y0",
    ]


# === Utility functions ===


def format_error_for_user(exc: EulerFieldError) -> str:
    """
    Format an eulerfield error into a user-friendly string.

    Returns a single line suitable for stderr.
    """
    ctx = exc.to_context()

    result = f"{ctx.title}: {ctx.message}"
    if ctx.suggestions:
        result += f" Try: {ctx.suggestions[0]}"

    return result
