"""
Tests for error handling module.

Tests the centralized error handling with rich context and suggestions.
"""

import pytest


class TestErrorContext:
    """Test ErrorContext conversion."""

    def test_from_expression_error(self):
        """Test ErrorContext from ExpressionError."""
        from eulerfield.utils.errors import ExpressionError

        exc = ExpressionError(
            "Failed to parse expression",
            expression="0.3*(300 - y",
            suggestion="Missing 1 closing parenthesis ')'",
        )

        ctx = exc.to_context()

        assert ctx.title == "Expression Error"
        assert "0.3*(300 - y" in ctx.message
        assert ctx.suggestions[0] == "Missing 1 closing parenthesis ')'"

    def test_from_validation_error(self):
        """Test ErrorContext from ValidationError keeps default suggestions."""
        from eulerfield.utils.errors import ValidationError

        ctx = ValidationError("Direction field y range must be non-zero").to_context()

        assert ctx.title == "Invalid Input"
        assert "non-zero" in ctx.message
        assert len(ctx.suggestions) > 0

    def test_from_argument_error(self):
        """Test ArgumentError suggestions list the usage forms."""
        from eulerfield.utils.errors import ArgumentError

        ctx = ArgumentError("Too many or too few arguments").to_context()

        assert ctx.title == "Argument Error"
        assert any("-df" in s for s in ctx.suggestions)
        assert ctx.technical_details is None


class TestEulerFieldError:
    """Test base EulerFieldError class."""

    def test_custom_suggestions(self):
        """Test error with custom suggestions."""
        from eulerfield.utils.errors import ValidationError

        exc = ValidationError("Bad step", suggestions=["Try X", "Try Y"])

        assert exc.suggestions == ["Try X", "Try Y"]

    def test_default_suggestions_not_shared(self):
        """Test instances get their own copy of the default suggestions."""
        from eulerfield.utils.errors import ExpressionError

        first = ExpressionError("a", suggestion="first only")
        second = ExpressionError("b")

        assert "first only" in first.suggestions
        assert "first only" not in second.suggestions

    def test_expression_not_repeated(self):
        """Test the expression is appended only when missing from the message."""
        from eulerfield.utils.errors import ExpressionError

        appended = ExpressionError("Failed to parse expression", expression="x +")
        included = ExpressionError("Bad 'x +' input", expression="x +")

        assert str(appended) == "Failed to parse expression: 'x +'"
        assert str(included) == "Bad 'x +' input"

    def test_to_context_conversion(self):
        """Test conversion to ErrorContext."""
        from eulerfield.utils.errors import ExpressionError

        exc = ExpressionError(
            "Cannot evaluate",
            expression="1/x",
            technical_details="ZeroDivisionError: float division by zero",
        )

        ctx = exc.to_context()

        assert ctx.title == "Expression Error"
        assert "ZeroDivisionError" in ctx.technical_details


class TestFormatFunctions:
    """Test error formatting utility functions."""

    def test_format_error_for_user(self):
        """Test one-line formatting with the first suggestion."""
        from eulerfield.utils.errors import format_error_for_user, ArgumentError

        exc = ArgumentError("Unknown output flag '-x'", suggestions=["Use -l, -c or -cr"])
        msg = format_error_for_user(exc)

        assert msg == "Argument Error: Unknown output flag '-x' Try: Use -l, -c or -cr"

    def test_format_without_suggestions(self):
        """Test formatting an error whose suggestion list is empty."""
        from eulerfield.utils.errors import format_error_for_user, EulerFieldError

        msg = format_error_for_user(EulerFieldError("plain"))

        assert msg == "Error: plain"
