"""
Plain-text derivative parser and evaluator.

Converts strings like "0.3*(300 - y)" into a compiled function of x and y.
SymPy does the parsing; evaluation runs on plain floats through the
math module so results are reproducible across platforms.
"""

import logging
import math
from typing import Callable, Mapping, Optional

import sympy as sp
from sympy.core.function import AppliedUndef
from sympy.parsing.sympy_parser import (
    parse_expr,
    standard_transformations,
    implicit_multiplication_application,
    convert_xor,
)

from ..utils.errors import ExpressionError

logger = logging.getLogger(__name__)

X = sp.Symbol("x")
Y = sp.Symbol("y")

# Order matters: compiled functions take (x, y) positionally
VARIABLES = ("x", "y")

TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication_application,
    convert_xor,
)

# Names that would otherwise become plain symbols (or be split into
# implicit products, e.g. "ln" -> l*n)
LOCAL_NAMES = {
    "x": X,
    "y": Y,
    "ln": sp.log,
    "e": sp.E,
    "E": sp.E,
    "pi": sp.pi,
}

_EVALUATION_ERRORS = (
    TypeError,
    ValueError,
    ZeroDivisionError,
    OverflowError,
    NameError,
)


class Expression:
    """
    A parsed derivative f(x, y), compiled for float evaluation.

    Usage:
        expr = ExpressionParser().parse("0.3*(300 - y)")
        expr.evaluate({"x": 0.0, "y": 9.0})  # 87.3
    """

    def __init__(self, source: str, func: Callable[[float, float], float]):
        self.source = source
        self._func = func

    def evaluate(self, bindings: Mapping[str, float]) -> float:
        """
        Evaluate with x and y taken from bindings.

        Raises:
            ExpressionError: unbound variable, math domain error, division
                by zero, overflow, or a complex/non-finite result.
        """
        try:
            args = [float(bindings[name]) for name in VARIABLES]
        except KeyError as e:
            raise ExpressionError(
                f"Variable {e} is not bound", expression=self.source
            ) from e

        try:
            value = float(self._func(*args))
        except _EVALUATION_ERRORS as e:
            raise ExpressionError(
                f"Cannot evaluate at x={args[0]}, y={args[1]} ({e})",
                expression=self.source,
                technical_details=f"{type(e).__name__}: {e}",
            ) from e

        if not math.isfinite(value):
            raise ExpressionError(
                f"Non-finite value {value} at x={args[0]}, y={args[1]}",
                expression=self.source,
            )
        return value

    def __repr__(self) -> str:
        return f"Expression({self.source!r})"


class EvaluationContext:
    """
    Mutable x/y bindings owned by a single stepping loop.

    The loop rebinds before every evaluation; nothing else holds a
    reference to the bindings.
    """

    def __init__(self, expression: Expression):
        self.expression = expression
        self.bindings = {name: 0.0 for name in VARIABLES}

    def bind(self, x: float, y: float) -> None:
        self.bindings["x"] = x
        self.bindings["y"] = y

    def evaluate(self) -> float:
        return self.expression.evaluate(self.bindings)


class ExpressionParser:
    """
    Parse plain-text math notation into an Expression of x and y.

    Accepts ^ for powers and implicit multiplication ("2x" -> 2*x).
    The user's operation order is kept (no automatic simplification),
    so floating point results match evaluating the text as written.
    """

    def parse(self, source: str) -> Expression:
        """
        Parse and compile a derivative expression.

        Raises:
            ExpressionError: If the text is not a real-valued expression
                in x and y.
        """
        text = source.strip()
        if not text:
            raise ExpressionError("Empty expression", expression=source)
        # An assignment would parse as just its right-hand side
        if "=" in text:
            raise ExpressionError(
                "Expected an expression, not an equation",
                expression=source,
                suggestion="Give only the right-hand side of y' = f(x, y), without '='",
            )

        try:
            expr = parse_expr(
                text,
                local_dict=dict(LOCAL_NAMES),
                transformations=TRANSFORMATIONS,
                evaluate=False,
            )
        except Exception as e:
            raise ExpressionError(
                "Failed to parse expression",
                expression=source,
                suggestion=self._suggest_fix(text),
                technical_details=f"{type(e).__name__}: {e}",
            ) from e

        if not isinstance(expr, sp.Expr):
            raise ExpressionError(
                "Not an arithmetic expression",
                expression=source,
            )

        unknown = sorted(str(s) for s in expr.free_symbols - {X, Y})
        if unknown:
            raise ExpressionError(
                f"Unknown variable(s) {', '.join(unknown)}",
                expression=source,
                suggestion="Only x and y may appear in the expression",
            )

        undefined = sorted(str(f.func) for f in expr.atoms(AppliedUndef))
        if undefined:
            raise ExpressionError(
                f"Unknown function(s) {', '.join(undefined)}",
                expression=source,
            )

        try:
            func = sp.lambdify((X, Y), expr, modules="math")
        except Exception as e:
            raise ExpressionError(
                "Expression cannot be compiled for numeric evaluation",
                expression=source,
                technical_details=f"{type(e).__name__}: {e}",
            ) from e

        logger.debug("Parsed %r as %s", source, expr)
        return Expression(source, func)

    def _suggest_fix(self, text: str) -> Optional[str]:
        """Suggest a fix based on the raw text."""
        open_count = text.count("(")
        close_count = text.count(")")
        if open_count > close_count:
            return f"Missing {open_count - close_count} closing parenthesis ')'"
        if close_count > open_count:
            return f"Missing {close_count - open_count} opening parenthesis '('"
        return None


def parse_expression(source: str) -> Expression:
    """
    Convenience function: parse a derivative expression.

    Raises ExpressionError on failure.
    """
    return ExpressionParser().parse(source)


def evaluate(source: str, bindings: Mapping[str, float]) -> float:
    """Parse source and evaluate it once with the given x/y bindings."""
    return parse_expression(source).evaluate(bindings)
