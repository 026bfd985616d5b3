"""Input layer: expression parsing and command-line argument resolution."""

from .parser import ExpressionParser, Expression, EvaluationContext
from .arguments import resolve_arguments

__all__ = ["ExpressionParser", "Expression", "EvaluationContext", "resolve_arguments"]
