"""Solver layer: Euler step tables and direction fields."""

from .base import BaseSolver, round_to_precision
from .euler import EulerSolver
from .direction_field import DirectionFieldSolver, DisplayScaling

from ..models import EulerRequest, FieldRequest

__all__ = [
    "BaseSolver",
    "round_to_precision",
    "EulerSolver",
    "DirectionFieldSolver",
    "DisplayScaling",
    "get_solver",
]


def get_solver(request) -> BaseSolver:
    """
    Return the solver that handles this request type.

    - EulerRequest: EulerSolver (step table formats)
    - FieldRequest: DirectionFieldSolver (TikZ direction field)
    """
    if isinstance(request, EulerRequest):
        return EulerSolver()
    if isinstance(request, FieldRequest):
        return DirectionFieldSolver()
    raise TypeError(f"No solver for {type(request).__name__}")
