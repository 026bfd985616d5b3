"""
Base solver interface and shared numeric helpers.

All solvers inherit from BaseSolver. Every value that enters a stepping
loop goes through round_to_precision, so trajectories match what a person
repeating the computation at fixed precision would get.
"""

from abc import ABC, abstractmethod
import logging
import math
import time

from ..utils.errors import ValidationError

logger = logging.getLogger(__name__)

# 10.0 ** 309 overflows a double
MAX_PRECISION = 308


def round_to_precision(value: float, precision: int) -> float:
    """
    Round to `precision` decimal digits, halves away from zero.

    Values too large to scale are returned unchanged; at that magnitude a
    double has no fractional digits left to round.
    """
    scale = 10.0**precision
    scaled = abs(value) * scale
    if not math.isfinite(scaled):
        return value
    return math.copysign(math.floor(scaled + 0.5), value) / scale


class BaseSolver(ABC):
    """
    Abstract base class for the Euler table and direction field solvers.

    Subclasses implement solve() for their request type.
    """

    # Human-readable name for this solver
    name: str = "BaseSolver"

    # Description of what this solver produces
    description: str = "Base solver class"

    @abstractmethod
    def solve(self, request):
        """
        Run the computation for a request.

        Raises:
            ValidationError: If the numeric inputs are unusable.
            ExpressionError: If the derivative cannot be parsed or evaluated.
        """
        pass

    def _validate_precision(self, precision: int) -> None:
        if precision < 0 or precision > MAX_PRECISION:
            raise ValidationError(
                f"Precision must be between 0 and {MAX_PRECISION}, got {precision}"
            )

    def _timed_solve(self, solve_func, *args, **kwargs):
        """
        Wrapper that times the solve operation.

        Returns (result, elapsed_ms)
        """
        start = time.perf_counter()
        result = solve_func(*args, **kwargs)
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.debug("%s finished in %d ms", self.name, elapsed_ms)
        return result, elapsed_ms

    def _validate_finite(self, **values: float) -> None:
        for name, value in values.items():
            if not math.isfinite(value):
                raise ValidationError(f"{name} must be a finite number, got {value}")


def stalled_step_error(name: str, position: float, step: float) -> ValidationError:
    """Error for a step too small to change position at double precision."""
    return ValidationError(
        f"{name} {step} is too small to advance from {position}",
        suggestions=["Use a larger step or a domain closer to zero"],
    )
