"""
Forward Euler stepper.

Produces the step table y_{n+1} = y_n + f(x_n, y_n) * h, re-rounding
every intermediate value to the requested precision.
"""

import logging
from typing import List, Tuple

from .base import BaseSolver, round_to_precision, stalled_step_error
from ..input.parser import EvaluationContext, ExpressionParser
from ..models import EulerRequest, EulerSolution, StepRecord
from ..utils.errors import ValidationError

logger = logging.getLogger(__name__)


class EulerSolver(BaseSolver):
    """
    Tabulate a forward Euler approximation from x0 up to and including end.

    The loop exits on x > end after x has been re-rounded, so the last row
    can sit up to one rounding unit past the mathematically expected point.
    """

    name = "EulerSolver"
    description = "Forward Euler step table at fixed decimal precision"

    def __init__(self, parser: ExpressionParser = None):
        self.parser = parser or ExpressionParser()

    def solve(self, request: EulerRequest) -> EulerSolution:
        """Validate the request, then run the stepping loop."""
        # Parse first: a malformed expression fails even if no step would run
        expression = self.parser.parse(request.expression)
        self._validate_precision(request.precision)
        self._validate_finite(
            step=request.step, x0=request.x0, y0=request.y0, end=request.end
        )

        step = round_to_precision(request.step, request.precision)
        if step <= 0:
            raise ValidationError(
                f"Step must be positive at precision {request.precision}, "
                f"got {request.step}",
                suggestions=[
                    "Use a positive step size",
                    "Increase the precision so the step does not round to zero",
                ],
            )

        logger.debug(
            "Euler run: f=%r h=%s x0=%s y0=%s end=%s precision=%d",
            request.expression,
            step,
            request.x0,
            request.y0,
            request.end,
            request.precision,
        )

        records, elapsed_ms = self._timed_solve(
            self._step,
            EvaluationContext(expression),
            step,
            request.x0,
            request.y0,
            request.end,
            request.precision,
        )
        logger.debug("Produced %d step records", len(records))

        return EulerSolution(request=request, records=records, solve_time_ms=elapsed_ms)

    def _step(
        self,
        context: EvaluationContext,
        step: float,
        x0: float,
        y0: float,
        end: float,
        precision: int,
    ) -> Tuple[StepRecord, ...]:
        x = round_to_precision(x0, precision)
        y = round_to_precision(y0, precision)
        records: List[StepRecord] = []

        while not x > end:
            context.bind(x, y)
            slope = round_to_precision(context.evaluate(), precision)
            delta = round_to_precision(slope * step, precision)
            records.append(StepRecord(x=x, y=y, slope=slope, delta=delta))
            next_x = round_to_precision(x + step, precision)
            if next_x <= x:
                raise stalled_step_error("Step", x, step)
            x = next_x
            y = round_to_precision(y + delta, precision)

        return tuple(records)


def run(
    expr: str, step: float, x0: float, y0: float, end: float, precision: int
) -> Tuple[StepRecord, ...]:
    """Functional form of EulerSolver: return just the step records."""
    request = EulerRequest(
        expression=expr, step=step, x0=x0, y0=y0, end=end, precision=precision
    )
    return EulerSolver().solve(request).records
