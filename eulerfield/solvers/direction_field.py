"""
Direction field sampler.

Samples f(x, y) on a regular grid and turns each slope into a fixed
length segment in display coordinates. The display is square: the
x-axis keeps its natural range and the y-axis is stretched or squeezed
by y_scale = xrange / yrange to match it.

Two consequences of that scaling:
- a data slope m is drawn as m * y_scale, otherwise segments would point
  in the wrong direction on screen;
- the user's y step is given in display units, so the data-space sampling
  step is y_step / y_scale.

An optional Euler trace (same re-rounding rule as the step table) is
mapped into the same display space and returned as a polyline.
"""

import logging
import math
from typing import List, Tuple

from .base import BaseSolver, round_to_precision, stalled_step_error
from ..input.parser import EvaluationContext, Expression, ExpressionParser
from ..models import CurvePoint, DirectionField, FieldRequest, FieldSample
from ..utils.constants import BOUNDARY_EPSILON, SEGMENT_LENGTH
from ..utils.errors import ValidationError

logger = logging.getLogger(__name__)


class DisplayScaling:
    """Maps data coordinates of [x0, x_end] x [y0, y_end] into a square display."""

    def __init__(self, x0: float, y0: float, x_end: float, y_end: float):
        self.x0 = x0
        self.y0 = y0
        self.x_range = x_end - x0
        self.y_range = y_end - y0
        self.y_scale = self.x_range / self.y_range

    @property
    def y_top(self) -> float:
        """Top of the displayed y-axis."""
        return self.y0 + self.x_range

    def map_y(self, y: float) -> float:
        return self.y0 + (y - self.y0) * self.y_scale

    def sample_step(self, y_step: float) -> float:
        """Data-space y step for a display-space y step."""
        # A zero-width domain collapses every column to a single sample
        if self.y_scale == 0:
            return math.inf
        return y_step / self.y_scale

    def segment(self, x: float, y: float, slope: float) -> FieldSample:
        """Constant-length segment centred on (x, map_y(y)) along the scaled slope."""
        m = slope * self.y_scale
        dx = SEGMENT_LENGTH / math.sqrt(1.0 + m * m)
        dy = m * dx
        return FieldSample(
            center_x=x, center_y=self.map_y(y), half_dx=dx / 2.0, half_dy=dy / 2.0
        )


class DirectionFieldSolver(BaseSolver):
    """
    Sample a direction field and, on request, an overlaid Euler curve.

    Usage:
        solver = DirectionFieldSolver()
        field = solver.solve(FieldRequest("x - y", 0, -2, 4, 2, 0.5, 0.5, 2))
        len(field.samples)
    """

    name = "DirectionFieldSolver"
    description = "Direction field sampling with square display scaling"

    def __init__(self, parser: ExpressionParser = None):
        self.parser = parser or ExpressionParser()

    def solve(self, request: FieldRequest) -> DirectionField:
        """Validate the request, then sample the grid and trace the curve."""
        expression = self.parser.parse(request.expression)
        self.validate(request)

        scaling = DisplayScaling(request.x0, request.y0, request.x_end, request.y_end)
        logger.debug(
            "Direction field: f=%r x=[%s, %s] y=[%s, %s] y_scale=%s",
            request.expression,
            request.x0,
            request.x_end,
            request.y0,
            request.y_end,
            scaling.y_scale,
        )

        samples, elapsed_ms = self._timed_solve(
            self._sample, expression, scaling, request
        )
        logger.debug("Sampled %d field segments", len(samples))

        curve: Tuple[CurvePoint, ...] = ()
        if request.plot_curve:
            curve = self._trace(expression, scaling, request)
            logger.debug("Traced %d curve points", len(curve))

        return DirectionField(
            request=request,
            samples=samples,
            y_scale=scaling.y_scale,
            y_top=scaling.y_top,
            curve=curve,
            solve_time_ms=elapsed_ms,
        )

    def validate(self, request: FieldRequest) -> None:
        """
        Check the domain and steps before any sampling.

        Raises:
            ValidationError: non-positive steps, inverted or zero-height domain.
        """
        self._validate_precision(request.precision)
        self._validate_finite(
            x0=request.x0,
            y0=request.y0,
            xEnd=request.x_end,
            yEnd=request.y_end,
            xStep=request.x_step,
            yStep=request.y_step,
        )
        if request.x_step <= 0 or request.y_step <= 0:
            raise ValidationError("Direction field steps must be positive")
        if request.x_end < request.x0 or request.y_end < request.y0:
            raise ValidationError("Direction field range must be increasing")
        if request.y_end == request.y0:
            raise ValidationError("Direction field y range must be non-zero")

        if request.plot_curve:
            self._validate_finite(
                curveStep=request.curve_step,
                curveX0=request.curve_x0,
                curveY0=request.curve_y0,
            )
            if round_to_precision(request.curve_step, request.precision) <= 0:
                raise ValidationError(
                    f"Curve step must be positive at precision {request.precision}, "
                    f"got {request.curve_step}"
                )

    def trace(self, request: FieldRequest) -> Tuple[CurvePoint, ...]:
        """Validate the request and return only the display-mapped curve."""
        expression = self.parser.parse(request.expression)
        self.validate(request)
        scaling = DisplayScaling(request.x0, request.y0, request.x_end, request.y_end)
        return self._trace(expression, scaling, request)

    def _sample(
        self, expression: Expression, scaling: DisplayScaling, request: FieldRequest
    ) -> Tuple[FieldSample, ...]:
        context = EvaluationContext(expression)
        y_sample_step = scaling.sample_step(request.y_step)
        x_limit = request.x_end + BOUNDARY_EPSILON
        y_limit = request.y_end + BOUNDARY_EPSILON
        samples: List[FieldSample] = []

        x = request.x0
        while x <= x_limit:
            y = request.y0
            while y <= y_limit:
                context.bind(x, y)
                samples.append(scaling.segment(x, y, context.evaluate()))
                next_y = y + y_sample_step
                if next_y <= y:
                    raise stalled_step_error("y step", y, y_sample_step)
                y = next_y
            next_x = x + request.x_step
            if next_x <= x:
                raise stalled_step_error("x step", x, request.x_step)
            x = next_x

        return tuple(samples)

    def _trace(
        self, expression: Expression, scaling: DisplayScaling, request: FieldRequest
    ) -> Tuple[CurvePoint, ...]:
        precision = request.precision
        context = EvaluationContext(expression)
        x = round_to_precision(request.curve_x0, precision)
        y = round_to_precision(request.curve_y0, precision)
        step = round_to_precision(request.curve_step, precision)
        points: List[CurvePoint] = []

        while x <= request.x_end + BOUNDARY_EPSILON:
            # Leaving the field vertically ends the curve
            if y < request.y0 - BOUNDARY_EPSILON or y > request.y_end + BOUNDARY_EPSILON:
                break
            points.append(CurvePoint(x=x, y=scaling.map_y(y)))
            context.bind(x, y)
            slope = round_to_precision(context.evaluate(), precision)
            delta = round_to_precision(slope * step, precision)
            y = round_to_precision(y + delta, precision)
            next_x = round_to_precision(x + step, precision)
            if next_x <= x:
                raise stalled_step_error("Curve step", x, step)
            x = next_x

        return tuple(points)


def sample_field(
    expr: str,
    x0: float,
    y0: float,
    x_end: float,
    y_end: float,
    x_step: float,
    y_step: float,
    precision: int,
) -> Tuple[FieldSample, ...]:
    """Functional form of DirectionFieldSolver without a curve."""
    request = FieldRequest(
        expression=expr,
        x0=x0,
        y0=y0,
        x_end=x_end,
        y_end=y_end,
        x_step=x_step,
        y_step=y_step,
        precision=precision,
    )
    return DirectionFieldSolver().solve(request).samples


def trace_curve(
    expr: str,
    x0: float,
    y0: float,
    x_end: float,
    y_end: float,
    curve_step: float,
    precision: int,
    curve_x0: float = None,
    curve_y0: float = None,
) -> Tuple[CurvePoint, ...]:
    """Display-mapped Euler trace through the field domain."""
    request = FieldRequest(
        expression=expr,
        x0=x0,
        y0=y0,
        x_end=x_end,
        y_end=y_end,
        x_step=curve_step,
        y_step=curve_step,
        precision=precision,
        plot_curve=True,
        curve_step=curve_step,
        curve_x0=curve_x0,
        curve_y0=curve_y0,
    )
    return DirectionFieldSolver().trace(request)
