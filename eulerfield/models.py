"""
Core data structures for eulerfield.

These dataclasses define the contract between layers.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple
from enum import Enum, auto


class OutputFormat(Enum):
    """Rendering targets selected by the trailing CLI flag."""

    TABLE = auto()
    LATEX = auto()
    CSV = auto()
    CSV_SEGMENTS = auto()
    DIRECTION_FIELD = auto()


@dataclass(frozen=True)
class StepRecord:
    """One Euler iteration. Every value is already rounded to the run precision."""

    x: float
    y: float
    slope: float  # y' = f(x, y)
    delta: float  # slope * step


@dataclass(frozen=True)
class ColumnWidths:
    """Widest printed cell per text-table column, header included."""

    index: int
    x: int
    y: int
    slope: int
    delta: int


@dataclass(frozen=True)
class FieldSample:
    """
    A direction field segment in display coordinates.

    The segment runs from (center_x - half_dx, center_y - half_dy)
    to (center_x + half_dx, center_y + half_dy).
    """

    center_x: float
    center_y: float
    half_dx: float
    half_dy: float

    @property
    def start(self) -> Tuple[float, float]:
        return (self.center_x - self.half_dx, self.center_y - self.half_dy)

    @property
    def end(self) -> Tuple[float, float]:
        return (self.center_x + self.half_dx, self.center_y + self.half_dy)


@dataclass(frozen=True)
class CurvePoint:
    """A traced Euler point; y is already mapped into display space."""

    x: float
    y: float


@dataclass
class EulerRequest:
    """
    Request to tabulate an Euler approximation.

    Values are as given on the command line; the solver does the rounding.
    """

    expression: str
    step: float
    x0: float
    y0: float
    end: float
    precision: int
    output_format: OutputFormat = OutputFormat.TABLE


@dataclass
class FieldRequest:
    """
    Request to sample a direction field over [x0, x_end] x [y0, y_end].

    The optional solution curve defaults to starting at (x0, y0) and to
    stepping by x_step.
    """

    expression: str
    x0: float
    y0: float
    x_end: float
    y_end: float
    x_step: float
    y_step: float
    precision: int
    plot_curve: bool = False
    curve_step: Optional[float] = None
    curve_x0: Optional[float] = None
    curve_y0: Optional[float] = None
    output_format: OutputFormat = OutputFormat.DIRECTION_FIELD

    def __post_init__(self):
        if self.curve_step is None:
            self.curve_step = self.x_step
        if self.curve_x0 is None:
            self.curve_x0 = self.x0
        if self.curve_y0 is None:
            self.curve_y0 = self.y0


@dataclass
class EulerSolution:
    """Complete step table for an EulerRequest."""

    request: EulerRequest
    records: Tuple[StepRecord, ...]
    solve_time_ms: int = 0

    @property
    def precision(self) -> int:
        return self.request.precision


@dataclass
class DirectionField:
    """
    Sampled direction field plus the optional overlay curve.

    y_top is the top of the displayed y axis: the display range is
    square, so it sits x_end - x0 above y0.
    """

    request: FieldRequest
    samples: Tuple[FieldSample, ...]
    y_scale: float
    y_top: float
    curve: Tuple[CurvePoint, ...] = field(default_factory=tuple)
    solve_time_ms: int = 0

    @property
    def precision(self) -> int:
        return self.request.precision
