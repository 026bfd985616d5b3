"""Output layer: step table and direction field renderers."""

from .tables import (
    RENDERERS,
    compute_column_widths,
    render_csv,
    render_csv_segments,
    render_latex,
    render_table,
)
from .tikz import render_direction_field
from ..models import DirectionField

__all__ = [
    "RENDERERS",
    "compute_column_widths",
    "render_csv",
    "render_csv_segments",
    "render_latex",
    "render_table",
    "render_direction_field",
    "render_solution",
]


def render_solution(solution) -> str:
    """Render an EulerSolution or DirectionField in its requested format."""
    if isinstance(solution, DirectionField):
        return render_direction_field(solution)
    renderer = RENDERERS[solution.request.output_format]
    return renderer(solution.records, solution.precision)
