"""
TikZ rendering for direction fields.

Emits a picture fragment (not a full document) meant to be \\input into
a LaTeX file that loads tikz and graphicx.
"""

from typing import Sequence

from ..models import CurvePoint, DirectionField, FieldSample
from ..utils.constants import TIKZ_SCALE


def format_point(x: float, y: float, precision: int) -> str:
    return f"({x:.{precision}f},{y:.{precision}f})"


def render_segment(sample: FieldSample, precision: int) -> str:
    start = format_point(*sample.start, precision)
    end = format_point(*sample.end, precision)
    return f"  \\draw[blue!70] {start} -- {end};\n"


def render_curve(curve: Sequence[CurvePoint], precision: int) -> str:
    """Red polyline through the traced points; empty when nothing was traced."""
    if not curve:
        return ""
    coordinates = "".join(" " + format_point(p.x, p.y, precision) for p in curve)
    return f"  \\draw[red, thick] plot coordinates {{{coordinates} }};\n"


def render_direction_field(field: DirectionField) -> str:
    """
    Render a DirectionField as a centred, width-fitted tikzpicture.

    Contains the t and y axis arrows, one segment per sample and the
    solution curve if one was traced.
    """
    request = field.request
    p = field.precision
    origin = format_point(request.x0, request.y0, p)

    parts = [
        "\\begin{center}\n",
        "\\resizebox{\\linewidth}{!}{%\n",
        f"\\begin{{tikzpicture}}[scale={TIKZ_SCALE}]\n",
        f"  \\draw[->] {origin} -- {format_point(request.x_end, request.y0, p)} "
        "node[right] {$t$};\n",
        f"  \\draw[->] {origin} -- {format_point(request.x0, field.y_top, p)} "
        "node[above] {$y$};\n",
    ]
    parts.extend(render_segment(sample, p) for sample in field.samples)
    parts.append(render_curve(field.curve, p))
    parts.append("\\end{tikzpicture}%\n}\n\\end{center}\n")
    return "".join(parts)
