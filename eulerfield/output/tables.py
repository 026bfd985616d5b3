"""
Step table renderers.

Each renderer is a pure function of the step records and the precision
and returns the complete text; nothing is written until rendering is done.

Cells are formatted as " {value:.{precision}f} " (one space either side).
The padding shows up verbatim in the table, LaTeX and CSV outputs and is
kept for compatibility with existing consumers of those files.
"""

from typing import Callable, Dict, Sequence

from ..models import ColumnWidths, OutputFormat, StepRecord
from ..utils.constants import (
    CSV_HEADER,
    CSV_SEGMENTS_HEADER,
    LATEX_HEADERS,
    TABLE_HEADERS,
)


def format_cell(value: float, precision: int) -> str:
    """Fixed-point cell text with the surrounding space padding."""
    return f" {value:.{precision}f} "


def format_cells(record: StepRecord, precision: int) -> tuple:
    """The four padded cells (x, y, y', Δy) of one record."""
    return tuple(
        format_cell(value, precision)
        for value in (record.x, record.y, record.slope, record.delta)
    )


def compute_column_widths(records: Sequence[StepRecord], precision: int) -> ColumnWidths:
    """
    Widest cell per column.

    The index column also fits its header; the value columns are sized
    from the values alone.
    """
    widths = [0, 0, 0, 0]
    for record in records:
        for i, cell in enumerate(format_cells(record, precision)):
            widths[i] = max(widths[i], len(cell))

    index_width = max(len(str(len(records))), len(TABLE_HEADERS[0]))
    return ColumnWidths(index_width, *widths)


def render_table(records: Sequence[StepRecord], precision: int) -> str:
    """
    Right-aligned plain text table.

    Example (precision 2, trailing spaces omitted):
        n |    x |     y |    y' |   Δy
         0| 0.00 |  0.00 | 90.00 | 9.00
    """
    widths = compute_column_widths(records, precision)
    column_widths = (widths.index, widths.x, widths.y, widths.slope, widths.delta)

    lines = ["|".join(f"{h:>{w}}" for h, w in zip(TABLE_HEADERS, column_widths))]
    for n, record in enumerate(records):
        cells = (str(n),) + format_cells(record, precision)
        lines.append("|".join(f"{c:>{w}}" for c, w in zip(cells, column_widths)))

    return "".join(line + "\n" for line in lines)


def render_csv(records: Sequence[StepRecord], precision: int) -> str:
    """CSV with header x,y,y',Δy and padded cells."""
    lines = [CSV_HEADER]
    lines.extend(",".join(format_cells(record, precision)) for record in records)
    return "".join(line + "\n" for line in lines)


def render_csv_segments(records: Sequence[StepRecord], precision: int) -> str:
    """
    One (x0,y0,x1,y1) row per consecutive pair of records.

    Produces len(records) - 1 rows, unpadded.
    """
    lines = [CSV_SEGMENTS_HEADER]
    for start, end in zip(records, records[1:]):
        lines.append(
            ",".join(
                f"{value:.{precision}f}" for value in (start.x, start.y, end.x, end.y)
            )
        )
    return "".join(line + "\n" for line in lines)


def render_latex(records: Sequence[StepRecord], precision: int) -> str:
    """Complete LaTeX document with a longtable of the steps."""
    parts = [
        "\\documentclass{article}\n",
        "\\usepackage[margin=1in]{geometry}\n",
        "\\usepackage{longtable}\n",
        "\\begin{document}\n",
        "\\begin{center} \n",
        "  \\begin{longtable}{|c|c|c|c|c|}\n",
        "    \\hline\n",
        "    " + " & ".join(LATEX_HEADERS) + " \\\\\n",
        "    \\hline\n",
    ]
    for n, record in enumerate(records):
        cells = (str(n),) + format_cells(record, precision)
        parts.append("   " + " & ".join(cells) + "\\\\\n")
        parts.append("    \\hline\n")
    parts.append("  \\end{longtable} \n\\end{center}\n\\end{document}")
    return "".join(parts)


RENDERERS: Dict[OutputFormat, Callable[[Sequence[StepRecord], int], str]] = {
    OutputFormat.TABLE: render_table,
    OutputFormat.LATEX: render_latex,
    OutputFormat.CSV: render_csv,
    OutputFormat.CSV_SEGMENTS: render_csv_segments,
}
