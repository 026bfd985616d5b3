"""
Fixed numeric and formatting constants.

These values are part of the output format; changing them changes
every rendered table and picture.
"""

from ..models import OutputFormat


# Tolerance for inclusive boundary checks in the sampling loops.
# Absorbs accumulated floating point error from repeated addition.
BOUNDARY_EPSILON = 1e-12

# On-screen length of every direction field segment (display units)
SEGMENT_LENGTH = 2.0

# tikzpicture scale factor; the picture is resized to \linewidth anyway
TIKZ_SCALE = 0.12

# Trailing flag -> output format for the step table modes
TABLE_FLAGS = {
    "-l": OutputFormat.LATEX,
    "-c": OutputFormat.CSV,
    "-cr": OutputFormat.CSV_SEGMENTS,
}

DIRECTION_FIELD_FLAG = "-df"
DIRECTION_FIELD_CURVE_FLAG = "-dfc"

ALL_FLAGS = [*TABLE_FLAGS, DIRECTION_FIELD_FLAG, DIRECTION_FIELD_CURVE_FLAG]

# Column headers
TABLE_HEADERS = ("n ", "x ", "y ", "y' ", "Δy ")
CSV_HEADER = "x,y,y',Δy"
CSV_SEGMENTS_HEADER = "x0,y0,x1,y1"
LATEX_HEADERS = ("n", "x", "y", "y'", "$\\Delta$y")
