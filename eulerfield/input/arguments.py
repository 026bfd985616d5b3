"""
Positional argument resolution.

The command line is positional, with an optional trailing flag that
selects the mode:

    expr step x0 y0 end precision [-l | -c | -cr]
    expr x0 y0 xEnd yEnd xStep yStep precision -df
    expr x0 y0 xEnd yEnd xStep yStep h precision -dfc
    expr x0 y0 xEnd yEnd xStep yStep h curveX0 curveY0 precision -dfc

Only counts and spellings are checked here; numeric sanity (positive
steps, increasing ranges) belongs to the solvers.
"""

import logging
from typing import List, Sequence, Union

from ..models import EulerRequest, FieldRequest, OutputFormat
from ..utils.constants import (
    ALL_FLAGS,
    DIRECTION_FIELD_CURVE_FLAG,
    DIRECTION_FIELD_FLAG,
    TABLE_FLAGS,
)
from ..utils.errors import ArgumentError

logger = logging.getLogger(__name__)


def parse_number(text: str, name: str) -> float:
    """Parse a float argument, raising ArgumentError on bad input."""
    try:
        return float(text)
    except ValueError:
        raise ArgumentError(f"Invalid number for {name}: '{text}'")


def parse_precision(text: str) -> int:
    """Parse the precision (decimal digits) argument."""
    try:
        return int(text)
    except ValueError:
        raise ArgumentError(
            f"Precision must be an integer number of digits, got '{text}'",
            suggestions=["Use e.g. 2 for two decimal places"],
        )


def _table_request(args: Sequence[str], output_format: OutputFormat) -> EulerRequest:
    return EulerRequest(
        expression=args[0],
        step=parse_number(args[1], "step"),
        x0=parse_number(args[2], "x0"),
        y0=parse_number(args[3], "y0"),
        end=parse_number(args[4], "end"),
        precision=parse_precision(args[5]),
        output_format=output_format,
    )


def _field_request(args: Sequence[str], plot_curve: bool) -> FieldRequest:
    values = dict(
        expression=args[0],
        x0=parse_number(args[1], "x0"),
        y0=parse_number(args[2], "y0"),
        x_end=parse_number(args[3], "xEnd"),
        y_end=parse_number(args[4], "yEnd"),
        x_step=parse_number(args[5], "xStep"),
        y_step=parse_number(args[6], "yStep"),
        plot_curve=plot_curve,
    )
    # args[-1] is the flag, args[-2] the precision
    if plot_curve:
        values["curve_step"] = parse_number(args[7], "curve step")
        if len(args) == 12:
            values["curve_x0"] = parse_number(args[8], "curveX0")
            values["curve_y0"] = parse_number(args[9], "curveY0")
    values["precision"] = parse_precision(args[-2])
    return FieldRequest(**values)


def resolve_arguments(args: Sequence[str]) -> Union[EulerRequest, FieldRequest]:
    """
    Turn positional arguments (program name excluded) into a request.

    Raises:
        ArgumentError: wrong argument count, unknown flag or bad number.
    """
    args: List[str] = list(args)
    count = len(args)
    last = args[-1] if args else ""

    if count == 6 and last not in ALL_FLAGS:
        request = _table_request(args, OutputFormat.TABLE)
    elif count == 7 and last in TABLE_FLAGS:
        request = _table_request(args, TABLE_FLAGS[last])
    elif count == 7:
        raise ArgumentError(
            f"Unknown output flag '{last}'; use -l, -c, -cr, -df, or -dfc"
        )
    elif count == 9 and last == DIRECTION_FIELD_FLAG:
        request = _field_request(args, plot_curve=False)
    elif count in (10, 12) and last == DIRECTION_FIELD_CURVE_FLAG:
        request = _field_request(args, plot_curve=True)
    else:
        raise ArgumentError(
            f"Too many or too few arguments ({count}) for the requested mode"
        )

    logger.debug("Resolved %d arguments to %s", count, request)
    return request
