#!/usr/bin/env python3
"""
eulerfield - Forward Euler tables and direction fields for y' = f(x, y).

Entry point for the command-line tool. Output goes to stdout so it can be
redirected straight into a .txt, .tex or .csv file.

Usage:
    eulerfield "0.3*(300 - y)" 0.1 0 0 10 2            # Aligned text table
    eulerfield "0.3*(300 - y)" 0.1 0 0 10 2 -l > t.tex # LaTeX document
    eulerfield "x - y" -2 -2 2 2 0.25 0.25 2 -df      # TikZ direction field
"""

import sys
import os
import argparse
import logging

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(__file__))

logger = logging.getLogger("eulerfield.cli")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="eulerfield",
        description="Forward Euler step tables and direction fields for y' = f(x, y)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        usage="%(prog)s [--verbose] [--log-file PATH] [--] expr ARGS... [FLAG]",
        epilog="""
Modes:
  expr step x0 y0 end precision            Aligned text table
  expr step x0 y0 end precision -l         LaTeX document (longtable)
  expr step x0 y0 end precision -c         CSV table
  expr step x0 y0 end precision -cr        CSV line segments (x0,y0,x1,y1)
  expr x0 y0 xEnd yEnd xStep yStep precision -df
                                           TikZ direction field
  expr x0 y0 xEnd yEnd xStep yStep h [curveX0 curveY0] precision -dfc
                                           Direction field with Euler curve

Examples:
  eulerfield "0.3*(300 - y)" 0.1 0 0 10 2
  eulerfield "x^2 - y" 0.5 0 1 3 4 -c > steps.csv
  eulerfield "x - y" 0 -2 4 2 0.5 0.5 0.1 2 -dfc > field.tex

Options must come before the expression. Everything from the first
non-option word on is positional, so "-y" works as an expression.
"--" ends the options explicitly.
        """,
    )

    # Filled from the positional tail, see split_arguments()
    parser.add_argument(
        "arguments",
        nargs="*",
        help="Expression, numeric arguments and optional output flag",
    )

    # Verbose
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log parameters and timings to stderr",
    )

    # Log file
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Also write the log to a file",
    )

    # Version
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )

    return parser


# Leading words handed to argparse; the first word not listed here starts
# the positional tail, even when it looks like an option ("-y", "-2*x")
OPTIONS = ("-h", "--help", "--verbose", "--version")
OPTIONS_WITH_VALUE = ("--log-file",)


def split_arguments(argv: list) -> tuple:
    """
    Split argv into (options, positional tail).

    A "--" ends the options and is dropped.
    """
    index = 0
    while index < len(argv):
        word = argv[index]
        if word == "--":
            return argv[:index], argv[index + 1:]
        if word in OPTIONS_WITH_VALUE:
            index += 2
        elif word in OPTIONS or word.startswith(tuple(o + "=" for o in OPTIONS_WITH_VALUE)):
            index += 1
        else:
            break
    return argv[:index], argv[index:]


def solve_cli(arguments: list) -> int:
    """Resolve the mode, compute, and print the rendered result."""
    from eulerfield.input.arguments import resolve_arguments
    from eulerfield.output import render_solution
    from eulerfield.solvers import get_solver
    from eulerfield.utils.errors import EulerFieldError, format_error_for_user

    try:
        request = resolve_arguments(arguments)
        solver = get_solver(request)
        logger.debug("Using solver: %s", solver.name)
        solution = solver.solve(request)
        output = render_solution(solution)
    except EulerFieldError as e:
        logger.debug("Run failed", exc_info=True)
        if e.technical_details:
            logger.debug("Details: %s", e.technical_details)
        print(f"Error: {format_error_for_user(e)}", file=sys.stderr)
        return 1

    logger.debug("Computed in %d ms", solution.solve_time_ms)
    sys.stdout.write(output)
    return 0


def main(argv=None):
    """Main entry point."""
    from eulerfield.utils.logging_config import setup_logging

    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    options, arguments = split_arguments(list(argv))
    args = parser.parse_args(options)
    args.arguments = arguments

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=args.log_file,
    )

    if not args.arguments:
        parser.print_usage(sys.stderr)
        print("Error: No expression given", file=sys.stderr)
        return 1

    return solve_cli(args.arguments)


if __name__ == "__main__":
    sys.exit(main() or 0)
