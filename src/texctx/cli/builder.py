#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/cli/builder.py
"""Argument parser and exit codes for the texctx CLI."""

import argparse

from texctx.constants import CONFIG_ENV_VAR
from texctx.exceptions import ParsingError, StaleEditError, TransformError, ValidationError

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_PROBLEMS_FOUND = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_STALE_EDIT = 5
EXIT_PARSING_ERROR = 6
EXIT_TRANSFORM_ERROR = 7


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Expected an integer, got {value!r}") from e
    if number < 0:
        raise argparse.ArgumentTypeError(f"Offset must be non-negative, got {number}")
    return number


def _add_position_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("input", help="LaTeX file to read")
    position = parser.add_mutually_exclusive_group(required=True)
    position.add_argument("--offset", type=_non_negative_int, help="Character offset into the file")
    position.add_argument(
        "--line",
        type=_non_negative_int,
        help="Zero-based line number; combine with --column",
    )
    parser.add_argument("--column", type=_non_negative_int, default=0, help="Zero-based column on --line")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="texctx",
        description="Inspect the context of LaTeX source and convert math environments.",
    )
    parser.add_argument(
        "--config",
        type=str,
        help=f"Configuration file (JSON, TOML or YAML). Defaults to ${CONFIG_ENV_VAR} or a discovered file",
    )
    parser.add_argument("--no-config", action="store_true", help="Ignore discovered configuration files")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", type=str, help="Also write log output to this file")
    parser.add_argument("--trace", action="store_true", help="Log with timestamps and logger names")
    parser.add_argument("--strict", action="store_true", help="Fail on LaTeX the parser cannot recover from")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    classify = subparsers.add_parser("classify", help="Report the context (normal, math, comment) at a position")
    _add_position_arguments(classify)

    convert = subparsers.add_parser("convert", help="Convert the math region at a position to another style")
    _add_position_arguments(convert)
    convert.add_argument("--to", dest="style", required=True, metavar="STYLE", help="Target style, e.g. inline")
    output = convert.add_mutually_exclusive_group()
    output.add_argument("--in-place", action="store_true", help="Rewrite the input file")
    output.add_argument("--out", "-o", type=str, help="Write the result to this file instead of stdout")

    inspect = subparsers.add_parser("inspect", help="Run inspections over a file")
    inspect.add_argument("input", help="LaTeX file to read")
    inspect.add_argument(
        "--check",
        action="append",
        metavar="NAME",
        help="Inspection to run (can be specified multiple times; default: all)",
    )
    inspect.add_argument("--fix", action="store_true", help="Apply available fixes to the file")
    inspect.add_argument("--rich", action="store_true", help="Use rich terminal output")

    injections = subparsers.add_parser("injections", help="List regions holding code in another language")
    injections.add_argument("input", help="LaTeX file to read")

    styles = subparsers.add_parser("styles", help="List the available math styles")
    styles.add_argument("--rich", action="store_true", help="Use rich terminal output")

    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (ValidationError, argparse.ArgumentTypeError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, OSError):
        return EXIT_FILE_ERROR

    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR

    if isinstance(exception, StaleEditError):
        return EXIT_STALE_EDIT

    if isinstance(exception, TransformError):
        return EXIT_TRANSFORM_ERROR

    return EXIT_ERROR


__all__ = [
    "EXIT_ERROR",
    "EXIT_FILE_ERROR",
    "EXIT_PARSING_ERROR",
    "EXIT_PROBLEMS_FOUND",
    "EXIT_STALE_EDIT",
    "EXIT_SUCCESS",
    "EXIT_TRANSFORM_ERROR",
    "EXIT_VALIDATION_ERROR",
    "create_parser",
    "get_exit_code_for_exception",
]
