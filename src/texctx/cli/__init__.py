#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for the texctx library.

The CLI exposes the library operations on LaTeX files: classify the context
at a position, convert the math region around a position to another style,
run inspections (optionally applying their fixes), list embedded-language
regions and list the registered math styles.

Configuration
-------------
Options are read from ``--config``, then from the file named by the
``TEXCTX_CONFIG`` environment variable, then from a discovered
``.texctx.toml`` / ``.texctx.yaml`` / ``.texctx.json`` or a
``[tool.texctx]`` table in ``pyproject.toml``.

Examples
--------
Classify a position::

    $ texctx classify paper.tex --offset 120

Convert the display math on line 12 to an equation environment::

    $ texctx convert paper.tex --line 12 --to equation --in-place

Fix ellipses::

    $ texctx inspect paper.tex --check ellipsis --fix

"""

import argparse
import logging
import os
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from texctx.cli.builder import (
    EXIT_PROBLEMS_FOUND,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    create_parser,
    get_exit_code_for_exception,
)
from texctx.cli.config import ResolvedOptions, load_config_with_priority, resolve_options
from texctx.constants import CONFIG_ENV_VAR
from texctx.context import ContextClassifier
from texctx.document import TextDocument
from texctx.exceptions import TexCtxError
from texctx.inspections import ellipsis, find_injections, run_inspections
from texctx.inspections.ellipsis import apply_ellipsis_fixes
from texctx.logging_utils import configure_logging
from texctx.parsers.latex import LatexTreeParser
from texctx.styles import style_registry
from texctx.transforms import convert_math_environment
from texctx.utils.encoding import read_latex_file

logger = logging.getLogger(__name__)


def _load_options(parsed_args: argparse.Namespace) -> ResolvedOptions:
    if parsed_args.no_config and not parsed_args.config:
        options = ResolvedOptions()
    else:
        config = load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))
        options = resolve_options(config)

    if parsed_args.strict:
        options = ResolvedOptions(
            context=options.context,
            latex=options.latex.create_updated(strict_mode=True),
            math_toggle=options.math_toggle,
            inspections=options.inspections,
        )
    return options


def _resolve_offset(document: TextDocument, parsed_args: argparse.Namespace) -> int:
    """Turn ``--offset`` or ``--line``/``--column`` into a document offset."""
    if parsed_args.offset is not None:
        return min(parsed_args.offset, len(document))
    line_start = document.get_line_start_offset(parsed_args.line)
    line_end = document.get_line_end_offset(parsed_args.line)
    return min(line_start + parsed_args.column, line_end)


def _write_output(text: str, input_path: str, parsed_args: argparse.Namespace) -> None:
    if getattr(parsed_args, "in_place", False):
        Path(input_path).write_text(text, encoding="utf-8")
        logger.info(f"Rewrote {input_path}")
    elif getattr(parsed_args, "out", None):
        Path(parsed_args.out).write_text(text, encoding="utf-8")
        logger.info(f"Wrote {parsed_args.out}")
    else:
        sys.stdout.write(text)


def handle_classify_command(parsed_args: argparse.Namespace, options: ResolvedOptions) -> int:
    """Print the context at a position of a file."""
    document = TextDocument(read_latex_file(parsed_args.input))
    tree = LatexTreeParser(options.latex).parse(document.text)
    classifier = ContextClassifier(options.context)

    offset = _resolve_offset(document, parsed_args)
    context = classifier.context_at(tree, offset)
    leaf = tree.find_leaf_at(offset)
    region = classifier.find_outer_math_environment(leaf)

    print(context.value if context is not None else "none")
    if region is not None:
        print(f"math region: {classifier.math_style_of(region)} [{region.start}, {region.end})")
    return EXIT_SUCCESS


def handle_convert_command(parsed_args: argparse.Namespace, options: ResolvedOptions) -> int:
    """Convert the math region at a position and write the result."""
    document = TextDocument(read_latex_file(parsed_args.input))
    offset = _resolve_offset(document, parsed_args)

    convert_math_environment(
        document,
        offset,
        parsed_args.style,
        options=options.math_toggle,
        classifier=ContextClassifier(options.context),
        parser=LatexTreeParser(options.latex),
    )
    _write_output(document.text, parsed_args.input, parsed_args)
    return EXIT_SUCCESS


def handle_inspect_command(parsed_args: argparse.Namespace, options: ResolvedOptions) -> int:
    """Run inspections over a file, print the problems and optionally fix them."""
    document = TextDocument(read_latex_file(parsed_args.input))
    positions = TextDocument(document.text)
    tree = LatexTreeParser(options.latex).parse(document.text)
    classifier = ContextClassifier(options.context)

    problems = run_inspections(tree, parsed_args.check, options.inspections, classifier)

    if parsed_args.fix:
        fixable = [problem for problem in problems if problem.inspection_id == ellipsis.INSPECTION_ID]
        if fixable:
            applied = apply_ellipsis_fixes(document, tree, fixable, classifier)
            Path(parsed_args.input).write_text(document.text, encoding="utf-8")
            logger.info(f"Applied {applied} fix(es) to {parsed_args.input}")
        problems = [problem for problem in problems if not problem.has_fix]

    rows = []
    for problem in problems:
        line = positions.get_line_number(problem.start)
        column = problem.start - positions.get_line_start_offset(line)
        rows.append((line + 1, column + 1, problem))

    if parsed_args.rich:
        table = Table(title=f"Problems in {parsed_args.input} ({len(problems)})")
        table.add_column("Line", style="cyan", justify="right")
        table.add_column("Column", style="cyan", justify="right")
        table.add_column("Inspection", style="yellow")
        table.add_column("Message", style="white")
        table.add_column("Fix", style="green")
        for line, column, problem in rows:
            table.add_row(str(line), str(column), problem.inspection_id, problem.message, problem.replacement or "")
        Console().print(table)
    else:
        for line, column, problem in rows:
            suffix = f" (fix: {problem.replacement})" if problem.replacement else ""
            print(f"{parsed_args.input}:{line}:{column}: {problem.inspection_id}: {problem.message}{suffix}")

    return EXIT_PROBLEMS_FOUND if problems else EXIT_SUCCESS


def handle_injections_command(parsed_args: argparse.Namespace, options: ResolvedOptions) -> int:
    """Print the embedded-language regions of a file."""
    tree = LatexTreeParser(options.latex).parse(read_latex_file(parsed_args.input))
    for place in find_injections(tree):
        print(f"{place.language}\t{place.start}\t{place.end}")
    return EXIT_SUCCESS


def handle_styles_command(parsed_args: argparse.Namespace, options: ResolvedOptions) -> int:
    """Print the registered math styles."""
    if parsed_args.rich:
        table = Table(title=f"Math Styles ({len(style_registry)})")
        table.add_column("Name", style="cyan")
        table.add_column("Opening", style="yellow")
        table.add_column("Closing", style="yellow")
        table.add_column("One line", style="green")
        for style in style_registry:
            table.add_row(
                style.name,
                style.opening_token,
                style.closing_token,
                "yes" if style.one_line_preferred else "no",
            )
        Console().print(table)
    else:
        for name in style_registry.list_styles():
            print(name)
    return EXIT_SUCCESS


COMMANDS = {
    "classify": handle_classify_command,
    "convert": handle_convert_command,
    "inspect": handle_inspect_command,
    "injections": handle_injections_command,
    "styles": handle_styles_command,
}


def main(args: list[str] | None = None) -> int:
    """Execute the CLI entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    try:
        options = _load_options(parsed_args)
    except (argparse.ArgumentTypeError, TexCtxError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        return COMMANDS[parsed_args.command](parsed_args, options)
    except (TexCtxError, OSError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)


if __name__ == "__main__":
    sys.exit(main())
