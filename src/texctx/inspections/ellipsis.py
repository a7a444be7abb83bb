#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/inspections/ellipsis.py
r"""Ellipsis inspection.

Reports ``...`` typed as three periods. The fix is ``\dots`` in math context
(which needs amsmath) and ``\ldots`` everywhere else. Ellipses in comments are
ignored.

Examples
--------
    >>> from texctx.parsers.latex import LatexTreeParser
    >>> tree = LatexTreeParser().parse("Wait... and $1, 2, ...$")
    >>> [problem.replacement for problem in find_ellipses(tree)]
    ['\\ldots', '\\dots']

"""

from __future__ import annotations

import logging

from texctx.constants import (
    ELLIPSIS_MATH_COMMAND,
    ELLIPSIS_MATH_PACKAGE,
    ELLIPSIS_PATTERN,
    ELLIPSIS_TEXT_COMMAND,
)
from texctx.context import ContextClassifier, default_classifier
from texctx.document import TextDocument, TextEdit
from texctx.inspections.base import Problem
from texctx.inspections.preamble import included_packages, usepackage_edit
from texctx.tree.nodes import NodeKind, SyntaxTree

logger = logging.getLogger(__name__)

INSPECTION_ID = "ellipsis"


def find_ellipses(tree: SyntaxTree, classifier: ContextClassifier | None = None) -> list[Problem]:
    """Find every ``...`` in normal text outside comments.

    Parameters
    ----------
    tree : SyntaxTree
        Parsed document
    classifier : ContextClassifier or None, default = None
        Context classifier

    Returns
    -------
    list of Problem
        One problem per ellipsis, in document order

    """
    classifier = classifier or default_classifier
    source = tree.source
    problems: list[Problem] = []

    for node in tree.iter_nodes():
        if node.kind is not NodeKind.NORMAL_TEXT:
            continue
        for match in ELLIPSIS_PATTERN.finditer(node.text):
            start = node.start + match.start()
            leaf = tree.find_leaf_at(start)
            if leaf is not None and classifier.is_comment(leaf):
                continue

            in_math = classifier.in_math_context(node)
            replacement = ELLIPSIS_MATH_COMMAND if in_math else ELLIPSIS_TEXT_COMMAND
            end = start + len(match.group(0))
            # Keep a following letter from joining the command name.
            if end < len(source) and source[end].isalpha():
                replacement += "{}"

            problems.append(
                Problem(
                    inspection_id=INSPECTION_ID,
                    message="Ellipsis with ... instead of command",
                    start=start,
                    end=end,
                    replacement=replacement,
                    requires_package=ELLIPSIS_MATH_PACKAGE if in_math else None,
                    node=node,
                )
            )

    logger.debug(f"Found {len(problems)} ellipses")
    return problems


def apply_ellipsis_fixes(
    document: TextDocument,
    tree: SyntaxTree,
    problems: list[Problem],
    classifier: ContextClassifier | None = None,
) -> int:
    r"""Replace ellipses and load amsmath when a fix needs it.

    All edits, including a ``\usepackage{amsmath}`` insertion when some fix
    needs the package and it is not loaded yet, are applied from the end of
    the document backwards so the offsets of the remaining edits stay valid.

    Parameters
    ----------
    document : TextDocument
        Document matching ``tree``
    tree : SyntaxTree
        Parse of the document the problems were found in
    problems : list of Problem
        Problems from :func:`find_ellipses`
    classifier : ContextClassifier or None, default = None
        Context classifier

    Returns
    -------
    int
        Number of edits applied, including a package insertion

    Raises
    ------
    StaleEditError
        If the document no longer holds ``...`` at a problem's offsets. Fixes
        already applied at later offsets are kept.

    """
    classifier = classifier or default_classifier
    edits: list[TextEdit] = []
    needed_packages: list[str] = []

    for problem in problems:
        if problem.replacement is None:
            continue
        edits.append(TextEdit(problem.start, problem.end, problem.replacement, expected_text="..."))
        if problem.requires_package and problem.requires_package not in needed_packages:
            needed_packages.append(problem.requires_package)

    loaded = included_packages(tree, classifier)
    for package in needed_packages:
        if package not in loaded:
            edits.append(usepackage_edit(document, tree, package, classifier))

    with document.write_action():
        for edit in sorted(edits, key=lambda e: e.start, reverse=True):
            document.apply_edit(edit)

    logger.debug(f"Applied {len(edits)} ellipsis edits")
    return len(edits)


def apply_ellipsis_fix(
    document: TextDocument, tree: SyntaxTree, problem: Problem, classifier: ContextClassifier | None = None
) -> None:
    """Apply the fix of a single ellipsis problem."""
    apply_ellipsis_fixes(document, tree, [problem], classifier)


__all__ = ["INSPECTION_ID", "apply_ellipsis_fix", "apply_ellipsis_fixes", "find_ellipses"]
