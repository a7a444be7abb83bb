#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/inspections/__init__.py
"""Document inspections built on the context classifier.

Available Inspections
---------------------
- ``ellipsis``: ``...`` typed as periods instead of ``\\ldots`` / ``\\dots``
- ``missing-label``: sectioning commands and environments without a label

Examples
--------
    >>> from texctx.parsers.latex import LatexTreeParser
    >>> from texctx.inspections import run_inspections
    >>> tree = LatexTreeParser().parse("\\\\section{Intro} Wait...")
    >>> [problem.inspection_id for problem in run_inspections(tree)]
    ['missing-label', 'ellipsis']

"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from texctx.context import ContextClassifier, default_classifier
from texctx.exceptions import ValidationError
from texctx.inspections import ellipsis, missing_label
from texctx.inspections.base import Problem
from texctx.inspections.ellipsis import apply_ellipsis_fix, apply_ellipsis_fixes, find_ellipses
from texctx.inspections.injection import InjectionPlace, find_injections, injected_language
from texctx.inspections.missing_label import find_missing_labels
from texctx.options.inspections import InspectionOptions
from texctx.tree.nodes import SyntaxTree

logger = logging.getLogger(__name__)

InspectionFunction = Callable[[SyntaxTree, InspectionOptions, ContextClassifier], list[Problem]]

INSPECTIONS: dict[str, InspectionFunction] = {
    ellipsis.INSPECTION_ID: lambda tree, options, classifier: find_ellipses(tree, classifier),
    missing_label.INSPECTION_ID: find_missing_labels,
}


def run_inspections(
    tree: SyntaxTree,
    names: Optional[Iterable[str]] = None,
    options: InspectionOptions | None = None,
    classifier: ContextClassifier | None = None,
) -> list[Problem]:
    """Run inspections over a document.

    Parameters
    ----------
    tree : SyntaxTree
        Parsed document
    names : iterable of str or None, default = None
        Inspections to run; all of them when None
    options : InspectionOptions or None, default = None
        Inspection options
    classifier : ContextClassifier or None, default = None
        Context classifier

    Returns
    -------
    list of Problem
        Problems sorted by offset

    Raises
    ------
    ValidationError
        If an inspection name is unknown

    """
    options = options or InspectionOptions()
    classifier = classifier or default_classifier
    selected = list(INSPECTIONS) if names is None else list(names)

    unknown = [name for name in selected if name not in INSPECTIONS]
    if unknown:
        raise ValidationError(
            f"Unknown inspection(s): {', '.join(unknown)}. Available: {', '.join(INSPECTIONS)}",
            parameter_name="inspections",
            parameter_value=unknown,
        )

    problems: list[Problem] = []
    for name in selected:
        found = INSPECTIONS[name](tree, options, classifier)
        logger.debug(f"Inspection {name}: {len(found)} problem(s)")
        problems.extend(found)
    return sorted(problems, key=lambda problem: (problem.start, problem.end))


__all__ = [
    "INSPECTIONS",
    "InjectionPlace",
    "Problem",
    "apply_ellipsis_fix",
    "apply_ellipsis_fixes",
    "find_ellipses",
    "find_injections",
    "find_missing_labels",
    "injected_language",
    "run_inspections",
]
