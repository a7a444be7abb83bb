#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/inspections/missing_label.py
r"""Missing-label inspection.

Sectioning commands at or above a configurable level and environments such
as ``figure`` or ``equation`` should carry a ``\label`` so they can be
referenced.

- A sectioning command is labeled when the next non-whitespace sibling is a
  ``\label`` command, or when a ``\label`` sits inside its arguments.
- A command that takes its label as a parameter (``\lstinputlisting``) is
  labeled when an optional argument contains ``label=``.
- An environment is labeled when some ``\label`` has it as its direct
  environment, or when its optional argument contains ``label=``.

Starred commands are never reported, and ``\part`` is skipped in the
``exam`` document class where it denotes a question part.
"""

from __future__ import annotations

import logging
import re

from texctx.constants import LABEL_AS_PARAMETER_COMMANDS, SECTIONING_LEVELS
from texctx.context import ContextClassifier, default_classifier
from texctx.inspections.base import Problem
from texctx.inspections.preamble import document_class
from texctx.options.inspections import InspectionOptions
from texctx.parsers.latex import environment_parameters
from texctx.tree.navigation import descendants_of_kind, next_sibling_ignore_whitespace
from texctx.tree.nodes import NodeKind, SyntaxTree, TreeNode

logger = logging.getLogger(__name__)

INSPECTION_ID = "missing-label"

_LABEL_PARAMETER = re.compile(r"(?:^|,)\s*label\s*=")


def labeled_commands(tree: SyntaxTree, options: InspectionOptions, classifier: ContextClassifier) -> set[str]:
    """Return the names of the commands that should carry a label."""
    minimum = SECTIONING_LEVELS[options.missing_label_minimum_level]
    names = {name for name, level in SECTIONING_LEVELS.items() if level <= minimum}
    names |= LABEL_AS_PARAMETER_COMMANDS
    if document_class(tree, classifier) == "exam":
        names.discard("part")
    names.discard("item")
    return names


def is_starred(command: TreeNode) -> bool:
    r"""Whether a command is the starred form, e.g. ``\section*``."""
    if command.metadata.get("starred") or (command.name or "").endswith("*"):
        return True
    arguments = command.children[1:]
    return bool(arguments) and arguments[0].text == "*"


def _is_label(node: TreeNode | None) -> bool:
    return node is not None and node.kind is NodeKind.COMMAND and node.name == "label"


def _optional_arguments(command: TreeNode) -> list[str]:
    return [
        child.text[1:-1]
        for child in command.children
        if child.kind is NodeKind.GROUP and child.metadata.get("delimiters", ("{", "}"))[0] == "["
    ]


def command_has_label(command: TreeNode) -> bool:
    """Whether a command is followed by, or carries, a label."""
    if command.name in LABEL_AS_PARAMETER_COMMANDS:
        return any(_LABEL_PARAMETER.search(argument) for argument in _optional_arguments(command))
    if _is_label(next_sibling_ignore_whitespace(command)):
        return True
    return any(_is_label(node) for node in descendants_of_kind(command, NodeKind.COMMAND))


def environment_has_label(environment: TreeNode, classifier: ContextClassifier) -> bool:
    """Whether a label belongs directly to ``environment``."""
    parameters = environment_parameters(environment)
    if parameters is not None and _LABEL_PARAMETER.search(parameters):
        return True
    for command in descendants_of_kind(environment, NodeKind.COMMAND):
        if _is_label(command) and classifier.direct_environment(command) is environment:
            return True
    return False


def find_missing_labels(
    tree: SyntaxTree, options: InspectionOptions | None = None, classifier: ContextClassifier | None = None
) -> list[Problem]:
    """Find commands and environments that should have a label but do not.

    Parameters
    ----------
    tree : SyntaxTree
        Parsed document
    options : InspectionOptions or None, default = None
        Minimum sectioning level and labeled environments
    classifier : ContextClassifier or None, default = None
        Context classifier

    Returns
    -------
    list of Problem
        One problem per unlabeled command or environment, in document order

    """
    options = options or InspectionOptions()
    classifier = classifier or default_classifier
    commands = labeled_commands(tree, options, classifier)
    environments = set(options.labeled_environments)
    problems: list[Problem] = []

    for node in tree.iter_nodes():
        if node.kind is NodeKind.COMMAND and node.name in commands:
            if is_starred(node) or classifier.is_comment(node) or command_has_label(node):
                continue
        elif node.kind is NodeKind.ENVIRONMENT and node.name in environments:
            if classifier.is_comment(node) or environment_has_label(node, classifier):
                continue
        else:
            continue

        problems.append(
            Problem(
                inspection_id=INSPECTION_ID,
                message="Missing label",
                start=node.start,
                end=node.end,
                node=node,
            )
        )

    logger.debug(f"Found {len(problems)} missing labels")
    return problems


__all__ = [
    "INSPECTION_ID",
    "command_has_label",
    "environment_has_label",
    "find_missing_labels",
    "is_starred",
    "labeled_commands",
]
