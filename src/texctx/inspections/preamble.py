#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/inspections/preamble.py
r"""Preamble queries: document class and loaded packages.

Only commands outside comments count, so a commented-out
``% \usepackage{amsmath}`` does not load the package.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from texctx.context import ContextClassifier, default_classifier
from texctx.document import TextDocument, TextEdit
from texctx.tree.navigation import next_sibling_ignore_whitespace
from texctx.tree.nodes import NodeKind, SyntaxTree, TreeNode

logger = logging.getLogger(__name__)

PACKAGE_COMMANDS = frozenset({"usepackage", "RequirePackage"})


def required_argument(command: TreeNode) -> Optional[str]:
    """Return the text of the last braced argument of a command, without braces.

    Arguments pylatexenc did not attach to the command are looked up in the
    following sibling group.
    """
    groups = [
        child
        for child in command.children
        if child.kind is NodeKind.GROUP and child.metadata.get("delimiters", ("{", "}"))[0] == "{"
    ]
    if not groups:
        sibling = next_sibling_ignore_whitespace(command)
        if sibling is not None and sibling.kind is NodeKind.GROUP:
            groups = [sibling]
    if not groups:
        return None
    return groups[-1].text[1:-1]


def _commands(tree: SyntaxTree, names: frozenset[str], classifier: ContextClassifier) -> Iterator[TreeNode]:
    for node in tree.iter_nodes():
        if node.kind is NodeKind.COMMAND and node.name in names and not classifier.is_comment(node):
            yield node


def document_class(tree: SyntaxTree, classifier: ContextClassifier | None = None) -> Optional[str]:
    r"""Return the class named by ``\documentclass``, or None."""
    classifier = classifier or default_classifier
    for command in _commands(tree, frozenset({"documentclass"}), classifier):
        argument = required_argument(command)
        if argument is not None:
            return argument.strip()
    return None


def included_packages(tree: SyntaxTree, classifier: ContextClassifier | None = None) -> list[str]:
    r"""Return the packages loaded with ``\usepackage`` or ``\RequirePackage``, in order."""
    classifier = classifier or default_classifier
    packages: list[str] = []
    for command in _commands(tree, PACKAGE_COMMANDS, classifier):
        argument = required_argument(command)
        if argument is None:
            continue
        for name in argument.split(","):
            name = name.strip()
            if name and name not in packages:
                packages.append(name)
    return packages


def usepackage_edit(
    document: TextDocument, tree: SyntaxTree, package: str, classifier: ContextClassifier | None = None
) -> TextEdit:
    r"""Compute the insertion of ``\usepackage{package}`` into the preamble.

    The command goes on a new line after the last package command, or after
    ``\documentclass`` when no package is loaded yet, or at the very start of
    the document otherwise.

    Parameters
    ----------
    document : TextDocument
        Document matching ``tree``
    tree : SyntaxTree
        Parse of the document
    package : str
        Package name
    classifier : ContextClassifier or None, default = None
        Classifier used to skip commented-out commands

    Returns
    -------
    TextEdit
        Zero-length insertion edit

    """
    classifier = classifier or default_classifier
    anchor = None
    for anchor in _commands(tree, PACKAGE_COMMANDS, classifier):
        pass
    if anchor is None:
        anchor = next(_commands(tree, frozenset({"documentclass"}), classifier), None)

    if anchor is None:
        return TextEdit(0, 0, f"\\usepackage{{{package}}}\n", expected_text="")

    anchor_end = anchor.end
    sibling = next_sibling_ignore_whitespace(anchor)
    if sibling is not None and sibling.kind is NodeKind.GROUP and required_argument(anchor) == sibling.text[1:-1]:
        anchor_end = sibling.end
    offset = document.get_line_end_offset(document.get_line_number(anchor_end))
    return TextEdit(offset, offset, f"\n\\usepackage{{{package}}}", expected_text="")


def insert_usepackage(
    document: TextDocument, tree: SyntaxTree, package: str, classifier: ContextClassifier | None = None
) -> int:
    r"""Insert ``\usepackage{package}`` into the preamble; returns the insertion offset."""
    edit = usepackage_edit(document, tree, package, classifier)
    document.apply_edit(edit)
    logger.debug(f"Inserted \\usepackage{{{package}}} at offset {edit.start}")
    return edit.start


__all__ = ["document_class", "included_packages", "insert_usepackage", "required_argument", "usepackage_edit"]
