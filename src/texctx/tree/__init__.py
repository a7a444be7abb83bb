#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/tree/__init__.py
"""Syntax tree module for LaTeX documents.

The module consists of three components:

- nodes: the typed tree node, node kinds and the owning SyntaxTree
- navigation: parent/child/sibling search primitives
- builder: helpers for constructing trees without the parser

"""

from __future__ import annotations

from texctx.tree.builder import build_tree
from texctx.tree.navigation import (
    ancestors,
    descendants,
    descendants_of_kind,
    is_ancestor_of,
    nearest_ancestor_of_kind,
    next_sibling_ignore_whitespace,
    previous_sibling_ignore_whitespace,
)
from texctx.tree.nodes import MATH_WRAPPER_KINDS, WHITESPACE_KINDS, NodeKind, SyntaxTree, TreeNode

__all__ = [
    "MATH_WRAPPER_KINDS",
    "WHITESPACE_KINDS",
    "NodeKind",
    "SyntaxTree",
    "TreeNode",
    "ancestors",
    "build_tree",
    "descendants",
    "descendants_of_kind",
    "is_ancestor_of",
    "nearest_ancestor_of_kind",
    "next_sibling_ignore_whitespace",
    "previous_sibling_ignore_whitespace",
]
