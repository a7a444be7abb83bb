"""Test utilities for the texctx test suite.

This module provides helpers for locating nodes in parsed documents.
"""

from texctx.tree.nodes import SyntaxTree, TreeNode


def offset_of(source: str, needle: str, occurrence: int = 0) -> int:
    """Return the offset of the ``occurrence``-th match of ``needle`` in ``source``."""
    position = -1
    for _ in range(occurrence + 1):
        position = source.index(needle, position + 1)
    return position


def leaf_at(tree: SyntaxTree, needle: str, occurrence: int = 0, delta: int = 0) -> TreeNode:
    """Return the deepest node at a match of ``needle`` in the tree's source.

    Parameters
    ----------
    tree : SyntaxTree
        Parsed document
    needle : str
        Text to look for
    occurrence : int, default 0
        Which match to use
    delta : int, default 0
        Offset added to the match position

    """
    node = tree.find_leaf_at(offset_of(tree.source, needle, occurrence) + delta)
    assert node is not None, f"No node at {needle!r}"
    return node
