#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/tree/navigation.py
"""Parent, child and sibling search over syntax trees.

Every lookup returns an explicit "not found" value (``None``, ``False`` or an
empty iterator) for structural absence. Detached nodes, whose tree has been
disposed, behave like isolated nodes: they have no parent and no
descendants.

Ancestor searches are bounded by a hop count (``DEFAULT_MAX_HOPS`` unless
given) so that a malformed tree can never make them loop forever; running out
of hops is reported as "not found".

Examples
--------
    >>> from texctx.tree.navigation import nearest_ancestor_of_kind
    >>> from texctx.tree.nodes import NodeKind
    >>> env = nearest_ancestor_of_kind(leaf, NodeKind.ENVIRONMENT)
    >>> env.name if env else None
    'equation'

"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, Optional, Union

from texctx.constants import DEFAULT_MAX_HOPS
from texctx.tree.nodes import WHITESPACE_KINDS, NodeKind, TreeNode

logger = logging.getLogger(__name__)

KindSpec = Union[NodeKind, Iterable[NodeKind]]


def _kind_set(kinds: KindSpec) -> frozenset[NodeKind]:
    if isinstance(kinds, NodeKind):
        return frozenset({kinds})
    return frozenset(kinds)


def is_whitespace(node: TreeNode) -> bool:
    """Whether the node is a pure-whitespace leaf."""
    return node.kind in WHITESPACE_KINDS


def ancestors(node: TreeNode, max_hops: int = DEFAULT_MAX_HOPS) -> Iterator[TreeNode]:
    """Iterate over the strict ancestors of ``node``, nearest first.

    Parameters
    ----------
    node : TreeNode
        Starting node (not yielded)
    max_hops : int, default = DEFAULT_MAX_HOPS
        Maximum number of parent links to follow

    Yields
    ------
    TreeNode
        Each ancestor up to the root or the hop bound

    """
    current = node.parent
    hops = 1
    while current is not None:
        if hops > max_hops:
            logger.debug("Ancestor walk from %r exceeded %d hops", node, max_hops)
            return
        yield current
        current = current.parent
        hops += 1


def nearest_ancestor_of_kind(
    node: TreeNode, kinds: KindSpec, max_hops: int = DEFAULT_MAX_HOPS
) -> Optional[TreeNode]:
    """Find the nearest strict ancestor of one of the given kinds.

    Parameters
    ----------
    node : TreeNode
        Starting node; it is never returned itself
    kinds : NodeKind or iterable of NodeKind
        Accepted ancestor kinds
    max_hops : int, default = DEFAULT_MAX_HOPS
        Maximum number of parent links to follow

    Returns
    -------
    TreeNode or None
        The nearest matching ancestor, or None when there is none within the
        hop bound

    """
    wanted = _kind_set(kinds)
    for ancestor in ancestors(node, max_hops):
        if ancestor.kind in wanted:
            return ancestor
    return None


def has_ancestor_of_kind(node: TreeNode, kinds: KindSpec, max_hops: int = DEFAULT_MAX_HOPS) -> bool:
    """Whether any strict ancestor has one of the given kinds."""
    return nearest_ancestor_of_kind(node, kinds, max_hops) is not None


def has_ancestor_matching(node: TreeNode, max_depth: int, predicate: Callable[[TreeNode], bool]) -> bool:
    """Whether a strict ancestor within ``max_depth`` hops satisfies ``predicate``.

    The document root is not tested.
    """
    for ancestor in ancestors(node, max_depth):
        if ancestor.kind is NodeKind.DOCUMENT:
            return False
        if predicate(ancestor):
            return True
    return False


def is_ancestor_of(ancestor: Optional[TreeNode], node: TreeNode, max_hops: int = DEFAULT_MAX_HOPS) -> bool:
    """Whether walking up from ``node`` reaches ``ancestor`` within the hop bound.

    Returns False when ``ancestor`` is None or is ``node`` itself.
    """
    if ancestor is None:
        return False
    return any(current is ancestor for current in ancestors(node, max_hops))


def grandparent(node: TreeNode, generations: int) -> Optional[TreeNode]:
    """Return the ``generations``-th parent of ``node``, or None past the root."""
    current: Optional[TreeNode] = node
    for _ in range(generations):
        if current is None:
            return None
        current = current.parent
    return current


def next_sibling_ignore_whitespace(node: TreeNode) -> Optional[TreeNode]:
    """Return the first following sibling that is not whitespace."""
    sibling = node.next_sibling
    while sibling is not None:
        if not is_whitespace(sibling):
            return sibling
        sibling = sibling.next_sibling
    return None


def previous_sibling_ignore_whitespace(node: TreeNode) -> Optional[TreeNode]:
    """Return the first preceding sibling that is not whitespace."""
    sibling = node.previous_sibling
    while sibling is not None:
        if not is_whitespace(sibling):
            return sibling
        sibling = sibling.previous_sibling
    return None


def next_sibling_of_kind(node: TreeNode, kinds: KindSpec) -> Optional[TreeNode]:
    """Return ``node`` or the first following sibling of one of ``kinds``."""
    wanted = _kind_set(kinds)
    sibling: Optional[TreeNode] = node
    while sibling is not None:
        if sibling.kind in wanted:
            return sibling
        sibling = sibling.next_sibling
    return None


def previous_sibling_of_kind(node: TreeNode, kinds: KindSpec) -> Optional[TreeNode]:
    """Return ``node`` or the first preceding sibling of one of ``kinds``."""
    wanted = _kind_set(kinds)
    sibling: Optional[TreeNode] = node
    while sibling is not None:
        if sibling.kind in wanted:
            return sibling
        sibling = sibling.previous_sibling
    return None


def first_child_ignore_whitespace(node: TreeNode) -> Optional[TreeNode]:
    """Return the first child that is not whitespace, or None."""
    if not node.is_valid:
        return None
    for child in node.children:
        if not is_whitespace(child):
            return child
    return None


def descendants(node: TreeNode) -> Iterator[TreeNode]:
    """Iterate over all strict descendants of ``node`` in document order.

    The iterator is lazy and single-use. It yields nothing for a detached
    node and stops early if the tree is disposed while iterating.
    """
    if not node.is_valid:
        return
    stack = list(reversed(node.children))
    while stack:
        if not node.is_valid:
            logger.debug("Tree disposed during traversal below %r", node)
            return
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def descendants_of_kind(node: TreeNode, kinds: KindSpec) -> Iterator[TreeNode]:
    """Iterate over the strict descendants of ``node`` with one of ``kinds``.

    Parameters
    ----------
    node : TreeNode
        Root of the searched subtree (not yielded)
    kinds : NodeKind or iterable of NodeKind
        Accepted kinds

    Yields
    ------
    TreeNode
        Matching descendants in pre-order (document order)

    """
    wanted = _kind_set(kinds)
    for current in descendants(node):
        if current.kind in wanted:
            yield current


def first_descendant_of_kind(node: TreeNode, kinds: KindSpec) -> Optional[TreeNode]:
    """Return the first descendant of one of ``kinds`` in document order."""
    return next(descendants_of_kind(node, kinds), None)


def last_descendant_of_kind(node: TreeNode, kinds: KindSpec) -> Optional[TreeNode]:
    """Return the last descendant of one of ``kinds`` in document order."""
    found = None
    for found in descendants_of_kind(node, kinds):
        pass
    return found


__all__ = [
    "ancestors",
    "descendants",
    "descendants_of_kind",
    "first_child_ignore_whitespace",
    "first_descendant_of_kind",
    "grandparent",
    "has_ancestor_matching",
    "has_ancestor_of_kind",
    "is_ancestor_of",
    "is_whitespace",
    "last_descendant_of_kind",
    "nearest_ancestor_of_kind",
    "next_sibling_ignore_whitespace",
    "next_sibling_of_kind",
    "previous_sibling_ignore_whitespace",
    "previous_sibling_of_kind",
]
