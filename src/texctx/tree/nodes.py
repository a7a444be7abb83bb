#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/tree/nodes.py
"""Syntax tree node classes for LaTeX document representation.

This module defines the typed tree produced by the LaTeX parser and consumed
by the context classifier and the math environment transformer. Each node
records its kind, its source text and its offset range in the document.

Ownership
---------
A node owns its ``children`` list. The ``parent`` link is a weak, non-owning
back-reference used only for lookups. Every node attached to a
:class:`SyntaxTree` references that tree, so a node kept by a caller keeps its
whole tree navigable. Once the tree is disposed its nodes become *detached*:
``parent`` returns ``None`` and the navigation helpers degrade to "not found"
or an empty sequence instead of raising.

Node Kinds
----------
Structure mirrors the LaTeX source:

    - ENVIRONMENT: BEGIN_COMMAND, ENVIRONMENT_CONTENT, END_COMMAND
    - INLINE_MATH: INLINE_MATH_START, MATH_CONTENT, INLINE_MATH_END
    - DISPLAY_MATH: DISPLAY_MATH_START, MATH_CONTENT, DISPLAY_MATH_END
    - COMMAND: COMMAND_TOKEN followed by argument nodes (usually GROUP)
    - GROUP: GROUP_START, contents, GROUP_END
    - Leaves: NORMAL_TEXT, WHITESPACE, COMMENT, SPECIALS

"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional

from texctx.exceptions import ValidationError


class NodeKind(str, Enum):
    """Kinds of syntax tree nodes."""

    DOCUMENT = "document"
    NORMAL_TEXT = "normal_text"
    WHITESPACE = "whitespace"
    COMMENT = "comment"
    SPECIALS = "specials"
    COMMAND = "command"
    COMMAND_TOKEN = "command_token"
    GROUP = "group"
    GROUP_START = "group_start"
    GROUP_END = "group_end"
    ENVIRONMENT = "environment"
    BEGIN_COMMAND = "begin_command"
    ENVIRONMENT_CONTENT = "environment_content"
    END_COMMAND = "end_command"
    INLINE_MATH = "inline_math"
    INLINE_MATH_START = "inline_math_start"
    INLINE_MATH_END = "inline_math_end"
    MATH_CONTENT = "math_content"
    DISPLAY_MATH = "display_math"
    DISPLAY_MATH_START = "display_math_start"
    DISPLAY_MATH_END = "display_math_end"


# Wrapper kinds that put every descendant in math context.
MATH_WRAPPER_KINDS: frozenset[NodeKind] = frozenset({NodeKind.INLINE_MATH, NodeKind.DISPLAY_MATH})

WHITESPACE_KINDS: frozenset[NodeKind] = frozenset({NodeKind.WHITESPACE})


@dataclass(eq=False)
class TreeNode:
    """A node in a LaTeX syntax tree.

    Nodes compare by identity. Offsets are absolute positions in the source
    text of the owning document snapshot.

    Parameters
    ----------
    kind : NodeKind
        The node kind
    start : int, default = 0
        Start offset of the node in the document
    length : int, default = 0
        Length of the node's source text
    text : str, default = ""
        Source text covered by the node
    name : str or None, default = None
        Command name (without backslash) for COMMAND nodes, environment name
        for ENVIRONMENT nodes
    children : list of TreeNode, default = empty list
        Child nodes in document order
    metadata : dict, default = empty dict
        Arbitrary parser-specific information

    """

    kind: NodeKind
    start: int = 0
    length: int = 0
    text: str = ""
    name: Optional[str] = None
    children: list[TreeNode] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    _parent_ref: Optional[weakref.ReferenceType[TreeNode]] = field(default=None, init=False, repr=False)
    _tree: Optional[SyntaxTree] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        """Link the initial children back to this node."""
        for child in self.children:
            child._parent_ref = weakref.ref(self)

    def __repr__(self) -> str:
        """Return a compact representation without the subtree."""
        name = f", name={self.name!r}" if self.name is not None else ""
        return f"TreeNode(kind={self.kind.value}, start={self.start}, length={self.length}{name})"

    @property
    def end(self) -> int:
        """Offset just past the last character of the node."""
        return self.start + self.length

    @property
    def tree(self) -> Optional[SyntaxTree]:
        """The owning tree, or None for free-standing nodes."""
        return self._tree

    @property
    def is_valid(self) -> bool:
        """Whether the node can still be navigated.

        Free-standing nodes (never attached to a tree) are valid. Attached
        nodes are valid until their tree is disposed.

        """
        return self._tree is None or not self._tree.disposed

    @property
    def parent(self) -> Optional[TreeNode]:
        """The parent node, or None at the root or when detached."""
        if self._parent_ref is None or not self.is_valid:
            return None
        return self._parent_ref()

    @property
    def is_leaf(self) -> bool:
        """Whether the node has no children."""
        return not self.children

    def add_child(self, child: TreeNode) -> TreeNode:
        """Append a child and link it back to this node.

        Parameters
        ----------
        child : TreeNode
            The node to append

        Returns
        -------
        TreeNode
            The appended child

        """
        child._parent_ref = weakref.ref(self)
        self.children.append(child)
        return child

    def _sibling(self, step: int) -> Optional[TreeNode]:
        parent = self.parent
        if parent is None:
            return None
        siblings = parent.children
        for index, sibling in enumerate(siblings):
            if sibling is self:
                target = index + step
                if 0 <= target < len(siblings):
                    return siblings[target]
                return None
        return None

    @property
    def next_sibling(self) -> Optional[TreeNode]:
        """The following sibling, if any."""
        return self._sibling(1)

    @property
    def previous_sibling(self) -> Optional[TreeNode]:
        """The preceding sibling, if any."""
        return self._sibling(-1)

    def contains_offset(self, offset: int) -> bool:
        """Whether ``offset`` falls inside the node's half-open range."""
        return self.start <= offset < self.end


class SyntaxTree:
    """A parsed document snapshot owning its root node.

    Parameters
    ----------
    root : TreeNode
        Root node of the tree, normally of kind DOCUMENT
    source : str or None, default = None
        Source text the tree was parsed from. Defaults to the root's text.

    Examples
    --------
    >>> from texctx.parsers.latex import LatexTreeParser
    >>> tree = LatexTreeParser().parse(r"Let $x$ be real.")
    >>> tree.find_leaf_at(5).text
    'x'

    """

    def __init__(self, root: TreeNode, source: str | None = None):
        """Attach every node of ``root`` to this tree."""
        self.root = root
        self.source = source if source is not None else root.text
        self._disposed = False
        for node in self._walk(root):
            node._tree = self

    @staticmethod
    def _walk(node: TreeNode) -> Iterator[TreeNode]:
        stack = [node]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))

    @property
    def disposed(self) -> bool:
        """Whether :meth:`dispose` has been called."""
        return self._disposed

    def dispose(self) -> None:
        """Detach the tree; navigation over its nodes yields nothing afterwards."""
        self._disposed = True

    def iter_nodes(self) -> Iterator[TreeNode]:
        """Iterate over all nodes in document order (pre-order)."""
        if self._disposed:
            return
        for node in self._walk(self.root):
            if self._disposed:
                return
            yield node

    def find_leaf_at(self, offset: int) -> Optional[TreeNode]:
        """Find the deepest node whose range contains ``offset``.

        An offset equal to the end of the document resolves to the deepest
        node ending there.

        Parameters
        ----------
        offset : int
            Absolute document offset

        Returns
        -------
        TreeNode or None
            The deepest containing node, or None when the offset is outside
            the document or the tree is disposed

        """
        if self._disposed or offset < self.root.start or offset > self.root.end:
            return None

        at_end = offset == self.root.end
        node = self.root
        while True:
            match = None
            for child in node.children:
                if child.length == 0:
                    continue
                if child.contains_offset(offset) or (at_end and child.end == offset):
                    match = child
                    break
            if match is None:
                return node
            node = match

    def validate(self) -> None:
        """Check the offset invariants of every node.

        Raises
        ------
        ValidationError
            If a child starts before its previous sibling or lies outside its
            parent's range

        """
        for node in self._walk(self.root):
            previous_start = node.start
            for child in node.children:
                if child.start < previous_start:
                    raise ValidationError(
                        f"Child {child!r} starts before its previous sibling in {node!r}",
                        parameter_name="start",
                        parameter_value=child.start,
                    )
                if child.start < node.start or child.end > node.end:
                    raise ValidationError(
                        f"Child {child!r} lies outside its parent {node!r}",
                        parameter_name="start",
                        parameter_value=child.start,
                    )
                previous_start = child.start


__all__ = [
    "NodeKind",
    "MATH_WRAPPER_KINDS",
    "WHITESPACE_KINDS",
    "TreeNode",
    "SyntaxTree",
]
