#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/tree/builder.py
"""Builder helpers for constructing syntax trees without a parser.

Callers describe a tree from its leaves: every leaf carries its source text,
branches carry only their kind and children. :func:`build_tree` then lays out
offsets left to right, fills in each branch's text as the concatenation of its
children and attaches the result to a :class:`SyntaxTree`.

The shorthand helpers (:func:`environment`, :func:`inline_math`,
:func:`display_math`, :func:`command`, ...) produce the same sub-structure the
LaTeX parser emits, including delimiter leaves.

Examples
--------
    >>> from texctx.tree.builder import build_tree, document, environment, text
    >>> tree = build_tree(document(environment("equation", text("x = 1"))))
    >>> tree.root.text
    '\\\\begin{equation}x = 1\\\\end{equation}'

"""

from __future__ import annotations

from texctx.tree.nodes import NodeKind, SyntaxTree, TreeNode


def leaf(kind: NodeKind, text: str, name: str | None = None) -> TreeNode:
    """Create a leaf node carrying its own source text."""
    return TreeNode(kind=kind, text=text, length=len(text), name=name)


def branch(kind: NodeKind, *children: TreeNode, name: str | None = None) -> TreeNode:
    """Create a branch node; its text and offsets are set by :func:`build_tree`."""
    return TreeNode(kind=kind, children=list(children), name=name)


def text(content: str) -> TreeNode:
    """Create a NORMAL_TEXT leaf."""
    return leaf(NodeKind.NORMAL_TEXT, content)


def whitespace(content: str = " ") -> TreeNode:
    """Create a WHITESPACE leaf."""
    return leaf(NodeKind.WHITESPACE, content)


def comment(content: str) -> TreeNode:
    """Create a COMMENT leaf; ``content`` should include the leading ``%``."""
    return leaf(NodeKind.COMMENT, content)


def group(*children: TreeNode) -> TreeNode:
    """Create a braced GROUP with its brace leaves around ``children``."""
    node = branch(NodeKind.GROUP, leaf(NodeKind.GROUP_START, "{"), *children, leaf(NodeKind.GROUP_END, "}"))
    node.metadata["delimiters"] = ("{", "}")
    return node


def command(name: str, *arguments: TreeNode) -> TreeNode:
    """Create a COMMAND with its COMMAND_TOKEN leaf followed by ``arguments``."""
    return branch(NodeKind.COMMAND, leaf(NodeKind.COMMAND_TOKEN, "\\" + name), *arguments, name=name)


def environment(name: str, *content: TreeNode, parameters: str = "") -> TreeNode:
    r"""Create an ENVIRONMENT ``\begin{name}...\end{name}`` around ``content``."""
    return branch(
        NodeKind.ENVIRONMENT,
        leaf(NodeKind.BEGIN_COMMAND, f"\\begin{{{name}}}{parameters}"),
        branch(NodeKind.ENVIRONMENT_CONTENT, *content),
        leaf(NodeKind.END_COMMAND, f"\\end{{{name}}}"),
        name=name,
    )


def inline_math(*content: TreeNode, delimiters: tuple[str, str] = ("$", "$")) -> TreeNode:
    """Create an INLINE_MATH wrapper around ``content``."""
    node = branch(
        NodeKind.INLINE_MATH,
        leaf(NodeKind.INLINE_MATH_START, delimiters[0]),
        branch(NodeKind.MATH_CONTENT, *content),
        leaf(NodeKind.INLINE_MATH_END, delimiters[1]),
    )
    node.metadata["delimiters"] = delimiters
    return node


def display_math(*content: TreeNode, delimiters: tuple[str, str] = ("\\[", "\\]")) -> TreeNode:
    """Create a DISPLAY_MATH wrapper around ``content``."""
    node = branch(
        NodeKind.DISPLAY_MATH,
        leaf(NodeKind.DISPLAY_MATH_START, delimiters[0]),
        branch(NodeKind.MATH_CONTENT, *content),
        leaf(NodeKind.DISPLAY_MATH_END, delimiters[1]),
    )
    node.metadata["delimiters"] = delimiters
    return node


def document(*children: TreeNode) -> TreeNode:
    """Create the DOCUMENT root."""
    return branch(NodeKind.DOCUMENT, *children)


def _layout(node: TreeNode, cursor: int) -> int:
    node.start = cursor
    if not node.children:
        node.length = len(node.text)
        return cursor + node.length

    position = cursor
    for child in node.children:
        position = _layout(child, position)

    node.text = "".join(child.text for child in node.children)
    node.length = position - cursor
    return position


def build_tree(root: TreeNode, start: int = 0) -> SyntaxTree:
    """Lay out offsets for ``root`` and wrap it in a :class:`SyntaxTree`.

    Parameters
    ----------
    root : TreeNode
        Root of the constructed tree
    start : int, default = 0
        Offset assigned to the first character of the root

    Returns
    -------
    SyntaxTree
        A tree whose source is the concatenated leaf text

    """
    _layout(root, start)
    return SyntaxTree(root, source=root.text)


__all__ = [
    "leaf",
    "branch",
    "text",
    "whitespace",
    "comment",
    "group",
    "command",
    "environment",
    "inline_math",
    "display_math",
    "document",
    "build_tree",
]
