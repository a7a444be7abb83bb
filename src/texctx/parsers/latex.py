#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/parsers/latex.py
r"""LaTeX to syntax tree parser.

This module turns LaTeX source into a :class:`~texctx.tree.nodes.SyntaxTree`
using the pylatexenc library for tokenizing. Every character of the source is
covered by exactly one leaf, so offsets in the tree are document offsets and
``node.text`` is always ``source[node.start:node.end]``.

Mapping from pylatexenc nodes
-----------------------------
- ``LatexCharsNode``: NORMAL_TEXT, with surrounding whitespace split into
  WHITESPACE leaves
- ``LatexCommentNode``: COMMENT (the ``%`` line) plus the following line break
  as WHITESPACE
- ``LatexMacroNode``: COMMAND with a COMMAND_TOKEN leaf and its parsed arguments
- ``LatexGroupNode``: GROUP with GROUP_START and GROUP_END delimiter leaves
  around its contents (an unclosed group has no GROUP_END)
- ``LatexEnvironmentNode``: ENVIRONMENT with BEGIN_COMMAND,
  ENVIRONMENT_CONTENT and END_COMMAND
- ``LatexMathNode``: INLINE_MATH or DISPLAY_MATH with start and end delimiter
  leaves around MATH_CONTENT (``$$...$$`` counts as display math)
- ``LatexSpecialsNode``: SPECIALS

Source text that pylatexenc does not cover with a node is emitted as text
leaves, so the tree never has gaps.

"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Optional

from pylatexenc.latexwalker import (
    LatexCharsNode,
    LatexCommentNode,
    LatexEnvironmentNode,
    LatexGroupNode,
    LatexMacroNode,
    LatexMathNode,
    LatexSpecialsNode,
    LatexWalker,
    LatexWalkerError,
    get_default_latex_context_db,
)
from pylatexenc.macrospec import EnvironmentSpec, MacroSpec

from texctx.constants import COMMAND_LANGUAGE_INJECTIONS
from texctx.exceptions import ParsingError
from texctx.options.latex import LatexOptions
from texctx.tree.nodes import NodeKind, SyntaxTree, TreeNode
from texctx.utils.encoding import read_latex_file

logger = logging.getLogger(__name__)

_BEGIN_PATTERN = re.compile(r"\\begin\s*\{[^}]*\}")
_END_PATTERN = re.compile(r"\\end\s*\{[^}]*\}\s*$")
_MATH_DELIMITERS = (("$$", "$$"), ("\\[", "\\]"), ("\\(", "\\)"), ("$", "$"))

_latex_context: Any = None


def get_latex_context() -> Any:
    """Return the pylatexenc context used for parsing.

    The default LaTeX context extended with argument specs for the commands
    and environments whose arguments the inspections look into.
    """
    global _latex_context
    if _latex_context is None:
        db = get_default_latex_context_db()
        db.add_context_category(
            "texctx",
            macros=[MacroSpec(name, "{") for name in COMMAND_LANGUAGE_INJECTIONS],
            environments=[EnvironmentSpec("lstlisting", "[")],
            prepend=True,
        )
        _latex_context = db
    return _latex_context


def environment_parameters(environment: TreeNode) -> Optional[str]:
    r"""Return the optional argument of ``\begin{name}[...]``, if present."""
    if environment.name is None:
        return None
    pattern = r"^\\begin\s*\{" + re.escape(environment.name) + r"\}\s*\[([^\]\n]*)\]"
    match = re.match(pattern, environment.text)
    return match.group(1) if match else None


class LatexTreeParser:
    r"""Parse LaTeX source into a syntax tree.

    Parameters
    ----------
    options : LatexOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> parser = LatexTreeParser()
        >>> tree = parser.parse("Let $x$ be real.")
        >>> [child.kind.value for child in tree.root.children]
        ['normal_text', 'whitespace', 'inline_math', 'whitespace', 'normal_text']

    Strict mode:

        >>> parser = LatexTreeParser(LatexOptions(strict_mode=True))
        >>> tree = parser.parse(latex_text)

    """

    def __init__(self, options: LatexOptions | None = None):
        """Initialize the LaTeX parser."""
        self.options: LatexOptions = options or LatexOptions()
        self._source = ""

    def parse_file(self, path: str | Path) -> SyntaxTree:
        """Read a LaTeX file (with encoding detection) and parse it."""
        return self.parse(read_latex_file(path))

    def parse(self, content: str) -> SyntaxTree:
        """Parse LaTeX source into a syntax tree.

        Parameters
        ----------
        content : str
            LaTeX source

        Returns
        -------
        SyntaxTree
            Tree whose root DOCUMENT node covers the whole source

        Raises
        ------
        ParsingError
            If pylatexenc fails and strict mode is enabled

        """
        self._source = content

        try:
            walker = LatexWalker(
                content,
                latex_context=get_latex_context(),
                tolerant_parsing=not self.options.strict_mode,
            )
            nodelist, _, _ = walker.get_latex_nodes()
        except LatexWalkerError as e:
            if self.options.strict_mode:
                raise ParsingError(f"Failed to parse LaTeX: {e}", parsing_stage="latex", original_error=e) from e
            logger.warning(f"Failed to parse LaTeX, falling back to plain text: {e}")
            nodelist = []

        root = self._branch(NodeKind.DOCUMENT, 0, len(content))
        self._fill_children(root, nodelist or [], 0, len(content))
        return SyntaxTree(root, source=content)

    def _leaf(self, kind: NodeKind, start: int, end: int, name: str | None = None) -> TreeNode:
        return TreeNode(kind=kind, start=start, length=end - start, text=self._source[start:end], name=name)

    def _branch(self, kind: NodeKind, start: int, end: int, name: str | None = None) -> TreeNode:
        return self._leaf(kind, start, end, name)

    @staticmethod
    def _span(node: Any) -> tuple[Optional[int], int]:
        pos = getattr(node, "pos", None)
        length = getattr(node, "len", None)
        if pos is None or length is None:
            return None, 0
        return pos, length

    def _fill_children(self, parent: TreeNode, nodes: list[Any], start: int, end: int) -> None:
        """Convert ``nodes`` into children of ``parent`` covering ``[start, end)``."""
        cursor = start
        spans = [(self._span(node), node) for node in nodes if node is not None]
        for (pos, length), node in sorted(spans, key=lambda item: item[0][0] if item[0][0] is not None else -1):
            if pos is None or pos < cursor or pos + length > end:
                continue
            if pos > cursor:
                for child in self._chars_leaves(cursor, pos):
                    parent.add_child(child)
            for child in self._convert_node(node, pos, pos + length):
                parent.add_child(child)
            cursor = pos + length

        if cursor < end:
            for child in self._chars_leaves(cursor, end):
                parent.add_child(child)

    def _chars_leaves(self, start: int, end: int) -> list[TreeNode]:
        """Split a run of characters into text and surrounding whitespace leaves."""
        text = self._source[start:end]
        if not text:
            return []
        if text.isspace():
            return [self._leaf(NodeKind.WHITESPACE, start, end)]
        if not self.options.split_whitespace:
            return [self._leaf(NodeKind.NORMAL_TEXT, start, end)]

        core_start = start + (len(text) - len(text.lstrip()))
        core_end = start + len(text.rstrip())
        leaves = []
        if core_start > start:
            leaves.append(self._leaf(NodeKind.WHITESPACE, start, core_start))
        leaves.append(self._leaf(NodeKind.NORMAL_TEXT, core_start, core_end))
        if core_end < end:
            leaves.append(self._leaf(NodeKind.WHITESPACE, core_end, end))
        return leaves

    def _convert_node(self, node: Any, start: int, end: int) -> list[TreeNode]:
        """Convert a pylatexenc node to tree node(s) covering ``[start, end)``."""
        if isinstance(node, LatexCharsNode):
            return self._chars_leaves(start, end)
        elif isinstance(node, LatexCommentNode):
            return self._convert_comment(start, end)
        elif isinstance(node, LatexMacroNode):
            return [self._convert_macro(node, start, end)]
        elif isinstance(node, LatexEnvironmentNode):
            return [self._convert_environment(node, start, end)]
        elif isinstance(node, LatexGroupNode):
            return [self._convert_group(node, start, end)]
        elif isinstance(node, LatexMathNode):
            return [self._convert_math(node, start, end)]
        elif isinstance(node, LatexSpecialsNode):
            return [self._leaf(NodeKind.SPECIALS, start, end, name=getattr(node, "specials_chars", None))]
        else:
            return self._chars_leaves(start, end)

    def _convert_comment(self, start: int, end: int) -> list[TreeNode]:
        newline = self._source.find("\n", start, end)
        comment_end = end if newline == -1 else newline
        leaves = [self._leaf(NodeKind.COMMENT, start, comment_end)]
        if comment_end < end:
            leaves.append(self._leaf(NodeKind.WHITESPACE, comment_end, end))
        return leaves

    @staticmethod
    def _arguments(node: Any) -> list[Any]:
        nodeargd = getattr(node, "nodeargd", None)
        if nodeargd is None:
            return []
        return [arg for arg in (getattr(nodeargd, "argnlist", None) or []) if arg is not None]

    def _convert_macro(self, node: Any, start: int, end: int) -> TreeNode:
        name = node.macroname
        command = self._branch(NodeKind.COMMAND, start, end, name=name)
        token_end = min(end, start + 1 + len(name))
        command.add_child(self._leaf(NodeKind.COMMAND_TOKEN, start, token_end))

        arguments = self._arguments(node)
        command.metadata["starred"] = any(
            isinstance(arg, LatexCharsNode) and getattr(arg, "chars", "") == "*" for arg in arguments
        )
        self._fill_children(command, arguments, token_end, end)
        return command

    def _convert_group(self, node: Any, start: int, end: int) -> TreeNode:
        group = self._branch(NodeKind.GROUP, start, end)
        opening, closing = tuple(getattr(node, "delimiters", None) or ("{", "}"))
        group.metadata["delimiters"] = (opening, closing)

        inner_start = start + len(opening) if self._source.startswith(opening, start) else start
        inner_end = end - len(closing)
        if inner_end < inner_start or self._source[inner_end:end] != closing:
            inner_end = end

        if inner_start > start:
            group.add_child(self._leaf(NodeKind.GROUP_START, start, inner_start))
        self._fill_children(group, list(getattr(node, "nodelist", None) or []), inner_start, inner_end)
        if inner_end < end:
            group.add_child(self._leaf(NodeKind.GROUP_END, inner_end, end))
        return group

    def _convert_environment(self, node: Any, start: int, end: int) -> TreeNode:
        name = node.environmentname
        environment = self._branch(NodeKind.ENVIRONMENT, start, end, name=name)

        match = _BEGIN_PATTERN.match(self._source, start, end)
        begin_end = match.end() if match else start
        for arg in self._arguments(node):
            pos, length = self._span(arg)
            if pos is not None and pos + length <= end:
                begin_end = max(begin_end, pos + length)

        end_match = _END_PATTERN.search(self._source, begin_end, end)
        end_start = end_match.start() if end_match else end

        environment.add_child(self._leaf(NodeKind.BEGIN_COMMAND, start, begin_end))
        content = environment.add_child(self._branch(NodeKind.ENVIRONMENT_CONTENT, begin_end, end_start))
        self._fill_children(content, list(getattr(node, "nodelist", None) or []), begin_end, end_start)
        if end_start < end:
            environment.add_child(self._leaf(NodeKind.END_COMMAND, end_start, end))

        parameters = environment_parameters(environment)
        if parameters is not None:
            environment.metadata["parameters"] = parameters
        return environment

    def _math_delimiters(self, node: Any, start: int) -> tuple[str, str]:
        delimiters = getattr(node, "delimiters", None)
        if delimiters and len(delimiters) == 2:
            return delimiters[0], delimiters[1]
        for opening, closing in _MATH_DELIMITERS:
            if self._source.startswith(opening, start):
                return opening, closing
        return "", ""

    def _convert_math(self, node: Any, start: int, end: int) -> TreeNode:
        opening, closing = self._math_delimiters(node, start)
        display = getattr(node, "displaytype", "inline") == "display" or opening == "$$"
        if display:
            kind, start_kind, end_kind = NodeKind.DISPLAY_MATH, NodeKind.DISPLAY_MATH_START, NodeKind.DISPLAY_MATH_END
        else:
            kind, start_kind, end_kind = NodeKind.INLINE_MATH, NodeKind.INLINE_MATH_START, NodeKind.INLINE_MATH_END

        math = self._branch(kind, start, end)
        math.metadata["delimiters"] = (opening, closing)

        open_end = start + len(opening)
        close_start = end - len(closing)
        if close_start < open_end or self._source[close_start:end] != closing:
            close_start = end

        math.add_child(self._leaf(start_kind, start, open_end))
        content = math.add_child(self._branch(NodeKind.MATH_CONTENT, open_end, close_start))
        self._fill_children(content, list(getattr(node, "nodelist", None) or []), open_end, close_start)
        if close_start < end:
            math.add_child(self._leaf(end_kind, close_start, end))
        return math


__all__ = ["LatexTreeParser", "environment_parameters", "get_latex_context"]
