#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/transforms/math_toggle.py
r"""Conversion between math styles.

Rewrites a math region from one delimiter convention to another, for example
``\[ ... \]`` to ``$...$`` or ``$...$`` to ``\begin{equation} ... \end{equation}``,
as a single range replacement on a :class:`~texctx.document.TextDocument`.

Layout rules
------------
Let ``indent`` be the indentation of the line the region starts on.

- Converting *to* an inline style pulls the region into the surrounding
  line: the line break and indentation before it become one space. When
  the next line is indented at least as deep as ``indent``, up to
  ``len(indent)`` whitespace characters after the region are removed too.
- Converting *from* an inline style pushes the region onto its own lines at
  ``indent``. Text following the region on the same line moves to a new line
  at ``indent``.
- The body sits one indentation unit deeper than the delimiters. Styles that
  prefer one line (inline, display, ``equation``, ``equation*``) get their
  body collapsed by :func:`one_liner`.

Trims only ever remove whitespace; a trim that would reach into other text
is shortened.

Examples
--------
Convert the region at an offset:

    >>> from texctx.document import TextDocument
    >>> doc = TextDocument("Let $a+b$ be.\n")
    >>> _ = convert_math_environment(doc, 6, "equation")
    >>> print(doc.text)
    Let
    \begin{equation}
        a+b
    \end{equation}
    be.

"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Optional

from texctx.context import ContextClassifier, default_classifier
from texctx.document import TextDocument, TextEdit
from texctx.exceptions import StaleEditError, TransformError
from texctx.options.editing import MathToggleOptions
from texctx.styles import MathStyle, StyleRegistry, style_registry
from texctx.tree.nodes import NodeKind, TreeNode

if TYPE_CHECKING:
    from texctx.parsers.latex import LatexTreeParser

logger = logging.getLogger(__name__)

TRANSFORM_NAME = "math-toggle"

_CONTENT_KINDS = frozenset({NodeKind.MATH_CONTENT, NodeKind.ENVIRONMENT_CONTENT})
_BEGIN_END_PATTERN = re.compile(r"\\(begin|end)\s*\{")
_ROW_SEPARATOR_TAIL = re.compile(r"\*?(?:\s*\[[^\]]*\])?")
_WHITESPACE_RUN = re.compile(r"\s+")


def one_liner(body: str, strip_alignment: bool = True) -> str:
    r"""Collapse a math body onto a single line.

    Comments (``%`` up to the end of the line, but not ``\%``) are dropped.
    Unless ``strip_alignment`` is False, row separators ``\\`` (with an
    optional ``*`` and ``[dimen]``) and alignment tabs ``&`` (but not ``\&``)
    outside nested environments become spaces. Finally every run of whitespace
    becomes one space and the result is trimmed.

    Parameters
    ----------
    body : str
        Body text, possibly spanning several lines
    strip_alignment : bool, default True
        Whether to drop top-level row separators and alignment tabs

    Returns
    -------
    str
        Single-line body

    Examples
    --------
    >>> one_liner("a &= b \\\\\n  c &= d % note\n")
    'a = b c = d'

    """
    out: list[str] = []
    depth = 0
    i = 0
    length = len(body)

    while i < length:
        char = body[i]

        if char == "\\":
            match = _BEGIN_END_PATTERN.match(body, i)
            if match:
                depth += 1 if match.group(1) == "begin" else -1
                out.append(match.group(0))
                i = match.end()
                continue
            if body.startswith("\\\\", i):
                if strip_alignment and depth <= 0:
                    tail = _ROW_SEPARATOR_TAIL.match(body, i + 2)
                    out.append(" ")
                    i = tail.end() if tail else i + 2
                else:
                    out.append("\\\\")
                    i += 2
                continue
            out.append(body[i : i + 2])
            i += 2
            continue

        if char == "%":
            newline = body.find("\n", i)
            i = length if newline == -1 else newline
            continue

        if char == "&" and strip_alignment and depth <= 0:
            out.append(" ")
        else:
            out.append(char)
        i += 1

    return _WHITESPACE_RUN.sub(" ", "".join(out)).strip()


def _leading_whitespace_width(text: str, start: int, limit: int) -> int:
    """Count how many characters before ``start`` are whitespace, at most ``limit``.

    At most one line break is counted.
    """
    width = 0
    seen_newline = False
    while width < limit and start - width > 0:
        char = text[start - width - 1]
        if char == "\n":
            if seen_newline:
                break
            seen_newline = True
        elif char not in " \t":
            break
        width += 1
    return width


def _trailing_whitespace_width(text: str, end: int, limit: int) -> int:
    """Count how many characters from ``end`` on are whitespace, at most ``limit``.

    At most one line break is counted.
    """
    width = 0
    seen_newline = False
    while width < limit and end + width < len(text):
        char = text[end + width]
        if char == "\n":
            if seen_newline:
                break
            seen_newline = True
        elif char not in " \t":
            break
        width += 1
    return width


class MathEnvironmentEditor:
    r"""Rewrite one math region from one style to another.

    Parameters
    ----------
    old_style : str
        Current style of the region. Environment names without a registered
        style are treated as plain named styles.
    new_style : str
        Target style
    document : TextDocument
        Document the region lives in
    environment : TreeNode
        The region: an ``INLINE_MATH`` or ``DISPLAY_MATH`` wrapper or a math
        ``ENVIRONMENT``
    registry : StyleRegistry or None, default = None
        Style lookup; defaults to the global registry
    options : MathToggleOptions or None, default = None
        Layout options

    Raises
    ------
    UnknownStyleError
        If ``new_style`` is not registered. Raised on construction, before
        any text is read.

    """

    def __init__(
        self,
        old_style: str,
        new_style: str,
        document: TextDocument,
        environment: TreeNode,
        registry: StyleRegistry | None = None,
        options: MathToggleOptions | None = None,
    ):
        """Resolve both styles."""
        self.registry = registry if registry is not None else style_registry
        self.new_style: MathStyle = self.registry.get(new_style)
        if self.registry.has_style(old_style):
            self.old_style: MathStyle = self.registry.get(old_style)
        else:
            self.old_style = StyleRegistry.named(old_style)
        self.document = document
        self.environment = environment
        self.options = options or MathToggleOptions()

    @property
    def converts_to_inline(self) -> bool:
        """Whether the region moves into the surrounding line."""
        return self.new_style.is_inline and not self.old_style.is_inline

    @property
    def converts_from_inline(self) -> bool:
        """Whether the region moves onto its own lines."""
        return self.old_style.is_inline and not self.new_style.is_inline

    def _body(self, indent: str) -> str:
        node = self.environment
        content = next((child for child in node.children if child.kind in _CONTENT_KINDS), None)
        if content is not None:
            body = content.text
        else:
            body = node.text
            opening, closing = self.old_style.opening_token, self.old_style.closing_token
            if body.startswith(opening):
                body = body[len(opening) :]
            if closing and body.endswith(closing):
                body = body[: -len(closing)]

        if not self.old_style.is_inline:
            body = body.replace(indent + self.options.indent_unit, "")
        return body.strip()

    def compute_edit(self) -> TextEdit:
        """Compute the replacement without touching the document.

        Returns
        -------
        TextEdit
            Edit carrying the expected text and document version, so applying
            it to a changed document fails instead of corrupting it

        Raises
        ------
        StaleEditError
            If the document no longer holds the region's text at its offsets

        """
        document = self.document
        text = document.text
        version = document.version
        start, end = self.environment.start, self.environment.end

        if text[start:end] != self.environment.text:
            raise StaleEditError(
                f"Math region at [{start}, {end}) no longer matches the document",
                expected_text=self.environment.text,
                actual_text=text[start:end],
            )

        indent = document.line_indentation_by_offset(start)
        unit = self.options.indent_unit

        if self.converts_to_inline:
            leading_trim = len(indent) + 1
            leading_insert = " "
            next_line_indent = document.get_line_indentation(document.get_line_number(end) + 1)
            trailing_trim = 0 if len(next_line_indent) < len(indent) else len(indent)
            trailing_insert = ""
        elif self.converts_from_inline:
            leading_trim = 1
            leading_insert = "\n" + indent
            trailing_trim = 1
            rest_of_line = text[end : document.get_line_end_offset(document.get_line_number(end))]
            trailing_insert = "\n" if not rest_of_line.strip() else "\n" + indent
        else:
            leading_trim = trailing_trim = 0
            leading_insert = trailing_insert = ""

        leading_trim = _leading_whitespace_width(text, start, leading_trim)
        trailing_trim = _trailing_whitespace_width(text, end, trailing_trim)

        body = self._body(indent)
        if self.new_style.one_line_preferred:
            body = one_liner(body, strip_alignment=self.options.one_line_strip_alignment)
        body = body.replace("\n", "\n" + indent + unit)

        edit_start = max(0, start - leading_trim)
        edit_end = min(len(text), end + trailing_trim)
        if edit_start == 0:
            # nothing precedes the region to separate it from
            leading_insert = ""

        replacement = (
            leading_insert
            + self.new_style.render_begin(indent, unit)
            + body
            + self.new_style.render_end(indent, unit)
            + trailing_insert
        )
        logger.debug(
            f"Converting {self.old_style.name} to {self.new_style.name} over [{edit_start}, {edit_end})"
        )
        return TextEdit(
            start=edit_start,
            end=edit_end,
            replacement=replacement,
            expected_text=text[edit_start:edit_end],
            document_version=version,
        )

    def apply(self) -> TextEdit:
        """Compute and apply the edit as one write.

        Returns
        -------
        TextEdit
            The applied edit

        Raises
        ------
        StaleEditError
            If the region no longer matches the document; nothing is modified

        """
        with self.document.write_action():
            edit = self.compute_edit()
            self.document.apply_edit(edit)
        return edit


def _current_style(block: TreeNode, classifier: ContextClassifier | None) -> str:
    current = (classifier or default_classifier).math_style_of(block)
    if current is None:
        raise TransformError(
            f"Node {block.kind.value!r} at offset {block.start} is not a math region",
            transform_name=TRANSFORM_NAME,
        )
    return current


def transform(
    block: TreeNode,
    target_style: str,
    document: TextDocument,
    registry: StyleRegistry | None = None,
    options: MathToggleOptions | None = None,
    classifier: ContextClassifier | None = None,
) -> TextEdit:
    """Compute the edit converting ``block`` to ``target_style``.

    Parameters
    ----------
    block : TreeNode
        Math region to convert
    target_style : str
        Name of the target style
    document : TextDocument
        Document holding ``block``
    registry : StyleRegistry or None, default = None
        Style lookup
    options : MathToggleOptions or None, default = None
        Layout options
    classifier : ContextClassifier or None, default = None
        Classifier used to infer the current style

    Returns
    -------
    TextEdit
        The edit; the document is not modified

    Raises
    ------
    UnknownStyleError
        If the target style is not registered
    TransformError
        If ``block`` is not a math region

    """
    registry = registry if registry is not None else style_registry
    registry.get(target_style)
    editor = MathEnvironmentEditor(_current_style(block, classifier), target_style, document, block, registry, options)
    return editor.compute_edit()


def convert_math_environment(
    document: TextDocument,
    offset: int,
    target_style: str,
    registry: StyleRegistry | None = None,
    options: MathToggleOptions | None = None,
    classifier: ContextClassifier | None = None,
    parser: Optional[LatexTreeParser] = None,
) -> TextEdit:
    """Convert the outermost math region around ``offset`` to ``target_style``.

    The document is parsed, the region is located and the edit is applied
    while holding the document's write lock.

    Parameters
    ----------
    document : TextDocument
        Document to edit
    offset : int
        Position inside the region; clamped to the document
    target_style : str
        Name of the target style
    registry : StyleRegistry or None, default = None
        Style lookup
    options : MathToggleOptions or None, default = None
        Layout options
    classifier : ContextClassifier or None, default = None
        Classifier used to locate the region
    parser : LatexTreeParser or None, default = None
        Parser for the document snapshot

    Returns
    -------
    TextEdit
        The applied edit

    Raises
    ------
    UnknownStyleError
        If the target style is not registered
    TransformError
        If there is no math region at ``offset``

    """
    from texctx.parsers.latex import LatexTreeParser

    registry = registry if registry is not None else style_registry
    registry.get(target_style)
    classifier = classifier or default_classifier
    parser = parser or LatexTreeParser()

    with document.write_action():
        tree = parser.parse(document.text)
        offset = max(0, min(offset, len(document)))
        region = classifier.find_outer_math_environment(tree.find_leaf_at(offset))
        if region is None:
            raise TransformError(f"No math region at offset {offset}", transform_name=TRANSFORM_NAME)

        editor = MathEnvironmentEditor(
            _current_style(region, classifier), target_style, document, region, registry, options
        )
        edit = editor.apply()

    logger.info(f"Converted math region at offset {region.start} to {target_style}")
    return edit


def available_styles(
    node: TreeNode, registry: StyleRegistry | None = None, classifier: ContextClassifier | None = None
) -> list[str]:
    """List the styles a math region can be converted to.

    Returns
    -------
    list of str
        Registered style names except the current one; empty when ``node``
        is not a math region

    """
    registry = registry if registry is not None else style_registry
    current = (classifier or default_classifier).math_style_of(node)
    if current is None:
        return []
    return [name for name in registry.list_styles() if name != current]


__all__ = [
    "MathEnvironmentEditor",
    "TRANSFORM_NAME",
    "available_styles",
    "convert_math_environment",
    "one_liner",
    "transform",
]
