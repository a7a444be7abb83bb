#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/editing/test_math_toggle.py
"""Unit tests for math style conversion.

Tests cover:
- Conversions to and from inline math with indentation handling
- Conversions between named environments and display math
- One-line collapsing of bodies
- Rejection of unknown styles and stale edits without touching the document

"""

from unittest.mock import patch

import pytest
from hypothesis import given
from hypothesis import strategies as st
from utils import leaf_at, offset_of

from texctx.context import find_outer_math_environment
from texctx.document import TextDocument
from texctx.exceptions import StaleEditError, TransformError, UnknownStyleError
from texctx.options import MathToggleOptions
from texctx.parsers.latex import LatexTreeParser
from texctx.styles import MathStyle, StyleRegistry
from texctx.transforms import MathEnvironmentEditor, available_styles, convert_math_environment, transform


def _convert(source: str, needle: str, style: str, **kwargs) -> str:
    doc = TextDocument(source)
    convert_math_environment(doc, offset_of(source, needle), style, **kwargs)
    return doc.text


@pytest.mark.unit
class TestToInline:
    """Tests for conversions into inline math."""

    def test_display_to_inline(self) -> None:
        """Test pulling a display block into the preceding line."""
        source = "Text\n\\[\n    x^2 + y^2 = z^2\n\\]\nmore\n"

        assert _convert(source, "x^2", "inline") == "Text $x^2 + y^2 = z^2$\nmore\n"

    def test_indented_display_to_inline(self) -> None:
        """Test that an equally indented next line loses the indentation width after the block."""
        source = "  Text\n  \\[\n      x^2\n  \\]\n  more\n"

        assert _convert(source, "x^2", "inline") == "  Text $x^2$ more\n"

    def test_less_indented_next_line_is_kept(self) -> None:
        """Test that the line break is kept when the next line is indented less."""
        source = "  Text\n  \\[\n      x\n  \\]\nmore\n"

        assert _convert(source, "x\n", "inline") == "  Text $x$\nmore\n"

    def test_equation_to_inline(self) -> None:
        """Test converting an environment with a multi-line body."""
        source = "Let\n\\begin{equation}\n    a\n    + b\n\\end{equation}\nbe.\n"

        assert _convert(source, "+ b", "inline") == "Let $a + b$\nbe.\n"

    def test_unregistered_math_environment(self) -> None:
        """Test that a math environment without a registered style converts as a named style."""
        source = "See\n\\begin{dmath}\n    x\n\\end{dmath}"

        assert _convert(source, "x", "inline") == "See $x$"

    def test_block_at_document_start(self) -> None:
        """Test that no space is inserted before a region at the start of the document."""
        source = "\\[\n    x\n\\]\nmore\n"

        assert _convert(source, "x", "inline") == "$x$\nmore\n"


@pytest.mark.unit
class TestFromInline:
    """Tests for conversions out of inline math."""

    def test_inline_to_equation(self) -> None:
        """Test pushing inline math onto its own lines."""
        source = "Let $a+b$ be.\n"

        assert _convert(source, "a+b", "equation") == "Let\n\\begin{equation}\n    a+b\n\\end{equation}\nbe.\n"

    def test_inline_to_equation_keeps_line_indentation(self) -> None:
        """Test delimiters at the line indentation and the body one unit deeper."""
        source = "  Let $a+b$\n  next\n"

        assert _convert(source, "a+b", "equation") == "  Let\n  \\begin{equation}\n      a+b\n  \\end{equation}\n  next\n"

    def test_inline_to_display(self) -> None:
        """Test converting to display math."""
        source = "Let $x$ be.\n"

        assert _convert(source, "x$", "display") == "Let\n\\[\n    x\n\\]\nbe.\n"

    def test_inline_at_document_start(self) -> None:
        """Test that no line break is inserted before a region at the start of the document."""
        source = "$x$ at start"

        assert _convert(source, "x", "display") == "\\[\n    x\n\\]\nat start"

    def test_custom_indent_unit(self) -> None:
        """Test laying out the body with a configured indentation unit."""
        source = "Let $x$\n"

        result = _convert(source, "x$", "align", options=MathToggleOptions(indent_unit="\t"))

        assert result == "Let\n\\begin{align}\n\tx\n\\end{align}\n"

    def test_round_trip(self) -> None:
        """Test that equation to inline and back restores the text."""
        source = "Let\n\\begin{equation}\n    a+b\n\\end{equation}\nbe.\n"

        inline = _convert(source, "a+b", "inline")
        assert inline == "Let $a+b$\nbe.\n"
        assert _convert(inline, "a+b", "equation") == source

    @given(st.text(alphabet="abcxyz+=", min_size=1, max_size=20))
    def test_round_trip_property(self, body: str) -> None:
        """Test that inline to equation and back is lossless for simple bodies."""
        source = f"Let ${body}$\nbe.\n"
        doc = TextDocument(source)

        convert_math_environment(doc, 5, "equation")
        assert doc.text == f"Let\n\\begin{{equation}}\n    {body}\n\\end{{equation}}\nbe.\n"

        convert_math_environment(doc, doc.text.index("\n    ") + 5, "inline")
        assert doc.text == source


@pytest.mark.unit
class TestBetweenBlocks:
    """Tests for conversions between block styles."""

    def test_equation_to_align(self) -> None:
        """Test replacing the environment name only."""
        source = "\\begin{equation}\n    a = b\n\\end{equation}"

        assert _convert(source, "a = b", "align*") == "\\begin{align*}\n    a = b\n\\end{align*}"

    def test_align_to_equation_collapses_body(self) -> None:
        """Test that one-line styles drop row separators and alignment tabs."""
        source = "\\begin{align}\n    a &= b \\\\\n    c &= d\n\\end{align}"

        assert _convert(source, "c &", "equation") == "\\begin{equation}\n    a = b c = d\n\\end{equation}"

    def test_display_to_align_keeps_lines(self) -> None:
        """Test that multi-line bodies are re-indented under the new delimiters."""
        source = "\\[\n    a \\\\\n    b\n\\]"

        assert _convert(source, "a", "align") == "\\begin{align}\n    a \\\\\n    b\n\\end{align}"

    def test_keep_alignment_option(self) -> None:
        """Test collapsing without stripping alignment characters."""
        source = "\\begin{align}\n    a &= b\n\\end{align}"
        options = MathToggleOptions(one_line_strip_alignment=False)

        assert _convert(source, "a &", "equation*", options=options) == (
            "\\begin{equation*}\n    a &= b\n\\end{equation*}"
        )

    def test_outermost_region_is_converted(self) -> None:
        """Test that an inline region inside a text box inside an equation converts the equation."""
        source = "\\begin{equation}\n    a + \\mbox{if $b$}\n\\end{equation}"

        result = _convert(source, "b$", "equation*")

        assert result.startswith("\\begin{equation*}")
        assert result.endswith("\\end{equation*}")

    def test_custom_style(self) -> None:
        """Test converting to a style from a custom registry."""
        registry = StyleRegistry()
        registry.register(MathStyle(name="paren", begin_template="\\(", end_template="\\)", is_inline=True))
        source = "Let\n\\[\n    x\n\\]\n"

        assert _convert(source, "x", "paren", registry=registry) == "Let \\(x\\)\n"


@pytest.mark.unit
class TestRejection:
    """Tests for conversions that must not modify the document."""

    def test_unknown_style_does_not_write(self) -> None:
        """Test that an unknown target style is rejected before any write."""
        doc = TextDocument("Let $x$ be.")

        with patch.object(doc, "replace_range") as replace_range:
            with pytest.raises(UnknownStyleError):
                convert_math_environment(doc, 5, "nonexistent")

        assert replace_range.call_count == 0
        assert doc.text == "Let $x$ be."
        assert doc.version == 0

    def test_unknown_style_rejected_by_editor(self) -> None:
        """Test that the editor refuses unknown styles on construction."""
        doc = TextDocument("$x$")
        tree = LatexTreeParser().parse(doc.text)
        region = find_outer_math_environment(leaf_at(tree, "x"))

        with pytest.raises(UnknownStyleError):
            MathEnvironmentEditor("inline", "nonexistent", doc, region)

    def test_no_math_region(self) -> None:
        """Test that a position outside math is rejected."""
        doc = TextDocument("plain text")

        with pytest.raises(TransformError) as exc_info:
            convert_math_environment(doc, 2, "inline")

        assert not isinstance(exc_info.value, StaleEditError)
        assert doc.text == "plain text"

    def test_region_changed_before_apply(self) -> None:
        """Test that an editor over a changed region fails without writing."""
        doc = TextDocument("Let $a$ be.")
        tree = LatexTreeParser().parse(doc.text)
        region = find_outer_math_environment(leaf_at(tree, "a$"))
        doc.replace_range(5, 6, "bb")

        editor = MathEnvironmentEditor("inline", "equation", doc, region)
        with pytest.raises(StaleEditError):
            editor.apply()

        assert doc.text == "Let $bb$ be."

    def test_edit_outdated_by_concurrent_write(self) -> None:
        """Test that a computed edit is refused after the document changed."""
        doc = TextDocument("Let $a$ be.")
        tree = LatexTreeParser().parse(doc.text)
        region = find_outer_math_environment(leaf_at(tree, "a$"))
        edit = transform(region, "equation", doc)
        doc.replace_range(0, 0, "% header\n")

        with pytest.raises(StaleEditError):
            doc.apply_edit(edit)

        assert doc.text == "% header\nLet $a$ be."

    def test_transform_requires_math_region(self) -> None:
        """Test that transform rejects nodes that are not math regions."""
        doc = TextDocument("plain")
        tree = LatexTreeParser().parse(doc.text)

        with pytest.raises(TransformError):
            transform(tree.root, "inline", doc)


@pytest.mark.unit
class TestAvailableStyles:
    """Tests for listing conversion targets."""

    def test_excludes_current_style(self) -> None:
        """Test that the current style is not offered."""
        tree = LatexTreeParser().parse("$x$")
        region = find_outer_math_environment(leaf_at(tree, "x"))

        styles = available_styles(region)

        assert "inline" not in styles
        assert "display" in styles
        assert "equation" in styles

    def test_not_a_region(self) -> None:
        """Test that non-math nodes have no targets."""
        tree = LatexTreeParser().parse("plain")

        assert available_styles(tree.root) == []
