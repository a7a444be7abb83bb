#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/editing/test_styles.py
"""Unit tests for the math style registry."""

import pytest

from texctx.exceptions import UnknownStyleError, ValidationError
from texctx.styles import MathStyle, StyleRegistry, default_styles, style_registry


@pytest.mark.unit
class TestMathStyle:
    """Tests for MathStyle rendering."""

    def test_named_style_templates(self) -> None:
        """Test begin and end rendering of an environment style."""
        style = StyleRegistry.named("align")

        assert style.render_begin("  ", "    ") == "\\begin{align}\n      "
        assert style.render_end("  ", "    ") == "\n  \\end{align}"

    def test_tokens(self) -> None:
        """Test delimiters without layout."""
        registry = StyleRegistry()

        assert registry.get("inline").opening_token == "$"
        assert registry.get("display").opening_token == "\\["
        assert registry.get("display").closing_token == "\\]"
        assert registry.get("gather*").opening_token == "\\begin{gather*}"
        assert registry.get("gather*").closing_token == "\\end{gather*}"

    def test_inline_style_has_no_layout(self) -> None:
        """Test that inline delimiters ignore indentation."""
        inline = StyleRegistry().get("inline")

        assert inline.is_inline
        assert inline.render_begin("    ") == "$"
        assert inline.render_end("    ") == "$"


@pytest.mark.unit
class TestStyleRegistry:
    """Tests for StyleRegistry lookups and registration."""

    def test_default_styles(self) -> None:
        """Test the built-in style set."""
        registry = StyleRegistry()
        names = registry.list_styles()

        assert names[:2] == ["inline", "display"]
        assert {"equation", "equation*", "align", "align*", "gather", "multline*"} <= set(names)
        assert len(registry) == len(default_styles())

    @pytest.mark.parametrize(
        "name,one_line",
        [("inline", True), ("display", True), ("equation", True), ("equation*", True), ("align", False)],
    )
    def test_one_line_preferences(self, name: str, one_line: bool) -> None:
        """Test which styles collapse their body."""
        assert StyleRegistry().get(name).one_line_preferred is one_line

    def test_unknown_style(self) -> None:
        """Test that unknown names raise with the available names."""
        registry = StyleRegistry()

        with pytest.raises(UnknownStyleError) as exc_info:
            registry.get("nonexistent")

        assert isinstance(exc_info.value, ValidationError)
        assert exc_info.value.style_name == "nonexistent"
        assert "inline" in exc_info.value.available
        assert "nonexistent" in str(exc_info.value)

    def test_register_and_unregister(self) -> None:
        """Test adding and removing a custom style."""
        registry = StyleRegistry()
        custom = MathStyle(name="dmath", one_line_preferred=False)

        registry.register(custom)
        assert registry.has_style("dmath")
        assert registry.get("dmath") is custom

        assert registry.unregister("dmath")
        assert not registry.has_style("dmath")
        assert not registry.unregister("dmath")

    def test_register_overwrites(self, caplog) -> None:
        """Test that re-registering a name replaces the entry with a warning."""
        registry = StyleRegistry()
        replacement = MathStyle(name="equation", one_line_preferred=False)

        registry.register(replacement)

        assert registry.get("equation") is replacement
        assert "already registered" in caplog.text

    def test_empty_registry(self) -> None:
        """Test a registry created without styles."""
        registry = StyleRegistry([])

        assert len(registry) == 0
        assert list(registry) == []

    def test_global_registry(self) -> None:
        """Test that the module registry carries the defaults."""
        assert style_registry.has_style("inline")
        assert style_registry.has_style("equation")
