#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/editing/test_one_liner.py
"""Unit tests for collapsing math bodies onto one line."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from texctx.transforms import one_liner


@pytest.mark.unit
class TestOneLiner:
    """Tests for one_liner."""

    def test_rows_and_tabs(self) -> None:
        """Test that row separators and alignment tabs become spaces."""
        assert one_liner("a &= b \\\\\n  c &= d % note\n") == "a = b c = d"

    def test_comments_dropped(self) -> None:
        """Test that comments are removed up to the end of their line."""
        assert one_liner("a % comment\nb") == "a b"

    def test_escaped_characters_kept(self) -> None:
        """Test that escaped percent and ampersand signs survive."""
        assert one_liner("a \\% b \\& c") == "a \\% b \\& c"

    def test_row_separator_arguments(self) -> None:
        """Test that starred separators with spacing arguments are removed."""
        assert one_liner("a \\\\*[2pt] b") == "a b"

    def test_nested_environments_untouched(self) -> None:
        """Test that separators inside nested environments are kept."""
        body = "f = \\begin{cases} a & b \\\\ c & d \\end{cases} & e"

        assert one_liner(body) == "f = \\begin{cases} a & b \\\\ c & d \\end{cases} e"

    def test_keep_alignment(self) -> None:
        """Test collapsing whitespace only."""
        assert one_liner("a & b \\\\\n c", strip_alignment=False) == "a & b \\\\ c"

    def test_empty(self) -> None:
        """Test an empty body."""
        assert one_liner("  \n ") == ""

    @given(st.text(alphabet="ab &\\%{}\n\t", max_size=40))
    def test_always_single_line(self, body: str) -> None:
        """Test that the result never spans lines or carries outer whitespace."""
        result = one_liner(body)

        assert "\n" not in result
        assert result == result.strip()
        assert "  " not in result
