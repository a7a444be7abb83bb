#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/inspections/test_ellipsis.py
"""Unit tests for the ellipsis inspection and its fixes."""

import pytest

from texctx.document import TextDocument
from texctx.exceptions import StaleEditError
from texctx.inspections.ellipsis import apply_ellipsis_fix, apply_ellipsis_fixes, find_ellipses
from texctx.parsers.latex import LatexTreeParser


def _fix(source: str) -> tuple[str, int]:
    document = TextDocument(source)
    tree = LatexTreeParser().parse(source)
    applied = apply_ellipsis_fixes(document, tree, find_ellipses(tree))
    return document.text, applied


@pytest.mark.unit
class TestFindEllipses:
    """Tests for locating ellipses."""

    def test_text_and_math(self, parse) -> None:
        """Test that the replacement depends on the context."""
        source = "Wait... and $1, 2, ...$"
        problems = find_ellipses(parse(source))

        assert [problem.replacement for problem in problems] == ["\\ldots", "\\dots"]
        assert [problem.requires_package for problem in problems] == [None, "amsmath"]
        assert source[problems[0].start : problems[0].end] == "..."
        assert problems[1].start == source.index("...$")

    def test_comments_are_ignored(self, parse) -> None:
        """Test that ellipses in comments and comment environments are not reported."""
        source = "% later...\n\\begin{comment}\nhidden...\n\\end{comment}\nShown..."

        problems = find_ellipses(parse(source))

        assert len(problems) == 1
        assert problems[0].start == source.index("...", source.index("Shown"))

    def test_longer_runs_are_not_ellipses(self, parse) -> None:
        """Test that four periods are left alone."""
        assert find_ellipses(parse("Hmm.... ok")) == []

    def test_following_letter_gets_braces(self, parse) -> None:
        """Test that a command followed by a letter is terminated with braces."""
        problems = find_ellipses(parse("a...b"))

        assert problems[0].replacement == "\\ldots{}"
        assert problems[0].has_fix


@pytest.mark.unit
class TestApplyEllipsisFixes:
    """Tests for applying ellipsis fixes."""

    def test_text_fix(self) -> None:
        """Test replacing a text ellipsis without touching the preamble."""
        text, applied = _fix("Wait... what")

        assert text == "Wait\\ldots what"
        assert applied == 1

    def test_math_fix_inserts_package(self) -> None:
        """Test that a math fix loads amsmath after the document class."""
        source = "\\documentclass{article}\n\\begin{document}\n$1, ..., n$\n\\end{document}\n"

        text, applied = _fix(source)

        assert text == (
            "\\documentclass{article}\n\\usepackage{amsmath}\n\\begin{document}\n$1, \\dots, n$\n\\end{document}\n"
        )
        assert applied == 2

    def test_math_fix_with_package_loaded(self) -> None:
        """Test that a loaded amsmath is not inserted again."""
        text, applied = _fix("\\usepackage{amsmath}\n$...$")

        assert text == "\\usepackage{amsmath}\n$\\dots$"
        assert applied == 1

    def test_package_inserted_once(self) -> None:
        """Test several math fixes with one package insertion."""
        text, applied = _fix("$a...$ and $b...$")

        assert text == "\\usepackage{amsmath}\n$a\\dots$ and $b\\dots$"
        assert applied == 3

    def test_single_fix(self) -> None:
        """Test applying the fix of one problem."""
        source = "One... two..."
        document = TextDocument(source)
        tree = LatexTreeParser().parse(source)
        problems = find_ellipses(tree)

        apply_ellipsis_fix(document, tree, problems[1])

        assert document.text == "One... two\\ldots"

    def test_stale_document(self) -> None:
        """Test that fixes over changed text are refused."""
        document = TextDocument("a...b")
        tree = LatexTreeParser().parse(document.text)
        problems = find_ellipses(tree)
        document.replace_range(0, 5, "xyz")

        with pytest.raises(StaleEditError):
            apply_ellipsis_fixes(document, tree, problems)

        assert document.text == "xyz"
