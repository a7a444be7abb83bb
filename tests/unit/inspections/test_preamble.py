#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/inspections/test_preamble.py
"""Unit tests for preamble queries and inspection dispatch."""

import pytest

from texctx.document import TextDocument
from texctx.exceptions import ValidationError
from texctx.inspections import run_inspections
from texctx.inspections.preamble import document_class, included_packages, insert_usepackage


@pytest.mark.unit
class TestPreamble:
    """Tests for document class and package queries."""

    def test_document_class(self, parse) -> None:
        """Test reading the document class."""
        assert document_class(parse("\\documentclass[11pt]{report}\n")) == "report"
        assert document_class(parse("no class")) is None

    def test_included_packages(self, parse) -> None:
        """Test collecting packages from both package commands."""
        tree = parse("\\usepackage{amsmath, amssymb}\n\\RequirePackage{xcolor}\n% \\usepackage{tikz}\n")

        assert included_packages(tree) == ["amsmath", "amssymb", "xcolor"]

    def test_insert_after_last_package(self, parser) -> None:
        """Test inserting a package after the existing ones."""
        source = "\\documentclass{article}\n\\usepackage{graphicx}\n\\begin{document}"
        document = TextDocument(source)

        offset = insert_usepackage(document, parser.parse(source), "amsmath")

        assert offset == source.index("\n\\begin")
        assert document.text == (
            "\\documentclass{article}\n\\usepackage{graphicx}\n\\usepackage{amsmath}\n\\begin{document}"
        )

    def test_insert_without_preamble(self, parser) -> None:
        """Test inserting at the start of a bare document."""
        document = TextDocument("Hello")

        assert insert_usepackage(document, parser.parse("Hello"), "amsmath") == 0
        assert document.text == "\\usepackage{amsmath}\nHello"


@pytest.mark.unit
class TestRunInspections:
    """Tests for running inspections by name."""

    def test_all_inspections_sorted(self, parse) -> None:
        """Test that problems from all inspections come sorted by offset."""
        problems = run_inspections(parse("\\section{Intro} Wait..."))

        assert [problem.inspection_id for problem in problems] == ["missing-label", "ellipsis"]

    def test_selected_inspection(self, parse) -> None:
        """Test running a single inspection."""
        problems = run_inspections(parse("\\section{Intro} Wait..."), ["ellipsis"])

        assert [problem.inspection_id for problem in problems] == ["ellipsis"]

    def test_unknown_inspection(self, parse) -> None:
        """Test that unknown names are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            run_inspections(parse("x"), ["spelling"])

        assert "spelling" in str(exc_info.value)
