"""Pytest configuration and shared fixtures for the texctx test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os
from pathlib import Path
from typing import Callable

import pytest
from hypothesis import Phase, Verbosity, settings

from texctx.parsers.latex import LatexTreeParser
from texctx.tree.nodes import SyntaxTree

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def parser() -> LatexTreeParser:
    """Provide a LaTeX parser with default options."""
    return LatexTreeParser()


@pytest.fixture
def parse(parser: LatexTreeParser) -> Callable[[str], SyntaxTree]:
    """Provide a parse function."""
    return parser.parse


@pytest.fixture
def tex_file(tmp_path: Path) -> Callable[[str], Path]:
    """Provide a factory writing LaTeX source to a temporary file."""

    def _write(content: str, name: str = "doc.tex") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
