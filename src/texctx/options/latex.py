#  Copyright (c) 2025 Tom Villani, Ph.D.

# texctx/options/latex.py
"""Configuration options for LaTeX parsing.

This module defines options for turning LaTeX source into a syntax tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from texctx.constants import DEFAULT_LATEX_SPLIT_WHITESPACE, DEFAULT_LATEX_STRICT_MODE
from texctx.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class LatexOptions(CloneFrozenMixin):
    r"""Configuration options for LaTeX-to-tree parsing.

    Parameters
    ----------
    strict_mode : bool, default False
        Whether to raise ParsingError when pylatexenc fails.
        When False, the document falls back to a single text leaf.
    split_whitespace : bool, default True
        Whether leading and trailing whitespace of character runs becomes
        separate WHITESPACE leaves, so sibling searches can skip it.

    """

    strict_mode: bool = field(
        default=DEFAULT_LATEX_STRICT_MODE,
        metadata={"help": "Raise errors on invalid LaTeX syntax", "importance": "advanced"},
    )
    split_whitespace: bool = field(
        default=DEFAULT_LATEX_SPLIT_WHITESPACE,
        metadata={
            "help": "Split surrounding whitespace of text runs into whitespace leaves",
            "cli_name": "no-split-whitespace",
            "importance": "advanced",
        },
    )
