#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/options/editing.py
"""Configuration options for math environment conversion."""

from __future__ import annotations

from dataclasses import dataclass, field

from texctx.constants import DEFAULT_INDENT_UNIT, DEFAULT_ONE_LINE_STRIP_ALIGNMENT
from texctx.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class MathToggleOptions(CloneFrozenMixin):
    r"""Configuration options for converting between math styles.

    Parameters
    ----------
    indent_unit : str, default four spaces
        Extra indentation of the body below a display or named begin token.
        Also stripped from the old body when leaving such a style.
    one_line_strip_alignment : bool, default True
        Whether collapsing a body onto one line turns top-level row
        separators (``\\``) and alignment tabs (``&``) into spaces.

    """

    indent_unit: str = field(
        default=DEFAULT_INDENT_UNIT,
        metadata={"help": "Indentation added to the body of multi-line styles", "type": str, "importance": "core"},
    )
    one_line_strip_alignment: bool = field(
        default=DEFAULT_ONE_LINE_STRIP_ALIGNMENT,
        metadata={
            "help": "Drop top-level \\\\ and & when collapsing a body onto one line",
            "cli_name": "no-one-line-strip-alignment",
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate the indentation unit.

        Raises
        ------
        ValueError
            If indent_unit contains anything other than spaces and tabs.

        """
        if self.indent_unit.strip(" \t"):
            raise ValueError(f"indent_unit must contain only spaces and tabs, got {self.indent_unit!r}")
