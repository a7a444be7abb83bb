#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the texctx library.

This module centralizes the hardcoded values, magic numbers and default
configuration constants used across texctx. Constants are organized by category:

1. Type Definitions - Literal types and type aliases
2. Tree Navigation - traversal safety limits
3. Environments - environment names grouped by declared context
4. Math Styles - delimiter styles and layout defaults
5. Inspections - ellipsis, label and language injection tables
6. Configuration Files - config discovery names
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

SectioningLevel = Literal["part", "chapter", "section", "subsection", "subsubsection", "paragraph", "subparagraph"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# =============================================================================
# Tree Navigation
# =============================================================================

# Upper bound on parent hops for ancestor searches. Exceeding it counts as "not found".
DEFAULT_MAX_HOPS = 1000

# =============================================================================
# Environments
# =============================================================================

MATH_ENVIRONMENTS: frozenset[str] = frozenset(
    {
        "alignat",
        "alignat*",
        "align",
        "align*",
        "aligned",
        "alignedat",
        "cases",
        "displaymath",
        "dmath",
        "dmath*",
        "eqnarray",
        "eqnarray*",
        "equation",
        "equation*",
        "flalign",
        "flalign*",
        "gather",
        "gather*",
        "gathered",
        "math",
        "multline",
        "multline*",
        "split",
        "subequations",
    }
)

COMMENT_ENVIRONMENTS: frozenset[str] = frozenset({"comment"})

# =============================================================================
# Math Styles
# =============================================================================

INLINE_STYLE = "inline"
DISPLAY_STYLE = "display"

# Styles whose body is collapsed onto a single line when converting to them.
DEFAULT_ONE_LINE_STYLES: frozenset[str] = frozenset({INLINE_STYLE, DISPLAY_STYLE, "equation", "equation*"})

# Named styles registered by default next to inline and display.
DEFAULT_NAMED_STYLES: tuple[str, ...] = (
    "equation",
    "equation*",
    "align",
    "align*",
    "gather",
    "gather*",
    "multline",
    "multline*",
    "flalign",
    "flalign*",
    "eqnarray",
    "eqnarray*",
)

DEFAULT_INDENT_UNIT = "    "
DEFAULT_ONE_LINE_STRIP_ALIGNMENT = True

# =============================================================================
# Parser
# =============================================================================

DEFAULT_LATEX_STRICT_MODE = False
DEFAULT_LATEX_SPLIT_WHITESPACE = True

# =============================================================================
# Inspections
# =============================================================================

ELLIPSIS_PATTERN = re.compile(r"(?<!\.)\.\.\.(?!\.)")
ELLIPSIS_MATH_COMMAND = r"\dots"
ELLIPSIS_TEXT_COMMAND = r"\ldots"
ELLIPSIS_MATH_PACKAGE = "amsmath"

# Lower numbers are higher in the document hierarchy.
SECTIONING_LEVELS: dict[str, int] = {
    "part": -1,
    "chapter": 0,
    "section": 1,
    "subsection": 2,
    "subsubsection": 3,
    "paragraph": 4,
    "subparagraph": 5,
}

DEFAULT_MISSING_LABEL_MINIMUM_LEVEL: SectioningLevel = "subsection"

DEFAULT_LABELED_ENVIRONMENTS: tuple[str, ...] = (
    "figure",
    "table",
    "equation",
    "align",
    "gather",
    "multline",
    "flalign",
    "eqnarray",
    "lstlisting",
    "algorithm",
)

# Commands that carry their label as a parameter rather than a following \label.
LABEL_AS_PARAMETER_COMMANDS: frozenset[str] = frozenset({"lstinputlisting"})

MAGIC_COMMENT_LANGUAGE_PATTERN = re.compile(r"^%!\s*language\s*=\s*(?P<language>[\w+#.-]+)", re.IGNORECASE)

ENVIRONMENT_LANGUAGE_INJECTIONS: dict[str, str] = {
    "luacode": "lua",
    "luacode*": "lua",
    "pycode": "python",
    "pyblock": "python",
    "sagesilent": "python",
    "sageblock": "python",
}

COMMAND_LANGUAGE_INJECTIONS: dict[str, str] = {
    "directlua": "lua",
    "luaexec": "lua",
    "pyc": "python",
}

# =============================================================================
# Configuration Files
# =============================================================================

CONFIG_FILENAMES: tuple[str, ...] = (".texctx.toml", ".texctx.yaml", ".texctx.yml", ".texctx.json")
CONFIG_ENV_VAR = "TEXCTX_CONFIG"
PYPROJECT_TOOL_SECTION = "texctx"
