"""texctx - context classification and math editing for LaTeX source.

texctx parses LaTeX into a position-preserving syntax tree and answers the
questions an editor asks about a cursor position: is it in normal text, in
math or in a comment, which environment directly encloses it, and which is
the outermost math region around it. On top of that it converts a math
region between delimiter styles (``$...$``, ``\\[...\\]``, ``equation``,
``align``, ...) as a single text edit, and runs small inspections such as
the ellipsis check.

Key Features
------------
- Lossless syntax tree over LaTeX source using pylatexenc
- Context classification with a configurable environment registry
- Math style conversion with indentation and one-line layout rules
- Stale-edit detection for edits computed against an older document
- Inspections for ellipses, missing labels and embedded languages

Requirements
------------
- Python 3.10+

Examples
--------
Classify a position:

    >>> from texctx import LatexTreeParser, context_at
    >>> tree = LatexTreeParser().parse("Let $x$ be % note")
    >>> context_at(tree, 5).value
    'math'

Convert inline math to an equation:

    >>> from texctx import TextDocument, convert_math_environment
    >>> doc = TextDocument("Let $x$ be.")
    >>> _ = convert_math_environment(doc, 5, "equation")

"""

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "texctx requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from texctx.context import (
    ContextClassifier,
    classify,
    context_at,
    default_classifier,
    direct_environment,
    find_outer_math_environment,
    in_direct_environment,
    in_direct_environment_context,
    in_direct_environment_matching,
    in_math_context,
    is_comment,
    math_style_of,
)
from texctx.document import TextDocument, TextEdit
from texctx.environments import Context, EnvironmentRegistry, environment_registry
from texctx.exceptions import (
    ParsingError,
    StaleEditError,
    TexCtxError,
    TransformError,
    UnknownStyleError,
    ValidationError,
)
from texctx.inspections import Problem, find_ellipses, find_injections, find_missing_labels, run_inspections
from texctx.options import ContextOptions, InspectionOptions, LatexOptions, MathToggleOptions
from texctx.parsers.latex import LatexTreeParser
from texctx.styles import MathStyle, StyleRegistry, style_registry
from texctx.transforms import MathEnvironmentEditor, available_styles, convert_math_environment, transform
from texctx.tree import NodeKind, SyntaxTree, TreeNode

__all__ = [
    "__version__",
    # Context
    "Context",
    "ContextClassifier",
    "EnvironmentRegistry",
    "classify",
    "context_at",
    "default_classifier",
    "direct_environment",
    "environment_registry",
    "find_outer_math_environment",
    "in_direct_environment",
    "in_direct_environment_context",
    "in_direct_environment_matching",
    "in_math_context",
    "is_comment",
    "math_style_of",
    # Tree and parsing
    "LatexTreeParser",
    "NodeKind",
    "SyntaxTree",
    "TreeNode",
    # Editing
    "MathEnvironmentEditor",
    "MathStyle",
    "StyleRegistry",
    "TextDocument",
    "TextEdit",
    "available_styles",
    "convert_math_environment",
    "style_registry",
    "transform",
    # Inspections
    "Problem",
    "find_ellipses",
    "find_injections",
    "find_missing_labels",
    "run_inspections",
    # Options
    "ContextOptions",
    "InspectionOptions",
    "LatexOptions",
    "MathToggleOptions",
    # Exceptions
    "ParsingError",
    "StaleEditError",
    "TexCtxError",
    "TransformError",
    "UnknownStyleError",
    "ValidationError",
]
