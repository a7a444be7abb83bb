#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/transforms/__init__.py
"""Text transforms over LaTeX documents.

Examples
--------
Convert the math region around an offset to another style:

    >>> from texctx.document import TextDocument
    >>> from texctx.transforms import convert_math_environment
    >>> doc = TextDocument("\\[\n    x^2\n\\]\n")
    >>> _ = convert_math_environment(doc, 5, "inline")

"""

from texctx.transforms.math_toggle import (
    TRANSFORM_NAME,
    MathEnvironmentEditor,
    available_styles,
    convert_math_environment,
    one_liner,
    transform,
)

__all__ = [
    "MathEnvironmentEditor",
    "TRANSFORM_NAME",
    "available_styles",
    "convert_math_environment",
    "one_liner",
    "transform",
]
