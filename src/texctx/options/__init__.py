#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for texctx.

Every options class is a frozen dataclass whose fields carry ``help`` and
``importance`` metadata. Defaults live in :mod:`texctx.constants`.
"""

from texctx.options.base import CloneFrozenMixin, options_from_mapping
from texctx.options.context import ContextOptions
from texctx.options.editing import MathToggleOptions
from texctx.options.inspections import InspectionOptions
from texctx.options.latex import LatexOptions

__all__ = [
    "CloneFrozenMixin",
    "ContextOptions",
    "InspectionOptions",
    "LatexOptions",
    "MathToggleOptions",
    "options_from_mapping",
]
