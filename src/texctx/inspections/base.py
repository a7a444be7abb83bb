#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/inspections/base.py
"""Problem type shared by all inspections."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from texctx.tree.nodes import TreeNode


@dataclass(frozen=True)
class Problem:
    """A finding reported by an inspection.

    Parameters
    ----------
    inspection_id : str
        Identifier of the reporting inspection
    message : str
        Human-readable description
    start : int
        Start offset of the offending text
    end : int
        End offset (exclusive) of the offending text
    replacement : str or None, default = None
        Text that fixes the problem when substituted for ``[start, end)``
    requires_package : str or None, default = None
        Package the replacement depends on
    node : TreeNode or None, default = None
        Tree node the problem was found on

    """

    inspection_id: str
    message: str
    start: int
    end: int
    replacement: Optional[str] = None
    requires_package: Optional[str] = None
    node: Optional[TreeNode] = field(default=None, compare=False, repr=False)

    @property
    def has_fix(self) -> bool:
        """Whether the problem carries a replacement."""
        return self.replacement is not None


__all__ = ["Problem"]
