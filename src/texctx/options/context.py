#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/options/context.py
"""Configuration options for context classification."""

from __future__ import annotations

from dataclasses import dataclass, field

from texctx.constants import DEFAULT_MAX_HOPS
from texctx.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class ContextOptions(CloneFrozenMixin):
    """Configuration options for the context classifier and outer-math locator.

    Parameters
    ----------
    max_hops : int, default 1000
        Upper bound on parent links followed by ancestor searches. A search
        that runs out of hops reports "not found".
    extra_math_environments : tuple of str, default ()
        Environment names declared as math context in addition to the
        environment registry (e.g. custom ``\\newenvironment`` math blocks).
    extra_comment_environments : tuple of str, default ()
        Environment names declared as comment context in addition to the
        environment registry.

    """

    max_hops: int = field(
        default=DEFAULT_MAX_HOPS,
        metadata={"help": "Maximum parent hops for ancestor searches", "type": int, "importance": "advanced"},
    )
    extra_math_environments: tuple[str, ...] = field(
        default=(),
        metadata={"help": "Additional environments treated as math context", "importance": "core"},
    )
    extra_comment_environments: tuple[str, ...] = field(
        default=(),
        metadata={"help": "Additional environments treated as comment context", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If max_hops is not positive.

        """
        if self.max_hops <= 0:
            raise ValueError(f"max_hops must be positive, got {self.max_hops}")
        object.__setattr__(self, "extra_math_environments", tuple(self.extra_math_environments))
        object.__setattr__(self, "extra_comment_environments", tuple(self.extra_comment_environments))
