#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/options/inspections.py
"""Configuration options for document inspections."""

from __future__ import annotations

from dataclasses import dataclass, field

from texctx.constants import (
    DEFAULT_LABELED_ENVIRONMENTS,
    DEFAULT_MISSING_LABEL_MINIMUM_LEVEL,
    SECTIONING_LEVELS,
    SectioningLevel,
)
from texctx.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class InspectionOptions(CloneFrozenMixin):
    """Configuration options for the ellipsis and missing-label inspections.

    Parameters
    ----------
    missing_label_minimum_level : str, default "subsection"
        Lowest sectioning level that still requires a label. ``"section"``
        means parts, chapters and sections need labels, subsections do not.
    labeled_environments : tuple of str
        Environments that should carry a ``\\label``.

    """

    missing_label_minimum_level: SectioningLevel = field(
        default=DEFAULT_MISSING_LABEL_MINIMUM_LEVEL,
        metadata={
            "help": "Lowest sectioning level that requires a label",
            "choices": list(SECTIONING_LEVELS),
            "importance": "core",
        },
    )
    labeled_environments: tuple[str, ...] = field(
        default=DEFAULT_LABELED_ENVIRONMENTS,
        metadata={"help": "Environments that should carry a label", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate the sectioning level.

        Raises
        ------
        ValueError
            If missing_label_minimum_level is not a known sectioning command.

        """
        if self.missing_label_minimum_level not in SECTIONING_LEVELS:
            raise ValueError(
                f"missing_label_minimum_level must be one of {', '.join(SECTIONING_LEVELS)}, "
                f"got {self.missing_label_minimum_level!r}"
            )
        object.__setattr__(self, "labeled_environments", tuple(self.labeled_environments))
