#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/options/base.py
"""Base classes for texctx options.

This module defines the foundation shared by every options dataclass and the
helper that turns a loaded configuration mapping into an options instance.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, TypeVar

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from texctx.exceptions import ValidationError

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", bound="CloneFrozenMixin")


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


def options_from_mapping(options_class: type[OptionsT], mapping: Mapping[str, Any] | None) -> OptionsT:
    """Build an options instance from a configuration mapping.

    Keys may use hyphens or underscores. Unknown keys are logged and ignored
    so that one config file can carry sections for several option classes.
    Sequence values are converted to tuples to keep the instance hashable.

    Parameters
    ----------
    options_class : type
        Frozen options dataclass to instantiate
    mapping : Mapping or None
        Configuration values; None yields the defaults

    Returns
    -------
    options_class
        The populated options instance

    Raises
    ------
    ValidationError
        If a value is rejected by the options class

    Examples
    --------
    >>> options_from_mapping(ContextOptions, {"max-hops": 50}).max_hops
    50

    """
    if not mapping:
        return options_class()

    known = {f.name for f in fields(options_class)}
    values: dict[str, Any] = {}
    for raw_key, value in mapping.items():
        key = str(raw_key).replace("-", "_")
        if key not in known:
            logger.warning(f"Ignoring unknown {options_class.__name__} option: {raw_key}")
            continue
        values[key] = tuple(value) if isinstance(value, list) else value

    try:
        return options_class(**values)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid {options_class.__name__} configuration: {e}", original_error=e) from e
