#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/environments.py
"""Context kinds and the environment registry.

Every environment name maps to the context its content lives in. Math
environments (``equation``, ``align``, ...) put their content in math
context, the ``comment`` environment puts it in comment context and any
unregistered environment is normal text.

Examples
--------
    >>> from texctx.environments import Context, environment_registry
    >>> environment_registry.context_of("align*")
    <Context.MATH: 'math'>
    >>> environment_registry.register("mymath", Context.MATH)

"""

from __future__ import annotations

import logging
from enum import Enum

from texctx.constants import COMMENT_ENVIRONMENTS, MATH_ENVIRONMENTS

logger = logging.getLogger(__name__)


class Context(str, Enum):
    """Semantic context of a position in a document."""

    NORMAL = "normal"
    MATH = "math"
    COMMENT = "comment"


class EnvironmentRegistry:
    """Mapping from environment names to their declared context.

    Parameters
    ----------
    contexts : dict of str to Context, optional
        Initial declarations. Defaults to the built-in math and comment
        environments.

    """

    def __init__(self, contexts: dict[str, Context] | None = None):
        """Initialize the registry with the given or default declarations."""
        if contexts is None:
            contexts = {name: Context.MATH for name in MATH_ENVIRONMENTS}
            contexts.update({name: Context.COMMENT for name in COMMENT_ENVIRONMENTS})
        self._contexts: dict[str, Context] = dict(contexts)

    def register(self, name: str, context: Context) -> None:
        """Declare the context of an environment, replacing any previous declaration."""
        previous = self._contexts.get(name)
        if previous is not None and previous is not context:
            logger.debug(f"Environment '{name}' redeclared from {previous.value} to {context.value}")
        self._contexts[name] = context

    def unregister(self, name: str) -> None:
        """Remove a declaration; the environment becomes normal text."""
        self._contexts.pop(name, None)

    def context_of(self, name: str | None) -> Context:
        """Return the declared context of ``name`` (NORMAL when unknown)."""
        if name is None:
            return Context.NORMAL
        return self._contexts.get(name, Context.NORMAL)

    def names_with_context(self, context: Context) -> list[str]:
        """Return the sorted names declared with ``context``."""
        return sorted(name for name, declared in self._contexts.items() if declared is context)

    def __contains__(self, name: object) -> bool:
        """Whether ``name`` has an explicit declaration."""
        return name in self._contexts


environment_registry = EnvironmentRegistry()


__all__ = ["Context", "EnvironmentRegistry", "environment_registry"]
