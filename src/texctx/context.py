#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/context.py
"""Semantic context classification for syntax tree nodes.

This module answers "what region is this node in": math, comment, a specific
named environment, or normal text.

Two lookups with different reach are combined here and the difference is
load-bearing:

- Math wrappers (``$...$``, ``\\[...\\]``) are found by a full ancestor
  search, so anything nested anywhere inside a wrapper is in math context.
- Environments are resolved to the *direct* environment only, the nearest
  ENVIRONMENT ancestor. An element inside ``bar`` inside ``foo`` is in
  ``bar`` and not in ``foo``; the inner environment masks the outer one.

The outer-math locator builds on both to find the outermost math region
around a position, crossing non-math interruptions such as a ``minipage``
inside an ``equation``.

Examples
--------
    >>> from texctx.parsers.latex import LatexTreeParser
    >>> from texctx.context import context_at, find_outer_math_environment
    >>> tree = LatexTreeParser().parse(r"Let $x$ be real. % why")
    >>> context_at(tree, 5)
    <Context.MATH: 'math'>
    >>> context_at(tree, 20)
    <Context.COMMENT: 'comment'>

"""

from __future__ import annotations

import logging
from typing import Callable, Collection, Optional

from texctx.constants import DISPLAY_STYLE, INLINE_STYLE
from texctx.environments import Context, EnvironmentRegistry, environment_registry
from texctx.options.context import ContextOptions
from texctx.tree.navigation import has_ancestor_of_kind, nearest_ancestor_of_kind
from texctx.tree.nodes import MATH_WRAPPER_KINDS, NodeKind, SyntaxTree, TreeNode

logger = logging.getLogger(__name__)


class ContextClassifier:
    """Classify tree nodes by semantic context.

    The classifier is stateless apart from its configuration and only reads
    the tree, so one instance can serve any number of concurrent readers.

    Parameters
    ----------
    options : ContextOptions or None, default = None
        Classification options (hop bound, extra environment declarations)
    registry : EnvironmentRegistry or None, default = None
        Environment declarations. Defaults to the global registry.

    """

    def __init__(self, options: ContextOptions | None = None, registry: EnvironmentRegistry | None = None):
        """Initialize the classifier."""
        self.options = options or ContextOptions()
        self.registry = registry if registry is not None else environment_registry

    def direct_environment(self, node: TreeNode) -> Optional[TreeNode]:
        """Return the nearest enclosing ENVIRONMENT node, ignoring further-out ones."""
        return nearest_ancestor_of_kind(node, NodeKind.ENVIRONMENT, self.options.max_hops)

    def declared_context(self, environment: TreeNode) -> Context:
        """Return the context an environment declares for its content."""
        name = environment.name
        if name in self.options.extra_math_environments:
            return Context.MATH
        if name in self.options.extra_comment_environments:
            return Context.COMMENT
        return self.registry.context_of(name)

    def in_direct_environment(self, node: TreeNode, names: str | Collection[str]) -> bool:
        """Whether the direct environment of ``node`` has one of ``names``.

        Only the nearest environment counts: being nested in a differently
        named environment masks every environment further out.

        Parameters
        ----------
        node : TreeNode
            Node to test
        names : str or collection of str
            Accepted environment name(s)

        Returns
        -------
        bool
            False when there is no enclosing environment

        """
        accepted = {names} if isinstance(names, str) else set(names)
        environment = self.direct_environment(node)
        if environment is None or environment.name is None:
            return False
        return environment.name in accepted

    def in_direct_environment_matching(self, node: TreeNode, predicate: Callable[[TreeNode], bool]) -> bool:
        """Run ``predicate`` on the direct environment; False when there is none."""
        environment = self.direct_environment(node)
        if environment is None:
            return False
        return predicate(environment)

    def in_direct_environment_context(self, node: TreeNode, context: Context) -> bool:
        """Whether the direct environment declares ``context``.

        A node outside every environment is in NORMAL context.
        """
        environment = self.direct_environment(node)
        if environment is None:
            return context is Context.NORMAL
        return self.declared_context(environment) is context

    def in_math_context(self, node: TreeNode) -> bool:
        """Whether ``node`` is in math mode.

        True when any ancestor is an inline or display math wrapper, or when
        the direct environment is declared as math.
        """
        if has_ancestor_of_kind(node, MATH_WRAPPER_KINDS, self.options.max_hops):
            return True
        return self.in_direct_environment_context(node, Context.MATH)

    def is_comment(self, node: TreeNode) -> bool:
        """Whether ``node`` is a comment token or its direct environment is a comment block."""
        if node.kind is NodeKind.COMMENT:
            return True
        return self.in_direct_environment_context(node, Context.COMMENT)

    def classify(self, node: TreeNode) -> Context:
        """Return the context of ``node``; comment wins over math, math over normal."""
        if self.is_comment(node):
            return Context.COMMENT
        if self.in_math_context(node):
            return Context.MATH
        return Context.NORMAL

    def context_at(self, tree: SyntaxTree, offset: int) -> Optional[Context]:
        """Classify the deepest node at a document offset.

        Returns
        -------
        Context or None
            None when the offset lies outside the document or the tree is
            disposed

        """
        node = tree.find_leaf_at(offset)
        if node is None:
            return None
        return self.classify(node)

    def find_outer_math_environment(self, node: Optional[TreeNode]) -> Optional[TreeNode]:
        """Find the outermost math region that contains ``node``.

        Alternates two climbs until the root is passed: up to the first node
        in math context, then up to the first node that is no longer in math
        context. That stopping node is the region itself (the ``$..$`` or
        ``\\[..\\]`` wrapper, or the math environment) and becomes the current
        answer. Climbing then continues from its parent, so a region further
        out is found even when the path leaves math context in between.

        Parameters
        ----------
        node : TreeNode or None
            Starting node

        Returns
        -------
        TreeNode or None
            The outermost math region, or None when ``node`` is not inside one

        """
        element = node
        outer: Optional[TreeNode] = None

        while element is not None:
            while element is not None and not self.in_math_context(element):
                element = element.parent
            while element is not None and self.in_math_context(element):
                element = element.parent

            if element is not None:
                outer = element
                element = element.parent

        return outer

    def math_style_of(self, node: TreeNode) -> Optional[str]:
        """Return the math style name of a region node.

        Returns
        -------
        str or None
            ``"inline"``, ``"display"``, the environment name for a math
            environment, or None for anything else

        """
        if node.kind is NodeKind.INLINE_MATH:
            return INLINE_STYLE
        if node.kind is NodeKind.DISPLAY_MATH:
            return DISPLAY_STYLE
        if node.kind is NodeKind.ENVIRONMENT and self.declared_context(node) is Context.MATH:
            return node.name
        return None


default_classifier = ContextClassifier()


def _classifier(classifier: ContextClassifier | None) -> ContextClassifier:
    return classifier if classifier is not None else default_classifier


def direct_environment(node: TreeNode, classifier: ContextClassifier | None = None) -> Optional[TreeNode]:
    """Return the nearest enclosing environment of ``node``."""
    return _classifier(classifier).direct_environment(node)


def in_direct_environment(
    node: TreeNode, names: str | Collection[str], classifier: ContextClassifier | None = None
) -> bool:
    """Whether the direct environment of ``node`` has one of ``names``."""
    return _classifier(classifier).in_direct_environment(node, names)


def in_direct_environment_matching(
    node: TreeNode, predicate: Callable[[TreeNode], bool], classifier: ContextClassifier | None = None
) -> bool:
    """Run ``predicate`` on the direct environment of ``node``."""
    return _classifier(classifier).in_direct_environment_matching(node, predicate)


def in_direct_environment_context(
    node: TreeNode, context: Context, classifier: ContextClassifier | None = None
) -> bool:
    """Whether the direct environment of ``node`` declares ``context``."""
    return _classifier(classifier).in_direct_environment_context(node, context)


def in_math_context(node: TreeNode, classifier: ContextClassifier | None = None) -> bool:
    """Whether ``node`` is in math mode."""
    return _classifier(classifier).in_math_context(node)


def is_comment(node: TreeNode, classifier: ContextClassifier | None = None) -> bool:
    """Whether ``node`` is part of a comment."""
    return _classifier(classifier).is_comment(node)


def classify(node: TreeNode, classifier: ContextClassifier | None = None) -> Context:
    """Return the context of ``node``."""
    return _classifier(classifier).classify(node)


def context_at(tree: SyntaxTree, offset: int, classifier: ContextClassifier | None = None) -> Optional[Context]:
    """Return the context at a document offset."""
    return _classifier(classifier).context_at(tree, offset)


def find_outer_math_environment(
    node: Optional[TreeNode], classifier: ContextClassifier | None = None
) -> Optional[TreeNode]:
    """Return the outermost math region containing ``node``."""
    return _classifier(classifier).find_outer_math_environment(node)


def math_style_of(node: TreeNode, classifier: ContextClassifier | None = None) -> Optional[str]:
    """Return the math style name of a region node."""
    return _classifier(classifier).math_style_of(node)


__all__ = [
    "ContextClassifier",
    "classify",
    "context_at",
    "default_classifier",
    "direct_environment",
    "find_outer_math_environment",
    "in_direct_environment",
    "in_direct_environment_context",
    "in_direct_environment_matching",
    "in_math_context",
    "is_comment",
    "math_style_of",
]
