#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/inspections/injection.py
r"""Embedded-language detection.

Some regions of a LaTeX document hold code in another language: the body of
a ``luacode`` environment, a listing with ``language=Python`` or the argument
of ``\directlua``. :func:`injected_language` reports the language and the
range of such a region so an editor can highlight it.

For an environment, the first source of the language that applies wins:

1. a magic comment ``%! language = <id>`` directly above the environment
2. the ``language=`` option of ``lstlisting``
3. the built-in environment table (``luacode`` is Lua, ``pycode`` is Python, ...)

The region is the environment content. For a braced argument of a command in
the command table (``\directlua`` is Lua, ...) the region is the argument
without its braces.

Examples
--------
    >>> from texctx.parsers.latex import LatexTreeParser
    >>> tree = LatexTreeParser().parse("%! language = sql\n\\begin{verbatim}SELECT 1\\end{verbatim}")
    >>> environment = tree.root.children[-1]
    >>> injected_language(environment).language
    'sql'

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from texctx.constants import (
    COMMAND_LANGUAGE_INJECTIONS,
    ENVIRONMENT_LANGUAGE_INJECTIONS,
    MAGIC_COMMENT_LANGUAGE_PATTERN,
)
from texctx.parsers.latex import environment_parameters
from texctx.tree.navigation import previous_sibling_ignore_whitespace
from texctx.tree.nodes import NodeKind, SyntaxTree, TreeNode

logger = logging.getLogger(__name__)

_LANGUAGE_OPTION = re.compile(r"(?:^|,)\s*language\s*=\s*(?P<language>\{[^}]*\}|[^,\]]+)")


@dataclass(frozen=True)
class InjectionPlace:
    """A region holding code in another language.

    Parameters
    ----------
    language : str
        Lower-cased language identifier
    start : int
        Start offset of the region
    end : int
        End offset (exclusive) of the region
    host : TreeNode or None, default = None
        Environment or group the region belongs to

    """

    language: str
    start: int
    end: int
    host: Optional[TreeNode] = field(default=None, compare=False, repr=False)


def _normalize(language: Optional[str]) -> Optional[str]:
    if language is None:
        return None
    language = language.strip().strip("{}").strip()
    return language.lower() or None


def magic_comment_language(environment: TreeNode) -> Optional[str]:
    """Return the language named by magic comments directly above ``environment``.

    Consecutive comment lines above the environment are searched from the
    nearest one upwards.
    """
    sibling = previous_sibling_ignore_whitespace(environment)
    while sibling is not None and sibling.kind is NodeKind.COMMENT:
        match = MAGIC_COMMENT_LANGUAGE_PATTERN.match(sibling.text)
        if match:
            return match.group("language")
        sibling = previous_sibling_ignore_whitespace(sibling)
    return None


def listing_language(environment: TreeNode) -> Optional[str]:
    r"""Return the ``language=`` option of ``\begin{lstlisting}[...]``."""
    parameters = environment_parameters(environment)
    if parameters is None:
        return None
    match = _LANGUAGE_OPTION.search(parameters)
    return match.group("language") if match else None


def _environment_place(environment: TreeNode) -> Optional[InjectionPlace]:
    language = magic_comment_language(environment)
    if language is None and environment.name == "lstlisting":
        language = listing_language(environment)
    if language is None and environment.name is not None:
        language = ENVIRONMENT_LANGUAGE_INJECTIONS.get(environment.name)

    language = _normalize(language)
    if language is None:
        return None

    content = next((child for child in environment.children if child.kind is NodeKind.ENVIRONMENT_CONTENT), None)
    if content is None:
        return InjectionPlace(language, environment.start, environment.start, environment)
    return InjectionPlace(language, content.start, content.end, environment)


def _argument_place(group: TreeNode) -> Optional[InjectionPlace]:
    command = group.parent
    if command is None or command.kind is not NodeKind.COMMAND or command.name is None:
        return None
    language = _normalize(COMMAND_LANGUAGE_INJECTIONS.get(command.name))
    if language is None:
        return None
    return InjectionPlace(language, group.start + 1, max(group.start + 1, group.end - 1), group)


def injected_language(node: TreeNode) -> Optional[InjectionPlace]:
    """Return the embedded-language region hosted by ``node``, if any.

    Parameters
    ----------
    node : TreeNode
        An ENVIRONMENT or GROUP node; other kinds never host a region

    Returns
    -------
    InjectionPlace or None
        Language and range of the region

    """
    if node.kind is NodeKind.ENVIRONMENT:
        return _environment_place(node)
    if node.kind is NodeKind.GROUP:
        return _argument_place(node)
    return None


def find_injections(tree: SyntaxTree) -> list[InjectionPlace]:
    """Return every embedded-language region of a document in document order."""
    places = []
    for node in tree.iter_nodes():
        place = injected_language(node)
        if place is not None:
            places.append(place)
    logger.debug(f"Found {len(places)} embedded-language regions")
    return places


__all__ = [
    "InjectionPlace",
    "find_injections",
    "injected_language",
    "listing_language",
    "magic_comment_language",
]
