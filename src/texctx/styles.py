#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/styles.py
r"""Math style registry.

A math style is a delimiter convention for a math region: inline ``$...$``,
display ``\[...\]`` or a named environment ``\begin{name}...\end{name}``.
Styles are plain table entries rather than subclasses so the converter in
:mod:`texctx.transforms.math_toggle` treats every style the same way.

Begin and end templates may contain three placeholders:

- ``{name}``: the style name
- ``{indent}``: indentation of the line the region starts on
- ``{body_indent}``: one extra indentation level for the body

Only these placeholders are substituted, so literal braces such as the ones
in ``\begin{{name}}`` need no escaping.

Examples
--------
Look up a built-in style:

    >>> from texctx.styles import style_registry
    >>> style_registry.get("equation").render_begin("  ")
    '\\begin{equation}\n      '

Register a custom environment:

    >>> style_registry.register(StyleRegistry.named("dmath"))

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from texctx.constants import (
    DEFAULT_INDENT_UNIT,
    DEFAULT_NAMED_STYLES,
    DEFAULT_ONE_LINE_STYLES,
    DISPLAY_STYLE,
    INLINE_STYLE,
)
from texctx.exceptions import UnknownStyleError

logger = logging.getLogger(__name__)

NAMED_BEGIN_TEMPLATE = "\\begin{{name}}\n{indent}{body_indent}"
NAMED_END_TEMPLATE = "\n{indent}\\end{{name}}"


@dataclass(frozen=True)
class MathStyle:
    r"""Delimiter convention for a math region.

    Parameters
    ----------
    name : str
        Style name (``"inline"``, ``"display"`` or an environment name)
    one_line_preferred : bool, default False
        Whether a body converted to this style is collapsed onto one line
    begin_template : str
        Template for the opening delimiter and anything placed before the body
    end_template : str
        Template for anything placed after the body and the closing delimiter
    is_inline : bool, default False
        Whether the style lives inside a line of text. Converting to or from
        such a style moves the region onto or off its own lines.

    """

    name: str
    one_line_preferred: bool = False
    begin_template: str = NAMED_BEGIN_TEMPLATE
    end_template: str = NAMED_END_TEMPLATE
    is_inline: bool = field(default=False)

    def _render(self, template: str, indent: str, body_indent: str) -> str:
        return template.replace("{name}", self.name).replace("{indent}", indent).replace("{body_indent}", body_indent)

    def render_begin(self, indent: str = "", body_indent: str = DEFAULT_INDENT_UNIT) -> str:
        """Render the begin template for a region starting at ``indent``."""
        return self._render(self.begin_template, indent, body_indent)

    def render_end(self, indent: str = "", body_indent: str = DEFAULT_INDENT_UNIT) -> str:
        """Render the end template for a region starting at ``indent``."""
        return self._render(self.end_template, indent, body_indent)

    @property
    def opening_token(self) -> str:
        """Opening delimiter without surrounding layout, e.g. ``\\begin{align}``."""
        return self._render(self.begin_template, "", "").strip()

    @property
    def closing_token(self) -> str:
        """Closing delimiter without surrounding layout, e.g. ``\\end{align}``."""
        return self._render(self.end_template, "", "").strip()


class StyleRegistry:
    """Lookup table from style names to :class:`MathStyle` entries.

    Parameters
    ----------
    styles : iterable of MathStyle, optional
        Initial entries. Defaults to inline, display and the amsmath
        environments with their starred variants.

    """

    def __init__(self, styles: list[MathStyle] | None = None):
        """Initialize the registry with the given or default styles."""
        self._styles: dict[str, MathStyle] = {}
        for style in styles if styles is not None else default_styles():
            self._styles[style.name] = style

    @staticmethod
    def named(name: str, one_line_preferred: bool = False) -> MathStyle:
        r"""Build a style for a ``\begin{name}...\end{name}`` environment."""
        return MathStyle(name=name, one_line_preferred=one_line_preferred)

    def register(self, style: MathStyle) -> None:
        """Register a style, replacing any entry with the same name.

        Parameters
        ----------
        style : MathStyle
            Style to register

        """
        if style.name in self._styles:
            logger.warning(f"Math style '{style.name}' already registered, overwriting")
        self._styles[style.name] = style
        logger.debug(f"Registered math style: {style.name}")

    def unregister(self, name: str) -> bool:
        """Remove a style; returns False when it was not registered."""
        if name in self._styles:
            del self._styles[name]
            logger.debug(f"Unregistered math style: {name}")
            return True
        return False

    def get(self, name: str) -> MathStyle:
        """Get a style by name.

        Parameters
        ----------
        name : str
            Style name

        Returns
        -------
        MathStyle
            The registered style

        Raises
        ------
        UnknownStyleError
            If no style with this name is registered

        """
        try:
            return self._styles[name]
        except KeyError:
            raise UnknownStyleError(name, self.list_styles()) from None

    def has_style(self, name: str) -> bool:
        """Whether a style with this name is registered."""
        return name in self._styles

    def list_styles(self) -> list[str]:
        """Return the registered style names in registration order."""
        return list(self._styles)

    def __iter__(self):
        """Iterate over the registered styles."""
        return iter(list(self._styles.values()))

    def __len__(self) -> int:
        """Return the number of registered styles."""
        return len(self._styles)


def default_styles() -> list[MathStyle]:
    """Return the built-in styles."""
    styles = [
        MathStyle(
            name=INLINE_STYLE,
            one_line_preferred=True,
            begin_template="$",
            end_template="$",
            is_inline=True,
        ),
        MathStyle(
            name=DISPLAY_STYLE,
            one_line_preferred=True,
            begin_template="\\[\n{indent}{body_indent}",
            end_template="\n{indent}\\]",
        ),
    ]
    for name in DEFAULT_NAMED_STYLES:
        styles.append(StyleRegistry.named(name, one_line_preferred=name in DEFAULT_ONE_LINE_STYLES))
    return styles


style_registry = StyleRegistry()


__all__ = ["MathStyle", "StyleRegistry", "default_styles", "style_registry"]
