"""Terminal style functions built on rich styles."""

from __future__ import annotations

from collections.abc import Callable

from rich.color import ColorSystem
from rich.style import Style

StyleFn = Callable[[str], str]

RESET = '\x1b[0m'


def identity(text: str) -> str:
    return text


def style(definition: str) -> StyleFn:
    """Create a function that wraps text in ANSI codes for a rich style.

    Nested styled text ends with a reset code, which would also cancel the
    outer style, so the outer style is re-opened after every inner reset.

    Args:
        definition: Rich style definition, e.g. ``'bold green'`` or ``'none'``

    Returns:
        Style function ``str -> str``

    Examples:
        >>> style('bold')('hi')
        '\\x1b[1mhi\\x1b[0m'
    """
    parsed = Style.parse(definition)
    if not parsed:
        return identity

    def apply(text: str) -> str:
        return RESET.join(
            parsed.render(part, color_system=ColorSystem.TRUECOLOR)
            for part in text.split(RESET)
        )

    return apply


def as_style(value: str | StyleFn) -> StyleFn:
    """Accept either a rich style definition or a ready style function."""
    if isinstance(value, str):
        return style(value)
    return value
