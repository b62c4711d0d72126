"""Text transforms applied to rendered block content."""

from __future__ import annotations

from collections.abc import Callable
import html
import re

from rich.emoji import Emoji, NoEmoji

# Code spans hide their colons so emoji shortcodes inside code stay literal
COLON_REPLACER = '*#COLON|*'

_EMOJI_SHORTCODE_RE = re.compile(r':([A-Za-z0-9_\-+]+?):')


def lookup_emoji(name: str) -> str | None:
    """Resolve an emoji shortcode name (without colons) to its character."""
    try:
        return str(Emoji(name))
    except NoEmoji:
        return None


def insert_emojis(text: str) -> str:
    """Replace known ``:shortcode:`` occurrences with emoji plus a space."""

    def replace(match: re.Match[str]) -> str:
        sign = lookup_emoji(match.group(1))
        if sign is None:
            return match.group(0)
        return sign + ' '

    return _EMOJI_SHORTCODE_RE.sub(replace, text)


def unescape_entities(text: str) -> str:
    return html.unescape(text)


def escape_colons(text: str) -> str:
    return text.replace(':', COLON_REPLACER)


def undo_colons(text: str) -> str:
    return text.replace(COLON_REPLACER, ':')


def compose(*funcs: Callable[[str], str]) -> Callable[[str], str]:
    """Compose text functions right to left: ``compose(f, g)(x) == f(g(x))``."""

    def composed(text: str) -> str:
        for func in reversed(funcs):
            text = func(text)
        return text

    return composed
