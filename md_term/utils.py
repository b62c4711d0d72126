"""Utility functions for Markdown to terminal rendering."""

import re
import shutil

# SGR escape codes, see https://en.wikipedia.org/wiki/ANSI_escape_code#SGR
ANSI_ESCAPE_PATTERN = r'\x1b\[(?:\d{1,3})(?:;\d{1,3})*m'
ANSI_ESCAPE_RE = re.compile(ANSI_ESCAPE_PATTERN)

DEFAULT_TERMINAL_WIDTH = 80

_NON_EMPTY_LINE_RE = re.compile(r'(^|\n)(.+)')


def visible_length(text: str) -> int:
    """Calculate printable length of text, ignoring ANSI escape codes.

    Args:
        text: Input text, possibly containing styling escape sequences

    Returns:
        Number of characters that occupy terminal columns

    Examples:
        >>> visible_length('Hello')
        5
        >>> visible_length('\\x1b[1mHello\\x1b[0m')
        5
    """
    return len(ANSI_ESCAPE_RE.sub('', text))


def indent_lines(indent: str, text: str) -> str:
    """Prefix every non-empty line of text with indent."""
    return _NON_EMPTY_LINE_RE.sub(lambda m: m.group(1) + indent + m.group(2), text)


def indentify(indent: str, text: str) -> str:
    """Prefix every line of text (including empty ones) with indent."""
    if not text:
        return text
    return indent + text.replace('\n', '\n' + indent)


def section(text: str) -> str:
    """Frame a block-level construct with a trailing blank line."""
    return text + '\n\n'


def terminal_width(fallback: int = DEFAULT_TERMINAL_WIDTH) -> int:
    """Discover the column count of the attached terminal.

    Args:
        fallback: Width used when stdout is not a terminal

    Returns:
        Terminal width in columns
    """
    return shutil.get_terminal_size((fallback, 24)).columns
