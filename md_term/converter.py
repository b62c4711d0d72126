"""Main conversion entry point for Markdown to terminal text."""

from __future__ import annotations

import mistune

from md_term.config import DEFAULT_OPTIONS, RenderOptions
from md_term.nodes import Highlighter
from md_term.renderer import TerminalRenderer

PLUGINS = ['strikethrough', 'task_lists', 'url', 'table']


def create_markdown(
    options: RenderOptions | None = None,
    highlighter: Highlighter | None = None,
) -> mistune.Markdown:
    """Create a Markdown instance rendering to terminal text.

    Args:
        options: Rendering options (uses defaults if None)
        highlighter: Optional ``(code, language) -> str`` for code blocks

    Returns:
        Markdown instance with plugins loaded
    """
    renderer = TerminalRenderer(options or DEFAULT_OPTIONS, highlighter)
    return mistune.create_markdown(renderer=renderer, plugins=PLUGINS)


def markdown_to_terminal(
    markdown_text: str,
    options: RenderOptions | None = None,
    highlighter: Highlighter | None = None,
) -> str:
    """Convert Markdown text to styled text for a character terminal.

    Args:
        markdown_text: Input Markdown text
        options: Rendering options (uses defaults if None)
        highlighter: Optional ``(code, language) -> str`` for code blocks

    Returns:
        Rendered text; every block ends with a blank line

    Examples:
        >>> from md_term import RenderOptions
        >>> plain = RenderOptions(strong=lambda s: s, first_heading=lambda s: s)
        >>> markdown_to_terminal('# Title', plain)
        '# Title\\n\\n'
    """
    # \r is reserved for hard breaks
    text = markdown_text.replace('\r\n', '\n').replace('\r', '\n')
    if not text.endswith('\n'):
        text += '\n'

    md = create_markdown(options, highlighter)
    result = md(text)
    return result if isinstance(result, str) else ''
