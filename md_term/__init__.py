"""Markdown to styled terminal text renderer.

This module renders Markdown into fixed-width text with ANSI styling for a
character terminal: reflowed paragraphs, indented and numbered lists,
highlighted code blocks and boxed tables.

Example:
    >>> from md_term import markdown_to_terminal, RenderOptions
    >>> print(markdown_to_terminal('**Bold** and *italic* text'))
    >>> # Re-wrap paragraphs to 60 columns
    >>> text = markdown_to_terminal(long_text, RenderOptions(reflow_text=True, width=60))
"""

from md_term.config import DEFAULT_OPTIONS, RenderOptions
from md_term.converter import markdown_to_terminal
from md_term.nodes import NodeRenderer
from md_term.renderer import TerminalRenderer

__version__ = '0.1.0'

__all__ = [
    'markdown_to_terminal',
    'RenderOptions',
    'DEFAULT_OPTIONS',
    'NodeRenderer',
    'TerminalRenderer',
]
