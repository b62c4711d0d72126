"""Configuration for Markdown to terminal rendering."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
import logging
from typing import Any

from md_term.lists import render_list
from md_term.styles import StyleFn, as_style, identity

LOGGER = logging.getLogger(__name__)

ListFn = Callable[[str, bool, str], str]

# Only these characters may form a custom indent string
TAB_ALLOWED_CHARACTERS = frozenset({'\t'})
DEFAULT_TAB = 4


def sanitize_tab(tab: object, fallback: int = DEFAULT_TAB) -> str:
    """Resolve the tab option to a literal indent string.

    Args:
        tab: Number of spaces, or a string of allowed indent characters
        fallback: Number of spaces used when tab is invalid

    Returns:
        Indent string for one nesting level
    """
    if isinstance(tab, int) and not isinstance(tab, bool) and tab > 0:
        return ' ' * tab
    if isinstance(tab, str) and tab and set(tab) <= TAB_ALLOWED_CHARACTERS:
        return tab
    LOGGER.debug('Invalid tab option %r, using %d spaces', tab, fallback)
    return ' ' * fallback


@dataclass(frozen=True)
class RenderOptions:
    """Options for terminal rendering.

    Immutable, resolved once per renderer. Style fields accept a rich style
    definition (``'bold green'``) or any ``str -> str`` function and are
    stored as functions.

    Attributes:
        code: Fallback style for code blocks without a known language
        blockquote: Style of quoted blocks
        html: Style of raw HTML passthrough
        heading: Style of headings of level 2 and deeper
        first_heading: Style of level 1 headings
        hr: Style of horizontal rules
        listitem: Style of list item text
        list_: List body transform ``(body, ordered, indent) -> str``
        table: Style of the drawn table
        paragraph: Style of paragraphs
        strong: Style of ``**strong**`` spans
        em: Style of ``*emphasis*`` spans
        codespan: Style of inline code
        del_: Style of ``~~deleted~~`` spans
        link: Style of link text
        href: Style of bare URLs
        text: Style of plain text runs
        unescape: Unescape HTML entities in block text
        emoji: Replace ``:shortcode:`` with emoji
        width: Target width for reflow and tables
        show_section_prefix: Prefix headings with ``#`` marks
        reflow_text: Re-wrap paragraphs and headings to width
        tab: Indent per level, spaces count or allowed whitespace string
        table_options: Keyword arguments for ``rich.table.Table``
        highlight_theme: Overrides of highlight category styles
        sanitize: Drop ``javascript:`` links
        gfm: Treat ``<br />`` as a hard break during reflow
    """

    code: StyleFn | str = 'bright_yellow'
    blockquote: StyleFn | str = 'italic bright_black'
    html: StyleFn | str = 'bright_black'
    heading: StyleFn | str = 'bold green'
    first_heading: StyleFn | str = 'bold underline bright_magenta'
    hr: StyleFn | str = identity
    listitem: StyleFn | str = identity
    list_: ListFn = render_list
    table: StyleFn | str = identity
    paragraph: StyleFn | str = identity
    strong: StyleFn | str = 'bold'
    em: StyleFn | str = 'italic'
    codespan: StyleFn | str = 'bright_yellow'
    del_: StyleFn | str = 'dim bright_black strike'
    link: StyleFn | str = 'blue underline'
    href: StyleFn | str = 'blue underline'
    text: StyleFn | str = identity

    unescape: bool = True
    emoji: bool = True
    width: int = 80
    show_section_prefix: bool = True
    reflow_text: bool = False
    tab: int | str = DEFAULT_TAB
    table_options: Mapping[str, Any] = field(default_factory=dict)
    highlight_theme: Mapping[str, str] = field(default_factory=dict)
    sanitize: bool = False
    gfm: bool = True

    indent: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for name in STYLE_FIELDS:
            object.__setattr__(self, name, as_style(getattr(self, name)))
        object.__setattr__(self, 'indent', sanitize_tab(self.tab))


STYLE_FIELDS = (
    'code',
    'blockquote',
    'html',
    'heading',
    'first_heading',
    'hr',
    'listitem',
    'table',
    'paragraph',
    'strong',
    'em',
    'codespan',
    'del_',
    'link',
    'href',
    'text',
)

# Default options instance
DEFAULT_OPTIONS = RenderOptions()
