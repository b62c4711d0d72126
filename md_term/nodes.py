"""Per-construct renderers producing styled terminal text.

``NodeRenderer`` exposes one method per markup construct. Methods take the
already rendered text of their content (inline spans are rendered before the
blocks that contain them) and return a string; block constructs end with a
blank line.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
import html
import logging
import re
from urllib.parse import unquote

from md_term.config import DEFAULT_OPTIONS, RenderOptions
from md_term.highlight import build_theme, highlight_code
from md_term.lists import BULLET_POINT, fix_nested_lists
from md_term.reflow import HARD_RETURN, reflow_text
from md_term.styles import identity
from md_term.tables import format_table, pack_cell, pack_row, unpack_rows
from md_term.transforms import (
    compose,
    escape_colons,
    insert_emojis,
    undo_colons,
    unescape_entities,
)
from md_term.utils import indent_lines, indentify, section, terminal_width

LOGGER = logging.getLogger(__name__)

Highlighter = Callable[[str, 'str | None'], str]

_UNSAFE_URL_CHARS_RE = re.compile(r'[^\w:]', re.ASCII)


def fix_hard_return(text: str, reflow: bool) -> str:
    """Turn hard breaks into soft newlines when text will be reflowed."""
    return text.replace(HARD_RETURN, '\n') if reflow else text


class NodeRenderer:
    """Renderer callbacks for every markup construct.

    Attributes:
        options: Rendering options
        tab: Indent string for one nesting level
        transform: Block text transform (emoji, entities, code-span colons)
    """

    def __init__(
        self,
        options: RenderOptions | None = None,
        highlighter: Highlighter | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            options: Rendering options (uses defaults if None)
            highlighter: ``(code, language) -> str`` used for code blocks
                (Pygments with the options' theme if None)
        """
        self.options = options or DEFAULT_OPTIONS
        self.tab = self.options.indent
        self.emoji = insert_emojis if self.options.emoji else identity
        self.unescape = unescape_entities if self.options.unescape else identity
        self.transform = compose(undo_colons, self.unescape, self.emoji)
        self._theme = build_theme(self.options.highlight_theme)
        self.highlighter = highlighter or self._highlight

    def _highlight(self, code: str, language: str | None) -> str:
        return highlight_code(code, language, self._theme, fallback=self.options.code)

    def _reflow(self, text: str) -> str:
        if not self.options.reflow_text:
            return text
        return reflow_text(text, self.options.width, self.options.gfm)

    # Block elements

    def code(self, code: str, lang: str | None = None) -> str:
        """Render a code block highlighted and indented by one level."""
        return section(indentify(self.tab, self.highlighter(code, lang)))

    def blockquote(self, quote: str) -> str:
        return section(self.options.blockquote(indentify(self.tab, quote.strip())))

    def html(self, html: str) -> str:
        return self.options.html(html)

    def heading(self, text: str, level: int) -> str:
        """Render heading with optional ``#`` prefix.

        Args:
            text: Rendered heading content
            level: Heading level, 1-6

        Returns:
            Styled heading with section framing
        """
        text = self.transform(text)
        prefix = '#' * level + ' ' if self.options.show_section_prefix else ''
        text = self._reflow(prefix + text)
        if level == 1:
            return section(self.options.first_heading(text))
        return section(self.options.heading(text))

    def hr(self) -> str:
        if self.options.reflow_text:
            width = self.options.width
        else:
            width = terminal_width()
        return section(self.options.hr('-' * max(width - 1, 0)))

    def list(self, body: str, ordered: bool) -> str:
        """Render list from concatenated ``listitem`` outputs.

        Args:
            body: Item texts, each starting with a placeholder bullet
            ordered: Number items instead of bulleting them

        Returns:
            Indented list with section framing
        """
        body = self.options.list_(body, ordered, self.tab)
        return section(fix_nested_lists(indent_lines(self.tab, body), self.tab))

    def listitem(self, text: str) -> str:
        # Items holding nested blocks carry their framing newlines
        if '\n' in text:
            text = text.strip()
        return '\n' + BULLET_POINT + self.item_text(text)

    def item_text(self, text: str) -> str:
        """Style and transform the text of one list item, without bullet."""
        return compose(self.options.listitem, self.transform)(text)

    def checkbox(self, checked: bool) -> str:
        return '[' + ('X' if checked else ' ') + '] '

    def paragraph(self, text: str) -> str:
        text = compose(self.options.paragraph, self.transform)(text)
        return section(self._reflow(text))

    def table(self, header: str, body: str) -> str:
        """Render table from packed ``tablerow`` outputs.

        Args:
            header: Packed header row
            body: Packed body rows

        Returns:
            Drawn table with section framing
        """
        header_rows = unpack_rows(header)
        return self.table_grid(header_rows[0] if header_rows else [], unpack_rows(body))

    def table_grid(self, header: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
        """Render table from header cells and rows of cells."""
        table = format_table(
            [self.transform(cell) for cell in header],
            [[self.transform(cell) for cell in row] for row in rows],
            self.options.width,
            self.options.table_options,
        )
        return section(self.options.table(table))

    def tablerow(self, content: str) -> str:
        return pack_row(content)

    def tablecell(self, content: str) -> str:
        return pack_cell(content)

    # Inline elements

    def text(self, text: str) -> str:
        return self.options.text(text)

    def strong(self, text: str) -> str:
        return self.options.strong(text)

    def em(self, text: str) -> str:
        return self.options.em(fix_hard_return(text, self.options.reflow_text))

    def codespan(self, text: str) -> str:
        text = fix_hard_return(text, self.options.reflow_text)
        return self.options.codespan(escape_colons(text))

    def br(self) -> str:
        return HARD_RETURN if self.options.reflow_text else '\n'

    def del_(self, text: str) -> str:
        return self.options.del_(text)

    def link(self, href: str, title: str | None, text: str) -> str:
        """Render link as styled text, or the URL when there is no distinct text.

        Args:
            href: Link target
            title: Link title (unused in terminal output)
            text: Rendered link text

        Returns:
            Styled link, or empty string for links rejected by sanitizing
        """
        if self.options.sanitize:
            try:
                protocol = unquote(html.unescape(href), errors='strict')
            except (UnicodeDecodeError, ValueError):
                LOGGER.debug('Dropping link with undecodable URL %r', href)
                return ''
            protocol = _UNSAFE_URL_CHARS_RE.sub('', protocol).lower()
            if protocol.startswith('javascript:'):
                LOGGER.debug('Dropping unsafe link %r', href)
                return ''

        if text and text != href:
            return self.options.link(text)
        return self.options.href(href)

    def image(self, href: str, title: str | None, text: str) -> str:
        out = '![' + text
        if title:
            out += ' – ' + title
        return out + '](' + href + ')\n'
