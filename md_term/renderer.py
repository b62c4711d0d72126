"""Mistune renderer producing styled terminal text."""

from __future__ import annotations

from collections.abc import Callable
import logging
from typing import Any

from mistune import BaseRenderer
from mistune.core import BlockState

from md_term.config import DEFAULT_OPTIONS, RenderOptions
from md_term.lists import ListBlock, ListItem, render_list_tree
from md_term.nodes import Highlighter, NodeRenderer
from md_term.reflow import HARD_RETURN
from md_term.utils import section

LOGGER = logging.getLogger(__name__)


class TerminalRenderer(BaseRenderer):
    """Renderer that converts a Markdown AST to styled terminal text.

    Walks the AST bottom-up: children are rendered to strings first and
    handed to the matching ``NodeRenderer`` callback. Lists and tables keep
    their structure instead of being flattened, so list numbering and table
    cells never go through placeholder or sentinel encoding.

    Attributes:
        options: Rendering options
        nodes: Per-construct callbacks
    """

    NAME = 'terminal'

    def __init__(
        self,
        options: RenderOptions | None = None,
        highlighter: Highlighter | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            options: Rendering options (uses defaults if None)
            highlighter: ``(code, language) -> str`` for code blocks
        """
        super().__init__()
        self.options = options or DEFAULT_OPTIONS
        self.nodes = NodeRenderer(self.options, highlighter)

    def __call__(self, tokens: Any, state: BlockState) -> str:
        # Hard breaks left outside reflowed blocks become plain newlines
        return self.render_tokens(tokens, state).replace(HARD_RETURN, '\n')

    def _get_method(self, name: str) -> Callable[..., str]:
        """Get renderer method by name with fallback.

        Args:
            name: Method name (token type)

        Returns:
            Renderer method or fallback handler
        """
        try:
            return super()._get_method(name)
        except AttributeError:
            LOGGER.debug('No renderer for token type %r, using fallback', name)
            return self._fallback_renderer

    def _fallback_renderer(self, token: dict[str, Any], state: BlockState) -> str:
        """Render children of an unknown token, or its raw text."""
        if 'children' in token:
            return self.render_children(token, state)
        raw = token.get('raw', '')
        return raw if isinstance(raw, str) else ''

    def render_children(self, token: dict[str, Any], state: BlockState) -> str:
        """Render children tokens or text strings and concatenate them.

        Args:
            token: Token dict with 'children'
            state: Rendering state

        Returns:
            Rendered children
        """
        children = token.get('children', [])
        if not children:
            return ''
        if not isinstance(children, list):
            children = [children]

        rendered = []
        for child in children:
            if isinstance(child, str):
                rendered.append(self.nodes.text(child))
            elif isinstance(child, dict):
                rendered.append(self.render_token(child, state))
        return ''.join(rendered)

    # Inline elements

    def text(self, token: dict[str, Any], state: BlockState) -> str:
        return self.nodes.text(token.get('raw', ''))

    def emphasis(self, token: dict[str, Any], state: BlockState) -> str:
        """Render italic text (*text* or _text_)."""
        return self.nodes.em(self.render_children(token, state))

    def strong(self, token: dict[str, Any], state: BlockState) -> str:
        """Render bold text (**text** or __text__)."""
        return self.nodes.strong(self.render_children(token, state))

    def strikethrough(self, token: dict[str, Any], state: BlockState) -> str:
        """Render strikethrough text (~~text~~)."""
        return self.nodes.del_(self.render_children(token, state))

    def codespan(self, token: dict[str, Any], state: BlockState) -> str:
        return self.nodes.codespan(str(token.get('raw', '')))

    def inline_html(self, token: dict[str, Any], state: BlockState) -> str:
        return self.nodes.html(str(token.get('raw', '')))

    def linebreak(self, token: dict[str, Any], state: BlockState) -> str:
        return self.nodes.br()

    def softbreak(self, token: dict[str, Any], state: BlockState) -> str:
        """Render soft line break as newline; reflow merges it when enabled."""
        return '\n'

    def link(self, token: dict[str, Any], state: BlockState) -> str:
        """Render link [text](url), autolink or bare URL.

        Args:
            token: Token dict with 'attrs' (url, title) and 'children' (link text)
            state: Rendering state

        Returns:
            Rendered link
        """
        attrs = token.get('attrs', {})
        url = attrs.get('url', '') if isinstance(attrs, dict) else ''
        title = attrs.get('title') if isinstance(attrs, dict) else None
        text = self.render_children(token, state)
        if not url:
            return text
        return self.nodes.link(url, title, text)

    def image(self, token: dict[str, Any], state: BlockState) -> str:
        attrs = token.get('attrs', {})
        src = attrs.get('url', '') if isinstance(attrs, dict) else ''
        title = attrs.get('title') if isinstance(attrs, dict) else None
        return self.nodes.image(src, title, self.render_children(token, state))

    # Block elements

    def blank_line(self, token: dict[str, Any], state: BlockState) -> str:
        return ''

    def paragraph(self, token: dict[str, Any], state: BlockState) -> str:
        return self.nodes.paragraph(self.render_children(token, state))

    def block_text(self, token: dict[str, Any], state: BlockState) -> str:
        """Render text of a tight list item (no paragraph framing)."""
        return self.render_children(token, state)

    def heading(self, token: dict[str, Any], state: BlockState) -> str:
        """Render ATX (# Heading) and Setext (Heading\\n===) headings alike."""
        attrs = token.get('attrs', {})
        level = attrs.get('level', 1) if isinstance(attrs, dict) else 1
        return self.nodes.heading(self.render_children(token, state), level)

    def thematic_break(self, token: dict[str, Any], state: BlockState) -> str:
        return self.nodes.hr()

    def block_code(self, token: dict[str, Any], state: BlockState) -> str:
        """Render code block (```lang ... ``` or indented).

        Args:
            token: Token dict with 'raw' (code) and optional 'attrs' (language info)
            state: Rendering state

        Returns:
            Highlighted code block
        """
        code = str(token.get('raw', '')).rstrip('\n')

        attrs = token.get('attrs', {})
        language = None
        if isinstance(attrs, dict):
            info = attrs.get('info')
            if info and isinstance(info, str):
                language = info.split()[0]

        return self.nodes.code(code, language)

    def block_quote(self, token: dict[str, Any], state: BlockState) -> str:
        return self.nodes.blockquote(self.render_children(token, state))

    def block_html(self, token: dict[str, Any], state: BlockState) -> str:
        return self.nodes.html(str(token.get('raw', '')))

    def list(self, token: dict[str, Any], state: BlockState) -> str:
        """Render list (ordered or unordered) with all nested lists.

        Args:
            token: Token dict with 'children' (list items) and 'attrs' (ordered flag)
            state: Rendering state

        Returns:
            Indented list with section framing
        """
        block = self._build_list(token, state)
        return section(render_list_tree(block, self.nodes.tab))

    def _build_list(self, token: dict[str, Any], state: BlockState) -> ListBlock:
        attrs = token.get('attrs', {})
        if not isinstance(attrs, dict):
            attrs = {}
        block = ListBlock(
            ordered=bool(attrs.get('ordered', False)),
            start=int(attrs.get('start', 1)),
        )
        for child in token.get('children', []):
            if isinstance(child, dict):
                block.items.append(self._build_item(child, state))
        return block

    def _build_item(self, token: dict[str, Any], state: BlockState) -> ListItem:
        """Build a list item; task list items get a checkbox prefix.

        Text blocks and nested lists keep their source order. Paragraph text is
        transformed once, as item text, never as a standalone paragraph.
        """
        prefix = ''
        if token.get('type') == 'task_list_item':
            attrs = token.get('attrs', {})
            checked = attrs.get('checked', False) if isinstance(attrs, dict) else False
            prefix = self.nodes.checkbox(checked)

        entries: list[str | ListBlock] = []
        pending: list[str] = []

        def flush() -> None:
            if pending:
                # Continuation lines of an item are aligned by the list layout
                entries.append('\n'.join(pending).replace(HARD_RETURN, '\n'))
                pending.clear()

        for child in token.get('children', []):
            if not isinstance(child, dict):
                continue
            if child.get('type') == 'list':
                flush()
                entries.append(self._build_list(child, state))
            elif child.get('type') in ('paragraph', 'block_text'):
                inline = prefix + self.render_children(child, state)
                pending.append(self.nodes.item_text(inline))
                prefix = ''
            else:
                block = self.render_token(child, state).strip('\n')
                pending.append(self.nodes.options.listitem(block))
        flush()

        # Checkbox stays in front even when the item has no text block
        text = prefix
        if entries and isinstance(entries[0], str):
            text += entries.pop(0)
        return ListItem(text, entries)

    # Table rendering methods

    def table(self, token: dict[str, Any], state: BlockState) -> str:
        """Render table from table_head and table_body children.

        Note: In Mistune, table_head contains cells directly (no table_row wrapper).

        Args:
            token: Token dict with 'children' (table_head and table_body)
            state: Rendering state

        Returns:
            Drawn table with section framing
        """
        header: list[str] = []
        rows: list[list[str]] = []
        for part in token.get('children', []):
            if part.get('type') == 'table_head':
                header = self._render_cells(part, state)
            elif part.get('type') == 'table_body':
                rows.extend(
                    self._render_cells(row, state) for row in part.get('children', [])
                )
        return self.nodes.table_grid(header, rows)

    def _render_cells(self, token: dict[str, Any], state: BlockState) -> list[str]:
        return [
            self.render_children(cell, state).strip()
            for cell in token.get('children', [])
            if isinstance(cell, dict)
        ]
