"""Tests for md_term.nodes - per-construct renderer callbacks."""

from collections.abc import Callable
from dataclasses import replace

import pytest

from md_term.config import STYLE_FIELDS, RenderOptions
from md_term.nodes import NodeRenderer
from md_term.reflow import HARD_RETURN
from md_term.styles import identity
from md_term.transforms import lookup_emoji
from md_term.utils import visible_length

PLAIN = RenderOptions(**{name: identity for name in STYLE_FIELDS})


def tag(name: str) -> Callable[[str], str]:
    """Style that wraps text in a visible marker, for exact assertions."""
    return lambda text: f'<{name}>{text}</{name}>'


def plain_nodes(**overrides: object) -> NodeRenderer:
    return NodeRenderer(replace(PLAIN, **overrides))


# ============================================================================
# Checkbox, image, html, inline spans
# ============================================================================


def test_checkbox() -> None:
    nodes = plain_nodes()
    assert nodes.checkbox(True) == '[X] '
    assert nodes.checkbox(False) == '[ ] '


@pytest.mark.parametrize(
    ('title', 'expected'),
    [
        (None, '![alt](img.png)\n'),
        ('', '![alt](img.png)\n'),
        ('Title', '![alt – Title](img.png)\n'),
    ],
)
def test_image_passthrough(title: str | None, expected: str) -> None:
    assert plain_nodes().image('img.png', title, 'alt') == expected


def test_inline_styles_applied() -> None:
    nodes = plain_nodes(strong=tag('b'), em=tag('i'), del_=tag('s'), html=tag('h'))
    assert nodes.strong('x') == '<b>x</b>'
    assert nodes.em('x') == '<i>x</i>'
    assert nodes.del_('x') == '<s>x</s>'
    assert nodes.html('<div>') == '<h><div></h>'


def test_br_depends_on_reflow() -> None:
    assert plain_nodes().br() == '\n'
    assert plain_nodes(reflow_text=True).br() == HARD_RETURN


def test_em_and_codespan_soften_hard_breaks_when_reflowing() -> None:
    nodes = plain_nodes(reflow_text=True)
    assert nodes.em(f'a{HARD_RETURN}b') == 'a\nb'
    assert nodes.codespan(f'a{HARD_RETURN}b') == 'a\nb'
    assert plain_nodes().em(f'a{HARD_RETURN}b') == f'a{HARD_RETURN}b'


# ============================================================================
# Links
# ============================================================================


@pytest.mark.parametrize(
    'href',
    [
        'javascript:alert(1)',
        'JavaScript:alert(1)',
        'java%73cript:alert(1)',
        'java\nscript:alert(1)',
        '&#106;avascript:alert(1)',
    ],
)
def test_link_sanitize_drops_javascript(href: str) -> None:
    nodes = plain_nodes(sanitize=True)
    assert nodes.link(href, None, href) == ''
    assert nodes.link(href, None, 'click') == ''


def test_link_sanitize_drops_undecodable_url() -> None:
    assert plain_nodes(sanitize=True).link('%E0%A4%A', None, 'x') == ''


def test_link_without_sanitize_keeps_javascript() -> None:
    nodes = plain_nodes(href=tag('href'))
    href = 'javascript:alert(1)'
    assert nodes.link(href, None, href) == f'<href>{href}</href>'


def test_link_renders_text_not_href() -> None:
    nodes = plain_nodes(link=tag('link'), href=tag('href'), sanitize=True)
    assert nodes.link('https://example.com', None, 'Example') == '<link>Example</link>'


def test_link_renders_href_when_text_matches() -> None:
    nodes = plain_nodes(link=tag('link'), href=tag('href'))
    url = 'https://example.com'
    assert nodes.link(url, None, url) == f'<href>{url}</href>'
    assert nodes.link(url, None, '') == f'<href>{url}</href>'


def test_link_default_style_is_underlined_text() -> None:
    result = NodeRenderer(RenderOptions(sanitize=True)).link(
        'https://example.com', 'title', 'Example'
    )
    assert 'https' not in result
    assert 'Example' in result
    assert result != 'Example'
    assert visible_length(result) == len('Example')


# ============================================================================
# Headings and paragraphs
# ============================================================================


def test_heading_levels_use_their_styles() -> None:
    nodes = plain_nodes(first_heading=tag('h1'), heading=tag('h'))
    assert nodes.heading('Title', 1) == '<h1># Title</h1>\n\n'
    assert nodes.heading('Sub', 3) == '<h>### Sub</h>\n\n'


def test_heading_without_section_prefix() -> None:
    assert plain_nodes(show_section_prefix=False).heading('Title', 2) == 'Title\n\n'


def test_heading_reflow() -> None:
    nodes = plain_nodes(reflow_text=True, width=10)
    assert nodes.heading('aaaa bbbb cccc', 1) == '# aaaa\nbbbb cccc\n\n'


def test_paragraph_style_and_section() -> None:
    assert plain_nodes(paragraph=tag('p')).paragraph('text') == '<p>text</p>\n\n'


def test_paragraph_reflow_keeps_hard_break() -> None:
    nodes = plain_nodes(reflow_text=True, width=80)
    assert nodes.paragraph('one' + nodes.br() + 'two') == 'one\ntwo\n\n'


def test_paragraph_emoji() -> None:
    smile = lookup_emoji('smile')
    assert smile is not None
    assert plain_nodes().paragraph('hi :smile:') == f'hi {smile} \n\n'
    assert plain_nodes(emoji=False).paragraph('hi :smile:') == 'hi :smile:\n\n'


def test_paragraph_unknown_emoji_kept() -> None:
    assert plain_nodes().paragraph(':not_an_emoji_name:') == ':not_an_emoji_name:\n\n'


def test_codespan_colons_survive_emoji() -> None:
    nodes = plain_nodes()
    assert nodes.paragraph('see ' + nodes.codespan(':smile:')) == 'see :smile:\n\n'


def test_paragraph_unescape() -> None:
    assert plain_nodes().paragraph('a &amp; b &lt;c&gt;') == 'a & b <c>\n\n'
    assert plain_nodes(unescape=False).paragraph('a &amp; b') == 'a &amp; b\n\n'


# ============================================================================
# Code, blockquote, rule
# ============================================================================


def test_code_uses_highlighter_and_indents() -> None:
    nodes = NodeRenderer(PLAIN, highlighter=lambda code, lang: f'{lang}:{code}')
    assert nodes.code('a\nb', 'py') == '    py:a\n    b\n\n'


def test_code_unknown_language_falls_back_to_code_style() -> None:
    nodes = plain_nodes(code=tag('code'))
    assert nodes.code('x = 1\n\ny', 'no-such-language') == (
        '    <code>x = 1</code>\n    \n    <code>y</code>\n\n'
    )


def test_code_highlighting_keeps_text() -> None:
    code = 'def f():\n    return 1'
    result = NodeRenderer().code(code, 'python')
    assert '\x1b[' in result
    stripped = [line[4:] for line in result.split('\n')[:2]]
    assert [visible_length(line) for line in stripped] == [8, 12]


def test_code_respects_tab_option() -> None:
    nodes = NodeRenderer(replace(PLAIN, tab=2), highlighter=lambda code, lang: code)
    assert nodes.code('x', None) == '  x\n\n'


def test_blockquote_trims_and_indents() -> None:
    nodes = plain_nodes(blockquote=tag('q'))
    assert nodes.blockquote('\nquoted\nlines\n\n') == '<q>    quoted\n    lines</q>\n\n'


def test_hr_uses_width_when_reflowing() -> None:
    assert plain_nodes(reflow_text=True, width=11).hr() == '-' * 10 + '\n\n'


def test_hr_uses_terminal_width(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('COLUMNS', '21')
    assert plain_nodes(width=11).hr() == '-' * 20 + '\n\n'


# ============================================================================
# Tables through the packed callbacks
# ============================================================================


def test_table_callbacks_match_structured_rows() -> None:
    nodes = plain_nodes()
    header = nodes.tablerow(nodes.tablecell('Name') + nodes.tablecell('Age'))
    body = nodes.tablerow(nodes.tablecell('Bob') + nodes.tablecell('25'))

    result = nodes.table(header, body)

    assert result == nodes.table_grid(['Name', 'Age'], [['Bob', '25']])
    assert 'Bob' in result
    assert result.endswith('\n\n')


def test_table_cells_are_transformed() -> None:
    nodes = plain_nodes()
    header = nodes.tablerow(nodes.tablecell('A &amp; B'))
    body = nodes.tablerow(nodes.tablecell(nodes.codespan('a:b')))

    result = nodes.table(header, body)

    assert 'A & B' in result
    assert 'a:b' in result


def test_table_style_applied() -> None:
    result = plain_nodes(table=tag('t')).table_grid(['A'], [['1']])
    assert result.startswith('<t>')
    assert result.endswith('</t>\n\n')
