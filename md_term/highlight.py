"""Syntax highlighting for fenced code blocks.

Uses Pygments to tokenize code and paints each token with the style of its
highlight category (keyword, string, comment, ...). Categories follow the
usual highlight.js class names so themes stay portable.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.token import (
    Comment,
    Generic,
    Keyword,
    Name,
    Number,
    Operator,
    String,
    _TokenType,
)
from pygments.util import ClassNotFound

from md_term.styles import StyleFn, identity, style

LOGGER = logging.getLogger(__name__)

DEFAULT_THEME: dict[str, str] = {
    # keyword in a regular Algol-style language
    'keyword': 'bright_red',
    # built-in or library object (constant, class, function)
    'built_in': 'bright_yellow',
    'type': 'bright_yellow',
    # special identifier for a built-in value ("true", "false", "null")
    'literal': 'bright_magenta',
    'number': 'bright_magenta',
    'regexp': 'bright_magenta',
    'string': 'bright_yellow',
    # parsed section inside a literal string
    'subst': 'bright_white',
    # symbolic constant, interned string, goto label
    'symbol': 'bright_cyan',
    'class': 'bright_white',
    'function': 'bright_yellow',
    # name of a class or a function at the place of declaration
    'title': 'bright_green',
    'params': 'bright_white',
    'comment': 'bright_black',
    'doctag': 'bright_white',
    # modifiers, annotations, preprocessor directives
    'meta': 'bright_black',
    # heading of a section in a config file or text markup
    'section': 'bright_green',
    'tag': 'bright_white',
    # name of an XML tag, the first word in an s-expression
    'name': 'bright_red',
    'attr': 'bright_red',
    'attribute': 'bright_cyan',
    'variable': 'bright_yellow',
    'bullet': 'bright_magenta',
    'code': 'bright_green',
    'emphasis': 'italic bright_black',
    'strong': 'bold bright_black',
    'link': 'bright_magenta',
    'quote': 'bright_magenta',
    # added or changed line in a diff
    'addition': 'bright_yellow',
    'deletion': 'bright_black',
    # things not matched by any token
    'default': 'bright_white',
}

_TOKEN_CATEGORIES: dict[_TokenType, str] = {
    Keyword: 'keyword',
    Keyword.Constant: 'literal',
    Keyword.Type: 'type',
    Operator.Word: 'keyword',
    Name.Builtin: 'built_in',
    Name.Builtin.Pseudo: 'built_in',
    Name.Class: 'title',
    Name.Function: 'title',
    Name.Decorator: 'meta',
    Name.Namespace: 'class',
    Name.Tag: 'name',
    Name.Attribute: 'attr',
    Name.Variable: 'variable',
    Name.Constant: 'symbol',
    Name.Label: 'symbol',
    Name.Entity: 'symbol',
    String: 'string',
    String.Doc: 'doctag',
    String.Interpol: 'subst',
    String.Regex: 'regexp',
    String.Symbol: 'symbol',
    Number: 'number',
    Comment: 'comment',
    Comment.Preproc: 'meta',
    Comment.PreprocFile: 'meta',
    Comment.Special: 'doctag',
    Generic.Heading: 'section',
    Generic.Subheading: 'section',
    Generic.Emph: 'emphasis',
    Generic.Strong: 'strong',
    Generic.Inserted: 'addition',
    Generic.Deleted: 'deletion',
}


def build_theme(definitions: Mapping[str, str] | None = None) -> dict[str, StyleFn]:
    """Turn category -> style definition pairs into style functions."""
    merged = {**DEFAULT_THEME, **(definitions or {})}
    return {category: style(definition) for category, definition in merged.items()}


def token_category(ttype: _TokenType) -> str:
    """Find the highlight category of a Pygments token type.

    Falls back through parent token types, e.g. ``String.Double`` -> ``string``.
    """
    current: _TokenType | None = ttype
    while current is not None:
        if current in _TOKEN_CATEGORIES:
            return _TOKEN_CATEGORIES[current]
        current = current.parent
    return 'default'


def _get_lexer(code: str, language: str | None) -> Lexer | None:
    try:
        if language:
            return get_lexer_by_name(language, stripnl=False, ensurenl=False)
        return guess_lexer(code, stripnl=False, ensurenl=False)
    except ClassNotFound:
        LOGGER.debug('No lexer found for language %r', language)
        return None


def highlight_code(
    code: str,
    language: str | None,
    theme: Mapping[str, StyleFn],
    fallback: StyleFn = identity,
) -> str:
    """Colour code with the theme's category styles.

    Styles never span a newline, so every output line can be indented on its
    own without breaking escape codes.

    Args:
        code: Source code
        language: Language name or alias; guessed from the code when missing
        theme: Category -> style function mapping (see ``build_theme``)
        fallback: Style for every line when no lexer matches

    Returns:
        Highlighted code
    """
    lexer = _get_lexer(code, language)
    if lexer is None:
        return '\n'.join(fallback(line) if line else line for line in code.split('\n'))

    default = theme.get('default', identity)
    highlighted = []
    for ttype, value in lexer.get_tokens(code):
        if not value.strip():
            highlighted.append(value)
            continue
        apply = theme.get(token_category(ttype), default)
        highlighted.append(
            '\n'.join(apply(part) if part else part for part in value.split('\n'))
        )
    return ''.join(highlighted)
