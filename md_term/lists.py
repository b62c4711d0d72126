"""List layout: bullets, numbering and nesting.

Two paths produce the same layout:

* The flat path (``render_list`` + ``fix_nested_lists``) works on item text
  that was already rendered and concatenated by a callback-style parser.
  Every item starts with the ``BULLET_POINT`` placeholder and nesting is only
  visible as leading indentation, so numbering and nesting seams are resolved
  by pattern matching.
* The tree path (``ListBlock`` + ``render_list_tree``) gets the actual list
  structure and assigns bullets and numbers by depth and sibling index.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import re

BULLET_POINT = '* '

BULLET_POINT_REGEX = r'\*'
NUMBERED_POINT_REGEX = r'\d+\.'
POINT_REGEX = f'(?:{BULLET_POINT_REGEX}|{NUMBERED_POINT_REGEX})'

_POINT_START_RE = re.compile(POINT_REGEX)


def numbered_point(n: int) -> str:
    return f'{n}. '


def to_spaces(text: str) -> str:
    return ' ' * len(text)


def is_pointed_line(line: str, indent: str) -> bool:
    """Check if line starts with a bullet or number after whole indent levels."""
    return re.match(f'(?:{re.escape(indent)})*{POINT_REGEX}', line) is not None


def fix_nested_lists(body: str, indent: str) -> str:
    """Move nested list points that were glued to their parent line.

    An item renderer does not know its nesting, so a child list's first point
    ends up on the same line as the parent item's last text. The seam looks
    like: a non-space char, up to two trailing spaces, one or more indent
    levels, then a point marker.

    Args:
        body: Indented list body
        indent: One indentation level

    Returns:
        Body with every child point starting on its own line
    """
    seam_re = re.compile(
        r'(\S(?: |  )?)'  # Last char of the parent point, plus trailing spaces
        f'((?:{re.escape(indent)})+)'  # Indentation of the sub point
        f'({POINT_REGEX}.*)$',  # Body of the sub point
        re.MULTILINE,
    )
    return seam_re.sub(lambda m: f'{m.group(1)}\n{indent}{m.group(2)}{m.group(3)}', body)


def bullet_point_lines(lines: str, indent: str) -> str:
    """Align continuation lines of an unordered list body with its bullets."""
    return '\n'.join(
        line if is_pointed_line(line, indent) else to_spaces(BULLET_POINT) + line
        for line in lines.split('\n')
        if line
    )


def numbered_lines(lines: str, indent: str) -> str:
    """Replace placeholder bullets of top-level points with running numbers.

    Only unindented points are counted; indented points belong to nested
    lists that were numbered by their own pass. Continuation lines are padded
    to the width of the current number label.
    """
    num = 0
    result = []
    for line in lines.split('\n'):
        if not line:
            continue
        if is_pointed_line(line, indent) and _POINT_START_RE.match(line):
            num += 1
            result.append(_POINT_START_RE.sub(numbered_point(num).rstrip(), line, count=1))
        elif is_pointed_line(line, indent):
            result.append(line)
        else:
            result.append(to_spaces(numbered_point(num)) + line)
    return '\n'.join(result)


def render_list(body: str, ordered: bool, indent: str) -> str:
    """Assign bullets or numbers to an item body built from placeholder points.

    Args:
        body: Concatenated rendered items, each starting with ``BULLET_POINT``
        ordered: Number the items instead of keeping bullets
        indent: One indentation level

    Returns:
        List body without the outer indentation
    """
    body = body.strip()
    return numbered_lines(body, indent) if ordered else bullet_point_lines(body, indent)


# ============================================================================
# Tree path
# ============================================================================


@dataclass
class ListItem:
    """Item text followed by its nested lists and later text, in source order.

    ``text`` holds the lines next to the item's label. ``children`` holds what
    comes after them: nested lists, and text blocks that follow a nested list.
    """

    text: str
    children: list[ListBlock | str] = field(default_factory=list)


@dataclass
class ListBlock:
    """One list level: its items, numbered from ``start`` when ordered."""

    ordered: bool = False
    items: list[ListItem] = field(default_factory=list)
    start: int = 1


def _render_block_lines(block: ListBlock, indent: str, depth: int) -> list[str]:
    lines: list[str] = []
    prefix = indent * (depth + 1)

    for index, item in enumerate(block.items):
        label = numbered_point(block.start + index) if block.ordered else BULLET_POINT
        continuation = prefix + to_spaces(label)
        text_lines = [line for line in item.text.split('\n') if line]

        if text_lines:
            lines.append(prefix + label + text_lines[0])
            lines.extend(continuation + line for line in text_lines[1:])
        else:
            lines.append(prefix + label.rstrip())

        for child in item.children:
            if isinstance(child, ListBlock):
                lines.extend(_render_block_lines(child, indent, depth + 1))
            else:
                lines.extend(continuation + line for line in child.split('\n') if line)

    return lines


def render_list_tree(block: ListBlock, indent: str) -> str:
    """Lay out a list tree.

    Points at nesting depth ``d`` start at ``indent * (d + 1)`` columns, so
    depth is recoverable from indentation alone. Numbering restarts in every
    ordered block and only counts that block's own items.

    Args:
        block: Top-level list
        indent: One indentation level

    Returns:
        Indented list text, one line per item line
    """
    return '\n'.join(_render_block_lines(block, indent, 0))
