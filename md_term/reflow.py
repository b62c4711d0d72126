"""Width-aware reflow of styled text.

Text handed to the reflow engine is already styled, so it contains ANSI
escape codes between printable runs. Escape codes are kept whole and never
counted toward the column budget; only printable words are wrapped.
"""

from __future__ import annotations

import re

from md_term.utils import ANSI_ESCAPE_PATTERN, visible_length

# Line endings are normalized to \n before rendering, so \r never occurs
# in the text stream and can mark a hard (non-reflowed) line break.
HARD_RETURN = '\r'
GFM_BREAK_TAG = '<br />'

HARD_RETURN_RE = re.compile(re.escape(HARD_RETURN))
HARD_RETURN_GFM_RE = re.compile(f'{re.escape(HARD_RETURN)}|{re.escape(GFM_BREAK_TAG)}')

# Capturing group keeps escape codes in the split result
_FRAGMENT_RE = re.compile(f'({ANSI_ESCAPE_PATTERN})')
_WORD_SPLIT_RE = re.compile(r'[ \t\n]+')


def reflow_text(text: str, width: int, gfm: bool = True) -> str:
    """Re-wrap text so that no line is visibly longer than width.

    Hard breaks split the text into sections that are reflowed independently,
    so a forced break is never merged into the surrounding words. Words longer
    than width are cut into width-sized chunks.

    Args:
        text: Styled text to reflow
        width: Target column count; width <= 0 puts every word on its own line
        gfm: Also treat the literal ``<br />`` tag as a hard break

    Returns:
        Reflowed text with lines joined by newlines
    """
    split_re = HARD_RETURN_GFM_RE if gfm else HARD_RETURN_RE
    reflowed: list[str] = []

    for segment in split_re.split(text):
        column = 0
        current_line = ''
        last_was_escape = False

        for fragment in _FRAGMENT_RE.split(segment):
            if fragment == '':
                last_was_escape = False
                continue

            # Escape code: keep it whole, it takes no columns
            if not visible_length(fragment):
                current_line += fragment
                last_was_escape = True
                continue

            for word in _WORD_SPLIT_RE.split(fragment):
                add_space = 1 if column != 0 and not last_was_escape else 0

                if column + len(word) + add_space <= width:
                    if add_space:
                        current_line += ' '
                        column += 1
                    current_line += word
                    column += len(word)
                elif len(word) <= width or width <= 0:
                    # Fits on a fresh line
                    if visible_length(current_line):
                        reflowed.append(current_line)
                        current_line = ''
                    current_line += word
                    column = len(word)
                else:
                    # Longer than a whole line: fill the current line, then cut
                    # the rest into full-width chunks
                    head = word[: max(width - column - add_space, 0)]
                    if head and add_space:
                        current_line += ' '
                    current_line += head
                    reflowed.append(current_line)
                    current_line = ''
                    column = 0

                    rest = word[len(head) :]
                    while rest:
                        chunk = rest[:width]
                        if len(chunk) < width:
                            current_line = chunk
                            column = len(chunk)
                            break
                        reflowed.append(chunk)
                        rest = rest[width:]

                last_was_escape = False

        if visible_length(current_line):
            reflowed.append(current_line)

    return '\n'.join(reflowed)
