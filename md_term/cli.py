"""Command line entry point: render a Markdown file to the terminal."""

import argparse
from dataclasses import replace
import logging
from pathlib import Path
import sys

from md_term.converter import markdown_to_terminal
from md_term.settings import Settings

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='md-term', description='Render Markdown as styled terminal text.'
    )
    parser.add_argument(
        'file', nargs='?', type=Path, help='Markdown file to render (default: stdin).'
    )
    parser.add_argument('-w', '--width', type=int, help='Target width in columns.')
    parser.add_argument(
        '-r', '--reflow', action='store_true', help='Re-wrap paragraphs to the width.'
    )
    parser.add_argument('-t', '--tab', type=int, help='Spaces per indentation level.')
    parser.add_argument(
        '--no-section-prefix', action='store_true', help='Hide # marks before headings.'
    )
    parser.add_argument(
        '--no-emoji', action='store_true', help='Keep :shortcode: text as is.'
    )
    parser.add_argument(
        '--sanitize', action='store_true', help='Drop javascript: links.'
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    settings = Settings()
    logging.basicConfig(level=getattr(logging, settings.logging_level), stream=sys.stderr)

    args = build_parser().parse_args(argv)

    options = settings.to_options()
    overrides: dict[str, object] = {}
    if args.width is not None:
        overrides['width'] = args.width
    if args.tab is not None:
        overrides['tab'] = args.tab
    if args.reflow:
        overrides['reflow_text'] = True
    if args.no_section_prefix:
        overrides['show_section_prefix'] = False
    if args.no_emoji:
        overrides['emoji'] = False
    if args.sanitize:
        overrides['sanitize'] = True
    if overrides:
        options = replace(options, **overrides)

    if args.file is None:
        markdown_text = sys.stdin.read()
    else:
        try:
            markdown_text = args.file.read_text(encoding='utf-8')
        except OSError as e:
            LOGGER.error('Cannot read %s: %s', args.file, e)
            return 1

    sys.stdout.write(markdown_to_terminal(markdown_text, options))
    return 0
