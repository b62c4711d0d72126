"""Tests for the md-term command line entry point."""

import io
import logging
from pathlib import Path

import pytest

from md_term.cli import build_parser, main
from md_term.utils import visible_length


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ('WIDTH', 'REFLOW_TEXT', 'TAB', 'EMOJI', 'SANITIZE', 'SHOW_SECTION_PREFIX'):
        monkeypatch.delenv(f'MD_TERM_{name}', raising=False)
    monkeypatch.setenv('COLUMNS', '80')


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])
    assert args.file is None
    assert args.width is None
    assert args.reflow is False


def test_renders_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / 'doc.md'
    source.write_text('- a\n- b\n', encoding='utf-8')

    assert main([str(source)]) == 0
    assert capsys.readouterr().out == '    * a\n    * b\n\n'


def test_renders_stdin(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr('sys.stdin', io.StringIO('- a\n'))

    assert main(['--tab', '2']) == 0
    assert capsys.readouterr().out == '  * a\n\n'


def test_flags_override_settings(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv('MD_TERM_WIDTH', '100')
    source = tmp_path / 'doc.md'
    source.write_text('# Title\n\n' + 'word ' * 20, encoding='utf-8')

    assert main([str(source), '--width', '20', '--reflow', '--no-section-prefix']) == 0

    out = capsys.readouterr().out
    assert '#' not in out
    assert 'Title' in out
    assert max(visible_length(line) for line in out.split('\n')) <= 20


def test_missing_file(
    tmp_path: Path, caplog: pytest.LogCaptureFixture, capsys: pytest.CaptureFixture[str]
) -> None:
    with caplog.at_level(logging.ERROR):
        assert main([str(tmp_path / 'missing.md')]) == 1

    assert 'Cannot read' in caplog.text
    assert capsys.readouterr().out == ''
