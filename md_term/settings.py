"""Environment configuration for the command line entry point."""

from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from md_term.config import DEFAULT_TAB, RenderOptions
from md_term.utils import terminal_width


class Settings(BaseSettings):
    if Path('.env').exists():
        model_config = SettingsConfigDict(
            env_prefix='MD_TERM_', env_file='.env', env_file_encoding='utf-8', extra='ignore'
        )
    else:
        model_config = SettingsConfigDict(env_prefix='MD_TERM_')

    # Falls back to the terminal width when unset
    width: int | None = None

    reflow_text: bool = False
    show_section_prefix: bool = True
    emoji: bool = True
    unescape: bool = True
    sanitize: bool = False

    # Spaces count or literal indent string (e.g. a tab)
    tab: int | str = DEFAULT_TAB

    # Logging level
    logging_level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = 'WARNING'

    @field_validator('tab', mode='before')
    def parse_tab(cls, tab: int | str | None) -> int | str:
        if tab is None or tab == '':
            return DEFAULT_TAB
        if isinstance(tab, str) and tab.isdigit():
            return int(tab)
        return tab

    def to_options(self) -> RenderOptions:
        """Build rendering options from these settings."""
        return RenderOptions(
            width=self.width or terminal_width(),
            reflow_text=self.reflow_text,
            show_section_prefix=self.show_section_prefix,
            emoji=self.emoji,
            unescape=self.unescape,
            sanitize=self.sanitize,
            tab=self.tab,
        )
