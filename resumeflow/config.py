from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_font_sources() -> dict[str, dict[str, str]]:
    return {
        'Inter': {
            'normal': '/static/fonts/Inter-Regular.ttf',
            'bold': '/static/fonts/Inter-Medium.ttf',
        },
        'JetBrainsMono': {
            'normal': '/static/fonts/JetBrainsMono-Regular.ttf',
            'bold': '/static/fonts/JetBrainsMono-Regular.ttf',
        },
    }


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        env_prefix='RESUMEFLOW_',
        case_sensitive=False,
        extra='ignore',
    )

    # Page geometry in length units (millimetres), A4 portrait
    page_width: float = 210.0
    page_height: float = 297.0

    default_theme: str = 'modern'

    # Asset lookup. A base URL wins over the local directory when both are set.
    assets_dir: Path = Field(default=Path('./assets'))
    assets_base_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices('RESUMEFLOW_ASSETS_BASE_URL', 'ASSETS_BASE_URL'),
    )
    asset_timeout_seconds: float = 10.0
    font_sources: dict[str, dict[str, str]] = Field(default_factory=_default_font_sources)

    # PDF export
    pdf_producer: str = 'resumeflow'
    pdf_invariant: bool = True
    output_dir: Path = Field(default=Path('./out'))

    log_level: str = 'INFO'

    def font_paths(self, family: str) -> dict[str, str]:
        return dict(self.font_sources.get(family) or {})


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
