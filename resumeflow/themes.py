from __future__ import annotations

from pathlib import Path
from typing import Any

from .storage import read_json
from .types import DividerStyle, HeaderStyle, Theme, ThemeImages, TitleBoxStyle


def _spacing(**overrides: float) -> dict[str, float]:
    base = {
        'header_bottom_margin': 12,
        'h1_margin_bottom': 4,
        'sub_header_margin_bottom': 12,
        'h2_margin_top': 12,
        'h2_margin_bottom': 6,
        'h3_margin_top': 8,
        'job_header_margin_bottom': 4,
        'ul_margin_top': 4,
        'ul_margin_bottom': 10,
        'li_margin_bottom': 3,
        'section_margin_bottom': 0,
    }
    base.update(overrides)
    return base


def _prefixes(**overrides: str) -> dict[str, str]:
    base = {
        'h1': '',
        'sub_header': '',
        'h2': '',
        'h3': '',
        'job_meta': '',
        'bullet': '•',
    }
    base.update(overrides)
    return base


_MODERN: dict[str, Any] = {
    'key': 'modern',
    'name': 'Modern Professional',
    'margin': 15,
    'font_family': 'Inter',
    'spacing': _spacing(),
    'fonts': {'h1': 18, 'sub_header': 7.5, 'h2': 10, 'h3': 9, 'li': 8.5, 'body': 9},
    'line_heights': {'li': 1.5, 'body': 1.4},
    'colors': {
        'bg': (255, 255, 255),
        'name': (31, 41, 55),
        'role': (100, 116, 139),
        'heading': (37, 99, 235),
        'text': (71, 85, 105),
    },
    'prefixes': _prefixes(),
}

_CLASSIC: dict[str, Any] = {
    'key': 'classic',
    'name': 'Classic Minimalist',
    'margin': 15,
    'font_family': 'Inter',
    'spacing': _spacing(),
    'fonts': {'h1': 18, 'sub_header': 7.5, 'h2': 9, 'h3': 9, 'li': 8.5, 'body': 9},
    'line_heights': {'li': 1.5, 'body': 1.4},
    'colors': {
        'bg': (255, 255, 255),
        'name': (44, 62, 80),
        'role': (84, 110, 122),
        'heading': (44, 62, 80),
        'text': (51, 51, 51),
    },
    'prefixes': _prefixes(bullet='▪'),
    'header': HeaderStyle(uppercase_name=True, centered_name=True),
    'divider_after_header': DividerStyle(color=(0, 0, 0), width=1.5, gap=4),
}

_COMPACT: dict[str, Any] = {
    'key': 'compact',
    'name': 'Compact Executive',
    'margin': 12,
    'font_family': 'JetBrainsMono',
    'spacing': _spacing(
        header_bottom_margin=10,
        h1_margin_bottom=3,
        sub_header_margin_bottom=10,
        h2_margin_top=10,
        h2_margin_bottom=5,
        h3_margin_top=6,
        job_header_margin_bottom=3,
        ul_margin_top=3,
        ul_margin_bottom=8,
        li_margin_bottom=2,
    ),
    'fonts': {'h1': 14, 'sub_header': 7, 'h2': 9, 'h3': 8.5, 'li': 8, 'body': 8},
    'line_heights': {'li': 1.3, 'body': 1.3},
    'colors': {
        'bg': (255, 255, 255),
        'name': (0, 0, 0),
        'role': (100, 100, 100),
        'heading': (0, 0, 0),
        'text': (0, 0, 0),
        'bullet_color': (37, 99, 235),
    },
    'prefixes': _prefixes(bullet='>'),
    'divider_after_header': DividerStyle(color=(0, 0, 0), width=0.5, gap=6),
    'bordered_title': TitleBoxStyle(),
}

_CREATIVE: dict[str, Any] = {
    'key': 'creative',
    'name': 'Creative Designer',
    'margin': 15,
    'font_family': 'Inter',
    'spacing': _spacing(section_margin_bottom=16),
    'fonts': {'h1': 22, 'sub_header': 8, 'h2': 10, 'h3': 9, 'li': 8.5, 'body': 9},
    'line_heights': {'li': 1.5, 'body': 1.4},
    'colors': {
        'bg': (255, 255, 255),
        'name': (139, 92, 246),
        'role': (107, 114, 128),
        'heading': (139, 92, 246),
        'text': (55, 65, 81),
        'bullet_color': (139, 92, 246),
    },
    'prefixes': _prefixes(bullet='★'),
    'bullet_shape': 'diamond',
    'images': ThemeImages(
        header_bar='/static/images/pdf/creative-header-bar.png',
        section_bar='/static/images/pdf/creative-section-bar.png',
    ),
}

_CREATIVE2: dict[str, Any] = {
    **_CREATIVE,
    'key': 'creative2',
    'name': 'Creative Designer 2',
    'colors': {
        'bg': (255, 255, 255),
        'name': (13, 148, 136),
        'role': (71, 85, 105),
        'heading': (13, 148, 136),
        'text': (51, 65, 85),
        'bullet_color': (13, 148, 136),
    },
    'prefixes': _prefixes(bullet='▶'),
    'bullet_shape': 'arrowhead',
    'images': ThemeImages(
        header_bar='/static/images/pdf/creative2-header-bar.png',
        section_bar='/static/images/pdf/creative2-section-bar.png',
    ),
}

_TERMINAL: dict[str, Any] = {
    'key': 'terminal',
    'name': 'Terminal/Hacker',
    'margin': 15,
    'font_family': 'JetBrainsMono',
    'spacing': _spacing(),
    'fonts': {'h1': 16, 'sub_header': 7, 'h2': 9, 'h3': 8.5, 'li': 8.5, 'body': 9},
    'line_heights': {'li': 1.5, 'body': 1.4},
    'colors': {
        'bg': (13, 17, 23),
        'name': (88, 166, 255),
        'role': (139, 148, 158),
        'heading': (126, 231, 135),
        'text': (201, 209, 217),
        'prefix_green': (126, 231, 135),
        'prefix_gray': (139, 148, 158),
    },
    'prefixes': _prefixes(
        h1='$ whoami > ',
        sub_header='# ',
        h2='[>] ',
        h3='|-- ',
        job_meta='// ',
        bullet='> ',
    ),
}


BUILTIN_THEMES: dict[str, Theme] = {
    raw['key']: Theme.model_validate(raw)
    for raw in (_MODERN, _CLASSIC, _COMPACT, _CREATIVE, _CREATIVE2, _TERMINAL)
}


def get_theme(key: str) -> Theme:
    token = str(key or '').strip().lower()
    theme = BUILTIN_THEMES.get(token)
    if theme is None:
        known = ', '.join(sorted(BUILTIN_THEMES))
        raise KeyError(f'Unknown theme: {key!r} (known: {known})')
    return theme


def load_theme(source: str | Path) -> Theme:
    """Resolve a built-in theme key or a path to a JSON theme file."""
    token = str(source)
    if token.strip().lower() in BUILTIN_THEMES:
        return get_theme(token)
    path = Path(token).expanduser()
    if not path.exists():
        raise FileNotFoundError(f'Theme not found: {source}')
    raw = read_json(path)
    if isinstance(raw, dict):
        raw.setdefault('key', path.stem)
    return Theme.model_validate(raw)
