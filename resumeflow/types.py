from __future__ import annotations

import re
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .errors import MissingThemeField

RGB = tuple[int, int, int]

_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])([A-Z])')
_THEME_MAPS = ('spacing', 'fonts', 'line_heights', 'colors', 'prefixes')


def _snake_key(key: str) -> str:
    return _CAMEL_BOUNDARY.sub(r'_\1', str(key)).lower()


class _Frozen(BaseModel):
    # Theme files may use the camelCase spelling of every field.
    model_config = ConfigDict(frozen=True, extra='forbid', alias_generator=to_camel, populate_by_name=True)


class HeaderStyle(_Frozen):
    uppercase_name: bool = False
    centered_name: bool = False


class DividerStyle(_Frozen):
    color: RGB = (0, 0, 0)
    width: float = 0.5
    gap: float = 4.0


class TitleBoxStyle(_Frozen):
    fill: RGB = (230, 231, 235)
    border_color: RGB = (0, 0, 0)
    border_width: float = 0.5
    text_color: RGB = (37, 99, 235)
    text_inset: float = 2.0
    padding: float = 1.0


class ThemeImages(_Frozen):
    header_bar: str | None = None
    section_bar: str | None = None
    header_bar_height: float = 1.0
    section_bar_width: float = 1.25
    section_bar_height: float = 3.5
    section_bar_offset: float = -2.5


class Theme(_Frozen):
    key: str
    name: str
    margin: float
    font_family: str = 'Inter'

    spacing: dict[str, float]
    fonts: dict[str, float]
    line_heights: dict[str, float]
    colors: dict[str, RGB]
    prefixes: dict[str, str]

    header: HeaderStyle = Field(default_factory=HeaderStyle)
    divider_after_header: DividerStyle | None = None
    bordered_title: TitleBoxStyle | None = None
    bullet_shape: str | None = None
    images: ThemeImages | None = None

    @model_validator(mode='before')
    @classmethod
    def _normalise_map_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for group in _THEME_MAPS:
            for name in (group, to_camel(group)):
                values = data.get(name)
                if isinstance(values, dict):
                    data[name] = {_snake_key(key): value for key, value in values.items()}
        spacing = data.get('spacing')
        if isinstance(spacing, dict):
            spacing.setdefault('section_margin_bottom', 0)
        return data

    def _lookup(self, group: str, key: str) -> Any:
        values = getattr(self, group)
        if key not in values:
            raise MissingThemeField(group, key, self.name)
        return values[key]

    def spacing_px(self, key: str) -> float:
        return float(self._lookup('spacing', key))

    def font_size(self, key: str) -> float:
        return float(self._lookup('fonts', key))

    def line_height(self, key: str) -> float:
        return float(self._lookup('line_heights', key))

    def color(self, key: str) -> RGB:
        return self._lookup('colors', key)

    def first_color(self, *keys: str) -> RGB:
        for key in keys:
            if key in self.colors:
                return self.colors[key]
        raise MissingThemeField('colors', '|'.join(keys), self.name)

    def prefix(self, key: str) -> str:
        return str(self._lookup('prefixes', key))

    @property
    def background(self) -> RGB:
        return self.color('bg')


def _lift_content(data: Any) -> Any:
    # Form data nests leaf fields under "content"; flatten it onto the section.
    if not isinstance(data, dict) or not isinstance(data.get('content'), dict):
        return data
    merged = {key: value for key, value in data.items() if key != 'content'}
    for key, value in data['content'].items():
        merged.setdefault(key, value)
    return merged


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, extra='ignore')

    @model_validator(mode='before')
    @classmethod
    def _flatten_content(cls, data: Any) -> Any:
        return _lift_content(data)


class HeaderSection(_Section):
    type: Literal['header'] = 'header'
    name: str
    contact: str | None = None


class SummarySection(_Section):
    type: Literal['summary'] = 'summary'
    text: str


class BulletSection(_Section):
    type: Literal['section'] = 'section'
    title: str
    bullets: list[str] = Field(default_factory=list)


class Role(BaseModel):
    model_config = ConfigDict(frozen=True, extra='ignore')

    title: str | None = None
    period: str | None = None
    bullets: list[str] = Field(default_factory=list)


class Job(BaseModel):
    model_config = ConfigDict(frozen=True, extra='ignore')

    company: str | None = None
    roles: list[Role] = Field(default_factory=list)


class ExperienceSection(_Section):
    type: Literal['experience'] = 'experience'
    title: str
    jobs: list[Job] = Field(default_factory=list)


Section = Annotated[
    Union[HeaderSection, SummarySection, BulletSection, ExperienceSection],
    Field(discriminator='type'),
]


class Document(BaseModel):
    model_config = ConfigDict(frozen=True, extra='ignore')

    sections: list[Section] = Field(default_factory=list)


def parse_document(payload: Any) -> Document:
    if isinstance(payload, list):
        payload = {'sections': payload}
    return Document.model_validate(payload)
