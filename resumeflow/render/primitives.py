from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal, Union

RGB = tuple[int, int, int]
Point = tuple[float, float]
FontWeight = Literal['normal', 'bold']
TextAlign = Literal['left', 'right', 'center']


@dataclass(frozen=True)
class PageGeometry:
    width: float = 210.0
    height: float = 297.0


@dataclass(frozen=True)
class FontSpec:
    family: str
    weight: FontWeight
    size: float

    def with_size(self, size: float) -> FontSpec:
        return FontSpec(family=self.family, weight=self.weight, size=size)


@dataclass(frozen=True)
class PlaceText:
    text: str
    x: float
    y: float
    font: FontSpec
    color: RGB
    align: TextAlign = 'left'


@dataclass(frozen=True)
class DrawLine:
    x1: float
    y1: float
    x2: float
    y2: float
    color: RGB
    width: float


@dataclass(frozen=True)
class DrawTriangle:
    points: tuple[Point, Point, Point]
    color: RGB
    fill: bool = True


@dataclass(frozen=True)
class DrawRect:
    x: float
    y: float
    width: float
    height: float
    color: RGB
    fill: bool = True


@dataclass(frozen=True)
class DrawImage:
    source: str
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class AddPage:
    pass


DrawPrimitive = Union[PlaceText, DrawLine, DrawTriangle, DrawRect, DrawImage, AddPage]


def primitive_to_dict(primitive: DrawPrimitive) -> dict[str, Any]:
    payload = asdict(primitive)
    if isinstance(primitive, DrawImage):
        # data URIs are large; keep the stream readable
        payload['source'] = primitive.source[:48] + ('...' if len(primitive.source) > 48 else '')
    return {'kind': type(primitive).__name__, **payload}
