from __future__ import annotations

from typing import Callable

from .primitives import RGB, FontSpec, Point

Triangle = tuple[Point, Point, Point]

PETAL_WAIST = 0.3
DIAMOND_SIZE = 0.9
DIAMOND_OFFSET = (6.0, -1.0)
ARROWHEAD_OFFSET_X = 5.0
GLYPH_OFFSET_X = 5.0


def _petal(tip: Point, left: Point, right: Point, center: Point) -> list[Triangle]:
    return [(tip, left, center), (tip, right, center)]


def diamond_triangles(cx: float, cy: float, size: float) -> list[Triangle]:
    """Four-petal diamond: top, right, bottom, left petals, two triangles each."""
    waist = size * PETAL_WAIST
    center = (cx, cy)
    triangles: list[Triangle] = []
    triangles += _petal((cx, cy - size), (cx - waist, cy - waist), (cx + waist, cy - waist), center)
    triangles += _petal((cx + size, cy), (cx + waist, cy - waist), (cx + waist, cy + waist), center)
    triangles += _petal((cx, cy + size), (cx + waist, cy + waist), (cx - waist, cy + waist), center)
    triangles += _petal((cx - size, cy), (cx - waist, cy + waist), (cx - waist, cy - waist), center)
    return triangles


def arrowhead_triangle(x: float, y: float) -> Triangle:
    # Fixed 1.5-unit arrowhead; not scaled with the bullet size.
    return ((x, y - 1.5), (x, y - 0.5), (x + 1.5, y - 1))


def _diamond_bullet(left: float, baseline: float) -> list[Triangle]:
    return diamond_triangles(left + DIAMOND_OFFSET[0], baseline + DIAMOND_OFFSET[1], DIAMOND_SIZE)


def _arrowhead_bullet(left: float, baseline: float) -> list[Triangle]:
    return [arrowhead_triangle(left + ARROWHEAD_OFFSET_X, baseline)]


BULLET_SHAPES: dict[str, Callable[[float, float], list[Triangle]]] = {
    'diamond': _diamond_bullet,
    'arrowhead': _arrowhead_bullet,
}


def draw_bullet(
    backend,
    shape: str | None,
    *,
    left: float,
    baseline: float,
    color: RGB,
    glyph: str,
    font: FontSpec,
) -> None:
    """Draw a registered vector bullet, or the theme glyph for any other shape."""
    builder = BULLET_SHAPES.get(shape or '')
    if builder is None:
        backend.place_text(glyph + ' ', left + GLYPH_OFFSET_X, baseline, font=font, color=color)
        return
    for triangle in builder(left, baseline):
        backend.draw_triangle(triangle, color=color, fill=True)
