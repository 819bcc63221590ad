import pytest

from conftest import FixedWidthBackend, texts
from resumeflow.render.bullets import arrowhead_triangle, diamond_triangles, draw_bullet
from resumeflow.render.primitives import DrawTriangle, FontSpec

PURPLE = (139, 92, 246)
FONT = FontSpec(family='Inter', weight='normal', size=8.5)


def _approx_triangle(triangle):
    return [pytest.approx(point) for point in triangle]


def test_diamond_top_petal_matches_reference_values():
    triangles = diamond_triangles(21, 10, 0.9)

    assert list(triangles[0]) == _approx_triangle(((21, 9.1), (20.73, 9.73), (21, 10)))
    assert list(triangles[1]) == _approx_triangle(((21, 9.1), (21.27, 9.73), (21, 10)))


@pytest.mark.parametrize('cx, cy, size', [(0, 0, 1), (21, 10, 0.9), (-4.5, 100, 3.2)])
def test_diamond_petals_follow_vertex_formulas(cx, cy, size):
    w = 0.3 * size
    triangles = diamond_triangles(cx, cy, size)

    assert len(triangles) == 8
    expected = [
        ((cx, cy - size), (cx - w, cy - w), (cx, cy)),
        ((cx, cy - size), (cx + w, cy - w), (cx, cy)),
        ((cx + size, cy), (cx + w, cy - w), (cx, cy)),
        ((cx + size, cy), (cx + w, cy + w), (cx, cy)),
        ((cx, cy + size), (cx + w, cy + w), (cx, cy)),
        ((cx, cy + size), (cx - w, cy + w), (cx, cy)),
        ((cx - size, cy), (cx - w, cy + w), (cx, cy)),
        ((cx - size, cy), (cx - w, cy - w), (cx, cy)),
    ]
    for actual, wanted in zip(triangles, expected):
        assert list(actual) == _approx_triangle(wanted)


def test_arrowhead_uses_fixed_unit_geometry():
    assert arrowhead_triangle(20, 50) == ((20, 48.5), (20, 49.5), (21.5, 49))


def test_draw_bullet_diamond_emits_eight_filled_triangles():
    backend = FixedWidthBackend()
    draw_bullet(backend, 'diamond', left=15, baseline=40, color=PURPLE, glyph='★', font=FONT)

    assert len(backend.primitives) == 8
    assert all(isinstance(item, DrawTriangle) and item.fill and item.color == PURPLE for item in backend.primitives)
    # centred 6 units right of the margin and 1 unit above the baseline
    assert backend.primitives[0].points[2] == (21, 39)


def test_draw_bullet_arrowhead_sits_five_units_in():
    backend = FixedWidthBackend()
    draw_bullet(backend, 'arrowhead', left=15, baseline=40, color=PURPLE, glyph='▶', font=FONT)

    assert backend.primitives == [DrawTriangle(points=((20, 38.5), (20, 39.5), (21.5, 39)), color=PURPLE, fill=True)]


@pytest.mark.parametrize('shape', [None, '', 'hexagon'])
def test_unregistered_shape_falls_back_to_glyph(shape):
    backend = FixedWidthBackend()
    draw_bullet(backend, shape, left=15, baseline=40, color=PURPLE, glyph='▪', font=FONT)

    placed = texts(backend)
    assert len(backend.primitives) == 1
    assert (placed[0].text, placed[0].x, placed[0].y, placed[0].color) == ('▪ ', 20, 40, PURPLE)
