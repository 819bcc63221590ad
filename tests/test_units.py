import pytest

from resumeflow.render.units import line_advance, pt_to_length, px_to_length


def test_known_conversions():
    assert pt_to_length(18) == pytest.approx(6.35)
    assert px_to_length(4) == pytest.approx(1.0583, abs=1e-4)
    assert px_to_length(96) == pytest.approx(25.4)
    assert pt_to_length(72) == pytest.approx(25.4)


@pytest.mark.parametrize('value', [0, 0.5, 3, 7.5, 18, 120])
def test_conversions_are_linear(value):
    assert px_to_length(2 * value) == pytest.approx(2 * px_to_length(value))
    assert pt_to_length(2 * value) == pytest.approx(2 * pt_to_length(value))
    assert line_advance(2 * value, 1.5) == pytest.approx(2 * line_advance(value, 1.5))


def test_line_advance_is_font_size_times_multiplier_in_points():
    assert line_advance(8.5, 1.5) == pytest.approx(pt_to_length(8.5 * 1.5))
    assert line_advance(9, 1.0) == pytest.approx(pt_to_length(9))
    assert line_advance(0, 1.4) == 0
