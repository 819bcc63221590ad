from resumeflow.render.backend import RecordingBackend
from resumeflow.render.pagination import PaginationEngine
from resumeflow.render.primitives import AddPage, DrawRect, PageGeometry

DARK = (13, 17, 23)


def _engine(margin=15.0):
    backend = RecordingBackend(PageGeometry(210, 297))
    return backend, PaginationEngine(backend, page=backend.page, margin=margin, background=DARK)


def test_initial_state_is_top_margin_on_first_page():
    _, engine = _engine()
    assert engine.cursor_y == 15.0
    assert engine.page_index == 0


def test_ensure_space_is_noop_when_block_fits():
    backend, engine = _engine()
    engine.advance(200)

    assert engine.ensure_space(30) is False
    assert engine.cursor_y == 215
    assert engine.page_index == 0
    assert backend.primitives == []


def test_block_ending_exactly_at_bottom_margin_fits():
    backend, engine = _engine()
    engine.advance(297 - 15 - 15 - 30)

    assert engine.ensure_space(30) is False
    assert backend.primitives == []


def test_overflow_starts_new_page_and_repaints_background():
    backend, engine = _engine()
    engine.advance(260)

    assert engine.ensure_space(30) is True
    assert engine.cursor_y == 15.0
    assert engine.page_index == 1
    assert backend.primitives == [AddPage(), DrawRect(x=0, y=0, width=210, height=297, color=DARK, fill=True)]


def test_each_break_increments_page_index():
    _, engine = _engine(margin=10)
    for expected in (1, 2, 3):
        engine.advance(280)
        engine.ensure_space(5)
        assert engine.page_index == expected
        assert engine.cursor_y == 10
