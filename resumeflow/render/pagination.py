from __future__ import annotations

import logging

from .primitives import RGB, PageGeometry

logger = logging.getLogger(__name__)


class PaginationEngine:
    """Owns the vertical cursor and the page index for one render."""

    def __init__(self, backend, *, page: PageGeometry, margin: float, background: RGB):
        self.backend = backend
        self.page = page
        self.margin = margin
        self.background = background
        self.cursor_y = margin
        self.page_index = 0

    @property
    def bottom_limit(self) -> float:
        return self.page.height - self.margin

    def paint_background(self) -> None:
        self.backend.draw_rect(0, 0, self.page.width, self.page.height, color=self.background, fill=True)

    def advance(self, delta: float) -> None:
        self.cursor_y += delta

    def new_page(self) -> None:
        self.backend.add_page()
        self.paint_background()
        self.cursor_y = self.margin
        self.page_index += 1
        logger.debug('Started page %d', self.page_index + 1)

    def ensure_space(self, required: float) -> bool:
        if self.cursor_y + required > self.bottom_limit:
            self.new_page()
            return True
        return False
