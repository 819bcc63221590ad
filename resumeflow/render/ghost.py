from __future__ import annotations

from .primitives import RGB, FontSpec

HEADING_MARKER = '# '
SECTION_MARKER = '## '
SUBSECTION_MARKER = '### '
CONTACT_MARKER = '**Contact:** '
BULLET_MARKER = '- '


class GhostTagEmitter:
    """Writes markdown markers in the page background colour.

    The marker lands at the exact coordinates of the visible run that follows it, so
    text extraction reads markdown while the page looks unchanged.
    """

    def __init__(self, background: RGB):
        self.background = background

    def emit(self, backend, marker: str, x: float, y: float, font: FontSpec) -> None:
        backend.place_text(marker, x, y, font=font, color=self.background)
