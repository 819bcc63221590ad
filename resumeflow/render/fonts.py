from __future__ import annotations

import hashlib
import io
import logging

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from .primitives import FontSpec, FontWeight

logger = logging.getLogger(__name__)

BUILTIN_FONTS: dict[str, str] = {
    'normal': 'Helvetica',
    'bold': 'Helvetica-Bold',
}


def _font_available(font_name: str) -> bool:
    try:
        pdfmetrics.getFont(font_name)
        return True
    except Exception:
        return False


class FontRegistry:
    """Maps (family, weight) pairs onto fonts registered with reportlab."""

    def __init__(self) -> None:
        self._names: dict[tuple[str, str], str] = {}
        self._warned: set[tuple[str, str]] = set()

    def register_truetype(self, family: str, weight: FontWeight, payload: bytes) -> bool:
        # one reportlab name per distinct payload, across every render in the process
        digest = hashlib.sha1(payload).hexdigest()[:12]
        font_name = f'RF-{family}-{weight}-{digest}'
        if font_name not in pdfmetrics.getRegisteredFontNames():
            try:
                pdfmetrics.registerFont(TTFont(font_name, io.BytesIO(payload)))
            except Exception as exc:
                logger.warning('Failed to register PDF font %s (%s): %s', family, weight, exc)
                return False
        self._names[(family, weight)] = font_name
        return True

    def register_alias(self, family: str, weight: FontWeight, font_name: str) -> bool:
        if not _font_available(font_name):
            return False
        self._names[(family, weight)] = font_name
        return True

    def is_registered(self, family: str, weight: FontWeight) -> bool:
        return (family, weight) in self._names

    def registered_name(self, family: str, weight: FontWeight) -> str | None:
        return self._names.get((family, weight))

    def resolve(self, font: FontSpec) -> str:
        key = (font.family, font.weight)
        name = self._names.get(key)
        if name is not None:
            return name
        if key not in self._warned:
            self._warned.add(key)
            logger.warning('Font %s (%s) unavailable; using %s', font.family, font.weight, BUILTIN_FONTS[font.weight])
        return BUILTIN_FONTS[font.weight]

    def string_width(self, text: str, font: FontSpec) -> float:
        """Width of `text` in points."""
        if not text:
            return 0.0
        return float(pdfmetrics.stringWidth(text, self.resolve(font), font.size))
