from __future__ import annotations

import base64
import io
import json
import logging
import re
from typing import Iterable

from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas

from .fonts import FontRegistry
from .primitives import (
    RGB,
    AddPage,
    DrawImage,
    DrawLine,
    DrawPrimitive,
    DrawRect,
    DrawTriangle,
    FontSpec,
    PageGeometry,
    PlaceText,
    Point,
    TextAlign,
    primitive_to_dict,
)
from .units import PT_TO_LENGTH

logger = logging.getLogger(__name__)

_DATA_URI_PATTERN = re.compile(r'^data:(?P<mime>[\w/+.-]+)?(?:;charset=[\w-]+)?;base64,(?P<data>.*)$', re.DOTALL)


def _split_token_by_width(token: str, *, max_width: float, measure) -> list[str]:
    if not token:
        return []

    chunks: list[str] = []
    current = ''
    for char in token:
        candidate = f'{current}{char}'
        if measure(candidate) <= max_width:
            current = candidate
            continue
        if current:
            chunks.append(current)
            current = char
            continue
        chunks.append(char)
        current = ''
    if current:
        chunks.append(current)
    return chunks


def decode_data_uri(source: str) -> bytes:
    match = _DATA_URI_PATTERN.match(source or '')
    if match is None:
        raise ValueError('not a base64 data URI')
    return base64.b64decode(match.group('data'))


class RecordingBackend:
    """Collects the primitive stream; text metrics come from reportlab."""

    def __init__(self, page: PageGeometry | None = None, fonts: FontRegistry | None = None):
        self.page = page or PageGeometry()
        self.fonts = fonts or FontRegistry()
        self.primitives: list[DrawPrimitive] = []

    @property
    def page_count(self) -> int:
        return 1 + sum(1 for item in self.primitives if isinstance(item, AddPage))

    def _emit(self, primitive: DrawPrimitive) -> None:
        self.primitives.append(primitive)

    def place_text(
        self,
        text: str,
        x: float,
        y: float,
        *,
        font: FontSpec,
        color: RGB,
        align: TextAlign = 'left',
    ) -> None:
        self._emit(PlaceText(text=text, x=x, y=y, font=font, color=color, align=align))

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, *, color: RGB, width: float) -> None:
        self._emit(DrawLine(x1=x1, y1=y1, x2=x2, y2=y2, color=color, width=width))

    def draw_triangle(self, points: tuple[Point, Point, Point], *, color: RGB, fill: bool = True) -> None:
        self._emit(DrawTriangle(points=points, color=color, fill=fill))

    def draw_rect(self, x: float, y: float, width: float, height: float, *, color: RGB, fill: bool = True) -> None:
        self._emit(DrawRect(x=x, y=y, width=width, height=height, color=color, fill=fill))

    def draw_image(self, source: str, x: float, y: float, width: float, height: float) -> None:
        self._emit(DrawImage(source=source, x=x, y=y, width=width, height=height))

    def add_page(self) -> None:
        self._emit(AddPage())

    def measure_text_width(self, text: str, font: FontSpec) -> float:
        return self.fonts.string_width(text, font) * PT_TO_LENGTH

    def wrap_text_to_width(self, text: str, max_width: float, font: FontSpec) -> list[str]:
        def measure(value: str) -> float:
            return self.measure_text_width(value, font)

        lines: list[str] = []
        for paragraph in str(text or '').split('\n'):
            current = ''
            for word in paragraph.split(' '):
                candidate = f'{current} {word}' if current else word
                if measure(candidate) <= max_width:
                    current = candidate
                    continue
                if current:
                    lines.append(current)
                    current = ''
                if measure(word) <= max_width:
                    current = word
                    continue
                chunks = _split_token_by_width(word, max_width=max_width, measure=measure)
                lines.extend(chunks[:-1])
                current = chunks[-1] if chunks else ''
            lines.append(current)
        return lines

    def finalize(self) -> bytes:
        stream = [primitive_to_dict(item) for item in self.primitives]
        return json.dumps(stream, ensure_ascii=False).encode('utf-8')


class ReportLabBackend(RecordingBackend):
    """Replays the primitive stream onto a reportlab canvas.

    Coordinates arrive in millimetres from the top-left corner; reportlab draws in
    points from the bottom-left corner.
    """

    def __init__(
        self,
        page: PageGeometry | None = None,
        fonts: FontRegistry | None = None,
        *,
        title: str | None = None,
        producer: str = 'resumeflow',
        invariant: bool = True,
    ):
        super().__init__(page, fonts)
        self.title = title
        self.producer = producer
        self.invariant = invariant

    def _to_pdf(self, x: float, y: float) -> tuple[float, float]:
        return x * mm, (self.page.height - y) * mm

    def _draw_text(self, canvas: Canvas, item: PlaceText) -> None:
        canvas.setFont(self.fonts.resolve(item.font), item.font.size)
        canvas.setFillColorRGB(*(channel / 255 for channel in item.color))
        x, y = self._to_pdf(item.x, item.y)
        if item.align == 'right':
            canvas.drawRightString(x, y, item.text)
        elif item.align == 'center':
            canvas.drawCentredString(x, y, item.text)
        else:
            canvas.drawString(x, y, item.text)

    def _draw_triangle(self, canvas: Canvas, item: DrawTriangle) -> None:
        canvas.setFillColorRGB(*(channel / 255 for channel in item.color))
        path = canvas.beginPath()
        first, *rest = [self._to_pdf(px, py) for px, py in item.points]
        path.moveTo(*first)
        for point in rest:
            path.lineTo(*point)
        path.close()
        canvas.drawPath(path, stroke=0 if item.fill else 1, fill=1 if item.fill else 0)

    def _draw_image(self, canvas: Canvas, item: DrawImage) -> None:
        x, top = self._to_pdf(item.x, item.y)
        try:
            reader = ImageReader(io.BytesIO(decode_data_uri(item.source)))
            # pixel data is decoded lazily; force it before anything reaches the canvas
            reader.getRGBData()
            canvas.drawImage(
                reader,
                x,
                top - item.height * mm,
                width=item.width * mm,
                height=item.height * mm,
                mask='auto',
            )
        except Exception as exc:
            logger.warning('Skipping undecodable image payload: %s', exc)

    def _replay(self, canvas: Canvas, primitives: Iterable[DrawPrimitive]) -> None:
        for item in primitives:
            if isinstance(item, PlaceText):
                self._draw_text(canvas, item)
            elif isinstance(item, DrawRect):
                canvas.setFillColorRGB(*(channel / 255 for channel in item.color))
                canvas.setStrokeColorRGB(*(channel / 255 for channel in item.color))
                x, top = self._to_pdf(item.x, item.y)
                canvas.rect(
                    x,
                    top - item.height * mm,
                    item.width * mm,
                    item.height * mm,
                    stroke=0 if item.fill else 1,
                    fill=1 if item.fill else 0,
                )
            elif isinstance(item, DrawLine):
                canvas.setStrokeColorRGB(*(channel / 255 for channel in item.color))
                canvas.setLineWidth(item.width * mm)
                canvas.line(*self._to_pdf(item.x1, item.y1), *self._to_pdf(item.x2, item.y2))
            elif isinstance(item, DrawTriangle):
                self._draw_triangle(canvas, item)
            elif isinstance(item, DrawImage):
                self._draw_image(canvas, item)
            elif isinstance(item, AddPage):
                canvas.showPage()

    def finalize(self) -> bytes:
        buffer = io.BytesIO()
        canvas = Canvas(
            buffer,
            pagesize=(self.page.width * mm, self.page.height * mm),
            invariant=1 if self.invariant else 0,
        )
        canvas.setProducer(self.producer)
        if self.title:
            canvas.setTitle(self.title)
        self._replay(canvas, self.primitives)
        canvas.showPage()
        canvas.save()
        return buffer.getvalue()
