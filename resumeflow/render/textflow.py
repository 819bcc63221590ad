from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from .ghost import GhostTagEmitter
from .inline import EMPHASIS_DELIMITER, EmphasisSegment, parse_inline_emphasis
from .primitives import RGB, FontSpec
from .units import line_advance


@dataclass(frozen=True)
class FlowResult:
    y: float
    line_count: int


_INLINE_SPACE = re.compile(r'[^\S\n]+')


def _segment_words(segment: EmphasisSegment) -> list[str | None]:
    """Words of `segment`, each but the last keeping one trailing space.

    Runs of spaces and tabs collapse to one separator; `None` marks a hard line break.
    """
    tokens: list[str | None] = []
    for index, paragraph in enumerate(segment.text.split('\n')):
        if index:
            tokens.append(None)
        words = _INLINE_SPACE.split(paragraph)
        tokens.extend(word + ' ' if position < len(words) - 1 else word for position, word in enumerate(words))
    return tokens


def flow_segments(
    backend,
    segments: Iterable[EmphasisSegment],
    *,
    x: float,
    y: float,
    max_width: float,
    font: FontSpec,
    line_height: float,
    color: RGB,
    ghost: GhostTagEmitter,
    delimiter: str = EMPHASIS_DELIMITER,
) -> FlowResult:
    """Greedy word wrap of styled segments starting at (x, y).

    A word wider than the whole line is placed unsplit and overflows the right edge.
    Every newline in the text starts a new line at `x`. Returns the baseline of the last line written.
    """
    right_edge = x + max_width
    advance = line_advance(font.size, line_height)
    current_x = x
    current_y = y
    line_count = 1

    for segment in segments:
        word_font = FontSpec(family=font.family, weight='bold' if segment.emphasized else 'normal', size=font.size)
        words = _segment_words(segment)
        for index, word in enumerate(words):
            if word is None:
                current_y += advance
                current_x = x
                line_count += 1
                continue

            width = backend.measure_text_width(word, word_font)

            if current_x + width > right_edge and current_x > x:
                current_y += advance
                current_x = x
                line_count += 1

            if segment.emphasized and index == 0:
                ghost.emit(backend, delimiter, current_x, current_y, word_font)

            if word.strip():
                backend.place_text(word, current_x, current_y, font=word_font, color=color)
            current_x += width

            if segment.emphasized and index == len(words) - 1:
                ghost.emit(backend, delimiter, current_x, current_y, word_font)

    return FlowResult(y=current_y, line_count=line_count)


def flow_inline_text(
    backend,
    text: str,
    *,
    x: float,
    y: float,
    max_width: float,
    font: FontSpec,
    line_height: float,
    color: RGB,
    ghost: GhostTagEmitter,
) -> FlowResult:
    return flow_segments(
        backend,
        parse_inline_emphasis(text),
        x=x,
        y=y,
        max_width=max_width,
        font=font,
        line_height=line_height,
        color=color,
        ghost=ghost,
    )
