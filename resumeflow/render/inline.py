from __future__ import annotations

from dataclasses import dataclass

EMPHASIS_DELIMITER = '**'


@dataclass(frozen=True)
class EmphasisSegment:
    text: str
    emphasized: bool = False


def parse_inline_emphasis(text: str, delimiter: str = EMPHASIS_DELIMITER) -> list[EmphasisSegment]:
    """Split `text` into plain/emphasized runs on `delimiter`, dropping the delimiters.

    An unterminated run keeps its emphasis to the end of the string.
    """
    source = str(text or '')
    if not source:
        return []
    if not delimiter:
        return [EmphasisSegment(text=source)]

    segments: list[EmphasisSegment] = []
    buffer: list[str] = []
    emphasized = False
    cursor = 0

    def _flush_buffer() -> None:
        nonlocal buffer
        if not buffer:
            return
        segments.append(EmphasisSegment(text=''.join(buffer), emphasized=emphasized))
        buffer = []

    while cursor < len(source):
        if source.startswith(delimiter, cursor):
            _flush_buffer()
            emphasized = not emphasized
            cursor += len(delimiter)
            continue
        buffer.append(source[cursor])
        cursor += 1

    _flush_buffer()
    return segments
