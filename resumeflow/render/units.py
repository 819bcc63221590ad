"""Conversions from CSS-style measurements to page length units (millimetres)."""

from __future__ import annotations

PT_TO_LENGTH = 25.4 / 72
PX_TO_LENGTH = 25.4 / 96


def px_to_length(value: float) -> float:
    return value * PX_TO_LENGTH


def pt_to_length(size: float) -> float:
    return size * PT_TO_LENGTH


def line_advance(font_size: float, line_height: float) -> float:
    """Cursor advance for one wrapped line at `font_size` points."""
    return font_size * line_height * PT_TO_LENGTH
