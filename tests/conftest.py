from __future__ import annotations

import base64
import struct
import zlib

import pytest

from resumeflow.render.backend import RecordingBackend
from resumeflow.render.primitives import PageGeometry, PlaceText
from resumeflow.themes import get_theme
from resumeflow.types import parse_document


class FixedWidthBackend(RecordingBackend):
    """Every character measures `char_width` length units, whatever the font."""

    def __init__(self, page: PageGeometry | None = None, char_width: float = 1.0):
        super().__init__(page)
        self.char_width = char_width

    def measure_text_width(self, text, font):
        return len(text) * self.char_width


def texts(backend) -> list[PlaceText]:
    return [item for item in backend.primitives if isinstance(item, PlaceText)]


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    return struct.pack('>I', len(data)) + kind + data + struct.pack('>I', zlib.crc32(kind + data) & 0xFFFFFFFF)


def png_bytes(width: int = 4, height: int = 4) -> bytes:
    """A solid red RGB PNG."""
    rows = b''.join(b'\x00' + b'\xff\x00\x00' * width for _ in range(height))
    return (
        b'\x89PNG\r\n\x1a\n'
        + _png_chunk(b'IHDR', struct.pack('>IIBBBBB', width, height, 8, 2, 0, 0, 0))
        + _png_chunk(b'IDAT', zlib.compress(rows))
        + _png_chunk(b'IEND', b'')
    )


def png_data_uri(payload: bytes) -> str:
    return 'data:image/png;base64,' + base64.b64encode(payload).decode('ascii')


@pytest.fixture
def fixed_backend():
    return FixedWidthBackend()


@pytest.fixture
def modern_theme():
    return get_theme('modern')


@pytest.fixture
def sample_document():
    return parse_document(
        {
            'sections': [
                {'type': 'header', 'name': 'Jane Doe', 'contact': 'jane@x.com'},
                {'type': 'summary', 'text': 'Engineer who ships **reliable** systems.'},
                {'type': 'section', 'title': 'Skills', 'bullets': ['Python', 'Distributed **systems**']},
                {
                    'type': 'experience',
                    'title': 'Experience',
                    'jobs': [
                        {
                            'company': 'Acme Corp',
                            'roles': [
                                {
                                    'title': 'Staff Engineer',
                                    'period': '2020 - 2024',
                                    'bullets': ['Led the platform team', 'Cut costs by **30%**'],
                                },
                                {'title': 'Senior Engineer', 'bullets': []},
                            ],
                        },
                        {'roles': [{'period': '2018', 'bullets': ['Freelance work']}]},
                    ],
                },
            ]
        }
    )
