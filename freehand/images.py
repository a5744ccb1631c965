"""Bitmap helpers: MIME sniffing for imported images and pattern-fill tiles."""

from __future__ import annotations

import io
from typing import Optional

from PIL import Image

PATTERN_SIZE = 8

_SIGNATURES = (
    (b"II*\x00", "image/tiff"),
    (b"MM\x00*", "image/tiff"),
    (b"BM", "image/bmp"),
    (b"\xff\xd8", "image/jpeg"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


def sniff_mime_type(data: bytes) -> Optional[str]:
    """Guess the MIME type of an embedded image from its magic bytes."""
    for magic, mime in _SIGNATURES:
        if data.startswith(magic):
            return mime
    return None


def _parse_color(color: str) -> tuple:
    value = color.lstrip("#")
    if len(value) != 6:
        return (0, 0, 0)
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def pattern_bitmap(pattern: bytes, color: str) -> bytes:
    """Encode an 8x8 one-bit pattern as PNG bytes.

    Row ``y`` is byte ``y`` of ``pattern``, most significant bit leftmost.
    Set bits take ``color``, clear bits are white.
    """

    rows = bytes(pattern[:PATTERN_SIZE]).ljust(PATTERN_SIZE, b"\x00")
    ink = _parse_color(color)
    image = Image.new("RGB", (PATTERN_SIZE, PATTERN_SIZE), (255, 255, 255))
    pixels = image.load()
    for y, row in enumerate(rows):
        for x in range(PATTERN_SIZE):
            if row & (0x80 >> x):
                pixels[x, y] = ink
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
