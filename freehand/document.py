"""Public entry points: format sniffing, parsing into a painter, SVG output."""

from __future__ import annotations

import io
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from .errors import FreeHandError
from .logging import DiagnosticLog
from .painter import Painter
from .parser import FreeHandParser
from .render import Renderer, RenderOptions
from .store import SceneStore
from .stream import FreeHandStream
from .svg import SVGDrawingGenerator

Source = Union[bytes, bytearray, memoryview, Path, BinaryIO]

WRAPPER_MARKER = 0x1C
WRAPPER_DOCUMENT_OPCODE = 0x080A
WRAPPER_LONG_LENGTH = 0x80


def read_source(source: Source) -> bytes:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    if isinstance(source, Path):
        return source.read_bytes()
    if isinstance(source, io.IOBase) or hasattr(source, "read"):
        return bytes(source.read())
    raise TypeError(f"unsupported source type: {type(source).__name__}")


def _has_magic(stream: FreeHandStream) -> bool:
    position = stream.tell()
    magic = stream.read(4)
    stream.seek(position)
    return len(magic) == 4 and magic[:3] in (b"AGD", b"FH3")


def find_document_offset(data: bytes) -> Optional[int]:
    """Offset of the FreeHand header in ``data``, or ``None``.

    The header is either at the start of the file or inside a chunked
    wrapper: a sequence of ``0x1c`` chunks whose ``0x080a`` chunk, written
    with a long (u32) length, carries the document.
    """

    stream = FreeHandStream(data)
    if _has_magic(stream):
        return 0
    while not stream.at_end():
        if stream.read_u8() != WRAPPER_MARKER:
            return None
        opcode = stream.read_u16()
        flag = stream.read_u8()
        length = stream.read_u8()
        if flag == WRAPPER_LONG_LENGTH:
            if length != 4:
                return None
            length = stream.read_u32()
            if opcode == WRAPPER_DOCUMENT_OPCODE and _has_magic(stream):
                return stream.tell()
        stream.skip(length)
    return None


def is_supported(source: Source) -> bool:
    try:
        return find_document_offset(read_source(source)) is not None
    except (FreeHandError, OSError, TypeError):
        return False


def load_store(data: bytes, log: DiagnosticLog) -> Optional[SceneStore]:
    """Decode ``data`` into a populated store, ``None`` if it is not a FreeHand file."""
    offset = find_document_offset(data)
    if offset is None:
        return None
    store = SceneStore(log)
    stream = FreeHandStream(data)
    stream.seek(offset)
    if not FreeHandParser(store, log).parse(stream):
        return None
    return store


def parse(
    source: Source,
    painter: Painter,
    *,
    options: RenderOptions | None = None,
    log: DiagnosticLog | None = None,
) -> bool:
    """Decode ``source`` and replay it into ``painter``.

    Returns ``False`` for unrecognised input, structural errors in the
    record stream, or a document without a Block. The painter may have
    received part of the drawing by then.
    """

    log = log or DiagnosticLog()
    try:
        store = load_store(read_source(source), log)
        if store is None:
            return False
        return Renderer(store, options, log).output_drawing(painter)
    except FreeHandError as exc:
        log.warn(f"Parsing failed: {exc}")
        return False


def generate_svg(
    source: Source,
    output: List[str],
    *,
    options: RenderOptions | None = None,
    log: DiagnosticLog | None = None,
) -> bool:
    generator = SVGDrawingGenerator(output)
    if not parse(source, generator, options=options, log=log):
        return False
    return bool(output)
