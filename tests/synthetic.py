"""Builders for small FreeHand documents packed byte by byte."""

from __future__ import annotations

import struct
import zlib
from typing import Dict, List, Sequence, Tuple

from freehand.entities import Block, ElementList, Layer, PropList, RGBColor, BasicFill
from freehand.path import Path
from freehand.store import SceneStore


def u8(value: int) -> bytes:
    return struct.pack(">B", value)


def u16(value: int) -> bytes:
    return struct.pack(">H", value)


def u32(value: int) -> bytes:
    return struct.pack(">I", value)


def coord(value: float) -> bytes:
    return struct.pack(">i", int(round(value * 65536)))


def inches(value: float) -> bytes:
    return coord(value * 72.0)


def rid(value: int) -> bytes:
    return u16(value)


def mname(text: str) -> bytes:
    raw = text.encode("mac_roman")
    size = (len(raw) + 3) // 4
    body = u16(size) + u16(len(raw)) + raw
    return body.ljust((size + 1) * 4, b"\x00")


def process_color(red: int, green: int, blue: int) -> bytes:
    return rid(0) + bytes(2) + u16(red) + u16(green) + u16(blue) + bytes(4) + bytes(8)


def basic_fill(color_id: int) -> bytes:
    return rid(color_id) + bytes(4)


def prop_lst(pairs: Sequence[Tuple[int, int]]) -> bytes:
    body = u16(len(pairs)) + u16(len(pairs)) + bytes(4)
    for name_id, value_id in pairs:
        body += rid(name_id) + rid(value_id)
    return body


def path_record(style_id: int, points: Sequence[Tuple[float, float]], closed: bool = True) -> bytes:
    body = u16(len(points)) + rid(style_id) + rid(0) + bytes(4) + bytes(9)
    body += u8(1 if closed else 0) + u16(len(points))
    for x, y in points:
        body += bytes(1) + u8(0) + bytes(1)
        body += (inches(x) + inches(y)) * 3
    return body


def list_record(elements: Sequence[int], list_type: int = 0) -> bytes:
    body = u16(len(elements)) + u16(len(elements)) + bytes(6) + u16(list_type)
    return body + b"".join(rid(element) for element in elements)


def layer_record(elements_id: int, visibility: int = 3) -> bytes:
    return rid(0) + bytes(4) + bytes(6) + rid(elements_id) + rid(0) + u16(visibility) + bytes(2)


def block_record(layer_list_id: int, version: int) -> bytes:
    infos = b"".join(rid(layer_list_id if index == 5 else 0) for index in range(12))
    if version == 8:
        return infos + bytes(14)
    return infos + bytes(14) + rid(0) * 3 + bytes(1) + rid(0)


def tail_record(width: float, height: float) -> bytes:
    body = rid(0) * 3
    body = body.ljust(0x1A, b"\x00") + inches(width) + inches(height)
    return body.ljust(0x32, b"\x00")


SQUARE = [(1.0, 1.0), (2.0, 1.0), (2.0, 2.0), (1.0, 2.0)]


def square_records(version: int) -> List[Tuple[str, bytes]]:
    """One visible layer holding a closed square filled with #336699."""
    return [
        ("MName", mname("fill")),  # 1
        ("ProcessColor", process_color(0x3333, 0x6666, 0x9999)),  # 2
        ("BasicFill", basic_fill(2)),  # 3
        ("PropLst", prop_lst([(1, 3)])),  # 4
        ("Path", path_record(4, SQUARE)),  # 5
        ("MList", list_record([5])),  # 6
        ("Layer", layer_record(6)),  # 7
        ("MList", list_record([7])),  # 8
        ("Block", block_record(8, version)),  # 9
    ]


def build_document(
    records: Sequence[Tuple[str, bytes]],
    version_char: str = "4",
    tail: bytes | None = None,
) -> bytes:
    """Pack records into an ``AGD<version_char>`` container.

    Version 9 and later (``"4"`` upwards) get a raw-deflate data stream.
    """

    version = ord(version_char) - 0x30 + 5
    tokens: Dict[str, int] = {}
    record_list: List[int] = []
    data = b""
    for name, body in records:
        token = tokens.setdefault(name, len(tokens) + 1)
        record_list.append(token)
        data += body
    data += tail_record(8.5, 11.0) if tail is None else tail

    if version >= 9:
        compressor = zlib.compressobj(9, zlib.DEFLATED, -zlib.MAX_WBITS)
        data = compressor.compress(data) + compressor.flush()

    header = b"AGD" + version_char.encode("ascii") + bytes(4) + u32(12 + len(data))

    dictionary = u16(len(tokens)) + bytes(2)
    for name, token in tokens.items():
        dictionary += u16(token)
        if version <= 8:
            dictionary += bytes(2)
        dictionary += name.encode("ascii") + b"\x00"
        if version <= 8:
            dictionary += b"\x00\x00"

    listing = u32(len(record_list)) + b"".join(u16(token) for token in record_list)
    return header + data + dictionary + listing


def wrap_document(document: bytes) -> bytes:
    """Embed ``document`` in the 0x1c chunk wrapper behind an unrelated chunk."""
    preamble = b"\x1c" + u16(0x0102) + u8(0) + u8(3) + b"abc"
    chunk = b"\x1c" + u16(0x080A) + u8(0x80) + u8(4) + u32(len(document))
    return preamble + chunk + document


def square_path(style_id: int = 0, closed: bool = True) -> Path:
    path = Path(graphic_style_id=style_id)
    path.append_move_to(0.0, 0.0)
    path.append_line_to(1.0, 0.0)
    path.append_line_to(1.0, 1.0)
    path.append_line_to(0.0, 1.0)
    if closed:
        path.append_close_path()
    return path


def filled_scene(store: SceneStore, color: RGBColor) -> int:
    """Populate ``store`` with a one-layer document; returns the path's style id."""
    store.collect_name(1, "fill")
    store.collect_color(2, color)
    store.collect_basic_fill(3, BasicFill(2))
    store.collect_prop_list(4, PropList(0, {1: 3}))
    store.collect_path(5, square_path(4))
    store.collect_list(6, ElementList(0, (5,)))
    store.collect_layer(7, Layer(0, 6, 3))
    store.collect_list(8, ElementList(0, (7,)))
    store.collect_block(9, Block(8))
    return 4
