"""Record decoders for the FreeHand container.

A document is a header, a compressed (version 9 and later) or plain data
stream of records, a dictionary mapping small ids to record type names and
a record list giving the type of each record in stream order. Records carry
no length prefix, so every type must be decoded (or skipped) exactly by its
layout for the following records to line up.

Each decoder ends in at most one ``collect_*`` call on the ``SceneStore``;
the record id is the record's 1-based position in the record list.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Tuple

from . import constants as C
from .entities import (
    AGDFont,
    AttributeHolder,
    BasicFill,
    BasicLine,
    Block,
    CharProperties,
    ColorStop,
    CompositePath,
    CustomProc,
    DataList,
    DisplayText,
    ElementList,
    FilterAttributeHolder,
    GlowFilter,
    GraphicStyle,
    Group,
    ImageImport,
    Layer,
    LegacyCharProperties,
    LegacyParaProperties,
    LensFill,
    LinePattern,
    LinearFill,
    NewBlend,
    PageInfo,
    Paragraph,
    ParagraphProperties,
    PathText,
    PatternFill,
    PatternLine,
    PropList,
    RadialFill,
    RGBColor,
    ShadowFilter,
    SymbolClass,
    SymbolInstance,
    Tab,
    Tail,
    TEffect,
    TextObject,
    TileFill,
    TintColor,
)
from .errors import EndOfStreamError, GenericError
from .logging import DiagnosticLog
from .path import Path
from .store import SceneStore
from .stream import FreeHandStream, internal_stream
from .text import decode_mac_roman, decode_utf16
from .transform import Transform

HEADER_SIZE = 12
TWO_PI = 2.0 * math.pi


def read_record_id(stream: FreeHandStream) -> int:
    record_id = stream.read_u16()
    if record_id == 0xFFFF:
        record_id = 0x1FF00 - stream.read_u16()
    return record_id


def read_coordinate(stream: FreeHandStream) -> float:
    return stream.read_s32() / 65536.0


def read_rgb_color(stream: FreeHandStream) -> RGBColor:
    red = stream.read_u16()
    green = stream.read_u16()
    blue = stream.read_u16()
    return RGBColor(red, green, blue)


def read_cmyk_color(stream: FreeHandStream) -> RGBColor:
    """CMYK (stored K, C, M, Y) folded to RGB without a colour profile."""
    black = stream.read_u16()
    cyan = stream.read_u16()
    magenta = stream.read_u16()
    yellow = stream.read_u16()

    def channel(value: int) -> int:
        return (0xFFFF - value) * (0xFFFF - black) // 0xFFFF

    return RGBColor(channel(cyan), channel(magenta), channel(yellow))


def xform_calc(var1: int, var2: int) -> int:
    """Byte length of the matrix terms announced by a packed transform header."""
    if var1 & 0x4:
        return 0
    length = 0
    if not var1 & 0x20:
        length += 4
    if not var1 & 0x10:
        length += 4
    if var1 & 0x2:
        length += 4
    if var1 & 0x1:
        length += 4
    if var2 & 0x40:
        length += 4
    if var2 & 0x20:
        length += 4
    return length


def read_packed_transform(stream: FreeHandStream, var1: int, var2: int) -> Transform:
    m11, m21, m12, m22, m13, m23 = 1.0, 0.0, 0.0, 1.0, 0.0, 0.0
    if not var1 & 0x4:
        if not var1 & 0x10:
            m11 = read_coordinate(stream)
        if var2 & 0x40:
            m21 = read_coordinate(stream)
        if var2 & 0x20:
            m12 = read_coordinate(stream)
        if not var1 & 0x20:
            m22 = read_coordinate(stream)
        if var1 & 0x1:
            m13 = read_coordinate(stream) / 72.0
        if var1 & 0x2:
            m23 = read_coordinate(stream) / 72.0
    return Transform(m11, m21, m12, m22, m13, m23)


def _normalize_angle(angle: float) -> float:
    while angle < 0.0:
        angle += TWO_PI
    while angle > TWO_PI:
        angle -= TWO_PI
    return angle


def _path_from_segments(segments: List[Tuple[Tuple[float, float], ...]], closed: bool, scale: float) -> Path:
    """Build a Bezier path from FreeHand point records.

    Each segment holds the anchor, the incoming and the outgoing control
    point. Coordinates are divided by ``scale``.
    """

    path = Path()
    first = segments[0]
    path.append_move_to(first[0][0] / scale, first[0][1] / scale)
    for current, following in zip(segments, segments[1:]):
        path.append_cubic_bezier_to(
            current[2][0] / scale,
            current[2][1] / scale,
            following[1][0] / scale,
            following[1][1] / scale,
            following[0][0] / scale,
            following[0][1] / scale,
        )
    if closed:
        last = segments[-1]
        path.append_cubic_bezier_to(
            last[2][0] / scale,
            last[2][1] / scale,
            first[1][0] / scale,
            first[1][1] / scale,
            first[0][0] / scale,
            first[0][1] / scale,
        )
        path.append_close_path()
    return path


def _read_segments(stream: FreeHandStream, count: int) -> List[Tuple[Tuple[float, float], ...]]:
    """Read up to ``count`` 27-byte point records, stopping at the end of the data.

    A point record cut short raises ``EndOfStreamError``.
    """
    segments: List[Tuple[Tuple[float, float], ...]] = []
    for _ in range(count):
        if stream.at_end():
            break
        stream.skip(1)
        stream.read_u8()  # point type
        stream.skip(1)
        points = []
        for _ in range(3):
            x = read_coordinate(stream)
            y = read_coordinate(stream)
            points.append((x, y))
        segments.append(tuple(points))
    return segments


class FreeHandParser:
    """Decode one document into a ``SceneStore``."""

    def __init__(self, store: SceneStore, log: DiagnosticLog | None = None) -> None:
        self.store = store
        self.log = log or store.log
        self.version = 0
        self.dictionary: Dict[int, str] = {}
        self.records: List[int] = []
        self.current_record = 0
        self._min_x = 0.0
        self._min_y = 0.0
        self._max_x = 0.0
        self._max_y = 0.0

    @property
    def record_id(self) -> int:
        return self.current_record + 1

    # -- container -------------------------------------------------------

    def parse(self, stream: FreeHandStream) -> bool:
        """Read the container starting at the stream's current position.

        Returns ``False`` when the header magic is not recognised.
        """

        data_offset = stream.tell()
        magic = stream.read(4)
        if len(magic) < 4:
            return False
        if magic[:3] == b"AGD":
            self.version = magic[3] - 0x30 + 5
        elif magic[:3] == b"FH3":
            self.version = 3
        else:
            return False

        stream.skip(4)
        data_length = stream.read_u32()
        if data_length < HEADER_SIZE:
            raise GenericError(f"data length {data_length} is shorter than the header")
        stream.seek(data_offset + data_length)

        self.parse_dictionary(stream)
        self.parse_record_list(stream)

        stream.seek(data_offset + HEADER_SIZE)
        data = internal_stream(stream, data_length - HEADER_SIZE, self.version >= 9)
        self.parse_document(data)
        return True

    def parse_dictionary(self, stream: FreeHandStream) -> None:
        count = stream.read_u16()
        stream.skip(2)
        for _ in range(count):
            token = stream.read_u16()
            if self.version <= 8:
                stream.skip(2)
            name = bytearray()
            while True:
                char = stream.read_u8()
                if not char:
                    break
                name.append(char)
            if self.version <= 8:
                zeros = 0
                while zeros < 2:
                    if not stream.read_u8():
                        zeros += 1
            self.dictionary[token] = name.decode("latin-1")

    def parse_record_list(self, stream: FreeHandStream) -> None:
        count = stream.read_u32()
        count = min(count, stream.remaining() // 2)
        self.records = [stream.read_u16() for _ in range(count)]

    def parse_document(self, stream: FreeHandStream) -> None:
        self.parse_records(stream)
        self.store.collect_page_info(PageInfo(self._min_x, self._min_y, self._max_x, self._max_y))

    def parse_records(self, stream: FreeHandStream) -> None:
        self.current_record = 0
        while self.current_record < len(self.records) and not stream.at_end():
            token = self.records[self.current_record]
            name = self.dictionary.get(token)
            if name is None:
                self.log.warn(f"Record {self.record_id}: type 0x{token:x} is not in the dictionary")
            else:
                self.parse_record(stream, name)
            self.current_record += 1
        self.read_fh_tail(stream)

    def parse_record(self, stream: FreeHandStream, name: str) -> None:
        reader = self.reader_for(name)
        if reader is None:
            self.log.warn(f"Record {self.record_id}: unknown record type {name!r}")
            return
        reader(stream)

    def reader_for(self, name: str) -> Optional[Callable[[FreeHandStream], None]]:
        method = RECORD_READERS.get(name.lower())
        return getattr(self, method) if method else None

    # -- structure -------------------------------------------------------

    def read_fh_tail(self, stream: FreeHandStream) -> None:
        start = stream.tell()
        block_id = read_record_id(stream)
        prop_lst_id = read_record_id(stream)
        font_id = read_record_id(stream)
        stream.seek(start + 0x1A)
        max_x = read_coordinate(stream) / 72.0
        max_y = read_coordinate(stream) / 72.0
        stream.seek(start + 0x32)
        page = PageInfo(0.0, 0.0, max_x, max_y)
        self.store.collect_tail(self.record_id, Tail(block_id, prop_lst_id, font_id, page))

    def read_block(self, stream: FreeHandStream) -> None:
        layer_list_id = 0

        def block_information(index: int) -> None:
            nonlocal layer_list_id
            value = read_record_id(stream)
            if index == 5:
                layer_list_id = value

        if self.version == 10:
            stream.read_u16()
            for index in range(1, 22):
                block_information(index)
            stream.skip(1)
            read_record_id(stream)
            read_record_id(stream)
        elif self.version == 8:
            for index in range(12):
                block_information(index)
            stream.skip(14)
        elif self.version < 8:
            for index in range(11):
                block_information(index)
            stream.skip(10)
            for _ in range(3):
                read_record_id(stream)
        else:
            for index in range(12):
                block_information(index)
            stream.skip(14)
            for _ in range(3):
                read_record_id(stream)
            stream.skip(1)
            for _ in range(1 if self.version < 10 else 4):
                read_record_id(stream)
        self.store.collect_block(self.record_id, Block(layer_list_id))

    def read_layer(self, stream: FreeHandStream) -> None:
        style_id = read_record_id(stream)
        if self.version > 3:
            stream.skip(4)
        stream.skip(6)
        elements_id = read_record_id(stream)
        read_record_id(stream)
        visibility = stream.read_u16()
        stream.skip(2)
        self.store.collect_layer(self.record_id, Layer(style_id, elements_id, visibility))

    def read_list(self, stream: FreeHandStream) -> None:
        size2 = stream.read_u16()
        size = stream.read_u16()
        stream.skip(6)
        list_type = stream.read_u16()
        size = min(size, stream.remaining() // 2)
        elements = tuple(read_record_id(stream) for _ in range(size))
        if self.version < 9:
            stream.skip(2 * (size2 - size))
        self.store.collect_list(self.record_id, ElementList(list_type, elements))

    def _read_group_header(self, stream: FreeHandStream) -> Tuple[int, int]:
        style_id = read_record_id(stream)
        read_record_id(stream)
        if self.version > 3:
            stream.skip(4)
        stream.skip(4)
        elements_id = read_record_id(stream)
        return style_id, elements_id

    def read_group(self, stream: FreeHandStream) -> None:
        style_id, elements_id = self._read_group_header(stream)
        xform_id = read_record_id(stream)
        self.store.collect_group(self.record_id, Group(style_id, elements_id, xform_id))

    def read_clip_group(self, stream: FreeHandStream) -> None:
        style_id, elements_id = self._read_group_header(stream)
        xform_id = read_record_id(stream)
        self.store.collect_clip_group(self.record_id, Group(style_id, elements_id, xform_id))

    def read_composite_path(self, stream: FreeHandStream) -> None:
        style_id, elements_id = self._read_group_header(stream)
        self.store.collect_composite_path(self.record_id, CompositePath(style_id, elements_id))

    def read_symbol_class(self, stream: FreeHandStream) -> None:
        ids = [read_record_id(stream) for _ in range(5)]
        self.store.collect_symbol_class(self.record_id, SymbolClass(*ids))

    def read_symbol_instance(self, stream: FreeHandStream) -> None:
        style_id = read_record_id(stream)
        parent_id = read_record_id(stream)
        stream.skip(8)
        class_id = read_record_id(stream)
        var1 = stream.read_u8()
        var2 = stream.read_u8()
        xform = read_packed_transform(stream, var1, var2)
        self.store.collect_symbol_instance(self.record_id, SymbolInstance(style_id, parent_id, class_id, xform))

    def read_new_blend(self, stream: FreeHandStream) -> None:
        style_id = read_record_id(stream)
        parent_id = read_record_id(stream)
        stream.skip(8)
        lists = [read_record_id(stream) for _ in range(3)]
        stream.skip(26)
        self.store.collect_new_blend(self.record_id, NewBlend(style_id, parent_id, *lists))

    def read_xform(self, stream: FreeHandStream) -> None:
        if self.version < 9:
            stream.skip(2)
            m11 = read_coordinate(stream)
            m21 = read_coordinate(stream)
            m12 = read_coordinate(stream)
            m22 = read_coordinate(stream)
            m13 = read_coordinate(stream) / 72.0
            m23 = read_coordinate(stream) / 72.0
            stream.skip(26)
            trafo = Transform(m11, m21, m12, m22, m13, m23)
        else:
            var1 = stream.read_u8()
            var2 = stream.read_u8()
            trafo = read_packed_transform(stream, var1, var2)
            var1 = stream.read_u8()
            var2 = stream.read_u8()
            stream.skip(xform_calc(var1, var2))
        self.store.collect_xform(
            self.record_id, trafo.m11, trafo.m21, trafo.m12, trafo.m22, trafo.m13, trafo.m23
        )

    # -- shapes ----------------------------------------------------------

    def read_path(self, stream: FreeHandStream) -> None:
        size = stream.read_u16()
        style_id = read_record_id(stream)
        read_record_id(stream)
        if self.version > 3:
            stream.skip(4)
        stream.skip(9)
        flag = stream.read_u8()
        num_points = stream.read_u16()
        if self.version > 8:
            size = num_points
        segments = _read_segments(stream, num_points)
        stream.skip((size - num_points) * 27)
        if not segments:
            return
        path = _path_from_segments(segments, bool(flag & 1), 72.0)
        path.graphic_style_id = style_id
        path.even_odd = bool(flag & 2)
        self.store.collect_path(self.record_id, path)

    def read_arrow_path(self, stream: FreeHandStream) -> None:
        if self.version > 8:
            stream.skip(20)
        num_points = stream.read_u16()
        if self.version <= 8:
            stream.skip(20)
        if self.version > 3:
            stream.skip(4)
        stream.skip(4)
        end = stream.tell() + 27 * num_points
        segments = _read_segments(stream, num_points)
        stream.seek(end)
        if not segments:
            return
        # arrow heads live in their own unit box, kept unscaled
        path = _path_from_segments(segments, True, 1.0)
        self.store.collect_arrow_path(self.record_id, path)

    def read_oval(self, stream: FreeHandStream) -> None:
        style_id = read_record_id(stream)
        read_record_id(stream)
        if self.version > 3:
            stream.skip(4)
        stream.skip(8)
        xform_id = read_record_id(stream)
        xa = read_coordinate(stream) / 72.0
        ya = read_coordinate(stream) / 72.0
        xb = read_coordinate(stream) / 72.0
        yb = read_coordinate(stream) / 72.0
        arc1 = arc2 = 0.0
        closed = False
        if self.version > 10:
            arc2 = read_coordinate(stream) * math.pi / 180.0
            arc1 = read_coordinate(stream) * math.pi / 180.0
            closed = bool(stream.read_u8())
            stream.skip(1)

        cx = (xb + xa) / 2.0
        cy = (yb + ya) / 2.0
        rx = abs(xb - xa) / 2.0
        ry = abs(yb - ya) / 2.0
        arc1 = _normalize_angle(arc1)
        arc2 = _normalize_angle(arc2)

        path = Path(xform_id=xform_id, graphic_style_id=style_id, even_odd=True)
        if arc1 != arc2:
            if arc2 < arc1:
                arc2 += TWO_PI
            x0 = cx + rx * math.cos(arc1)
            y0 = cy + ry * math.sin(arc1)
            x1 = cx + rx * math.cos(arc2)
            y1 = cy + ry * math.sin(arc2)
            path.append_move_to(x0, y0)
            path.append_arc_to(rx, ry, 0.0, arc2 - arc1 > math.pi, True, x1, y1)
            if closed:
                path.append_line_to(cx, cy)
                path.append_line_to(x0, y0)
                path.append_close_path()
        else:
            arc2 += math.pi / 2.0
            x0 = cx + rx * math.cos(arc1)
            y0 = cy + ry * math.sin(arc1)
            x1 = cx + rx * math.cos(arc2)
            y1 = cy + ry * math.sin(arc2)
            path.append_move_to(x0, y0)
            path.append_arc_to(rx, ry, 0.0, False, True, x1, y1)
            path.append_arc_to(rx, ry, 0.0, True, True, x0, y0)
            path.append_close_path()
        self.store.collect_path(self.record_id, path)

    def read_rectangle(self, stream: FreeHandStream) -> None:
        style_id = read_record_id(stream)
        read_record_id(stream)
        if self.version > 3:
            stream.skip(4)
        stream.skip(8)
        xform_id = read_record_id(stream)
        x1 = read_coordinate(stream) / 72.0
        y1 = read_coordinate(stream) / 72.0
        x2 = read_coordinate(stream) / 72.0
        y2 = read_coordinate(stream) / 72.0
        rtlt = read_coordinate(stream) / 72.0
        rtll = read_coordinate(stream) / 72.0
        rtrt = rbrb = rblb = rtlt
        rtrr = rbrr = rbll = rtll
        if self.version >= 11:
            rtrt = read_coordinate(stream) / 72.0
            rtrr = read_coordinate(stream) / 72.0
            rbrb = read_coordinate(stream) / 72.0
            rbrr = read_coordinate(stream) / 72.0
            rblb = read_coordinate(stream) / 72.0
            rbll = read_coordinate(stream) / 72.0
            stream.skip(9)

        def square(a: float, b: float) -> bool:
            return abs(a) <= C.FH_EPSILON or abs(b) <= C.FH_EPSILON

        path = Path(xform_id=xform_id, graphic_style_id=style_id, even_odd=True)
        if square(rbll, rblb):
            path.append_move_to(x1, y1)
        else:
            path.append_move_to(x1 + rblb, y1)
            path.append_quadratic_bezier_to(x1, y1, x1, y1 + rbll)
        if square(rtll, rtlt):
            path.append_line_to(x1, y2)
        else:
            path.append_line_to(x1, y2 - rtll)
            path.append_quadratic_bezier_to(x1, y2, x1 + rtlt, y2)
        if square(rtrt, rtrr):
            path.append_line_to(x2, y2)
        else:
            path.append_line_to(x2 - rtrt, y2)
            path.append_quadratic_bezier_to(x2, y2, x2, y2 - rtrr)
        if square(rbrr, rbrb):
            path.append_line_to(x2, y1)
        else:
            path.append_line_to(x2, y1 + rbrr)
            path.append_quadratic_bezier_to(x2, y1, x2 - rbrb, y1)
        if square(rbll, rblb):
            path.append_line_to(x1, y1)
        else:
            path.append_line_to(x1 + rblb, y1)
        path.append_close_path()
        self.store.collect_path(self.record_id, path)

    def read_polygon_figure(self, stream: FreeHandStream) -> None:
        style_id = read_record_id(stream)
        read_record_id(stream)
        stream.skip(12)
        xform_id = read_record_id(stream)
        num_segments = stream.read_u16()
        even_odd = bool(stream.read_u8())
        cx = read_coordinate(stream) / 72.0
        cy = read_coordinate(stream) / 72.0
        r1 = read_coordinate(stream) / 72.0
        r2 = read_coordinate(stream) / 72.0
        arc1 = _normalize_angle(read_coordinate(stream) * math.pi / 180.0)
        arc2 = _normalize_angle(read_coordinate(stream) * math.pi / 180.0)
        if arc1 > arc2:
            arc1, arc2 = arc2, arc1
            r1, r2 = r2, r1

        path = Path(xform_id=xform_id, graphic_style_id=style_id, even_odd=even_odd)
        path.append_move_to(r1 * math.cos(arc1) + cx, r1 * math.sin(arc1) + cy)
        delta = arc2 - arc1
        for index in range(num_segments):
            arc = arc1 + index * TWO_PI / num_segments
            path.append_line_to(r1 * math.cos(arc) + cx, r1 * math.sin(arc) + cy)
            path.append_line_to(r2 * math.cos(arc + delta) + cx, r2 * math.sin(arc + delta) + cy)
        path.append_line_to(r1 * math.cos(arc1) + cx, r1 * math.sin(arc1) + cy)
        path.append_close_path()
        stream.skip(8)
        self.store.collect_path(self.record_id, path)

    # -- colours ---------------------------------------------------------

    def read_process_color(self, stream: FreeHandStream) -> None:
        read_record_id(stream)
        stream.skip(2)
        color = read_rgb_color(stream)
        stream.skip(4)
        if color.black():
            color = read_cmyk_color(stream)
        else:
            stream.skip(8)
        self.store.collect_color(self.record_id, color)

    def read_spot_color(self, stream: FreeHandStream) -> None:
        read_record_id(stream)
        stream.skip(2)
        color = read_rgb_color(stream)
        stream.skip(16)
        self.store.collect_color(self.record_id, color)

    def read_spot_color6(self, stream: FreeHandStream) -> None:
        size = stream.read_u16()
        read_record_id(stream)
        color = read_rgb_color(stream)
        stream.skip(16 if self.version < 10 else 18)
        stream.skip(size * 4)
        self.store.collect_color(self.record_id, color)

    def read_pantone_color(self, stream: FreeHandStream) -> None:
        read_record_id(stream)
        stream.skip(2)
        color = read_rgb_color(stream)
        stream.skip(28)
        self.store.collect_color(self.record_id, color)

    def read_tint_color(self, stream: FreeHandStream) -> None:
        read_record_id(stream)
        stream.skip(2)
        color = read_rgb_color(stream)
        stream.skip(4)
        if color.black():
            base_id = read_record_id(stream)
            tint = stream.read_u16()
            stream.skip(2)
            self.store.collect_tint_color(self.record_id, TintColor(base_id, tint))
        else:
            read_record_id(stream)
            stream.skip(4)
            self.store.collect_color(self.record_id, color)

    def read_tint_color6(self, stream: FreeHandStream) -> None:
        stream.skip(2)
        read_record_id(stream)
        color = read_rgb_color(stream)
        stream.skip(26 if self.version < 10 else 28)
        self.store.collect_color(self.record_id, color)

    def read_color6(self, stream: FreeHandStream) -> None:
        variant = stream.read_u16()
        read_record_id(stream)
        color = read_rgb_color(stream)
        stream.skip(4)
        read_record_id(stream)
        length = {4: 16, 7: 28, 9: 36}.get(variant, 12)
        if self.version < 10:
            length -= 2
        stream.skip(length)
        self.store.collect_color(self.record_id, color)

    # -- fills -----------------------------------------------------------

    def read_basic_fill(self, stream: FreeHandStream) -> None:
        color_id = read_record_id(stream)
        stream.skip(4)
        self.store.collect_basic_fill(self.record_id, BasicFill(color_id))

    def read_ps_fill(self, stream: FreeHandStream) -> None:
        color_id = read_record_id(stream)
        read_record_id(stream)
        self.store.collect_basic_fill(self.record_id, BasicFill(color_id))

    def read_lens_fill(self, stream: FreeHandStream) -> None:
        color_id = read_record_id(stream)
        stream.skip(6)
        value = read_coordinate(stream)
        stream.skip(27)
        mode = stream.read_u8()
        self.store.collect_lens_fill(self.record_id, LensFill(color_id, value, mode))

    def read_linear_fill(self, stream: FreeHandStream) -> None:
        color1 = read_record_id(stream)
        color2 = read_record_id(stream)
        angle = read_coordinate(stream)
        stream.skip(8)
        mcl_id = read_record_id(stream)
        stream.skip(16)
        self.store.collect_linear_fill(self.record_id, LinearFill(color1, color2, angle, mcl_id))

    def read_tapered_fill(self, stream: FreeHandStream) -> None:
        color1 = read_record_id(stream)
        color2 = read_record_id(stream)
        angle = -read_coordinate(stream)
        stream.skip(4)
        self.store.collect_linear_fill(self.record_id, LinearFill(color1, color2, angle))

    def read_tapered_fill_x(self, stream: FreeHandStream) -> None:
        color1 = read_record_id(stream)
        color2 = read_record_id(stream)
        angle = read_coordinate(stream)
        stream.skip(8)
        mcl_id = read_record_id(stream)
        self.store.collect_linear_fill(self.record_id, LinearFill(color1, color2, angle, mcl_id))

    def read_cone_fill(self, stream: FreeHandStream) -> None:
        # drawn as a vertical linear gradient
        color1 = read_record_id(stream)
        color2 = read_record_id(stream)
        read_coordinate(stream)
        read_coordinate(stream)
        stream.skip(8)
        mcl_id = read_record_id(stream)
        stream.skip(14)
        self.store.collect_linear_fill(self.record_id, LinearFill(color1, color2, 90.0, mcl_id))

    def read_radial_fill(self, stream: FreeHandStream) -> None:
        color1 = read_record_id(stream)
        color2 = read_record_id(stream)
        if self.version == 3:
            cx = 0.5 + 0.5 * read_coordinate(stream)
            cy = 0.5 + 0.5 * read_coordinate(stream)
        else:
            cx = read_coordinate(stream)
            cy = 1.0 - read_coordinate(stream)
        stream.skip(4)
        self.store.collect_radial_fill(self.record_id, RadialFill(color1, color2, cx, cy))

    def _read_radial_fill_x(self, stream: FreeHandStream) -> RadialFill:
        color1 = read_record_id(stream)
        color2 = read_record_id(stream)
        cx = read_coordinate(stream)
        cy = 1.0 - read_coordinate(stream)
        stream.skip(8)
        mcl_id = read_record_id(stream)
        return RadialFill(color1, color2, cx, cy, mcl_id)

    def read_radial_fill_x(self, stream: FreeHandStream) -> None:
        self.store.collect_radial_fill(self.record_id, self._read_radial_fill_x(stream))

    def read_new_radial_fill(self, stream: FreeHandStream) -> None:
        fill = self._read_radial_fill_x(stream)
        stream.skip(23)
        self.store.collect_radial_fill(self.record_id, fill)

    def read_new_contour_fill(self, stream: FreeHandStream) -> None:
        fill = self._read_radial_fill_x(stream)
        stream.skip(2)
        read_coordinate(stream)  # handle angle
        read_coordinate(stream)  # handle width
        stream.skip(4)
        self.store.collect_radial_fill(self.record_id, fill)

    def read_contour_fill(self, stream: FreeHandStream) -> None:
        if self.version > 9:
            fill = self._read_radial_fill_x(stream)
            stream.skip(2)
            self.store.collect_radial_fill(self.record_id, fill)
            return
        num = stream.read_u16()
        size = stream.read_u16()
        while num:
            stream.skip(6 + size * 2)
            num = stream.read_u16()
            size = stream.read_u16()
        stream.skip(6 + size * 2)

    def read_tile_fill(self, stream: FreeHandStream) -> None:
        xform_id = read_record_id(stream)
        group_id = read_record_id(stream)
        stream.skip(8)
        scale_x = read_coordinate(stream)
        scale_y = read_coordinate(stream)
        offset_x = read_coordinate(stream)
        offset_y = read_coordinate(stream)
        angle = read_coordinate(stream)
        self.store.collect_tile_fill(
            self.record_id, TileFill(xform_id, group_id, scale_x, scale_y, offset_x, offset_y, angle)
        )

    def read_pattern_fill(self, stream: FreeHandStream) -> None:
        color_id = read_record_id(stream)
        pattern = bytes(stream.read_u8() for _ in range(8))
        self.store.collect_pattern_fill(self.record_id, PatternFill(color_id, pattern))

    def read_multi_color_list(self, stream: FreeHandStream) -> None:
        num = stream.read_u16()
        stream.skip(2)
        num = min(num, stream.remaining() // 10)
        stops = []
        for _ in range(num):
            color_id = read_record_id(stream)
            position = read_coordinate(stream)
            stream.skip(4)
            stops.append(ColorStop(color_id, position))
        self.store.collect_multi_color_list(self.record_id, stops)

    def read_custom_proc(self, stream: FreeHandStream) -> None:
        size = stream.read_u16()
        read_record_id(stream)  # name
        stream.skip(4)
        ids: List[int] = []
        widths: List[float] = []
        params: List[float] = []
        angles: List[float] = []
        for _ in range(size):
            kind = stream.read_u8()
            if kind == 0:
                stream.skip(7)
                ids.append(read_record_id(stream))
            elif kind in (2, 3, 4):
                stream.skip(3)
                value = read_coordinate(stream)
                {2: widths, 3: params, 4: angles}[kind].append(value)
                stream.skip(2)
            else:
                stream.skip(9)
        self.store.collect_custom_proc(
            self.record_id, CustomProc(tuple(ids), tuple(widths), tuple(params), tuple(angles))
        )

    # -- lines -----------------------------------------------------------

    def read_basic_line(self, stream: FreeHandStream) -> None:
        color_id = read_record_id(stream)
        pattern_id = read_record_id(stream)
        start_arrow = read_record_id(stream)
        end_arrow = read_record_id(stream)
        mitter = read_coordinate(stream) / 72.0
        width = read_coordinate(stream) / 72.0
        stream.skip(4)
        self.store.collect_basic_line(
            self.record_id, BasicLine(color_id, pattern_id, start_arrow, end_arrow, mitter, width)
        )

    def read_ps_line(self, stream: FreeHandStream) -> None:
        color_id = read_record_id(stream)
        read_record_id(stream)
        width = read_coordinate(stream) / 72.0
        self.store.collect_basic_line(self.record_id, BasicLine(color_id=color_id, width=width))

    def read_pattern_line(self, stream: FreeHandStream) -> None:
        color_id = read_record_id(stream)
        ones = sum(bin(stream.read_u8()).count("1") for _ in range(8))
        mitter = read_coordinate(stream) / 72.0
        width = read_coordinate(stream) / 72.0
        stream.skip(4)
        self.store.collect_pattern_line(self.record_id, PatternLine(color_id, ones / 64.0, mitter, width))

    def read_line_pat(self, stream: FreeHandStream) -> None:
        num_strokes = stream.read_u16()
        if not num_strokes and self.version == 8:
            stream.skip(26)
            return
        stream.skip(8)
        num_strokes = min(num_strokes, stream.remaining() // 4)
        dashes = tuple(read_coordinate(stream) for _ in range(num_strokes))
        self.store.collect_line_pattern(self.record_id, LinePattern(dashes))

    # -- text ------------------------------------------------------------

    def read_paragraph(self, stream: FreeHandStream) -> None:
        stream.skip(2)
        size = stream.read_u16()
        stream.skip(2)
        para_style_id = read_record_id(stream)
        text_blok_id = read_record_id(stream)
        size = min(size, stream.remaining() // 24)
        char_styles = []
        for _ in range(size):
            offset = stream.read_u16()
            char_styles.append((offset, read_record_id(stream)))
            stream.skip(20)
        self.store.collect_paragraph(self.record_id, Paragraph(para_style_id, text_blok_id, tuple(char_styles)))

    def read_text_blok(self, stream: FreeHandStream) -> None:
        size = stream.read_u16()
        length = stream.read_u16()
        length = min(length, stream.remaining() // 2)
        characters = [stream.read_u16() for _ in range(length)]
        stream.skip(size * 4 - length * 2)
        self.store.collect_text_blok(self.record_id, characters)

    def read_tstring(self, stream: FreeHandStream) -> None:
        size2 = stream.read_u16()
        size = stream.read_u16()
        stream.skip(16)
        size = min(size, stream.remaining() // 2)
        elements = [read_record_id(stream) for _ in range(size)]
        if self.version < 9:
            stream.skip((size2 - size) * 2)
        if elements:
            self.store.collect_tstring(self.record_id, elements)

    def read_ustring(self, stream: FreeHandStream) -> None:
        start = stream.tell()
        size = stream.read_u16()
        length = stream.read_u16()
        length = min(length, stream.remaining() // 2)
        units = []
        for _ in range(length):
            unit = stream.read_u16()
            if not unit:
                break
            units.append(unit)
        stream.seek(start + (size + 1) * 4)
        self.store.collect_string(self.record_id, decode_utf16(units))

    def _read_mac_string(self, stream: FreeHandStream) -> str:
        start = stream.tell()
        size = stream.read_u16()
        length = stream.read_u16()
        raw = bytearray()
        for _ in range(length):
            char = stream.read_u8()
            if not char:
                break
            raw.append(char)
        stream.seek(start + (size + 1) * 4)
        return decode_mac_roman(bytes(raw))

    def read_mstring(self, stream: FreeHandStream) -> None:
        self.store.collect_string(self.record_id, self._read_mac_string(stream))

    def read_mname(self, stream: FreeHandStream) -> None:
        name = self._read_mac_string(stream)
        self.store.collect_string(self.record_id, name)
        self.store.collect_name(self.record_id, name)

    def read_agd_font(self, stream: FreeHandStream) -> None:
        stream.skip(4)
        num = stream.read_u16()
        stream.skip(2)
        font_name_id = 0
        font_style = 0
        font_size = 12.0
        for _ in range(num):
            key = stream.read_u32()
            kind = key & 0xFFFF
            if kind == C.FH_AGD_FONT_NAME:
                font_name_id = read_record_id(stream)
            elif kind == C.FH_AGD_STYLE:
                font_style = stream.read_u32()
            elif kind == C.FH_AGD_SIZE:
                font_size = read_coordinate(stream)
            elif key >> 16 == 2:
                read_record_id(stream)
            else:
                stream.skip(4)
        self.store.collect_agd_font(self.record_id, AGDFont(font_name_id, font_style, font_size))

    def read_teffect(self, stream: FreeHandStream) -> None:
        stream.skip(4)
        num = stream.read_u16()
        stream.skip(2)
        name_id = 0
        colors = [0, 0]
        for _ in range(num):
            key = stream.read_u16()
            rec = stream.read_u16()
            if key != 2:
                stream.skip(4)
                continue
            value = read_record_id(stream)
            if rec == C.FH_EFFECT_NAME:
                name_id = value
            elif rec == C.FH_UNDERLINE_COLOR_ID:
                colors[0] = value
            elif rec == C.FH_UNDERLINE_DASH_ID:
                colors[1] = value
        self.store.collect_teffect(self.record_id, TEffect(name_id, 0, (colors[0], colors[1])))

    def read_text_effs(self, stream: FreeHandStream) -> None:
        num = stream.read_u16()
        name_id = read_record_id(stream)
        short_name_id = read_record_id(stream)
        stream.skip(16 if num == 0 else 18)
        colors: List[int] = []
        for _ in range(num):
            stream.read_u16()
            rec = stream.read_u16()
            if rec == 7:
                stream.skip(6)
                value = read_record_id(stream)
                if stream.read_u32():
                    stream.skip(-4)
                    if len(colors) < 2:
                        colors.append(value)
            else:
                stream.skip(12)
        colors.extend([0] * (2 - len(colors)))
        self.store.collect_teffect(self.record_id, TEffect(name_id, short_name_id, (colors[0], colors[1])))

    def read_text_object(self, stream: FreeHandStream) -> None:
        stream.skip(4)
        num = stream.read_u16()
        stream.skip(2)
        style_id = read_record_id(stream)
        read_record_id(stream)
        stream.skip(8)
        fields: Dict[str, object] = {
            "graphic_style_id": style_id,
            "xform_id": read_record_id(stream),
            "tstring_id": read_record_id(stream),
            "vmp_obj_id": read_record_id(stream),
        }
        for _ in range(num):
            key = stream.read_u32()
            name = TEXT_OBJECT_KEYS.get(key & 0xFFFF)
            if name in TEXT_OBJECT_DIMENSIONS:
                fields[name] = read_coordinate(stream) / 72.0
            elif name == "path_id":
                fields[name] = read_record_id(stream)
            elif name is not None:
                fields[name] = stream.read_u32()
            elif key >> 16 == 2:
                read_record_id(stream)
            else:
                stream.read_u32()
        self.store.collect_text_object(self.record_id, TextObject(**fields))

    def read_tab_table(self, stream: FreeHandStream) -> None:
        size = stream.read_u16()
        count = stream.read_u16()
        end = stream.tell() + 6 * size
        if count > size:
            stream.seek(end)
            return
        tabs = []
        for _ in range(count):
            kind = stream.read_u16()
            tabs.append(Tab(kind, read_coordinate(stream)))
        self.store.collect_tab_table(self.record_id, tabs)
        stream.seek(end)

    def _read_legacy_char_properties(
        self, stream: FreeHandStream, previous: LegacyCharProperties
    ) -> LegacyCharProperties:
        changes: Dict[str, object] = {"offset": stream.read_u16()}
        flags = stream.read_u16()
        if flags & 0x1:
            read_coordinate(stream)  # x position
        if flags & 0x2:
            read_coordinate(stream)  # kerning
        if flags & 0x4:
            changes["font_name_id"] = read_record_id(stream)
        if flags & 0x8:
            changes["font_size"] = read_coordinate(stream)
        if flags & 0x10:
            leading = stream.read_u32()
            if leading in (0xFFFF0000, 0xFFFE0000):
                changes["leading"] = -1.0
            elif not leading & 0x80000000:
                changes["leading"] = leading / 65536.0
        if flags & 0x20:
            changes["font_style"] = stream.read_u32()
        if flags & 0x40:
            changes["font_color_id"] = read_record_id(stream)
        if flags & 0x80:
            changes["text_effs_id"] = read_record_id(stream)
        if flags & 0x100:
            changes["letter_spacing"] = read_coordinate(stream)
        if flags & 0x200:
            changes["word_spacing"] = read_coordinate(stream)
        if flags & 0x400:
            changes["horizontal_scale"] = read_coordinate(stream)
        if flags & 0x800:
            changes["baseline_shift"] = read_coordinate(stream)
        return replace(previous, **changes)

    def read_display_text(self, stream: FreeHandStream) -> None:
        stream.skip(2)
        style_id = read_record_id(stream)
        read_record_id(stream)
        stream.skip(4)
        xform_id = read_record_id(stream)
        stream.skip(16)
        right = read_coordinate(stream) / 72.0
        bottom = read_coordinate(stream) / 72.0
        left = read_coordinate(stream) / 72.0
        top = read_coordinate(stream) / 72.0
        stream.skip(32)
        text_length = stream.read_u16()
        justify = stream.read_u8()
        stream.skip(1)

        char_props: List[LegacyCharProperties] = []
        current = LegacyCharProperties()
        while True:
            current = self._read_legacy_char_properties(stream, current)
            char_props.append(current)
            if current.offset >= text_length:
                break
        para_props: List[LegacyParaProperties] = []
        while True:
            offset = stream.read_u16()
            stream.skip(28)
            para_props.append(LegacyParaProperties(offset))
            if offset >= text_length:
                break
        characters = stream.read(text_length + 1)
        if len(characters) < text_length + 1:
            raise EndOfStreamError(f"display text {self.record_id} is cut short")

        self.store.collect_display_text(
            self.record_id,
            DisplayText(
                graphic_style_id=style_id,
                xform_id=xform_id,
                start_x=left,
                start_y=top,
                width=right - left,
                height=top - bottom,
                char_props=tuple(char_props),
                justify=justify,
                para_props=tuple(para_props),
                characters=characters,
            ),
        )

    def read_path_text(self, stream: FreeHandStream) -> None:
        elements_id = read_record_id(stream)
        layer_id = read_record_id(stream)
        stream.skip(2)
        text_size = stream.read_u16()
        stream.skip(4)
        display_text_id = read_record_id(stream)
        shape_id = read_record_id(stream)
        self.store.collect_path_text(
            self.record_id, PathText(elements_id, layer_id, display_text_id, shape_id, text_size)
        )

    def read_vmp_obj(self, stream: FreeHandStream) -> None:
        stream.skip(4)
        num = stream.read_u16()
        stream.skip(2)
        min_x = min_y = 0.0
        para = ParagraphProperties()
        char: Optional[Dict[str, object]] = None
        char_doubles: Dict[int, float] = {}

        def char_fields() -> Dict[str, object]:
            nonlocal char
            if char is None:
                char = {}
            return char

        for _ in range(num):
            key = stream.read_u16()
            rec = stream.read_u16()
            if rec in (C.FH_PAGE_START_X, C.FH_PAGE_START_X2):
                min_x = read_coordinate(stream) / 72.0
                self._min_x = min(min_x, self._min_x) if self._min_x > 0.0 else min_x
            elif rec in (C.FH_PAGE_START_Y, C.FH_PAGE_START_Y2):
                min_y = read_coordinate(stream) / 72.0
                self._min_y = min(min_y, self._min_y) if self._min_y > 0.0 else min_y
            elif rec == C.FH_PAGE_WIDTH:
                self._max_x = max(min_x + read_coordinate(stream) / 72.0, self._max_x)
            elif rec == C.FH_PAGE_HEIGHT:
                self._max_y = max(min_y + read_coordinate(stream) / 72.0, self._max_y)
            elif rec in PARA_DOUBLE_KEYS:
                para.id_to_double[rec] = read_coordinate(stream)
            elif rec in PARA_INT_KEYS:
                para.id_to_int[rec] = stream.read_u32()
            elif rec == C.FH_PARA_TAB_TABLE_ID:
                para.id_to_zone_id[rec] = read_record_id(stream)
            elif rec in CHAR_ID_KEYS:
                char_fields()[CHAR_ID_KEYS[rec]] = read_record_id(stream)
            elif rec == C.FH_FONT_SIZE:
                char_fields()["font_size"] = read_coordinate(stream)
            elif rec in CHAR_DOUBLE_KEYS:
                char_fields()
                char_doubles[rec] = read_coordinate(stream)
            elif key == 2:
                read_record_id(stream)
            else:
                stream.skip(4)
        if char is not None:
            self.store.collect_char_props(self.record_id, CharProperties(id_to_double=char_doubles, **char))
        if not para.empty():
            self.store.collect_paragraph_props(self.record_id, para)

    # -- styles and filters ----------------------------------------------

    def _read_prop_elements(self, stream: FreeHandStream, size: int) -> Dict[int, int]:
        properties: Dict[int, int] = {}
        for _ in range(size):
            name_id = read_record_id(stream)
            value_id = read_record_id(stream)
            if name_id and value_id:
                properties[name_id] = value_id
        return properties

    def read_prop_lst(self, stream: FreeHandStream) -> None:
        size2 = stream.read_u16()
        size = stream.read_u16()
        stream.skip(4)
        elements = self._read_prop_elements(stream, size)
        if self.version < 9:
            stream.skip((size2 - size) * 4)
        self.store.collect_prop_list(self.record_id, PropList(0, elements))

    def read_style_prop_lst(self, stream: FreeHandStream) -> None:
        if self.version > 8:
            stream.skip(2)
        size = stream.read_u16()
        if self.version <= 8:
            stream.skip(2)
        stream.skip(2)
        parent_id = read_record_id(stream)
        read_record_id(stream)
        elements = self._read_prop_elements(stream, size)
        self.store.collect_prop_list(self.record_id, PropList(parent_id, elements))

    def read_graphic_style(self, stream: FreeHandStream) -> None:
        stream.skip(2)
        size = stream.read_u16()
        stream.skip(2)
        parent_id = read_record_id(stream)
        attr_id = read_record_id(stream)
        elements = self._read_prop_elements(stream, size)
        self.store.collect_graphic_style(self.record_id, GraphicStyle(parent_id, attr_id, elements))

    def read_attribute_holder(self, stream: FreeHandStream) -> None:
        parent_id = read_record_id(stream)
        attr_id = read_record_id(stream)
        self.store.collect_attribute_holder(self.record_id, AttributeHolder(parent_id, attr_id))

    def read_filter_attribute_holder(self, stream: FreeHandStream) -> None:
        parent_id = read_record_id(stream)
        filter_id = read_record_id(stream)
        style_id = read_record_id(stream)
        self.store.collect_filter_attribute_holder(
            self.record_id, FilterAttributeHolder(parent_id, filter_id, style_id)
        )

    def read_opacity_filter(self, stream: FreeHandStream) -> None:
        read_record_id(stream)
        # percent, 0 to 100
        self.store.collect_opacity_filter(self.record_id, float(stream.read_u16()))

    def read_fw_shadow_filter(self, stream: FreeHandStream) -> None:
        color_id = read_record_id(stream)
        stream.skip(2)
        knock_out = bool(stream.read_u8())
        inner = not stream.read_u8()
        distribution = read_coordinate(stream) / 72.0
        stream.skip(2)
        opacity = stream.read_u16() / 100.0
        smoothness = read_coordinate(stream)
        stream.skip(2)
        angle = 360.0 - stream.read_u16()
        self.store.collect_shadow_filter(
            self.record_id, ShadowFilter(color_id, knock_out, inner, distribution, opacity, smoothness, angle)
        )

    def read_fw_glow_filter(self, stream: FreeHandStream) -> None:
        color_id = read_record_id(stream)
        stream.skip(3)
        inner = bool(stream.read_u8())
        width = read_coordinate(stream) / 72.0
        stream.skip(2)
        opacity = stream.read_u16() / 100.0
        smoothness = read_coordinate(stream)
        distribution = read_coordinate(stream) / 72.0
        self.store.collect_glow_filter(
            self.record_id, GlowFilter(color_id, inner, width, opacity, smoothness, distribution)
        )

    # -- images ----------------------------------------------------------

    def read_image_import(self, stream: FreeHandStream) -> None:
        style_id = read_record_id(stream)
        read_record_id(stream)
        if self.version > 3:
            stream.skip(4)
        stream.skip(4)
        if self.version > 8:
            read_record_id(stream)  # format name
        data_list_id = read_record_id(stream)
        read_record_id(stream)  # file descriptor
        xform_id = read_record_id(stream)
        x = read_coordinate(stream) / 72.0
        y = read_coordinate(stream) / 72.0
        width = read_coordinate(stream) / 72.0
        height = read_coordinate(stream) / 72.0
        stream.skip(18)
        image_format = ""
        if self.version > 8:
            raw = bytearray()
            while True:
                char = stream.read_u8()
                if not char:
                    break
                raw.append(char)
            image_format = decode_mac_roman(bytes(raw))
        if self.version > 10:
            stream.skip(2)
        self.store.collect_image(
            self.record_id, ImageImport(style_id, data_list_id, xform_id, x, y, width, height, image_format)
        )

    def read_swf_import(self, stream: FreeHandStream) -> None:
        style_id = read_record_id(stream)
        read_record_id(stream)
        stream.skip(8)
        read_record_id(stream)
        data_list_id = read_record_id(stream)
        read_record_id(stream)
        xform_id = read_record_id(stream)
        x = read_coordinate(stream) / 72.0
        y = read_coordinate(stream) / 72.0
        width = read_coordinate(stream) / 72.0
        height = read_coordinate(stream) / 72.0
        stream.skip(7)
        self.store.collect_image(
            self.record_id, ImageImport(style_id, data_list_id, xform_id, x, y, width, height)
        )

    def read_data_list(self, stream: FreeHandStream) -> None:
        size = stream.read_u16()
        data_size = stream.read_u32()
        stream.skip(4)
        size = min(size, stream.remaining() // 2)
        elements = tuple(read_record_id(stream) for _ in range(size))
        self.store.collect_data_list(self.record_id, DataList(data_size, elements))

    def read_data(self, stream: FreeHandStream) -> None:
        block_size = stream.read_u16()
        data_size = stream.read_u32()
        data = stream.read(data_size)
        stream.skip(block_size * 4 - data_size)
        self.store.collect_data(self.record_id, data)

    # -- records that are only stepped over ------------------------------

    def _skipper(count: int) -> Callable[["FreeHandParser", FreeHandStream], None]:
        def skip(self: "FreeHandParser", stream: FreeHandStream) -> None:
            stream.skip(count)

        return skip

    read_collector = _skipper(4)
    read_duet_filter = _skipper(14)
    read_element = _skipper(4)
    read_elem_list = _skipper(4)
    read_expand_filter = _skipper(14)
    read_fh_doc_header = _skipper(4)
    read_figure = _skipper(4)
    read_fw_blur_filter = _skipper(12)
    read_fw_feather_filter = _skipper(8)
    read_fw_sharpen_filter = _skipper(16)
    read_image_fill = _skipper(6)
    read_import = _skipper(34)
    read_master_page_doc_man = _skipper(4)
    read_master_page_element = _skipper(14)
    read_master_page_layer_element = _skipper(14)
    read_master_page_symbol_class = _skipper(12)
    read_mp_object = _skipper(4)
    read_procedure = _skipper(4)
    read_path_text_line_info = _skipper(46)
    read_perspective_envelope = _skipper(177)
    read_ragged_filter = _skipper(16)
    read_sketch_filter = _skipper(11)
    read_transform_filter = _skipper(39)
    read_bend_filter = _skipper(10)
    read_date_time = _skipper(14)
    read_character_fill = _skipper(0)
    read_content_fill = _skipper(0)

    del _skipper

    def _skip_record_ids(self, stream: FreeHandStream, count: int) -> None:
        for _ in range(count):
            read_record_id(stream)

    def read_gradient_mask_filter(self, stream: FreeHandStream) -> None:
        self._skip_record_ids(stream, 1)

    def read_fw_bevel_filter(self, stream: FreeHandStream) -> None:
        read_record_id(stream)
        stream.skip(28)

    def read_halftone(self, stream: FreeHandStream) -> None:
        read_record_id(stream)
        stream.skip(8)

    def read_brush(self, stream: FreeHandStream) -> None:
        self._skip_record_ids(stream, 2)

    def read_brush_stroke(self, stream: FreeHandStream) -> None:
        self._skip_record_ids(stream, 3)

    def read_brush_tip(self, stream: FreeHandStream) -> None:
        read_record_id(stream)
        stream.skip(60)
        if self.version == 11:
            stream.skip(4)

    def read_calligraphic_stroke(self, stream: FreeHandStream) -> None:
        read_record_id(stream)
        stream.skip(12)
        read_record_id(stream)

    def read_blend_object(self, stream: FreeHandStream) -> None:
        self._skip_record_ids(stream, 2)
        stream.skip(8)
        read_record_id(stream)
        stream.skip(16)

    def read_agd_selection(self, stream: FreeHandStream) -> None:
        size = stream.read_u16()
        stream.skip(6 + size * 4)

    def read_connector_line(self, stream: FreeHandStream) -> None:
        stream.skip(20)
        num = stream.read_u16()
        stream.skip(46 + num * 27)

    def read_master_page_instance(self, stream: FreeHandStream) -> None:
        stream.skip(14)
        var1 = stream.read_u8()
        var2 = stream.read_u8()
        stream.skip(xform_calc(var1, var2) + 2)

    def read_envelope(self, stream: FreeHandStream) -> None:
        stream.skip(2)
        self._skip_record_ids(stream, 2)
        stream.skip(14)
        num = stream.read_u16()
        read_record_id(stream)
        stream.skip(19)
        num2 = stream.read_u16()
        stream.skip(4 * num2 + 27 * num)

    def read_extrusion(self, stream: FreeHandStream) -> None:
        start = stream.tell()
        stream.skip(96)
        var1 = stream.read_u8()
        var2 = stream.read_u8()
        stream.seek(start)
        self._skip_record_ids(stream, 2)
        stream.skip(92 + xform_calc(var1, var2) + 2)

    def read_file_descriptor(self, stream: FreeHandStream) -> None:
        self._skip_record_ids(stream, 2)
        stream.skip(5)
        size = stream.read_u16()
        stream.skip(size)

    def read_guides(self, stream: FreeHandStream) -> None:
        size = stream.read_u16()
        self._skip_record_ids(stream, 2)
        if self.version > 3:
            stream.skip(4)
        stream.skip(12 + size * 8)

    def read_line_table(self, stream: FreeHandStream) -> None:
        first = stream.read_u16()
        size = stream.read_u16()
        if self.version < 10:
            size = first
        for _ in range(size):
            stream.skip(48)
            read_record_id(stream)

    def read_mdict(self, stream: FreeHandStream) -> None:
        stream.skip(2)
        size = stream.read_u16()
        stream.skip(2)
        self._skip_record_ids(stream, size * 2)

    def read_mquick_dict(self, stream: FreeHandStream) -> None:
        size = stream.read_u16()
        stream.skip(5 + size * 4)

    def read_multi_blend(self, stream: FreeHandStream) -> None:
        size = stream.read_u16()
        read_record_id(stream)
        stream.skip(8)
        self._skip_record_ids(stream, 3)
        stream.skip(32 + size * 6)

    def read_perspective_grid(self, stream: FreeHandStream) -> None:
        while stream.read_u8():
            pass
        stream.skip(58)

    def read_symbol_library(self, stream: FreeHandStream) -> None:
        stream.skip(2)
        size = stream.read_u16()
        stream.skip(8)
        self._skip_record_ids(stream, size + 3)

    def read_vdict(self, stream: FreeHandStream) -> None:
        stream.skip(4)
        num = stream.read_u16()
        stream.skip(2)
        for _ in range(num):
            key = stream.read_u16()
            stream.skip(2)
            if key == 2:
                read_record_id(stream)
            else:
                stream.skip(4)


TEXT_OBJECT_KEYS = {
    C.FH_DIMENSION_HEIGHT: "height",
    C.FH_DIMENSION_LEFT: "start_x",
    C.FH_DIMENSION_TOP: "start_y",
    C.FH_DIMENSION_WIDTH: "width",
    C.FH_COL_SEPARATOR: "col_sep",
    C.FH_ROW_SEPARATOR: "row_sep",
    C.FH_ROWBREAK_FIRST: "row_break_first",
    C.FH_COL_NUM: "col_num",
    C.FH_ROW_NUM: "row_num",
    C.FH_TEXT_BEGIN_POS: "begin_pos",
    C.FH_TEXT_END_POS: "end_pos",
    C.FH_TEXT_PATH_ID: "path_id",
}
TEXT_OBJECT_DIMENSIONS = {"height", "start_x", "start_y", "width", "col_sep", "row_sep"}

PARA_DOUBLE_KEYS = {
    C.FH_PARA_LEFT_INDENT,
    C.FH_PARA_RIGHT_INDENT,
    C.FH_PARA_TEXT_INDENT,
    C.FH_PARA_SPC_ABOVE,
    C.FH_PARA_SPC_BELLOW,
    C.FH_PARA_LEADING,
}
PARA_INT_KEYS = {
    C.FH_PARA_LINE_TOGETHER,
    C.FH_PARA_TEXT_ALIGN,
    C.FH_PARA_LEADING_TYPE,
    C.FH_PARA_KEEP_SAME_LINE,
}
CHAR_ID_KEYS = {
    C.FH_TEFFECT_ID: "teffect_id",
    C.FH_TXT_COLOR_ID: "text_color_id",
    C.FH_FONT_ID: "font_id",
    C.FH_FONT_NAME: "font_name_id",
}
CHAR_DOUBLE_KEYS = {C.FH_BASELN_SHIFT, C.FH_HOR_SCALE, C.FH_RNG_KERN}

# dictionary names (compared case-insensitively) -> decoder method
RECORD_READERS = {
    "agdfont": "read_agd_font",
    "agdselection": "read_agd_selection",
    "arrowpath": "read_arrow_path",
    "attributeholder": "read_attribute_holder",
    "basicfill": "read_basic_fill",
    "basicline": "read_basic_line",
    "bendfilter": "read_bend_filter",
    "blendobject": "read_blend_object",
    "block": "read_block",
    "brushlist": "read_list",
    "brush": "read_brush",
    "brushstroke": "read_brush_stroke",
    "brushtip": "read_brush_tip",
    "calligraphicstroke": "read_calligraphic_stroke",
    "characterfill": "read_character_fill",
    "clipgroup": "read_clip_group",
    "collector": "read_collector",
    "color6": "read_color6",
    "compositepath": "read_composite_path",
    "conefill": "read_cone_fill",
    "connectorline": "read_connector_line",
    "contentfill": "read_content_fill",
    "contourfill": "read_contour_fill",
    "customproc": "read_custom_proc",
    "datalist": "read_data_list",
    "data": "read_data",
    "datetime": "read_date_time",
    "displaytext": "read_display_text",
    "duetfilter": "read_duet_filter",
    "element": "read_element",
    "elemlist": "read_elem_list",
    "elemproplst": "read_style_prop_lst",
    "envelope": "read_envelope",
    "expandfilter": "read_expand_filter",
    "extrusion": "read_extrusion",
    "fhdocheader": "read_fh_doc_header",
    "figure": "read_figure",
    "filedescriptor": "read_file_descriptor",
    "filterattributeholder": "read_filter_attribute_holder",
    "fwbevelfilter": "read_fw_bevel_filter",
    "fwblurfilter": "read_fw_blur_filter",
    "fwfeatherfilter": "read_fw_feather_filter",
    "fwglowfilter": "read_fw_glow_filter",
    "fwshadowfilter": "read_fw_shadow_filter",
    "fwsharpenfilter": "read_fw_sharpen_filter",
    "gradientmaskfilter": "read_gradient_mask_filter",
    "graphicstyle": "read_graphic_style",
    "group": "read_group",
    "guides": "read_guides",
    "halftone": "read_halftone",
    "imagefill": "read_image_fill",
    "imageimport": "read_image_import",
    "import": "read_import",
    "layer": "read_layer",
    "lensfill": "read_lens_fill",
    "linearfill": "read_linear_fill",
    "linepat": "read_line_pat",
    "linetable": "read_line_table",
    "list": "read_list",
    "masterpagedocman": "read_master_page_doc_man",
    "masterpageelement": "read_master_page_element",
    "masterpagelayerelement": "read_master_page_layer_element",
    "masterpagelayerinstance": "read_master_page_instance",
    "masterpagesymbolclass": "read_master_page_symbol_class",
    "masterpagesymbolinstance": "read_master_page_instance",
    "mdict": "read_mdict",
    "mlist": "read_list",
    "mname": "read_mname",
    "mpobject": "read_mp_object",
    "mquickdict": "read_mquick_dict",
    "mstring": "read_mstring",
    "multiblend": "read_multi_blend",
    "multicolorlist": "read_multi_color_list",
    "newblend": "read_new_blend",
    "newcontourfill": "read_new_contour_fill",
    "newradialfill": "read_new_radial_fill",
    "opacityfilter": "read_opacity_filter",
    "oval": "read_oval",
    "pantonecolor": "read_pantone_color",
    "paragraph": "read_paragraph",
    "path": "read_path",
    "pathtext": "read_path_text",
    "pathtextlineinfo": "read_path_text_line_info",
    "patternfill": "read_pattern_fill",
    "patternline": "read_pattern_line",
    "perspectiveenvelope": "read_perspective_envelope",
    "perspectivegrid": "read_perspective_grid",
    "polygonfigure": "read_polygon_figure",
    "procedure": "read_procedure",
    "processcolor": "read_process_color",
    "proplst": "read_prop_lst",
    "psfill": "read_ps_fill",
    "psline": "read_ps_line",
    "radialfill": "read_radial_fill",
    "radialfillx": "read_radial_fill_x",
    "raggedfilter": "read_ragged_filter",
    "rectangle": "read_rectangle",
    "sketchfilter": "read_sketch_filter",
    "spotcolor": "read_spot_color",
    "spotcolor6": "read_spot_color6",
    "styleproplst": "read_style_prop_lst",
    "swfimport": "read_swf_import",
    "symbolclass": "read_symbol_class",
    "symbolinstance": "read_symbol_instance",
    "symbollibrary": "read_symbol_library",
    "tabtable": "read_tab_table",
    "taperedfill": "read_tapered_fill",
    "taperedfillx": "read_tapered_fill_x",
    "teffect": "read_teffect",
    "textblok": "read_text_blok",
    "textcolumn": "read_text_object",
    "texteffs": "read_text_effs",
    "textinpath": "read_text_object",
    "tfonpath": "read_text_object",
    "tilefill": "read_tile_fill",
    "tintcolor": "read_tint_color",
    "tintcolor6": "read_tint_color6",
    "transformfilter": "read_transform_filter",
    "tstring": "read_tstring",
    "ustring": "read_ustring",
    "vdict": "read_vdict",
    "vmpobj": "read_vmp_obj",
    "xform": "read_xform",
}
