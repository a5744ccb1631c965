from __future__ import annotations

import unittest

from synthetic import (
    build_document,
    coord,
    inches,
    path_record,
    rid,
    square_records,
    u16,
    wrap_document,
)

from freehand.document import find_document_offset, generate_svg, is_supported, load_store, parse
from freehand.entities import TintColor
from freehand.errors import EndOfStreamError, GenericError
from freehand.logging import DiagnosticLog
from freehand.painter import RecordingPainter
from freehand.parser import FreeHandParser, _read_segments, read_packed_transform, read_record_id, xform_calc
from freehand.store import SceneStore
from freehand.stream import FreeHandStream, inflate
from freehand.transform import Transform


def _parser(version: int) -> FreeHandParser:
    parser = FreeHandParser(SceneStore(DiagnosticLog(echo=False)))
    parser.version = version
    return parser


class StreamTests(unittest.TestCase):
    def test_big_endian_reads(self) -> None:
        stream = FreeHandStream(b"\x01\x02\x03\x04\xff\xff\xff\xfe")
        self.assertEqual(stream.read_u16(), 0x0102)
        self.assertEqual(stream.read_u8(), 0x03)
        stream.skip(1)
        self.assertEqual(stream.read_s32(), -2)
        self.assertTrue(stream.at_end())

    def test_read_past_end_raises(self) -> None:
        stream = FreeHandStream(b"\x01")
        with self.assertRaises(EndOfStreamError):
            stream.read_u32()
        self.assertTrue(stream.at_end())

    def test_seek_is_clamped(self) -> None:
        stream = FreeHandStream(b"abc")
        stream.seek(10)
        self.assertEqual(stream.tell(), 3)
        stream.seek(-5)
        self.assertEqual(stream.tell(), 0)

    def test_extended_record_id(self) -> None:
        self.assertEqual(read_record_id(FreeHandStream(b"\xff\xff\x00\x01")), 0x1FEFF)
        self.assertEqual(read_record_id(FreeHandStream(b"\x12\x34")), 0x1234)

    def test_inflate_rejects_garbage(self) -> None:
        with self.assertRaises(GenericError):
            inflate(b"\xff\xff\xff\xff")


class PackedTransformTests(unittest.TestCase):
    def test_term_lengths(self) -> None:
        self.assertEqual(xform_calc(0, 0), 8)
        self.assertEqual(xform_calc(0x4, 0xFF), 0)
        self.assertEqual(xform_calc(0x33, 0x60), 16)

    def test_scale_and_offset(self) -> None:
        stream = FreeHandStream(coord(2.0) + coord(3.0) + coord(72.0) + coord(144.0))
        trafo = read_packed_transform(stream, 0x03, 0x00)
        self.assertEqual(trafo, Transform(2.0, 0.0, 0.0, 3.0, 1.0, 2.0))
        self.assertTrue(stream.at_end())

    def test_identity_flag(self) -> None:
        self.assertEqual(read_packed_transform(FreeHandStream(b""), 0x04, 0xFF), Transform())


class RecordTests(unittest.TestCase):
    def test_rectangle_without_rounding(self) -> None:
        parser = _parser(9)
        body = rid(7) + rid(0) + bytes(4) + bytes(8) + rid(0)
        body += inches(1.0) + inches(2.0) + inches(3.0) + inches(5.0) + coord(0.0) + coord(0.0)
        stream = FreeHandStream(body)
        parser.read_rectangle(stream)
        self.assertTrue(stream.at_end())

        path = parser.store.find_path(1)
        self.assertIsNotNone(path)
        self.assertEqual(path.graphic_style_id, 7)
        actions = path.to_actions()
        self.assertEqual([action["action"] for action in actions], ["M", "L", "L", "L", "L", "Z"])
        self.assertEqual((actions[0]["x"], actions[0]["y"]), (1.0, 2.0))
        self.assertEqual((actions[2]["x"], actions[2]["y"]), (3.0, 5.0))

    def test_tint_colour(self) -> None:
        parser = _parser(9)
        parser.current_record = 4
        body = rid(0) + bytes(2) + bytes(6) + bytes(4) + rid(3) + u16(0x8000) + bytes(2)
        stream = FreeHandStream(body)
        parser.read_tint_color(stream)
        self.assertTrue(stream.at_end())
        self.assertEqual(parser.store.find_tint_color(5), TintColor(3, 0x8000))

    def test_readers_are_case_insensitive(self) -> None:
        parser = _parser(9)
        self.assertIsNotNone(parser.reader_for("ProcessColor"))
        self.assertIsNotNone(parser.reader_for("processcolor"))
        self.assertIsNone(parser.reader_for("NoSuchRecord"))

    def test_point_records_stop_at_end_of_data(self) -> None:
        point = bytes(3) + (inches(1.0) + inches(2.0)) * 3
        segments = _read_segments(FreeHandStream(point * 2), 5)
        self.assertEqual(len(segments), 2)
        self.assertEqual(segments[0], ((72.0, 144.0),) * 3)

    def test_cut_point_record_raises(self) -> None:
        point = bytes(3) + (inches(1.0) + inches(2.0)) * 3
        with self.assertRaises(EndOfStreamError):
            _read_segments(FreeHandStream(point + point[:10]), 2)

    def test_truncated_path_record_raises(self) -> None:
        parser = _parser(9)
        body = path_record(0, [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)])
        with self.assertRaises(EndOfStreamError):
            parser.read_path(FreeHandStream(body[:-5]))
        self.assertIsNone(parser.store.find_path(parser.record_id))


class ContainerTests(unittest.TestCase):
    def _render(self, data: bytes) -> RecordingPainter:
        painter = RecordingPainter()
        self.assertTrue(parse(data, painter, log=DiagnosticLog(echo=False)))
        return painter

    def _assert_square(self, painter: RecordingPainter) -> None:
        self.assertEqual(len(painter.calls_named("draw_path")), 1)
        style = painter.calls_named("set_style")[0]
        self.assertEqual(style["draw:fill-color"], "#336699")
        first = painter.calls_named("draw_path")[0]["svg:d"][0]
        self.assertAlmostEqual(first["x"], 1.0)
        self.assertAlmostEqual(first["y"], 10.0)
        self.assertEqual(painter.calls_named("start_page")[0], {"svg:width": 8.5, "svg:height": 11.0})

    def test_compressed_document(self) -> None:
        self._assert_square(self._render(build_document(square_records(9), "4")))

    def test_uncompressed_legacy_document(self) -> None:
        self._assert_square(self._render(build_document(square_records(8), "3")))

    def test_store_contents(self) -> None:
        store = load_store(build_document(square_records(9)), DiagnosticLog(echo=False))
        self.assertIsNotNone(store)
        self.assertEqual(store.fill_name_id, 1)
        self.assertEqual(store.block[0], 9)
        self.assertEqual(store.find_list_elements(8), (7,))
        self.assertEqual(store.tail.page_info.max_x, 8.5)

    def test_unknown_record_is_reported(self) -> None:
        log = DiagnosticLog(echo=False)
        data = build_document(square_records(9) + [("Bogus", b"")])
        store = load_store(data, log)
        self.assertTrue(any("unknown record type 'Bogus'" in warning for warning in log.warnings))
        self.assertEqual(store.block[0], 9)

    def test_truncated_document_fails(self) -> None:
        log = DiagnosticLog(echo=False)
        data = build_document(square_records(9), tail=b"")
        self.assertFalse(parse(data, RecordingPainter(), log=log))
        self.assertTrue(any(warning.startswith("Parsing failed") for warning in log.warnings))

    def test_short_header_is_a_structural_error(self) -> None:
        stream = FreeHandStream(b"AGD4" + bytes(4) + b"\x00\x00\x00\x04")
        with self.assertRaises(GenericError):
            FreeHandParser(SceneStore(DiagnosticLog(echo=False))).parse(stream)

    def test_bad_magic_is_not_parsed(self) -> None:
        self.assertFalse(FreeHandParser(SceneStore(DiagnosticLog(echo=False))).parse(FreeHandStream(b"PK\x03\x04")))


class DetectionTests(unittest.TestCase):
    def test_plain_document(self) -> None:
        data = build_document(square_records(9))
        self.assertEqual(find_document_offset(data), 0)
        self.assertTrue(is_supported(data))

    def test_wrapped_document(self) -> None:
        data = wrap_document(build_document(square_records(9)))
        self.assertEqual(find_document_offset(data), 17)
        self.assertTrue(is_supported(data))
        painter = RecordingPainter()
        self.assertTrue(parse(data, painter, log=DiagnosticLog(echo=False)))
        self.assertEqual(len(painter.calls_named("draw_path")), 1)

    def test_junk_is_rejected(self) -> None:
        self.assertIsNone(find_document_offset(b"junk data"))
        self.assertFalse(is_supported(b"junk data"))
        self.assertFalse(is_supported(b"\x1c"))
        self.assertFalse(is_supported(b""))
        self.assertFalse(parse(b"junk data", RecordingPainter(), log=DiagnosticLog(echo=False)))

    def test_generate_svg(self) -> None:
        pages = []
        log = DiagnosticLog(echo=False)
        self.assertTrue(generate_svg(build_document(square_records(9)), pages, log=log))
        self.assertEqual(len(pages), 1)
        self.assertIn("<svg:svg", pages[0])
        self.assertIn('fill="#336699"', pages[0])


if __name__ == "__main__":
    unittest.main()
