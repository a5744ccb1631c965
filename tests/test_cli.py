from __future__ import annotations

import io
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from synthetic import build_document, square_records

import fh_convert
from freehand.document import parse
from freehand.logging import DiagnosticLog
from freehand.painter import RecordingPainter


class ConvertCommandTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.document = self.root / "square.fh9"
        self.document.write_bytes(build_document(square_records(9)))

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, argv: list) -> tuple:
        stdout = io.StringIO()
        stderr = io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            code = fh_convert.main(argv)
        return code, stdout.getvalue(), stderr.getvalue()

    def test_svg_to_file(self) -> None:
        output = self.root / "square.svg"
        code, _, stderr = self._run(["svg", str(self.document), "-o", str(output), "-q"])
        self.assertEqual(code, 0)
        text = output.read_text(encoding="utf-8")
        self.assertTrue(text.startswith("<?xml"))
        self.assertIn("<svg:svg", text)
        self.assertIn('fill="#336699"', text)
        self.assertIn("[+] Loaded", stderr)

    def test_raw_dump_to_stdout(self) -> None:
        code, stdout, _ = self._run(["raw", str(self.document), "-q"])
        self.assertEqual(code, 0)
        self.assertIn("draw_path", stdout)
        self.assertIn("start_page", stdout)

    def test_text_of_drawing_without_text(self) -> None:
        code, stdout, _ = self._run(["text", str(self.document), "-q"])
        self.assertEqual(code, 0)
        self.assertEqual(stdout, "")

    def test_unsupported_input(self) -> None:
        junk = self.root / "notes.txt"
        junk.write_text("not a drawing", encoding="utf-8")
        code, stdout, stderr = self._run(["svg", str(junk)])
        self.assertEqual(code, 1)
        self.assertEqual(stdout, "")
        self.assertIn("Unsupported file format!", stderr)

    def test_failed_parse_writes_log(self) -> None:
        broken = self.root / "broken.fh9"
        broken.write_bytes(build_document(square_records(9), tail=b""))
        log_path = self.root / "logs" / "broken.log"
        code, _, stderr = self._run(["raw", str(broken), "--log", str(log_path), "-q"])
        self.assertEqual(code, 1)
        self.assertIn("Parsing failed!", stderr)
        self.assertIn("[warn] Parsing failed", log_path.read_text(encoding="utf-8"))


class DiagnosticLogTests(unittest.TestCase):
    def test_library_log_is_silent_by_default(self) -> None:
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            log = DiagnosticLog()
            log.warn("FHTail points elsewhere")
            self.assertFalse(parse(build_document(square_records(9), tail=b""), RecordingPainter()))
        self.assertEqual(stderr.getvalue(), "")
        self.assertEqual(log.warnings, ["FHTail points elsewhere"])

    def test_echo_prints_to_stderr(self) -> None:
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            DiagnosticLog(echo=True).warn("Skipping subtree")
        self.assertEqual(stderr.getvalue(), "[warn] Skipping subtree\n")


if __name__ == "__main__":
    unittest.main()
