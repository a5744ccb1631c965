#!/usr/bin/env python3
"""
Convert a FreeHand document to SVG, or dump its drawing calls or its text.

    fh_convert.py svg drawing.fh11 -o drawing.svg
    fh_convert.py raw drawing.fh11
    fh_convert.py text drawing.fh11

Progress lines go to stderr so the converted output can be piped.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Sequence

from freehand.document import generate_svg, is_supported, parse
from freehand.logging import DiagnosticLog
from freehand.painter import RecordingPainter, TextPainter
from freehand.svg import svg_document


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert Macromedia/Aldus FreeHand documents."
    )
    parser.add_argument(
        "command",
        choices=("svg", "raw", "text"),
        help="svg: write SVG, raw: dump painter calls, text: print text content",
    )
    parser.add_argument("input", type=Path, help="Path to the FreeHand document")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Optional destination (defaults to stdout)",
    )
    parser.add_argument(
        "--log",
        type=Path,
        help="Write conversion warnings to this path",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not echo warnings to stderr",
    )
    return parser.parse_args(argv)


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(text)
        return
    output.write_text(text, encoding="utf-8")
    print(f"[+] Written to {output}", file=sys.stderr)


def convert(command: str, blob: bytes, log: DiagnosticLog) -> str | None:
    if command == "svg":
        pages: List[str] = []
        if not generate_svg(blob, pages, log=log):
            print("SVG Generation failed!", file=sys.stderr)
            return None
        if len(pages) > 1:
            print(f"[i] Document has {len(pages)} pages; writing the first", file=sys.stderr)
        return svg_document(pages[0])

    painter = RecordingPainter() if command == "raw" else TextPainter()
    if not parse(blob, painter, log=log):
        print("Parsing failed!", file=sys.stderr)
        return None
    text = painter.dump() if command == "raw" else painter.text()
    return text + "\n" if text else ""


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    blob = args.input.read_bytes()
    print(f"[+] Loaded {args.input} ({len(blob)} bytes)", file=sys.stderr)

    if not is_supported(blob):
        print("Unsupported file format!", file=sys.stderr)
        return 1

    log = DiagnosticLog(destination=args.log, echo=not args.quiet)
    result = convert(args.command, blob, log)
    log.flush()
    if log.warnings:
        print(f"[i] {len(log.warnings)} warnings during conversion", file=sys.stderr)
    if args.log and log.lines:
        print(f"[i] Warning log written to {args.log}", file=sys.stderr)
    if result is None:
        return 1
    _emit(result, args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
