"""
FreeHand (versions 3 through MX) document decoding and rendering.

The parser fills a ``SceneStore`` with every decoded record; the renderer
walks the store and replays the drawing into a ``Painter``.
"""

from .document import find_document_offset, generate_svg, is_supported, parse
from .errors import EndOfStreamError, FreeHandError, GenericError, RecursionLimitError
from .logging import DiagnosticLog
from .painter import Painter, RecordingPainter, TextPainter
from .parser import FreeHandParser
from .render import Renderer, RenderOptions, compose_path
from .store import SceneStore
from .stream import FreeHandStream
from .svg import SVGDrawingGenerator, svg_document
from .transform import Transform

__all__ = [
    "find_document_offset",
    "generate_svg",
    "is_supported",
    "parse",
    "FreeHandError",
    "EndOfStreamError",
    "GenericError",
    "RecursionLimitError",
    "DiagnosticLog",
    "Painter",
    "RecordingPainter",
    "TextPainter",
    "FreeHandParser",
    "Renderer",
    "RenderOptions",
    "compose_path",
    "SceneStore",
    "FreeHandStream",
    "SVGDrawingGenerator",
    "svg_document",
    "Transform",
]
