"""Drawing back ends fed by the renderer.

``Painter`` is the no-op contract; subclasses override what they need.
``RecordingPainter`` keeps every call for inspection and can dump them as
an indented trace, ``TextPainter`` keeps only the text content.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

Properties = Dict[str, object]


class Painter:
    def start_document(self, props: Properties) -> None:
        pass

    def end_document(self) -> None:
        pass

    def start_page(self, props: Properties) -> None:
        pass

    def end_page(self) -> None:
        pass

    def open_group(self, props: Properties) -> None:
        pass

    def close_group(self) -> None:
        pass

    def set_style(self, props: Properties) -> None:
        pass

    def draw_path(self, props: Properties) -> None:
        pass

    def draw_rectangle(self, props: Properties) -> None:
        pass

    def draw_graphic_object(self, props: Properties) -> None:
        pass

    def start_text_object(self, props: Properties) -> None:
        pass

    def end_text_object(self) -> None:
        pass

    def open_paragraph(self, props: Properties) -> None:
        pass

    def close_paragraph(self) -> None:
        pass

    def open_span(self, props: Properties) -> None:
        pass

    def close_span(self) -> None:
        pass

    def insert_text(self, text: str) -> None:
        pass


_OPENERS = {
    "start_document",
    "start_page",
    "open_group",
    "start_text_object",
    "open_paragraph",
    "open_span",
}
_CLOSERS = {
    "end_document",
    "end_page",
    "close_group",
    "end_text_object",
    "close_paragraph",
    "close_span",
}


def _format_value(value: object) -> str:
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"
    if isinstance(value, float):
        return f"{value:g}"
    if isinstance(value, list):
        return "(" + ", ".join(_format_value(item) for item in value) + ")"
    if isinstance(value, dict):
        return "{" + ", ".join(f"{key}: {_format_value(item)}" for key, item in value.items()) + "}"
    return str(value)


class RecordingPainter(Painter):
    """Keeps ``(method name, argument)`` pairs in call order."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, object]] = []

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def calls_named(self, name: str) -> List[object]:
        return [arg for call, arg in self.calls if call == name]

    def dump(self) -> str:
        """Indented trace, one call per line, scopes nested two spaces deep."""
        lines: List[str] = []
        depth = 0
        for name, arg in self.calls:
            if name in _CLOSERS:
                depth = max(0, depth - 1)
            if isinstance(arg, dict):
                details = ", ".join(f"{key}: {_format_value(value)}" for key, value in arg.items())
                lines.append(f"{'  ' * depth}{name}({details})")
            elif arg is None:
                lines.append(f"{'  ' * depth}{name}")
            else:
                lines.append(f"{'  ' * depth}{name}({_format_value(arg)})")
            if name in _OPENERS:
                depth += 1
        return "\n".join(lines)

    def _record(self, name: str, arg: object = None) -> None:
        self.calls.append((name, arg))

    def start_document(self, props: Properties) -> None:
        self._record("start_document", dict(props))

    def end_document(self) -> None:
        self._record("end_document")

    def start_page(self, props: Properties) -> None:
        self._record("start_page", dict(props))

    def end_page(self) -> None:
        self._record("end_page")

    def open_group(self, props: Properties) -> None:
        self._record("open_group", dict(props))

    def close_group(self) -> None:
        self._record("close_group")

    def set_style(self, props: Properties) -> None:
        self._record("set_style", dict(props))

    def draw_path(self, props: Properties) -> None:
        self._record("draw_path", dict(props))

    def draw_rectangle(self, props: Properties) -> None:
        self._record("draw_rectangle", dict(props))

    def draw_graphic_object(self, props: Properties) -> None:
        self._record("draw_graphic_object", dict(props))

    def start_text_object(self, props: Properties) -> None:
        self._record("start_text_object", dict(props))

    def end_text_object(self) -> None:
        self._record("end_text_object")

    def open_paragraph(self, props: Properties) -> None:
        self._record("open_paragraph", dict(props))

    def close_paragraph(self) -> None:
        self._record("close_paragraph")

    def open_span(self, props: Properties) -> None:
        self._record("open_span", dict(props))

    def close_span(self) -> None:
        self._record("close_span")

    def insert_text(self, text: str) -> None:
        self._record("insert_text", text)


class TextPainter(Painter):
    """Collects the document's text, one line per paragraph."""

    def __init__(self) -> None:
        self.lines: List[str] = []
        self._current: List[str] | None = None

    def open_paragraph(self, props: Properties) -> None:
        self._current = []

    def close_paragraph(self) -> None:
        if self._current is not None:
            self.lines.append("".join(self._current))
        self._current = None

    def insert_text(self, text: str) -> None:
        if self._current is None:
            self.lines.append(text)
        else:
            self._current.append(text)

    def text(self) -> str:
        return "\n".join(self.lines)
