"""SVG back end.

Each page becomes one ``<svg>`` string appended to the caller's output list.
Painter coordinates arrive in inches and are written in points.
"""

from __future__ import annotations

import base64
from typing import Dict, List, Optional
from xml.sax.saxutils import escape, quoteattr

from .constants import POINTS_PER_INCH
from .images import PATTERN_SIZE
from .painter import Painter, Properties
from .path import actions_to_svg_path

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
XML_HEADER = (
    '<?xml version="1.0" encoding="UTF-8" standalone="no"?>\n'
    '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN"'
    ' "http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">\n'
)


def _pt(value: object) -> str:
    text = f"{float(value) * POINTS_PER_INCH:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _num(value: object) -> str:
    text = f"{float(value):.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _opacity(value: object) -> str:
    return _num(max(0.0, min(1.0, float(value))))


class SVGDrawingGenerator(Painter):
    def __init__(self, output: List[str], namespace: str = "svg") -> None:
        self.output = output
        self.prefix = f"{namespace}:" if namespace else ""
        self.namespace = namespace
        self._style: Properties = {}
        self._defs: List[str] = []
        self._body: List[str] = []
        self._page: Properties = {}
        self._next_id = 0
        self._text_props: Properties = {}
        self._span_props: Properties = {}
        self._paragraph_index = -1
        self._paragraph_started = False
        self.last_body_length = 0

    # -- helpers ---------------------------------------------------------

    def _tag(self, name: str) -> str:
        return f"{self.prefix}{name}"

    def _new_id(self, kind: str) -> str:
        self._next_id += 1
        return f"{kind}{self._next_id}"

    def _write(self, text: str) -> None:
        self._body.append(text)

    def content_size(self) -> int:
        """Length of the current page body, without prologue and defs."""
        return sum(len(part) for part in self._body)

    # -- document structure ----------------------------------------------

    def start_document(self, props: Properties) -> None:
        pass

    def end_document(self) -> None:
        pass

    def start_page(self, props: Properties) -> None:
        self._page = dict(props)
        self._defs = []
        self._body = []
        self._style = {}

    def end_page(self) -> None:
        width = float(self._page.get("svg:width", 0.0))
        height = float(self._page.get("svg:height", 0.0))
        xmlns = f' xmlns:{self.namespace}="{SVG_NS}"' if self.namespace else f' xmlns="{SVG_NS}"'
        parts = [
            f'<{self._tag("svg")} version="1.1"{xmlns} xmlns:xlink="{XLINK_NS}" '
            f'width="{_num(width)}in" height="{_num(height)}in" '
            f'viewBox="0 0 {_pt(width)} {_pt(height)}">\n'
        ]
        if self._defs:
            parts.append(f'<{self._tag("defs")}>\n')
            parts.extend(self._defs)
            parts.append(f'</{self._tag("defs")}>\n')
        parts.extend(self._body)
        parts.append(f'</{self._tag("svg")}>\n')
        self.last_body_length = self.content_size()
        self.output.append("".join(parts))
        self._body = []
        self._defs = []

    def open_group(self, props: Properties) -> None:
        self._write(f'<{self._tag("g")}>\n')

    def close_group(self) -> None:
        self._write(f'</{self._tag("g")}>\n')

    def set_style(self, props: Properties) -> None:
        self._style = dict(props)

    # -- paint servers ---------------------------------------------------

    def _stops(self, stops: List[Dict[str, object]]) -> str:
        return "".join(
            f'<{self._tag("stop")} offset="{_num(stop.get("svg:offset", 0.0))}" '
            f'stop-color="{stop.get("svg:stop-color", "#000000")}" '
            f'stop-opacity="{_opacity(stop.get("svg:stop-opacity", 1.0))}"/>\n'
            for stop in stops
        )

    def _gradient(self, style: Properties) -> str:
        start = style.get("draw:start-color", "#000000")
        end = style.get("draw:end-color", "#ffffff")
        default_stops = [
            {"svg:offset": 0.0, "svg:stop-color": start},
            {"svg:offset": 1.0, "svg:stop-color": end},
        ]
        gradient_id = self._new_id("grad")
        if style.get("draw:style") == "radial":
            stops = style.get("svg:radialGradient") or default_stops
            self._defs.append(
                f'<{self._tag("radialGradient")} id="{gradient_id}" '
                f'cx="{_num(style.get("svg:cx", 0.5))}" cy="{_num(style.get("svg:cy", 0.5))}" r="0.5">\n'
                f"{self._stops(stops)}"
                f'</{self._tag("radialGradient")}>\n'
            )
        else:
            stops = style.get("svg:linearGradient") or default_stops
            angle = float(style.get("draw:angle", 0.0))
            self._defs.append(
                f'<{self._tag("linearGradient")} id="{gradient_id}" x1="0" y1="0" x2="0" y2="1" '
                f'gradientTransform="rotate({_num(-angle)} .5 .5)">\n'
                f"{self._stops(stops)}"
                f'</{self._tag("linearGradient")}>\n'
            )
        return f"url(#{gradient_id})"

    def _bitmap(self, style: Properties) -> Optional[str]:
        data = style.get("draw:fill-image")
        if not data:
            return None
        mime = style.get("librevenge:mime-type", "image/png")
        encoded = base64.b64encode(bytes(data)).decode("ascii")
        href = f"data:{mime};base64,{encoded}"
        pattern_id = self._new_id("pattern")
        if style.get("style:repeat") == "repeat":
            width = float(style.get("draw:fill-image-width", PATTERN_SIZE / POINTS_PER_INCH))
            height = float(style.get("draw:fill-image-height", PATTERN_SIZE / POINTS_PER_INCH))
            self._defs.append(
                f'<{self._tag("pattern")} id="{pattern_id}" patternUnits="userSpaceOnUse" '
                f'width="{_pt(width)}" height="{_pt(height)}">\n'
                f'<{self._tag("image")} x="0" y="0" width="{_pt(width)}" height="{_pt(height)}" '
                f'preserveAspectRatio="none" xlink:href="{href}"/>\n'
                f'</{self._tag("pattern")}>\n'
            )
        else:
            self._defs.append(
                f'<{self._tag("pattern")} id="{pattern_id}" patternUnits="objectBoundingBox" '
                f'patternContentUnits="objectBoundingBox" width="1" height="1">\n'
                f'<{self._tag("image")} x="0" y="0" width="1" height="1" '
                f'preserveAspectRatio="none" xlink:href="{href}"/>\n'
                f'</{self._tag("pattern")}>\n'
            )
        return f"url(#{pattern_id})"

    def _marker(self, style: Properties, which: str) -> Optional[str]:
        path = style.get(f"draw:marker-{which}-path")
        viewbox = style.get(f"draw:marker-{which}-viewbox")
        if not path or not viewbox:
            return None
        marker_id = self._new_id("marker")
        x, y, width, height = (float(value) for value in viewbox)
        size = float(style.get(f"draw:marker-{which}-width", width))
        self._defs.append(
            f'<{self._tag("marker")} id="{marker_id}" markerUnits="userSpaceOnUse" orient="auto" '
            f'viewBox="{_num(x)} {_num(y)} {_num(width)} {_num(height)}" '
            f'markerWidth="{_pt(size)}" markerHeight="{_pt(size)}" '
            f'refX="{_num(x + width / 2.0)}" refY="{_num(y + height / 2.0)}">\n'
            f'<{self._tag("path")} d={quoteattr(str(path))}/>\n'
            f'</{self._tag("marker")}>\n'
        )
        return f"url(#{marker_id})"

    # -- style serialisation ---------------------------------------------

    def _style_attributes(self, style: Properties, shadow: bool = False) -> str:
        attrs: List[str] = []
        fill = style.get("draw:fill", "none")
        if shadow:
            color = style.get("draw:shadow-color", "#000000")
            attrs.append(f'fill="{color if fill != "none" else "none"}"')
            stroke = style.get("draw:stroke", "none")
            attrs.append(f'stroke="{color if stroke != "none" else "none"}"')
            attrs.append(f'opacity="{_opacity(style.get("draw:shadow-opacity", 1.0))}"')
            if stroke != "none":
                attrs.append(f'stroke-width="{_pt(style.get("svg:stroke-width", 0.0))}"')
            return " ".join(attrs)

        if fill == "solid":
            attrs.append(f'fill="{style.get("draw:fill-color", "#000000")}"')
            if "draw:opacity" in style:
                attrs.append(f'fill-opacity="{_opacity(style["draw:opacity"])}"')
        elif fill == "gradient":
            attrs.append(f'fill="{self._gradient(style)}"')
        elif fill == "bitmap":
            attrs.append(f'fill="{self._bitmap(style) or "none"}"')
        else:
            attrs.append('fill="none"')
        if "svg:fill-opacity" in style and fill != "none":
            attrs.append(f'fill-opacity="{_opacity(style["svg:fill-opacity"])}"')
        if style.get("svg:fill-rule") == "evenodd":
            attrs.append('fill-rule="evenodd"')

        stroke = style.get("draw:stroke", "none")
        if stroke == "none":
            attrs.append('stroke="none"')
        else:
            attrs.append(f'stroke="{style.get("svg:stroke-color", "#000000")}"')
            width = float(style.get("svg:stroke-width", 0.0))
            attrs.append(f'stroke-width="{_pt(width) if width > 0.0 else "1"}"')
            if "svg:stroke-opacity" in style:
                attrs.append(f'stroke-opacity="{_opacity(style["svg:stroke-opacity"])}"')
            if stroke == "dash":
                attrs.append(f'stroke-dasharray="{self._dash_array(style)}"')
            for which in ("start", "end"):
                marker = self._marker(style, which)
                if marker:
                    attrs.append(f'marker-{which}="{marker}"')
        return " ".join(attrs)

    @staticmethod
    def _dash_array(style: Properties) -> str:
        distance = _pt(style.get("draw:distance", 0.0))
        dashes: List[str] = []
        for index in ("1", "2"):
            count = int(style.get(f"draw:dots{index}", 0))
            length = _pt(style.get(f"draw:dots{index}-length", 0.0))
            dashes.extend(f"{length}, {distance}" for _ in range(count))
        return ", ".join(dashes) or "1"

    # -- drawing ---------------------------------------------------------

    def draw_path(self, props: Properties) -> None:
        actions = props.get("svg:d") or []
        d = actions_to_svg_path(list(actions), POINTS_PER_INCH)
        if not d:
            return
        style = self._style
        if style.get("draw:shadow") == "visible":
            dx = _pt(style.get("draw:shadow-offset-x", 0.0))
            dy = _pt(style.get("draw:shadow-offset-y", 0.0))
            self._write(
                f'<{self._tag("path")} d="{d}" {self._style_attributes(style, shadow=True)} '
                f'transform="translate({dx}, {dy})"/>\n'
            )
        self._write(f'<{self._tag("path")} d="{d}" {self._style_attributes(style)}/>\n')

    def draw_rectangle(self, props: Properties) -> None:
        self._write(
            f'<{self._tag("rect")} x="{_pt(props.get("svg:x", 0.0))}" y="{_pt(props.get("svg:y", 0.0))}" '
            f'width="{_pt(props.get("svg:width", 0.0))}" height="{_pt(props.get("svg:height", 0.0))}" '
            f"{self._style_attributes(self._style)}/>\n"
        )

    @staticmethod
    def _rotation(props: Properties) -> str:
        angle = props.get("librevenge:rotate")
        if not angle:
            return ""
        cx = _pt(props.get("librevenge:rotate-cx", 0.0))
        cy = _pt(props.get("librevenge:rotate-cy", 0.0))
        return f' transform="rotate({_num(angle)}, {cx}, {cy})"'

    def draw_graphic_object(self, props: Properties) -> None:
        data = props.get("office:binary-data")
        mime = props.get("librevenge:mime-type")
        if not data or not mime:
            return
        encoded = base64.b64encode(bytes(data)).decode("ascii")
        self._write(
            f'<{self._tag("image")} x="{_pt(props.get("svg:x", 0.0))}" y="{_pt(props.get("svg:y", 0.0))}" '
            f'width="{_pt(props.get("svg:width", 0.0))}" height="{_pt(props.get("svg:height", 0.0))}"'
            f'{self._rotation(props)} xlink:href="data:{mime};base64,{encoded}"/>\n'
        )

    # -- text ------------------------------------------------------------

    def start_text_object(self, props: Properties) -> None:
        self._text_props = dict(props)
        self._paragraph_index = -1
        self._write(
            f'<{self._tag("text")} x="{_pt(props.get("svg:x", 0.0))}" '
            f'y="{_pt(props.get("svg:y", 0.0))}"{self._rotation(props)}>\n'
        )

    def end_text_object(self) -> None:
        self._write(f'</{self._tag("text")}>\n')
        self._text_props = {}

    def open_paragraph(self, props: Properties) -> None:
        self._paragraph_index += 1
        self._paragraph_started = False

    def close_paragraph(self) -> None:
        pass

    def open_span(self, props: Properties) -> None:
        self._span_props = dict(props)

    def close_span(self) -> None:
        self._span_props = {}

    def _span_attributes(self) -> str:
        props = self._span_props
        attrs: List[str] = []
        if "style:font-name" in props:
            attrs.append(f"font-family={quoteattr(str(props['style:font-name']))}")
        if "fo:font-size" in props:
            attrs.append(f'font-size="{_num(props["fo:font-size"])}"')
        if "fo:font-weight" in props:
            attrs.append(f'font-weight="{props["fo:font-weight"]}"')
        if "fo:font-style" in props:
            attrs.append(f'font-style="{props["fo:font-style"]}"')
        if "fo:color" in props:
            attrs.append(f'fill="{props["fo:color"]}"')
        if props.get("style:text-underline-type"):
            attrs.append('text-decoration="underline"')
        elif props.get("style:text-line-through-type"):
            attrs.append('text-decoration="line-through"')
        if not self._paragraph_started and self._paragraph_index > 0:
            size = float(props.get("fo:font-size", 12.0))
            line = float(props.get("fo:line-height", size * 1.2))
            attrs.append(f'x="{_pt(self._text_props.get("svg:x", 0.0))}" dy="{_num(line)}"')
        return (" " + " ".join(attrs)) if attrs else ""

    def insert_text(self, text: str) -> None:
        if not text:
            return
        attributes = self._span_attributes()
        self._paragraph_started = True
        self._write(f'<{self._tag("tspan")}{attributes}>{escape(text)}</{self._tag("tspan")}>\n')


def svg_document(page: str) -> str:
    """Standalone SVG file text for one generated page."""
    return XML_HEADER + page

