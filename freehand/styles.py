"""Fill, stroke, filter and content resolution for path styles.

A style id names either a PropList (name id -> value id, modern documents)
or a legacy GraphicStyle whose attributes reach their values through
AttributeHolder chains. Both carry an optional parent; parents are resolved
first so the nearest definition wins. Results land in a flat property dict
that painters consume.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List, Optional, Sequence

from .constants import (
    FH_LENSFILL_MODE_DARKEN,
    FH_LENSFILL_MODE_INVERT,
    FH_LENSFILL_MODE_LIGHTEN,
    FH_LENSFILL_MODE_MAGNIFY,
    FH_LENSFILL_MODE_MONOCHROME,
    FH_LENSFILL_MODE_TRANSPARENCY,
)
from .entities import (
    BasicFill,
    BasicLine,
    ColorStop,
    CustomProc,
    GlowFilter,
    GraphicStyle,
    LensFill,
    LinePattern,
    LinearFill,
    PatternFill,
    PatternLine,
    RadialFill,
    RGBColor,
    ShadowFilter,
    TileFill,
    TintColor,
)
from .images import pattern_bitmap
from .store import SceneStore

Properties = Dict[str, object]
SubRenderer = Callable[[TileFill], Optional[Properties]]

# set by one fill or stroke kind and meaningless under another
FILL_KIND_KEYS = (
    "svg:linearGradient",
    "svg:radialGradient",
    "draw:style",
    "draw:angle",
    "svg:cx",
    "svg:cy",
    "draw:start-color",
    "draw:end-color",
    "draw:fill-image",
    "draw:fill-image-width",
    "draw:fill-image-height",
    "style:repeat",
    "librevenge:mime-type",
    "draw:opacity",
    "draw:color-mode",
)
STROKE_KIND_KEYS = (
    "draw:dots1",
    "draw:dots1-length",
    "draw:dots2",
    "draw:dots2-length",
    "draw:distance",
    "svg:stroke-opacity",
    "draw:marker-start-path",
    "draw:marker-start-viewbox",
    "draw:marker-start-width",
    "draw:marker-end-path",
    "draw:marker-end-viewbox",
    "draw:marker-end-width",
)


def tint_to_rgb(base: RGBColor, tint: int) -> RGBColor:
    """Blend ``base`` toward white; ``tint`` is the 16.16 share of the base colour."""

    def channel(value: int) -> int:
        blended = (value * tint + (0x10000 - tint) * 0x10000) >> 16
        return max(0, min(0xFFFF, blended))

    return RGBColor(channel(base.red), channel(base.green), channel(base.blue))


def rgb_to_hex(color: RGBColor) -> str:
    return f"#{color.red >> 8:02x}{color.green >> 8:02x}{color.blue >> 8:02x}"


def _clear(props: Properties, keys: Sequence[str]) -> None:
    for key in keys:
        props.pop(key, None)


class StyleResolver:
    def __init__(self, store: SceneStore, sub_renderer: SubRenderer | None = None) -> None:
        self.store = store
        self.sub_renderer = sub_renderer

    # -- colours ---------------------------------------------------------

    def rgb_from_tint(self, tint: TintColor) -> RGBColor:
        base = self.store.find_rgb_color(tint.base_color_id)
        if base is None:
            return RGBColor()
        return tint_to_rgb(base, tint.tint)

    def color_string(self, color_id: int) -> str:
        """``#rrggbb`` for an RGB or tint colour id, empty when it resolves to nothing."""
        color = self.store.find_rgb_color(color_id)
        if color is None:
            tint = self.store.find_tint_color(color_id)
            if tint is None:
                return ""
            color = self.rgb_from_tint(tint)
        return rgb_to_hex(color)

    # -- public entry points ---------------------------------------------

    def resolve(self, style_id: int) -> Properties:
        props: Properties = {}
        self.append_fill_properties(props, style_id)
        self.append_stroke_properties(props, style_id)
        return props

    def append_fill_properties(self, props: Properties, style_id: int, _seen: Sequence[int] = ()) -> None:
        props.setdefault("draw:fill", "none")
        if not style_id or style_id in _seen:
            return
        seen = (*_seen, style_id)

        prop_list = self.store.find_prop_list(style_id)
        if prop_list is not None:
            if prop_list.parent_id:
                self.append_fill_properties(props, prop_list.parent_id, seen)
            value_id = prop_list.elements.get(self.store.fill_name_id) if self.store.fill_name_id else None
            if value_id:
                self._append_fill(props, value_id)
            return

        style = self.store.find_graphic_style(style_id)
        if style is None:
            return
        if style.parent_id:
            self.append_fill_properties(props, style.parent_id, seen)
        fill_id = self._find_fill_id(style)
        if fill_id:
            self._append_fill(props, fill_id)
            return
        self._append_filtered(props, style, seen, self.append_fill_properties)

    def append_stroke_properties(self, props: Properties, style_id: int, _seen: Sequence[int] = ()) -> None:
        props.setdefault("draw:stroke", "none")
        if not style_id or style_id in _seen:
            return
        seen = (*_seen, style_id)

        prop_list = self.store.find_prop_list(style_id)
        if prop_list is not None:
            if prop_list.parent_id:
                self.append_stroke_properties(props, prop_list.parent_id, seen)
            value_id = prop_list.elements.get(self.store.stroke_name_id) if self.store.stroke_name_id else None
            if value_id:
                self._append_stroke(props, value_id)
            return

        style = self.store.find_graphic_style(style_id)
        if style is None:
            return
        if style.parent_id:
            self.append_stroke_properties(props, style.parent_id, seen)
        stroke_id = self._find_stroke_id(style)
        if stroke_id:
            self._append_stroke(props, stroke_id)
            return
        self._append_filtered(props, style, seen, self.append_stroke_properties)

    def find_content_id(self, style_id: int, _seen: Sequence[int] = ()) -> int:
        if not style_id or style_id in _seen or not self.store.content_name_id:
            return 0
        seen = (*_seen, style_id)
        name_id = self.store.content_name_id

        prop_list = self.store.find_prop_list(style_id)
        if prop_list is not None:
            content_id = prop_list.elements.get(name_id, 0)
            if not content_id and prop_list.parent_id:
                content_id = self.find_content_id(prop_list.parent_id, seen)
            return content_id

        style = self.store.find_graphic_style(style_id)
        if style is None:
            return 0
        holder_id = style.elements.get(name_id, 0)
        content_id = self.store.find_value_from_attribute(holder_id) or holder_id
        if not content_id and style.parent_id:
            content_id = self.find_content_id(style.parent_id, seen)
        return content_id

    # -- legacy graphic style helpers ------------------------------------

    def _is_fill(self, value_id: int) -> bool:
        store = self.store
        return any(
            finder(value_id) is not None
            for finder in (
                store.find_basic_fill,
                store.find_linear_fill,
                store.find_lens_fill,
                store.find_radial_fill,
                store.find_tile_fill,
                store.find_pattern_fill,
            )
        )

    def _is_stroke(self, value_id: int) -> bool:
        store = self.store
        return any(
            finder(value_id) is not None
            for finder in (store.find_basic_line, store.find_pattern_line, store.find_custom_proc)
        )

    def _find_fill_id(self, style: GraphicStyle) -> int:
        for key in sorted(style.elements):
            value_id = self.store.find_value_from_attribute(style.elements[key])
            if value_id and self._is_fill(value_id):
                return value_id
        return 0

    def _find_stroke_id(self, style: GraphicStyle) -> int:
        for key in sorted(style.elements):
            value_id = self.store.find_value_from_attribute(style.elements[key])
            if value_id and self._is_stroke(value_id):
                return value_id
        return 0

    def _append_filtered(
        self,
        props: Properties,
        style: GraphicStyle,
        seen: Sequence[int],
        base_resolver: Callable[..., None],
    ) -> None:
        for key in sorted(style.elements):
            holder_id = style.elements[key]
            holder = self.store.find_filter_attribute_holder(holder_id)
            if holder is None:
                holder = self.store.find_filter_attribute_holder(self.store.find_value_from_attribute(holder_id))
            if holder is None:
                continue
            if holder.graphic_style_id:
                base_resolver(props, holder.graphic_style_id, seen)
            if holder.filter_id:
                self.apply_filter(props, holder.filter_id)
            return

    # -- fills -----------------------------------------------------------

    def _append_fill(self, props: Properties, value_id: int) -> None:
        store = self.store
        if self._is_fill(value_id) or store.find_custom_proc(value_id) is not None:
            _clear(props, FILL_KIND_KEYS)
        fill = store.find_basic_fill(value_id)
        if fill is not None:
            self._append_basic_fill(props, fill)
            return
        linear = store.find_linear_fill(value_id)
        if linear is not None:
            self._append_linear_fill(props, linear)
            return
        lens = store.find_lens_fill(value_id)
        if lens is not None:
            self._append_lens_fill(props, lens)
            return
        radial = store.find_radial_fill(value_id)
        if radial is not None:
            self._append_radial_fill(props, radial)
            return
        tile = store.find_tile_fill(value_id)
        if tile is not None:
            self._append_tile_fill(props, tile)
            return
        pattern = store.find_pattern_fill(value_id)
        if pattern is not None:
            self._append_pattern_fill(props, pattern)
            return
        proc = store.find_custom_proc(value_id)
        if proc is not None:
            self._append_custom_proc_fill(props, proc)

    def _append_basic_fill(self, props: Properties, fill: BasicFill) -> None:
        props["draw:fill"] = "solid"
        props["draw:fill-color"] = self.color_string(fill.color_id) or "#000000"

    def _gradient_stops(self, stops: Sequence[ColorStop]) -> List[Properties]:
        return [
            {
                "svg:offset": stop.position,
                "svg:stop-color": self.color_string(stop.color_id) or "#000000",
                "svg:stop-opacity": 1.0,
            }
            for stop in stops
        ]

    def _append_gradient_colors(
        self, props: Properties, color1_id: int, color2_id: int, multi_color_list_id: int, key: str
    ) -> None:
        stops = self.store.find_multi_color_list(multi_color_list_id)
        if stops and len(stops) > 1:
            start = self.color_string(stops[0].color_id)
            end = self.color_string(stops[-1].color_id)
            props[key] = self._gradient_stops(stops)
        else:
            start = self.color_string(color1_id)
            end = self.color_string(color2_id)
        if start:
            props["draw:start-color"] = start
        if end:
            props["draw:end-color"] = end

    def _append_linear_fill(self, props: Properties, fill: LinearFill) -> None:
        props["draw:fill"] = "gradient"
        props["draw:style"] = "linear"
        angle = 90.0 - fill.angle
        while angle < 0.0:
            angle += 360.0
        while angle > 360.0:
            angle -= 360.0
        props["draw:angle"] = angle
        self._append_gradient_colors(
            props, fill.color1_id, fill.color2_id, fill.multi_color_list_id, "svg:linearGradient"
        )

    def _append_radial_fill(self, props: Properties, fill: RadialFill) -> None:
        props["draw:fill"] = "gradient"
        props["draw:style"] = "radial"
        props["svg:cx"] = fill.cx
        props["svg:cy"] = fill.cy
        self._append_gradient_colors(
            props, fill.color1_id, fill.color2_id, fill.multi_color_list_id, "svg:radialGradient"
        )

    def _append_lens_fill(self, props: Properties, fill: LensFill) -> None:
        mode = fill.mode
        if mode == FH_LENSFILL_MODE_TRANSPARENCY:
            props["draw:fill"] = "solid"
            color = self.color_string(fill.color_id)
            if color:
                props["draw:fill-color"] = color
            props["draw:opacity"] = fill.value
        elif mode == FH_LENSFILL_MODE_MONOCHROME:
            props["draw:fill"] = "none"
            props["draw:color-mode"] = "greyscale"
        elif mode in (FH_LENSFILL_MODE_MAGNIFY, FH_LENSFILL_MODE_INVERT):
            props["draw:fill"] = "none"
        elif mode == FH_LENSFILL_MODE_LIGHTEN:
            props["draw:fill"] = "solid"
            props["draw:fill-color"] = "#ffffff"
            props["draw:opacity"] = fill.value
        elif mode == FH_LENSFILL_MODE_DARKEN:
            props["draw:fill"] = "solid"
            props["draw:fill-color"] = "#000000"
            props["draw:opacity"] = fill.value

    def _append_tile_fill(self, props: Properties, fill: TileFill) -> None:
        if self.sub_renderer is None or not fill.group_id:
            return
        image = self.sub_renderer(fill)
        if image:
            props.update(image)

    def _append_pattern_fill(self, props: Properties, fill: PatternFill) -> None:
        color = self.color_string(fill.color_id) or "#000000"
        props["draw:fill"] = "bitmap"
        props["draw:fill-image"] = pattern_bitmap(fill.pattern, color)
        props["librevenge:mime-type"] = "image/png"
        props["style:repeat"] = "repeat"

    def _append_custom_proc_fill(self, props: Properties, proc: CustomProc) -> None:
        if not proc.ids:
            return
        props["draw:fill"] = "solid"
        props["draw:fill-color"] = self.color_string(proc.ids[0]) or "#000000"

    # -- strokes ---------------------------------------------------------

    def _append_stroke(self, props: Properties, value_id: int) -> None:
        if self._is_stroke(value_id):
            _clear(props, STROKE_KIND_KEYS)
        line = self.store.find_basic_line(value_id)
        if line is not None:
            self._append_basic_line(props, line)
            return
        pattern_line = self.store.find_pattern_line(value_id)
        if pattern_line is not None:
            self._append_pattern_line(props, pattern_line)
            return
        proc = self.store.find_custom_proc(value_id)
        if proc is not None:
            self._append_custom_proc_line(props, proc)

    def _append_basic_line(self, props: Properties, line: BasicLine) -> None:
        props["draw:stroke"] = "solid"
        props["svg:stroke-color"] = self.color_string(line.color_id) or "#000000"
        props["svg:stroke-width"] = line.width
        pattern = self.store.find_line_pattern(line.line_pattern_id)
        if pattern is not None:
            self._append_line_pattern(props, pattern)
        self._append_arrow(props, line.start_arrow_id, "start", line.width)
        self._append_arrow(props, line.end_arrow_id, "end", line.width)

    def _append_pattern_line(self, props: Properties, line: PatternLine) -> None:
        props["draw:stroke"] = "solid"
        props["svg:stroke-color"] = self.color_string(line.color_id) or "#000000"
        props["svg:stroke-width"] = line.width
        props["svg:stroke-opacity"] = line.percent_pattern

    def _append_custom_proc_line(self, props: Properties, proc: CustomProc) -> None:
        props["draw:stroke"] = "solid"
        if proc.ids:
            props["svg:stroke-color"] = self.color_string(proc.ids[0]) or "#000000"
        if proc.widths:
            props["svg:stroke-width"] = proc.widths[0]

    def _append_line_pattern(self, props: Properties, pattern: LinePattern) -> None:
        dashes = pattern.dashes
        if len(dashes) <= 1:
            return
        dots1 = dots2 = 0
        size1 = size2 = 0.0
        total_gap = 0.0
        for idx in range(0, len(dashes) - 1, 2):
            size = dashes[idx]
            if dots2 and size != size2:
                # only two distinct dash lengths can be expressed
                break
            if dots2:
                dots2 += 1
            elif not dots1 or size == size1:
                dots1 += 1
                size1 = size
            else:
                dots2 = 1
                size2 = size
            total_gap += dashes[idx + 1]
        props["draw:stroke"] = "dash"
        props["draw:dots1"] = dots1
        props["draw:dots1-length"] = size1
        if dots2:
            props["draw:dots2"] = dots2
            props["draw:dots2-length"] = size2
        count = dots1 + dots2
        props["draw:distance"] = total_gap / count if count else total_gap

    def _append_arrow(self, props: Properties, arrow_id: int, which: str, width: float) -> None:
        arrow = self.store.find_arrow_path(arrow_id)
        if arrow is None or arrow.empty():
            return
        bbox = arrow.bounding_box()
        if not bbox.is_valid():
            return
        props[f"draw:marker-{which}-path"] = arrow.path_string()
        props[f"draw:marker-{which}-viewbox"] = (bbox.xmin, bbox.ymin, bbox.width, bbox.height)
        props[f"draw:marker-{which}-width"] = max(width, 0.0) * 4.0 or bbox.width

    # -- filters ---------------------------------------------------------

    def apply_filter(self, props: Properties, filter_id: int) -> None:
        members = self.store.find_list_elements(filter_id)
        if members is not None:
            for member in members:
                self._apply_single_filter(props, member)
            return
        self._apply_single_filter(props, filter_id)

    def _apply_single_filter(self, props: Properties, filter_id: int) -> None:
        opacity = self.store.find_opacity_filter(filter_id)
        if opacity is not None:
            self._append_opacity(props, opacity)
        shadow = self.store.find_shadow_filter(filter_id)
        if shadow is not None:
            self._append_shadow(props, shadow)
        glow = self.store.find_glow_filter(filter_id)
        if glow is not None:
            self._append_glow(props, glow)

    def _append_opacity(self, props: Properties, percent: float) -> None:
        opacity = percent / 100.0
        if props.get("draw:fill", "none") != "none":
            props["svg:fill-opacity"] = opacity
        if props.get("draw:stroke", "none") != "none":
            props["svg:stroke-opacity"] = opacity

    def _append_shadow(self, props: Properties, shadow: ShadowFilter) -> None:
        if shadow.inner:
            return
        props["draw:shadow"] = "visible"
        props["draw:shadow-color"] = self.color_string(shadow.color_id) or "#000000"
        props["draw:shadow-opacity"] = shadow.opacity
        angle = math.radians(shadow.angle)
        props["draw:shadow-offset-x"] = shadow.distribution * math.cos(angle)
        props["draw:shadow-offset-y"] = shadow.distribution * math.sin(angle)

    def _append_glow(self, props: Properties, glow: GlowFilter) -> None:
        # no glow in the output model
        return
