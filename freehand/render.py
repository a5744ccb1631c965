"""Scene traversal: turns the collected records into painter calls.

``Renderer.output_drawing`` walks the visible layers of the document's
Block and dispatches every element id to the matching output routine.
Nested content (clip groups, content fills, tile fills) is rendered into
an in-memory SVG sub-document which is then embedded as a bitmap fill.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .bounds import BoundsEngine, fuse_composite
from .constants import LAYER_VISIBLE, MAX_RENDER_DEPTH, MIN_SUBDOCUMENT_CONTENT
from .entities import (
    DisplayText,
    Group,
    ImageImport,
    NewBlend,
    PathText,
    SymbolInstance,
    TextObject,
    TileFill,
)
from .errors import RecursionLimitError
from .geometry import BoundingBox, almost_zero, points_match
from .images import sniff_mime_type
from .logging import DiagnosticLog
from .painter import Painter, Properties
from .path import Path, PathAction
from .store import SceneStore
from .styles import StyleResolver
from .svg import SVGDrawingGenerator, svg_document
from .text import (
    TextStyler,
    decode_mac_roman,
    decode_utf16,
    find_char_props,
    legacy_boundaries,
    split_runs,
    strip_control,
)
from .transform import IDENTITY, Transform
from .traversal import TraversalState


@dataclass(frozen=True)
class RenderOptions:
    max_depth: int = MAX_RENDER_DEPTH
    # sub-documents whose page body is not longer than this are dropped
    min_subdocument_content: int = MIN_SUBDOCUMENT_CONTENT
    embed_subdocuments: bool = True


def compose_path(actions: Sequence[PathAction], force_closed: bool) -> List[PathAction]:
    """Normalise subpath closing in a list of path actions.

    A move landing on the current point is dropped. Before each further
    move, and once at the end, a subpath that returned to its start (or any
    subpath when ``force_closed``) gets a ``Z`` unless it already ends with
    one, and a subpath holding nothing but its move is removed. An empty
    result leaves the input as it was.
    """

    result: List[PathAction] = []
    first_point = True
    was_move = False
    initial = (0.0, 0.0)
    previous = (0.0, 0.0)

    def close_subpath() -> None:
        if not result:
            return
        if was_move:
            result.pop()
        elif points_match(initial, previous) or force_closed:
            if result[-1]["action"] != "Z":
                result.append({"action": "Z"})

    for action in actions:
        kind = action.get("action")
        if kind == "Z":
            if result and result[-1]["action"] != "Z":
                result.append({"action": "Z"})
            continue
        if "x" not in action or "y" not in action:
            continue
        point = (float(action["x"]), float(action["y"]))
        if first_point:
            initial = point
            first_point = False
            was_move = kind == "M"
        elif kind == "M":
            if points_match(previous, point):
                continue
            close_subpath()
            initial = point
            was_move = True
        else:
            was_move = False
        result.append(dict(action))
        previous = point

    close_subpath()
    return result if result else [dict(action) for action in actions]


class Renderer:
    def __init__(
        self,
        store: SceneStore,
        options: RenderOptions | None = None,
        log: DiagnosticLog | None = None,
    ) -> None:
        self.store = store
        self.options = options or RenderOptions()
        self.log = log or store.log
        self.state = TraversalState(store.page_info(), self.options.max_depth)
        self.styles = StyleResolver(store, self._render_tile)
        self.text = TextStyler(self.styles)
        self.bounds = BoundsEngine(store, self.state)

    # -- entry point -----------------------------------------------------

    def output_drawing(self, painter: Painter) -> bool:
        store = self.store
        if store.block is None:
            self.log.warn("Document has no Block record; nothing to render")
            return False
        block_id, block = store.block
        tail_block_id = store.tail.block_id
        if tail_block_id and tail_block_id != block_id:
            self.log.warn(
                f"FHTail points at block 0x{tail_block_id:x} but the document block is "
                f"0x{block_id:x}; using the document block"
            )

        page = store.page_info()
        self.state.page = page
        painter.start_document({})
        painter.start_page({"svg:width": page.max_x - page.min_x, "svg:height": page.max_y - page.min_y})
        for layer_id in store.find_list_elements(block.layer_list_id) or ():
            self._output_layer(layer_id, painter)
        painter.end_page()
        painter.end_document()
        return True

    def _output_layer(self, layer_id: int, painter: Painter) -> None:
        layer = self.store.find_layer(layer_id)
        if layer is None or layer.visibility != LAYER_VISIBLE:
            return
        elements = self.store.find_list_elements(layer.elements_id)
        if elements is None:
            return
        painter.open_group({})
        for element_id in elements:
            self.render_element(element_id, painter)
        painter.close_group()

    # -- dispatch --------------------------------------------------------

    def render_element(self, element_id: int, painter: Painter) -> None:
        try:
            with self.state.visiting(element_id):
                self._dispatch(element_id, painter)
        except RecursionLimitError as exc:
            self.log.warn(f"Skipping subtree: {exc}")

    def _render_all(self, element_ids: Iterable[int], painter: Painter) -> None:
        for element_id in element_ids:
            self.render_element(element_id, painter)

    def _dispatch(self, element_id: int, painter: Painter) -> None:
        store = self.store
        group = store.find_group(element_id)
        if group is not None:
            self._output_group(group, painter)
        clip_group = store.find_clip_group(element_id)
        if clip_group is not None:
            self._output_clip_group(clip_group, painter)
        path = store.find_path(element_id)
        if path is not None:
            self._output_path(path, painter)
        composite = store.find_composite_path(element_id)
        if composite is not None:
            fused = fuse_composite(store, composite)
            if fused is not None:
                self._output_path(fused, painter)
        path_text = store.find_path_text(element_id)
        if path_text is not None:
            self._output_path_text(path_text, painter)
        text_object = store.find_text_object(element_id)
        if text_object is not None:
            self._output_text_object(text_object, painter)
        display_text = store.find_display_text(element_id)
        if display_text is not None:
            self._output_display_text(display_text, painter)
        image = store.find_image_import(element_id)
        if image is not None:
            self._output_image_import(image, painter)
        blend = store.find_new_blend(element_id)
        if blend is not None:
            self._output_new_blend(blend, painter)
        instance = store.find_symbol_instance(element_id)
        if instance is not None:
            self._output_symbol_instance(instance, painter)

    # -- groups ----------------------------------------------------------

    def _output_group(self, group: Group, painter: Painter) -> None:
        trafo = self.store.find_transform(group.xform_id) or IDENTITY
        with self.state.pushed(trafo):
            elements = self.store.find_list_elements(group.elements_id)
            if elements:
                painter.open_group({})
                self._render_all(elements, painter)
                painter.close_group()

    def _output_clip_group(self, group: Group, painter: Painter) -> None:
        elements = self.store.find_list_elements(group.elements_id)
        if not elements:
            return
        clip_path = self.store.find_path(elements[0])
        if clip_path is None:
            self._output_group(group, painter)
            return

        trafo = self.store.find_transform(group.xform_id) or IDENTITY
        with self.state.pushed(trafo):
            painter.open_group({})
            bbox = self._path_bbox(clip_path)
            if bbox.is_valid() and len(elements) > 1:
                with self.state.faked(Transform.translation(-bbox.xmin, -bbox.ymin)):
                    image = self._render_subdocument(elements[1:], bbox.width, bbox.height)
                if image is not None:
                    self._draw_path(clip_path, _embedded_fill(image), painter)
            boundary: Properties = {}
            self.styles.append_stroke_properties(boundary, clip_path.graphic_style_id)
            boundary["draw:fill"] = "none"
            self._draw_path(clip_path, boundary, painter)
            painter.close_group()

    def _output_new_blend(self, blend: NewBlend, painter: Painter) -> None:
        with self.state.pushed(IDENTITY):
            painter.open_group({})
            for list_id in (blend.list1_id, blend.list2_id, blend.list3_id):
                self._render_all(self.store.find_list_elements(list_id) or (), painter)
            painter.close_group()

    def _output_symbol_instance(self, instance: SymbolInstance, painter: Painter) -> None:
        symbol_class = self.store.find_symbol_class(instance.symbol_class_id)
        if symbol_class is None:
            return
        with self.state.pushed(instance.xform):
            self.render_element(symbol_class.group_id, painter)

    # -- paths -----------------------------------------------------------

    def _path_bbox(self, path: Path) -> BoundingBox:
        clone = path.clone()
        self.state.transform_path(clone, self.store.find_transform(path.xform_id))
        return clone.bounding_box()

    def _draw_path(self, path: Path, props: Properties, painter: Painter) -> None:
        if path.empty():
            return
        clone = path.clone()
        self.state.transform_path(clone, self.store.find_transform(path.xform_id))
        force_closed = path.closed or props.get("draw:fill", "none") != "none"
        actions = compose_path(clone.to_actions(), force_closed)
        if not actions:
            return
        painter.set_style(props)
        painter.draw_path({"svg:d": actions})

    def _output_path(self, path: Path, painter: Painter) -> None:
        if path.empty():
            return
        props: Properties = {}
        self.styles.append_fill_properties(props, path.graphic_style_id)
        self.styles.append_stroke_properties(props, path.graphic_style_id)
        if path.even_odd:
            props["svg:fill-rule"] = "evenodd"
        self._draw_path(path, props, painter)

        content_id = self.styles.find_content_id(path.graphic_style_id)
        if not content_id:
            return
        painter.open_group({})
        bbox = self._path_bbox(path)
        if bbox.is_valid():
            with self.state.faked(Transform.translation(-bbox.xmin, -bbox.ymin)):
                image = self._render_subdocument([content_id], bbox.width, bbox.height)
            if image is not None:
                self._draw_path(path, _embedded_fill(image), painter)
        painter.close_group()

    # -- sub-documents ---------------------------------------------------

    def _render_subdocument(self, element_ids: Sequence[int], width: float, height: float) -> Optional[bytes]:
        """Render ``element_ids`` into a standalone SVG; ``None`` when trivially small."""
        if not self.options.embed_subdocuments:
            return None
        output: List[str] = []
        generator = SVGDrawingGenerator(output, "svg")
        generator.start_document({})
        generator.start_page({"svg:width": width, "svg:height": height})
        self._render_all(element_ids, generator)
        generator.end_page()
        generator.end_document()
        if not output or generator.last_body_length <= self.options.min_subdocument_content:
            return None
        return svg_document(output[0]).encode("utf-8")

    def _render_tile(self, fill: TileFill) -> Optional[Properties]:
        trafo = self.store.find_transform(fill.xform_id) or IDENTITY
        with self.state.isolated(current=[trafo]):
            bbox = BoundingBox()
            self.bounds.bounding_box_of(fill.group_id, bbox)
            if not bbox.is_valid():
                return None
            scale_x = fill.scale_x or 1.0
            scale_y = fill.scale_y or 1.0
            width = bbox.width * scale_x
            height = bbox.height * scale_y
            with self.state.faked(
                Transform.translation(-bbox.xmin, -bbox.ymin), Transform.scaling(scale_x, scale_y)
            ):
                image = self._render_subdocument([fill.group_id], width, height)
        if image is None:
            return None
        return {
            "draw:fill": "bitmap",
            "draw:fill-image": image,
            "librevenge:mime-type": "image/svg+xml",
            "style:repeat": "repeat",
            "draw:fill-image-width": width,
            "draw:fill-image-height": height,
        }

    # -- text and images -------------------------------------------------

    def _quad_properties(
        self, x: float, y: float, width: float, height: float, own: Optional[Transform]
    ) -> Properties:
        xa, ya = self.state.transform_point(x, y, own)
        xb, yb = self.state.transform_point(x + width, y + height, own)
        xc, yc = self.state.transform_point(x, y + height, own)
        rotation = math.atan2(yb - yc, xb - xc)
        quad_height = math.hypot(xc - xa, yc - ya)
        quad_width = math.hypot(xc - xb, yc - yb)
        xmid = (xa + xb) / 2.0
        ymid = (ya + yb) / 2.0
        props: Properties = {
            "svg:x": xmid - quad_width / 2.0,
            "svg:y": ymid + quad_height / 2.0,
            "svg:width": quad_width,
            "svg:height": quad_height,
        }
        if not almost_zero(rotation):
            props["librevenge:rotate"] = rotation * 180.0 / math.pi
            props["librevenge:rotate-cx"] = xmid
            props["librevenge:rotate-cy"] = ymid
        return props

    def _output_text_object(self, text_object: TextObject, painter: Painter) -> None:
        paragraphs = self.store.find_tstring_elements(text_object.tstring_id)
        if not paragraphs:
            return
        painter.start_text_object(
            self._quad_properties(
                text_object.start_x,
                text_object.start_y,
                text_object.width,
                text_object.height,
                self.store.find_transform(text_object.xform_id),
            )
        )
        for paragraph_id in paragraphs:
            paragraph = self.store.find_paragraph(paragraph_id)
            if paragraph is None:
                continue
            characters = self.store.find_text_blok(paragraph.text_blok_id)
            if characters is None:
                continue
            painter.open_paragraph(self.text.paragraph_properties(paragraph.para_style_id))
            runs = split_runs(characters, paragraph.char_style_ids, text_object.begin_pos, text_object.end_pos)
            for start, stop, char_props_id in runs:
                painter.open_span(self.text.span_properties(char_props_id))
                text = strip_control(decode_utf16(characters[start:stop]))
                if text:
                    painter.insert_text(text)
                painter.close_span()
            painter.close_paragraph()
        painter.end_text_object()

    def _output_display_text(self, display_text: DisplayText, painter: Painter) -> None:
        characters = display_text.characters
        painter.start_text_object(
            self._quad_properties(
                display_text.start_x,
                display_text.start_y,
                display_text.width,
                display_text.height,
                self.store.find_transform(display_text.xform_id),
            )
        )
        para_offsets = {props.offset for props in display_text.para_props}
        char_offsets = {props.offset for props in display_text.char_props}
        boundaries = legacy_boundaries(len(characters), sorted(para_offsets), sorted(char_offsets))
        paragraph_open = False
        span_open = False
        for start, stop in zip(boundaries, boundaries[1:]):
            if start in para_offsets or not paragraph_open:
                if span_open:
                    painter.close_span()
                    span_open = False
                if paragraph_open:
                    painter.close_paragraph()
                painter.open_paragraph(self.text.legacy_paragraph_properties(display_text.justify))
                paragraph_open = True
            if start in char_offsets or not span_open:
                if span_open:
                    painter.close_span()
                char_props = find_char_props(display_text.char_props, start)
                painter.open_span(self.text.legacy_span_properties(char_props) if char_props else {})
                span_open = True
            text = strip_control(decode_mac_roman(characters[start:stop]))
            if text:
                painter.insert_text(text)
        if span_open:
            painter.close_span()
        if paragraph_open:
            painter.close_paragraph()
        painter.end_text_object()

    def _output_path_text(self, path_text: PathText, painter: Painter) -> None:
        if path_text.display_text_id:
            self.render_element(path_text.display_text_id, painter)

    def _output_image_import(self, image: ImageImport, painter: Painter) -> None:
        data = self.store.image_data(image.data_list_id)
        if not data:
            return
        mime = sniff_mime_type(data)
        if mime is None:
            self.log.info(f"Skipping image import with unrecognised data ({len(data)} bytes)")
            return
        props = self._quad_properties(
            image.start_x,
            image.start_y,
            image.width,
            image.height,
            self.store.find_transform(image.xform_id),
        )
        props["librevenge:mime-type"] = mime
        props["office:binary-data"] = data
        painter.draw_graphic_object(props)


def _embedded_fill(image: bytes) -> Properties:
    return {
        "draw:fill": "bitmap",
        "draw:fill-image": image,
        "librevenge:mime-type": "image/svg+xml",
        "style:repeat": "stretch",
        "draw:stroke": "none",
    }
