from __future__ import annotations

from typing import Optional

from .entities import CompositePath
from .errors import RecursionLimitError
from .geometry import BoundingBox
from .path import Path
from .store import SceneStore
from .transform import IDENTITY, Transform
from .traversal import TraversalState


def fuse_composite(store: SceneStore, composite: CompositePath) -> Optional[Path]:
    """Merge the member paths of a composite into one path.

    Each member's own transform is baked in before appending. The style is
    the composite's, falling back to the first member that has one; the
    fill rule comes from the first member.
    """

    members = store.find_list_elements(composite.elements_id)
    if not members:
        return None
    fused = Path(graphic_style_id=composite.graphic_style_id)
    first = True
    for member_id in members:
        member = store.find_path(member_id)
        if member is None:
            continue
        piece = member.clone()
        trafo = store.find_transform(piece.xform_id)
        if trafo is not None:
            piece.transform(trafo)
        fused.append_path(piece)
        fused.closed = fused.closed or member.closed
        if first:
            fused.even_odd = member.even_odd
            first = False
        if not fused.graphic_style_id:
            fused.graphic_style_id = member.graphic_style_id
    if fused.empty():
        return None
    return fused


def corner_box(
    state: TraversalState,
    x: float,
    y: float,
    width: float,
    height: float,
    own: Optional[Transform] = None,
) -> BoundingBox:
    bbox = BoundingBox()
    for cx, cy in ((x, y), (x + width, y), (x + width, y + height), (x, y + height)):
        bbox.merge_point(*state.transform_point(cx, cy, own))
    return bbox


class BoundsEngine:
    """Bounding boxes of scene elements under the current traversal state."""

    def __init__(self, store: SceneStore, state: TraversalState) -> None:
        self.store = store
        self.state = state

    def bounding_box_of(self, element_id: int, bbox: BoundingBox) -> None:
        try:
            with self.state.visiting(element_id):
                self._measure(element_id, bbox)
        except RecursionLimitError as exc:
            self.store.log.warn(f"Bounding box: {exc}")

    def _measure(self, element_id: int, bbox: BoundingBox) -> None:
        store = self.store
        group = store.find_group(element_id)
        if group is not None:
            self._group_box(group.elements_id, group.xform_id, bbox)
        clip_group = store.find_clip_group(element_id)
        if clip_group is not None:
            self._group_box(clip_group.elements_id, clip_group.xform_id, bbox)
        path = store.find_path(element_id)
        if path is not None:
            self._path_box(path, bbox)
        composite = store.find_composite_path(element_id)
        if composite is not None:
            fused = fuse_composite(store, composite)
            if fused is not None:
                self._path_box(fused, bbox)
        path_text = store.find_path_text(element_id)
        if path_text is not None and path_text.display_text_id:
            self.bounding_box_of(path_text.display_text_id, bbox)
        text_object = store.find_text_object(element_id)
        if text_object is not None:
            bbox.merge(
                corner_box(
                    self.state,
                    text_object.start_x,
                    text_object.start_y,
                    text_object.width,
                    text_object.height,
                    store.find_transform(text_object.xform_id),
                )
            )
        display_text = store.find_display_text(element_id)
        if display_text is not None:
            bbox.merge(
                corner_box(
                    self.state,
                    display_text.start_x,
                    display_text.start_y,
                    display_text.width,
                    display_text.height,
                    store.find_transform(display_text.xform_id),
                )
            )
        image = store.find_image_import(element_id)
        if image is not None:
            bbox.merge(
                corner_box(
                    self.state,
                    image.start_x,
                    image.start_y,
                    image.width,
                    image.height,
                    store.find_transform(image.xform_id),
                )
            )
        # NewBlend has no computed extent
        instance = store.find_symbol_instance(element_id)
        if instance is not None:
            symbol_class = store.find_symbol_class(instance.symbol_class_id)
            if symbol_class is not None:
                with self.state.pushed(instance.xform):
                    self.bounding_box_of(symbol_class.group_id, bbox)

    def _group_box(self, elements_id: int, xform_id: int, bbox: BoundingBox) -> None:
        elements = self.store.find_list_elements(elements_id)
        if not elements:
            return
        trafo = self.store.find_transform(xform_id) or IDENTITY
        with self.state.pushed(trafo):
            for child_id in elements:
                self.bounding_box_of(child_id, bbox)

    def _path_box(self, path: Path, bbox: BoundingBox) -> None:
        if path.empty():
            return
        clone = path.clone()
        self.state.transform_path(clone, self.store.find_transform(path.xform_id))
        bbox.merge(clone.bounding_box())
