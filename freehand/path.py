from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

from .geometry import Box, BoundingBox, arc_bbox, cubic_bbox, quadratic_bbox, segment_bbox
from .transform import Transform

PathAction = Dict[str, object]


@dataclass
class MoveTo:
    x: float
    y: float

    def endpoint(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def transform(self, trafo: Transform) -> None:
        self.x, self.y = trafo.apply_to_point(self.x, self.y)

    def bounding_box(self, x0: float, y0: float) -> Box:
        return segment_bbox(x0, y0, self.x, self.y)

    def to_action(self) -> PathAction:
        return {"action": "M", "x": self.x, "y": self.y}

    def clone(self) -> "MoveTo":
        return MoveTo(self.x, self.y)


@dataclass
class LineTo:
    x: float
    y: float

    def endpoint(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def transform(self, trafo: Transform) -> None:
        self.x, self.y = trafo.apply_to_point(self.x, self.y)

    def bounding_box(self, x0: float, y0: float) -> Box:
        return segment_bbox(x0, y0, self.x, self.y)

    def to_action(self) -> PathAction:
        return {"action": "L", "x": self.x, "y": self.y}

    def clone(self) -> "LineTo":
        return LineTo(self.x, self.y)


@dataclass
class CubicBezierTo:
    x1: float
    y1: float
    x2: float
    y2: float
    x: float
    y: float

    def endpoint(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def transform(self, trafo: Transform) -> None:
        self.x1, self.y1 = trafo.apply_to_point(self.x1, self.y1)
        self.x2, self.y2 = trafo.apply_to_point(self.x2, self.y2)
        self.x, self.y = trafo.apply_to_point(self.x, self.y)

    def bounding_box(self, x0: float, y0: float) -> Box:
        return cubic_bbox(x0, y0, self.x1, self.y1, self.x2, self.y2, self.x, self.y)

    def to_action(self) -> PathAction:
        return {
            "action": "C",
            "x1": self.x1,
            "y1": self.y1,
            "x2": self.x2,
            "y2": self.y2,
            "x": self.x,
            "y": self.y,
        }

    def clone(self) -> "CubicBezierTo":
        return CubicBezierTo(self.x1, self.y1, self.x2, self.y2, self.x, self.y)


@dataclass
class QuadraticBezierTo:
    x1: float
    y1: float
    x: float
    y: float

    def endpoint(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def transform(self, trafo: Transform) -> None:
        self.x1, self.y1 = trafo.apply_to_point(self.x1, self.y1)
        self.x, self.y = trafo.apply_to_point(self.x, self.y)

    def bounding_box(self, x0: float, y0: float) -> Box:
        return quadratic_bbox(x0, y0, self.x1, self.y1, self.x, self.y)

    def to_action(self) -> PathAction:
        return {"action": "Q", "x1": self.x1, "y1": self.y1, "x": self.x, "y": self.y}

    def clone(self) -> "QuadraticBezierTo":
        return QuadraticBezierTo(self.x1, self.y1, self.x, self.y)


@dataclass
class ArcTo:
    rx: float
    ry: float
    rotation: float
    large_arc: bool
    sweep: bool
    x: float
    y: float

    def endpoint(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def transform(self, trafo: Transform) -> None:
        self.rx, self.ry, self.rotation, self.sweep, self.x, self.y = trafo.apply_to_arc(
            self.rx, self.ry, self.rotation, self.sweep, self.x, self.y
        )

    def bounding_box(self, x0: float, y0: float) -> Box:
        return arc_bbox(x0, y0, self.rx, self.ry, self.rotation, self.large_arc, self.sweep, self.x, self.y)

    def to_action(self) -> PathAction:
        return {
            "action": "A",
            "rx": self.rx,
            "ry": self.ry,
            "rotate": self.rotation * 180.0 / math.pi,
            "large-arc": self.large_arc,
            "sweep": self.sweep,
            "x": self.x,
            "y": self.y,
        }

    def clone(self) -> "ArcTo":
        return ArcTo(self.rx, self.ry, self.rotation, self.large_arc, self.sweep, self.x, self.y)


PathElement = Union[MoveTo, LineTo, CubicBezierTo, QuadraticBezierTo, ArcTo]


@dataclass
class Path:
    elements: List[PathElement] = field(default_factory=list)
    closed: bool = False
    even_odd: bool = False
    xform_id: int = 0
    graphic_style_id: int = 0

    def append_move_to(self, x: float, y: float) -> None:
        self.elements.append(MoveTo(x, y))

    def append_line_to(self, x: float, y: float) -> None:
        self.elements.append(LineTo(x, y))

    def append_cubic_bezier_to(self, x1: float, y1: float, x2: float, y2: float, x: float, y: float) -> None:
        self.elements.append(CubicBezierTo(x1, y1, x2, y2, x, y))

    def append_quadratic_bezier_to(self, x1: float, y1: float, x: float, y: float) -> None:
        self.elements.append(QuadraticBezierTo(x1, y1, x, y))

    def append_arc_to(
        self, rx: float, ry: float, rotation: float, large_arc: bool, sweep: bool, x: float, y: float
    ) -> None:
        self.elements.append(ArcTo(rx, ry, rotation, large_arc, sweep, x, y))

    def append_close_path(self) -> None:
        self.closed = True

    def append_path(self, other: "Path") -> None:
        self.elements.extend(element.clone() for element in other.elements)

    def clone(self) -> "Path":
        duplicate = copy.copy(self)
        duplicate.elements = [element.clone() for element in self.elements]
        return duplicate

    def empty(self) -> bool:
        return not self.elements

    def start_point(self) -> Tuple[float, float]:
        return self.elements[0].endpoint() if self.elements else (0.0, 0.0)

    def transform(self, trafo: Transform) -> None:
        for element in self.elements:
            element.transform(trafo)

    def bounding_box(self) -> BoundingBox:
        bbox = BoundingBox()
        if not self.elements:
            return bbox
        last_x, last_y = self.start_point()
        for element in self.elements:
            bbox.merge(BoundingBox.from_box(element.bounding_box(last_x, last_y)))
            last_x, last_y = element.endpoint()
        return bbox

    def to_actions(self) -> List[PathAction]:
        actions = [element.to_action() for element in self.elements]
        if self.closed and actions:
            actions.append({"action": "Z"})
        return actions

    def path_string(self, scale: float = 1.0) -> str:
        """SVG ``d`` text for this path, coordinates multiplied by ``scale``."""
        return actions_to_svg_path(self.to_actions(), scale)


def _num(value: float) -> str:
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def actions_to_svg_path(actions: List[PathAction], scale: float = 1.0) -> str:
    parts: List[str] = []
    for action in actions:
        kind = action["action"]
        if kind in ("M", "L"):
            parts.append(f"{kind}{_num(action['x'] * scale)} {_num(action['y'] * scale)}")
        elif kind == "C":
            parts.append(
                "C"
                + " ".join(
                    _num(action[key] * scale) for key in ("x1", "y1", "x2", "y2", "x", "y")
                )
            )
        elif kind == "Q":
            parts.append("Q" + " ".join(_num(action[key] * scale) for key in ("x1", "y1", "x", "y")))
        elif kind == "A":
            parts.append(
                f"A{_num(action['rx'] * scale)} {_num(action['ry'] * scale)} {_num(action['rotate'])} "
                f"{int(bool(action['large-arc']))} {int(bool(action['sweep']))} "
                f"{_num(action['x'] * scale)} {_num(action['y'] * scale)}"
            )
        elif kind == "Z":
            parts.append("Z")
    return " ".join(parts)
