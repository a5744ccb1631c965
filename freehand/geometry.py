from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .constants import CUBIC_BBOX_SAMPLES, FH_EPSILON

Box = Tuple[float, float, float, float]


def almost_zero(value: float, tol: float = FH_EPSILON) -> bool:
    return abs(value) <= tol


def fuzzy_eq(a: float, b: float, tol: float = FH_EPSILON) -> bool:
    return abs(a - b) <= tol


def points_match(p1: Tuple[float, float], p2: Tuple[float, float], tol: float = FH_EPSILON) -> bool:
    return fuzzy_eq(p1[0], p2[0], tol) and fuzzy_eq(p1[1], p2[1], tol)


@dataclass
class BoundingBox:
    """Axis-aligned box that starts out inverted (empty) and grows by merging."""

    xmin: float = math.inf
    ymin: float = math.inf
    xmax: float = -math.inf
    ymax: float = -math.inf

    @classmethod
    def from_box(cls, box: Box) -> "BoundingBox":
        return cls(*box)

    def is_empty(self) -> bool:
        return not all(math.isfinite(value) for value in self.as_tuple())

    def merge(self, other: "BoundingBox") -> None:
        if other.is_empty():
            return
        # the other box may itself be inverted, so both of its extremes count
        self.xmin = min(self.xmin, other.xmin, other.xmax)
        self.ymin = min(self.ymin, other.ymin, other.ymax)
        self.xmax = max(self.xmax, other.xmax, other.xmin)
        self.ymax = max(self.ymax, other.ymax, other.ymin)

    def merge_point(self, x: float, y: float) -> None:
        self.xmin = min(self.xmin, x)
        self.ymin = min(self.ymin, y)
        self.xmax = max(self.xmax, x)
        self.ymax = max(self.ymax, y)

    def is_valid(self) -> bool:
        return self.xmin < self.xmax and self.ymin < self.ymax

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin

    def as_tuple(self) -> Box:
        return (self.xmin, self.ymin, self.xmax, self.ymax)


def segment_bbox(x0: float, y0: float, x: float, y: float) -> Box:
    return (min(x0, x), min(y0, y), max(x0, x), max(y0, y))


def _quadratic_point(t: float, a: float, b: float, c: float) -> float:
    return (1.0 - t) * (1.0 - t) * a + 2.0 * (1.0 - t) * t * b + t * t * c


def _quadratic_extremum(a: float, b: float, c: float) -> float:
    denominator = a - 2.0 * b + c
    if denominator != 0.0:
        return (a - b) / denominator
    return -1.0


def quadratic_bbox(x0: float, y0: float, x1: float, y1: float, x: float, y: float) -> Box:
    xmin, ymin, xmax, ymax = segment_bbox(x0, y0, x, y)

    t = _quadratic_extremum(x0, x1, x)
    if 0.0 <= t <= 1.0:
        value = _quadratic_point(t, x0, x1, x)
        xmin = min(xmin, value)
        xmax = max(xmax, value)

    t = _quadratic_extremum(y0, y1, y)
    if 0.0 <= t <= 1.0:
        value = _quadratic_point(t, y0, y1, y)
        ymin = min(ymin, value)
        ymax = max(ymax, value)

    return (xmin, ymin, xmax, ymax)


def cubic_samples(
    x0: float, y0: float, x1: float, y1: float, x2: float, y2: float, x: float, y: float
) -> Tuple[np.ndarray, np.ndarray]:
    t = np.linspace(0.0, 1.0, CUBIC_BBOX_SAMPLES)
    mt = 1.0 - t
    b0 = mt * mt * mt
    b1 = 3.0 * mt * mt * t
    b2 = 3.0 * mt * t * t
    b3 = t * t * t
    xs = b0 * x0 + b1 * x1 + b2 * x2 + b3 * x
    ys = b0 * y0 + b1 * y1 + b2 * y2 + b3 * y
    return xs, ys


def cubic_bbox(
    x0: float, y0: float, x1: float, y1: float, x2: float, y2: float, x: float, y: float
) -> Box:
    """Box of a cubic Bezier from a fixed uniform sampling of ``t``.

    The endpoints are always included so the box never shrinks below the
    chord, whatever the sampling does.
    """

    xs, ys = cubic_samples(x0, y0, x1, y1, x2, y2, x, y)
    xmin, ymin, xmax, ymax = segment_bbox(x0, y0, x, y)
    return (
        min(xmin, float(xs.min())),
        min(ymin, float(ys.min())),
        max(xmax, float(xs.max())),
        max(ymax, float(ys.max())),
    )


def _angle_of(bx: float, by: float) -> float:
    sign = 1.0 if by > 0.0 else -1.0
    return math.fmod(2.0 * math.pi + sign * math.acos(bx / math.sqrt(bx * bx + by * by)), 2.0 * math.pi)


def arc_bbox(
    x0: float,
    y0: float,
    rx: float,
    ry: float,
    phi: float,
    large_arc: bool,
    sweep: bool,
    x: float,
    y: float,
) -> Box:
    """Box of an SVG elliptical arc from ``(x0, y0)`` to ``(x, y)``.

    ``phi`` is the x-axis rotation in radians. The arc is converted to centre
    form (SVG implementation notes F.6.5), the x and y extremal angles of the
    full ellipse are found, and each extremum is kept only when its angle lies
    on the traversed part of the ellipse.
    """

    rx = abs(rx)
    ry = abs(ry)
    chord = segment_bbox(x0, y0, x, y)
    if almost_zero(rx) or almost_zero(ry):
        return chord

    cos_phi = math.cos(phi)
    sin_phi = math.sin(phi)

    x1p = cos_phi * (x0 - x) / 2.0 + sin_phi * (y0 - y) / 2.0
    y1p = -sin_phi * (x0 - x) / 2.0 + cos_phi * (y0 - y) / 2.0

    denominator = rx * rx * y1p * y1p + ry * ry * x1p * x1p
    if almost_zero(denominator):
        return chord
    radicant = (rx * rx * ry * ry - rx * rx * y1p * y1p - ry * ry * x1p * x1p) / denominator

    cxp = 0.0
    cyp = 0.0
    if radicant < 0.0:
        # radii too small for the chord: scale up, centre sits on the chord midpoint
        ratio = rx / ry
        radicant = y1p * y1p + x1p * x1p / (ratio * ratio)
        if radicant < 0.0:
            return chord
        ry = math.sqrt(radicant)
        rx = ratio * ry
    else:
        factor = (-1.0 if large_arc == sweep else 1.0) * math.sqrt(radicant)
        cxp = factor * rx * y1p / ry
        cyp = -factor * ry * x1p / rx

    cx = cxp * cos_phi - cyp * sin_phi + (x0 + x) / 2.0
    cy = cxp * sin_phi + cyp * cos_phi + (y0 + y) / 2.0

    if almost_zero(phi) or almost_zero(phi - math.pi):
        xmin = cx - rx
        txmin = _angle_of(-rx, 0.0)
        xmax = cx + rx
        txmax = _angle_of(rx, 0.0)
        ymin = cy + ry
        tymin = _angle_of(0.0, ry)
        ymax = cy - ry
        tymax = _angle_of(0.0, -ry)
    elif almost_zero(phi - math.pi / 2.0) or almost_zero(phi - 3.0 * math.pi / 2.0):
        xmin = cx - ry
        txmin = _angle_of(-ry, 0.0)
        xmax = cx + ry
        txmax = _angle_of(ry, 0.0)
        ymin = cy + rx
        tymin = _angle_of(0.0, rx)
        ymax = cy - rx
        tymax = _angle_of(0.0, -rx)
    else:
        tan_phi = math.tan(phi)
        txmin = -math.atan(ry * tan_phi / rx)
        txmax = math.pi - math.atan(ry * tan_phi / rx)
        xmin = cx + rx * math.cos(txmin) * cos_phi - ry * math.sin(txmin) * sin_phi
        xmax = cx + rx * math.cos(txmax) * cos_phi - ry * math.sin(txmax) * sin_phi
        tmp_y = cy + rx * math.cos(txmin) * sin_phi + ry * math.sin(txmin) * cos_phi
        txmin = _angle_of(xmin - cx, tmp_y - cy)
        tmp_y = cy + rx * math.cos(txmax) * sin_phi + ry * math.sin(txmax) * cos_phi
        txmax = _angle_of(xmax - cx, tmp_y - cy)

        tymin = math.atan(ry / (tan_phi * rx))
        tymax = math.atan(ry / (tan_phi * rx)) + math.pi
        ymin = cy + rx * math.cos(tymin) * sin_phi + ry * math.sin(tymin) * cos_phi
        ymax = cy + rx * math.cos(tymax) * sin_phi + ry * math.sin(tymax) * cos_phi
        tmp_x = cx + rx * math.cos(tymin) * cos_phi - ry * math.sin(tymin) * sin_phi
        tymin = _angle_of(tmp_x - cx, ymin - cy)
        tmp_x = cx + rx * math.cos(tymax) * cos_phi - ry * math.sin(tymax) * sin_phi
        tymax = _angle_of(tmp_x - cx, ymax - cy)

    if xmin > xmax:
        xmin, xmax = xmax, xmin
        txmin, txmax = txmax, txmin
    if ymin > ymax:
        ymin, ymax = ymax, ymin
        tymin, tymax = tymax, tymin

    angle1 = _angle_of(x0 - cx, y0 - cy)
    angle2 = _angle_of(x - cx, y - cy)
    if not sweep:
        angle1, angle2 = angle2, angle1

    # when the span wraps through zero, test the complement interval instead
    other_arc = False
    if angle1 > angle2:
        angle1, angle2 = angle2, angle1
        other_arc = True

    def _off_arc(angle: float) -> bool:
        outside = angle1 > angle or angle2 < angle
        return outside if not other_arc else not outside

    if _off_arc(txmin):
        xmin = chord[0]
    if _off_arc(txmax):
        xmax = chord[2]
    if _off_arc(tymin):
        ymin = chord[1]
    if _off_arc(tymax):
        ymax = chord[3]

    return (xmin, ymin, xmax, ymax)
