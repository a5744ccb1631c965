from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from .geometry import almost_zero

ArcParams = Tuple[float, float, float, bool, float, float]


@dataclass(frozen=True)
class Transform:
    """2x3 affine matrix.

    Field order follows the on-disk record layout: ``m11, m21, m12, m22``
    form the linear part column by column and ``m13, m23`` the translation.
    """

    m11: float = 1.0
    m21: float = 0.0
    m12: float = 0.0
    m22: float = 1.0
    m13: float = 0.0
    m23: float = 0.0

    @classmethod
    def identity(cls) -> "Transform":
        return cls()

    @classmethod
    def translation(cls, dx: float, dy: float) -> "Transform":
        return cls(1.0, 0.0, 0.0, 1.0, dx, dy)

    @classmethod
    def scaling(cls, sx: float, sy: float) -> "Transform":
        return cls(sx, 0.0, 0.0, sy, 0.0, 0.0)

    def determinant(self) -> float:
        return self.m11 * self.m22 - self.m12 * self.m21

    def inverse(self) -> "Transform":
        det = self.determinant()
        if det == 0.0:
            raise ValueError("singular transform has no inverse")
        i11 = self.m22 / det
        i12 = -self.m12 / det
        i21 = -self.m21 / det
        i22 = self.m11 / det
        i13 = -(i11 * self.m13 + i12 * self.m23)
        i23 = -(i21 * self.m13 + i22 * self.m23)
        return Transform(i11, i21, i12, i22, i13, i23)

    def apply_to_point(self, x: float, y: float) -> Tuple[float, float]:
        return (
            self.m11 * x + self.m12 * y + self.m13,
            self.m21 * x + self.m22 * y + self.m23,
        )

    def apply_to_arc(
        self,
        rx: float,
        ry: float,
        rotation: float,
        sweep: bool,
        x: float,
        y: float,
    ) -> ArcParams:
        """Re-parameterise an SVG elliptical arc under this transform.

        ``rotation`` is in radians. Returns ``(rx, ry, rotation, sweep, x, y)``.
        Degenerate ellipses collapse to a point (all zero) or to a line
        (``ry == 0``); the result never contains NaN.
        """

        x, y = self.apply_to_point(x, y)

        det = self.determinant()
        if det < 0.0:
            sweep = not sweep

        if almost_zero(rx) and almost_zero(ry):
            return 0.0, 0.0, 0.0, sweep, x, y

        cos_r = math.cos(rotation)
        sin_r = math.sin(rotation)

        if almost_zero(ry):
            vx = self.m11 * cos_r + self.m12 * sin_r
            vy = self.m21 * cos_r + self.m22 * sin_r
            rx *= math.sqrt(vx * vx + vy * vy)
            if almost_zero(rx):
                return 0.0, 0.0, 0.0, sweep, x, y
            return rx, ry, math.atan2(vy, vx), sweep, x, y

        if almost_zero(rx):
            vx = -self.m11 * sin_r + self.m12 * cos_r
            vy = -self.m21 * sin_r + self.m22 * cos_r
            ry *= math.sqrt(vx * vx + vy * vy)
            if almost_zero(ry):
                return 0.0, 0.0, 0.0, sweep, x, y
            return rx, ry, math.atan2(vy, vx) - math.pi / 2.0, sweep, x, y

        if not almost_zero(det):
            n11 = ry * (self.m22 * cos_r - self.m21 * sin_r)
            n12 = ry * (self.m11 * sin_r - self.m12 * cos_r)
            v2 = -rx * (self.m22 * sin_r + self.m21 * cos_r)
            n21 = rx * (self.m12 * sin_r + self.m11 * cos_r)

            a = n11 * n11 + v2 * v2
            b = 2.0 * (n11 * n12 + v2 * n21)
            c = n12 * n12 + n21 * n21

            if almost_zero(b):
                new_rotation = 0.0
            else:
                new_rotation = math.atan2(b, a - c) / 2.0
                cs = math.cos(new_rotation)
                sn = math.sin(new_rotation)
                sc = b * sn * cs
                a, c = a * cs * cs + sc + c * sn * sn, a * sn * sn - sc + c * cs * cs

            if not almost_zero(a) and not almost_zero(c):
                abdet = abs(rx * ry * det)
                return (
                    abdet / math.sqrt(abs(a)),
                    abdet / math.sqrt(abs(c)),
                    new_rotation,
                    sweep,
                    x,
                    y,
                )

        # close to singular: the ellipse flattens onto its major axis
        n11 = ry * (self.m22 * cos_r - self.m21 * sin_r)
        n12 = ry * (self.m12 * cos_r - self.m11 * sin_r)
        v2 = rx * (self.m21 * cos_r + self.m22 * sin_r)
        n21 = rx * (self.m11 * cos_r + self.m12 * sin_r)

        major = n21 * n21 + n12 * n12
        minor = v2 * v2 + n11 * n11
        if almost_zero(major) and almost_zero(minor):
            return 0.0, 0.0, 0.0, sweep, x, y

        lx = math.sqrt(major)
        ly = math.sqrt(minor)
        if major >= minor:
            ly = minor / lx
        else:
            lx = major / ly
        return math.sqrt(lx * lx + ly * ly), 0.0, math.atan2(ly, lx), sweep, x, y


IDENTITY = Transform()


def page_normalization(min_x: float, max_y: float) -> Transform:
    """Flip the document's upward Y axis into top-down page coordinates."""
    return Transform(1.0, 0.0, 0.0, -1.0, -min_x, max_y)
