from __future__ import annotations

import math
import unittest

from freehand.geometry import BoundingBox, arc_bbox, cubic_bbox, quadratic_bbox
from freehand.path import ArcTo, Path
from freehand.render import compose_path
from freehand.transform import Transform, page_normalization


class TransformTests(unittest.TestCase):
    def test_inverse_round_trips_points(self) -> None:
        trafo = Transform(2.0, 0.5, -1.0, 3.0, 4.0, -2.0)
        inverse = trafo.inverse()
        for x, y in ((0.0, 0.0), (1.5, -2.25), (-7.0, 3.0)):
            tx, ty = trafo.apply_to_point(x, y)
            bx, by = inverse.apply_to_point(tx, ty)
            self.assertAlmostEqual(bx, x, places=9)
            self.assertAlmostEqual(by, y, places=9)

    def test_singular_transform_has_no_inverse(self) -> None:
        with self.assertRaises(ValueError):
            Transform(1.0, 2.0, 2.0, 4.0).inverse()

    def test_page_normalization_flips_y(self) -> None:
        trafo = page_normalization(1.0, 10.0)
        self.assertEqual(trafo.apply_to_point(1.0, 10.0), (0.0, 0.0))
        self.assertEqual(trafo.apply_to_point(3.0, 4.0), (2.0, 6.0))


class ArcTransformTests(unittest.TestCase):
    def test_identity_keeps_arc(self) -> None:
        rx, ry, rotation, sweep, x, y = Transform().apply_to_arc(1.0, 2.0, 0.0, True, 3.0, 4.0)
        self.assertAlmostEqual(rx, 1.0)
        self.assertAlmostEqual(ry, 2.0)
        self.assertAlmostEqual(rotation, 0.0)
        self.assertTrue(sweep)
        self.assertEqual((x, y), (3.0, 4.0))

    def test_endpoint_follows_point_transform(self) -> None:
        trafo = Transform(0.0, 1.0, -1.0, 0.0, 5.0, 1.0)
        result = trafo.apply_to_arc(2.0, 1.0, 0.3, False, 1.0, 2.0)
        self.assertEqual(result[4:], trafo.apply_to_point(1.0, 2.0))

    def test_uniform_scale_scales_radii(self) -> None:
        rx, ry, _, _, _, _ = Transform.scaling(2.0, 2.0).apply_to_arc(1.0, 1.0, 0.0, True, 1.0, 0.0)
        self.assertAlmostEqual(rx, 2.0)
        self.assertAlmostEqual(ry, 2.0)

    def test_mirror_flips_sweep(self) -> None:
        _, _, _, sweep, _, y = Transform.scaling(1.0, -1.0).apply_to_arc(1.0, 1.0, 0.0, True, 1.0, 1.0)
        self.assertFalse(sweep)
        self.assertEqual(y, -1.0)

    def test_degenerate_radii_collapse_without_nan(self) -> None:
        result = Transform(2.0, 0.0, 0.0, 3.0).apply_to_arc(0.0, 0.0, 0.0, True, 1.0, 1.0)
        self.assertEqual(result[:3], (0.0, 0.0, 0.0))
        line = Transform(2.0, 0.0, 0.0, 3.0).apply_to_arc(1.0, 0.0, 0.0, True, 1.0, 1.0)
        self.assertAlmostEqual(line[0], 2.0)
        self.assertEqual(line[1], 0.0)

    def test_singular_transform_flattens_arc(self) -> None:
        result = Transform(1.0, 0.0, 0.0, 0.0).apply_to_arc(1.0, 1.0, 0.0, True, 1.0, 1.0)
        self.assertFalse(any(math.isnan(value) for value in result[:3]))
        self.assertEqual(result[1], 0.0)


class BoundingBoxTests(unittest.TestCase):
    def test_empty_box_is_invalid_and_ignored_on_merge(self) -> None:
        box = BoundingBox()
        self.assertTrue(box.is_empty())
        self.assertFalse(box.is_valid())
        box.merge_point(1.0, 2.0)
        box.merge(BoundingBox())
        self.assertEqual(box.as_tuple(), (1.0, 2.0, 1.0, 2.0))
        self.assertFalse(box.is_valid())
        box.merge(BoundingBox(3.0, 5.0, -1.0, 0.0))
        self.assertEqual(box.as_tuple(), (-1.0, 0.0, 3.0, 5.0))
        self.assertTrue(box.is_valid())
        self.assertEqual((box.width, box.height), (4.0, 5.0))

    def test_cubic_box_matches_sampled_polyline(self) -> None:
        xmin, ymin, xmax, ymax = cubic_bbox(0.0, 0.0, 0.0, 10.0, 10.0, 10.0, 10.0, 0.0)
        xs, ys = [], []
        for step in range(101):
            t = step / 100.0
            mt = 1.0 - t
            xs.append(3 * mt * t * t * 10.0 + t ** 3 * 10.0)
            ys.append(3 * mt * mt * t * 10.0 + 3 * mt * t * t * 10.0)
        self.assertAlmostEqual(xmin, min(xs))
        self.assertAlmostEqual(xmax, max(xs))
        self.assertAlmostEqual(ymin, min(ys))
        self.assertAlmostEqual(ymax, max(ys))
        self.assertEqual(ymax, 7.5)

    def test_quadratic_hump_extremum(self) -> None:
        xmin, ymin, xmax, ymax = quadratic_bbox(0.0, 0.0, 10.0, 0.0, 0.0, 0.0)
        self.assertEqual(xmax, 5.0)
        self.assertEqual((xmin, ymin, ymax), (0.0, 0.0, 0.0))

    def test_quadratic_without_interior_extremum_uses_endpoints(self) -> None:
        self.assertEqual(quadratic_bbox(0.0, 0.0, 1.0, 1.0, 2.0, 2.0), (0.0, 0.0, 2.0, 2.0))

    def test_half_circle_keeps_only_traversed_extrema(self) -> None:
        xmin, ymin, xmax, ymax = arc_bbox(1.0, 0.0, 1.0, 1.0, 0.0, False, True, -1.0, 0.0)
        self.assertAlmostEqual(xmin, -1.0)
        self.assertAlmostEqual(xmax, 1.0)
        self.assertAlmostEqual(ymin, 0.0)
        self.assertAlmostEqual(ymax, 1.0)

    def test_arc_box_stays_inside_full_ellipse(self) -> None:
        for phi in (0.0, 0.4, math.pi / 2.0, 2.0):
            for large, sweep in ((False, False), (False, True), (True, False), (True, True)):
                box = arc_bbox(0.0, 0.0, 2.0, 1.0, phi, large, sweep, 1.0, 1.0)
                self.assertLessEqual(box[0], 0.0 + 1e-9)
                self.assertGreaterEqual(box[2], 1.0 - 1e-9)
                self.assertLessEqual(box[2] - box[0], 6.0)
                self.assertLessEqual(box[3] - box[1], 6.0)

    def test_path_box_merges_elements(self) -> None:
        path = Path()
        path.append_move_to(0.0, 0.0)
        path.append_quadratic_bezier_to(10.0, 0.0, 0.0, 0.0)
        path.append_line_to(-2.0, 3.0)
        self.assertEqual(path.bounding_box().as_tuple(), (-2.0, 0.0, 5.0, 3.0))

    def test_arc_element_reports_degrees(self) -> None:
        action = ArcTo(1.0, 1.0, math.pi / 2.0, False, True, 1.0, 1.0).to_action()
        self.assertAlmostEqual(action["rotate"], 90.0)


class ComposePathTests(unittest.TestCase):
    def test_returning_subpath_gets_single_close(self) -> None:
        actions = [
            {"action": "M", "x": 0.0, "y": 0.0},
            {"action": "L", "x": 10.0, "y": 0.0},
            {"action": "L", "x": 10.0, "y": 10.0},
            {"action": "L", "x": 0.0, "y": 0.0},
        ]
        result = compose_path(actions, False)
        self.assertEqual([item["action"] for item in result], ["M", "L", "L", "L", "Z"])

    def test_existing_close_is_not_doubled(self) -> None:
        actions = [
            {"action": "M", "x": 0.0, "y": 0.0},
            {"action": "L", "x": 1.0, "y": 0.0},
            {"action": "Z"},
        ]
        result = compose_path(actions, True)
        self.assertEqual([item["action"] for item in result], ["M", "L", "Z"])

    def test_open_subpath_stays_open(self) -> None:
        actions = [
            {"action": "M", "x": 0.0, "y": 0.0},
            {"action": "L", "x": 1.0, "y": 0.0},
        ]
        self.assertEqual([item["action"] for item in compose_path(actions, False)], ["M", "L"])

    def test_lone_moves_are_dropped(self) -> None:
        actions = [
            {"action": "M", "x": 5.0, "y": 5.0},
            {"action": "M", "x": 0.0, "y": 0.0},
            {"action": "L", "x": 1.0, "y": 1.0},
        ]
        result = compose_path(actions, True)
        self.assertEqual([item["action"] for item in result], ["M", "L", "Z"])
        self.assertEqual(result[0]["x"], 0.0)


if __name__ == "__main__":
    unittest.main()
