from __future__ import annotations

import io
import unittest

from PIL import Image
from synthetic import square_path

from freehand.constants import (
    FH_LENSFILL_MODE_LIGHTEN,
    FH_LENSFILL_MODE_MONOCHROME,
    FH_LENSFILL_MODE_TRANSPARENCY,
)
from freehand.entities import (
    AttributeHolder,
    BasicFill,
    BasicLine,
    ColorStop,
    CustomProc,
    ElementList,
    FilterAttributeHolder,
    GraphicStyle,
    LensFill,
    LinearFill,
    LinePattern,
    PatternFill,
    PropList,
    RadialFill,
    RGBColor,
    ShadowFilter,
    TintColor,
)
from freehand.logging import DiagnosticLog
from freehand.store import SceneStore
from freehand.styles import StyleResolver, rgb_to_hex, tint_to_rgb
from freehand.svg import SVGDrawingGenerator

FILL = 1
STROKE = 2
RED = 10
BLUE = 11
GREEN = 12


def _store() -> SceneStore:
    store = SceneStore(DiagnosticLog(echo=False))
    store.collect_name(FILL, "fill")
    store.collect_name(STROKE, "stroke")
    store.collect_color(RED, RGBColor(0xFFFF, 0, 0))
    store.collect_color(BLUE, RGBColor(0, 0, 0xFFFF))
    store.collect_color(GREEN, RGBColor(0, 0xFFFF, 0))
    return store


class ColorTests(unittest.TestCase):
    def test_half_tint_of_red(self) -> None:
        color = tint_to_rgb(RGBColor(0xFFFF, 0, 0), 0x8000)
        self.assertEqual(rgb_to_hex(color), "#ff8080")

    def test_tint_color_resolves_through_base(self) -> None:
        store = _store()
        store.collect_tint_color(20, TintColor(RED, 0x8000))
        resolver = StyleResolver(store)
        self.assertEqual(resolver.color_string(20), "#ff8080")
        self.assertEqual(resolver.color_string(RED), "#ff0000")

    def test_unknown_colour_is_empty(self) -> None:
        self.assertEqual(StyleResolver(_store()).color_string(999), "")


class PropListTests(unittest.TestCase):
    def test_nearest_fill_wins(self) -> None:
        store = _store()
        store.collect_basic_fill(30, BasicFill(RED))
        store.collect_basic_fill(31, BasicFill(BLUE))
        store.collect_prop_list(40, PropList(0, {FILL: 30}))  # C
        store.collect_prop_list(41, PropList(40, {}))  # B
        store.collect_prop_list(42, PropList(41, {}))  # A
        resolver = StyleResolver(store)
        self.assertEqual(resolver.resolve(42)["draw:fill-color"], "#ff0000")

        store.collect_prop_list(41, PropList(40, {FILL: 31}))
        self.assertEqual(resolver.resolve(42)["draw:fill-color"], "#0000ff")

    def test_absent_references_resolve_to_none(self) -> None:
        store = _store()
        store.collect_prop_list(40, PropList(77, {FILL: 555, STROKE: 556}))
        props = StyleResolver(store).resolve(40)
        self.assertEqual(props, {"draw:fill": "none", "draw:stroke": "none"})
        self.assertEqual(StyleResolver(store).resolve(0), {"draw:fill": "none", "draw:stroke": "none"})

    def test_cyclic_parents_terminate(self) -> None:
        store = _store()
        store.collect_prop_list(40, PropList(41, {}))
        store.collect_prop_list(41, PropList(40, {}))
        self.assertEqual(StyleResolver(store).resolve(40)["draw:fill"], "none")

    def test_basic_line_with_dashes(self) -> None:
        store = _store()
        store.collect_line_pattern(50, LinePattern((0.1, 0.05, 0.1, 0.05)))
        store.collect_basic_line(51, BasicLine(color_id=BLUE, line_pattern_id=50, width=0.02))
        store.collect_prop_list(40, PropList(0, {STROKE: 51}))
        props = StyleResolver(store).resolve(40)
        self.assertEqual(props["draw:stroke"], "dash")
        self.assertEqual(props["svg:stroke-color"], "#0000ff")
        self.assertEqual(props["svg:stroke-width"], 0.02)
        self.assertEqual(props["draw:dots1"], 2)
        self.assertAlmostEqual(props["draw:distance"], 0.05)

    def test_linear_gradient_uses_colour_stops(self) -> None:
        store = _store()
        store.collect_multi_color_list(60, [ColorStop(RED, 0.0), ColorStop(GREEN, 0.5), ColorStop(BLUE, 1.0)])
        store.collect_linear_fill(61, LinearFill(RED, BLUE, 30.0, 60))
        store.collect_prop_list(40, PropList(0, {FILL: 61}))
        props = StyleResolver(store).resolve(40)
        self.assertEqual(props["draw:fill"], "gradient")
        self.assertEqual(props["draw:angle"], 60.0)
        self.assertEqual(props["draw:start-color"], "#ff0000")
        self.assertEqual(props["draw:end-color"], "#0000ff")
        self.assertEqual(len(props["svg:linearGradient"]), 3)

    def test_pattern_fill_becomes_png(self) -> None:
        store = _store()
        store.collect_pattern_fill(70, PatternFill(RED, bytes([0x80, 0, 0, 0, 0, 0, 0, 0x01])))
        store.collect_prop_list(40, PropList(0, {FILL: 70}))
        props = StyleResolver(store).resolve(40)
        self.assertEqual(props["librevenge:mime-type"], "image/png")
        image = Image.open(io.BytesIO(props["draw:fill-image"]))
        self.assertEqual(image.size, (8, 8))
        rgb = image.convert("RGB")
        self.assertEqual(rgb.getpixel((0, 0)), (255, 0, 0))
        self.assertEqual(rgb.getpixel((1, 0)), (255, 255, 255))
        self.assertEqual(rgb.getpixel((7, 7)), (255, 0, 0))

    def test_child_gradient_replaces_inherited_stops(self) -> None:
        store = _store()
        store.collect_color(13, RGBColor(0xFFFF, 0xFFFF, 0))
        store.collect_multi_color_list(60, [ColorStop(RED, 0.0), ColorStop(GREEN, 1.0)])
        store.collect_linear_fill(61, LinearFill(RED, GREEN, 0.0, 60))
        store.collect_linear_fill(62, LinearFill(BLUE, 13, 0.0, 0))
        store.collect_prop_list(40, PropList(0, {FILL: 61}))
        store.collect_prop_list(41, PropList(40, {FILL: 62}))
        props = StyleResolver(store).resolve(41)
        self.assertNotIn("svg:linearGradient", props)
        self.assertEqual(props["draw:start-color"], "#0000ff")
        self.assertEqual(props["draw:end-color"], "#ffff00")

        output: list = []
        generator = SVGDrawingGenerator(output)
        generator.start_page({"svg:width": 1.0, "svg:height": 1.0})
        generator.set_style(props)
        generator.draw_path({"svg:d": square_path().to_actions()})
        generator.end_page()
        self.assertIn('stop-color="#0000ff"', output[0])
        self.assertNotIn("#ff0000", output[0])
        self.assertNotIn("#00ff00", output[0])

    def test_child_solid_fill_drops_inherited_image(self) -> None:
        store = _store()
        store.collect_pattern_fill(70, PatternFill(RED, bytes([0xFF] * 8)))
        store.collect_basic_fill(30, BasicFill(BLUE))
        store.collect_prop_list(40, PropList(0, {FILL: 70}))
        store.collect_prop_list(41, PropList(40, {FILL: 30}))
        props = StyleResolver(store).resolve(41)
        self.assertEqual(props["draw:fill"], "solid")
        self.assertEqual(props["draw:fill-color"], "#0000ff")
        self.assertNotIn("draw:fill-image", props)
        self.assertNotIn("librevenge:mime-type", props)

    def test_child_solid_line_drops_inherited_dashes(self) -> None:
        store = _store()
        store.collect_line_pattern(50, LinePattern((0.1, 0.05, 0.1, 0.05)))
        store.collect_basic_line(51, BasicLine(color_id=BLUE, line_pattern_id=50, width=0.02))
        store.collect_basic_line(52, BasicLine(color_id=RED, width=0.01))
        store.collect_prop_list(40, PropList(0, {STROKE: 51}))
        store.collect_prop_list(41, PropList(40, {STROKE: 52}))
        props = StyleResolver(store).resolve(41)
        self.assertEqual(props["draw:stroke"], "solid")
        self.assertEqual(props["svg:stroke-color"], "#ff0000")
        self.assertNotIn("draw:dots1", props)
        self.assertNotIn("draw:distance", props)

    def test_radial_fill(self) -> None:
        store = _store()
        store.collect_radial_fill(63, RadialFill(RED, BLUE, 0.25, 0.75))
        store.collect_prop_list(40, PropList(0, {FILL: 63}))
        props = StyleResolver(store).resolve(40)
        self.assertEqual(props["draw:fill"], "gradient")
        self.assertEqual(props["draw:style"], "radial")
        self.assertEqual((props["svg:cx"], props["svg:cy"]), (0.25, 0.75))
        self.assertEqual(props["draw:start-color"], "#ff0000")
        self.assertEqual(props["draw:end-color"], "#0000ff")

    def test_custom_proc_fill_and_stroke(self) -> None:
        store = _store()
        store.collect_custom_proc(64, CustomProc(ids=(GREEN,), widths=(0.03,)))
        store.collect_prop_list(40, PropList(0, {FILL: 64, STROKE: 64}))
        props = StyleResolver(store).resolve(40)
        self.assertEqual(props["draw:fill"], "solid")
        self.assertEqual(props["draw:fill-color"], "#00ff00")
        self.assertEqual(props["draw:stroke"], "solid")
        self.assertEqual(props["svg:stroke-color"], "#00ff00")
        self.assertEqual(props["svg:stroke-width"], 0.03)

    def test_line_arrow_becomes_marker(self) -> None:
        store = _store()
        store.collect_arrow_path(53, square_path())
        store.collect_basic_line(51, BasicLine(color_id=BLUE, end_arrow_id=53, width=0.01))
        store.collect_prop_list(40, PropList(0, {STROKE: 51}))
        props = StyleResolver(store).resolve(40)
        self.assertIn("draw:marker-end-path", props)
        self.assertNotIn("draw:marker-start-path", props)
        self.assertEqual(props["draw:marker-end-viewbox"], (0.0, 0.0, 1.0, 1.0))
        self.assertAlmostEqual(props["draw:marker-end-width"], 0.04)


class GraphicStyleTests(unittest.TestCase):
    def test_attribute_holders_lead_to_fill_and_stroke(self) -> None:
        store = _store()
        store.collect_basic_fill(30, BasicFill(GREEN))
        store.collect_basic_line(31, BasicLine(color_id=RED, width=0.5))
        store.collect_attribute_holder(80, AttributeHolder(0, 30))
        store.collect_attribute_holder(81, AttributeHolder(82, 0))
        store.collect_attribute_holder(82, AttributeHolder(0, 31))
        store.collect_graphic_style(90, GraphicStyle(0, 0, {5: 80, 6: 81}))
        props = StyleResolver(store).resolve(90)
        self.assertEqual(props["draw:fill"], "solid")
        self.assertEqual(props["draw:fill-color"], "#00ff00")
        self.assertEqual(props["draw:stroke"], "solid")
        self.assertEqual(props["svg:stroke-color"], "#ff0000")

    def test_opacity_filter_applies_to_filtered_style(self) -> None:
        store = _store()
        store.collect_basic_fill(30, BasicFill(RED))
        store.collect_prop_list(40, PropList(0, {FILL: 30}))
        store.collect_opacity_filter(100, 50.0)
        store.collect_filter_attribute_holder(101, FilterAttributeHolder(0, 100, 40))
        store.collect_graphic_style(90, GraphicStyle(0, 0, {5: 101}))
        props = StyleResolver(store).resolve(90)
        self.assertEqual(props["draw:fill-color"], "#ff0000")
        self.assertEqual(props["svg:fill-opacity"], 0.5)
        self.assertNotIn("svg:stroke-opacity", props)

    def test_filter_list_applies_shadow(self) -> None:
        store = _store()
        store.collect_basic_fill(30, BasicFill(RED))
        store.collect_prop_list(40, PropList(0, {FILL: 30}))
        store.collect_shadow_filter(102, ShadowFilter(BLUE, False, False, 0.1, 0.5, 1.0, 0.0))
        store.collect_list(103, ElementList(0, (102,)))
        store.collect_filter_attribute_holder(101, FilterAttributeHolder(0, 103, 40))
        store.collect_graphic_style(90, GraphicStyle(0, 0, {5: 101}))
        props = StyleResolver(store).resolve(90)
        self.assertEqual(props["draw:shadow"], "visible")
        self.assertEqual(props["draw:shadow-color"], "#0000ff")
        self.assertAlmostEqual(props["draw:shadow-offset-x"], 0.1)
        self.assertAlmostEqual(props["draw:shadow-offset-y"], 0.0)

    def test_inner_shadow_is_ignored(self) -> None:
        store = _store()
        store.collect_shadow_filter(102, ShadowFilter(BLUE, False, True, 0.1, 0.5, 1.0, 0.0))
        props = {"draw:fill": "none"}
        StyleResolver(store).apply_filter(props, 102)
        self.assertNotIn("draw:shadow", props)


class LensFillTests(unittest.TestCase):
    def _resolve(self, mode: int) -> dict:
        store = _store()
        store.collect_lens_fill(30, LensFill(GREEN, 0.4, mode))
        store.collect_prop_list(40, PropList(0, {FILL: 30}))
        return StyleResolver(store).resolve(40)

    def test_transparency(self) -> None:
        props = self._resolve(FH_LENSFILL_MODE_TRANSPARENCY)
        self.assertEqual(props["draw:fill"], "solid")
        self.assertEqual(props["draw:fill-color"], "#00ff00")
        self.assertEqual(props["draw:opacity"], 0.4)

    def test_monochrome(self) -> None:
        props = self._resolve(FH_LENSFILL_MODE_MONOCHROME)
        self.assertEqual(props["draw:fill"], "none")
        self.assertEqual(props["draw:color-mode"], "greyscale")

    def test_lighten(self) -> None:
        props = self._resolve(FH_LENSFILL_MODE_LIGHTEN)
        self.assertEqual(props["draw:fill-color"], "#ffffff")
        self.assertEqual(props["draw:opacity"], 0.4)


if __name__ == "__main__":
    unittest.main()
