from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .entities import (
    AGDFont,
    AttributeHolder,
    BasicFill,
    BasicLine,
    Block,
    CharProperties,
    ColorStop,
    CompositePath,
    CustomProc,
    DataList,
    DisplayText,
    ElementList,
    FilterAttributeHolder,
    GlowFilter,
    GraphicStyle,
    Group,
    ImageImport,
    Layer,
    LensFill,
    LinePattern,
    LinearFill,
    NewBlend,
    PageInfo,
    Paragraph,
    ParagraphProperties,
    PathText,
    PatternFill,
    PatternLine,
    PropList,
    RadialFill,
    RGBColor,
    ShadowFilter,
    SymbolClass,
    SymbolInstance,
    Tab,
    Tail,
    TEffect,
    TextObject,
    TileFill,
    TintColor,
)
from .logging import DiagnosticLog
from .path import Path
from .transform import Transform

STROKE_NAMES = ("stroke",)
FILL_NAMES = ("fill",)
CONTENT_NAMES = ("contents", "content")


@dataclass
class SceneStore:
    """Every decoded record of one document, keyed by record id.

    Each entity kind lives in its own mapping. ``collect_*`` overwrites,
    ``find_*`` answers ``None`` for id 0 and for ids never collected.
    """

    log: DiagnosticLog = field(default_factory=DiagnosticLog)

    def __post_init__(self) -> None:
        self.page: PageInfo = PageInfo()
        self.tail: Tail = Tail()
        self.block: Optional[Tuple[int, Block]] = None
        self.stroke_name_id = 0
        self.fill_name_id = 0
        self.content_name_id = 0
        self.strings: Dict[int, str] = {}
        self.names: Dict[str, int] = {}
        self.transforms: Dict[int, Transform] = {}
        self.paths: Dict[int, Path] = {}
        self.lists: Dict[int, ElementList] = {}
        self.layers: Dict[int, Layer] = {}
        self.groups: Dict[int, Group] = {}
        self.clip_groups: Dict[int, Group] = {}
        self.composite_paths: Dict[int, CompositePath] = {}
        self.path_texts: Dict[int, PathText] = {}
        self.tstrings: Dict[int, Tuple[int, ...]] = {}
        self.fonts: Dict[int, AGDFont] = {}
        self.teffects: Dict[int, TEffect] = {}
        self.paragraphs: Dict[int, Paragraph] = {}
        self.tab_tables: Dict[int, Tuple[Tab, ...]] = {}
        self.text_bloks: Dict[int, Tuple[int, ...]] = {}
        self.text_objects: Dict[int, TextObject] = {}
        self.char_properties: Dict[int, CharProperties] = {}
        self.paragraph_properties: Dict[int, ParagraphProperties] = {}
        self.rgb_colors: Dict[int, RGBColor] = {}
        self.tint_colors: Dict[int, TintColor] = {}
        self.prop_lists: Dict[int, PropList] = {}
        self.graphic_styles: Dict[int, GraphicStyle] = {}
        self.attribute_holders: Dict[int, AttributeHolder] = {}
        self.filter_attribute_holders: Dict[int, FilterAttributeHolder] = {}
        self.display_texts: Dict[int, DisplayText] = {}
        self.data: Dict[int, bytes] = {}
        self.data_lists: Dict[int, DataList] = {}
        self.images: Dict[int, ImageImport] = {}
        self.multi_color_lists: Dict[int, Tuple[ColorStop, ...]] = {}
        self.basic_fills: Dict[int, BasicFill] = {}
        self.linear_fills: Dict[int, LinearFill] = {}
        self.radial_fills: Dict[int, RadialFill] = {}
        self.lens_fills: Dict[int, LensFill] = {}
        self.tile_fills: Dict[int, TileFill] = {}
        self.pattern_fills: Dict[int, PatternFill] = {}
        self.custom_procs: Dict[int, CustomProc] = {}
        self.basic_lines: Dict[int, BasicLine] = {}
        self.pattern_lines: Dict[int, PatternLine] = {}
        self.line_patterns: Dict[int, LinePattern] = {}
        self.arrow_paths: Dict[int, Path] = {}
        self.new_blends: Dict[int, NewBlend] = {}
        self.opacity_filters: Dict[int, float] = {}
        self.shadow_filters: Dict[int, ShadowFilter] = {}
        self.glow_filters: Dict[int, GlowFilter] = {}
        self.symbol_classes: Dict[int, SymbolClass] = {}
        self.symbol_instances: Dict[int, SymbolInstance] = {}

    # -- document level -------------------------------------------------

    def collect_page_info(self, page: PageInfo) -> None:
        self.page = page

    def collect_tail(self, record_id: int, tail: Tail) -> None:
        self.tail = tail

    def collect_block(self, record_id: int, block: Block) -> None:
        if self.block is not None:
            if self.block[0] != record_id:
                self.log.warn(
                    f"Several Block records in the document; keeping 0x{self.block[0]:x}, "
                    f"ignoring 0x{record_id:x}"
                )
            return
        self.block = (record_id, block)

    def page_info(self) -> PageInfo:
        if self.page.is_empty() and not self.tail.page_info.is_empty():
            return self.tail.page_info
        return self.page

    # -- names and strings ----------------------------------------------

    def collect_string(self, record_id: int, text: str) -> None:
        self.strings[record_id] = text

    def collect_name(self, record_id: int, name: str) -> None:
        self.names[name] = record_id
        if name in STROKE_NAMES:
            self.stroke_name_id = record_id
        elif name in FILL_NAMES:
            self.fill_name_id = record_id
        elif name in CONTENT_NAMES:
            self.content_name_id = record_id

    def find_string(self, record_id: int) -> Optional[str]:
        return self.strings.get(record_id) if record_id else None

    # -- geometry --------------------------------------------------------

    def collect_xform(
        self, record_id: int, m11: float, m21: float, m12: float, m22: float, m13: float, m23: float
    ) -> None:
        self.transforms[record_id] = Transform(m11, m21, m12, m22, m13, m23)

    def collect_path(self, record_id: int, path: Path) -> None:
        self.paths[record_id] = path

    def collect_list(self, record_id: int, lst: ElementList) -> None:
        self.lists[record_id] = lst

    def collect_layer(self, record_id: int, layer: Layer) -> None:
        self.layers[record_id] = layer

    def collect_group(self, record_id: int, group: Group) -> None:
        self.groups[record_id] = group

    def collect_clip_group(self, record_id: int, group: Group) -> None:
        self.clip_groups[record_id] = group

    def collect_composite_path(self, record_id: int, composite: CompositePath) -> None:
        self.composite_paths[record_id] = composite

    def collect_path_text(self, record_id: int, path_text: PathText) -> None:
        self.path_texts[record_id] = path_text

    def collect_symbol_class(self, record_id: int, symbol_class: SymbolClass) -> None:
        self.symbol_classes[record_id] = symbol_class

    def collect_symbol_instance(self, record_id: int, instance: SymbolInstance) -> None:
        self.symbol_instances[record_id] = instance

    def collect_new_blend(self, record_id: int, blend: NewBlend) -> None:
        self.new_blends[record_id] = blend

    def collect_arrow_path(self, record_id: int, path: Path) -> None:
        self.arrow_paths[record_id] = path

    # -- text ------------------------------------------------------------

    def collect_tstring(self, record_id: int, elements: Sequence[int]) -> None:
        self.tstrings[record_id] = tuple(elements)

    def collect_agd_font(self, record_id: int, font: AGDFont) -> None:
        self.fonts[record_id] = font

    def collect_teffect(self, record_id: int, effect: TEffect) -> None:
        self.teffects[record_id] = effect

    def collect_paragraph(self, record_id: int, paragraph: Paragraph) -> None:
        self.paragraphs[record_id] = paragraph

    def collect_tab_table(self, record_id: int, tabs: Sequence[Tab]) -> None:
        self.tab_tables[record_id] = tuple(tabs)

    def collect_text_blok(self, record_id: int, characters: Sequence[int]) -> None:
        self.text_bloks[record_id] = tuple(characters)

    def collect_text_object(self, record_id: int, text_object: TextObject) -> None:
        self.text_objects[record_id] = text_object

    def collect_char_props(self, record_id: int, props: CharProperties) -> None:
        self.char_properties[record_id] = props

    def collect_paragraph_props(self, record_id: int, props: ParagraphProperties) -> None:
        self.paragraph_properties[record_id] = props

    def collect_display_text(self, record_id: int, display_text: DisplayText) -> None:
        self.display_texts[record_id] = display_text

    # -- styles ----------------------------------------------------------

    def collect_prop_list(self, record_id: int, prop_list: PropList) -> None:
        self.prop_lists[record_id] = prop_list

    def collect_graphic_style(self, record_id: int, style: GraphicStyle) -> None:
        self.graphic_styles[record_id] = style

    def collect_attribute_holder(self, record_id: int, holder: AttributeHolder) -> None:
        self.attribute_holders[record_id] = holder

    def collect_filter_attribute_holder(self, record_id: int, holder: FilterAttributeHolder) -> None:
        self.filter_attribute_holders[record_id] = holder

    def collect_color(self, record_id: int, color: RGBColor) -> None:
        self.rgb_colors[record_id] = color

    def collect_tint_color(self, record_id: int, color: TintColor) -> None:
        self.tint_colors[record_id] = color

    def collect_multi_color_list(self, record_id: int, stops: Sequence[ColorStop]) -> None:
        self.multi_color_lists[record_id] = tuple(stops)

    def collect_basic_fill(self, record_id: int, fill: BasicFill) -> None:
        self.basic_fills[record_id] = fill

    def collect_linear_fill(self, record_id: int, fill: LinearFill) -> None:
        self.linear_fills[record_id] = fill

    def collect_radial_fill(self, record_id: int, fill: RadialFill) -> None:
        self.radial_fills[record_id] = fill

    def collect_lens_fill(self, record_id: int, fill: LensFill) -> None:
        self.lens_fills[record_id] = fill

    def collect_tile_fill(self, record_id: int, fill: TileFill) -> None:
        self.tile_fills[record_id] = fill

    def collect_pattern_fill(self, record_id: int, fill: PatternFill) -> None:
        self.pattern_fills[record_id] = fill

    def collect_custom_proc(self, record_id: int, proc: CustomProc) -> None:
        self.custom_procs[record_id] = proc

    def collect_basic_line(self, record_id: int, line: BasicLine) -> None:
        self.basic_lines[record_id] = line

    def collect_pattern_line(self, record_id: int, line: PatternLine) -> None:
        self.pattern_lines[record_id] = line

    def collect_line_pattern(self, record_id: int, pattern: LinePattern) -> None:
        self.line_patterns[record_id] = pattern

    def collect_opacity_filter(self, record_id: int, opacity: float) -> None:
        self.opacity_filters[record_id] = opacity

    def collect_shadow_filter(self, record_id: int, shadow: ShadowFilter) -> None:
        self.shadow_filters[record_id] = shadow

    def collect_glow_filter(self, record_id: int, glow: GlowFilter) -> None:
        self.glow_filters[record_id] = glow

    # -- images ----------------------------------------------------------

    def collect_data(self, record_id: int, data: bytes) -> None:
        self.data[record_id] = bytes(data)

    def collect_data_list(self, record_id: int, data_list: DataList) -> None:
        self.data_lists[record_id] = data_list

    def collect_image(self, record_id: int, image: ImageImport) -> None:
        self.images[record_id] = image

    # -- lookups ---------------------------------------------------------

    def find_list_elements(self, record_id: int) -> Optional[Tuple[int, ...]]:
        lst = self.lists.get(record_id) if record_id else None
        return lst.elements if lst is not None else None

    def find_tstring_elements(self, record_id: int) -> Optional[Tuple[int, ...]]:
        return self.tstrings.get(record_id) if record_id else None

    def find_transform(self, record_id: int) -> Optional[Transform]:
        return self.transforms.get(record_id) if record_id else None

    def find_path(self, record_id: int) -> Optional[Path]:
        return self.paths.get(record_id) if record_id else None

    def find_layer(self, record_id: int) -> Optional[Layer]:
        return self.layers.get(record_id) if record_id else None

    def find_group(self, record_id: int) -> Optional[Group]:
        return self.groups.get(record_id) if record_id else None

    def find_clip_group(self, record_id: int) -> Optional[Group]:
        return self.clip_groups.get(record_id) if record_id else None

    def find_composite_path(self, record_id: int) -> Optional[CompositePath]:
        return self.composite_paths.get(record_id) if record_id else None

    def find_path_text(self, record_id: int) -> Optional[PathText]:
        return self.path_texts.get(record_id) if record_id else None

    def find_text_object(self, record_id: int) -> Optional[TextObject]:
        return self.text_objects.get(record_id) if record_id else None

    def find_teffect(self, record_id: int) -> Optional[TEffect]:
        return self.teffects.get(record_id) if record_id else None

    def find_agd_font(self, record_id: int) -> Optional[AGDFont]:
        return self.fonts.get(record_id) if record_id else None

    def find_paragraph(self, record_id: int) -> Optional[Paragraph]:
        return self.paragraphs.get(record_id) if record_id else None

    def find_tab_table(self, record_id: int) -> Optional[Tuple[Tab, ...]]:
        return self.tab_tables.get(record_id) if record_id else None

    def find_text_blok(self, record_id: int) -> Optional[Tuple[int, ...]]:
        return self.text_bloks.get(record_id) if record_id else None

    def find_char_props(self, record_id: int) -> Optional[CharProperties]:
        return self.char_properties.get(record_id) if record_id else None

    def find_paragraph_props(self, record_id: int) -> Optional[ParagraphProperties]:
        return self.paragraph_properties.get(record_id) if record_id else None

    def find_prop_list(self, record_id: int) -> Optional[PropList]:
        return self.prop_lists.get(record_id) if record_id else None

    def find_graphic_style(self, record_id: int) -> Optional[GraphicStyle]:
        return self.graphic_styles.get(record_id) if record_id else None

    def find_attribute_holder(self, record_id: int) -> Optional[AttributeHolder]:
        return self.attribute_holders.get(record_id) if record_id else None

    def find_filter_attribute_holder(self, record_id: int) -> Optional[FilterAttributeHolder]:
        return self.filter_attribute_holders.get(record_id) if record_id else None

    def find_basic_fill(self, record_id: int) -> Optional[BasicFill]:
        return self.basic_fills.get(record_id) if record_id else None

    def find_linear_fill(self, record_id: int) -> Optional[LinearFill]:
        return self.linear_fills.get(record_id) if record_id else None

    def find_lens_fill(self, record_id: int) -> Optional[LensFill]:
        return self.lens_fills.get(record_id) if record_id else None

    def find_radial_fill(self, record_id: int) -> Optional[RadialFill]:
        return self.radial_fills.get(record_id) if record_id else None

    def find_tile_fill(self, record_id: int) -> Optional[TileFill]:
        return self.tile_fills.get(record_id) if record_id else None

    def find_pattern_fill(self, record_id: int) -> Optional[PatternFill]:
        return self.pattern_fills.get(record_id) if record_id else None

    def find_custom_proc(self, record_id: int) -> Optional[CustomProc]:
        return self.custom_procs.get(record_id) if record_id else None

    def find_basic_line(self, record_id: int) -> Optional[BasicLine]:
        return self.basic_lines.get(record_id) if record_id else None

    def find_pattern_line(self, record_id: int) -> Optional[PatternLine]:
        return self.pattern_lines.get(record_id) if record_id else None

    def find_line_pattern(self, record_id: int) -> Optional[LinePattern]:
        return self.line_patterns.get(record_id) if record_id else None

    def find_arrow_path(self, record_id: int) -> Optional[Path]:
        return self.arrow_paths.get(record_id) if record_id else None

    def find_rgb_color(self, record_id: int) -> Optional[RGBColor]:
        return self.rgb_colors.get(record_id) if record_id else None

    def find_tint_color(self, record_id: int) -> Optional[TintColor]:
        return self.tint_colors.get(record_id) if record_id else None

    def find_multi_color_list(self, record_id: int) -> Optional[Tuple[ColorStop, ...]]:
        return self.multi_color_lists.get(record_id) if record_id else None

    def find_display_text(self, record_id: int) -> Optional[DisplayText]:
        return self.display_texts.get(record_id) if record_id else None

    def find_image_import(self, record_id: int) -> Optional[ImageImport]:
        return self.images.get(record_id) if record_id else None

    def find_data(self, record_id: int) -> Optional[bytes]:
        return self.data.get(record_id) if record_id else None

    def find_data_list(self, record_id: int) -> Optional[DataList]:
        return self.data_lists.get(record_id) if record_id else None

    def find_new_blend(self, record_id: int) -> Optional[NewBlend]:
        return self.new_blends.get(record_id) if record_id else None

    def find_opacity_filter(self, record_id: int) -> Optional[float]:
        return self.opacity_filters.get(record_id) if record_id else None

    def find_shadow_filter(self, record_id: int) -> Optional[ShadowFilter]:
        return self.shadow_filters.get(record_id) if record_id else None

    def find_glow_filter(self, record_id: int) -> Optional[GlowFilter]:
        return self.glow_filters.get(record_id) if record_id else None

    def find_symbol_class(self, record_id: int) -> Optional[SymbolClass]:
        return self.symbol_classes.get(record_id) if record_id else None

    def find_symbol_instance(self, record_id: int) -> Optional[SymbolInstance]:
        return self.symbol_instances.get(record_id) if record_id else None

    # -- derived ---------------------------------------------------------

    def find_value_from_attribute(self, record_id: int) -> int:
        """Follow an AttributeHolder parent chain down to its leaf value id."""
        seen: List[int] = []
        value = 0
        while record_id and record_id not in seen:
            holder = self.find_attribute_holder(record_id)
            if holder is None:
                break
            seen.append(record_id)
            if holder.attr_id:
                value = holder.attr_id
                break
            record_id = holder.parent_id
        return value

    def image_data(self, data_list_id: int) -> bytes:
        data_list = self.find_data_list(data_list_id)
        if data_list is None:
            return b""
        chunks = [self.find_data(element) for element in data_list.elements]
        return b"".join(chunk for chunk in chunks if chunk)
