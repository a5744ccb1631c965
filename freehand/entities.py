from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .transform import Transform


@dataclass(frozen=True)
class PageInfo:
    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0

    def is_empty(self) -> bool:
        return self.max_x - self.min_x <= 0.0 or self.max_y - self.min_y <= 0.0


@dataclass(frozen=True)
class Block:
    layer_list_id: int = 0


@dataclass(frozen=True)
class Tail:
    block_id: int = 0
    prop_lst_id: int = 0
    font_id: int = 0
    page_info: PageInfo = field(default_factory=PageInfo)


@dataclass(frozen=True)
class ElementList:
    list_type: int = 0
    elements: Tuple[int, ...] = ()


@dataclass(frozen=True)
class Layer:
    graphic_style_id: int = 0
    elements_id: int = 0
    visibility: int = 0


@dataclass(frozen=True)
class Group:
    graphic_style_id: int = 0
    elements_id: int = 0
    xform_id: int = 0


@dataclass(frozen=True)
class CompositePath:
    graphic_style_id: int = 0
    elements_id: int = 0


@dataclass(frozen=True)
class PathText:
    elements_id: int = 0
    layer_id: int = 0
    display_text_id: int = 0
    shape_id: int = 0
    text_size: int = 0


@dataclass(frozen=True)
class Paragraph:
    para_style_id: int = 0
    text_blok_id: int = 0
    char_style_ids: Tuple[Tuple[int, int], ...] = ()


@dataclass(frozen=True)
class AGDFont:
    font_name_id: int = 0
    font_style: int = 0
    font_size: float = 12.0


@dataclass(frozen=True)
class TEffect:
    name_id: int = 0
    short_name_id: int = 0
    color_ids: Tuple[int, int] = (0, 0)


@dataclass(frozen=True)
class Tab:
    type: int = 0
    position: float = 0.0


@dataclass(frozen=True)
class TextObject:
    graphic_style_id: int = 0
    xform_id: int = 0
    tstring_id: int = 0
    vmp_obj_id: int = 0
    path_id: int = 0
    start_x: float = 0.0
    start_y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    begin_pos: int = 0
    end_pos: int = 0xFFFF
    col_num: int = 1
    row_num: int = 1
    col_sep: float = 0.0
    row_sep: float = 0.0
    row_break_first: int = 0


@dataclass(frozen=True)
class ParagraphProperties:
    id_to_int: Dict[int, int] = field(default_factory=dict)
    id_to_double: Dict[int, float] = field(default_factory=dict)
    id_to_zone_id: Dict[int, int] = field(default_factory=dict)

    def empty(self) -> bool:
        return not (self.id_to_int or self.id_to_double or self.id_to_zone_id)


@dataclass(frozen=True)
class CharProperties:
    text_color_id: int = 0
    font_size: float = 12.0
    font_name_id: int = 0
    font_id: int = 0
    teffect_id: int = 0
    id_to_double: Dict[int, float] = field(default_factory=dict)


@dataclass(frozen=True)
class RGBColor:
    red: int = 0
    green: int = 0
    blue: int = 0

    def black(self) -> bool:
        return not (self.red or self.green or self.blue)


@dataclass(frozen=True)
class TintColor:
    base_color_id: int = 0
    tint: int = 0xFFFF


@dataclass(frozen=True)
class PropList:
    parent_id: int = 0
    elements: Dict[int, int] = field(default_factory=dict)


@dataclass(frozen=True)
class BasicLine:
    color_id: int = 0
    line_pattern_id: int = 0
    start_arrow_id: int = 0
    end_arrow_id: int = 0
    mitter: float = 0.0
    width: float = 0.0


@dataclass(frozen=True)
class PatternLine:
    color_id: int = 0
    percent_pattern: float = 1.0
    mitter: float = 0.0
    width: float = 0.0


@dataclass(frozen=True)
class CustomProc:
    ids: Tuple[int, ...] = ()
    widths: Tuple[float, ...] = ()
    params: Tuple[float, ...] = ()
    angles: Tuple[float, ...] = ()


@dataclass(frozen=True)
class BasicFill:
    color_id: int = 0


@dataclass(frozen=True)
class LinearFill:
    color1_id: int = 0
    color2_id: int = 0
    angle: float = 0.0
    multi_color_list_id: int = 0


@dataclass(frozen=True)
class RadialFill:
    color1_id: int = 0
    color2_id: int = 0
    cx: float = 0.5
    cy: float = 0.5
    multi_color_list_id: int = 0


@dataclass(frozen=True)
class PatternFill:
    color_id: int = 0
    pattern: bytes = bytes(8)


@dataclass(frozen=True)
class LegacyCharProperties:
    offset: int = 0
    font_name_id: int = 0
    font_size: float = 12.0
    font_style: int = 0
    font_color_id: int = 0
    text_effs_id: int = 0
    # -1 solid, -2 auto, > 0 interline distance in points
    leading: float = -1.0
    letter_spacing: float = 0.0
    word_spacing: float = 0.0
    horizontal_scale: float = 1.0
    baseline_shift: float = 0.0


@dataclass(frozen=True)
class LegacyParaProperties:
    offset: int = 0


@dataclass(frozen=True)
class DisplayText:
    graphic_style_id: int = 0
    xform_id: int = 0
    start_x: float = 0.0
    start_y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    char_props: Tuple[LegacyCharProperties, ...] = ()
    justify: int = 0
    para_props: Tuple[LegacyParaProperties, ...] = ()
    characters: bytes = b""


@dataclass(frozen=True)
class GraphicStyle:
    parent_id: int = 0
    attr_id: int = 0
    elements: Dict[int, int] = field(default_factory=dict)


@dataclass(frozen=True)
class AttributeHolder:
    parent_id: int = 0
    attr_id: int = 0


@dataclass(frozen=True)
class FilterAttributeHolder:
    parent_id: int = 0
    filter_id: int = 0
    graphic_style_id: int = 0


@dataclass(frozen=True)
class DataList:
    data_size: int = 0
    elements: Tuple[int, ...] = ()


@dataclass(frozen=True)
class ImageImport:
    graphic_style_id: int = 0
    data_list_id: int = 0
    xform_id: int = 0
    start_x: float = 0.0
    start_y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    format: str = ""


@dataclass(frozen=True)
class ColorStop:
    color_id: int = 0
    position: float = 0.0


@dataclass(frozen=True)
class LensFill:
    color_id: int = 0
    value: float = 0.0
    mode: int = 0


@dataclass(frozen=True)
class NewBlend:
    graphic_style_id: int = 0
    parent_id: int = 0
    list1_id: int = 0
    list2_id: int = 0
    list3_id: int = 0


@dataclass(frozen=True)
class ShadowFilter:
    color_id: int = 0
    knock_out: bool = False
    inner: bool = False
    distribution: float = 0.0
    opacity: float = 1.0
    smoothness: float = 1.0
    angle: float = 45.0


@dataclass(frozen=True)
class GlowFilter:
    color_id: int = 0
    inner: bool = False
    width: float = 0.0
    opacity: float = 1.0
    smoothness: float = 1.0
    distribution: float = 0.0


@dataclass(frozen=True)
class TileFill:
    xform_id: int = 0
    group_id: int = 0
    scale_x: float = 0.0
    scale_y: float = 0.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    angle: float = 0.0


@dataclass(frozen=True)
class LinePattern:
    dashes: Tuple[float, ...] = ()


@dataclass(frozen=True)
class SymbolClass:
    name_id: int = 0
    group_id: int = 0
    date_time_id: int = 0
    symbol_library_id: int = 0
    list_id: int = 0


@dataclass(frozen=True)
class SymbolInstance:
    graphic_style_id: int = 0
    parent_id: int = 0
    symbol_class_id: int = 0
    xform: Transform = field(default_factory=Transform)


TabTable = List[Tab]
