from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .constants import (
    FH_BASELN_SHIFT,
    FH_HOR_SCALE,
    FH_PARA_LEADING,
    FH_PARA_LEFT_INDENT,
    FH_PARA_RIGHT_INDENT,
    FH_PARA_SPC_ABOVE,
    FH_PARA_SPC_BELLOW,
    FH_PARA_TAB_TABLE_ID,
    FH_PARA_TEXT_ALIGN,
    FH_PARA_TEXT_INDENT,
    FH_RNG_KERN,
)
from .entities import CharProperties, LegacyCharProperties, ParagraphProperties
from .styles import StyleResolver

Properties = Dict[str, object]

TEXT_ALIGNMENTS = {0: "left", 1: "right", 2: "center", 3: "justify"}
TAB_TYPES = {0: "left", 1: "right", 2: "center", 3: "char"}


def decode_utf16(units: Sequence[int]) -> str:
    """Join UTF-16 code units into text, replacing unpaired surrogates."""
    raw = b"".join(int(unit & 0xFFFF).to_bytes(2, "big") for unit in units)
    return raw.decode("utf-16-be", errors="replace")


def decode_mac_roman(data: bytes) -> str:
    return bytes(data).decode("mac_roman", errors="replace")


def strip_control(text: str) -> str:
    return text.replace("\x00", "").replace("\r", "")


class TextStyler:
    """Turns character and paragraph property records into painter props."""

    def __init__(self, resolver: StyleResolver) -> None:
        self.resolver = resolver
        self.store = resolver.store

    def _font_name(self, font_name_id: int) -> str:
        name = self.store.find_string(font_name_id)
        return name or ""

    def _apply_font(self, props: Properties, font_id: int) -> None:
        font = self.store.find_agd_font(font_id)
        if font is None:
            return
        name = self._font_name(font.font_name_id)
        if name:
            props["style:font-name"] = name
        props["fo:font-size"] = font.font_size
        self._apply_font_style(props, font.font_style)

    @staticmethod
    def _apply_font_style(props: Properties, style: int) -> None:
        if style & 1:
            props["fo:font-weight"] = "bold"
        if style & 2:
            props["fo:font-style"] = "italic"

    def _apply_text_effect(self, props: Properties, teffect_id: int) -> None:
        effect = self.store.find_teffect(teffect_id)
        if effect is None:
            return
        name = (self.store.find_string(effect.name_id) or "").lower()
        if "underline" in name:
            props["style:text-underline-type"] = "single"
            color = self.resolver.color_string(effect.color_ids[0])
            if color:
                props["style:text-underline-color"] = color
        if "strike" in name:
            props["style:text-line-through-type"] = "single"
        if "shadow" in name:
            props["fo:text-shadow"] = "1pt 1pt"
        if "outline" in name:
            props["style:text-outline"] = True

    def span_properties(self, char_props_id: int) -> Properties:
        props: Properties = {}
        char_props = self.store.find_char_props(char_props_id)
        if char_props is None:
            return props
        self._apply_char_properties(props, char_props)
        return props

    def _apply_char_properties(self, props: Properties, char_props: CharProperties) -> None:
        if char_props.font_id:
            self._apply_font(props, char_props.font_id)
        name = self._font_name(char_props.font_name_id)
        if name:
            props["style:font-name"] = name
        props["fo:font-size"] = char_props.font_size
        color = self.resolver.color_string(char_props.text_color_id)
        if color:
            props["fo:color"] = color
        if char_props.teffect_id:
            self._apply_text_effect(props, char_props.teffect_id)
        for key, value in char_props.id_to_double.items():
            if key == FH_BASELN_SHIFT and value:
                percent = value / char_props.font_size * 100.0 if char_props.font_size else 0.0
                props["style:text-position"] = f"{percent:g}% 100%"
            elif key == FH_HOR_SCALE and value and value != 1.0:
                props["style:text-scale"] = value
            elif key == FH_RNG_KERN and value:
                props["fo:letter-spacing"] = value * char_props.font_size

    def legacy_span_properties(self, char_props: LegacyCharProperties) -> Properties:
        props: Properties = {}
        name = self._font_name(char_props.font_name_id)
        if name:
            props["style:font-name"] = name
        props["fo:font-size"] = char_props.font_size
        self._apply_font_style(props, char_props.font_style)
        color = self.resolver.color_string(char_props.font_color_id)
        if color:
            props["fo:color"] = color
        if char_props.letter_spacing:
            props["fo:letter-spacing"] = char_props.letter_spacing
        if char_props.horizontal_scale and char_props.horizontal_scale != 1.0:
            props["style:text-scale"] = char_props.horizontal_scale
        if char_props.baseline_shift and char_props.font_size:
            percent = char_props.baseline_shift / char_props.font_size * 100.0
            props["style:text-position"] = f"{percent:g}% 100%"
        if char_props.leading > 0.0:
            props["fo:line-height"] = char_props.leading
        return props

    def paragraph_properties(self, para_props_id: int) -> Properties:
        props: Properties = {}
        para_props = self.store.find_paragraph_props(para_props_id)
        if para_props is None:
            return props
        self._apply_paragraph_properties(props, para_props)
        return props

    def _apply_paragraph_properties(self, props: Properties, para_props: ParagraphProperties) -> None:
        for key, value in para_props.id_to_int.items():
            if key == FH_PARA_TEXT_ALIGN and value in TEXT_ALIGNMENTS:
                props["fo:text-align"] = TEXT_ALIGNMENTS[value]
        for key, value in para_props.id_to_double.items():
            if key == FH_PARA_TEXT_INDENT:
                props["fo:text-indent"] = value
            elif key == FH_PARA_LEFT_INDENT:
                props["fo:margin-left"] = value
            elif key == FH_PARA_RIGHT_INDENT:
                props["fo:margin-right"] = value
            elif key == FH_PARA_SPC_ABOVE:
                props["fo:margin-top"] = value
            elif key == FH_PARA_SPC_BELLOW:
                props["fo:margin-bottom"] = value
            elif key == FH_PARA_LEADING and value > 0.0:
                props["fo:line-height"] = value
        tab_table_id = para_props.id_to_zone_id.get(FH_PARA_TAB_TABLE_ID, 0)
        tabs = self.store.find_tab_table(tab_table_id)
        if tabs:
            props["style:tab-stops"] = [
                {"style:type": TAB_TYPES.get(tab.type, "left"), "style:position": tab.position}
                for tab in tabs
            ]

    def legacy_paragraph_properties(self, justify: int) -> Properties:
        if justify in TEXT_ALIGNMENTS:
            return {"fo:text-align": TEXT_ALIGNMENTS[justify]}
        return {}


def split_runs(
    characters: Sequence[int],
    char_style_ids: Sequence[Sequence[int]],
    begin_pos: int,
    end_pos: int,
) -> List[tuple]:
    """Character ranges of each char-style run, clipped to ``[begin_pos, end_pos)``.

    ``char_style_ids`` holds ``(offset, char props id)`` pairs in ascending
    offset order, indexing into the shared blok ``characters``. The last
    run ends at the first carriage return at or after its offset, or at the
    end of the blok. Returns ``(start, stop, char props id)`` triples with
    empty ranges dropped.
    """

    text_length = len(characters)
    runs: List[tuple] = []
    for index, (offset, char_props_id) in enumerate(char_style_ids):
        if index + 1 < len(char_style_ids):
            stop = char_style_ids[index + 1][0]
        else:
            stop = text_length
            for position in range(offset, text_length):
                if characters[position] == 0x0D:
                    stop = position
                    break
        start = max(offset, begin_pos)
        stop = min(stop, end_pos, text_length)
        if start < stop:
            runs.append((start, stop, char_props_id))
    return runs


def legacy_boundaries(
    length: int, para_offsets: Sequence[int], char_offsets: Sequence[int]
) -> List[int]:
    """Sorted distinct offsets where a DisplayText scope changes."""
    points = {0, length}
    points.update(offset for offset in para_offsets if 0 <= offset <= length)
    points.update(offset for offset in char_offsets if 0 <= offset <= length)
    return sorted(points)


def find_char_props(
    char_props: Sequence[LegacyCharProperties], position: int
) -> Optional[LegacyCharProperties]:
    current = None
    for candidate in char_props:
        if candidate.offset <= position:
            current = candidate
        else:
            break
    return current
