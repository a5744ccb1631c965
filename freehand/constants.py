from __future__ import annotations

FH_EPSILON = 1e-6
CUBIC_BBOX_SAMPLES = 101
MAX_RENDER_DEPTH = 64
MIN_SUBDOCUMENT_CONTENT = 40
LAYER_VISIBLE = 3
POINTS_PER_INCH = 72.0

# VMpObj properties
FH_NAME = 0x0321
FH_UID = 0x065B
FH_PARA_TEXT_ALIGN = 0x15E3
FH_PARA_TEXT_INDENT = 0x1604
FH_PARA_LINE_TOGETHER = 0x160B
FH_PARA_LEFT_INDENT = 0x1614
FH_SPC_LETTER_MAX = 0x161C
FH_SPC_WORD_MAX = 0x1624
FH_SPC_LETTER_MIN = 0x1634
FH_SPC_WORD_MIN = 0x163C
FH_SPC_LETTER_OPT = 0x164C
FH_SPC_WORD_OPT = 0x1654
FH_PARA_RIGHT_INDENT = 0x1664
FH_PARA_SPC_BELLOW = 0x1684
FH_PARA_SPC_ABOVE = 0x168C
FH_PARA_TAB_TABLE_ID = 0x1691
FH_BASELN_SHIFT = 0x169C
FH_PARA_KEEP_SAME_LINE = 0x16A2
FH_TEFFECT_ID = 0x16B1
FH_TXT_COLOR_ID = 0x16B9
FH_FONT_ID = 0x16C1
FH_HOR_SCALE = 0x16D4
FH_PARA_LEADING = 0x16DC
FH_PARA_LEADING_TYPE = 0x16E3
FH_RNG_KERN = 0x16EC
FH_FONT_SIZE = 0x1734
FH_FONT_NAME = 0x1739
FH_NEXT_STYLE = 0x1749
FH_PAGE_START_X = 0x1C24
FH_PAGE_START_Y = 0x1C2C
FH_PAGE_START_X2 = 0x1C7C
FH_PAGE_START_Y2 = 0x1C84
FH_PAGE_WIDTH = 0x1C34
FH_PAGE_HEIGHT = 0x1C3C

# AGDFont properties
FH_AGD_FONT_NAME = 0x0E11
FH_AGD_STYLE = 0x0E1B
FH_AGD_SIZE = 0x0E24

# TextObject properties
FH_DISPLAY_BORDER = 0x1302
FH_INSET_BOTTOM = 0x130C
FH_DIMENSION_HEIGHT = 0x131C
FH_ROWBREAK_FIRST = 0x132A
FH_COL_SEPARATOR = 0x1344
FH_DIMENSION_LEFT = 0x134C
FH_INSET_LEFT = 0x1354
FH_LINETABLE_ID = 0x1369
FH_COL_NUM = 0x137B
FH_ROW_NUM = 0x1383
FH_INSET_RIGHT = 0x13AC
FH_ROW_SEPARATOR = 0x13BC
FH_TEXT_PATH_ID = 0x13D1
FH_DIMENSION_TOP = 0x13DC
FH_INSET_TOP = 0x13E4
FH_TEXT_END_POS = 0x13FB
FH_TEXT_BEGIN_POS = 0x1403
FH_DIMENSION_WIDTH = 0x140C

# TEffect properties
FH_EFFECT_NAME = 0x1A91
FH_UNDERLINE_COLOR_ID = 0x1AB9
FH_UNDERLINE_DASH_ID = 0x1AC1
FH_UNDERLINE_POSITION = 0x1ACC
FH_STROKE_WIDTH = 0x1AD4

# LensFill modes
FH_LENSFILL_MODE_TRANSPARENCY = 0
FH_LENSFILL_MODE_MAGNIFY = 1
FH_LENSFILL_MODE_LIGHTEN = 2
FH_LENSFILL_MODE_DARKEN = 3
FH_LENSFILL_MODE_INVERT = 4
FH_LENSFILL_MODE_MONOCHROME = 5
