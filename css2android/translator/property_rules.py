# css2android/translator/property_rules.py
from typing import Callable, Dict, List, NamedTuple, Optional

from ..utils import has_unresolved_var, split_tokens, strip_var_marker

ROOT_FONT_SIZE = 12   # rem の基準
BASE_FONT_SIZE = 16   # em の基準

TEXT_DECORATIONS = {
    "underline": "Underline",
    "line-through": "LineThrough",
}

SIDES = ("top", "right", "bottom", "left")

IMPORTANT_SUFFIX = " !important"


class Item(NamedTuple):
    """<item name="android:textColor">#FF0000</item> 1 個分"""
    name: str
    value: str
    unresolved: bool = False

    def __str__(self):
        return f"{self.name}={self.value}"


# --- helpers -------------------------------------------------

def sanitize_value(value: str) -> str:
    if not value:
        return value
    return value.replace(IMPORTANT_SUFFIX, "").strip()


def convert_units(value) -> Optional[int]:
    """
    '12px' -> 12（切り捨て） / '1rem' -> 12 / '1em' -> 16 / '8' -> 8 / 'auto' -> 0
    dp, sp は px と同じ扱い。変換できないもの（'%' など）は None。
    """
    if not isinstance(value, str):
        return None
    s = value.strip().lower()
    if s == "auto":
        return 0
    try:
        if s.endswith("rem"):
            return round(float(s[:-3]) * ROOT_FONT_SIZE)
        if s.endswith("em"):
            return round(float(s[:-2]) * BASE_FONT_SIZE)
        for suf in ("px", "dp", "sp"):
            if s.endswith(suf):
                return int(float(s[:-len(suf)]))
        return int(float(s))
    except (ValueError, OverflowError):
        return None


def expand_box_shorthand(value: str) -> Optional[List[str]]:
    """
    padding / margin の短縮形を [top, right, bottom, left] に展開する。
      1 個: 全辺 / 2 個: 上下, 左右 / 3 個: 上, 左右, 下 / 4 個: そのまま
    """
    tokens = split_tokens(value)
    if len(tokens) == 1:
        return tokens * 4
    if len(tokens) == 2:
        return [tokens[0], tokens[1], tokens[0], tokens[1]]
    if len(tokens) == 3:
        return [tokens[0], tokens[1], tokens[2], tokens[1]]
    if len(tokens) == 4:
        return tokens
    return None


def _item(attr: str, value: str) -> Item:
    if has_unresolved_var(value):
        return Item(f"android:{attr}", strip_var_marker(value), True)
    return Item(f"android:{attr}", value)


def _dimension(token: str, suffix: str) -> Optional[str]:
    # 未解決の var() は変換せずにそのまま出す（コメント化される）
    if has_unresolved_var(token):
        return token
    n = convert_units(token)
    if n is None:
        return None
    return f"{n}{suffix}"


def _weight(percent: str) -> Optional[str]:
    """ '50%' -> '.50' / '5%' -> '.05' / '100%' -> '1.00' """
    try:
        n = round(float(percent[:-1]))
    except (ValueError, OverflowError):
        return None
    return f"{n / 100:.2f}".lstrip("0") or "0"


def _unsupported(prop: str, value: str) -> List[Item]:
    print(f"[WARN] Unsupported value for '{prop}': {value}")
    return []


# --- per-property rules ---------------------------------------

def _color(prop, value):
    if has_unresolved_var(value):
        return [_item("textColor", value)]
    return [_item("textColor", value.upper())]


def _font_size(prop, value):
    size = _dimension(value, "sp")
    if size is None:
        return _unsupported(prop, value)
    return [_item("textSize", size)]


def _passthrough(attr: str):
    def rule(prop, value):
        return [_item(attr, value)]
    return rule


def _text_decoration(prop, value):
    if has_unresolved_var(value):
        return [_item("textDecoration", value)]
    mapped = TEXT_DECORATIONS.get(value.strip().lower())
    if mapped is None:
        return []
    return [_item("textDecoration", mapped)]


def _box_attr(prop: str, side: str) -> str:
    # padding -> paddingTop / margin -> layout_marginTop
    if prop == "margin":
        return f"layout_margin{side.capitalize()}"
    return f"padding{side.capitalize()}"


def _box_shorthand(prop, value):
    sides = expand_box_shorthand(value)
    if sides is None:
        return _unsupported(prop, value)
    items = []
    for side, token in zip(SIDES, sides):
        size = _dimension(token, "sp")
        if size is None:
            return _unsupported(prop, value)
        items.append(_item(_box_attr(prop, side), size))
    return items


def _box_side(box: str, side: str):
    def rule(prop, value):
        size = _dimension(value, "sp")
        if size is None:
            return _unsupported(prop, value)
        return [_item(_box_attr(box, side), size)]
    return rule


def _width(prop, value):
    if has_unresolved_var(value):
        return [_item("layout_width", value)]
    if value.endswith("%"):
        weight = _weight(value)
        if weight is None:
            return _unsupported(prop, value)
        return [_item("layout_width", "0dp"), _item("layout_weight", weight)]
    size = _dimension(value, "dp")
    if size is None:
        return _unsupported(prop, value)
    return [_item("layout_width", size)]


RULES: Dict[str, Callable[[str, str], List[Item]]] = {
    "color": _color,
    "font-size": _font_size,
    "font-weight": _passthrough("textStyle"),
    "font-family": _passthrough("fontFamily"),
    "background-color": _passthrough("background"),
    "text-decoration": _text_decoration,
    "padding": _box_shorthand,
    "margin": _box_shorthand,
    "width": _width,
}
for _box in ("padding", "margin"):
    for _side in SIDES:
        RULES[f"{_box}-{_side}"] = _box_side(_box, _side)


# --- main ----------------------------------------------------

def translate(prop: str, value: str) -> List[Item]:
    """
    解決済みの CSS 宣言 1 個を Android の <item> 0 個以上に変換する。
    表に無いプロパティは何も出さない（エラーにもしない）。
    """
    prop = (prop or "").strip().lower()
    rule = RULES.get(prop)
    if rule is None:
        return []
    value = sanitize_value(value)
    if not value:
        return []
    return rule(prop, value)
