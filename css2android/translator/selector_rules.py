# css2android/translator/selector_rules.py
import re
from typing import Optional, Tuple

from ..utils import to_resource_name, capitalize_first

ROOT_SELECTOR = ":root"

# .title / .btn-primary
_CLASS_RE = re.compile(r'^\.(-?[_a-zA-Z][_a-zA-Z0-9-]*)$')
# div / h1 / my-element
_TAG_RE = re.compile(r'^([a-zA-Z][a-zA-Z0-9-]*)$')


def classify_selector(selector: str) -> Tuple[str, str]:
    """
    セレクタを ("class" | "tag" | "root" | "unsupported", 値) に分類する。
    子孫/子セレクタ、属性セレクタ [..]、:hover などの擬似クラス、
    複合セレクタ (div.title) はすべて unsupported。
    """
    s = (selector or "").strip()
    if s == ROOT_SELECTOR:
        return "root", s
    m = _CLASS_RE.match(s)
    if m:
        return "class", m.group(1)
    m = _TAG_RE.match(s)
    if m:
        return "tag", m.group(1)
    return "unsupported", s


def style_name_for_selector(selector: str) -> Optional[str]:
    kind, value = classify_selector(selector)
    if kind == "class":
        return to_resource_name(value)
    if kind == "tag":
        return to_resource_name(capitalize_first(value))
    return None
