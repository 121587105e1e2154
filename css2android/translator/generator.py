# css2android/translator/generator.py
from typing import Dict, List, NamedTuple

from lxml import etree

from ..parser.css_parser import parse_stylesheet
from ..parser.variable_resolver import VariableResolver, is_custom_property, is_unsupported_value
from .property_rules import RULES, Item, sanitize_value, translate
from .selector_rules import classify_selector, style_name_for_selector
from ..utils import escape_xml_comment, has_unresolved_var, strip_var_marker, to_resource_name

XML_HEADER = '<?xml version="1.0" encoding="utf-8"?>\n'


class AndroidStyle(NamedTuple):
    name: str
    items: List[Item]


# =============================================================
# CSS -> styles
# =============================================================

def _style_names(rule) -> List[str]:
    names: List[str] = []
    has_regular = any(not is_custom_property(d.property) for d in rule.declarations)
    for sel in rule.selectors:
        kind, _ = classify_selector(sel)
        if kind == "root":
            # :root はカスタムプロパティの置き場としてだけ扱う
            if has_regular:
                print(f"[WARN] Unsupported selector skipped: {sel}")
            continue
        name = style_name_for_selector(sel)
        if name is None:
            print(f"[WARN] Unsupported selector skipped: {sel}")
            continue
        if name not in names:
            names.append(name)
    return names


def build_styles(css_text) -> List[AndroidStyle]:
    """
    CSS を 1 パスで走査し、セレクタごとの AndroidStyle を出現順に返す。
    var() はその宣言の時点までに定義されたカスタムプロパティだけで解決する。
    """
    resolver = VariableResolver()
    # style 名 -> {property: 解決済みの値}（同じプロパティは後勝ち、位置は最初のまま）
    collected: Dict[str, Dict[str, str]] = {}

    for rule in parse_stylesheet(css_text):
        names = _style_names(rule)
        for name in names:
            collected.setdefault(name, {})

        for decl in rule.declarations:
            if is_custom_property(decl.property):
                resolver.define(decl.property, decl.value)
                continue
            if not names:
                continue
            # 表に無いプロパティは診断も出さずに捨てる
            if decl.property not in RULES:
                continue
            value = resolver.resolve(sanitize_value(decl.value))
            if is_unsupported_value(value):
                print(f"[WARN] Unsupported value skipped: {decl.property}: {value}")
                continue
            for name in names:
                collected[name][decl.property] = value

    styles: List[AndroidStyle] = []
    for name, props in collected.items():
        items: List[Item] = []
        for prop, value in props.items():
            items.extend(translate(prop, value))
        styles.append(AndroidStyle(name=name, items=items))
    return styles


# =============================================================
# CSS custom properties -> colors
# =============================================================

def build_colors(css_text) -> Dict[str, str]:
    """
    カスタムプロパティを {color 名: 値} にする。
    値は定義された時点の表で解決して大文字化（未解決の var() はそのまま）。
    """
    resolver = VariableResolver()
    colors: Dict[str, str] = {}
    for rule in parse_stylesheet(css_text):
        for decl in rule.declarations:
            if not resolver.define(decl.property, decl.value):
                continue
            value = resolver.resolve(sanitize_value(decl.value))
            if not has_unresolved_var(value):
                value = value.upper()
            colors[to_resource_name(decl.property[2:])] = value
    return colors


# =============================================================
# XML helpers
# =============================================================

def _append_entry(parent, tag: str, name: str, value: str, commented: bool = False):
    el = etree.Element(tag, name=name)
    el.text = value
    if not commented:
        parent.append(el)
        return
    # 未解決の参照は手動対応用にコメントで残す
    text = etree.tostring(el, encoding="unicode")
    parent.append(etree.Comment(" " + escape_xml_comment(text) + " "))


def _serialize(root) -> str:
    etree.indent(root, space="\t")
    if len(root) == 0:
        root.text = "\n"
    return etree.tostring(root, encoding="unicode")


def render_styles_xml(styles: List[AndroidStyle]) -> str:
    root = etree.Element("resources")
    for style in styles:
        style_el = etree.SubElement(root, "style", name=style.name)
        for item in style.items:
            _append_entry(style_el, "item", item.name, item.value, item.unresolved)
    return _serialize(root)


def render_colors_xml(colors: Dict[str, str]) -> str:
    root = etree.Element("resources")
    for name, value in colors.items():
        commented = has_unresolved_var(value)
        _append_entry(root, "color", name, strip_var_marker(value), commented)
    return XML_HEADER + _serialize(root)


# =============================================================
# Public entry points
# =============================================================

def convert_css_to_styles_xml(css_text) -> str:
    return render_styles_xml(build_styles(css_text))


def convert_css_to_colors_xml(css_text) -> str:
    return render_colors_xml(build_colors(css_text))


def convert(css_text, mode: str = "styles") -> str:
    if mode == "colors":
        return convert_css_to_colors_xml(css_text)
    return convert_css_to_styles_xml(css_text)
