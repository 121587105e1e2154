"""End-to-end tests: CSS text in, Android resource XML out."""

from lxml import etree

from css2android import convert, convert_css_to_colors_xml, convert_css_to_styles_xml
from css2android.translator.generator import AndroidStyle, build_colors, build_styles
from css2android.translator.property_rules import Item


def _styles(xml: str):
    """Return {style name: [(item name, text), ...]} for uncommented items."""
    root = etree.fromstring(xml.encode("utf-8"))
    out = {}
    for style in root.findall("style"):
        out[style.get("name")] = [(i.get("name"), i.text) for i in style.findall("item")]
    return out


def _comments(xml: str):
    root = etree.fromstring(xml.encode("utf-8"))
    return [c.text for c in root.iter() if not isinstance(c.tag, str)]


# ---------------------------------------------------------------------------
# Styles
# ---------------------------------------------------------------------------


class TestBuildStyles:
    def test_title_example(self):
        styles = build_styles(".title { color: #ff0000; font-size: 1rem; }")
        assert styles == [
            AndroidStyle(
                name="title",
                items=[
                    Item("android:textColor", "#FF0000"),
                    Item("android:textSize", "12sp"),
                ],
            )
        ]

    def test_selector_group_shares_declarations(self):
        styles = build_styles("h1, .headline { font-weight: bold; }")
        assert [s.name for s in styles] == ["H1", "headline"]
        assert styles[0].items == styles[1].items == [Item("android:textStyle", "bold")]

    def test_styles_follow_encounter_order(self):
        styles = build_styles(".b { color: red; } .a { color: red; } p { color: red; }")
        assert [s.name for s in styles] == ["b", "a", "P"]

    def test_items_follow_declaration_order(self):
        css = ".x { width: 50%; color: #000; padding: 1px; font-family: serif; }"
        names = [i.name for i in build_styles(css)[0].items]
        assert names == [
            "android:layout_width",
            "android:layout_weight",
            "android:textColor",
            "android:paddingTop",
            "android:paddingRight",
            "android:paddingBottom",
            "android:paddingLeft",
            "android:fontFamily",
        ]

    def test_last_write_wins_keeps_first_position(self):
        styles = build_styles(".a { color: red; font-weight: bold; color: blue; }")
        assert styles[0].items == [
            Item("android:textColor", "BLUE"),
            Item("android:textStyle", "bold"),
        ]

    def test_repeated_selector_merges(self):
        styles = build_styles(".a { color: red; } .a { font-weight: bold; }")
        assert len(styles) == 1
        assert [i.name for i in styles[0].items] == ["android:textColor", "android:textStyle"]

    def test_unknown_property_does_not_affect_siblings(self):
        styles = build_styles(".a { cursor: pointer; color: #abc; }")
        assert styles[0].items == [Item("android:textColor", "#ABC")]

    def test_custom_properties_never_become_items(self):
        styles = build_styles(".a { --gap: 4px; padding-top: var(--gap); }")
        assert styles[0].items == [Item("android:paddingTop", "4sp")]


class TestRejectedSelectors:
    def test_pseudo_attribute_and_combinator(self, capsys):
        css = """
        .btn:hover { color: red; }
        input[disabled] { color: gray; }
        .card .title { color: blue; }
        .ok { color: green; }
        """
        styles = build_styles(css)
        assert [s.name for s in styles] == ["ok"]
        out = capsys.readouterr().out
        assert ".btn:hover" in out
        assert "input[disabled]" in out
        assert ".card .title" in out

    def test_root_with_only_custom_properties_is_silent(self, capsys):
        styles = build_styles(":root { --brand: #112233; }")
        assert styles == []
        assert capsys.readouterr().out == ""

    def test_root_with_regular_declarations_warns(self, capsys):
        styles = build_styles(":root { --brand: #112233; color: red; }")
        assert styles == []
        assert ":root" in capsys.readouterr().out


class TestVariables:
    def test_defined_before_use(self):
        css = ":root { --brand: #112233; }\n.btn { background-color: var(--brand); }"
        assert build_styles(css)[0].items == [Item("android:background", "#112233")]

    def test_top_level_definition(self):
        css = "--brand: #112233;\n.btn { background-color: var(--brand); }"
        assert build_styles(css)[0].items == [Item("android:background", "#112233")]

    def test_forward_reference_unresolved(self):
        css = ".btn { background-color: var(--brand); }\n:root { --brand: #112233; }"
        assert build_styles(css)[0].items == [Item("android:background", "var(brand)", True)]

    def test_nested_references(self):
        css = ":root { --blue: #0000ff; --primary: var(--blue); }\n.a { color: var(--primary); }"
        assert build_styles(css)[0].items == [Item("android:textColor", "#0000FF")]

    def test_redefinition_applies_to_later_rules_only(self):
        css = """
        :root { --size: 10px; }
        .a { font-size: var(--size); }
        :root { --size: 20px; }
        .b { font-size: var(--size); }
        """
        styles = build_styles(css)
        assert styles[0].items == [Item("android:textSize", "10sp")]
        assert styles[1].items == [Item("android:textSize", "20sp")]


class TestUnsupportedValues:
    def test_auto_calc_inherit_skipped(self, capsys):
        css = ".a { width: auto; margin: 0 auto; font-size: calc(1rem + 2px); color: inherit; font-weight: bold; }"
        styles = build_styles(css)
        assert styles[0].items == [Item("android:textStyle", "bold")]
        assert capsys.readouterr().out.count("Unsupported value skipped") == 4

    def test_variable_resolving_to_auto_skipped(self):
        css = ":root { --w: auto; } .a { width: var(--w); }"
        assert build_styles(css)[0].items == []

    def test_important_stripped(self):
        styles = build_styles(".a { font-size: 16px !important; }")
        assert styles[0].items == [Item("android:textSize", "16sp")]


# ---------------------------------------------------------------------------
# XML output
# ---------------------------------------------------------------------------


class TestStylesXml:
    def test_document_shape(self):
        xml = convert_css_to_styles_xml(".title { color: #ff0000; font-size: 1rem; }")
        assert xml.startswith("<resources>")
        assert not xml.startswith("<?xml")
        assert _styles(xml) == {
            "title": [("android:textColor", "#FF0000"), ("android:textSize", "12sp")]
        }

    def test_exact_layout(self):
        xml = convert_css_to_styles_xml(".a { color: red; }")
        assert xml == (
            "<resources>\n"
            "\t<style name=\"a\">\n"
            "\t\t<item name=\"android:textColor\">RED</item>\n"
            "\t</style>\n"
            "</resources>"
        )

    def test_empty_input(self):
        assert convert_css_to_styles_xml("") == "<resources>\n</resources>"

    def test_non_css_input(self):
        xml = convert_css_to_styles_xml("this is not css at all }{ ;;")
        assert xml.startswith("<resources>")
        etree.fromstring(xml.encode("utf-8"))

    def test_unresolved_reference_comment_wrapped(self):
        xml = convert_css_to_styles_xml(".btn { background-color: var(--brand); }\n:root { --brand: #112233; }")
        assert _styles(xml) == {"btn": []}
        comments = _comments(xml)
        assert len(comments) == 1
        assert 'name="android:background"' in comments[0]
        assert "var(brand)" in comments[0]
        assert "--" not in comments[0]

    def test_special_characters_escaped(self):
        xml = convert_css_to_styles_xml('.a { font-family: "A&B", serif; }')
        assert _styles(xml) == {"a": [("android:fontFamily", '"A&B", serif')]}
        assert "&amp;" in xml


class TestColorsXml:
    def test_build_colors(self):
        css = ":root { --brand-primary: #11aa33; --ink: var(--brand-primary); }"
        assert build_colors(css) == {"brand_primary": "#11AA33", "ink": "#11AA33"}

    def test_last_value_wins(self):
        assert build_colors(":root { --a: #111; --a: #222; }") == {"a": "#222"}

    def test_document_shape(self):
        xml = convert_css_to_colors_xml(":root { --brand: #112233; }\n.a { color: red; }")
        assert xml.startswith('<?xml version="1.0" encoding="utf-8"?>\n<resources>')
        root = etree.fromstring(xml.encode("utf-8"))
        assert [(c.get("name"), c.text) for c in root.findall("color")] == [("brand", "#112233")]

    def test_unresolved_color_comment_wrapped(self):
        xml = convert_css_to_colors_xml(":root { --ink: var(--later); --later: #000; }")
        root = etree.fromstring(xml.encode("utf-8"))
        assert [c.get("name") for c in root.findall("color")] == ["later"]
        assert any("var(later)" in c for c in _comments(xml))

    def test_empty_input(self):
        assert convert_css_to_colors_xml("") == '<?xml version="1.0" encoding="utf-8"?>\n<resources>\n</resources>'


class TestConvert:
    def test_mode_dispatch(self):
        css = ":root { --brand: #112233; } .a { color: var(--brand); }"
        assert convert(css) == convert_css_to_styles_xml(css)
        assert convert(css, mode="colors") == convert_css_to_colors_xml(css)


# ---------------------------------------------------------------------------
# Input that is legal CSS but not legal XML
# ---------------------------------------------------------------------------


class TestControlCharacters:
    def test_styles_value_with_control_character(self):
        xml = convert_css_to_styles_xml(".a { font-family: a\x0bb; }")
        assert _styles(xml) == {"a": [("android:fontFamily", "ab")]}

    def test_colors_value_with_control_character(self):
        xml = convert_css_to_colors_xml(":root { --c: a\x02b; }")
        root = etree.fromstring(xml.encode("utf-8"))
        assert [(c.get("name"), c.text) for c in root.findall("color")] == [("c", "AB")]

    def test_every_c0_control_character(self):
        controls = "".join(chr(c) for c in range(0x01, 0x20) if chr(c) not in "\t\n\r\x0c")
        css = ".a { color: #a%sb; }\n:root { --c: #c%sd; }" % (controls, controls)
        etree.fromstring(convert_css_to_styles_xml(css).encode("utf-8"))
        etree.fromstring(convert_css_to_colors_xml(css).encode("utf-8"))


class TestVariableSyntax:
    def test_whitespace_inside_var(self):
        styles = build_styles(":root { --b: #111; } .a { color: var( --b ); }")
        assert styles[0].items == [Item("android:textColor", "#111")]

    def test_fallback_ignored_when_name_defined(self):
        styles = build_styles(":root { --b: #111; } .a { color: var(--b, red); }")
        assert styles[0].items == [Item("android:textColor", "#111")]

    def test_fallback_with_missing_name_stays_unresolved(self):
        styles = build_styles(".a { color: var(--nope, red); }")
        assert styles[0].items == [Item("android:textColor", "var(nope, red)", True)]


class TestUnknownPropertiesAreSilent:
    def test_unsupported_value_on_unknown_property(self, capsys):
        styles = build_styles(".a { cursor: auto; height: calc(1px + 2px); color: red; }")
        assert styles[0].items == [Item("android:textColor", "RED")]
        assert capsys.readouterr().out == ""
