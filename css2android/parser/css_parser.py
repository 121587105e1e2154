# css2android/parser/css_parser.py
from typing import List, NamedTuple

import tinycss2

from ..utils import strip_xml_illegal


class Declaration(NamedTuple):
    property: str
    value: str


class Rule(NamedTuple):
    selectors: List[str]
    declarations: List[Declaration]


# ---------- 公開API ----------
def parse_stylesheet(text) -> List[Rule]:
    """
    CSS テキストを Rule のリストに変換する（ソース順を保持）。
    壊れた断片は捨てるだけで例外は投げない。

    - `.a, div { ... }`  -> Rule(selectors=[".a", "div"], ...)
    - ルール外の `--brand: #112233;` -> Rule(selectors=[], ...)
    - @media / @keyframes などの at-rule は警告を出してスキップ
    """
    if text is None:
        return []
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="ignore")

    rules: List[Rule] = []
    pending = []
    for token in tinycss2.parse_component_value_list(text, skip_comments=True):
        if token.type == "{} block":
            rules.extend(_close_block(pending, token))
            pending = []
        elif token.type == "literal" and token.value == ";":
            rule = _close_statement(pending)
            if rule is not None:
                rules.append(rule)
            pending = []
        elif token.type == "error":
            # 対応しない '}' や壊れた文字列: その文ごと捨てる
            pending = []
        else:
            pending.append(token)

    # 終端 ';' の無い末尾
    rule = _close_statement(pending)
    if rule is not None:
        rules.append(rule)
    return rules


# ---------- 内部ヘルパ ----------

def _strip_whitespace(tokens):
    tokens = list(tokens)
    while tokens and tokens[0].type in ("whitespace", "comment"):
        tokens.pop(0)
    while tokens and tokens[-1].type in ("whitespace", "comment"):
        tokens.pop()
    return tokens


def _split_stray_custom_properties(prelude):
    """
    `--x: 4px` の後に ';' が無いまま改行して `.a {` が続くと、宣言がセレクタ側に
    混ざる。行頭の `--name` から最初の改行までを宣言として切り出す。
    """
    stray = []
    while prelude and prelude[0].type == "ident" and prelude[0].value.startswith("--"):
        cut = next(
            (i for i, t in enumerate(prelude) if t.type == "whitespace" and "\n" in t.value),
            None,
        )
        if cut is None:
            break
        stray.append(prelude[:cut])
        prelude = _strip_whitespace(prelude[cut:])
    return stray, prelude


def _close_block(prelude_tokens, block) -> List[Rule]:
    prelude = _strip_whitespace(prelude_tokens)
    if not prelude:
        return []
    if prelude[0].type == "at-keyword":
        print(f"[WARN] Skipping unsupported at-rule: @{prelude[0].value}")
        return []

    rules: List[Rule] = []
    stray, prelude = _split_stray_custom_properties(prelude)
    for tokens in stray:
        rule = _close_statement(tokens)
        if rule is not None:
            rules.append(rule)

    selectors = [strip_xml_illegal(s).strip() for s in tinycss2.serialize(prelude).split(",")]
    selectors = [s for s in selectors if s]
    if selectors:
        rules.append(Rule(selectors=selectors, declarations=_parse_declarations(block.content)))
    return rules


def _close_statement(tokens):
    """ブロックを持たない文。@import などは捨て、宣言ならセレクタ無し Rule にする。"""
    tokens = _strip_whitespace(tokens)
    if not tokens:
        return None
    if tokens[0].type == "at-keyword":
        print(f"[WARN] Skipping unsupported at-rule: @{tokens[0].value}")
        return None

    node = tinycss2.parse_one_declaration(tokens, skip_comments=True)
    decl = _to_declaration(node)
    if decl is None:
        return None
    return Rule(selectors=[], declarations=[decl])


def _parse_declarations(content) -> List[Declaration]:
    declarations: List[Declaration] = []
    for node in tinycss2.parse_declaration_list(content, skip_comments=True, skip_whitespace=True):
        decl = _to_declaration(node)
        if decl is not None:
            declarations.append(decl)
    return declarations


def _to_declaration(node):
    if node.type != "declaration":
        return None
    # カスタムプロパティ名は大文字小文字を区別する
    name = node.name if node.name.startswith("--") else node.lower_name
    # XML に書けない制御文字はここで落とす
    name = strip_xml_illegal(name)
    value = strip_xml_illegal(tinycss2.serialize(node.value)).strip()
    if not name or not value:
        return None
    if node.important:
        value += " !important"
    return Declaration(property=name, value=value)
