# css2android/parser/variable_resolver.py
import re
from typing import Dict, FrozenSet

from ..utils import split_tokens

# --name -> 値（未解決の var() を含んでいてもよい）
CustomPropertyTable = Dict[str, str]

CUSTOM_PROPERTY_MARKER = "--"
# var(--name) / var( --name ) / var(--name, fallback)  fallback は使わない
_VAR_RE = re.compile(r'var\(\s*--([\w-]+)\s*(?:,(?:[^()]|\([^()]*\))*)?\)')
_UNSUPPORTED_KEYWORDS = ("auto", "inherit")


def is_custom_property(name) -> bool:
    return isinstance(name, str) and name.startswith(CUSTOM_PROPERTY_MARKER)


def is_unsupported_value(value) -> bool:
    """auto / inherit / calc(...) は Android 側に対応物が無いので翻訳しない"""
    if not isinstance(value, str):
        return False
    for token in split_tokens(value):
        t = token.lower()
        if t in _UNSUPPORTED_KEYWORDS or "calc(" in t:
            return True
    return False


def resolve(table: CustomPropertyTable, raw_value: str) -> str:
    """
    値の中の var(--name) をテーブルの値で置き換える。
    値は空白区切りのトークン列として 1 トークンずつ処理し、置き換えた結果に
    さらに var() があれば再帰的に解決する。
    - テーブルに無い名前はそのまま残す（前方参照も未解決になる）
    - 循環参照は、展開中の名前に戻った時点の var() トークンを残して止める
    """
    return _resolve(table, raw_value, frozenset())


def _resolve(table: CustomPropertyTable, value: str, seen: FrozenSet[str]) -> str:
    if not isinstance(value, str) or "var(" not in value:
        return value
    return " ".join(_resolve_token(table, token, seen) for token in split_tokens(value))


def _resolve_token(table: CustomPropertyTable, token: str, seen: FrozenSet[str]) -> str:
    def _sub(m):
        name = m.group(1)
        if name in seen or name not in table:
            return m.group(0)
        return _resolve(table, table[name], seen | {name})

    return _VAR_RE.sub(_sub, token)


class VariableResolver:
    """
    1 回の変換の間だけ使うカスタムプロパティ表。
    ソース順に define() し、resolve() はその時点の表だけを見る。
    """

    def __init__(self):
        self.table: CustomPropertyTable = {}

    def define(self, prop, value):
        """ --brand: #112233 -> table["brand"] = "#112233"（後勝ち） """
        if not is_custom_property(prop):
            return False
        name = prop[len(CUSTOM_PROPERTY_MARKER):]
        if not name:
            return False
        self.table[name] = value
        return True

    def resolve(self, value):
        return resolve(self.table, value)
