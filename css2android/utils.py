# css2android/utils.py
import re

_VAR_MARKER_RE = re.compile(r'var\(\s*--')


def to_resource_name(name: str) -> str:
    """
    Android のリソース名にはハイフンが使えないため '_' に置換する。
    例: btn-primary -> btn_primary
    """
    if not name:
        return name
    return name.replace("-", "_")


def capitalize_first(s: str) -> str:
    # div -> Div（残りはそのまま）
    if not s:
        return s
    return s[:1].upper() + s[1:]


def has_unresolved_var(value: str) -> bool:
    return bool(value) and _VAR_MARKER_RE.search(value) is not None


def strip_var_marker(value: str) -> str:
    """var(--brand) -> var(brand)  コメント内に '--' を残さないため"""
    if not value:
        return value
    return _VAR_MARKER_RE.sub("var(", value)


def escape_xml_comment(text: str) -> str:
    """
    XML コメント本文として安全な文字列にする。
    - '--' は禁止なので潰す
    - 末尾の '-' も禁止なので空白を足す
    """
    if text is None:
        return ""
    while "--" in text:
        text = text.replace("--", "-")
    if text.endswith("-"):
        text += " "
    return text


# XML 1.0 で使える文字だけを残す（制御文字・サロゲート・U+FFFE/FFFF は不可）
def _is_xml_char(ch: str) -> bool:
    c = ord(ch)
    return (
        c in (0x9, 0xA, 0xD)
        or 0x20 <= c <= 0xD7FF
        or 0xE000 <= c <= 0xFFFD
        or 0x10000 <= c <= 0x10FFFF
    )


def strip_xml_illegal(s: str) -> str:
    if not s:
        return s
    return "".join(ch for ch in s if _is_xml_char(ch))


def split_tokens(value: str) -> list:
    """
    空白区切りでトークンに分ける。ただし括弧の中の空白では分けない。
    例: 'var( --a ) 8px' -> ['var( --a )', '8px']
    """
    tokens = []
    buf = []
    depth = 0
    for ch in value or "":
        if ch == "(":
            depth += 1
        elif ch == ")" and depth > 0:
            depth -= 1
        if ch.isspace() and depth == 0:
            if buf:
                tokens.append("".join(buf))
                buf = []
            continue
        buf.append(ch)
    if buf:
        tokens.append("".join(buf))
    return tokens
