"""Decoding of Rust string literals as they appear in attribute values."""

from __future__ import annotations

import re

_SIMPLE_ESCAPES: dict[str, str] = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    "0": "\0",
    "'": "'",
    '"': '"',
}

_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F_]{1,8}\}|x[0-7][0-9a-fA-F]|\n[ \t\r\n]*|.)", re.DOTALL)

_RAW_RE = re.compile(r'^r(#*)"(.*)"\1$', re.DOTALL)


def _unescape(match: re.Match[str]) -> str:
    escape = match.group(1)
    if escape[0] == "u":
        return chr(int(escape[2:-1].replace("_", ""), 16))
    if escape[0] == "x":
        return chr(int(escape[1:], 16))
    if escape[0] == "\n":
        # Line continuation: the newline and leading whitespace are dropped.
        return ""
    if escape in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[escape]
    raise ValueError(f"Unknown escape sequence: \\{escape}")


def decode_string_literal(text: str) -> str | None:
    """
    Decode a Rust string literal (`"a\\tb"`, `r"..."`, `r#"..."#`) to its value.

    Returns `None` for anything that is not a (non-byte) string literal, such
    as integers, byte strings, or C strings.
    """
    raw = _RAW_RE.match(text)
    if raw:
        return raw.group(2)
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        return _ESCAPE_RE.sub(_unescape, text[1:-1])
    return None
