"""Quoting and escaping of text as JSON string literals."""

from __future__ import annotations

import re

__all__ = ["escape_string", "escape_string_html"]

_HEX = "0123456789abcdef"


def _unicode_escape(code: int) -> str:
    return "\\u00" + _HEX[code >> 4] + _HEX[code & 0xF]


def _build_safe_table() -> dict[int, str]:
    table = {code: _unicode_escape(code) for code in range(0x20)}
    table.update(
        {
            ord('"'): '\\"',
            ord("\\"): "\\\\",
            ord("\n"): "\\n",
            ord("\r"): "\\r",
            ord("\t"): "\\t",
        }
    )
    return table


def _build_html_table(safe: dict[int, str]) -> dict[int, str]:
    table = dict(safe)
    for char in "<>&":
        table[ord(char)] = _unicode_escape(ord(char))
    # LINE SEPARATOR and PARAGRAPH SEPARATOR break JSONP evaluated as script.
    table[0x2028] = "\\u2028"
    table[0x2029] = "\\u2029"
    return table


_SAFE_TABLE = _build_safe_table()
_HTML_TABLE = _build_html_table(_SAFE_TABLE)
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def escape_string(s: str) -> str:
    """Return ``s`` as a quoted JSON string.

    Control characters, the double quote and the backslash are escaped;
    everything else, including non-ASCII text, is written as it is.
    """
    return '"' + s.translate(_SAFE_TABLE) + '"'


def escape_string_html(s: str) -> str:
    """Return ``s`` as a quoted JSON string that is safe inside HTML.

    In addition to :func:`escape_string`, ``<``, ``>`` and ``&`` are escaped,
    as are U+2028 and U+2029; text that is not valid Unicode becomes U+FFFD.
    """
    escaped = s.translate(_HTML_TABLE)
    escaped = _LONE_SURROGATE.sub(lambda _match: "\\ufffd", escaped)
    return '"' + escaped + '"'