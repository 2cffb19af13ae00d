"""Minimal parser for arrays of flat record literals.

Understands the subset of JavaScript/TypeScript/Python literal syntax that
provider catalog declarations use::

    [
      { title: 'Popular', filter: '' },   // comment
      {"title": "Latest", "filter": "latest",},
    ]

Keys are identifiers or quoted strings. Values are strings, numbers,
booleans or null. Trailing commas and ``//``, ``/* */`` and ``#`` comments
are accepted. Anything else (nested containers, identifiers, calls,
template interpolation) is a ``LiteralParseError``.
"""

from __future__ import annotations

import re
from typing import Any

LeafValue = str | int | float | bool | None

_TRUE = frozenset({"true", "True"})
_FALSE = frozenset({"false", "False"})
_NULL = frozenset({"null", "None", "undefined"})
_HEX_RE = re.compile(r"[0-9A-Fa-f]+")

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


class LiteralParseError(ValueError):
    """Raised when the input is outside the supported literal subset."""

    def __init__(self, message: str, text: str, pos: int) -> None:
        line = text.count("\n", 0, pos) + 1
        col = pos - (text.rfind("\n", 0, pos) + 1) + 1
        super().__init__(f"{message} (line {line}, column {col})")
        self.pos = pos
        self.line = line
        self.column = col


def _is_ident_start(ch: str) -> bool:
    return ch.isalpha() or ch in "_$"


def _is_ident_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_$"


class _Parser:
    def __init__(self, text: str, pos: int) -> None:
        self.text = text
        self.pos = pos

    # --- lexical helpers -------------------------------------------------

    def error(self, message: str) -> LiteralParseError:
        return LiteralParseError(message, self.text, self.pos)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def skip_trivia(self) -> None:
        text = self.text
        while self.pos < len(text):
            ch = text[self.pos]
            if ch.isspace():
                self.pos += 1
            elif ch == "#" or text.startswith("//", self.pos):
                end = text.find("\n", self.pos)
                self.pos = len(text) if end == -1 else end + 1
            elif text.startswith("/*", self.pos):
                end = text.find("*/", self.pos + 2)
                if end == -1:
                    raise self.error("unterminated block comment")
                self.pos = end + 2
            else:
                return

    def expect(self, ch: str) -> None:
        self.skip_trivia()
        if self.peek() != ch:
            found = self.peek() or "end of input"
            raise self.error(f"expected {ch!r}, found {found!r}")
        self.pos += 1

    # --- grammar -----------------------------------------------------------

    def record_array(self) -> list[dict[str, LeafValue]]:
        self.expect("[")
        records: list[dict[str, LeafValue]] = []
        while True:
            self.skip_trivia()
            if self.peek() == "]":
                self.pos += 1
                return records
            records.append(self.record())
            self.skip_trivia()
            if self.peek() == ",":
                self.pos += 1
            elif self.peek() != "]":
                raise self.error("expected ',' or ']' after record")

    def record(self) -> dict[str, LeafValue]:
        self.expect("{")
        record: dict[str, LeafValue] = {}
        while True:
            self.skip_trivia()
            if self.peek() == "}":
                self.pos += 1
                return record
            key = self.key()
            self.expect(":")
            record[key] = self.leaf()
            self.skip_trivia()
            if self.peek() == ",":
                self.pos += 1
            elif self.peek() != "}":
                raise self.error("expected ',' or '}' after value")

    def key(self) -> str:
        self.skip_trivia()
        ch = self.peek()
        if not ch:
            raise self.error("unexpected end of input")
        if ch in ("'", '"', "`"):
            return self.string()
        if _is_ident_start(ch):
            return self.identifier()
        if ch.isdigit():
            return str(self.number())
        raise self.error("expected a record key")

    def leaf(self) -> LeafValue:
        self.skip_trivia()
        ch = self.peek()
        if not ch:
            raise self.error("unexpected end of input")
        if ch in ("'", '"', "`"):
            return self.string()
        if ch.isdigit() or ch in "-+.":
            return self.number()
        if _is_ident_start(ch):
            start = self.pos
            word = self.identifier()
            if word in _TRUE:
                return True
            if word in _FALSE:
                return False
            if word in _NULL:
                return None
            self.pos = start
            raise self.error(f"non-literal value {word!r}")
        if ch in "[{":
            raise self.error("nested values are not supported")
        raise self.error(f"unexpected {ch!r}")

    def identifier(self) -> str:
        start = self.pos
        while self.pos < len(self.text) and _is_ident_char(self.text[self.pos]):
            self.pos += 1
        return self.text[start : self.pos]

    def number(self) -> int | float:
        text = self.text
        start = self.pos
        if self.peek() in "+-":
            self.pos += 1
        while self.pos < len(text) and (
            text[self.pos].isdigit() or text[self.pos] in "._eE"
            or (text[self.pos] in "+-" and text[self.pos - 1] in "eE")
        ):
            self.pos += 1
        raw = text[start : self.pos].replace("_", "")
        try:
            if any(c in raw for c in ".eE"):
                return float(raw)
            return int(raw)
        except ValueError:
            self.pos = start
            raise self.error(f"invalid number {raw!r}") from None

    def string(self) -> str:
        text = self.text
        quote = text[self.pos]
        self.pos += 1
        out: list[str] = []
        while True:
            if self.pos >= len(text):
                raise self.error("unterminated string")
            ch = text[self.pos]
            if ch == quote:
                self.pos += 1
                return "".join(out)
            if ch == "\n" and quote != "`":
                raise self.error("newline in string")
            if quote == "`" and text.startswith("${", self.pos):
                raise self.error("template interpolation is not supported")
            if ch == "\\":
                out.append(self.escape())
                continue
            out.append(ch)
            self.pos += 1

    def escape(self) -> str:
        text = self.text
        self.pos += 1  # backslash
        if self.pos >= len(text):
            raise self.error("unterminated escape")
        ch = text[self.pos]
        if ch in _SIMPLE_ESCAPES:
            self.pos += 1
            return _SIMPLE_ESCAPES[ch]
        if ch == "u":
            return self.unicode_escape()
        if ch == "x":
            digits = text[self.pos + 1 : self.pos + 3]
            if not _HEX_RE.fullmatch(digits) or len(digits) != 2:
                raise self.error("invalid \\x escape")
            self.pos += 3
            return chr(int(digits, 16))
        if ch == "\n":  # line continuation
            self.pos += 1
            return ""
        self.pos += 1
        return ch

    def unicode_escape(self) -> str:
        """Decode ``\\uXXXX`` or ``\\u{X...}``; surrogate pairs are joined."""
        start = self.pos - 1
        code = self.code_unit()
        if 0xD800 <= code <= 0xDBFF and self.text.startswith("\\u", self.pos):
            resume = self.pos
            self.pos += 1
            low = self.code_unit()
            if 0xDC00 <= low <= 0xDFFF:
                return chr(0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00))
            self.pos = resume
        if 0xD800 <= code <= 0xDFFF:
            self.pos = start
            raise self.error("unpaired surrogate in \\u escape")
        return chr(code)

    def code_unit(self) -> int:
        # self.pos is on the "u"
        text = self.text
        if text.startswith("{", self.pos + 1):
            end = text.find("}", self.pos + 2)
            digits = text[self.pos + 2 : end] if end != -1 else ""
            after = end + 1
        else:
            digits = text[self.pos + 1 : self.pos + 5]
            if len(digits) != 4:
                digits = ""
            after = self.pos + 5
        if not _HEX_RE.fullmatch(digits) or int(digits, 16) > 0x10FFFF:
            raise self.error("invalid \\u escape")
        self.pos = after
        return int(digits, 16)


def parse_record_array(text: str, start: int = 0) -> tuple[list[dict[str, Any]], int]:
    """Parse one record array beginning at *start*.

    Returns the records and the offset just past the closing ``]``.
    Text after the array is never inspected.
    """
    parser = _Parser(text, start)
    records = parser.record_array()
    return records, parser.pos
