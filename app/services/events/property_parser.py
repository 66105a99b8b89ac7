"""
Restricted literal parser for event property fragments.

Tracking calls carry JavaScript object literals such as
``{ plan: 'pro', seats: 3, trial: false }``. Those fragments come from
arbitrary source code, so nothing is ever evaluated. This parser accepts
objects, arrays, quoted strings, numbers, ``true``, ``false``, ``null`` and
``undefined``, with bare identifier keys and trailing commas. Anything else
(variable references, calls, spreads, template interpolation, truncated
fragments) makes the whole fragment fall back to an empty mapping.
"""

import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)
_BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")
_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_NUMBER = re.compile(r"-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

_KEYWORDS: dict[str, Any] = {"true": True, "false": False, "null": None, "undefined": None}
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}


class PropertyParseError(ValueError):
    """Raised internally when a fragment leaves the supported literal grammar."""


class _LiteralParser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def parse(self) -> Any:
        value = self._value()
        self._skip_ws()
        if self.pos != len(self.text):
            raise self._error("trailing characters")
        return value

    def _error(self, reason: str) -> PropertyParseError:
        return PropertyParseError(f"{reason} at offset {self.pos}")

    def _skip_ws(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _peek(self) -> str:
        self._skip_ws()
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _expect(self, char: str) -> None:
        if self._peek() != char:
            raise self._error(f"expected {char!r}")
        self.pos += 1

    def _value(self) -> Any:
        char = self._peek()
        if char == "{":
            return self._object()
        if char == "[":
            return self._array()
        if char in ("'", '"', "`"):
            return self._string()
        if char and (char.isdigit() or char in "-."):
            return self._number()
        match = _IDENTIFIER.match(self.text, self.pos)
        if match and match.group(0) in _KEYWORDS:
            self.pos = match.end()
            return _KEYWORDS[match.group(0)]
        raise self._error("unsupported expression")

    def _object(self) -> dict[str, Any]:
        self._expect("{")
        result: dict[str, Any] = {}
        while self._peek() != "}":
            key = self._key()
            self._expect(":")
            result[key] = self._value()
            if self._peek() == ",":
                self.pos += 1
            elif self._peek() != "}":
                raise self._error("expected ',' or '}'")
        self.pos += 1
        return result

    def _array(self) -> list[Any]:
        self._expect("[")
        items: list[Any] = []
        while self._peek() != "]":
            items.append(self._value())
            if self._peek() == ",":
                self.pos += 1
            elif self._peek() != "]":
                raise self._error("expected ',' or ']'")
        self.pos += 1
        return items

    def _key(self) -> str:
        char = self._peek()
        if char in ("'", '"', "`"):
            return self._string()
        if char.isdigit():
            return str(self._number())
        match = _IDENTIFIER.match(self.text, self.pos)
        if not match:
            raise self._error("expected property key")
        self.pos = match.end()
        return match.group(0)

    def _string(self) -> str:
        quote = self.text[self.pos]
        self.pos += 1
        chars: list[str] = []
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if char == quote:
                self.pos += 1
                return "".join(chars)
            if char == "\\":
                self.pos += 1
                chars.append(self._escape())
                continue
            if quote == "`" and self.text.startswith("${", self.pos):
                raise self._error("template interpolation")
            if char == "\n" and quote != "`":
                raise self._error("unterminated string")
            chars.append(char)
            self.pos += 1
        raise self._error("unterminated string")

    def _escape(self) -> str:
        if self.pos >= len(self.text):
            raise self._error("dangling escape")
        char = self.text[self.pos]
        if char == "u":
            return self._unicode_escape()
        self.pos += 1
        return _ESCAPES.get(char, char)

    def _code_unit(self, start: int) -> int:
        digits = self.text[start : start + 4]
        if len(digits) != 4 or not all(c in "0123456789abcdefABCDEF" for c in digits):
            raise self._error("bad unicode escape")
        return int(digits, 16)

    def _unicode_escape(self) -> str:
        # self.pos is on the "u"; JS strings spell astral characters as surrogate pairs
        unit = self._code_unit(self.pos + 1)
        self.pos += 5
        if 0xDC00 <= unit <= 0xDFFF:
            raise self._error("lone low surrogate")
        if 0xD800 <= unit <= 0xDBFF:
            if not self.text.startswith("\\u", self.pos):
                raise self._error("lone high surrogate")
            low = self._code_unit(self.pos + 2)
            if not 0xDC00 <= low <= 0xDFFF:
                raise self._error("lone high surrogate")
            self.pos += 6
            return chr(0x10000 + ((unit - 0xD800) << 10) + (low - 0xDC00))
        return chr(unit)

    def _number(self) -> int | float:
        match = _NUMBER.match(self.text, self.pos)
        if not match:
            raise self._error("malformed number")
        self.pos = match.end()
        literal = match.group(0)
        try:
            if any(c in literal for c in ".eE"):
                return float(literal)
            return int(literal)
        except ValueError as e:
            # int() refuses literals past the interpreter's digit limit
            raise self._error("unsupported number") from e


def strip_comments(fragment: str) -> str:
    """Remove // line comments and /* block */ comments."""
    return _BLOCK_COMMENT.sub("", _LINE_COMMENT.sub("", fragment)).strip()


def parse_event_properties(fragment: str | None) -> dict[str, Any]:
    """
    Parse an object-literal fragment into a property mapping.

    Args:
        fragment: Raw text captured after the event name, e.g. "{ plan: 'pro' }"

    Returns:
        The parsed mapping, or {} when the fragment is empty, is not an
        object literal, or uses anything outside the literal grammar
    """
    if not fragment:
        return {}

    cleaned = strip_comments(fragment)
    if not cleaned or cleaned == "{}":
        return {}

    try:
        value = _LiteralParser(cleaned).parse()
    except (PropertyParseError, RecursionError) as e:
        logger.debug(f"Property fragment not parseable ({e}): {cleaned[:80]!r}")
        return {}

    return value if isinstance(value, dict) else {}
