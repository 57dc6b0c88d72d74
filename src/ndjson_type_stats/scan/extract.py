"""
Top-level ``type`` field extraction without a full JSON parse.

Only the structure needed to find the first top-level ``"type"`` key is
tracked: string literals are skipped whole (escape-aware) and braces and
brackets outside strings move the nesting depth. Everything else in the line
is ignored.
"""

import re

from ndjson_type_stats.scan.types import Extraction, Outcome

# Bytes that open a string literal or change the nesting depth.
_STRUCTURE_RE = re.compile(rb'["{}\[\]]')

# A complete JSON string literal; group 1 is the raw, still-escaped content.
_STRING_RE = re.compile(rb'"([^"\\]*(?:\\.[^"\\]*)*)"', re.DOTALL)

# Separator after an object key.
_KEY_SEPARATOR_RE = re.compile(rb"[ \t\r\n]*:[ \t\r\n]*")

_WHITESPACE_RE = re.compile(rb"[ \t\r\n]*")

# Escapes inside the decoded value. Surrogate pairs are matched as a unit so a
# lone surrogate can be rejected.
_ESCAPE_RE = re.compile(
    r"\\(?:u([dD][89abAB][0-9a-fA-F]{2})\\u([dD][c-fC-F][0-9a-fA-F]{2})"
    r"|u([0-9a-fA-F]{4})"
    r"|(.))",
    re.DOTALL,
)

_SIMPLE_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_TYPE_KEY = b"type"
_QUOTE = ord('"')
_COMMA = ord(",")
_WHITESPACE = b" \t\r\n"
_OPEN_BRACE = ord("{")
_OPEN_BRACKET = ord("[")


class _InvalidEscape(ValueError):
    pass


def extract_type(buf: bytes, start: int, end: int) -> Extraction:
    """
    Find the top-level ``type`` value of the JSON object in buf[start:end].

    Returns a memoryview into ``buf`` when the value has no escapes, an owned
    bytes copy of the decoded value when it does, ``Outcome.MISSING`` when the
    object closes without a top-level ``type`` key, and ``Outcome.MALFORMED``
    when the line is not an object, the scan runs off the end of the line, a
    top-level key lacks its colon, the bytes scanned up to the value are not
    valid UTF-8, or the value is not a valid JSON string.
    """
    pos = _WHITESPACE_RE.match(buf, start, end).end()
    if pos >= end or buf[pos] != _OPEN_BRACE:
        return Outcome.MALFORMED

    depth = 1
    pos += 1
    search = _STRUCTURE_RE.search
    while True:
        token = search(buf, pos, end)
        if token is None:
            return Outcome.MALFORMED

        char = buf[token.start()]
        if char == _QUOTE:
            literal = _STRING_RE.match(buf, token.start(), end)
            if literal is None:
                return Outcome.MALFORMED
            pos = literal.end()
            if depth != 1:
                continue
            separator = _KEY_SEPARATOR_RE.match(buf, pos, end)
            if separator is None:
                if _in_key_position(buf, start, token.start()):
                    return Outcome.MALFORMED
                continue
            key_start, key_end = literal.span(1)
            if key_end - key_start == len(_TYPE_KEY) and buf.startswith(_TYPE_KEY, key_start):
                return _read_value(buf, start, separator.end(), end)
            pos = separator.end()
        elif char == _OPEN_BRACE or char == _OPEN_BRACKET:
            depth += 1
            pos = token.end()
        else:
            depth -= 1
            if depth == 0:
                return Outcome.MISSING
            pos = token.end()


def _in_key_position(buf: bytes, start: int, pos: int) -> bool:
    """True when the literal at ``pos`` follows the opening brace or a comma."""
    pos -= 1
    while pos > start and buf[pos] in _WHITESPACE:
        pos -= 1
    return buf[pos] == _OPEN_BRACE or buf[pos] == _COMMA


def _read_value(buf: bytes, line_start: int, pos: int, end: int) -> Extraction:
    literal = _STRING_RE.match(buf, pos, end)
    if literal is None:
        return Outcome.MALFORMED

    # Everything the scan walked over, value included.
    try:
        str(memoryview(buf)[line_start:literal.end()], "utf-8")
    except UnicodeDecodeError:
        return Outcome.MALFORMED

    value_start, value_end = literal.span(1)
    if buf.find(b"\\", value_start, value_end) == -1:
        return memoryview(buf)[value_start:value_end]
    return decode_escaped(buf[value_start:value_end])


def decode_escaped(raw: bytes) -> bytes | Outcome:
    """Decode the JSON escapes in a raw string body into owned UTF-8 bytes."""
    try:
        text = raw.decode("utf-8")
        return _ESCAPE_RE.sub(_replace_escape, text).encode("utf-8")
    except ValueError:
        return Outcome.MALFORMED


def _replace_escape(match: re.Match[str]) -> str:
    high, low, single, char = match.groups()
    if high is not None:
        return chr(0x10000 + ((int(high, 16) - 0xD800) << 10) + (int(low, 16) - 0xDC00))
    if single is not None:
        code = int(single, 16)
        if 0xD800 <= code <= 0xDFFF:
            raise _InvalidEscape(f"unpaired surrogate \\u{single}")
        return chr(code)
    try:
        return _SIMPLE_ESCAPES[char]
    except KeyError:
        raise _InvalidEscape(f"invalid escape \\{char}") from None
