"""
Quoted-string codec for catalog literals.

Catalog strings are C-style double-quoted literals:

    "Hello, \\"world\\"\\n"

decode() turns one literal into the Python string it denotes and encode()
produces the canonical literal for a string. ``encode(decode(x)) == x``
holds for canonical literals only: the numeric escapes below are accepted
on input but written back in canonical form, so ``"\\x41"`` comes back as
``"A"`` and ``"\\u00e9"`` as ``"é"``.

Escapes accepted by decode():
- Simple: \\a \\b \\f \\n \\r \\t \\v \\\\ \\"
- Hex byte: \\xHH
- Octal byte: \\ooo (exactly three digits)
- Unicode: \\uHHHH and \\UHHHHHHHH
"""

from __future__ import annotations

from potlatin.errors import ParseError


_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}

_ENCODE_ESCAPES = {v: "\\" + k for k, v in _SIMPLE_ESCAPES.items()}

_HEX_DIGITS = "0123456789abcdefABCDEF"
_OCT_DIGITS = "01234567"

# escape letter -> number of hex digits that follow
_HEX_WIDTHS = {"x": 2, "u": 4, "U": 8}


def decode(literal: str) -> str:
    """Decode a double-quoted literal.

    Leading whitespace is skipped, trailing whitespace after the closing
    quote is allowed.

    Args:
        literal: Text holding exactly one quoted literal

    Returns:
        The decoded string

    Raises:
        ParseError: On a missing quote, raw newline, invalid escape or
            trailing text after the literal

    Example:
        >>> decode('"a\\\\tb"')
        'a\\tb'
    """
    text = literal.lstrip()
    start = len(literal) - len(text)
    if not text.startswith('"'):
        raise ParseError(f"expected quoted string: {literal}", literal, start)

    out = []
    i = 1
    n = len(text)
    while i < n:
        c = text[i]
        if c == '"':
            rest = text[i + 1:]
            if rest.strip():
                raise ParseError(
                    f"unexpected text after quoted string: {rest.strip()!r}",
                    literal,
                    start + i + 1,
                )
            return "".join(out)
        if c == "\n":
            raise ParseError("newline in quoted string", literal, start + i)
        if c != "\\":
            out.append(c)
            i += 1
            continue

        if i + 1 >= n:
            break
        esc = text[i + 1]
        if esc in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[esc])
            i += 2
        elif esc in _HEX_WIDTHS:
            width = _HEX_WIDTHS[esc]
            digits = text[i + 2:i + 2 + width]
            if len(digits) != width or any(d not in _HEX_DIGITS for d in digits):
                raise ParseError(f"invalid \\{esc} escape", literal, start + i)
            code = int(digits, 16)
            if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
                raise ParseError(f"invalid code point \\{esc}{digits}", literal, start + i)
            out.append(chr(code))
            i += 2 + width
        elif esc in _OCT_DIGITS:
            digits = text[i + 1:i + 4]
            if len(digits) != 3 or any(d not in _OCT_DIGITS for d in digits):
                raise ParseError("invalid octal escape", literal, start + i)
            code = int(digits, 8)
            if code > 0xFF:
                raise ParseError(f"octal escape out of range: \\{digits}", literal, start + i)
            out.append(chr(code))
            i += 4
        else:
            raise ParseError(f"invalid escape \\{esc}", literal, start + i)

    raise ParseError(f"unterminated quoted string: {literal}", literal, len(literal))


def decode_prefixed(line: str, prefix: str) -> str:
    """Decode the literal following a keyword, e.g. ``msgid "..."``."""
    if not line.startswith(prefix):
        raise ParseError(f"expected '{prefix.strip()}': {line}", line, 0)
    return decode(line[len(prefix):])


def encode(text: str) -> str:
    """Encode ``text`` as a canonical double-quoted literal. Never fails.

    Non-ASCII characters are written as they are; ASCII control characters
    without a short escape become three-digit octal escapes, which every
    gettext reader accepts.
    """
    out = ['"']
    for c in text:
        if c in _ENCODE_ESCAPES:
            out.append(_ENCODE_ESCAPES[c])
        elif c.isprintable() or ord(c) >= 0x80:
            out.append(c)
        else:
            out.append(f"\\{ord(c):03o}")
    out.append('"')
    return "".join(out)
