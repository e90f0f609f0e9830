"""
Tests for the quoted-string codec.

Tests cover:
- Decoding simple, hex, octal and unicode escapes
- Rejection of malformed literals
- Canonical encoding
- Decode/encode round trip
"""

import pytest

from potlatin.codec import decode, decode_prefixed, encode
from potlatin.errors import ParseError


class TestDecode:
    """Test decoding of catalog literals."""

    def test_plain_string(self):
        assert decode('"hello"') == "hello"

    def test_empty_string(self):
        assert decode('""') == ""

    def test_simple_escapes(self):
        """Quote, backslash, newline and tab escapes are decoded."""
        assert decode(r'"a\"b\\c\n\td"') == 'a"b\\c\n\td'

    def test_control_escapes(self):
        assert decode(r'"\a\b\f\r\v"') == "\a\b\f\r\v"

    def test_numeric_escapes(self):
        """Hex, octal and unicode escapes are decoded."""
        assert decode(r'"\x41\101\u00e9\U0001F600"') == "AA\u00e9\U0001F600"

    def test_utf8_text_passes_through(self):
        assert decode('"café naïve"') == "café naïve"

    def test_surrounding_whitespace(self):
        assert decode('  "x"  ') == "x"


class TestDecodeErrors:
    """Test rejection of malformed literals."""

    @pytest.mark.parametrize("literal", [
        '"unterminated',
        "not quoted",
        "",
        '"bad \\q escape"',
        '"short \\x4"',
        '"octal \\18"',
        '"ends in backslash\\',
        '"a" trailing',
        '"raw\nnewline"',
    ])
    def test_malformed(self, literal):
        with pytest.raises(ParseError):
            decode(literal)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            decode('"oops')

    def test_error_records_position(self):
        with pytest.raises(ParseError) as info:
            decode(r'"ab\qc"')

        assert info.value.position == 3
        assert info.value.text == r'"ab\qc"'


class TestDecodePrefixed:
    """Test keyword-prefixed literals."""

    def test_msgid_line(self):
        assert decode_prefixed('msgid "Open file"', "msgid ") == "Open file"

    def test_wrong_keyword(self):
        with pytest.raises(ParseError):
            decode_prefixed('msgstr "x"', "msgid ")


class TestEncode:
    """Test canonical encoding."""

    def test_quotes_and_newline(self):
        assert encode('say "hi"\n') == r'"say \"hi\"\n"'

    def test_backslash(self):
        assert encode("C:\\temp") == r'"C:\\temp"'

    def test_tab(self):
        assert encode("tab\there") == r'"tab\there"'

    def test_other_control_characters(self):
        assert encode("\x01\x1b\x7f") == r'"\001\033\177"'

    def test_printable_unicode_kept(self):
        assert encode("café") == '"café"'

    def test_non_printable_unicode_written_as_is(self):
        """Non-ASCII characters never become escapes."""
        assert encode("a\u200bb\x85") == '"a\u200bb\x85"'

    def test_empty(self):
        assert encode("") == '""'


class TestRoundTrip:
    """Decode then encode reproduces canonical literals."""

    @pytest.mark.parametrize("literal", [
        '""',
        r'"Hello, world"',
        r'"line one\n"',
        r'"\"quoted\" and \\ backslash"',
        r'"\a\b\f\n\r\t\v"',
        '"naïve café"',
        r'"\000\037"',
        '"zero\u200bwidth"',
        '"%(count)d files in <b>%s</b>"',
    ])
    def test_round_trip(self, literal):
        assert encode(decode(literal)) == literal

    @pytest.mark.parametrize("literal,canonical", [
        (r'"\x41"', '"A"'),
        (r'"\101"', '"A"'),
        (r'"caf\u00e9"', '"café"'),
        (r'"\x01"', r'"\001"'),
    ])
    def test_numeric_escapes_reencode_canonically(self, literal, canonical):
        assert encode(decode(literal)) == canonical
