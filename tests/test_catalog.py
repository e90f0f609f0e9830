"""
Tests for the catalog scanner.

Tests cover:
- Entry recognition and msgstr rewriting
- Multi-line source reassembly and multi-line output
- PO-Revision-Date refresh
- msgctxt and plural entries
- Error propagation and fail-fast behaviour
- Incomplete trailing entries
"""

import io
from datetime import datetime, timedelta, timezone

import pytest

from potlatin.catalog import (
    CatalogEntry,
    CatalogScanner,
    ScanState,
    translate_catalog,
)
from potlatin.config import Policy
from potlatin.dispatch import DispatchResult, TranslationDispatcher
from potlatin.errors import ParseError, TranslationError, WordTransformError


FIXED_TIME = datetime(2024, 5, 6, 7, 8, tzinfo=timezone(timedelta(hours=2)))


def fixed_clock():
    return FIXED_TIME


class RecordingDispatcher:
    """Stand-in dispatcher returning a canned reply and recording calls."""

    def __init__(self, reply=None):
        self.reply = reply
        self.calls = []

    def translate(self, text, context=""):
        self.calls.append((context, text))
        return DispatchResult(self.reply if self.reply is not None else text)


def _lines(*lines):
    return "".join(line + "\n" for line in lines)


def _upper(text, policy=Policy.ATTEMPT):
    out, _ = translate_catalog(text, str.upper, policy, clock=fixed_clock)
    return out


class TestSimpleEntries:
    """Single-line entries."""

    def test_msgstr_rewritten(self):
        text = _lines('msgid "Hello"', 'msgstr ""')
        assert _upper(text) == _lines('msgid "Hello"', 'msgstr "HELLO"')

    def test_other_lines_echoed(self):
        text = _lines(
            "# Translator comment",
            "#: src/app.py:10",
            "#, python-format",
            'msgid "Open %s"',
            'msgstr ""',
            "",
        )
        expected = _lines(
            "# Translator comment",
            "#: src/app.py:10",
            "#, python-format",
            'msgid "Open %s"',
            'msgstr "OPEN %S"',
            "",
        )
        assert _upper(text) == expected

    def test_escapes_reencoded(self):
        text = _lines('msgid "Say \\"hi\\""', 'msgstr ""')
        assert _upper(text) == _lines('msgid "Say \\"hi\\""', 'msgstr "SAY \\"HI\\""')

    def test_markup_entry(self):
        text = _lines('msgid "Click <b>here</b>"', 'msgstr ""')
        out, result = translate_catalog(text, str.upper, Policy.REQUIRE)

        assert out == _lines('msgid "Click <b>here</b>"', 'msgstr "CLICK <b>HERE</b>"')
        assert result.markup_entries == 1
        assert result.entries_translated == 1

    def test_crlf_input(self):
        out, _ = translate_catalog('msgid "a"\r\nmsgstr ""\r\n', str.upper)
        assert out == _lines('msgid "a"', 'msgstr "A"')


class TestMultiLine:
    """Continuation lines on input and output."""

    def test_fragments_reassembled(self):
        dispatcher = RecordingDispatcher(reply="Hola mundo\nfin")
        scanner = CatalogScanner(dispatcher)

        scanner.feed('msgid "Hello "')
        scanner.feed('"world"')
        out = scanner.feed('msgstr ""')

        assert dispatcher.calls == [("", "Hello world")]
        assert out == ['msgstr "Hola mundo\\n"\n', '"fin"\n']

    def test_empty_opener_continuations(self):
        dispatcher = RecordingDispatcher()
        scanner = CatalogScanner(dispatcher)
        for line in ('msgid ""', '"Hello "', '""', '"world"', 'msgstr ""'):
            scanner.feed(line)

        assert dispatcher.calls == [("", "Hello world")]

    def test_doubled_quote_continuation(self):
        """A continuation opened with an extra quote still joins the source."""
        dispatcher = RecordingDispatcher(reply="Hola mundo\nfin")
        scanner = CatalogScanner(dispatcher)

        scanner.feed('msgid "Hello "')
        assert scanner.feed('""world"') == ['""world"\n']
        out = scanner.feed('msgstr ""')

        assert dispatcher.calls == [("", "Hello world")]
        assert out == ['msgstr "Hola mundo\\n"\n', '"fin"\n']

    def test_doubled_quote_continuation_in_catalog(self):
        text = _lines('msgid "Hello "', '""world"', 'msgstr ""')
        assert _upper(text) == _lines('msgid "Hello "', '""world"', 'msgstr "HELLO WORLD"')

    def test_multi_line_output(self):
        text = _lines('msgid ""', '"line one\\n"', '"line two"', 'msgstr ""')
        expected = _lines(
            'msgid ""', '"line one\\n"', '"line two"',
            'msgstr "LINE ONE\\n"', '"LINE TWO"',
        )
        assert _upper(text) == expected

    def test_trailing_newline_gives_empty_last_line(self):
        text = _lines('msgid "done\\n"', 'msgstr ""')
        assert _upper(text) == _lines('msgid "done\\n"', 'msgstr "DONE\\n"', '""')

    def test_literal_newline_marker_becomes_newline(self):
        """An escaped backslash followed by n is also treated as a line break."""
        dispatcher = RecordingDispatcher()
        scanner = CatalogScanner(dispatcher)
        scanner.feed('msgid "a\\\\nb"')
        scanner.feed('msgstr ""')

        assert dispatcher.calls == [("", "a\nb")]

    def test_other_line_ends_accumulation(self):
        """A comment inside a block stops collection; fragments wait for msgstr."""
        dispatcher = RecordingDispatcher()
        scanner = CatalogScanner(dispatcher)

        scanner.feed('msgid "x"')
        assert scanner.state is ScanState.IN_SOURCE
        scanner.feed("#| previous")
        assert scanner.state is ScanState.SEEKING
        scanner.feed('"not a fragment"')
        scanner.feed('msgstr ""')

        assert dispatcher.calls == [("", "x")]


class TestHeader:
    """PO-Revision-Date refresh."""

    HEADER = _lines(
        'msgid ""',
        'msgstr ""',
        '"Project-Id-Version: demo\\n"',
        '"PO-Revision-Date: YEAR-MO-DA HO:MI+ZONE\\n"',
        '"Language: \\n"',
    )

    def test_revision_date_replaced(self):
        expected = _lines(
            'msgid ""',
            'msgstr ""',
            '"Project-Id-Version: demo\\n"',
            '"PO-Revision-Date: 2024-05-06 07:08+0200\\n"',
            '"Language: \\n"',
        )
        assert _upper(self.HEADER) == expected

    def test_every_occurrence_replaced(self):
        text = _lines('"PO-Revision-Date: a\\n"', '"PO-Revision-Date: b\\n"')
        stamp = '"PO-Revision-Date: 2024-05-06 07:08+0200\\n"'

        assert _upper(text) == _lines(stamp, stamp)

    def test_not_replaced_inside_source_block(self):
        line = '"PO-Revision-Date: x\\n"'
        out = _upper(_lines('msgid ""', line, 'msgstr ""'))

        assert line + "\n" in out


class TestContextAndPlurals:

    def test_msgctxt_passed_to_dispatcher(self):
        dispatcher = RecordingDispatcher()
        scanner = CatalogScanner(dispatcher)
        for line in ('msgctxt "menu"', '"bar"', 'msgid "Open"', 'msgstr ""'):
            scanner.feed(line)

        assert dispatcher.calls == [("menubar", "Open")]

    def test_context_cleared_after_entry(self):
        dispatcher = RecordingDispatcher()
        scanner = CatalogScanner(dispatcher)
        for line in ('msgctxt "menu"', 'msgid "Open"', 'msgstr ""',
                     'msgid "Close"', 'msgstr ""'):
            scanner.feed(line)

        assert dispatcher.calls == [("menu", "Open"), ("", "Close")]

    def test_plural_forms(self):
        text = _lines(
            'msgid "One file"',
            'msgid_plural "Many files"',
            'msgstr[0] ""',
            'msgstr[1] ""',
        )
        expected = _lines(
            'msgid "One file"',
            'msgid_plural "Many files"',
            'msgstr[0] "ONE FILE"',
            'msgstr[1] "MANY FILES"',
        )
        assert _upper(text) == expected

    def test_entry_text_selection(self):
        entry = CatalogEntry(source_fragments=["one"], plural_fragments=["many"])

        assert entry.text_for(None) == "one"
        assert entry.text_for(0) == "one"
        assert entry.text_for(2) == "many"
        assert CatalogEntry(source_fragments=["one"]).text_for(1) == "one"


class TestErrors:
    """Fail-fast error propagation."""

    def test_malformed_msgid(self):
        text = _lines("# header", 'msgid "unterminated')

        with pytest.raises(ParseError) as info:
            translate_catalog(text, str.upper)

        assert info.value.lineno == 2
        assert "unterminated" in str(info.value)

    def test_malformed_continuation(self):
        scanner = CatalogScanner(TranslationDispatcher(str.upper))
        scanner.feed('msgid ""')

        with pytest.raises(ParseError):
            scanner.feed('"bad \\q"')

    def test_word_failure_aborts_run(self):
        def reject(word):
            if word == "boom":
                raise ValueError("nope")
            return word.upper()

        text = _lines(
            'msgid "fine"', 'msgstr ""',
            'msgid "boom"', 'msgstr ""',
            'msgid "never"', 'msgstr ""',
        )
        scanner = CatalogScanner(TranslationDispatcher(reject))
        buffer = io.StringIO()

        with pytest.raises(TranslationError) as info:
            scanner.scan(io.StringIO(text), buffer)

        assert info.value.lineno == 4
        assert isinstance(info.value.cause, WordTransformError)
        assert buffer.getvalue() == _lines('msgid "fine"', 'msgstr "FINE"', 'msgid "boom"')

    def test_require_policy_malformed_markup(self):
        text = _lines('msgid "<a href=\\"x>click"', 'msgstr ""')

        with pytest.raises(TranslationError) as info:
            translate_catalog(text, str.upper, Policy.REQUIRE)

        assert isinstance(info.value.cause, ParseError)
        assert info.value.source_text == '<a href="x>click'

    def test_attempt_policy_falls_back(self):
        text = _lines('msgid "<a href=\\"x>click"', 'msgstr ""')
        out, result = translate_catalog(text, str.upper, Policy.ATTEMPT)

        assert out == _lines('msgid "<a href=\\"x>click"', 'msgstr "<A HREF=\\"X>CLICK"')
        assert len(result.warnings) == 1
        assert result.warnings[0].source_text == '<a href="x>click'


class TestIncompleteEntries:

    def test_trailing_msgid_dropped(self):
        text = _lines('msgid "Hello"', 'msgstr ""', 'msgid "Bye"')
        out, result = translate_catalog(text, str.upper)

        assert out == _lines('msgid "Hello"', 'msgstr "HELLO"', 'msgid "Bye"')
        assert result.dropped_entries == 1
        assert result.entries_translated == 1

    def test_scan_result_counts(self):
        _, result = translate_catalog(_lines('msgid "a"', 'msgstr ""'), str.upper)

        assert result.lines_read == 2
        assert result.to_dict()["entries_translated"] == 1
        assert not result.has_warnings
