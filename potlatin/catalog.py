"""
Line-oriented catalog scanner.

Drives a .pot/.po file through the dispatcher one line at a time:

1. ``msgctxt``/``msgid``/``msgid_plural`` lines start a source block whose
   quoted literals (plus continuation lines) are decoded and collected
2. A ``msgstr`` line ends the block: the collected text is translated and
   emitted as one or more quoted lines in place of the original msgstr
3. ``"PO-Revision-Date:`` header lines outside a source block are replaced
   with the current time
4. Every other line is echoed unchanged

Single pass, no backtracking: the first fatal error aborts the scan and
whatever was already emitted stays as it is. An entry still open at end of
input (no msgstr seen) is dropped without error.

Example:
    >>> out, result = translate_catalog('msgid "hi"\\nmsgstr ""\\n', str.upper)
    >>> out
    'msgid "hi"\\nmsgstr "HI"\\n'
"""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Iterable, Optional, TextIO

from potlatin.codec import decode, decode_prefixed, encode
from potlatin.config import (
    CONTEXT_MARKER,
    DEFAULT_POLICY,
    OUTPUT_MARKER,
    PLURAL_MARKER,
    REVISION_DATE_FORMAT,
    REVISION_MARKER,
    SOURCE_MARKER,
    Policy,
)
from potlatin.dispatch import TranslationDispatcher, TranslationWarning
from potlatin.errors import ParseError, TranslationError
from potlatin.words import WordFn


logger = logging.getLogger(__name__)

# Type alias for timestamp sources
Clock = Callable[[], datetime]

# msgstr, msgstr[0], msgstr[1], ...
_OUTPUT_LINE = re.compile(r"^msgstr(?:\[(\d+)\])?")

# Escaped newline marker as it appears in joined fragments
_NEWLINE_MARKER = "\\n"


def _local_now() -> datetime:
    return datetime.now().astimezone()


class ScanState(Enum):
    SEEKING = "seeking"        # not inside a source block
    IN_CONTEXT = "in_context"  # collecting msgctxt fragments
    IN_SOURCE = "in_source"    # collecting msgid fragments
    IN_PLURAL = "in_plural"    # collecting msgid_plural fragments


@dataclass
class CatalogEntry:
    """Source side of one catalog entry, built up fragment by fragment."""
    context_fragments: list[str] = field(default_factory=list)
    source_fragments: Optional[list[str]] = None
    plural_fragments: Optional[list[str]] = None
    emitted: bool = False

    @property
    def context(self) -> str:
        return "".join(self.context_fragments)

    @property
    def source_text(self) -> str:
        """Joined msgid fragments with newline markers made real."""
        return _join(self.source_fragments or [])

    @property
    def plural_text(self) -> Optional[str]:
        if self.plural_fragments is None:
            return None
        return _join(self.plural_fragments)

    def text_for(self, index: Optional[int]) -> str:
        """Source text for ``msgstr`` (index None) or ``msgstr[index]``."""
        if index and self.plural_fragments is not None:
            return self.plural_text
        return self.source_text


def _join(fragments: list[str]) -> str:
    return "".join(fragments).replace(_NEWLINE_MARKER, "\n")


@dataclass
class ScanResult:
    """Outcome of a completed scan."""
    lines_read: int = 0
    entries_translated: int = 0
    markup_entries: int = 0
    dropped_entries: int = 0
    warnings: list[TranslationWarning] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def to_dict(self) -> dict:
        return {
            "lines_read": self.lines_read,
            "entries_translated": self.entries_translated,
            "markup_entries": self.markup_entries,
            "dropped_entries": self.dropped_entries,
            "warnings": len(self.warnings),
        }


class CatalogScanner:
    """Two-phase line scanner: seeking entries, or collecting a source block.

    Usage:
        scanner = CatalogScanner(TranslationDispatcher(word_fn, Policy.REQUIRE))
        with open("messages.pot", encoding="utf-8") as src:
            result = scanner.scan(src, sys.stdout)

    feed() can be called directly for line-level testing; it returns the
    output lines (newline-terminated) produced by one input line.
    """

    def __init__(self, dispatcher: TranslationDispatcher, clock: Clock | None = None):
        self.dispatcher = dispatcher
        self.clock = clock or _local_now
        self.state = ScanState.SEEKING
        self.entry: Optional[CatalogEntry] = None
        self.lineno = 0
        self.result = ScanResult()

    @property
    def in_source(self) -> bool:
        return self.state is not ScanState.SEEKING

    def scan(self, reader: Iterable[str], writer: TextIO) -> ScanResult:
        """Scan every line of ``reader``, writing output to ``writer``."""
        for line in reader:
            for out in self.feed(line):
                writer.write(out)
        return self.finish()

    def feed(self, line: str) -> list[str]:
        """Process one input line.

        Raises:
            ParseError: If a source literal cannot be decoded
            TranslationError: If translating an entry fails
        """
        self.lineno += 1
        self.result.lines_read += 1
        line = _strip_terminator(line)

        output = _OUTPUT_LINE.match(line)
        if output:
            return self._emit_translation(output)

        if not self.in_source and line.startswith(REVISION_MARKER):
            stamp = self.clock().strftime(REVISION_DATE_FORMAT)
            return [f'{REVISION_MARKER} {stamp}\\n"\n']

        if line.startswith(CONTEXT_MARKER):
            self.entry = CatalogEntry(context_fragments=[self._decode(line, CONTEXT_MARKER)])
            self.state = ScanState.IN_CONTEXT
        elif line.startswith(SOURCE_MARKER):
            if self.entry is None or self.entry.source_fragments is not None:
                self.entry = CatalogEntry()
            self.entry.source_fragments = [self._decode(line, SOURCE_MARKER)]
            self.state = ScanState.IN_SOURCE
        elif line.startswith(PLURAL_MARKER) and self.entry is not None:
            self.entry.plural_fragments = [self._decode(line, PLURAL_MARKER)]
            self.state = ScanState.IN_PLURAL
        elif line.startswith('"') and self.in_source:
            self._active_fragments().append(self._decode(_continuation_literal(line)))
        else:
            # any other line ends the block; fragments wait for the msgstr
            self.state = ScanState.SEEKING

        return [line + "\n"]

    def finish(self) -> ScanResult:
        """End the scan, dropping an entry that never saw its msgstr."""
        if self.entry is not None and self.entry.source_fragments is not None \
                and not self.entry.emitted:
            logger.debug("Dropping incomplete entry at end of input: %r", self.entry.source_text)
            self.result.dropped_entries += 1
        self.entry = None
        self.state = ScanState.SEEKING
        return self.result

    def _active_fragments(self) -> list[str]:
        if self.state is ScanState.IN_CONTEXT:
            return self.entry.context_fragments
        if self.state is ScanState.IN_PLURAL:
            return self.entry.plural_fragments
        return self.entry.source_fragments

    def _decode(self, line: str, prefix: str = "") -> str:
        try:
            if prefix:
                return decode_prefixed(line, prefix)
            return decode(line)
        except ParseError as exc:
            raise ParseError(
                f"failed to parse '{line}': {exc}",
                text=line,
                position=exc.position,
                lineno=self.lineno,
            ) from exc

    def _emit_translation(self, output: re.Match) -> list[str]:
        self.state = ScanState.SEEKING
        index = int(output.group(1)) if output.group(1) is not None else None
        entry = self.entry or CatalogEntry()
        source = entry.text_for(index)

        try:
            translated = self.dispatcher.translate(source, entry.context)
        except TranslationError as exc:
            exc.lineno = self.lineno
            raise

        if translated.warning is not None:
            logger.warning("%s", translated.warning)
            self.result.warnings.append(translated.warning)
        if translated.mode == "markup":
            self.result.markup_entries += 1
        self.result.entries_translated += 1

        if index is None:
            self.entry = None
        else:
            # later msgstr[N] lines of the same entry still need the source
            entry.emitted = True

        return _format_output(output.group(0), translated.text)


def _strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def _continuation_literal(line: str) -> str:
    """Literal part of a continuation line.

    Some writers open a continuation with an extra quote (``""world"``). A
    line that is exactly ``""`` stays the empty literal.
    """
    if line.startswith('""') and line.rstrip() != '""':
        return line[1:]
    return line


def _format_output(marker: str, text: str) -> list[str]:
    """Quoted output lines for ``text``, the first one carrying ``marker``."""
    pieces = text.split("\n")
    lines = []
    for i, piece in enumerate(pieces):
        if i != len(pieces) - 1:
            piece += "\n"
        literal = encode(piece)
        lines.append(f"{marker} {literal}\n" if i == 0 else f"{literal}\n")
    return lines


def translate_catalog(
    text: str,
    word_fn: WordFn,
    policy: Policy | str | None = DEFAULT_POLICY,
    clock: Clock | None = None,
) -> tuple[str, ScanResult]:
    """Translate a whole in-memory catalog.

    Args:
        text: Catalog contents
        word_fn: Word transform
        policy: Markup policy
        clock: Timestamp source for PO-Revision-Date

    Returns:
        Tuple of (translated catalog, ScanResult)
    """
    scanner = CatalogScanner(TranslationDispatcher(word_fn, policy), clock=clock)
    buffer = io.StringIO()
    result = scanner.scan(io.StringIO(text), buffer)
    return buffer.getvalue(), result
