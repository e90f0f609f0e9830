"""
Markup-aware transform.

Catalog strings often embed HTML such as ``Click <a href="/x">here</a>``.
Only the text between tags may be transformed; tags, comments and other
markup constructs are replayed byte-for-byte from the raw input so that
attribute order, quoting style and self-closing markers survive.

Design:
- A regex tokenizer splits the string into Text, StartTag, EndTag,
  Comment and Other tokens, each keeping its raw span
- Text tokens are entity-decoded, transformed word by word, and re-escaped
  with the minimal escaping a text position needs (&, <, >)
- ``script``/``style`` contents are raw text and replayed untouched
- A tag opener that never completes (``<a href="``) is a ParseError
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from potlatin.errors import ParseError, WordTransformError
from potlatin.words import WordFn, transform_words


class TokenKind(Enum):
    TEXT = "text"
    START_TAG = "start_tag"
    END_TAG = "end_tag"
    COMMENT = "comment"
    OTHER = "other"


@dataclass(frozen=True)
class Token:
    """One markup token and the exact input span it came from."""
    kind: TokenKind
    raw: str

    @property
    def content(self) -> Optional[str]:
        """Entity-decoded character data, or None for non-Text tokens."""
        if self.kind is not TokenKind.TEXT:
            return None
        return html.unescape(self.raw)

    @property
    def tag(self) -> str:
        """Lower-cased tag name for start/end tags, else empty."""
        if self.kind is TokenKind.START_TAG:
            return _START_TAG.match(self.raw).group(1).lower()
        if self.kind is TokenKind.END_TAG:
            return _END_TAG.match(self.raw).group(1).lower()
        return ""

    @property
    def self_closing(self) -> bool:
        return self.kind is TokenKind.START_TAG and self.raw.rstrip(">").rstrip().endswith("/")


# ============================================================================
# Pattern Definitions
# ============================================================================

# Anything that starts a markup construct; a bare '<' is text
_TAG_OPEN = re.compile(r"<[A-Za-z/!?]")

_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)

_CDATA = re.compile(r"<!\[CDATA\[.*?\]\]>", re.DOTALL)

# <!DOCTYPE ...> and other declarations
_DECLARATION = re.compile(r"<![A-Za-z][^>]*>")

_PROCESSING = re.compile(r"<\?[^>]*>")

_ATTRIBUTE = (
    r"[^\s\"'>/=]+"
    r"(?:\s*=\s*(?:\"[^\"]*\"|'[^']*'|[^\s\"'=<>`]+))?"
)

_START_TAG = re.compile(
    rf"<([A-Za-z][^\s/>]*)(?:\s+{_ATTRIBUTE})*\s*/?>",
)

_END_TAG = re.compile(r"</([A-Za-z][^\s/>]*)\s*>")

# Elements whose content is raw text, not markup
_RAW_TEXT_ELEMENTS = frozenset({"script", "style"})

_OPAQUE_PATTERNS = (
    (_COMMENT, TokenKind.COMMENT),
    (_CDATA, TokenKind.OTHER),
    (_DECLARATION, TokenKind.OTHER),
    (_PROCESSING, TokenKind.OTHER),
    (_END_TAG, TokenKind.END_TAG),
    (_START_TAG, TokenKind.START_TAG),
)


# ============================================================================
# Tokenizer
# ============================================================================

def looks_like_markup(text: str) -> bool:
    """Markup handling is only worth trying when both brackets occur."""
    return "<" in text and ">" in text


def tokenize(text: str) -> list[Token]:
    """Split ``text`` into markup tokens.

    Concatenating the ``raw`` spans of the result reproduces ``text``.

    Raises:
        ParseError: If a tag opener does not complete a valid token
    """
    tokens: list[Token] = []
    pos = 0
    n = len(text)
    while pos < n:
        opener = _TAG_OPEN.search(text, pos)
        if opener is None:
            tokens.append(Token(TokenKind.TEXT, text[pos:]))
            break
        if opener.start() > pos:
            tokens.append(Token(TokenKind.TEXT, text[pos:opener.start()]))

        token = _match_construct(text, opener.start())
        tokens.append(token)
        pos = opener.start() + len(token.raw)

        if token.kind is TokenKind.START_TAG and token.tag in _RAW_TEXT_ELEMENTS \
                and not token.self_closing:
            closing = re.compile(rf"</{token.tag}\s*>", re.IGNORECASE).search(text, pos)
            end = closing.start() if closing else n
            if end > pos:
                tokens.append(Token(TokenKind.OTHER, text[pos:end]))
            pos = end
    return tokens


def _match_construct(text: str, pos: int) -> Token:
    for pattern, kind in _OPAQUE_PATTERNS:
        match = pattern.match(text, pos)
        if match:
            return Token(kind, match.group(0))
    snippet = text[pos:pos + 40]
    raise ParseError(f"failed to tokenize HTML: malformed markup at offset {pos}: {snippet!r}", text, pos)


# ============================================================================
# Transform
# ============================================================================

def serialize(tokens: list[Token]) -> str:
    """Inverse of tokenize() for untouched tokens."""
    return "".join(tok.raw for tok in tokens)


def transform_markup(text: str, word_fn: WordFn) -> str:
    """Transform only the text nodes of ``text``.

    Args:
        text: String containing markup
        word_fn: Word transform applied inside text nodes

    Returns:
        The string with text nodes transformed and all markup replayed

    Raises:
        ParseError: On a malformed token stream
        WordTransformError: If ``word_fn`` rejects a word inside a text node
    """
    out = []
    for tok in tokenize(text):
        if tok.kind is not TokenKind.TEXT:
            out.append(tok.raw)
            continue
        content = tok.content
        try:
            translated = transform_words(content, word_fn)
        except WordTransformError as exc:
            raise WordTransformError(exc.word, exc.cause, node=content) from exc
        out.append(html.escape(translated, quote=False))
    return "".join(out)
