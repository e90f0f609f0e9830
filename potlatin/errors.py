"""
Error taxonomy for potlatin.

Every failure raised by the package derives from PotlatinError so callers
(the CLI in particular) can catch one type. The hierarchy mirrors the
pipeline stages:

- ParseError: a malformed quoted literal or a malformed markup token stream
- WordTransformError: the injected word transform rejected an alphabetic run
- TranslationError: wraps either of the above with the entry's source text
- ConfigurationError: an unknown policy or word transform name
"""

from __future__ import annotations

from typing import Optional


class PotlatinError(Exception):
    """Base class for all potlatin errors."""


class ConfigurationError(PotlatinError, ValueError):
    """An unrecognized configuration value (policy, transform name)."""

    def __init__(self, message: str, value: object = None):
        super().__init__(message)
        self.value = value


class ParseError(PotlatinError, ValueError):
    """Malformed quoted literal or markup.

    Attributes:
        text: The input that failed to parse
        position: Offset into ``text`` where parsing stopped, if known
        lineno: 1-based catalog line number, set by the scanner
    """

    def __init__(
        self,
        message: str,
        text: Optional[str] = None,
        position: Optional[int] = None,
        lineno: Optional[int] = None,
    ):
        super().__init__(message)
        self.text = text
        self.position = position
        self.lineno = lineno


class WordTransformError(PotlatinError):
    """The word transform rejected ``word``.

    ``node`` is the markup text node the word came from, when the failure
    happened inside the markup-aware transform.
    """

    def __init__(self, word: str, cause: BaseException, node: Optional[str] = None):
        message = f"failed to transform '{word}': {cause}"
        if node is not None:
            message = f"failed to translate '{node}': {message}"
        super().__init__(message)
        self.word = word
        self.cause = cause
        self.node = node


class TranslationError(PotlatinError):
    """Translating one catalog entry failed.

    ``source_text`` is the full text handed to the dispatcher so the
    message identifies which entry broke.
    """

    def __init__(
        self,
        source_text: str,
        cause: BaseException,
        lineno: Optional[int] = None,
    ):
        super().__init__(f"failed to translate '{source_text}': {cause}")
        self.source_text = source_text
        self.cause = cause
        self.lineno = lineno
