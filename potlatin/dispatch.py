"""
Translation dispatcher.

Chooses between the plain word transform and the markup-aware transform
according to the configured Policy:

- ignore: always transform words directly
- require: strings containing both '<' and '>' go through the markup
  transform; any failure is fatal
- attempt: like require, but a markup ParseError is recorded as a
  warning and the plain transform is retried on the unmodified text

The dispatcher is pure: warnings are returned as values in DispatchResult,
never logged here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from potlatin.config import DEFAULT_POLICY, Policy
from potlatin.errors import ParseError, TranslationError, WordTransformError
from potlatin.markup import looks_like_markup, transform_markup
from potlatin.words import WordFn, transform_words


@dataclass(frozen=True)
class TranslationWarning:
    """A recoverable markup failure under the attempt policy."""
    source_text: str
    error: ParseError
    context: str = ""

    def __str__(self) -> str:
        return f"failed to translate html '{self.source_text}': {self.error}, continuing"


@dataclass
class DispatchResult:
    """Translated text plus the warning recorded on fallback, if any.

    Attributes:
        text: The translated text
        mode: 'plain', 'markup' or 'fallback' (markup failed, plain used)
        warning: Set only when mode is 'fallback'
    """
    text: str
    mode: str = "plain"
    warning: Optional[TranslationWarning] = None

    @property
    def has_warning(self) -> bool:
        return self.warning is not None


class TranslationDispatcher:
    """Route each source text to the right transform.

    Usage:
        dispatcher = TranslationDispatcher(create_transform("piglatin"), Policy.ATTEMPT)
        result = dispatcher.translate("Click <b>here</b>")
        print(result.text)

    The policy is validated here, so an unknown value raises
    ConfigurationError before any catalog line is scanned.
    """

    def __init__(self, word_fn: WordFn, policy: Policy | str | None = DEFAULT_POLICY):
        self.word_fn = word_fn
        self.policy = Policy.parse(policy)

    def translate(self, text: str, context: str = "") -> DispatchResult:
        """Translate one entry's source text.

        Args:
            text: Source text with real newlines
            context: The entry's msgctxt, carried into warnings

        Returns:
            DispatchResult with the translated text

        Raises:
            TranslationError: Wrapping the ParseError or WordTransformError
                that made the translation fail
        """
        if self.policy is Policy.IGNORE or not looks_like_markup(text):
            return DispatchResult(self._plain(text))

        try:
            return DispatchResult(transform_markup(text, self.word_fn), mode="markup")
        except WordTransformError as exc:
            raise TranslationError(text, exc) from exc
        except ParseError as exc:
            if self.policy is Policy.REQUIRE:
                raise TranslationError(text, exc) from exc
            warning = TranslationWarning(text, exc, context)

        return DispatchResult(self._plain(text), mode="fallback", warning=warning)

    def _plain(self, text: str) -> str:
        try:
            return transform_words(text, self.word_fn)
        except WordTransformError as exc:
            raise TranslationError(text, exc) from exc
