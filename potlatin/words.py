"""
Word-boundary transform.

Isolates maximal runs of ASCII letters and hands each run to a word
transform; everything else (whitespace, punctuation, digits, non-Latin
letters) is copied through untouched.

Example:
    >>> transform_words("go, team 42!", str.upper)
    'GO, TEAM 42!'
"""

from __future__ import annotations

import re
from typing import Callable

from potlatin.errors import WordTransformError


# Type alias for word transforms: one alphabetic run in, its replacement out
WordFn = Callable[[str], str]

WORD_PATTERN = re.compile(r"[A-Za-z]+")


def transform_words(text: str, word_fn: WordFn) -> str:
    """Apply ``word_fn`` to every alphabetic run in ``text``.

    Args:
        text: Plain text (no markup awareness)
        word_fn: Transform for a single run; rejects a run by raising ValueError

    Returns:
        Text with each run replaced, all other characters in place

    Raises:
        WordTransformError: If ``word_fn`` rejects any run. No partial
            result is produced.
    """
    parts = []
    mark = 0
    for match in WORD_PATTERN.finditer(text):
        word = match.group(0)
        try:
            replacement = word_fn(word)
        except ValueError as exc:
            raise WordTransformError(word, exc) from exc
        parts.append(text[mark:match.start()])
        parts.append(replacement)
        mark = match.end()

    if not parts:
        return text
    parts.append(text[mark:])
    return "".join(parts)
