"""
Pig Latin word transform.

Rules:
- A word starting with a vowel gets the suffix "way": "apple" -> "appleway"
- Otherwise the leading consonant cluster moves to the end, followed by
  "ay": "string" -> "ingstray". "qu" counts as one consonant ("queen" ->
  "eenquay") and "y" is a vowel anywhere but the first letter ("rhythm"
  -> "ythmrhay")
- Capitalisation shape is kept: "Hello" -> "Ellohay", "HELLO" -> "ELLOHAY"
"""

from __future__ import annotations

from potlatin.transform.base import WordTransform


VOWELS = frozenset("aeiou")


def to_pig_latin(word: str, vowel_suffix: str = "way", consonant_suffix: str = "ay") -> str:
    """Translate a single ASCII word to Pig Latin.

    Raises:
        ValueError: If ``word`` is empty or not purely ASCII letters
    """
    if not word or not word.isascii() or not word.isalpha():
        raise ValueError(f"not a word: {word!r}")

    lower = word.lower()
    if lower[0] in VOWELS:
        return _match_case(word, lower + vowel_suffix)

    i = 0
    while i < len(lower):
        c = lower[i]
        if c in VOWELS or (c == "y" and i > 0):
            break
        if c == "q" and lower[i + 1:i + 2] == "u":
            i += 2
            continue
        i += 1
    return _match_case(word, lower[i:] + lower[:i] + consonant_suffix)


def _match_case(original: str, result: str) -> str:
    if len(original) > 1 and original.isupper():
        return result.upper()
    if original[0].isupper():
        return result.capitalize()
    return result


class PigLatinTransform(WordTransform):
    """Pig Latin, the default pseudo-translation."""

    def __init__(self, vowel_suffix: str = "way", consonant_suffix: str = "ay"):
        self.vowel_suffix = vowel_suffix
        self.consonant_suffix = consonant_suffix

    @property
    def name(self) -> str:
        return "piglatin"

    @property
    def description(self) -> str:
        return "Pig Latin (consonant cluster + 'ay')"

    def transform(self, word: str) -> str:
        return to_pig_latin(word, self.vowel_suffix, self.consonant_suffix)
