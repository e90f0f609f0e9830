"""
Swedish-chef word transform.

Rewrites vowels and a few consonant clusters so translated strings stand
out from untranslated English while staying readable:

    "the window" -> "zee veendoo"

A rule may be limited to the first letter of a word or to the letters after
it, and may demand that a word or non-word character follows the match. The
end of a word counts as a non-word character.
"""

from __future__ import annotations

import string
from typing import NamedTuple

from potlatin.transform.base import WordTransform


class Rule(NamedTuple):
    inside_word: bool       # only applies after the first letter
    word_start: bool        # only applies at the first letter
    match: str
    before_word_char: bool  # next char must be a word char
    before_boundary: bool   # next char must not be a word char
    replacement: str


RULES = (
    Rule(False, False, "an", False, False, "un"),
    Rule(False, False, "An", False, False, "Un"),
    Rule(False, False, "au", False, False, "oo"),
    Rule(False, False, "Au", False, False, "Oo"),
    Rule(False, False, "a", True, False, "e"),
    Rule(False, False, "A", True, False, "E"),
    Rule(False, False, "en", False, True, "ee"),
    Rule(True, False, "ew", False, False, "oo"),
    Rule(True, False, "e", False, True, "e-a"),
    Rule(False, True, "e", False, False, "i"),
    Rule(False, True, "E", False, False, "I"),
    Rule(True, False, "f", False, False, "ff"),
    Rule(True, False, "ir", False, False, "ur"),
    Rule(True, False, "i", False, False, "ee"),
    Rule(True, False, "ow", False, False, "oo"),
    Rule(False, True, "o", False, False, "oo"),
    Rule(False, True, "O", False, False, "Oo"),
    Rule(True, False, "o", False, False, "u"),
    Rule(False, False, "the", False, False, "zee"),
    Rule(False, False, "The", False, False, "Zee"),
    Rule(False, False, "th", False, True, "t"),
    Rule(True, False, "tion", False, False, "shun"),
    Rule(True, False, "u", False, False, "oo"),
    Rule(True, False, "U", False, False, "Oo"),
    Rule(False, False, "v", False, False, "f"),
    Rule(False, False, "V", False, False, "F"),
    Rule(False, False, "w", False, False, "v"),
    Rule(False, False, "W", False, False, "V"),
)


def _is_word_char(c: str) -> bool:
    return c == "'" or (c != "" and c in string.ascii_letters)


def chef_transform(word: str) -> str:
    """Apply the chef rules to one word.

    Raises:
        ValueError: If ``word`` is empty
    """
    if not word:
        raise ValueError("empty word")

    out = []
    rest = word
    in_word = False
    while rest:
        for rule in RULES:
            if rule.inside_word and not in_word:
                continue
            if rule.word_start and in_word:
                continue
            if not rest.startswith(rule.match):
                continue
            following = rest[len(rule.match):len(rule.match) + 1]
            if rule.before_word_char and not _is_word_char(following):
                continue
            if rule.before_boundary and _is_word_char(following):
                continue
            out.append(rule.replacement)
            rest = rest[len(rule.match):]
            break
        else:
            out.append(rest[0])
            rest = rest[1:]
        in_word = True
    return "".join(out)


class ChefTransform(WordTransform):
    """Bork bork bork."""

    @property
    def name(self) -> str:
        return "chef"

    @property
    def description(self) -> str:
        return "Swedish chef vowel shuffle"

    def transform(self, word: str) -> str:
        return chef_transform(word)
