"""
Word transform interface and simple implementations.

This module defines:
- Abstract WordTransform interface that all transforms implement
- DummyTransform for testing (echo, upper, reverse)
- create_transform() factory used by the CLI

Failure contract: a transform rejects a word by raising ValueError. The
word-boundary layer turns that into WordTransformError; anything else
propagates unchanged.

Design Philosophy:
- Transforms are stateless: one alphabetic run in, one string out
- Instances are callable, so the core accepts a transform or a plain function
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from potlatin.errors import ConfigurationError


class WordTransform(ABC):
    """Abstract base class for word transforms."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the transform name (e.g., 'piglatin', 'chef')."""
        pass

    @property
    def description(self) -> str:
        return ""

    @abstractmethod
    def transform(self, word: str) -> str:
        """Transform one run of ASCII letters.

        Raises:
            ValueError: If the word cannot be transformed
        """
        pass

    def __call__(self, word: str) -> str:
        return self.transform(word)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class DummyTransform(WordTransform):
    """A dummy transform for testing.

    Modes:
    - 'echo': Return the word unchanged
    - 'upper': Return uppercase version
    - 'reverse': Reverse the word
    """

    MODES = ("echo", "upper", "reverse")

    def __init__(self, mode: str = "echo"):
        if mode not in self.MODES:
            raise ConfigurationError(f"Unknown dummy mode: {mode}", value=mode)
        self.mode = mode

    @property
    def name(self) -> str:
        return self.mode

    @property
    def description(self) -> str:
        return f"Testing aid ({self.mode})"

    def transform(self, word: str) -> str:
        if self.mode == "upper":
            return word.upper()
        if self.mode == "reverse":
            return word[::-1]
        return word


def available_transforms() -> dict[str, WordTransform]:
    """All registered transforms keyed by name."""
    from potlatin.transform.chef import ChefTransform
    from potlatin.transform.piglatin import PigLatinTransform

    transforms = [PigLatinTransform(), ChefTransform()]
    transforms.extend(DummyTransform(mode) for mode in DummyTransform.MODES)
    return {t.name: t for t in transforms}


def create_transform(name: str, **kwargs) -> WordTransform:
    """Factory function to create a word transform by name.

    Args:
        name: Transform name ('piglatin', 'chef', 'echo', 'upper', 'reverse')
        **kwargs: Transform-specific arguments

    Returns:
        Configured WordTransform instance

    Raises:
        ConfigurationError: If no transform has that name
    """
    key = (name or "").strip().lower().replace("_", "-")

    if key in ("piglatin", "pig-latin", "pig"):
        from potlatin.transform.piglatin import PigLatinTransform
        return PigLatinTransform(**kwargs)

    elif key in ("chef", "swedish-chef", "bork"):
        from potlatin.transform.chef import ChefTransform
        return ChefTransform()

    elif key in DummyTransform.MODES:
        return DummyTransform(mode=key)

    raise ConfigurationError(
        f"Unknown word transform: {name}. "
        f"Available transforms: {', '.join(available_transforms())}",
        value=name,
    )
