"""Word transforms applied to each alphabetic run of a catalog string."""

from potlatin.transform.base import (
    DummyTransform,
    WordTransform,
    available_transforms,
    create_transform,
)
from potlatin.transform.chef import ChefTransform
from potlatin.transform.piglatin import PigLatinTransform

__all__ = [
    "WordTransform",
    "DummyTransform",
    "PigLatinTransform",
    "ChefTransform",
    "create_transform",
    "available_transforms",
]
