"""
potlatin: pseudo-translate gettext message catalogs.

Rewrites every msgstr of a .pot/.po file with a word-level transform of its
msgid (Pig Latin by default) while leaving the rest of the catalog as it
was. Strings containing HTML only have their text nodes transformed.

License: MIT
"""

__version__ = "0.1.0"

from potlatin.catalog import CatalogScanner, ScanResult, translate_catalog
from potlatin.config import Policy
from potlatin.dispatch import TranslationDispatcher
from potlatin.errors import (
    ConfigurationError,
    ParseError,
    PotlatinError,
    TranslationError,
    WordTransformError,
)

__all__ = [
    "CatalogScanner",
    "ScanResult",
    "translate_catalog",
    "Policy",
    "TranslationDispatcher",
    "PotlatinError",
    "ParseError",
    "WordTransformError",
    "TranslationError",
    "ConfigurationError",
]
