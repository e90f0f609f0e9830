"""
Project-wide configuration for potlatin.

This module defines the policy enum, catalog line markers and defaults
shared by the scanner and the command line.

Module Contents:
    Policy: How markup inside catalog strings is handled
    DEFAULT_POLICY: Policy used when none is configured
    DEFAULT_TRANSFORM: Word transform used when none is configured
    DEFAULT_OUTPUT: Output file written when no destination is given
    REVISION_DATE_FORMAT: strftime format of the PO-Revision-Date header

Example:
    >>> from potlatin.config import Policy
    >>> Policy.parse("require")
    <Policy.REQUIRE: 'require'>
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from potlatin.errors import ConfigurationError


class Policy(str, Enum):
    """Markup handling policy, fixed for the duration of a run."""

    IGNORE = "ignore"     # never tokenize markup
    REQUIRE = "require"   # markup errors are fatal
    ATTEMPT = "attempt"   # markup errors fall back to plain words

    @classmethod
    def parse(cls, value: Optional[str]) -> "Policy":
        """Parse a policy name; ``None`` and empty string mean ATTEMPT.

        Raises:
            ConfigurationError: If the value names no policy
        """
        if isinstance(value, cls):
            return value
        if value is None or value == "":
            return DEFAULT_POLICY
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ConfigurationError(
                f"invalid html style: {value} (expected one of: {choices})",
                value=value,
            ) from None


DEFAULT_POLICY = Policy.ATTEMPT

# Word transform used by the CLI
DEFAULT_TRANSFORM = "piglatin"

# Output file written when no -o option is given
DEFAULT_OUTPUT = "x-piglatin.po"

# Output destination meaning standard output
STDOUT_MARKER = "-"

# Catalog line markers
SOURCE_MARKER = "msgid "
PLURAL_MARKER = "msgid_plural "
CONTEXT_MARKER = "msgctxt "
OUTPUT_MARKER = "msgstr"
REVISION_MARKER = '"PO-Revision-Date:'

REVISION_DATE_FORMAT = "%Y-%m-%d %H:%M%z"

# Environment variables backing CLI defaults
ENV_POLICY = "POTLATIN_HTML"
ENV_TRANSFORM = "POTLATIN_TRANSFORM"


@dataclass
class CatalogConfig:
    """Settings for one catalog run."""
    policy: Policy = DEFAULT_POLICY
    transform: str = DEFAULT_TRANSFORM
    output: Optional[str] = None

    def __post_init__(self):
        self.policy = Policy.parse(self.policy)

    @property
    def output_path(self) -> str:
        """Destination, resolving an unset output to DEFAULT_OUTPUT."""
        return self.output or DEFAULT_OUTPUT

    @property
    def writes_stdout(self) -> bool:
        return self.output == STDOUT_MARKER

    def to_dict(self) -> dict:
        """Serialize config for logging/debugging."""
        return {
            "policy": self.policy.value,
            "transform": self.transform,
            "output": self.output_path,
        }
