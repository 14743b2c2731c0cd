"""Editable mask symbols and the registry that resolves them."""

from .defaults import DEFAULT_FORMAT_CHARACTERS
from .models import ESCAPE_CHAR, FormatCharacter
from .registry import (
    FormatCharacterRegistry,
    FormatOverrides,
    RegistryStats,
    merge_format_characters,
)

__all__ = [
    "DEFAULT_FORMAT_CHARACTERS",
    "ESCAPE_CHAR",
    "FormatCharacter",
    "FormatCharacterRegistry",
    "FormatOverrides",
    "RegistryStats",
    "merge_format_characters",
]
