"""Built-in format characters."""

from __future__ import annotations

import re
from typing import Dict

from .models import FormatCharacter

_DIGIT_RE = re.compile(r"[0-9]")
_LETTER_RE = re.compile(r"[A-Za-z]")
_ALPHANUMERIC_RE = re.compile(r"[0-9A-Za-z]")


def is_digit(char: str) -> bool:
    return _DIGIT_RE.fullmatch(char) is not None


def is_letter(char: str) -> bool:
    return _LETTER_RE.fullmatch(char) is not None


def is_alphanumeric(char: str) -> bool:
    return _ALPHANUMERIC_RE.fullmatch(char) is not None


def to_upper(char: str) -> str:
    return char.upper()


def _defaults() -> Dict[str, FormatCharacter]:
    return {
        "*": FormatCharacter("*", is_alphanumeric, description="alphanumeric"),
        "1": FormatCharacter("1", is_digit, description="digit"),
        "a": FormatCharacter("a", is_letter, description="letter"),
        "A": FormatCharacter(
            "A", is_letter, to_upper, description="letter, stored uppercase"
        ),
        "#": FormatCharacter(
            "#", is_alphanumeric, to_upper, description="alphanumeric, stored uppercase"
        ),
    }


DEFAULT_FORMAT_CHARACTERS = _defaults()


__all__ = [
    "DEFAULT_FORMAT_CHARACTERS",
    "is_alphanumeric",
    "is_digit",
    "is_letter",
    "to_upper",
]
