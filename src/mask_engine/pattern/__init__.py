"""Mask pattern compilation and value formatting."""

from .pattern import (
    DEFAULT_PLACEHOLDER_CHAR,
    EditableBounds,
    Pattern,
    Slot,
    compile_pattern,
)

__all__ = [
    "DEFAULT_PLACEHOLDER_CHAR",
    "EditableBounds",
    "Pattern",
    "Slot",
    "compile_pattern",
]
