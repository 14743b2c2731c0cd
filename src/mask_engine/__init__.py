"""UI-agnostic masked text-field editing engine."""

from mask_engine.buffer import Selection
from mask_engine.engine import InputMask, MaskOptions
from mask_engine.errors import (
    EmptyPatternError,
    InputMaskError,
    InvalidPlaceholderError,
    MissingPatternError,
    UnterminatedEscapeError,
)
from mask_engine.formats import FormatCharacter, FormatCharacterRegistry
from mask_engine.pattern import Pattern, compile_pattern

__all__ = [
    "adapters",
    "buffer",
    "engine",
    "formats",
    "pattern",
    "runtime",
    "EmptyPatternError",
    "FormatCharacter",
    "FormatCharacterRegistry",
    "InputMask",
    "InputMaskError",
    "InvalidPlaceholderError",
    "MaskOptions",
    "MissingPatternError",
    "Pattern",
    "Selection",
    "UnterminatedEscapeError",
    "compile_pattern",
]

__version__ = "0.1.0"
