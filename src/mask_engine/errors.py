"""Exception types raised while configuring masks."""

from __future__ import annotations

from typing import Optional, Tuple


class InputMaskError(ValueError):
    """Base class for every construction-time failure in ``mask_engine``."""


class MissingPatternError(InputMaskError):
    def __init__(self) -> None:
        super().__init__("InputMask: you must provide a pattern.")


class InvalidPlaceholderError(InputMaskError):
    def __init__(self, placeholder: object) -> None:
        super().__init__(
            "InputMask: placeholder_char should be a single character or an empty string."
        )
        self.placeholder = placeholder


class PatternError(InputMaskError):
    """Raised when a mask source cannot be compiled."""

    def __init__(self, message: str, *, source: str) -> None:
        super().__init__(message)
        self.source = source


class UnterminatedEscapeError(PatternError):
    def __init__(self, source: str, escape_char: str) -> None:
        super().__init__(
            f"InputMask: pattern ends with a raw {escape_char}", source=source
        )
        self.escape_char = escape_char


class EmptyPatternError(PatternError):
    def __init__(self, source: str) -> None:
        super().__init__(
            f'InputMask: pattern "{source}" does not contain any editable characters.',
            source=source,
        )


class FormatCharacterError(InputMaskError):
    """Raised when a format character definition is malformed."""

    def __init__(self, message: str, *, symbol: Optional[str] = None) -> None:
        super().__init__(message)
        self.symbol = symbol


class SelectionError(InputMaskError):
    """Raised when hosts provide out-of-bounds selection offsets."""

    def __init__(
        self, message: str, *, selection: Optional[Tuple[int, int]] = None
    ) -> None:
        super().__init__(message)
        self.selection = selection


__all__ = [
    "InputMaskError",
    "MissingPatternError",
    "InvalidPlaceholderError",
    "PatternError",
    "UnterminatedEscapeError",
    "EmptyPatternError",
    "FormatCharacterError",
    "SelectionError",
]
