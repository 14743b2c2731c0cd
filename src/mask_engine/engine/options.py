"""Construction options for ``InputMask``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from mask_engine.buffer import Selection, SelectionLike
from mask_engine.errors import InvalidPlaceholderError, MissingPatternError
from mask_engine.formats import FormatOverrides
from mask_engine.pattern import DEFAULT_PLACEHOLDER_CHAR


@dataclass(frozen=True, slots=True)
class MaskOptions:
    pattern: Optional[str]
    format_characters: Optional[FormatOverrides] = None
    is_revealing_mask: bool = False
    placeholder_char: str = DEFAULT_PLACEHOLDER_CHAR
    value: str = ""
    selection: Optional[SelectionLike] = None
    history_limit: Optional[int] = None

    def __post_init__(self) -> None:
        if self.pattern is None:
            raise MissingPatternError()
        if not isinstance(self.placeholder_char, str) or len(self.placeholder_char) > 1:
            raise InvalidPlaceholderError(self.placeholder_char)
        if self.selection is not None:
            object.__setattr__(self, "selection", Selection.coerce(self.selection))
        if self.history_limit is not None and self.history_limit < 1:
            raise ValueError("history_limit must be positive")


__all__ = ["MaskOptions"]
