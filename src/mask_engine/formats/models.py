"""Dataclasses describing editable mask symbols."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from mask_engine.errors import FormatCharacterError

ESCAPE_CHAR = "\\"

Validator = Callable[[str], bool]
Transformer = Callable[[str], str]


@dataclass(frozen=True, slots=True)
class FormatCharacter:
    """An editable symbol: which characters it accepts and how they are stored."""

    symbol: str
    validate: Validator
    transform: Optional[Transformer] = None
    description: str = ""

    def __post_init__(self) -> None:
        if len(self.symbol) != 1:
            raise FormatCharacterError(
                f"Format character '{self.symbol}' must be a single character",
                symbol=self.symbol,
            )
        if self.symbol == ESCAPE_CHAR:
            raise FormatCharacterError(
                "The escape character cannot be used as a format character",
                symbol=self.symbol,
            )
        if not callable(self.validate):
            raise FormatCharacterError(
                f"Format character '{self.symbol}' needs a callable validate",
                symbol=self.symbol,
            )
        if self.transform is not None and not callable(self.transform):
            raise FormatCharacterError(
                f"Format character '{self.symbol}' has a non-callable transform",
                symbol=self.symbol,
            )

    def accepts(self, char: str) -> bool:
        return bool(self.validate(char))

    def apply(self, char: str) -> str:
        if self.transform is None:
            return char
        return self.transform(char)

    @classmethod
    def coerce(cls, symbol: str, definition: Any) -> "FormatCharacter":
        """Build a ``FormatCharacter`` from an instance or a ``validate``/``transform`` mapping."""

        if isinstance(definition, FormatCharacter):
            if definition.symbol == symbol:
                return definition
            return cls(
                symbol,
                definition.validate,
                definition.transform,
                definition.description,
            )
        if isinstance(definition, Mapping):
            if "validate" not in definition:
                raise FormatCharacterError(
                    f"Format character '{symbol}' is missing 'validate'",
                    symbol=symbol,
                )
            return cls(
                symbol,
                definition["validate"],
                definition.get("transform"),
                str(definition.get("description", "")),
            )
        raise FormatCharacterError(
            f"Unsupported definition for format character '{symbol}': {definition!r}",
            symbol=symbol,
        )


__all__ = [
    "ESCAPE_CHAR",
    "FormatCharacter",
    "Transformer",
    "Validator",
]
