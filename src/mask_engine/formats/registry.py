"""Registry mapping mask symbols to their format character definitions."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

from mask_engine.runtime.telemetry import span

from .defaults import DEFAULT_FORMAT_CHARACTERS
from .models import FormatCharacter

FormatOverrides = Mapping[str, Any]


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    symbol_count: int
    symbols: tuple[str, ...]
    transforming: tuple[str, ...]


class FormatCharacterRegistry:
    """Immutable lookup of editable symbols.

    ``merge`` never mutates the receiver; it returns a new registry so that a
    compiled ``Pattern`` can keep a reference to the registry it was built from.
    """

    __slots__ = ("_characters",)

    def __init__(self, characters: Optional[Mapping[str, FormatCharacter]] = None) -> None:
        resolved = {
            symbol: FormatCharacter.coerce(symbol, definition)
            for symbol, definition in (characters or {}).items()
        }
        self._characters: Mapping[str, FormatCharacter] = MappingProxyType(resolved)

    @classmethod
    def defaults(cls) -> "FormatCharacterRegistry":
        return cls(DEFAULT_FORMAT_CHARACTERS)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._characters

    def __iter__(self) -> Iterator[str]:
        return iter(self._characters)

    def __len__(self) -> int:
        return len(self._characters)

    def __repr__(self) -> str:
        return f"FormatCharacterRegistry(symbols={''.join(self._characters)!r})"

    def get(self, symbol: str) -> FormatCharacter:
        try:
            return self._characters[symbol]
        except KeyError as exc:
            raise KeyError(f"Format character '{symbol}' is not registered") from exc

    def is_valid(self, symbol: str, char: str) -> bool:
        return self.get(symbol).accepts(char)

    def transform(self, symbol: str, char: str) -> str:
        return self.get(symbol).apply(char)

    def merge(self, overrides: Optional[FormatOverrides]) -> "FormatCharacterRegistry":
        """Return a registry with ``overrides`` applied on top of this one.

        ``None`` for a symbol removes it; any other value replaces or adds it.
        """

        if not overrides:
            return self

        with span(
            "formats::merge",
            component="formats",
            metadata={"symbols": "".join(overrides)},
        ) as handle:
            merged = dict(self._characters)
            removed = []
            for symbol, definition in overrides.items():
                if definition is None:
                    if merged.pop(symbol, None) is not None:
                        removed.append(symbol)
                    continue
                merged[symbol] = FormatCharacter.coerce(symbol, definition)
            if removed:
                handle.add_metadata("removed", "".join(removed))
            return FormatCharacterRegistry(merged)

    def stats(self) -> RegistryStats:
        return RegistryStats(
            symbol_count=len(self._characters),
            symbols=tuple(sorted(self._characters)),
            transforming=tuple(
                sorted(
                    symbol
                    for symbol, character in self._characters.items()
                    if character.transform is not None
                )
            ),
        )


def merge_format_characters(
    overrides: Optional[FormatOverrides] = None,
) -> FormatCharacterRegistry:
    """Merge caller overrides into the built-in format characters."""

    return FormatCharacterRegistry.defaults().merge(overrides)


__all__ = [
    "FormatCharacterRegistry",
    "FormatOverrides",
    "RegistryStats",
    "merge_format_characters",
]
