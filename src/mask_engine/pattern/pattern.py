"""Compiled mask patterns.

A ``Pattern`` is built once from a mask source and then shared read-only by
every editing operation. Each resolved character of the source becomes one
slot; slots whose character is a registered format symbol are editable, every
other slot is a literal rendered verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

from mask_engine.errors import EmptyPatternError, UnterminatedEscapeError
from mask_engine.formats import ESCAPE_CHAR, FormatCharacterRegistry
from mask_engine.runtime.telemetry import span

DEFAULT_PLACEHOLDER_CHAR = "_"


@dataclass(frozen=True, slots=True)
class EditableBounds:
    """Index of the first and last editable slot of a compiled pattern."""

    first: int
    last: int

    def __post_init__(self) -> None:
        if self.first < 0 or self.last < self.first:
            raise ValueError(f"Invalid editable bounds ({self.first}, {self.last})")


@dataclass(frozen=True, slots=True)
class Slot:
    index: int
    char: str
    editable: bool


@dataclass(frozen=True, slots=True)
class Pattern:
    """Immutable template produced by ``Pattern.compile``."""

    source: str
    slots: tuple[str, ...]
    editable_indices: frozenset[int]
    bounds: EditableBounds
    registry: FormatCharacterRegistry = field(repr=False)
    placeholder_char: str = DEFAULT_PLACEHOLDER_CHAR
    is_revealing_mask: bool = False

    @classmethod
    def compile(
        cls,
        source: str,
        registry: Optional[FormatCharacterRegistry] = None,
        *,
        placeholder_char: str = DEFAULT_PLACEHOLDER_CHAR,
        is_revealing_mask: bool = False,
    ) -> "Pattern":
        registry = registry if registry is not None else FormatCharacterRegistry.defaults()
        with span(
            "pattern::compile",
            component="pattern",
            metadata={"source": source, "revealing": is_revealing_mask},
        ) as handle:
            slots: List[str] = []
            editable: set[int] = set()
            first: Optional[int] = None
            last: Optional[int] = None

            chars = iter(source)
            for char in chars:
                if char == ESCAPE_CHAR:
                    escaped = next(chars, None)
                    if escaped is None:
                        raise UnterminatedEscapeError(source, ESCAPE_CHAR)
                    slots.append(escaped)
                    continue

                if char in registry:
                    index = len(slots)
                    if first is None:
                        first = index
                    last = index
                    editable.add(index)
                slots.append(char)

            if first is None or last is None:
                raise EmptyPatternError(source)

            handle.add_metadata("length", len(slots))
            handle.add_metadata("editable", len(editable))
            return cls(
                source=source,
                slots=tuple(slots),
                editable_indices=frozenset(editable),
                bounds=EditableBounds(first, last),
                registry=registry,
                placeholder_char=placeholder_char,
                is_revealing_mask=is_revealing_mask,
            )

    @property
    def length(self) -> int:
        return len(self.slots)

    def __len__(self) -> int:
        return len(self.slots)

    @property
    def first_editable_index(self) -> int:
        return self.bounds.first

    @property
    def last_editable_index(self) -> int:
        return self.bounds.last

    def iter_slots(self) -> Iterator[Slot]:
        for index, char in enumerate(self.slots):
            yield Slot(index, char, index in self.editable_indices)

    def is_editable_index(self, index: int) -> bool:
        return index in self.editable_indices

    def is_valid_at_index(self, char: Optional[str], index: int) -> bool:
        if char is None or not self.is_editable_index(index):
            return False
        return self.registry.is_valid(self.slots[index], char)

    def transform(self, char: str, index: int) -> str:
        return self.registry.transform(self.slots[index], char)

    def format_value(self, value: Sequence[str]) -> List[str]:
        """Lay ``value`` out over the pattern slots.

        Literal characters present in ``value`` at the matching position are
        consumed alongside the literal slot. Every editable slot consumes one
        character of ``value`` whether or not it is valid there; invalid or
        missing characters are shown as the placeholder. A revealing mask stops
        at the first editable slot once ``value`` is exhausted.
        """

        buffer: List[str] = []
        position = 0
        available = len(value)

        for index, char in enumerate(self.slots):
            if index in self.editable_indices:
                if self.is_revealing_mask and position >= available:
                    break
                candidate = value[position] if position < available else None
                if candidate is not None and self.is_valid_at_index(candidate, index):
                    buffer.append(self.transform(candidate, index))
                else:
                    buffer.append(self.placeholder_char)
                position += 1
            else:
                buffer.append(char)
                if position < available and value[position] == char:
                    position += 1

        return buffer

    @property
    def empty_value(self) -> str:
        return "".join(self.format_value(()))


def compile_pattern(
    source: str,
    registry: Optional[FormatCharacterRegistry] = None,
    *,
    placeholder_char: str = DEFAULT_PLACEHOLDER_CHAR,
    is_revealing_mask: bool = False,
) -> Pattern:
    return Pattern.compile(
        source,
        registry,
        placeholder_char=placeholder_char,
        is_revealing_mask=is_revealing_mask,
    )


__all__ = [
    "DEFAULT_PLACEHOLDER_CHAR",
    "EditableBounds",
    "Pattern",
    "Slot",
    "compile_pattern",
]
