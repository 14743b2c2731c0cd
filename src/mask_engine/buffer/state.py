"""Selection state shared by the engine and host adapters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True, slots=True)
class Selection:
    """Half-open ``[start, end)`` range of buffer offsets; collapsed when equal."""

    start: int = 0
    end: int = 0

    @classmethod
    def collapsed_at(cls, offset: int) -> "Selection":
        return cls(offset, offset)

    @classmethod
    def coerce(cls, value: "SelectionLike") -> "Selection":
        if isinstance(value, Selection):
            return value
        start, end = value
        return cls(int(start), int(end))

    @property
    def is_collapsed(self) -> bool:
        return self.start == self.end

    def as_tuple(self) -> Tuple[int, int]:
        return (self.start, self.end)


SelectionLike = Union[Selection, Tuple[int, int]]


__all__ = ["Selection", "SelectionLike"]
