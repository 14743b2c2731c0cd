"""Snapshot-and-rollback support for multi-step edits."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from mask_engine.buffer import HistorySnapshot, Selection

if TYPE_CHECKING:  # pragma: no cover
    from .input_mask import InputMask


@dataclass(frozen=True, slots=True)
class EngineSnapshot:
    value: tuple[str, ...]
    selection: Selection
    last_op: Optional[str]
    last_selection: Optional[Selection]
    history: HistorySnapshot


class EditTransaction(AbstractContextManager["EditTransaction"]):
    """Captures the mask state on entry and restores it on ``rollback``.

    An exception escaping the block rolls back automatically.
    """

    def __init__(self, mask: "InputMask", label: str) -> None:
        self.mask = mask
        self.label = label
        self.rolled_back = False
        self._snapshot: Optional[EngineSnapshot] = None

    def __enter__(self) -> "EditTransaction":
        self._snapshot = self.mask.capture()
        return self

    def rollback(self) -> None:
        if self._snapshot is None:
            raise RuntimeError(f"Transaction '{self.label}' was never entered")
        self.mask.restore(self._snapshot)
        self.rolled_back = True

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None and not self.rolled_back:
            self.rollback()
        return False


__all__ = ["EditTransaction", "EngineSnapshot"]
