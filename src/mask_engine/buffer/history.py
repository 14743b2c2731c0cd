"""Linear undo/redo history for input masks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .state import Selection


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """Buffer cells and selection captured before a run of edits."""

    cells: Tuple[str, ...]
    selection: Selection
    last_op: Optional[str]
    start_undo: bool = False

    def matches(self, other: "HistoryEntry") -> bool:
        return self.cells == other.cells and self.selection == other.selection


@dataclass(frozen=True, slots=True)
class Live:
    """New edits append to the history."""


@dataclass(frozen=True, slots=True)
class Replaying:
    """Undo/redo is walking the history; ``index`` is the restored entry."""

    index: int


HistoryCursor = Union[Live, Replaying]

LIVE = Live()


@dataclass(frozen=True, slots=True)
class HistorySnapshot:
    entries: Tuple[HistoryEntry, ...]
    cursor: HistoryCursor


class UndoHistory:
    """Snapshots of the state *before* each run of edits.

    ``limit`` caps the number of stored entries; the oldest are evicted while
    appending. ``None`` keeps every entry.
    """

    def __init__(self, *, limit: Optional[int] = None) -> None:
        if limit is not None and limit < 1:
            raise ValueError("history limit must be positive")
        self._entries: List[HistoryEntry] = []
        self._cursor: HistoryCursor = LIVE
        self.limit = limit

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def cursor(self) -> HistoryCursor:
        return self._cursor

    @property
    def entries(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    @property
    def is_replaying(self) -> bool:
        return isinstance(self._cursor, Replaying)

    def clear(self) -> None:
        self._entries.clear()
        self._cursor = LIVE

    def discard_redo(self) -> int:
        """Drop the restored entry and everything after it; return to ``Live``.

        Returns the number of entries removed.
        """

        if not isinstance(self._cursor, Replaying):
            return 0
        removed = len(self._entries) - self._cursor.index
        del self._entries[self._cursor.index :]
        self._cursor = LIVE
        return removed

    def record(self, entry: HistoryEntry) -> None:
        self._entries.append(entry)
        if self.limit is not None and len(self._entries) > self.limit:
            del self._entries[: len(self._entries) - self.limit]

    def step_back(self, current: HistoryEntry) -> Optional[HistoryEntry]:
        """Move one entry back, returning the entry to restore.

        ``current`` describes the live state; on the first step it is appended
        as a ``start_undo`` entry when it differs from the newest entry so that
        redo can return to it.
        """

        if not self._entries:
            return None

        cursor = self._cursor
        if isinstance(cursor, Replaying):
            if cursor.index == 0:
                return None
            index = cursor.index - 1
        else:
            index = len(self._entries) - 1
            newest = self._entries[index]
            if not newest.matches(current):
                self._entries.append(
                    HistoryEntry(
                        cells=current.cells,
                        selection=current.selection,
                        last_op=current.last_op,
                        start_undo=True,
                    )
                )

        self._cursor = Replaying(index)
        return self._entries[index]

    def step_forward(self) -> Optional[HistoryEntry]:
        cursor = self._cursor
        if not isinstance(cursor, Replaying):
            return None

        index = cursor.index + 1
        if index >= len(self._entries):
            # Already showing the newest entry.
            self._cursor = LIVE
            return None

        entry = self._entries[index]
        if index == len(self._entries) - 1:
            self._cursor = LIVE
            if entry.start_undo:
                self._entries.pop()
        else:
            self._cursor = Replaying(index)
        return entry

    def snapshot(self) -> HistorySnapshot:
        return HistorySnapshot(entries=tuple(self._entries), cursor=self._cursor)

    def restore(self, snapshot: HistorySnapshot) -> None:
        self._entries = list(snapshot.entries)
        self._cursor = snapshot.cursor


__all__ = [
    "HistoryCursor",
    "HistoryEntry",
    "HistorySnapshot",
    "LIVE",
    "Live",
    "Replaying",
    "UndoHistory",
]
