"""Selection, history, and host-sync data structures."""

from .history import (
    LIVE,
    HistoryCursor,
    HistoryEntry,
    HistorySnapshot,
    Live,
    Replaying,
    UndoHistory,
)
from .state import Selection, SelectionLike
from .sync import MaskMirror, MaskSync
from .validation import ensure_selection

__all__ = [
    "HistoryCursor",
    "HistoryEntry",
    "HistorySnapshot",
    "LIVE",
    "Live",
    "Replaying",
    "UndoHistory",
    "Selection",
    "SelectionLike",
    "MaskMirror",
    "MaskSync",
    "ensure_selection",
]
