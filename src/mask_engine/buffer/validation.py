"""Validation helpers shared across buffer services."""

from __future__ import annotations

from mask_engine.errors import SelectionError

from .state import Selection


def ensure_selection(selection: Selection, length: int) -> Selection:
    if selection.start < 0 or selection.end < 0:
        raise SelectionError("Selection offsets must be non-negative", selection=selection.as_tuple())
    if selection.start > selection.end:
        raise SelectionError("Selection start is after its end", selection=selection.as_tuple())
    if selection.end > length:
        raise SelectionError(
            f"Selection end is past the pattern length {length}",
            selection=selection.as_tuple(),
        )
    return selection


__all__ = ["ensure_selection"]
