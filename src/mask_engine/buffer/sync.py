"""Adapter boundary types for syncing masks with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from .state import Selection


@dataclass(slots=True)
class MaskMirror:
    """Host-friendly snapshot describing the current mask state."""

    text: str
    raw: str
    selection: Selection
    attributes: dict[str, str] = field(default_factory=dict)


class MaskSync(Protocol):
    """Protocol describing how adapters exchange data with an input mask."""

    def pull_mask(self) -> MaskMirror:
        """Return the latest mask snapshot that the host should render."""
        ...


__all__ = ["MaskMirror", "MaskSync"]
