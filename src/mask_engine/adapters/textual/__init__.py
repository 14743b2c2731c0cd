"""Textual host adapter for input masks."""

from .controller import EditResult, TextualMaskAdapter, TextualUIHooks

__all__ = ["EditResult", "TextualMaskAdapter", "TextualUIHooks"]
