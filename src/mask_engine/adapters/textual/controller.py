"""Textual adapter that forwards key, paste and selection events to an InputMask."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from mask_engine.buffer import MaskMirror, Selection
from mask_engine.engine import InputMask
from mask_engine.runtime import telemetry


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_field: Callable[[MaskMirror], None]
    update_status: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


@dataclass(slots=True)
class EditResult:
    """Outcome of one forwarded host event."""

    consumed: bool
    changed: bool = False
    operation: Optional[str] = None


UNDO_KEYS = frozenset({"ctrl+z"})
REDO_KEYS = frozenset({"ctrl+y", "ctrl+shift+z"})


class TextualMaskAdapter:
    """Bridges host events to ``InputMask`` operations and mirrors the result."""

    def __init__(self, mask: InputMask, hooks: TextualUIHooks) -> None:
        self.mask = mask
        self.hooks = hooks
        self._refresh_field()

    def pull_mask(self) -> MaskMirror:
        return self.mask.mirror()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> EditResult:
        """Translate a Textual key event into a mask operation."""

        token = _key_token(key, modifiers)
        self._log_state("key ->", key=token, text=text)

        if token == "backspace":
            result = self._apply("backspace", self.mask.backspace())
        elif token in UNDO_KEYS:
            result = self._apply("undo", self.mask.undo())
        elif token in REDO_KEYS:
            result = self._apply("redo", self.mask.redo())
        elif token in {"left", "right", "home", "end"}:
            result = self._move_cursor(token)
        elif text is not None and len(text) == 1 and text.isprintable():
            result = self._apply("input", self.mask.input(text))
        else:
            result = EditResult(consumed=False)

        self._log_state(
            "result <-",
            consumed=result.consumed,
            changed=result.changed,
            operation=result.operation,
        )
        return result

    def handle_paste(self, text: str) -> EditResult:
        self._log_state("paste ->", length=len(text))
        return self._apply("paste", self.mask.paste(text))

    def handle_selection(self, start: int, end: int) -> EditResult:
        length = self.mask.pattern.length
        start, end = sorted(min(max(offset, 0), length) for offset in (start, end))
        before = self.mask.selection
        self.mask.set_selection(Selection(start, end))
        return self._apply("select", self.mask.selection != before)

    def _move_cursor(self, token: str) -> EditResult:
        selection = self.mask.selection
        length = self.mask.pattern.length
        if token == "left":
            target = selection.start - 1 if selection.is_collapsed else selection.start
        elif token == "right":
            target = selection.end + 1 if selection.is_collapsed else selection.end
        elif token == "home":
            target = 0
        else:
            target = length
        target = min(max(target, 0), length)
        before = self.mask.selection
        self.mask.set_selection(Selection.collapsed_at(target))
        return self._apply("move", self.mask.selection != before)

    def _apply(self, operation: str, changed: bool) -> EditResult:
        status = operation if changed else f"{operation}:rejected"
        if not changed:
            telemetry.record_event(
                "adapter.rejected",
                level="debug",
                data={"operation": operation, "value": self.mask.get_value()},
                logger_name="mask_engine.adapters.textual",
            )
        self.hooks.update_status(status)
        self._refresh_field()
        return EditResult(consumed=True, changed=changed, operation=operation)

    def _refresh_field(self) -> None:
        self.hooks.update_field(self.mask.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        mask = self.mask
        return {
            "pattern": mask.pattern.source,
            "value": mask.get_value(),
            "selection": mask.selection.as_tuple(),
            "history": len(mask.history),
            "replaying": mask.history.is_replaying,
        }


def _key_token(key: str, modifiers: Iterable[str]) -> str:
    normalized = [str(mod).lower() for mod in modifiers if str(mod).strip()]
    lowered = key.lower()
    if normalized and not any(lowered.startswith(f"{mod}+") for mod in normalized):
        return "+".join([*normalized, lowered])
    return lowered if len(key) > 1 else key


__all__ = ["EditResult", "TextualMaskAdapter", "TextualUIHooks"]
