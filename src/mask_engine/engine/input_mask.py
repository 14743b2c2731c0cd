"""Cursor-aware editing of a value constrained by a mask pattern."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional

from mask_engine.buffer import (
    HistoryEntry,
    MaskMirror,
    Selection,
    SelectionLike,
    UndoHistory,
    ensure_selection,
)
from mask_engine.formats import (
    FormatCharacterRegistry,
    FormatOverrides,
    merge_format_characters,
)
from mask_engine.pattern import DEFAULT_PLACEHOLDER_CHAR, Pattern
from mask_engine.runtime import telemetry

from .options import MaskOptions
from .transaction import EditTransaction, EngineSnapshot

OP_INPUT = "input"
OP_BACKSPACE = "backspace"


class InputMask:
    """Owns a value buffer, a selection and undo history for one pattern.

    The buffer holds one cell per pattern slot: literal slots always hold the
    pattern literal, editable slots hold either an accepted (transformed)
    character or the placeholder. Revealing masks keep only the prefix up to
    the last filled editable slot.
    """

    def __init__(
        self,
        pattern: Optional[str] = None,
        *,
        format_characters: Optional[FormatOverrides] = None,
        is_revealing_mask: bool = False,
        placeholder_char: str = DEFAULT_PLACEHOLDER_CHAR,
        value: str = "",
        selection: Optional[SelectionLike] = None,
        history_limit: Optional[int] = None,
        logger_name: str = "mask_engine.engine",
    ) -> None:
        options = MaskOptions(
            pattern=pattern,
            format_characters=format_characters,
            is_revealing_mask=is_revealing_mask,
            placeholder_char=placeholder_char,
            value=value,
            selection=selection,
            history_limit=history_limit,
        )
        self._logger_name = logger_name
        self.placeholder_char = options.placeholder_char
        self.registry: FormatCharacterRegistry = merge_format_characters(
            options.format_characters
        )
        self.history = UndoHistory(limit=options.history_limit)
        self.value: List[str] = []
        self.selection = Selection()
        self.empty_value = ""
        self._last_op: Optional[str] = None
        self._last_selection: Optional[Selection] = None

        assert options.pattern is not None
        self.set_pattern(
            options.pattern,
            value=options.value,
            selection=options.selection,
            is_revealing_mask=options.is_revealing_mask,
        )

    @classmethod
    def from_options(
        cls, options: MaskOptions, *, logger_name: str = "mask_engine.engine"
    ) -> "InputMask":
        return cls(
            options.pattern,
            format_characters=options.format_characters,
            is_revealing_mask=options.is_revealing_mask,
            placeholder_char=options.placeholder_char,
            value=options.value,
            selection=options.selection,
            history_limit=options.history_limit,
            logger_name=logger_name,
        )

    # Editing

    def input(self, char: str) -> bool:
        """Apply one character at the current cursor or over the selection.

        Returns ``True`` when the value or selection changed.
        """

        pattern = self.pattern
        selection = self.selection
        if selection.is_collapsed and selection.start == pattern.length:
            return False

        with self._span(OP_INPUT, char=char) as handle:
            cells_before = self._cells()
            index = max(selection.start, pattern.first_editable_index)

            if pattern.is_editable_index(index):
                if not pattern.is_valid_at_index(char, index):
                    handle.reject("invalid_character")
                    return False
                self._write(index, pattern.transform(char, index))

            # Blank out the rest of an overwritten selection.
            for offset in range(selection.end - 1, index, -1):
                if pattern.is_editable_index(offset):
                    self._clear(offset)

            cursor = index + 1
            while cursor < pattern.length and not pattern.is_editable_index(cursor):
                cursor += 1
            self.selection = Selection.collapsed_at(cursor)

            self._trim_revealed()
            self._record(OP_INPUT, cells_before, selection)
            return True

    def backspace(self) -> bool:
        """Delete before the cursor or over the selection.

        Returns ``True`` when the value or selection changed.
        """

        selection = self.selection
        if selection.start == 0 and selection.end == 0:
            return False

        pattern = self.pattern
        with self._span(OP_BACKSPACE):
            cells_before = self._cells()

            if selection.is_collapsed:
                index = selection.start - 1
                if pattern.is_editable_index(index):
                    if pattern.is_revealing_mask:
                        del self.value[index:]
                    else:
                        self.value[index] = self.placeholder_char
                self.selection = Selection.collapsed_at(index)
            else:
                for offset in range(selection.end - 1, selection.start - 1, -1):
                    if pattern.is_editable_index(offset):
                        self._clear(offset)
                self.selection = Selection.collapsed_at(selection.start)

            self._trim_revealed()
            self._record(OP_BACKSPACE, cells_before, selection)
            return True

    def paste(self, text: str) -> bool:
        """Input ``text`` at the cursor as one all-or-nothing edit.

        A character rejected by its slot is still accepted when it equals the
        literal just behind the cursor. Anything else rolls the mask back to
        its state before the paste.
        """

        pattern = self.pattern
        with self._span("paste", length=len(text)) as handle, EditTransaction(
            self, "paste"
        ) as tx:
            pending = text
            first = pattern.first_editable_index
            start = self.selection.start

            if start < first:
                prefix = "".join(pattern.slots[start:first])
                if not text.startswith(prefix):
                    handle.reject("literal_prefix_mismatch")
                    return False
                pending = text[len(prefix) :]
                self.selection = Selection(first, max(self.selection.end, first))

            for position, char in enumerate(pending):
                if self.selection.start > pattern.last_editable_index:
                    break
                if self.input(char) or self._is_literal_behind_cursor(char):
                    continue

                tx.rollback()
                handle.reject("invalid_character")
                telemetry.record_event(
                    "input_mask.paste.rolled_back",
                    level="debug",
                    data={"position": position, "char": char},
                    logger_name=self._logger_name,
                )
                return False

            return True

    # History

    def undo(self) -> bool:
        if not len(self.history):
            return False
        with self._span("undo"):
            current = HistoryEntry(self._cells(), self.selection, self._last_op)
            entry = self.history.step_back(current)
            if entry is None:
                return False
            self._restore_entry(entry)
            return True

    def redo(self) -> bool:
        if not self.history.is_replaying:
            return False
        with self._span("redo"):
            entry = self.history.step_forward()
            if entry is None:
                return False
            self._restore_entry(entry)
            return True

    # Getters & setters

    def set_pattern(
        self,
        pattern: str,
        *,
        value: str = "",
        selection: Optional[SelectionLike] = None,
        is_revealing_mask: bool = False,
    ) -> None:
        """Install a new pattern, resetting value, selection and history."""

        self.pattern = Pattern.compile(
            pattern,
            self.registry,
            placeholder_char=self.placeholder_char,
            is_revealing_mask=is_revealing_mask,
        )
        self.set_value(value)
        self.empty_value = self.pattern.empty_value
        requested = Selection.coerce(selection) if selection is not None else Selection()
        self.selection = ensure_selection(requested, self.pattern.length)
        self._reset_history()

    def set_selection(self, selection: SelectionLike) -> bool:
        """Store ``selection``, snapping a collapsed cursor onto typed content.

        A collapsed cursor moves to just after the nearest filled editable slot
        before it, or to the first editable slot. Returns ``True`` for collapsed
        selections and ``False`` for ranges, which are stored as given.
        """

        requested = ensure_selection(Selection.coerce(selection), self.pattern.length)
        self.selection = requested
        if not requested.is_collapsed:
            return False

        pattern = self.pattern
        first = pattern.first_editable_index
        if requested.start < first:
            self.selection = Selection.collapsed_at(first)
            return True

        index = requested.start
        while index >= first:
            if index == first or (
                pattern.is_editable_index(index - 1) and self._is_filled(index - 1)
            ):
                self.selection = Selection.collapsed_at(index)
                break
            index -= 1
        return True

    def set_value(self, value: str) -> None:
        self.value = self.pattern.format_value(value)

    def get_value(self) -> str:
        if self.pattern.is_revealing_mask:
            self.value = self.pattern.format_value(self._raw_cells())
        return "".join(self.value)

    def get_raw_value(self) -> str:
        return "".join(self._raw_cells())

    def mirror(self) -> MaskMirror:
        text = self.get_value()
        return MaskMirror(
            text=text,
            raw=self.get_raw_value(),
            selection=self.selection,
            attributes={
                "pattern": self.pattern.source,
                "placeholder": self.placeholder_char,
                "revealing": str(self.pattern.is_revealing_mask).lower(),
                "complete": str(self.is_complete()).lower(),
            },
        )

    def is_complete(self) -> bool:
        """Whether every editable slot holds a value."""

        return all(self._is_filled(index) for index in self.pattern.editable_indices)

    # Snapshots

    def capture(self) -> EngineSnapshot:
        return EngineSnapshot(
            value=tuple(self.value),
            selection=self.selection,
            last_op=self._last_op,
            last_selection=self._last_selection,
            history=self.history.snapshot(),
        )

    def restore(self, snapshot: EngineSnapshot) -> None:
        self.value = list(snapshot.value)
        self.selection = snapshot.selection
        self._last_op = snapshot.last_op
        self._last_selection = snapshot.last_selection
        self.history.restore(snapshot.history)

    # Internals

    @contextmanager
    def _span(self, op: str, **metadata: object) -> Iterator[telemetry.SpanHandle]:
        with telemetry.span(
            f"input_mask::{op}",
            logger_name=self._logger_name,
            component="input_mask",
            metadata={
                "pattern": self.pattern.source,
                "selection": self.selection.as_tuple(),
                **metadata,
            },
        ) as handle:
            yield handle

    def _cells(self) -> tuple[str, ...]:
        self.get_value()
        return tuple(self.value)

    def _raw_cells(self) -> List[str]:
        editable = self.pattern.editable_indices
        return [cell for index, cell in enumerate(self.value) if index in editable]

    def _is_filled(self, index: int) -> bool:
        return index < len(self.value) and self.value[index] != self.placeholder_char

    def _is_literal_behind_cursor(self, char: str) -> bool:
        index = self.selection.start - 1
        if index < 0 or self.pattern.is_editable_index(index):
            return False
        return self.pattern.slots[index] == char

    def _write(self, index: int, char: str) -> None:
        pattern = self.pattern
        while len(self.value) < index:
            offset = len(self.value)
            self.value.append(
                self.placeholder_char
                if pattern.is_editable_index(offset)
                else pattern.slots[offset]
            )
        if index == len(self.value):
            self.value.append(char)
        else:
            self.value[index] = char

    def _clear(self, index: int) -> None:
        if index < len(self.value):
            self.value[index] = self.placeholder_char

    def _trim_revealed(self) -> None:
        """Drop trailing unfilled cells so a revealing mask stops at typed content."""

        if not self.pattern.is_revealing_mask:
            return
        pattern = self.pattern
        while self.value and (
            not pattern.is_editable_index(len(self.value) - 1)
            or self.value[-1] == self.placeholder_char
        ):
            self.value.pop()

    def _record(
        self, op: str, cells_before: tuple[str, ...], selection_before: Selection
    ) -> None:
        removed = self.history.discard_redo()
        if removed:
            telemetry.record_event(
                "input_mask.history.truncated",
                level="debug",
                data={"removed": removed, "op": op},
                logger_name=self._logger_name,
            )

        if (
            removed
            or self._last_op != op
            or not selection_before.is_collapsed
            or (
                self._last_selection is not None
                and selection_before.start != self._last_selection.start
            )
        ):
            self.history.record(
                HistoryEntry(cells_before, selection_before, self._last_op)
            )

        self._last_op = op
        self._last_selection = self.selection

    def _restore_entry(self, entry: HistoryEntry) -> None:
        self.value = list(entry.cells)
        self.selection = entry.selection
        self._last_op = entry.last_op

    def _reset_history(self) -> None:
        self.history.clear()
        self._last_op = None
        self._last_selection = self.selection


__all__ = ["InputMask", "OP_BACKSPACE", "OP_INPUT"]
