from __future__ import annotations

from typing import List

from mask_engine import InputMask, Selection
from mask_engine.adapters.textual import TextualMaskAdapter, TextualUIHooks
from mask_engine.buffer import MaskMirror


def make_adapter(
    pattern: str = "(111) 111-1111",
    *,
    fields: List[MaskMirror] | None = None,
    statuses: List[str] | None = None,
    logs: List[str] | None = None,
) -> TextualMaskAdapter:
    field_sink = fields if fields is not None else []
    status_sink = statuses if statuses is not None else []
    log_sink = logs if logs is not None else []
    hooks = TextualUIHooks(
        update_field=field_sink.append,
        update_status=status_sink.append,
        log=log_sink.append,
    )
    return TextualMaskAdapter(InputMask(pattern), hooks)


def test_adapter_pushes_initial_field() -> None:
    fields: List[MaskMirror] = []

    make_adapter(fields=fields)

    assert fields[-1].text == "(___) ___-____"


def test_adapter_forwards_printable_keys() -> None:
    fields: List[MaskMirror] = []
    statuses: List[str] = []
    adapter = make_adapter(fields=fields, statuses=statuses)

    result = adapter.handle_textual_key("5", text="5")

    assert result.consumed is True
    assert result.changed is True
    assert result.operation == "input"
    assert fields[-1].text == "(5__) ___-____"
    assert fields[-1].selection == Selection(2, 2)
    assert statuses[-1] == "input"


def test_adapter_reports_rejected_input() -> None:
    statuses: List[str] = []
    adapter = make_adapter(statuses=statuses)

    result = adapter.handle_textual_key("x", text="x")

    assert result.changed is False
    assert statuses[-1] == "input:rejected"


def test_adapter_backspace_and_undo_redo() -> None:
    adapter = make_adapter("11")
    adapter.handle_textual_key("1", text="1")
    adapter.handle_textual_key("2", text="2")

    adapter.handle_textual_key("backspace")
    assert adapter.pull_mask().text == "1_"

    adapter.handle_textual_key("z", modifiers=("CTRL",))
    assert adapter.pull_mask().text == "12"

    adapter.handle_textual_key("ctrl+y")
    assert adapter.pull_mask().text == "1_"


def test_adapter_paste() -> None:
    adapter = make_adapter("A1-A1")

    result = adapter.handle_paste("a1-b2")

    assert result.changed is True
    assert adapter.pull_mask().text == "A1-B2"
    assert adapter.pull_mask().raw == "A1B2"


def test_adapter_cursor_keys_use_selection_snapping() -> None:
    adapter = make_adapter()
    adapter.handle_textual_key("5", text="5")

    adapter.handle_textual_key("end")
    assert adapter.mask.selection == Selection(2, 2)

    adapter.handle_textual_key("left")
    assert adapter.mask.selection == Selection(1, 1)

    adapter.handle_textual_key("home")
    assert adapter.mask.selection == Selection(1, 1)


def test_adapter_selection_event() -> None:
    adapter = make_adapter()

    result = adapter.handle_selection(1, 4)

    assert result.changed is True
    assert adapter.mask.selection == Selection(1, 4)


def test_adapter_ignores_unknown_keys() -> None:
    adapter = make_adapter()

    result = adapter.handle_textual_key("f5")

    assert result.consumed is False


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    adapter = make_adapter(logs=logs)

    adapter.handle_textual_key("5", text="5")

    assert any(line.startswith("key ->") for line in logs)
    assert any("result <-" in line and "changed=True" in line for line in logs)


def test_adapter_clamps_host_selection_to_pattern() -> None:
    adapter = make_adapter("11")

    result = adapter.handle_selection(-3, 9)

    assert result.consumed is True
    assert adapter.mask.selection == Selection(0, 2)
