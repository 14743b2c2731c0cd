"""Executable Textual app that hosts a single masked field."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use mask_engine.adapters.textual.app"
    ) from exc

from mask_engine.buffer import MaskMirror
from mask_engine.engine import InputMask, MaskOptions

from .controller import TextualMaskAdapter, TextualUIHooks

DEFAULT_PATTERN = "(111) 111-1111"


@dataclass
class UIState:
    field_text: str = ""
    status_text: str = ""


def render_field(mirror: MaskMirror) -> str:
    """Two-line rendering: the value, then a caret or underline for the selection."""

    selection = mirror.selection
    if selection.is_collapsed:
        marker = " " * selection.start + "^"
    else:
        marker = " " * selection.start + "~" * (selection.end - selection.start)
    return f"{mirror.text}\n{marker}"


class MaskEngineApp(App[None]):
    """Minimal Textual UI embedding one input mask."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#mask-field {
		height: 4;
		border: round $accent;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, options: MaskOptions) -> None:
        super().__init__()
        self._options = options
        self._state = UIState()
        self.mask: InputMask | None = None
        self.adapter: TextualMaskAdapter | None = None
        self._field_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="field-area"):
            self._field_widget = Static("", id="mask-field")
            yield self._field_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        self.mask = InputMask.from_options(self._options)
        hooks = TextualUIHooks(
            update_field=self._update_field,
            update_status=self._update_status,
        )
        self.adapter = TextualMaskAdapter(self.mask, hooks)
        self._update_status(f"pattern {self._options.pattern}")

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in {"ctrl+c", "ctrl+q"}:
            return
        result = self.adapter.handle_textual_key(event.key, text=event.character)
        if result.consumed:
            event.stop()

    async def on_paste(self, event: events.Paste) -> None:
        if self.adapter:
            self.adapter.handle_paste(event.text)
            event.stop()

    def _update_field(self, mirror: MaskMirror) -> None:
        self._state.field_text = render_field(mirror)
        if self._field_widget:
            self._field_widget.update(self._state.field_text)

    def _update_status(self, status: str) -> None:
        if self.mask is not None:
            status = f"{status} | raw={self.mask.get_raw_value()!r}"
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)


def _env_int(key: str, fallback: int | None) -> int | None:
    value = os.environ.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the input mask Textual demo.")
    parser.add_argument(
        "--pattern",
        default=os.environ.get("MASK_ENGINE_PATTERN", DEFAULT_PATTERN),
        help=f"Mask pattern to edit (default: {DEFAULT_PATTERN!r})",
    )
    parser.add_argument("--value", default="", help="Initial value")
    parser.add_argument(
        "--placeholder",
        default=os.environ.get("MASK_ENGINE_PLACEHOLDER", "_"),
        help="Placeholder character for unfilled slots (default: _)",
    )
    parser.add_argument(
        "--revealing",
        action="store_true",
        help="Only show the pattern up to the typed content",
    )
    parser.add_argument(
        "--history-limit",
        type=int,
        default=_env_int("MASK_ENGINE_HISTORY_LIMIT", None),
        help="Maximum number of undo entries (default: unbounded)",
    )
    return parser.parse_args(argv)


def build_options(args: argparse.Namespace) -> MaskOptions:
    return MaskOptions(
        pattern=args.pattern,
        value=args.value,
        placeholder_char=args.placeholder,
        is_revealing_mask=args.revealing,
        history_limit=args.history_limit,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    app = MaskEngineApp(build_options(args))
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
