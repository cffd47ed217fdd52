"""Executable Textual app that hosts the editor core."""

from __future__ import annotations

import argparse
import os
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use quill_engine.adapters.textual.app"
    ) from exc

from quill_engine.buffer import Document, DocumentIOError
from quill_engine.runtime import telemetry

from .controller import TextualEditorAdapter, TextualUIHooks


class QuillEditorApp(App[None]):
    """Full-screen editor view over a single document."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#rows {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
	}

	#message-line {
		height: 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, document: Document) -> None:
        super().__init__()
        self.document = document
        self.adapter: TextualEditorAdapter | None = None
        self._rows_widget: Static | None = None
        self._status_widget: Static | None = None
        self._message_widget: Static | None = None
        self.logger = telemetry.get_logger("quill_engine.adapters.textual")

    def compose(self) -> ComposeResult:
        self._rows_widget = Static("", id="rows")
        self._status_widget = Static("", id="status-line")
        self._message_widget = Static(
            "HELP: Ctrl-S = save | Ctrl-Q = quit", id="message-line"
        )
        yield self._rows_widget
        yield self._status_widget
        yield self._message_widget

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_rows=self._update_rows,
            update_status=self._update_status,
            show_message=self._show_message,
            log=self.logger.debug,
        )
        width, height = self._viewport_size()
        self.adapter = TextualEditorAdapter(
            self.document, hooks, width=width, height=height
        )
        self.adapter.resize(width, height)

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            width, height = self._viewport_size()
            self.adapter.resize(width, height)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        if self.adapter.handle_key(key, text=text, modifiers=modifiers):
            event.stop()

    def _viewport_size(self) -> Tuple[int, int]:
        # status and message lines take the bottom two rows
        return self.size.width, max(self.size.height - 2, 1)

    def _update_rows(self, rows: Sequence[str]) -> None:
        if not self._rows_widget or not self.adapter:
            return
        text = Text()
        column, line = self.adapter.cursor_cell()
        for index, rendered in enumerate(rows):
            row_text = Text.from_ansi(rendered)
            if index == line:
                if column >= len(row_text.plain):
                    row_text.append(" ")
                row_text.stylize("reverse", column, column + 1)
            if index:
                text.append("\n")
            text.append_text(row_text)
        self._rows_widget.update(text)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(Text(status, style="reverse"))

    def _show_message(self, message: str) -> None:
        if self._message_widget:
            self._message_widget.update(message)

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        key = event.key
        if key == "ctrl+q":
            return None
        if key.startswith("ctrl+"):
            return (key[len("ctrl+") :], None, ("CTRL",))
        if key in {"enter", "return"}:
            return ("ENTER", None, ())
        if key == "tab":
            return ("TAB", "\t", ())
        if event.is_printable and event.character:
            return (event.character, event.character, ())
        return (key.upper(), None, ())


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a text file in the terminal.")
    parser.add_argument("file", nargs="?", help="File to open (optional)")
    parser.add_argument(
        "--log-preset",
        default=os.environ.get("QUILL_ENGINE_LOG_PRESET", "quiet"),
        choices=telemetry.PRESETS,
        help="Telemetry preset (default: quiet, keeps the terminal clean)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    if args.file:
        try:
            document = Document.open(args.file)
        except DocumentIOError as exc:
            if not isinstance(exc.__cause__, FileNotFoundError):
                raise SystemExit(f"quill-engine: {exc}") from exc
            document = Document(file_name=args.file)
    else:
        document = Document()
    QuillEditorApp(document).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
