"""UI-agnostic controller that drives a Document from host key events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence

from quill_engine.buffer import Document, DocumentIOError, Position, SearchDirection

EMPTY_ROW_MARKER = "~"


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update host widgets."""

    update_rows: Callable[[Sequence[str]], None]
    update_status: Callable[[str], None] = _noop
    show_message: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Owns the cursor and viewport and turns keys into document edits."""

    def __init__(
        self,
        document: Document,
        hooks: TextualUIHooks,
        *,
        width: int = 80,
        height: int = 24,
    ) -> None:
        self.document = document
        self.hooks = hooks
        self.width = max(width, 1)
        self.height = max(height, 1)
        self.cursor = Position(0, 0)
        self.offset = Position(0, 0)
        self._refresh()

    def handle_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> bool:
        """Dispatch one key; returns ``False`` when the key was not handled."""

        normalized_modifiers = tuple(str(mod).upper() for mod in modifiers)
        self._log("key ->", key=key, text=text, mods=normalized_modifiers)

        if "CTRL" in normalized_modifiers:
            handled = self._handle_control(key)
        elif key == "ENTER":
            self.document.insert(self.cursor, "\n")
            self.cursor = Position(0, self.cursor.y + 1)
            handled = True
        elif key == "BACKSPACE":
            if self.cursor.x > 0 or self.cursor.y > 0:
                self._move("LEFT")
                self.document.delete(self.cursor)
            handled = True
        elif key == "DELETE":
            self.document.delete(self.cursor)
            handled = True
        elif key in _MOVEMENT_KEYS:
            self._move(key)
            handled = True
        elif text and (text.isprintable() or text == "\t"):
            self.document.insert(self.cursor, text)
            self._move("RIGHT")
            handled = True
        else:
            handled = False

        if handled:
            self._refresh()
        return handled

    def _handle_control(self, key: str) -> bool:
        if key.lower() == "s":
            self.save()
            return True
        return False

    def save(self) -> bool:
        if self.document.file_name is None:
            self.hooks.show_message("No file name set.")
            return False
        try:
            self.document.save()
        except DocumentIOError as exc:
            self.hooks.show_message(f"Error writing file: {exc}")
            return False
        self.hooks.show_message("File saved successfully.")
        self._refresh()
        return True

    def search(
        self, query: str, direction: SearchDirection = SearchDirection.FORWARD
    ) -> Optional[Position]:
        """Move the cursor to the next match of ``query`` and paint matches.

        Forward searches start one cluster right of the cursor so repeated
        calls step through successive matches. No key is bound to this; a
        host that collects the query in its own prompt calls it directly and
        finishes with :meth:`end_search`.
        """

        start = self.cursor
        if direction is SearchDirection.FORWARD:
            row = self.document.row(start.y)
            if row is not None and start.x < len(row):
                start = Position(start.x + 1, start.y)
            elif row is not None:
                start = Position(0, start.y + 1)
        found = self.document.find(query, start, direction)
        self.document.highlight(query or None)
        if found is None:
            self.hooks.show_message(f"No match for '{query}'.")
        else:
            self.cursor = found
        self._refresh()
        return found

    def end_search(self) -> None:
        """Clear match painting left by :meth:`search`."""

        self.document.highlight(None)
        self._refresh()

    def resize(self, width: int, height: int) -> None:
        self.width = max(width, 1)
        self.height = max(height, 1)
        self._refresh()

    def visible_rows(self) -> List[str]:
        rendered: List[str] = []
        for screen_row in range(self.height):
            row = self.document.row(self.offset.y + screen_row)
            if row is None:
                rendered.append(EMPTY_ROW_MARKER)
                continue
            rendered.append(row.render(self.offset.x, self.offset.x + self.width))
        return rendered

    def cursor_cell(self) -> tuple[int, int]:
        """Screen ``(column, line)`` of the cursor inside the viewport."""

        row = self.document.row(self.cursor.y)
        column = row.display_offset(self.offset.x, self.cursor.x) if row else 0
        return column, self.cursor.y - self.offset.y

    def status_line(self) -> str:
        name = self.document.file_name or "[No Name]"
        modified = " (modified)" if self.document.is_dirty() else ""
        left = f"{name[:20]} - {len(self.document)} lines{modified}"
        right = (
            f"{self.document.file_type.name} | "
            f"{self.cursor.y + 1}/{len(self.document)}"
        )
        padding = max(self.width - len(left) - len(right), 1)
        return f"{left}{' ' * padding}{right}"

    def _move(self, key: str) -> None:
        x, y = self.cursor.x, self.cursor.y
        rows = len(self.document)
        row = self.document.row(y)
        width = len(row) if row else 0

        if key == "UP":
            y = max(y - 1, 0)
        elif key == "DOWN":
            y = min(y + 1, rows)
        elif key == "LEFT":
            if x > 0:
                x -= 1
            elif y > 0:
                y -= 1
                previous = self.document.row(y)
                x = len(previous) if previous else 0
        elif key == "RIGHT":
            if x < width:
                x += 1
            elif y < rows:
                y += 1
                x = 0
        elif key == "PAGEUP":
            y = max(y - self.height, 0)
        elif key == "PAGEDOWN":
            y = min(y + self.height, rows)
        elif key == "HOME":
            x = 0
        elif key == "END":
            x = width

        target = self.document.row(y)
        x = min(x, len(target) if target else 0)
        self.cursor = Position(x, y)

    def _scroll(self) -> None:
        x, y = self.cursor.x, self.cursor.y
        offset_x, offset_y = self.offset.x, self.offset.y
        if y < offset_y:
            offset_y = y
        elif y >= offset_y + self.height:
            offset_y = y - self.height + 1
        if x < offset_x:
            offset_x = x
        elif x >= offset_x + self.width:
            offset_x = x - self.width + 1
        self.offset = Position(offset_x, offset_y)

    def _refresh(self) -> None:
        self._scroll()
        self.hooks.update_rows(self.visible_rows())
        self.hooks.update_status(self.status_line())

    def _log(self, prefix: str, **fields: object) -> None:
        parts = [prefix, f"cursor=({self.cursor.x}, {self.cursor.y})"]
        parts.extend(f"{k}={v!r}" for k, v in fields.items() if v is not None)
        self.hooks.log(" ".join(parts))


_MOVEMENT_KEYS = frozenset(
    {"UP", "DOWN", "LEFT", "RIGHT", "PAGEUP", "PAGEDOWN", "HOME", "END"}
)


__all__ = ["TextualEditorAdapter", "TextualUIHooks", "EMPTY_ROW_MARKER"]
