"""Ordered collection of rows with structural edits and cross-row search."""

from __future__ import annotations

from typing import Iterator, List, Optional

from quill_engine.runtime import telemetry

from . import storage
from .errors import DocumentIOError
from .filetype import FileType
from .row import Row
from .state import Position, SearchDirection


def split_lines(text: str) -> List[str]:
    """Split file contents into row strings.

    A trailing newline does not produce an extra empty row, ``\\r\\n``
    endings are accepted, and empty text yields no rows at all.
    """

    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class Document:
    """Rows of an open buffer plus its destination and dirty flag."""

    def __init__(
        self,
        rows: Optional[List[Row]] = None,
        *,
        file_name: Optional[str] = None,
    ) -> None:
        self._rows: List[Row] = list(rows or [])
        self._file_name = file_name
        self._file_type = FileType.from_filename(file_name)
        self.dirty = False
        for row in self._rows:
            row.highlight(self._file_type)

    @classmethod
    def from_text(cls, text: str, *, file_name: Optional[str] = None) -> "Document":
        return cls([Row(line) for line in split_lines(text)], file_name=file_name)

    @classmethod
    def open(cls, file_name: str) -> "Document":
        with telemetry.span(
            "document::open",
            component="buffer",
            metadata={"file": file_name},
        ) as handle:
            try:
                content = storage.read_all(file_name)
            except (OSError, UnicodeDecodeError) as exc:
                raise DocumentIOError(
                    f"Could not open '{file_name}': {exc}", path=file_name
                ) from exc
            document = cls.from_text(content, file_name=file_name)
            handle.add_metadata("rows", len(document))
            return document

    @property
    def file_name(self) -> Optional[str]:
        return self._file_name

    @file_name.setter
    def file_name(self, value: Optional[str]) -> None:
        self._file_name = value
        self._file_type = FileType.from_filename(value)
        self.highlight()

    @property
    def file_type(self) -> FileType:
        return self._file_type

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    def is_empty(self) -> bool:
        return not self._rows

    def is_dirty(self) -> bool:
        return self.dirty

    def row(self, index: int) -> Optional[Row]:
        if 0 <= index < len(self._rows):
            return self._rows[index]
        return None

    def save(self) -> None:
        """Write every row followed by a newline to ``file_name``.

        Without a destination this is a successful no-op. ``dirty`` is only
        cleared when the write completes.
        """

        if self._file_name is None:
            return
        with telemetry.span(
            "document::save",
            component="buffer",
            metadata={"file": self._file_name, "rows": len(self._rows)},
        ):
            try:
                storage.create_and_write(
                    self._file_name, (row.string for row in self._rows)
                )
            except OSError as exc:
                raise DocumentIOError(
                    f"Could not save '{self._file_name}': {exc}",
                    path=self._file_name,
                ) from exc
            self.dirty = False

    def insert(self, at: Position, char: str) -> None:
        if at.y < 0 or at.y > len(self._rows):
            return
        if char == "\n":
            self.insert_newline(at)
            return
        self.dirty = True
        if at.y == len(self._rows):
            row = Row(char)
            self._rows.append(row)
        else:
            row = self._rows[at.y]
            row.insert(at.x, char)
        row.highlight(self._file_type)
        self._record_edit("insert", at)

    def insert_newline(self, at: Position) -> None:
        if at.y < 0 or at.y > len(self._rows):
            return
        self.dirty = True
        if at.y == len(self._rows):
            row = Row()
            row.highlight(self._file_type)
            self._rows.append(row)
        else:
            current = self._rows[at.y]
            new_row = current.split(at.x)
            current.highlight(self._file_type)
            new_row.highlight(self._file_type)
            self._rows.insert(at.y + 1, new_row)
        self._record_edit("insert_newline", at)

    def delete(self, at: Position) -> None:
        """Delete the cluster at ``at``; at end of line, join the next row."""

        if at.y < 0 or at.y >= len(self._rows):
            return
        self.dirty = True
        row = self._rows[at.y]
        if at.x == len(row) and at.y + 1 < len(self._rows):
            row.append(self._rows.pop(at.y + 1))
        else:
            row.delete(at.x)
        row.highlight(self._file_type)
        self._record_edit("delete", at)

    def highlight(self, word: Optional[str] = None) -> None:
        """Re-highlight every row, painting ``word`` as a search match."""

        for row in self._rows:
            row.highlight(self._file_type, word)

    def find(
        self,
        query: str,
        at: Position,
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[Position]:
        """Search row by row from ``at`` towards one end of the document.

        Forward starts at ``at.x`` and continues at column 0 of later rows;
        backward starts at ``at.x`` and continues at the end of earlier rows.
        The search stops at the document boundary without wrapping.
        """

        if not query or at.y < 0 or at.y >= len(self._rows):
            return None
        if at.x < 0 or at.x > len(self._rows[at.y]):
            return None

        with telemetry.span(
            "document::find",
            component="buffer",
            metadata={"direction": direction.value},
        ) as handle:
            x = at.x
            if direction is SearchDirection.FORWARD:
                lines = range(at.y, len(self._rows))
            else:
                lines = range(at.y, -1, -1)
            for y in lines:
                row = self._rows[y]
                if y != at.y:
                    x = 0 if direction is SearchDirection.FORWARD else len(row)
                found = row.find(query, x, direction)
                if found is not None:
                    handle.add_metadata("result", (found, y))
                    return Position(found, y)
            return None

    def _record_edit(self, kind: str, at: Position) -> None:
        telemetry.record_event(
            f"document.{kind}",
            level="debug",
            data={"x": at.x, "y": at.y, "rows": len(self._rows)},
            logger_name="quill_engine.buffer.document",
        )


__all__ = ["Document", "split_lines"]
