"""A single editable line of text addressed by grapheme cluster."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from .filetype import FileType
from .graphemes import TAB, TAB_WIDTH, cluster_width, graphemes
from .highlighting import ANSI_RESET, HighlightType, ansi_foreground, highlight_row
from .state import SearchDirection

Marker = Callable[[HighlightType], str]


class Row:
    """Text of one line plus its highlight overlay.

    ``len(row)`` is the grapheme count and the column space used by
    :class:`~quill_engine.buffer.Position`. ``highlighting`` holds one entry
    per cluster once :meth:`highlight` has run; structural edits leave it
    stale until the next call.
    """

    __slots__ = ("_string", "_graphemes", "_display_length", "highlighting")

    def __init__(self, text: str = "") -> None:
        self._string = ""
        self._graphemes: List[str] = []
        self._display_length = 0
        self.highlighting: List[HighlightType] = []
        self._set_string(text)

    @classmethod
    def from_text(cls, text: str) -> "Row":
        return cls(text)

    def __len__(self) -> int:
        return len(self._graphemes)

    def __repr__(self) -> str:
        return f"Row({self._string!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        return self._string == other._string

    @property
    def string(self) -> str:
        return self._string

    @property
    def graphemes(self) -> tuple[str, ...]:
        return tuple(self._graphemes)

    @property
    def display_length(self) -> int:
        return self._display_length

    def is_empty(self) -> bool:
        return not self._graphemes

    def _set_string(self, text: str) -> None:
        self._string = text
        self._graphemes = graphemes(text)
        self._display_length = len(self._graphemes) + self._graphemes.count(TAB) * (
            TAB_WIDTH - 1
        )

    def insert(self, at: int, char: str) -> None:
        if at >= len(self._graphemes):
            self._set_string(self._string + char)
            return
        at = max(at, 0)
        head = "".join(self._graphemes[:at])
        tail = "".join(self._graphemes[at:])
        self._set_string(head + char + tail)

    def delete(self, at: int) -> None:
        if at < 0 or at >= len(self._graphemes):
            return
        remaining = self._graphemes[:at] + self._graphemes[at + 1 :]
        self._set_string("".join(remaining))

    def append(self, other: "Row") -> None:
        self._set_string(self._string + other._string)

    def split(self, at: int) -> "Row":
        """Keep ``[0, at)`` in this row and return ``[at, end)`` as a new one."""

        at = max(at, 0)
        head = "".join(self._graphemes[:at])
        tail = "".join(self._graphemes[at:])
        self._set_string(head)
        return Row(tail)

    def render(
        self,
        start: int,
        end: int,
        *,
        marker: Marker = ansi_foreground,
        reset: str = ANSI_RESET,
    ) -> str:
        """Displayable text for clusters ``[start, end)`` with color markers.

        Tabs expand to two spaces. A marker is emitted whenever the
        classification changes and ``reset`` always terminates the result.
        """

        end = min(max(end, 0), len(self._graphemes))
        start = min(max(start, 0), end)

        parts: List[str] = []
        current: Optional[HighlightType] = None
        for index in range(start, end):
            cluster = self._graphemes[index]
            kind = (
                self.highlighting[index]
                if index < len(self.highlighting)
                else HighlightType.NONE
            )
            if kind is not current:
                parts.append(marker(kind))
                current = kind
            parts.append(" " * TAB_WIDTH if cluster == TAB else cluster)
        parts.append(reset)
        return "".join(parts)

    def display_offset(self, start: int, end: int) -> int:
        """Screen cells occupied by clusters ``[start, end)``."""

        end = min(max(end, 0), len(self._graphemes))
        start = min(max(start, 0), end)
        return sum(cluster_width(c) for c in self._graphemes[start:end])

    def find(
        self,
        query: str,
        at: int,
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[int]:
        """Grapheme index of the nearest match of ``query`` from ``at``.

        Forward scans ``[at, end)`` and returns the first match; backward
        scans ``[0, at)`` and returns the last. Matches that begin or end
        inside a cluster are skipped.
        """

        if not query or at < 0 or at > len(self._graphemes):
            return None

        if direction is SearchDirection.FORWARD:
            start, end = at, len(self._graphemes)
        else:
            start, end = 0, at

        window = self._graphemes[start:end]
        haystack = "".join(window)
        boundaries: Dict[int, int] = {}
        offset = 0
        for index, cluster in enumerate(window):
            boundaries[offset] = index
            offset += len(cluster)
        boundaries[offset] = len(window)

        def aligned(found: int) -> bool:
            return found in boundaries and found + len(query) in boundaries

        if direction is SearchDirection.FORWARD:
            found = haystack.find(query)
            while found != -1 and not aligned(found):
                found = haystack.find(query, found + 1)
        else:
            found = haystack.rfind(query)
            while found != -1 and not aligned(found):
                found = haystack.rfind(query, 0, found + len(query) - 1)

        if found == -1:
            return None
        return start + boundaries[found]

    def highlight(self, file_type: FileType, word: Optional[str] = None) -> None:
        self.highlighting = highlight_row(self._graphemes, file_type, word)


__all__ = ["Row", "Marker"]
