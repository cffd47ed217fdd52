"""Text storage, highlighting and search for the editor core."""

from .document import Document, split_lines
from .errors import DocumentIOError
from .filetype import RUST, FileType, HighlightingOptions
from .graphemes import graphemes
from .highlighting import ANSI_RESET, HighlightType, ansi_foreground, highlight_row
from .row import Row
from .state import Position, SearchDirection

__all__ = [
    "Document",
    "DocumentIOError",
    "FileType",
    "HighlightingOptions",
    "HighlightType",
    "Position",
    "Row",
    "RUST",
    "SearchDirection",
    "ANSI_RESET",
    "ansi_foreground",
    "graphemes",
    "highlight_row",
    "split_lines",
]
