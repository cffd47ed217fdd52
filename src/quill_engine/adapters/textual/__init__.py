"""Textual host for the editor core.

Only the controller is imported eagerly; the app module requires Textual.
"""

from .controller import EMPTY_ROW_MARKER, TextualEditorAdapter, TextualUIHooks

__all__ = ["EMPTY_ROW_MARKER", "TextualEditorAdapter", "TextualUIHooks"]
