"""Typed failures surfaced by the buffer layer."""

from __future__ import annotations

from typing import Optional


class DocumentIOError(OSError):
    """Raised when a document cannot be read from or written to storage."""

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


__all__ = ["DocumentIOError"]
