"""File-system collaborator used by :class:`~quill_engine.buffer.Document`.

Both helpers raise plain :class:`OSError`; translating to
:class:`DocumentIOError` is the document's job.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

ENCODING = "utf-8"


def read_all(path: str | Path) -> str:
    with open(path, "r", encoding=ENCODING, newline="") as handle:
        return handle.read()


def create_and_write(path: str | Path, lines: Iterable[str]) -> None:
    """Truncate ``path`` and write each line followed by ``\\n``."""

    with open(path, "w", encoding=ENCODING, newline="\n") as handle:
        for line in lines:
            handle.write(line)
            handle.write("\n")


__all__ = ["read_all", "create_and_write", "ENCODING"]
