"""Positions and search direction shared by documents and hosts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class Position:
    """Grapheme column ``x`` on line ``y``.

    ``y == len(document)`` addresses the append point after the last line and
    ``x == len(row)`` the end of a line.
    """

    x: int = 0
    y: int = 0


class SearchDirection(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


__all__ = ["Position", "SearchDirection"]
