"""Grapheme-cluster segmentation helpers."""

from __future__ import annotations

import string
from typing import List

import regex

_GRAPHEME_RE = regex.compile(r"\X")

TAB = "\t"
TAB_WIDTH = 2


def graphemes(text: str) -> List[str]:
    """Split ``text`` into extended grapheme clusters."""

    return _GRAPHEME_RE.findall(text)


def cluster_width(cluster: str) -> int:
    return TAB_WIDTH if cluster == TAB else 1


def is_separator(cluster: str) -> bool:
    """Whitespace or ASCII punctuation other than ``_``."""

    if cluster.isspace():
        return True
    return cluster in string.punctuation and cluster != "_"


def is_digit(cluster: str) -> bool:
    return len(cluster) == 1 and cluster.isascii() and cluster.isdigit()


__all__ = ["TAB", "TAB_WIDTH", "graphemes", "cluster_width", "is_separator", "is_digit"]
