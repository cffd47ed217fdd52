"""Language profiles selected by filename."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

RUST_PRIMARY_KEYWORDS: Tuple[str, ...] = (
    "as", "break", "const", "continue", "crate", "else", "enum", "extern",
    "false", "fn", "for", "if", "impl", "in", "let", "loop", "match", "mod",
    "move", "mut", "pub", "ref", "return", "self", "Self", "static", "struct",
    "super", "trait", "true", "type", "unsafe", "use", "where", "while",
    "dyn", "abstract", "become", "box", "do", "final", "macro", "override",
    "priv", "typeof", "unsized", "virtual", "yield", "async", "await", "try",
)

RUST_SECONDARY_KEYWORDS: Tuple[str, ...] = (
    "bool", "char", "i8", "i16", "i32", "i64", "i128", "isize",
    "u8", "u16", "u32", "u64", "u128", "usize", "f32", "f64", "str",
)


@dataclass(frozen=True, slots=True)
class HighlightingOptions:
    numbers: bool = False
    strings: bool = False
    characters: bool = False
    comments: bool = False


@dataclass(frozen=True, slots=True)
class FileType:
    """Immutable highlight configuration for one kind of file.

    ``FileType.default()`` is the "no highlighting" profile every document
    falls back to, so a document never lacks a profile.
    """

    name: str = "No filetype"
    options: HighlightingOptions = field(default_factory=HighlightingOptions)
    primary_keywords: Tuple[str, ...] = ()
    secondary_keywords: Tuple[str, ...] = ()

    @classmethod
    def default(cls) -> "FileType":
        return cls()

    @classmethod
    def from_filename(cls, file_name: str | None) -> "FileType":
        if file_name:
            for suffix, profile in _BUILTIN_PROFILES:
                if file_name.endswith(suffix):
                    return profile
        return cls.default()


RUST = FileType(
    name="Rust",
    options=HighlightingOptions(
        numbers=True, strings=True, characters=True, comments=True
    ),
    primary_keywords=RUST_PRIMARY_KEYWORDS,
    secondary_keywords=RUST_SECONDARY_KEYWORDS,
)

_BUILTIN_PROFILES: Tuple[Tuple[str, FileType], ...] = ((".rs", RUST),)


__all__ = ["FileType", "HighlightingOptions", "RUST"]
