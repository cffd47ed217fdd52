"""Single-pass lexical highlighter for one row of text.

Classification is computed per grapheme cluster and never carries state from
one row to the next: strings and comments end with the row.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence, Set, Tuple

from .filetype import FileType
from .graphemes import graphemes, is_digit, is_separator


class HighlightType(Enum):
    NONE = (255, 255, 255)
    NUMBER = (220, 163, 163)
    MATCH = (38, 139, 210)
    STRING = (211, 54, 130)
    CHARACTER = (108, 113, 196)
    COMMENT = (133, 153, 0)
    PRIMARY_KEYWORDS = (181, 137, 0)
    SECONDARY_KEYWORDS = (42, 161, 152)

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return self.value


ANSI_RESET = "\x1b[39m"


def ansi_foreground(kind: HighlightType) -> str:
    """Default marker: a 24-bit ANSI foreground escape for ``kind``."""

    red, green, blue = kind.rgb
    return f"\x1b[38;2;{red};{green};{blue}m"


def find_matches(chars: Sequence[str], word: Optional[str]) -> Tuple[Set[int], int]:
    """Return start indices of non-overlapping matches of ``word`` and its length."""

    if not word:
        return set(), 0
    needle = graphemes(word)
    size = len(needle)
    starts: Set[int] = set()
    index = 0
    while index + size <= len(chars):
        if list(chars[index : index + size]) == needle:
            starts.add(index)
            index += size
        else:
            index += 1
    return starts, size


class _RowScanner:
    def __init__(
        self, chars: Sequence[str], file_type: FileType, word: Optional[str]
    ) -> None:
        self.chars = chars
        self.file_type = file_type
        self.options = file_type.options
        self.matches, self.match_len = find_matches(chars, word)
        self.result: List[HighlightType] = []
        self.index = 0
        self.in_string = False
        self.prev_is_separator = True

    def char_at(self, index: int) -> Optional[str]:
        if 0 <= index < len(self.chars):
            return self.chars[index]
        return None

    def mark(self, kind: HighlightType, count: int = 1) -> None:
        self.result.extend([kind] * count)
        self.index += count
        self.prev_is_separator = is_separator(self.chars[self.index - 1])

    def run(self) -> List[HighlightType]:
        while self.index < len(self.chars):
            if self.scan_string():
                continue
            if self.scan_character():
                continue
            if self.scan_comment():
                break
            if self.scan_keywords():
                continue
            if self.scan_number():
                continue
            self.mark(HighlightType.NONE)
        # search matches are painted over the finished classification
        for start in self.matches:
            for index in range(start, start + self.match_len):
                self.result[index] = HighlightType.MATCH
        return self.result

    def scan_string(self) -> bool:
        if not self.options.strings:
            return False
        current = self.chars[self.index]
        if self.in_string:
            if current == "\\" and self.char_at(self.index + 1) is not None:
                self.mark(HighlightType.STRING, 2)
                return True
            if current == '"':
                self.in_string = False
            self.mark(HighlightType.STRING)
            return True
        if current == '"':
            self.in_string = True
            self.mark(HighlightType.STRING)
            return True
        return False

    def scan_character(self) -> bool:
        if not self.options.characters or self.chars[self.index] != "'":
            return False
        next_char = self.char_at(self.index + 1)
        if next_char is None:
            return False
        closing = self.index + (3 if next_char == "\\" else 2)
        if self.char_at(closing) != "'":
            return False
        self.mark(HighlightType.CHARACTER, closing - self.index + 1)
        return True

    def scan_comment(self) -> bool:
        if not self.options.comments:
            return False
        if self.chars[self.index] != "/" or self.char_at(self.index + 1) != "/":
            return False
        self.mark(HighlightType.COMMENT, len(self.chars) - self.index)
        return True

    def scan_keywords(self) -> bool:
        if not self.prev_is_separator:
            return False
        return self.scan_keyword_list(
            self.file_type.primary_keywords, HighlightType.PRIMARY_KEYWORDS
        ) or self.scan_keyword_list(
            self.file_type.secondary_keywords, HighlightType.SECONDARY_KEYWORDS
        )

    def scan_keyword_list(self, keywords: Sequence[str], kind: HighlightType) -> bool:
        for keyword in keywords:
            size = len(keyword)
            if list(self.chars[self.index : self.index + size]) != list(keyword):
                continue
            following = self.char_at(self.index + size)
            if following is not None and following.isalnum():
                continue
            self.mark(kind, size)
            return True
        return False

    def scan_number(self) -> bool:
        if not self.options.numbers:
            return False
        current = self.chars[self.index]
        previous = self.result[-1] if self.result else HighlightType.NONE
        continues_number = previous is HighlightType.NUMBER
        if is_digit(current) and (self.prev_is_separator or continues_number):
            self.mark(HighlightType.NUMBER)
            return True
        if current in {".", "_"} and continues_number:
            self.mark(HighlightType.NUMBER)
            return True
        return False


def highlight_row(
    chars: Sequence[str], file_type: FileType, word: Optional[str] = None
) -> List[HighlightType]:
    """Classify every cluster in ``chars``.

    Precedence at each position: string, character literal, line comment,
    keyword, number, none. Matches of ``word`` are then painted over every
    other class without affecting how the rest of the row is scanned.
    """

    return _RowScanner(chars, file_type, word).run()


__all__ = [
    "ANSI_RESET",
    "HighlightType",
    "ansi_foreground",
    "find_matches",
    "highlight_row",
]
