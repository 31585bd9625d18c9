from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import ClassVar

DELIMITER = ":"
_COMPONENT_RE = re.compile(r"[0-9]+")


class ParseErrorKind(str, enum.Enum):
    WRONG_ARITY = "wrong_arity"
    NON_NUMERIC = "non_numeric"
    OVERFLOW = "overflow"


class ParseError(ValueError):
    def __init__(self, kind: ParseErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class VerseCoord:
    book_index: int
    chapter: int
    verse: int


class VerseIdCodec:
    """
    Canonical ID encoding:
      text = "book:chapter:verse"
      key  = (book_index * 1_000_000) + (chapter * 1_000) + verse

    The integer key equals the book number followed by chapter and verse each
    zero-padded to three digits, so it sorts in canonical order as long as
    chapter and verse stay below 1000.
    """

    def parse(self, text: str) -> VerseCoord:
        parts = text.split(DELIMITER)
        if len(parts) != 3:
            raise ParseError(ParseErrorKind.WRONG_ARITY, f"expected 3 components in verse id: {text!r}")
        for part in parts:
            if not _COMPONENT_RE.fullmatch(part):
                raise ParseError(ParseErrorKind.NON_NUMERIC, f"non-numeric component in verse id: {text!r}")
        book_index, chapter, verse = (int(p) for p in parts)
        return VerseCoord(book_index=book_index, chapter=chapter, verse=verse)

    def format(self, book_index: int, chapter: int, verse: int) -> str:
        return f"{book_index}{DELIMITER}{chapter}{DELIMITER}{verse}"

    def encode(self, book_index: int, chapter: int, verse: int) -> int:
        if book_index <= 0:
            raise ParseError(ParseErrorKind.OVERFLOW, "book_index must be >= 1")
        if chapter <= 0 or verse <= 0:
            raise ParseError(ParseErrorKind.OVERFLOW, "chapter and verse must be >= 1")
        if chapter >= 1000 or verse >= 1000:
            raise ParseError(ParseErrorKind.OVERFLOW, "chapter and verse must be < 1000")
        return (book_index * 1_000_000) + (chapter * 1_000) + verse

    def decode(self, verse_id: int) -> VerseCoord:
        if verse_id <= 0:
            raise ValueError("verse_id must be positive")
        book_index = verse_id // 1_000_000
        rem = verse_id % 1_000_000
        chapter = rem // 1_000
        verse = rem % 1_000
        return VerseCoord(book_index=book_index, chapter=chapter, verse=verse)


CODEC = VerseIdCodec()


def sort_key(text: str) -> int:
    coord = CODEC.parse(text)
    return CODEC.encode(coord.book_index, coord.chapter, coord.verse)


@dataclass(frozen=True)
class VerseID:
    """
    Textual verse address, e.g. "1:1:1" for Genesis 1:1.

    Construction does not validate; use VerseReference.from_id for that.
    """

    value: str

    START: ClassVar["VerseID"]
    END: ClassVar["VerseID"]

    def __str__(self) -> str:
        return self.value

    @classmethod
    def of(cls, book_index: int, chapter: int, verse: int) -> "VerseID":
        return cls(CODEC.format(book_index, chapter, verse))

    def components(self) -> VerseCoord:
        return CODEC.parse(self.value)

    @property
    def sort_key(self) -> int:
        return sort_key(self.value)

    def book_name(self) -> str:
        # Imported here: the catalog builds VerseIDs itself.
        from biblekit.data.catalog import CATALOG

        return CATALOG.lookup(self.components().book_index).name

    def chapter_verse(self) -> str:
        coord = self.components()
        return f"{coord.chapter}{DELIMITER}{coord.verse}"

    def book_chapter_verse(self) -> str:
        return f"{self.book_name()} {self.chapter_verse()}"


VerseID.START = VerseID("1:1:1")
VerseID.END = VerseID("66:22:21")
