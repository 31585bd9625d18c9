from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from biblekit.data.catalog import CATALOG, Book, BookKey
from biblekit.utils.verse_id import CODEC, ParseError, VerseID


@dataclass(frozen=True, order=True)
class ChapterReference:
    """A chapter within a book, ordered by (book, chapter)."""

    book_index: int
    index: int

    @classmethod
    def create(cls, book: BookKey, chapter: int) -> Optional["ChapterReference"]:
        resolved = CATALOG.find(book)
        if resolved is None or not 1 <= chapter <= resolved.total_chapters:
            return None
        return cls(book_index=resolved.index, index=chapter)

    def book(self) -> Book:
        return CATALOG.lookup(self.book_index)

    @property
    def start_verse_id(self) -> VerseID:
        return self.verse_id(1)

    @property
    def end_verse_id(self) -> VerseID:
        return self.verse_id(self.total_verses())

    def total_verses(self) -> int:
        return self.book().total_verses(self.index)

    def all_verse_ids(self) -> list[VerseID]:
        return self.book().all_verse_ids(self.index)

    def verse_id(self, verse: int) -> VerseID:
        return VerseID.of(self.book_index, self.index, verse)


@dataclass(frozen=True, order=True)
class VerseReference:
    """
    A catalog-checked (book, chapter, verse) address.

    Field order makes the generated comparisons follow canonical order:
    book, then chapter, then verse.
    """

    chapter: ChapterReference
    index: int

    @classmethod
    def from_id(cls, value: str) -> Optional["VerseReference"]:
        """Parse and validate a "book:chapter:verse" id; None if it is not a real verse."""
        try:
            coord = CODEC.parse(value)
        except ParseError:
            return None
        return cls.create(coord.book_index, coord.chapter, coord.verse)

    @classmethod
    def create(cls, book: BookKey, chapter: int, verse: int) -> Optional["VerseReference"]:
        chapter_ref = ChapterReference.create(book, chapter)
        if chapter_ref is None:
            return None
        if not 1 <= verse <= chapter_ref.total_verses():
            return None
        return cls(chapter=chapter_ref, index=verse)

    @property
    def book_index(self) -> int:
        return self.chapter.book_index

    def book(self) -> Book:
        return self.chapter.book()

    def verse_id(self) -> VerseID:
        return self.chapter.verse_id(self.index)

    def __str__(self) -> str:
        return self.verse_id().value


@dataclass(frozen=True)
class Reference:
    """An unordered pair of verses delimiting an inclusive range."""

    start: VerseReference
    end: VerseReference

    @classmethod
    def from_ids(cls, start: str, end: str) -> Optional["Reference"]:
        start_ref = VerseReference.from_id(start)
        end_ref = VerseReference.from_id(end)
        if start_ref is None or end_ref is None:
            return None
        return cls(start=start_ref, end=end_ref)

    @classmethod
    def whole_bible(cls) -> "Reference":
        return cls(
            start=VerseReference(ChapterReference(1, 1), 1),
            end=VerseReference(ChapterReference(66, 22), 21),
        )

    @classmethod
    def create_with_book(
        cls,
        book: BookKey,
        from_chapter: int,
        to_chapter: int,
        from_verse: int,
        to_verse: int,
    ) -> Optional["Reference"]:
        """Range within one book; None if either end is not a verse of that book."""
        start = VerseReference.create(book, from_chapter, from_verse)
        end = VerseReference.create(book, to_chapter, to_verse)
        if start is None or end is None:
            return None
        return cls(start=start, end=end)

    def fixup(self) -> "Reference":
        if self.start > self.end:
            return Reference(start=self.end, end=self.start)
        return Reference(start=self.start, end=self.end)

    def bounds(self) -> tuple[VerseID, VerseID]:
        fixed = self.fixup()
        return fixed.start.verse_id(), fixed.end.verse_id()
