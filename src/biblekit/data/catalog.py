from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from biblekit.data.canon import CANON, OLD_TESTAMENT_BOOKS
from biblekit.utils.verse_id import VerseID


@dataclass(frozen=True)
class Book:
    """A book of the canon with its chapter/verse layout."""

    index: int
    name: str
    short_name: str
    aliases: tuple[str, ...]
    verses: tuple[int, ...]

    @property
    def total_chapters(self) -> int:
        return len(self.verses)

    @property
    def total_verse_count(self) -> int:
        return sum(self.verses)

    @property
    def start_verse_id(self) -> VerseID:
        return self.verse_id(chapter=1, verse=1)

    @property
    def end_verse_id(self) -> VerseID:
        return self.verse_id(chapter=self.total_chapters, verse=self.total_verses(self.total_chapters))

    def total_verses(self, chapter: int) -> int:
        if chapter < 1 or chapter > self.total_chapters:
            raise IndexError(f"{self.name} has no chapter {chapter}")
        return self.verses[chapter - 1]

    def verse_id(self, chapter: int, verse: int) -> VerseID:
        return VerseID.of(self.index, chapter, verse)

    def all_verse_ids(self, chapter: Optional[int] = None) -> list[VerseID]:
        if chapter is None:
            return [vid for ch in range(1, self.total_chapters + 1) for vid in self.all_verse_ids(ch)]
        return [self.verse_id(chapter, v) for v in range(1, self.total_verses(chapter) + 1)]


BookKey = Union[int, str, Book]


class BookCatalog:
    def __init__(self, books: list[Book]) -> None:
        self.books = tuple(books)
        self._name_to_index: dict[str, int] = {}
        for b in books:
            self._name_to_index[b.name.casefold()] = b.index
            self._name_to_index[b.short_name.casefold()] = b.index
            for a in b.aliases:
                self._name_to_index[a.casefold()] = b.index

    @classmethod
    def canonical(cls) -> "BookCatalog":
        books = [
            Book(index=i, name=name, short_name=short, aliases=aliases, verses=verses)
            for i, (name, short, aliases, verses) in enumerate(CANON, start=1)
        ]
        return cls(books=books)

    def __len__(self) -> int:
        return len(self.books)

    @property
    def old_testament(self) -> tuple[Book, ...]:
        return self.books[:OLD_TESTAMENT_BOOKS]

    @property
    def new_testament(self) -> tuple[Book, ...]:
        return self.books[OLD_TESTAMENT_BOOKS:]

    def book_index(self, book_name: str) -> int:
        key = book_name.strip().casefold()
        if key in self._name_to_index:
            return self._name_to_index[key]
        raise KeyError(f"Unknown book name: {book_name!r}")

    def find(self, book: BookKey) -> Optional[Book]:
        """Like lookup() but returns None for unknown books."""
        try:
            return self.lookup(book)
        except (KeyError, IndexError):
            return None

    def lookup(self, book: BookKey) -> Book:
        if isinstance(book, Book):
            return book
        if isinstance(book, bool):
            raise TypeError("book must be an ordinal, a name or a Book")
        if isinstance(book, int):
            if book < 1 or book > len(self.books):
                raise IndexError(f"book ordinal out of range: {book}")
            return self.books[book - 1]
        return self.books[self.book_index(book) - 1]

    def total_verses(self, book: BookKey, chapter: int) -> int:
        return self.lookup(book).total_verses(chapter)

    def all_verse_ids(self, book: BookKey, chapter: Optional[int] = None) -> list[VerseID]:
        return self.lookup(book).all_verse_ids(chapter)

    def total_verse_count(self) -> int:
        return sum(b.total_verse_count for b in self.books)


CATALOG = BookCatalog.canonical()
