"""
Range expansion over the canonical verse order.

expand() walks the catalog between two references, crossing chapter and book
boundaries, and returns every verse id covered by the inclusive range.
"""

from __future__ import annotations

from biblekit.core.reference import Reference, VerseReference
from biblekit.data.catalog import CATALOG
from biblekit.utils.verse_id import VerseID


def fixup(reference: Reference) -> Reference:
    return reference.fixup()


def _chapter_span(book_index: int, chapter: int, from_verse: int, to_verse: int) -> list[VerseID]:
    return [VerseID.of(book_index, chapter, v) for v in range(from_verse, to_verse + 1)]


def _book_span(book_index: int, from_chapter: int, from_verse: int, to_chapter: int, to_verse: int) -> list[VerseID]:
    book = CATALOG.lookup(book_index)
    if from_chapter == to_chapter:
        return _chapter_span(book_index, from_chapter, from_verse, to_verse)

    out = _chapter_span(book_index, from_chapter, from_verse, book.total_verses(from_chapter))
    for chapter in range(from_chapter + 1, to_chapter):
        out.extend(book.all_verse_ids(chapter))
    out.extend(_chapter_span(book_index, to_chapter, 1, to_verse))
    return out


def expand(start: VerseReference, end: VerseReference) -> list[VerseID]:
    """
    Every verse id from start to end inclusive, in canonical order.

    Requires start <= end; an inverted pair yields an empty list. Use
    Reference.fixup() (or verse_ids()) when the order is not known.
    """
    if start > end:
        return []

    start_book = start.book_index
    end_book = end.book_index
    if start_book == end_book:
        return _book_span(start_book, start.chapter.index, start.index, end.chapter.index, end.index)

    head = CATALOG.lookup(start_book)
    out = _book_span(
        start_book,
        start.chapter.index,
        start.index,
        head.total_chapters,
        head.total_verses(head.total_chapters),
    )
    for book_index in range(start_book + 1, end_book):
        out.extend(CATALOG.all_verse_ids(book_index))
    out.extend(_book_span(end_book, 1, 1, end.chapter.index, end.index))
    return out


def verse_ids(reference: Reference) -> list[VerseID]:
    fixed = reference.fixup()
    return expand(fixed.start, fixed.end)
